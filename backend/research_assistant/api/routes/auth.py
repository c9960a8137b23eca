"""Login endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from research_assistant.api.deps import get_current_identity
from research_assistant.db import get_db
from research_assistant.schemas.auth import LoginRequest, LoginResponse, UserInfo
from research_assistant.services.auth import GUEST, AuthenticationError, Identity, authenticate

router = APIRouter(prefix="/auth", tags=["auth"])


def _user_info(identity: Identity) -> UserInfo:
    return UserInfo(id=identity.id, username=identity.username, role=identity.role)


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> LoginResponse:
    try:
        identity = authenticate(db, payload.username, payload.password)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except AuthenticationError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    return LoginResponse(user=_user_info(identity))


@router.post("/guest", response_model=LoginResponse)
def guest_login() -> LoginResponse:
    return LoginResponse(user=_user_info(GUEST))


@router.get("/me", response_model=UserInfo)
def me(identity: Identity = Depends(get_current_identity)) -> UserInfo:
    return _user_info(identity)
