"""Pydantic schemas for authentication endpoints."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str = Field(default="", description="Account name")
    password: str = Field(default="", description="Account password")


class UserInfo(BaseModel):
    id: Optional[str] = Field(default=None, description="User id, empty for guests")
    username: str
    role: Literal["guest", "user", "admin"]


class LoginResponse(BaseModel):
    success: bool = True
    user: UserInfo
