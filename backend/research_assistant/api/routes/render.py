"""Rendering of chat content into blocks and HTML."""

from fastapi import APIRouter, HTTPException

from research_assistant.core.config import settings
from research_assistant.rendering import render_message, segment
from research_assistant.schemas.render import RenderRequest, RenderResponse, block_to_schema

router = APIRouter(prefix="/render", tags=["render"])


@router.post("", response_model=RenderResponse)
def render(payload: RenderRequest) -> RenderResponse:
    """Segment ``content`` and render it with the requested strategy."""

    try:
        html = render_message(payload.content, payload.class_name, payload.strategy or settings.render_strategy)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    blocks = [block_to_schema(block) for block in segment(payload.content)]
    return RenderResponse(blocks=blocks, html=str(html))
