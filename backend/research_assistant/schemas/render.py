"""Schemas describing segmented chat content."""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from research_assistant.rendering import Block, TableBlock


class TextBlockSchema(BaseModel):
    type: Literal["text"] = "text"
    text: str


class TableBlockSchema(BaseModel):
    type: Literal["table"] = "table"
    header: List[str] = Field(..., min_length=1)
    rows: List[List[str]] = Field(default_factory=list)


BlockSchema = Annotated[Union[TextBlockSchema, TableBlockSchema], Field(discriminator="type")]


def block_to_schema(block: Block) -> TextBlockSchema | TableBlockSchema:
    if isinstance(block, TableBlock):
        return TableBlockSchema(header=list(block.header), rows=[list(row) for row in block.rows])
    return TextBlockSchema(text=block.text)


class RenderRequest(BaseModel):
    content: str = Field(..., description="Chat message or stored response text")
    class_name: Optional[str] = Field(default=None, description="CSS class of the wrapping element")
    strategy: Optional[str] = Field(
        default=None,
        description="Text rendering strategy; the configured default when omitted.",
    )


class RenderResponse(BaseModel):
    blocks: List[BlockSchema]
    html: str
