"""Segmentation and rendering of chat responses."""

from .blocks import Block, TableBlock, TextBlock, blocks_to_markdown
from .html import RenderStrategy, render_blocks, render_message
from .segmenter import is_separator_row, normalize_compact_tables, segment, split_row

__all__ = [
    "Block",
    "RenderStrategy",
    "TableBlock",
    "TextBlock",
    "blocks_to_markdown",
    "is_separator_row",
    "normalize_compact_tables",
    "render_blocks",
    "render_message",
    "segment",
    "split_row",
]
