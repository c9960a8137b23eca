"""HTML rendering of segmented chat responses."""
from __future__ import annotations

from typing import Callable, Literal

import markdown
from markupsafe import Markup, escape

from .blocks import Block, TableBlock, TextBlock
from .segmenter import segment

RenderStrategy = Literal["lite", "markdown"]

_MARKDOWN_EXTENSIONS = ["extra", "nl2br", "sane_lists"]


def render_table(block: TableBlock) -> Markup:
    header = "".join(f"<th>{escape(cell)}</th>" for cell in block.header)
    body = "".join(
        "<tr>" + "".join(f"<td>{escape(cell)}</td>" for cell in row) + "</tr>"
        for row in block.rows
    )
    return Markup(
        '<div class="chat-table-wrapper"><table class="chat-table">'
        f"<thead><tr>{header}</tr></thead><tbody>{body}</tbody>"
        "</table></div>"
    )


def render_text_lite(block: TextBlock) -> Markup:
    """Join consecutive non-blank lines into paragraphs, one spacer per blank line."""

    parts: list[str] = []
    paragraph: list[str] = []

    def flush() -> None:
        if paragraph:
            parts.append(f"<p>{escape(' '.join(paragraph))}</p>")
            paragraph.clear()

    for line in block.text.split("\n"):
        if line.strip():
            paragraph.append(line)
            continue
        flush()
        parts.append('<div class="chat-spacer"></div>')
    flush()
    return Markup("".join(parts))


def render_text_markdown(block: TextBlock) -> Markup:
    """Render Markdown syntax; raw HTML in the source is shown as text."""

    source = str(escape(block.text))
    return Markup(markdown.markdown(source, extensions=_MARKDOWN_EXTENSIONS))


_TEXT_RENDERERS: dict[str, Callable[[TextBlock], Markup]] = {
    "lite": render_text_lite,
    "markdown": render_text_markdown,
}


def render_blocks(blocks: list[Block], strategy: RenderStrategy = "lite") -> Markup:
    try:
        render_text = _TEXT_RENDERERS[strategy]
    except KeyError:
        raise ValueError(f"Unknown render strategy: {strategy!r}") from None

    rendered = [
        render_table(block) if isinstance(block, TableBlock) else render_text(block)
        for block in blocks
    ]
    return Markup("".join(rendered))


def render_message(
    content: str,
    class_name: str | None = None,
    strategy: RenderStrategy = "lite",
) -> Markup:
    """Render a chat message to HTML wrapped in a single ``<div>``."""

    inner = render_blocks(segment(content), strategy)
    if class_name:
        return Markup(f'<div class="{escape(class_name)}">{inner}</div>')
    return Markup(f"<div>{inner}</div>")


__all__ = [
    "RenderStrategy",
    "render_blocks",
    "render_message",
    "render_table",
    "render_text_lite",
    "render_text_markdown",
]
