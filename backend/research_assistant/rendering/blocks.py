"""Block types produced when a chat response is segmented for rendering."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Union

BlockType = Literal["text", "table"]


@dataclass(frozen=True, slots=True)
class TextBlock:
    """A run of non-table source lines.

    Parameters
    ----------
    text:
        The original lines joined with ``"\\n"``. Blank lines are kept so the
        downstream Markdown renderer sees the original spacing.
    """

    text: str
    type: Literal["text"] = "text"

    def to_markdown(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class TableBlock:
    """A pipe table: one header row followed by zero or more body rows.

    Body rows are stored exactly as the row splitter produced them, so their
    width may differ from the header.
    """

    header: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = ()
    type: Literal["table"] = "table"

    @property
    def column_count(self) -> int:
        return len(self.header)

    def to_markdown(self) -> str:
        lines = [_pipe_row(self.header), _pipe_row(["---"] * len(self.header))]
        lines.extend(_pipe_row(row) for row in self.rows)
        return "\n".join(lines)


Block = Union[TextBlock, TableBlock]


def _pipe_row(cells: Iterable[str]) -> str:
    inner = " | ".join(cells)
    return f"| {inner} |" if inner else "|"


def blocks_to_markdown(blocks: Iterable[Block]) -> str:
    """Serialise blocks back to Markdown source, one block after another."""

    return "\n".join(block.to_markdown() for block in blocks)


__all__ = ["Block", "BlockType", "TableBlock", "TextBlock", "blocks_to_markdown"]
