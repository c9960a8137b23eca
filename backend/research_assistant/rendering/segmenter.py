"""Split chat responses into text and pipe-table blocks.

The parser is deliberately partial: it recognises GitHub style pipe tables
(a header row immediately followed by a ``---`` separator row) and treats
everything else as opaque text to be handed to a Markdown renderer.
"""
from __future__ import annotations

import re

from .blocks import Block, TableBlock, TextBlock

_COMPACT_TABLE_RE = re.compile(r"\|.*\|\s*\|")
_ROW_BREAK_RE = re.compile(r"\|\s*\|")
_SEPARATOR_CELL_RE = re.compile(r":?-{3,}:?")
_LINE_BREAK_RE = re.compile(r"\r?\n")


def normalize_compact_tables(text: str) -> str:
    """Unfold a table that was flattened onto a single line.

    ``"| a | b | |---|---| | 1 | 2 |"`` becomes three lines. Text that already
    spans several lines is returned untouched.
    """

    if "\n" not in text and _COMPACT_TABLE_RE.search(text):
        return _ROW_BREAK_RE.sub("|\n|", text)
    return text


def is_separator_row(line: str) -> bool:
    """Return ``True`` for delimiter rows such as ``| --- | :---: | ---: |``."""

    cells = [cell.strip() for cell in line.strip().split("|")]
    cells = [cell for cell in cells if cell]
    if not cells:
        return False
    return all(_SEPARATOR_CELL_RE.fullmatch(cell) for cell in cells)


def split_row(line: str) -> list[str] | None:
    """Split a pipe row into trimmed cells, or ``None`` if it has no pipe.

    Only the boundary parts created by a leading or trailing pipe are dropped;
    empty cells in the middle of the row are kept.
    """

    if "|" not in line:
        return None
    parts = line.split("|")
    if not parts[0].strip():
        parts.pop(0)
    if parts and not parts[-1].strip():
        parts.pop()
    return [part.strip() for part in parts]


def segment(text: str) -> list[Block]:
    """Partition ``text`` into :class:`TextBlock` and :class:`TableBlock` items."""

    if not text:
        return []

    lines = _LINE_BREAK_RE.split(normalize_compact_tables(text))
    blocks: list[Block] = []
    pending: list[str] = []
    i = 0

    while i < len(lines):
        header = split_row(lines[i])
        next_line = lines[i + 1] if i + 1 < len(lines) else ""

        if header and is_separator_row(next_line):
            if pending:
                blocks.append(TextBlock("\n".join(pending)))
                pending = []
            i += 2
            rows: list[tuple[str, ...]] = []
            while i < len(lines):
                cells = split_row(lines[i])
                if cells is None:
                    break
                rows.append(tuple(cells))
                i += 1
            blocks.append(TableBlock(header=tuple(header), rows=tuple(rows)))
            continue

        pending.append(lines[i])
        i += 1

    if pending:
        blocks.append(TextBlock("\n".join(pending)))
    return blocks


__all__ = ["is_separator_row", "normalize_compact_tables", "segment", "split_row"]
