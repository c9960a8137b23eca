"""Tests for rendering segmented chat responses to HTML."""

from __future__ import annotations

import pytest

from research_assistant.rendering import render_message


def test_lite_joins_lines_into_paragraph() -> None:
    assert render_message("hello\nworld") == "<div><p>hello world</p></div>"


def test_lite_blank_lines_become_spacers() -> None:
    html = render_message("a\n\nb")

    assert html == '<div><p>a</p><div class="chat-spacer"></div><p>b</p></div>'


def test_wrapper_class() -> None:
    assert render_message("hi", "prose max-w-none").startswith('<div class="prose max-w-none">')


def test_table_cells_are_escaped() -> None:
    html = render_message("| <b> | Total |\n|---|---|\n| x & y | 3 |")

    assert "<thead><tr><th>&lt;b&gt;</th><th>Total</th></tr></thead>" in html
    assert "<tbody><tr><td>x &amp; y</td><td>3</td></tr></tbody>" in html


def test_lite_escapes_text() -> None:
    assert "&lt;script&gt;" in render_message("<script>alert(1)</script>")


def test_markdown_strategy_renders_markdown() -> None:
    html = render_message("# Summary\n\nSome **bold** claim.", strategy="markdown")

    assert "<h1>Summary</h1>" in html
    assert "<strong>bold</strong>" in html


def test_markdown_strategy_keeps_tables_separate() -> None:
    html = render_message("Intro\n| a | b |\n|---|---|\n| 1 | 2 |", strategy="markdown")

    assert html.count("<table") == 1
    assert "<p>Intro</p>" in html


def test_empty_message() -> None:
    assert render_message("") == "<div></div>"


def test_unknown_strategy() -> None:
    with pytest.raises(ValueError):
        render_message("text", strategy="rich")  # type: ignore[arg-type]


def test_markdown_strategy_does_not_pass_raw_html() -> None:
    html = render_message("hi <script>alert(1)</script>", strategy="markdown")

    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_markdown_strategy_keeps_entities_readable() -> None:
    html = render_message("Cash & *credit*", strategy="markdown")

    assert "<p>Cash &amp; <em>credit</em></p>" in html
