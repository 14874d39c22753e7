#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/renderers/test_terminal_renderer.py
"""Unit tests for the terminal renderer.

Documents are built directly from AST nodes and rendered with the marker
backend from conftest, so every expected value is the exact byte output.
"""

import io

import pytest

from mdterm.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    Entity,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    Text,
    ThematicBreak,
)
from mdterm.exceptions import InvalidOptionsError
from mdterm.options import MarkdownParserOptions, TerminalRendererOptions
from mdterm.renderers.terminal import TerminalRenderer
from mdterm.terminal.buffer import OutputBuffer
from mdterm.terminal.capabilities import TableBackend


def para(*nodes):
    return Paragraph(content=list(nodes))


def text(value):
    return Text(content=value)


def doc(*blocks):
    return Document(children=list(blocks))


@pytest.mark.unit
class TestHeadings:
    """Tests for heading styling."""

    @pytest.mark.parametrize("level,color", [(1, 2), (2, 3)])
    def test_colored_levels(self, renderer, level, color) -> None:
        result = renderer.render_to_bytes(doc(Heading(level=level, content=[text("T")])))
        assert result == b"\n<setf %d><smul><bold>T<sgr0>\n    " % color

    def test_level_three_is_shifted(self, renderer) -> None:
        result = renderer.render_to_bytes(doc(Heading(level=3, content=[text("T")])))
        assert result == b"\n  <setf 1><smul><bold>T<sgr0>\n    "

    @pytest.mark.parametrize("level", [4, 5, 6])
    def test_deeper_levels_have_no_color(self, renderer, level) -> None:
        result = renderer.render_to_bytes(doc(Heading(level=level, content=[text("T")])))
        assert result == b"\n<smul><bold>T<sgr0>\n    "

    def test_heading_with_emphasis(self, renderer) -> None:
        heading = Heading(level=4, content=[text("a "), Emphasis(content=[text("b")])])
        assert renderer.render_to_bytes(doc(heading)) == b"\n<smul><bold>a <bold>b<sgr0><sgr0>\n    "

    def test_without_capabilities(self) -> None:
        renderer = TerminalRenderer(TerminalRendererOptions(backend="none"))
        assert renderer.render_to_bytes(doc(Heading(level=1, content=[text("T")]))) == b"\nT\n    "


@pytest.mark.unit
class TestParagraphs:
    """Tests for paragraph layout."""

    def test_first_paragraph_has_no_separator(self, renderer) -> None:
        assert renderer.render_to_bytes(doc(para(text("Hello")))) == b"Hello\n    "

    def test_paragraphs_separated_by_indented_blank_line(self, renderer) -> None:
        result = renderer.render_to_bytes(doc(para(text("A")), para(text("B"))))
        assert result == b"A\n    \n    B\n    "

    def test_paragraph_after_heading(self, renderer) -> None:
        result = renderer.render_to_bytes(doc(Heading(level=1, content=[text("T")]), para(text("x"))))
        assert result == b"\n<setf 2><smul><bold>T<sgr0>\n    \n    x\n    "

    def test_embedded_newline_is_indented(self, renderer) -> None:
        assert renderer.render_to_bytes(doc(para(text("a\nb")))) == b"a\n    b\n    "

    def test_soft_and_hard_breaks(self, renderer) -> None:
        result = renderer.render_to_bytes(
            doc(para(text("a"), LineBreak(soft=True), text("b"), LineBreak(soft=False), text("c")))
        )
        assert result == b"a\n    b\n    c\n    "

    def test_control_characters_pass_through(self, renderer) -> None:
        assert renderer.render_to_bytes(doc(para(text("\x1b[5mx")))) == b"\x1b[5mx\n    "

    def test_empty_document(self, renderer) -> None:
        assert renderer.render_to_bytes(doc()) == b""


@pytest.mark.unit
class TestLists:
    """Tests for list layout."""

    def test_bullet_list_tight(self, renderer) -> None:
        items = [ListItem(children=[para(text("one"))]), ListItem(children=[para(text("two"))])]
        result = renderer.render_to_bytes(doc(List(ordered=False, items=items, tight=True)))
        assert result == b"    * one\n        * two\n        \n    "

    def test_ordered_marker(self, renderer) -> None:
        items = [ListItem(children=[para(text("one"))])]
        result = renderer.render_to_bytes(doc(List(ordered=True, items=items)))
        assert result == b"    # one\n        \n    "

    def test_tight_item_paragraphs_are_not_separated(self, renderer) -> None:
        item = ListItem(children=[para(text("a")), para(text("b"))])
        result = renderer.render_to_bytes(doc(List(ordered=False, items=[item], tight=True)))
        assert result == b"    * a\n        b\n        \n    "

    def test_loose_item_paragraphs_are_separated(self, renderer) -> None:
        item = ListItem(children=[para(text("a")), para(text("b"))])
        result = renderer.render_to_bytes(doc(List(ordered=False, items=[item], tight=False)))
        assert result == b"    * a\n        \n        b\n        \n    "

    def test_nested_list(self, renderer) -> None:
        inner = List(ordered=True, items=[ListItem(children=[para(text("x"))])])
        outer = List(ordered=False, items=[ListItem(children=[para(text("top")), inner])])
        result = renderer.render_to_bytes(doc(outer))
        assert result == b"    * top\n            # x\n            \n        \n    "

    def test_render_list_item_strips_trailing_newlines(self, renderer) -> None:
        out = OutputBuffer()
        renderer.render_list_item(out, b"item\n\n", ordered=True)
        assert out.getvalue() == b"# item"

    def test_render_list_item_reindents(self, renderer) -> None:
        out = OutputBuffer()
        renderer.render_list_item(out, b"a\nb\n")
        assert out.getvalue() == b"* a\n    b"

    def test_list_after_paragraph(self, renderer) -> None:
        items = [ListItem(children=[para(text("i"))])]
        result = renderer.render_to_bytes(doc(para(text("p")), List(ordered=False, items=items)))
        assert result == b"p\n        * i\n        \n    "


@pytest.mark.unit
class TestEmphasis:
    """Tests for emphasis and strong emphasis."""

    def test_emphasis_is_bold(self, renderer) -> None:
        result = renderer.render_to_bytes(doc(para(Emphasis(content=[text("x")]))))
        assert result == b"<bold>x<sgr0>\n    "

    def test_strong_is_bold_underlined(self, renderer) -> None:
        result = renderer.render_to_bytes(doc(para(Strong(content=[text("x")]))))
        assert result == b"<bold><smul>x<sgr0>\n    "

    def test_empty_emphasis_keeps_markup(self, renderer) -> None:
        result = renderer.render_to_bytes(doc(para(text("a"), Emphasis(content=[]), text("b"))))
        assert result == b"a**b\n    "

    def test_empty_strong_keeps_markup(self, renderer) -> None:
        result = renderer.render_to_bytes(doc(para(text("a"), Strong(content=[], delimiter="_"), text("b"))))
        assert result == b"a____b\n    "

    def test_visit_reports_handled(self, renderer) -> None:
        assert renderer.visit_emphasis(Emphasis(content=[text("x")])) is True
        assert renderer.visit_strong(Strong(content=[])) is False

    def test_span_handlers_write_to_target(self, renderer) -> None:
        out = OutputBuffer()
        assert renderer.emphasis(out, b"e")
        assert renderer.strong(out, b"s")
        assert not renderer.emphasis(out, b"")
        assert not renderer.strong(out, b"")
        assert out.getvalue() == b"<bold>e<sgr0><bold><smul>s<sgr0>"


@pytest.mark.unit
class TestCode:
    """Tests for fenced code."""

    def test_code_block(self, renderer) -> None:
        result = renderer.render_to_bytes(doc(CodeBlock(content="x = 1\ny = 2\n")))
        assert result == b"~~~~\n    x = 1\n    y = 2\n    ~~~~\n    "

    def test_code_span_is_fenced_like_a_block(self, renderer) -> None:
        result = renderer.render_to_bytes(doc(para(text("run "), Code(content="ls"))))
        assert result == b"run ~~~~\n    ls~~~~\n    \n    "

    def test_empty_code_block(self, renderer) -> None:
        assert renderer.render_to_bytes(doc(CodeBlock(content=""))) == b"~~~~\n    ~~~~\n    "


@pytest.mark.unit
class TestEntities:
    """Tests for entity decoding at render time."""

    @pytest.mark.parametrize(
        "raw,expected",
        [("&quot;", b"'"), ("&gt;", b">"), ("&#65;", b"A"), ("&#321;", b"A")],
    )
    def test_decoded(self, renderer, raw, expected) -> None:
        assert renderer.render_to_bytes(doc(para(Entity(content=raw)))) == expected + b"\n    "

    @pytest.mark.parametrize("raw", ["&amp;", "&#0;", "&foo bar", "&"])
    def test_verbatim(self, renderer, raw) -> None:
        assert renderer.render_to_bytes(doc(para(Entity(content=raw)))) == raw.encode() + b"\n    "


@pytest.mark.unit
class TestUnrenderedNodes:
    """Node kinds without a terminal rendering produce no output."""

    def test_inline_kinds(self, renderer) -> None:
        result = renderer.render_to_bytes(
            doc(
                para(
                    text("a"),
                    Link(),
                    Image(),
                    Strikethrough(content=[text("gone")]),
                    HTMLInline(content="<b>"),
                    text("b"),
                )
            )
        )
        assert result == b"ab\n    "

    def test_block_kinds(self, renderer) -> None:
        result = renderer.render_to_bytes(
            doc(
                BlockQuote(children=[para(text("quoted"))]),
                ThematicBreak(),
                HTMLBlock(content="<div></div>"),
                Table(),
            )
        )
        assert result == b""

    def test_unrendered_blocks_do_not_count_as_preceding_text(self, renderer) -> None:
        assert renderer.render_to_bytes(doc(ThematicBreak(), para(text("x")))) == b"x\n    "


@pytest.mark.unit
class TestRendererBehaviour:
    """Tests for renderer construction and state handling."""

    def test_rejects_wrong_options(self) -> None:
        with pytest.raises(InvalidOptionsError):
            TerminalRenderer(MarkdownParserOptions())  # type: ignore[arg-type]

    def test_backend_from_options(self) -> None:
        renderer = TerminalRenderer(TerminalRendererOptions(backend="ansi"))
        assert renderer.capabilities.backend.name == "ansi"

    def test_explicit_backend_wins(self, test_backend) -> None:
        renderer = TerminalRenderer(TerminalRendererOptions(backend="none"), backend=test_backend)
        assert renderer.capabilities.backend is test_backend

    def test_setaf_fallback_option(self) -> None:
        backend = TableBackend({"setaf": b"<setaf %d>"})
        heading = doc(Heading(level=1, content=[text("T")]))
        assert TerminalRenderer(backend=backend).render_to_bytes(heading) == b"\n<setaf 2>T\n    "
        options = TerminalRendererOptions(setaf_fallback=False)
        assert TerminalRenderer(options, backend=backend).render_to_bytes(heading) == b"\nT\n    "

    def test_render_is_repeatable(self, renderer) -> None:
        document = doc(para(text("A")), para(text("B")))
        assert renderer.render_to_bytes(document) == renderer.render_to_bytes(document)

    def test_independent_renderers_do_not_interfere(self, test_backend) -> None:
        first = TerminalRenderer(backend=test_backend)
        second = TerminalRenderer(TerminalRendererOptions(backend="none"))
        document = doc(para(Emphasis(content=[text("x")])))
        assert first.render_to_bytes(document) == b"<bold>x<sgr0>\n    "
        assert second.render_to_bytes(document) == b"x\n    "
        assert first.render_to_bytes(document) == b"<bold>x<sgr0>\n    "

    def test_render_to_string_keeps_undecodable_bytes(self) -> None:
        renderer = TerminalRenderer(TerminalRendererOptions(backend="none"))
        value = b"caf\xe9".decode("utf-8", errors="surrogateescape")
        result = renderer.render_to_string(doc(para(text(value))))
        assert result.encode("utf-8", errors="surrogateescape") == b"caf\xe9\n    "

    def test_render_to_stream(self, renderer) -> None:
        out = io.BytesIO()
        assert renderer.render(doc(para(text("x"))), out) == 6
        assert out.getvalue() == b"x\n    "
