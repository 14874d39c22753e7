#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/parsers/test_markdown_parser.py
"""Unit tests for the markdown to AST converter."""

import io
from pathlib import Path

import pytest

from mdterm.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    Emphasis,
    Entity,
    Heading,
    Image,
    LineBreak,
    Link,
    List,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    Text,
    ThematicBreak,
)
from mdterm.exceptions import FileAccessError, InvalidOptionsError
from mdterm.options import MarkdownParserOptions, TerminalRendererOptions
from mdterm.parsers.markdown import MarkdownToAstConverter, markdown_to_ast, split_entities


def plain_text(nodes):
    """Concatenate the text and entity content of a node list."""
    return "".join(node.content for node in nodes if isinstance(node, (Text, Entity)))


@pytest.mark.unit
class TestSplitEntities:
    """Tests for splitting entity references out of text."""

    def test_split(self) -> None:
        nodes = split_entities("a &gt; b")
        assert nodes == [Text(content="a "), Entity(content="&gt;"), Text(content=" b")]

    def test_numeric_reference(self) -> None:
        assert split_entities("&#65;") == [Entity(content="&#65;")]

    def test_adjacent_references(self) -> None:
        assert split_entities("&quot;&gt;") == [Entity(content="&quot;"), Entity(content="&gt;")]

    @pytest.mark.parametrize("value", ["&foo bar", "AT&T", "& ;", "plain"])
    def test_malformed_references_stay_text(self, value) -> None:
        assert split_entities(value) == [Text(content=value)]

    def test_empty(self) -> None:
        assert split_entities("") == []


@pytest.mark.unit
class TestBlocks:
    """Tests for block-level conversion."""

    def test_heading(self) -> None:
        doc = markdown_to_ast("## Title")
        heading = doc.children[0]
        assert isinstance(heading, Heading)
        assert heading.level == 2
        assert plain_text(heading.content) == "Title"

    def test_paragraphs(self) -> None:
        doc = markdown_to_ast("first\n\nsecond\n")
        assert [type(node) for node in doc.children] == [Paragraph, Paragraph]

    def test_fenced_code_block(self) -> None:
        doc = markdown_to_ast("```python extra\nx = 1\n```\n")
        block = doc.children[0]
        assert isinstance(block, CodeBlock)
        assert block.content == "x = 1\n"

    def test_indented_code_block(self) -> None:
        block = markdown_to_ast("    code\n").children[0]
        assert isinstance(block, CodeBlock)
        assert block.content == "code\n"

    @pytest.mark.parametrize("source", ["    a\n    b\n", "    a\n    b\n\n\n", "```\na\nb\n\n```\n"])
    def test_code_block_ends_with_one_newline(self, source) -> None:
        assert markdown_to_ast(source).children[0].content == "a\nb\n"

    def test_empty_fenced_block(self) -> None:
        assert markdown_to_ast("```\n```\n").children[0].content == ""

    def test_block_quote(self) -> None:
        quote = markdown_to_ast("> quoted\n").children[0]
        assert isinstance(quote, BlockQuote)
        assert isinstance(quote.children[0], Paragraph)

    def test_thematic_break(self) -> None:
        doc = markdown_to_ast("a\n\n***\n\nb\n")
        assert isinstance(doc.children[1], ThematicBreak)

    def test_tight_bullet_list(self) -> None:
        lst = markdown_to_ast("- one\n- two\n").children[0]
        assert isinstance(lst, List)
        assert not lst.ordered
        assert lst.tight
        assert [plain_text(item.children[0].content) for item in lst.items] == ["one", "two"]

    def test_loose_list(self) -> None:
        lst = markdown_to_ast("- one\n\n- two\n").children[0]
        assert isinstance(lst, List)
        assert not lst.tight

    def test_ordered_list(self) -> None:
        lst = markdown_to_ast("3. a\n4. b\n").children[0]
        assert lst.ordered
        assert len(lst.items) == 2

    def test_nested_list(self) -> None:
        lst = markdown_to_ast("- top\n  - inner\n").children[0]
        item_children = lst.items[0].children
        assert isinstance(item_children[0], Paragraph)
        assert isinstance(item_children[1], List)

    def test_tables_off_by_default(self) -> None:
        doc = markdown_to_ast("| a | b |\n|---|---|\n| 1 | 2 |\n")
        assert not any(isinstance(node, Table) for node in doc.children)

    def test_tables_enabled(self) -> None:
        doc = markdown_to_ast("| a | b |\n|---|---|\n| 1 | 2 |\n", MarkdownParserOptions(parse_tables=True))
        assert isinstance(doc.children[0], Table)

    def test_blank_input(self) -> None:
        assert markdown_to_ast("").children == []
        assert markdown_to_ast("\n\n\n").children == []


@pytest.mark.unit
class TestInlines:
    """Tests for inline conversion."""

    def inline(self, source, options=None):
        paragraph = markdown_to_ast(source, options).children[0]
        assert isinstance(paragraph, Paragraph)
        return paragraph.content

    def test_emphasis_and_strong(self) -> None:
        nodes = self.inline("*a* **b**")
        assert isinstance(nodes[0], Emphasis)
        assert isinstance(nodes[2], Strong)
        assert plain_text(nodes[0].content) == "a"
        assert plain_text(nodes[2].content) == "b"

    def test_code_span(self) -> None:
        nodes = self.inline("run `ls -l` now")
        codes = [node for node in nodes if isinstance(node, Code)]
        assert [code.content for code in codes] == ["ls -l"]

    def test_soft_break_keeps_newline(self) -> None:
        assert plain_text(self.inline("a\nb")) == "a\nb"

    def test_hard_break(self) -> None:
        nodes = self.inline("a  \nb")
        assert any(isinstance(node, LineBreak) and not node.soft for node in nodes)

    def test_entities_split_out(self) -> None:
        nodes = self.inline("a &gt; b &#65;")
        assert [node.content for node in nodes if isinstance(node, Entity)] == ["&gt;", "&#65;"]
        assert plain_text(nodes) == "a &gt; b &#65;"

    def test_entities_kept_in_text_when_disabled(self) -> None:
        nodes = self.inline("a &gt; b", MarkdownParserOptions(parse_entities=False))
        assert not any(isinstance(node, Entity) for node in nodes)
        assert plain_text(nodes) == "a &gt; b"

    def test_link_and_image(self) -> None:
        nodes = self.inline("[text](https://example.com) ![alt](pic.png)")
        assert [type(node) for node in nodes] == [Link, Text, Image]

    def test_strikethrough_off_by_default(self) -> None:
        nodes = self.inline("~~gone~~")
        assert plain_text(nodes) == "~~gone~~"

    def test_strikethrough_enabled(self) -> None:
        nodes = self.inline("~~gone~~", MarkdownParserOptions(parse_strikethrough=True))
        assert isinstance(nodes[0], Strikethrough)


@pytest.mark.unit
class TestParserInput:
    """Tests for the accepted input types."""

    def test_bytes(self) -> None:
        doc = MarkdownToAstConverter().parse(b"hello")
        assert plain_text(doc.children[0].content) == "hello"

    def test_undecodable_bytes_survive(self) -> None:
        doc = MarkdownToAstConverter().parse(b"caf\xe9")
        text = plain_text(doc.children[0].content)
        assert text.encode("utf-8", errors="surrogateescape") == b"caf\xe9"

    def test_path(self, tmp_path) -> None:
        source = tmp_path / "doc.md"
        source.write_bytes(b"# Title\n")
        doc = MarkdownToAstConverter().parse(source)
        assert isinstance(doc.children[0], Heading)

    def test_missing_path(self, tmp_path) -> None:
        with pytest.raises(FileAccessError, match="Unable to open input file"):
            MarkdownToAstConverter().parse(Path(tmp_path / "missing.md"))

    def test_binary_stream(self) -> None:
        doc = MarkdownToAstConverter().parse(io.BytesIO(b"text"))
        assert plain_text(doc.children[0].content) == "text"

    def test_text_stream(self) -> None:
        doc = MarkdownToAstConverter().parse(io.StringIO("text"))
        assert plain_text(doc.children[0].content) == "text"

    def test_str_is_content(self) -> None:
        doc = MarkdownToAstConverter().parse("README.md")
        assert plain_text(doc.children[0].content) == "README.md"

    def test_unsupported_input(self) -> None:
        with pytest.raises(TypeError, match="Unsupported input type"):
            MarkdownToAstConverter().parse(42)  # type: ignore[arg-type]

    def test_rejects_wrong_options(self) -> None:
        with pytest.raises(InvalidOptionsError):
            MarkdownToAstConverter(TerminalRendererOptions())  # type: ignore[arg-type]
