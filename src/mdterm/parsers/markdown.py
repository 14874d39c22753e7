#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/parsers/markdown.py
"""Markdown to AST converter.

This module converts markdown into the mdterm AST using mistune's token
stream. Block tokens become block nodes and inline tokens become inline
nodes; character entity references inside text are split out into
``Entity`` nodes so that the renderer can decode them.

"""

from __future__ import annotations

import logging
import re
from typing import Any

import mistune

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
    Node,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    Text,
    ThematicBreak,
)
from mdterm.options.markdown import MarkdownParserOptions
from mdterm.parsers.base import BaseParser, ParserInput

logger = logging.getLogger(__name__)

# Only well-formed references are split out; anything else stays plain text
ENTITY_PATTERN = re.compile(r"&#?[A-Za-z0-9]+;")
TRAILING_BLANK_LINES = re.compile(r"(?:\n[ \t]*)+\Z")


def split_entities(text: str) -> list[Node]:
    """Split text into ``Text`` and ``Entity`` nodes.

    Parameters
    ----------
    text : str
        Raw inline text

    Returns
    -------
    list of Node
        Alternating text and entity nodes; empty text runs are omitted

    Examples
    --------
        >>> split_entities("a &gt; b")
        [Text(content='a ', metadata={}), Entity(content='&gt;', metadata={}), Text(content=' b', metadata={})]

    """
    nodes: list[Node] = []
    pos = 0
    for match in ENTITY_PATTERN.finditer(text):
        if match.start() > pos:
            nodes.append(Text(content=text[pos : match.start()]))
        nodes.append(Entity(content=match.group()))
        pos = match.end()
    if pos < len(text):
        nodes.append(Text(content=text[pos:]))
    return nodes


class MarkdownToAstConverter(BaseParser):
    r"""Convert Markdown to AST representation.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
        >>> converter = MarkdownToAstConverter()
        >>> doc = converter.parse("# Hello\n\nThis is *bold*.")
        >>> [type(node).__name__ for node in doc.children]
        ['Heading', 'Paragraph']

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options

    def parse(self, input_data: ParserInput) -> Document:
        """Parse Markdown input into an AST Document.

        Parameters
        ----------
        input_data : str, bytes, Path, IO[bytes] or IO[str]
            Markdown text, raw bytes, a file path or an open stream

        Returns
        -------
        Document
            AST document node

        Raises
        ------
        FileAccessError
            If a path cannot be opened

        """
        markdown_content = self._load_text_content(input_data)

        plugins = []
        if self.options.parse_strikethrough:
            plugins.append("strikethrough")
        if self.options.parse_tables:
            plugins.append("table")

        markdown = mistune.create_markdown(plugins=plugins, renderer=None)
        tokens, _state = markdown.parse(markdown_content)

        children = self._process_tokens(tokens) if isinstance(tokens, list) else []
        logger.debug("Parsed %d top-level blocks", len(children))
        return Document(children=children)

    # ------------------------------------------------------------------
    # Block tokens
    # ------------------------------------------------------------------

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        nodes: list[Node] = []
        for token in tokens:
            node = self._process_token(token)
            if node is not None:
                nodes.append(node)
        return nodes

    def _process_token(self, token: dict[str, Any]) -> Node | None:
        """Process a single block-level mistune token.

        Parameters
        ----------
        token : dict
            Mistune token dictionary with 'type' and other fields

        Returns
        -------
        Node or None
            Resulting AST node; None for tokens without a node (blank lines)

        """
        token_type = token.get("type", "")

        if token_type == "heading":
            return self._process_heading(token)
        elif token_type in ("paragraph", "block_text"):
            # block_text is the paragraph of a tight list item
            return Paragraph(content=self._process_inline_tokens(token.get("children", [])))
        elif token_type == "block_code":
            return self._process_code_block(token)
        elif token_type == "block_quote":
            return BlockQuote(children=self._process_tokens(token.get("children", [])))
        elif token_type == "list":
            return self._process_list(token)
        elif token_type == "table":
            return Table()
        elif token_type == "thematic_break":
            return ThematicBreak()
        elif token_type == "block_html":
            return HTMLBlock(content=token.get("raw", ""))

        return None

    def _process_heading(self, token: dict[str, Any]) -> Heading:
        attrs = token.get("attrs", {})
        level = attrs.get("level", 1) if isinstance(attrs, dict) else 1
        if not isinstance(level, int) or level < 1 or level > 6:
            level = 1
        return Heading(level=level, content=self._process_inline_tokens(token.get("children", [])))

    def _process_code_block(self, token: dict[str, Any]) -> CodeBlock:
        """Process code block token.

        Fenced blocks keep their final newline but indented ones do not, so
        trailing blank lines are dropped and the body ends with one newline.
        """
        content = TRAILING_BLANK_LINES.sub("", token.get("raw", ""))
        return CodeBlock(content=content + "\n" if content else "")

    def _process_list(self, token: dict[str, Any]) -> List:
        """Process list token.

        Parameters
        ----------
        token : dict
            List token with 'children', 'tight' and 'attrs' (ordered)

        Returns
        -------
        List
            List AST node

        """
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}

        ordered = bool(attrs.get("ordered", False))
        # mistune keeps tightness on the token itself, not in attrs
        tight = bool(token.get("tight", True))

        items = [
            ListItem(children=self._process_tokens(child.get("children", [])))
            for child in token.get("children", [])
            if isinstance(child, dict) and child.get("type") == "list_item"
        ]
        return List(ordered=ordered, items=items, tight=tight)

    # --------------------------------------------------------------------------
    # Inline tokens
    # ------------------------------------------------------------------

    def _process_inline_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process inline tokens.

        Parameters
        ----------
        tokens : list of dict
            Inline token dictionaries

        Returns
        -------
        list of Node
            Inline AST nodes

        """
        nodes: list[Node] = []
        for token in tokens:
            node = self._process_inline_token(token)
            if isinstance(node, list):
                nodes.extend(node)
            elif node is not None:
                nodes.append(node)
        return nodes

    def _handle_text_token(self, token: dict[str, Any]) -> list[Node]:
        """Handle text token, splitting out entity references."""
        content = token.get("raw", "")
        if self.options.parse_entities:
            return split_entities(content)
        return [Text(content=content)] if content else []

    def _handle_strong_token(self, token: dict[str, Any]) -> Strong:
        return Strong(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_emphasis_token(self, token: dict[str, Any]) -> Emphasis:
        return Emphasis(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_codespan_token(self, token: dict[str, Any]) -> Code:
        return Code(content=token.get("raw", ""))

    def _handle_link_token(self, token: dict[str, Any]) -> Link:
        return Link()

    def _handle_image_token(self, token: dict[str, Any]) -> Image:
        return Image()

    def _handle_linebreak_token(self, token: dict[str, Any]) -> LineBreak:
        return LineBreak(soft=False)

    def _handle_softbreak_token(self, token: dict[str, Any]) -> Text:
        """Handle softbreak token: the source newline stays in the text."""
        return Text(content="\n")

    def _handle_strikethrough_token(self, token: dict[str, Any]) -> Strikethrough:
        return Strikethrough(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_inline_html_token(self, token: dict[str, Any]) -> HTMLInline:
        return HTMLInline(content=token.get("raw", ""))

    def _process_inline_token(self, token: dict[str, Any]) -> Node | list[Node] | None:
        """Process a single inline token.

        Parameters
        ----------
        token : dict
            Inline token dictionary

        Returns
        -------
        Node, list of Node, or None
            Inline AST node(s)

        """
        token_type = token.get("type", "")

        handler_map: dict[str, Any] = {
            "text": self._handle_text_token,
            "strong": self._handle_strong_token,
            "emphasis": self._handle_emphasis_token,
            "codespan": self._handle_codespan_token,
            "link": self._handle_link_token,
            "image": self._handle_image_token,
            "linebreak": self._handle_linebreak_token,
            "softbreak": self._handle_softbreak_token,
            "strikethrough": self._handle_strikethrough_token,
            "inline_html": self._handle_inline_html_token,
        }

        handler = handler_map.get(token_type)
        if handler:
            return handler(token)
        return None


def markdown_to_ast(markdown_content: ParserInput, options: MarkdownParserOptions | None = None) -> Document:
    r"""Convert Markdown to AST.

    This is a convenience function that creates a converter and parses
    the markdown in one step.

    Parameters
    ----------
    markdown_content : str, bytes, Path, IO[bytes] or IO[str]
        Markdown to parse
    options : MarkdownParserOptions or None, default = None
        Parser configuration

    Returns
    -------
    Document
        AST document node

    Examples
    --------
    >>> from mdterm.parsers.markdown import markdown_to_ast
    >>> doc = markdown_to_ast("# Hello\\n\\nWorld")
    >>> len(doc.children)
    2

    """
    converter = MarkdownToAstConverter(options)
    return converter.parse(markdown_content)


__all__ = ["ENTITY_PATTERN", "MarkdownToAstConverter", "markdown_to_ast", "split_entities"]
