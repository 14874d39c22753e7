#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/renderers/terminal.py
"""Terminal rendering from AST.

This module provides the TerminalRenderer class which converts AST nodes to
terminal-formatted bytes. Headings, emphasis and strong emphasis are styled
with terminal capabilities (color, bold, underline); everything else is laid
out as plain text where every line after the first carries a fixed
four-space indent:

- paragraphs are separated by an indented blank line
- list items are prefixed with ``# `` (ordered) or ``* `` (bullet)
- code spans and code blocks are fenced with ``~~~~`` lines

Node kinds without a terminal rendering (links, images, tables, block
quotes, thematic breaks, raw HTML, strikethrough) render to nothing.

Children are rendered first into a scratch buffer and handed to the
parent's handler as finished bytes. Every handler appends to the buffer it
is given; no state outside the renderer instance is touched, so renderers
can be nested or run side by side.

"""

from __future__ import annotations

import logging
from typing import Optional

from mdterm.ast.nodes import (
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
from mdterm.ast.visitors import NodeVisitor
from mdterm.constants import (
    BULLET_ITEM_MARKER,
    ENCODING_ERRORS,
    FENCE_MARKER,
    HEADING_COLORS,
    HEADING_LEVEL3_PREFIX,
    INDENT,
    NEWLINE_INDENT,
    ORDERED_ITEM_MARKER,
)
from mdterm.options.terminal import TerminalRendererOptions
from mdterm.renderers.base import BaseRenderer, InlineContentMixin
from mdterm.terminal.buffer import OutputBuffer
from mdterm.terminal.capabilities import CapabilityAdapter, CapabilityBackend, get_terminal_backend
from mdterm.utils.entities import decode_entity
from mdterm.utils.escape import escape_text

logger = logging.getLogger(__name__)

_NEWLINE = b"\n"


class TerminalRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render AST nodes to terminal-formatted bytes.

    Parameters
    ----------
    options : TerminalRendererOptions or None, default = None
        Terminal rendering options
    backend : CapabilityBackend or None, default = None
        Capability source to use instead of the one named in ``options``

    Examples
    --------
        >>> from mdterm.ast import Document, Paragraph, Text
        >>> from mdterm.options import TerminalRendererOptions
        >>> doc = Document(children=[Paragraph(content=[Text(content="Hello")])])
        >>> renderer = TerminalRenderer(TerminalRendererOptions(backend="none"))
        >>> renderer.render_to_bytes(doc)
        b'Hello\\n    '

    """

    def __init__(self, options: TerminalRendererOptions | None = None, backend: Optional[CapabilityBackend] = None):
        """Initialize the terminal renderer with options."""
        BaseRenderer._validate_options_type(options, TerminalRendererOptions, "terminal")
        options = options or TerminalRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: TerminalRendererOptions = options

        if backend is None:
            backend = get_terminal_backend(options.backend, options.term)
        logger.debug("Rendering with %s capability backend", backend.name)
        self.capabilities = CapabilityAdapter(
            backend,
            baud_rate=options.baud_rate,
            setaf_fallback=options.setaf_fallback,
        )

        self._output = OutputBuffer()
        self._lists: list[List] = []
        self._tight_items: list[bool] = []

    def render_to_bytes(self, doc: Document) -> bytes:
        """Render a document AST to terminal bytes.

        Parameters
        ----------
        doc : Document
            The document node to render

        Returns
        -------
        bytes
            Rendered output, control sequences included

        """
        saved = (self._output, self._lists, self._tight_items)
        self._output = OutputBuffer()
        self._lists = []
        self._tight_items = []
        try:
            doc.accept(self)
            return self._output.getvalue()
        finally:
            self._output, self._lists, self._tight_items = saved

    def _encode(self, text: str) -> bytes:
        return text.encode(self.options.encoding, errors=ENCODING_ERRORS)

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        """Render the document's blocks in order into the current buffer."""
        for child in node.children:
            child.accept(self)

    def visit_heading(self, node: Heading) -> None:
        """Render a heading.

        The heading is preceded by a newline. Levels 1 to 3 are colored
        (level 3 is additionally shifted right by two spaces); every level is
        underlined and bold.
        """
        text = self._render_inline_content(node.content)
        out = self._output
        out.put(_NEWLINE)
        if node.level == 3:
            out.put(HEADING_LEVEL3_PREFIX)
        color = HEADING_COLORS.get(node.level)
        if color is not None:
            self.capabilities.set_foreground(out, color)
        self.capabilities.underline(out)
        self.capabilities.bold(out)
        out.put(text)
        self.capabilities.reset(out)
        out.put(NEWLINE_INDENT)

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a paragraph.

        A paragraph that does not start its buffer is separated from what
        precedes it by an indented blank line. Inside items of a tight list
        the paragraph is just its inline text and the line end.
        """
        text = self._render_inline_content(node.content)
        out = self._output
        if len(out) and not (self._tight_items and self._tight_items[-1]):
            out.put(NEWLINE_INDENT)
        out.put(text)
        out.put(NEWLINE_INDENT)

    def visit_code_block(self, node: CodeBlock) -> None:
        self._fenced(self._output, self._encode(node.content))

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Block quotes render to nothing."""
        pass

    def visit_list(self, node: List) -> None:
        """Render a list as its items behind one level of indentation."""
        self._lists.append(node)
        try:
            text = self._render_inline_content(node.items)
        finally:
            self._lists.pop()
        out = self._output
        out.put(INDENT)
        out.put(text)
        out.put(NEWLINE_INDENT)

    def visit_list_item(self, node: ListItem) -> None:
        """Render a list item.

        The item's rendered blocks lose their trailing newlines and every
        remaining newline is re-indented one level deeper. Items are written
        back to back; separation comes from the line ends inside them.
        """
        enclosing = self._lists[-1] if self._lists else None
        self._tight_items.append(enclosing.tight if enclosing is not None else False)
        try:
            text = self._render_inline_content(node.children)
        finally:
            self._tight_items.pop()
        self.render_list_item(self._output, text, ordered=enclosing is not None and enclosing.ordered)

    def render_list_item(self, target: OutputBuffer, text: bytes, ordered: bool = False) -> None:
        """Append an already-rendered list item to ``target``.

        Parameters
        ----------
        target : OutputBuffer
            Buffer receiving the item
        text : bytes
            Rendered item content
        ordered : bool, default False
            Whether the enclosing list is ordered

        """
        target.put(ORDERED_ITEM_MARKER if ordered else BULLET_ITEM_MARKER)
        escape_text(target, text.rstrip(_NEWLINE))

    def visit_table(self, node: Table) -> None:
        """Tables render to nothing."""
        pass

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Thematic breaks render to nothing."""
        pass

    def visit_html_block(self, node: HTMLBlock) -> None:
        """Raw HTML blocks render to nothing."""
        pass

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        escape_text(self._output, self._encode(node.content))

    def visit_entity(self, node: Entity) -> None:
        """Render an entity reference as its decoded byte, or verbatim."""
        raw = self._encode(node.content)
        value = decode_entity(raw)
        if value is None:
            self._output.put(raw)
        else:
            self._output.putc(value)

    def visit_emphasis(self, node: Emphasis) -> bool:
        """Render emphasis, or its literal markup when it has no text."""
        text = self._render_inline_content(node.content)
        if self.emphasis(self._output, text):
            return True
        escape_text(self._output, self._encode(node.delimiter * 2))
        return False

    def visit_strong(self, node: Strong) -> bool:
        """Render strong emphasis, or its literal markup when it has no text."""
        text = self._render_inline_content(node.content)
        if self.strong(self._output, text):
            return True
        escape_text(self._output, self._encode(node.delimiter * 4))
        return False

    def visit_code(self, node: Code) -> bool:
        self._fenced(self._output, self._encode(node.content))
        return True

    def visit_link(self, node: Link) -> None:
        """Links render to nothing, text included."""
        pass

    def visit_image(self, node: Image) -> None:
        """Images render to nothing."""
        pass

    def visit_line_break(self, node: LineBreak) -> bool:
        """Render a line break as a newline followed by the indent.

        A soft break is the source newline passed through the text escaper,
        which yields the same bytes.
        """
        if node.soft:
            escape_text(self._output, _NEWLINE)
        else:
            self._output.put(NEWLINE_INDENT)
        return True

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Strikethrough renders to nothing."""
        pass

    def visit_html_inline(self, node: HTMLInline) -> None:
        """Inline HTML renders to nothing."""
        pass

    # ------------------------------------------------------------------
    # Span handlers
    # ------------------------------------------------------------------

    def emphasis(self, target: OutputBuffer, text: bytes) -> bool:
        """Append bold ``text`` to ``target``.

        Returns
        -------
        bool
            False when ``text`` is empty; nothing is appended in that case

        """
        if not text:
            return False
        self.capabilities.bold(target)
        target.put(text)
        self.capabilities.reset(target)
        return True

    def strong(self, target: OutputBuffer, text: bytes) -> bool:
        """Append bold, underlined ``text`` to ``target``.

        Returns
        -------
        bool
            False when ``text`` is empty; nothing is appended in that case

        """
        if not text:
            return False
        self.capabilities.bold(target)
        self.capabilities.underline(target)
        target.put(text)
        self.capabilities.reset(target)
        return True

    @staticmethod
    def _fenced(target: OutputBuffer, body: bytes) -> None:
        target.put(FENCE_MARKER)
        target.put(NEWLINE_INDENT)
        escape_text(target, body)
        target.put(FENCE_MARKER)
        target.put(NEWLINE_INDENT)


__all__ = ["TerminalRenderer"]
