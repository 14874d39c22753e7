"""mdterm - render markdown as styled text for a terminal.

mdterm parses markdown with mistune into a small AST and renders it into
terminal bytes: headings, emphasis and strong emphasis are styled with the
terminal's own capabilities (looked up in the terminfo database, or taken
from a fixed ANSI table), while paragraphs, lists and code are laid out as
plain text behind a fixed four-space indent.

Examples
--------
Render to bytes:

    >>> from mdterm import render_markdown
    >>> from mdterm.options import TerminalRendererOptions
    >>> render_markdown("Hello", TerminalRendererOptions(backend="none"))
    b'Hello\\n    '

Render straight to standard output:

    >>> from mdterm import to_terminal
    >>> to_terminal("README.md")  # doctest: +SKIP

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from __future__ import annotations

import sys
from pathlib import Path
from typing import IO, Optional, Union

from mdterm.ast import Document
from mdterm.options import MarkdownParserOptions, TerminalRendererOptions
from mdterm.parsers.base import ParserInput
from mdterm.parsers.markdown import MarkdownToAstConverter
from mdterm.renderers.terminal import TerminalRenderer
from mdterm.terminal.capabilities import CapabilityBackend

__version__ = "1.0.0"


def to_ast(source: ParserInput, parser_options: Optional[MarkdownParserOptions] = None) -> Document:
    """Parse markdown into an AST document.

    A ``str`` is markdown text; use a ``Path`` to read a file.
    """
    return MarkdownToAstConverter(parser_options).parse(source)


def render_markdown(
    source: Union[ParserInput, Document],
    renderer_options: Optional[TerminalRendererOptions] = None,
    parser_options: Optional[MarkdownParserOptions] = None,
    backend: Optional[CapabilityBackend] = None,
) -> bytes:
    """Render markdown (or an already parsed document) to terminal bytes.

    Parameters
    ----------
    source : str, bytes, Path, stream or Document
        Markdown text, raw bytes, a file path, an open stream, or a parsed AST
    renderer_options : TerminalRendererOptions, optional
        Rendering options
    parser_options : MarkdownParserOptions, optional
        Parsing options; ignored when ``source`` is a Document
    backend : CapabilityBackend, optional
        Capability source overriding ``renderer_options.backend``

    Returns
    -------
    bytes
        Rendered output

    """
    document = source if isinstance(source, Document) else to_ast(source, parser_options)
    return TerminalRenderer(renderer_options, backend=backend).render_to_bytes(document)


def to_terminal(
    source: Union[str, Path, ParserInput, Document],
    output: Union[str, Path, IO[bytes], IO[str], None] = None,
    renderer_options: Optional[TerminalRendererOptions] = None,
    parser_options: Optional[MarkdownParserOptions] = None,
) -> int:
    """Render a markdown file and write it out.

    Unlike ``render_markdown``, a ``str`` source is taken as a file path.

    Parameters
    ----------
    source : str, Path, bytes, stream or Document
        Markdown file path, raw bytes, an open stream, or a parsed AST
    output : str, Path, IO[bytes], IO[str] or None
        Destination; defaults to standard output
    renderer_options : TerminalRendererOptions, optional
        Rendering options
    parser_options : MarkdownParserOptions, optional
        Parsing options

    Returns
    -------
    int
        Number of bytes written

    """
    if isinstance(source, str):
        source = Path(source)
    renderer = TerminalRenderer(renderer_options)
    document = source if isinstance(source, Document) else to_ast(source, parser_options)
    if output is None:
        output = getattr(sys.stdout, "buffer", sys.stdout)
    return renderer.render(document, output)


__all__ = [
    "__version__",
    "render_markdown",
    "to_ast",
    "to_terminal",
]
