"""Options classes for the mdterm parser and renderer."""

from mdterm.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from mdterm.options.markdown import MarkdownParserOptions
from mdterm.options.terminal import TerminalRendererOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "MarkdownParserOptions",
    "TerminalRendererOptions",
]
