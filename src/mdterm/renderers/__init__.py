"""Renderers turning the mdterm AST into output bytes."""

from mdterm.renderers.base import BaseRenderer, InlineContentMixin
from mdterm.renderers.terminal import TerminalRenderer

__all__ = ["BaseRenderer", "InlineContentMixin", "TerminalRenderer"]
