"""Parsers building the mdterm AST."""

from mdterm.parsers.base import BaseParser
from mdterm.parsers.markdown import MarkdownToAstConverter, markdown_to_ast

__all__ = ["BaseParser", "MarkdownToAstConverter", "markdown_to_ast"]
