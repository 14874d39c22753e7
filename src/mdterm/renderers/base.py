#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/renderers/base.py
"""Base classes for AST renderers.

This module defines the abstract base class for renderers that turn the
mdterm AST into output bytes, and the mixin used to render child nodes into
a temporary buffer before their parent's handler runs.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from mdterm.ast import Document
from mdterm.ast.nodes import Node
from mdterm.constants import ENCODING_ERRORS
from mdterm.exceptions import InvalidOptionsError, OutputWriteError
from mdterm.options.base import BaseRendererOptions
from mdterm.terminal.buffer import OutputBuffer
from mdterm.utils.io_utils import write_content


class BaseRenderer(ABC):
    """Abstract base class for AST renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration.

        Parameters
        ----------
        options : BaseRendererOptions or None, default = None
            Format-specific rendering options. If None, default options will be used.

        """
        self.options = options or BaseRendererOptions()

    @abstractmethod
    def render_to_bytes(self, doc: Document) -> bytes:
        """Render the AST to output bytes.

        Parameters
        ----------
        doc : Document
            AST Document node to render

        Returns
        -------
        bytes
            Rendered document

        """
        pass

    def render(self, doc: Document, output: Union[str, Path, IO[bytes], IO[str]]) -> int:
        """Render the AST and write it to a file path or stream.

        Parameters
        ----------
        doc : Document
            AST Document node to render
        output : str, Path, IO[bytes] or IO[str]
            Output destination

        Returns
        -------
        int
            Number of bytes written

        Raises
        ------
        OutputWriteError
            If the destination cannot be written

        """
        return self.write_output(self.render_to_bytes(doc), output)

    def render_to_string(self, doc: Document) -> str:
        """Render the AST and decode the bytes with the options' encoding.

        Bytes that do not decode are kept as lone surrogates, so encoding the
        result again with ``surrogateescape`` reproduces the exact bytes.
        """
        return self.render_to_bytes(doc).decode(self.options.encoding, errors=ENCODING_ERRORS)

    def write_output(self, content: bytes, output: Union[str, Path, IO[bytes], IO[str]]) -> int:
        """Write rendered bytes to the destination.

        Parameters
        ----------
        content : bytes
            Rendered output
        output : str, Path, IO[bytes] or IO[str]
            Output destination

        Returns
        -------
        int
            Number of bytes actually written, which may be short

        Raises
        ------
        OutputWriteError
            If the destination cannot be written at all

        """
        try:
            return write_content(content, output, encoding=self.options.encoding)
        except OSError as e:
            destination = str(output) if isinstance(output, (str, Path)) else getattr(output, "name", repr(output))
            raise OutputWriteError(str(destination), original_error=e) from e

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Parameters
        ----------
        options : BaseRendererOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        renderer_name : str
            Name of the renderer (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )


class InlineContentMixin:
    """Mixin rendering child nodes into a scratch buffer.

    The implementing class must have an ``_output`` attribute holding the
    ``OutputBuffer`` that visitor methods append to. While children are
    rendered, ``_output`` points at a fresh buffer; the previous buffer is
    restored afterwards, so nested calls compose.

    Examples
    --------
        >>> class MyRenderer(InlineContentMixin):
        ...     def __init__(self):
        ...         self._output = OutputBuffer()
        ...
        ...     def visit_text(self, node):
        ...         self._output.put(node.content.encode())

    """

    _output: OutputBuffer

    def _render_inline_content(self, content: list[Node]) -> bytes:
        """Render a list of nodes and return their bytes.

        Parameters
        ----------
        content : list of Node
            Nodes to render

        Returns
        -------
        bytes
            Rendered child text

        """
        saved_output = self._output
        self._output = OutputBuffer(saved_output.unit)
        try:
            for node in content:
                node.accept(self)
            return self._output.getvalue()
        finally:
            self._output = saved_output


__all__ = ["BaseRenderer", "InlineContentMixin"]
