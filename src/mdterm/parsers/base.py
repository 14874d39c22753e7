#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/parsers/base.py
"""Base classes for document parsers.

This module defines the abstract base class for parsers that build the
mdterm AST, together with the shared input loading used by them.

"""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from mdterm.ast import Document
from mdterm.constants import ENCODING_ERRORS
from mdterm.exceptions import FileAccessError, InvalidOptionsError
from mdterm.options.base import BaseParserOptions
from mdterm.utils.io_utils import read_stream

logger = logging.getLogger(__name__)

ParserInput = Union[str, bytes, Path, IO[bytes], IO[str]]


class BaseParser(ABC):
    """Abstract base class for document parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    Notes
    -----
    ``parse()`` accepts:
    - str: the document text itself
    - bytes: raw document bytes
    - Path: a file to read
    - IO[bytes] / IO[str]: an open stream, read to the end

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options = options or BaseParserOptions()

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Parameters
        ----------
        options : BaseParserOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        parser_name : str
            Name of the parser (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: ParserInput) -> Document:
        """Parse the input document into an AST.

        Parameters
        ----------
        input_data : str, bytes, Path, IO[bytes] or IO[str]
            The input document to parse

        Returns
        -------
        Document
            AST document node

        """
        pass

    def _load_text_content(self, input_data: ParserInput) -> str:
        """Load document text from any supported input type.

        Bytes are decoded with the options' encoding; undecodable bytes are
        kept as lone surrogates so they can be re-encoded unchanged on output.

        Raises
        ------
        FileAccessError
            If a path cannot be opened

        """
        encoding = self.options.encoding
        if isinstance(input_data, str):
            return input_data
        if isinstance(input_data, (bytes, bytearray)):
            return bytes(input_data).decode(encoding, errors=ENCODING_ERRORS)
        if isinstance(input_data, Path):
            try:
                with open(input_data, "rb") as f:
                    data = read_stream(f)
            except OSError as e:
                raise FileAccessError(str(input_data), original_error=e) from e
            logger.debug("Read %d bytes from %s", len(data), input_data)
            return data.decode(encoding, errors=ENCODING_ERRORS)
        if isinstance(input_data, io.TextIOBase):
            return input_data.read()
        if hasattr(input_data, "readinto"):
            return read_stream(input_data).decode(encoding, errors=ENCODING_ERRORS)  # type: ignore[arg-type]
        if hasattr(input_data, "read"):
            content = input_data.read()
            if isinstance(content, bytes):
                return content.decode(encoding, errors=ENCODING_ERRORS)
            return content
        raise TypeError(f"Unsupported input type: {type(input_data)}")


__all__ = ["BaseParser", "ParserInput"]
