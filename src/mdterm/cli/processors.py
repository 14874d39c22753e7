#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/cli/processors.py
"""Input, rendering and output steps of the mdterm command.

The whole input is read into memory, parsed, rendered into one byte buffer
and written to standard output in a single call. A short write is reported
as a warning and is not an error.

"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

from mdterm.constants import DEFAULT_ENCODING, ENCODING_ERRORS
from mdterm.exceptions import FileAccessError, OutputWriteError
from mdterm.options import MarkdownParserOptions, TerminalRendererOptions
from mdterm.parsers.markdown import MarkdownToAstConverter
from mdterm.renderers.terminal import TerminalRenderer
from mdterm.utils.io_utils import read_stream, write_content

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"


def read_input(input_path: Optional[str], stdin: Optional[IO[bytes]] = None) -> bytes:
    """Read the complete input document.

    Parameters
    ----------
    input_path : str or None
        File to read; None or ``"-"`` reads standard input
    stdin : IO[bytes], optional
        Stream used for standard input; defaults to ``sys.stdin.buffer``

    Returns
    -------
    bytes
        Raw input bytes

    Raises
    ------
    FileAccessError
        If the input file cannot be opened

    """
    if input_path is None or input_path == STDIN_MARKER:
        stream = stdin if stdin is not None else getattr(sys.stdin, "buffer", sys.stdin)
        if hasattr(stream, "readinto"):
            return read_stream(stream)
        data = stream.read()
        return data if isinstance(data, bytes) else data.encode(DEFAULT_ENCODING, errors=ENCODING_ERRORS)

    try:
        with open(input_path, "rb") as f:
            data = read_stream(f)
    except OSError as e:
        raise FileAccessError(input_path, original_error=e) from e
    logger.debug("Read %d bytes from %s", len(data), input_path)
    return data


def render_document(
    data: bytes,
    renderer_options: TerminalRendererOptions,
    parser_options: MarkdownParserOptions,
) -> bytes:
    """Parse markdown bytes and render them for the terminal."""
    document = MarkdownToAstConverter(parser_options).parse(data)
    return TerminalRenderer(renderer_options).render_to_bytes(document)


def write_output(content: bytes, stdout: Optional[IO[bytes]] = None, stderr: Optional[IO[str]] = None) -> int:
    """Write rendered bytes and the final newline to standard output.

    Parameters
    ----------
    content : bytes
        Rendered document
    stdout : IO[bytes], optional
        Destination; defaults to ``sys.stdout.buffer``
    stderr : IO[str], optional
        Where the short-write warning goes; defaults to ``sys.stderr``

    Returns
    -------
    int
        Number of document bytes written

    Raises
    ------
    OutputWriteError
        If standard output cannot be written at all

    """
    out = stdout if stdout is not None else getattr(sys.stdout, "buffer", sys.stdout)
    err = stderr if stderr is not None else sys.stderr

    try:
        written = write_content(content, out)
        if written < len(content):
            print(f"Warning: only {written} output byte written, out of {len(content)}", file=err)
            logger.warning("Short write to standard output: %d of %d bytes", written, len(content))
        write_content(b"\n", out)
        out.flush()
    except OSError as e:
        raise OutputWriteError("<stdout>", original_error=e) from e
    return written


def process_input(
    input_path: Optional[str],
    renderer_options: TerminalRendererOptions,
    parser_options: MarkdownParserOptions,
) -> int:
    """Read, render and write one document; return the bytes written."""
    data = read_input(input_path)
    logger.info("Rendering %s (%d bytes)", input_path or STDIN_MARKER, len(data))
    rendered = render_document(data, renderer_options, parser_options)
    return write_output(rendered)


__all__ = ["STDIN_MARKER", "process_input", "read_input", "render_document", "write_output"]
