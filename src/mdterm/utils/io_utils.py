#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/utils/io_utils.py
"""I/O utilities for input loading and output destinations.

Input is read in fixed-size chunks into an ``OutputBuffer`` whose capacity
is grown before every read, and output is written as raw bytes so that the
caller can detect short writes.

"""

from __future__ import annotations

import io
from io import StringIO
from pathlib import Path
from typing import IO, Union, cast

from mdterm.constants import DEFAULT_ENCODING, ENCODING_ERRORS, READ_UNIT
from mdterm.terminal.buffer import OutputBuffer


def read_stream(stream: IO[bytes], unit: int = READ_UNIT) -> bytes:
    """Read a binary stream to exhaustion.

    Parameters
    ----------
    stream : IO[bytes]
        Binary stream supporting ``readinto``
    unit : int, default READ_UNIT
        Read increment and buffer allocation unit

    Returns
    -------
    bytes
        Everything the stream produced

    Examples
    --------
        >>> from io import BytesIO
        >>> read_stream(BytesIO(b"x" * 3000), unit=1024)[:3]
        b'xxx'

    """
    buffer = OutputBuffer(unit)
    while buffer.read_from(stream, unit):
        pass
    return buffer.getvalue()


def _is_binary(output: object) -> bool:
    if isinstance(output, StringIO) or isinstance(output, io.TextIOBase):
        return False
    if isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
        return True
    mode = getattr(output, "mode", "")
    return isinstance(mode, str) and "b" in mode


def write_content(
    content: bytes, output: Union[str, Path, IO[bytes], IO[str]], encoding: str = DEFAULT_ENCODING
) -> int:
    """Write rendered bytes to a path or stream and report how many landed.

    Parameters
    ----------
    content : bytes
        Rendered output
    output : str, Path, IO[bytes] or IO[str]
        Destination. Paths are written in full. Binary streams receive the
        bytes as-is; text streams receive them decoded with ``encoding``.
    encoding : str, default "utf-8"
        Encoding used when the destination is a text stream

    Returns
    -------
    int
        Number of bytes written. A stream that accepts nothing (for example
        a non-blocking stream returning None) counts as 0.

    Raises
    ------
    TypeError
        If the output type is not supported

    Examples
    --------
        >>> from io import BytesIO
        >>> buffer = BytesIO()
        >>> write_content(b"binary data", buffer)
        11
        >>> buffer.getvalue()
        b'binary data'

    """
    if not isinstance(content, (bytes, bytearray)):
        raise TypeError(f"Content must be bytes, got {type(content)}")

    if isinstance(output, (str, Path)):
        return Path(output).write_bytes(content)

    if not hasattr(output, "write"):
        raise TypeError(f"Unsupported output type: {type(output)}")

    if _is_binary(output):
        written = cast(IO[bytes], output).write(content)
        return written or 0

    text = content.decode(encoding, errors=ENCODING_ERRORS)
    count = cast(IO[str], output).write(text)
    if count is None:
        return 0
    if count >= len(text):
        return len(content)
    return len(text[:count].encode(encoding, errors=ENCODING_ERRORS))


__all__ = ["read_stream", "write_content"]
