#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/utils/escape.py
"""Text escaping for the terminal layout.

The terminal layout keeps every line after the first indented, so the only
transformation applied to document text is re-indenting embedded newlines.
Control characters in the input are not filtered and reach the terminal
unchanged.

"""

from __future__ import annotations

from mdterm.constants import INDENT
from mdterm.terminal.buffer import OutputBuffer

_NEWLINE = b"\n"


def indent_newlines(data: bytes, indent: bytes = INDENT) -> bytes:
    r"""Return ``data`` with every newline followed by ``indent``.

    Parameters
    ----------
    data : bytes
        Raw text
    indent : bytes, default INDENT
        Bytes inserted after each newline

    Returns
    -------
    bytes
        Re-indented text

    Examples
    --------
        >>> indent_newlines(b"a\nb")
        b'a\n    b'
        >>> indent_newlines(b"no newline")
        b'no newline'

    """
    if _NEWLINE not in data:
        return data
    return data.replace(_NEWLINE, _NEWLINE + indent)


def escape_text(target: OutputBuffer, data: bytes, indent: bytes = INDENT) -> None:
    """Append ``data`` to ``target``, indenting after each newline."""
    target.put(indent_newlines(data, indent))


__all__ = ["escape_text", "indent_newlines"]
