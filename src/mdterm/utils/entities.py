#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/utils/entities.py
"""Character entity reference decoding.

Only a very small set of references is understood, and each decodes to a
single output byte:

- ``&quot;`` decodes to a single quote (``'``), not a double quote
- ``&gt;`` decodes to ``>``
- ``&#N;`` decodes to byte ``N`` truncated to eight bits

Everything else is reported as undecodable so that the caller can copy the
reference through unchanged.

"""

from __future__ import annotations

import string
from typing import Optional

from mdterm.constants import ENTITY_MARKER, ENTITY_SCAN_LIMIT, ENTITY_TERMINATOR

NAMED_ENTITIES: dict[bytes, int] = {
    b"quot": ord("'"),
    b"gt": ord(">"),
}

_NUMERIC_PREFIX = b"#"
_WHITESPACE = string.whitespace.encode("ascii")


def _atoi(data: bytes) -> int:
    """Parse a leading decimal integer the way C ``atoi`` does.

    Leading whitespace and one sign character are accepted; parsing stops
    at the first non-digit. No digits at all yields 0.
    """
    text = data.lstrip(_WHITESPACE)
    sign = 1
    if text[:1] in (b"+", b"-"):
        sign = -1 if text[:1] == b"-" else 1
        text = text[1:]
    value = 0
    for byte in text:
        if not 0x30 <= byte <= 0x39:
            break
        value = value * 10 + byte - 0x30
    return sign * value


def translate_entity(name: bytes) -> Optional[int]:
    """Translate an entity name (text between ``&`` and ``;``) to a byte.

    Parameters
    ----------
    name : bytes
        Entity name without delimiters, e.g. ``b"gt"`` or ``b"#65"``

    Returns
    -------
    int or None
        The decoded byte value, or None when the name is not understood.
        A numeric reference whose value truncates to zero is not understood.

    Examples
    --------
        >>> translate_entity(b"gt")
        62
        >>> translate_entity(b"#65")
        65
        >>> translate_entity(b"#321")
        65
        >>> translate_entity(b"amp") is None
        True

    """
    if name in NAMED_ENTITIES:
        return NAMED_ENTITIES[name]
    if name.startswith(_NUMERIC_PREFIX):
        value = _atoi(name[1:]) & 0xFF
        return value or None
    return None


def decode_entity(data: bytes, pos: int = 0, limit: int = ENTITY_SCAN_LIMIT) -> Optional[int]:
    """Decode the entity reference starting at ``data[pos]``.

    The terminator ``;`` is only searched for within ``limit`` bytes of the
    ``&``; a reference longer than that is treated as undecodable. ``data``
    is never modified.

    Parameters
    ----------
    data : bytes
        Source bytes
    pos : int, default 0
        Index of the ``&`` that starts the reference
    limit : int, default ENTITY_SCAN_LIMIT
        Size of the scan window, counted from the ``&``

    Returns
    -------
    int or None
        Decoded byte, or None when the reference must be emitted verbatim

    Examples
    --------
        >>> decode_entity(b"&quot;")
        39
        >>> decode_entity(b"&foo bar") is None
        True

    """
    if pos >= len(data) or data[pos] != ENTITY_MARKER:
        return None
    end = data.find(ENTITY_TERMINATOR, pos + 1, min(len(data), pos + limit))
    if end < 0:
        return None
    return translate_entity(data[pos + 1 : end])


__all__ = ["NAMED_ENTITIES", "decode_entity", "translate_entity"]
