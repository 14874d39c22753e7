#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/terminal/padding.py
"""Expansion of terminfo padding specifications.

Terminfo capability strings may embed delays written as ``$<N>``, where N is
a number of milliseconds with an optional tenths digit and the suffixes
``*`` (multiply by the number of affected lines) and ``/`` (mandatory
padding, applied even with XON/XOFF flow control). When a string is sent to
the terminal these specs are replaced by pad characters, or by a real pause
when the terminal has no pad character.

"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from mdterm.constants import PADDING_BITS_PER_CHAR

_DOLLAR = ord("$")
_LESS = ord("<")
_GREATER = ord(">")
_DOT = ord(".")
_STAR = ord("*")
_SLASH = ord("/")
_ZERO = ord("0")


@dataclass(frozen=True)
class PaddingSettings:
    """Terminal properties that decide how padding is emitted.

    Parameters
    ----------
    pad_char : int, default 0
        Byte used for padding (terminfo ``pad``, NUL when absent)
    xon : bool, default False
        Terminal uses XON/XOFF flow control, so only mandatory padding applies
    padding_baud_rate : int, default 0
        Lowest line speed at which padding is needed (terminfo ``pb``);
        0 or negative means padding applies at every speed
    no_pad_char : bool, default False
        Terminal has no pad character; delays become real pauses

    """

    pad_char: int = 0
    xon: bool = False
    padding_baud_rate: int = 0
    no_pad_char: bool = False


@dataclass(frozen=True)
class DelaySpec:
    """A parsed ``$<...>`` delay: tenths of milliseconds and flags."""

    tenths: int
    proportional: bool
    mandatory: bool
    end: int

    def milliseconds(self, affcnt: int = 1) -> int:
        tenths = self.tenths * affcnt if self.proportional else self.tenths
        return tenths // 10


def _isdigit(byte: int) -> bool:
    return _ZERO <= byte <= _ZERO + 9


def parse_delay(data: bytes, pos: int) -> Optional[DelaySpec]:
    """Parse a delay spec starting at ``pos`` (which must point at ``$``).

    Parameters
    ----------
    data : bytes
        Capability string
    pos : int
        Index of the ``$`` character

    Returns
    -------
    DelaySpec or None
        The parsed delay, or None when the text at ``pos`` is not a
        well-formed spec and must be copied literally

    """
    size = len(data)
    if pos + 2 >= size or data[pos] != _DOLLAR or data[pos + 1] != _LESS:
        return None
    i = pos + 2
    if not (_isdigit(data[i]) or data[i] == _DOT):
        return None

    number = 0
    while i < size and _isdigit(data[i]):
        number = number * 10 + data[i] - _ZERO
        i += 1
    number *= 10
    if i < size and data[i] == _DOT:
        i += 1
        if i < size and _isdigit(data[i]):
            number += data[i] - _ZERO
            i += 1
        while i < size and _isdigit(data[i]):
            i += 1

    proportional = mandatory = False
    while i < size and data[i] in (_STAR, _SLASH):
        if data[i] == _STAR:
            proportional = True
        else:
            mandatory = True
        i += 1

    if i >= size or data[i] != _GREATER:
        return None
    return DelaySpec(tenths=number, proportional=proportional, mandatory=mandatory, end=i + 1)


def expand_padding(
    data: bytes,
    settings: PaddingSettings = PaddingSettings(),
    baud_rate: int = 0,
    affcnt: int = 1,
    sleep: Callable[[float], None] = time.sleep,
) -> Iterator[int]:
    """Yield the bytes of a capability string with padding expanded.

    Ordinary bytes are yielded unchanged, one at a time. Each delay spec is
    dropped and, when padding applies, replaced with
    ``delay_ms * baud_rate // 9000`` pad characters, or with a call to
    ``sleep`` for terminals without a pad character. Padding applies when the
    spec is mandatory, or when the line speed is known, reaches the
    terminal's padding threshold, and XON/XOFF flow control is off.

    Parameters
    ----------
    data : bytes
        Capability string, possibly containing ``$<N>`` specs
    settings : PaddingSettings
        Pad character and flow-control properties of the terminal
    baud_rate : int, default 0
        Output line speed; 0 means unknown
    affcnt : int, default 1
        Number of lines affected, for proportional (``*``) delays
    sleep : callable, default time.sleep
        Pause function used when the terminal has no pad character

    Yields
    ------
    int
        Output bytes

    Examples
    --------
        >>> bytes(expand_padding(b"\\x1b[H$<5>"))
        b'\\x1b[H'
        >>> bytes(expand_padding(b"x$<10>", baud_rate=9600))
        b'x\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x00'

    """
    normal_delay = (
        baud_rate > 0
        and not settings.xon
        and (settings.padding_baud_rate <= 0 or baud_rate >= settings.padding_baud_rate)
    )
    i = 0
    size = len(data)
    while i < size:
        byte = data[i]
        if byte == _DOLLAR:
            spec = parse_delay(data, i)
            if spec is not None:
                if spec.mandatory or normal_delay:
                    yield from _delay(spec.milliseconds(affcnt), settings, baud_rate, sleep)
                i = spec.end
                continue
        yield byte
        i += 1


def _delay(milliseconds: int, settings: PaddingSettings, baud_rate: int, sleep: Callable[[float], None]) -> Iterator[int]:
    if milliseconds <= 0:
        return
    if settings.no_pad_char:
        sleep(milliseconds / 1000)
        return
    count = milliseconds * baud_rate // (PADDING_BITS_PER_CHAR * 1000)
    for _ in range(count):
        yield settings.pad_char
