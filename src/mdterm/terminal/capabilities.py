#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/terminal/capabilities.py
"""Terminal capability lookup and emission.

Styling requests (bold, underline, reset, foreground color) are resolved
against a capability backend and appended to an explicit target buffer. Two
families of backend exist:

- ``TerminfoBackend`` reads the system terminal database through ``curses``.
  The database is set up lazily on first lookup; if that fails (unknown
  terminal type, no ``TERM``, curses unavailable, another terminal type
  already loaded) every lookup degrades to "absent" and rendering continues
  without styling.
- ``TableBackend`` serves capabilities from a fixed mapping. It backs the
  ``ansi`` backend and gives tests exact, predictable control bytes.

``NullBackend`` disables styling entirely.

"""

from __future__ import annotations

import logging
import os
import sys
import time
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any, Callable, Mapping, Optional

from mdterm.constants import (
    CAP_BOLD,
    CAP_FOREGROUND,
    CAP_FOREGROUND_ANSI,
    CAP_NO_PAD_CHAR,
    CAP_PAD_CHAR,
    CAP_PADDING_BAUD_RATE,
    CAP_RESET,
    CAP_UNDERLINE,
    CAP_XON_XOFF,
    SETF_TO_SETAF,
    TerminalBackendName,
)
from mdterm.exceptions import TerminalCapabilityError
from mdterm.terminal.buffer import OutputBuffer
from mdterm.terminal.padding import PaddingSettings, expand_padding

logger = logging.getLogger(__name__)

ANSI_CAPABILITIES: dict[str, bytes] = {
    CAP_BOLD: b"\x1b[1m",
    CAP_UNDERLINE: b"\x1b[4m",
    CAP_RESET: b"\x1b[0m",
    CAP_FOREGROUND_ANSI: b"\x1b[3%dm",
}


class CapabilityBackend(ABC):
    """Source of capability strings for one terminal type."""

    name: str = "backend"

    @abstractmethod
    def get_string(self, name: str) -> Optional[bytes]:
        """Return the string capability ``name``, or None when absent."""
        pass

    @abstractmethod
    def format(self, capability: bytes, *params: int) -> bytes:
        """Substitute parameters into a parameterized capability string."""
        pass

    def get_number(self, name: str) -> int:
        """Return the numeric capability ``name``, or -1 when absent."""
        return -1

    def get_flag(self, name: str) -> bool:
        """Return whether the boolean capability ``name`` is set."""
        return False


class NullBackend(CapabilityBackend):
    """Backend without any capabilities; all styling is dropped."""

    name = "none"

    def get_string(self, name: str) -> Optional[bytes]:
        return None

    def format(self, capability: bytes, *params: int) -> bytes:
        return b""


class TableBackend(CapabilityBackend):
    """Backend serving capabilities from a fixed table.

    Parameterized entries use ``%d`` placeholders, one per parameter.

    Parameters
    ----------
    strings : Mapping[str, bytes]
        Capability name to control-sequence template
    numbers : Mapping[str, int], optional
        Numeric capabilities
    flags : iterable of str, optional
        Boolean capabilities that are set
    name : str, default "table"
        Label used in log messages

    Examples
    --------
        >>> backend = TableBackend({"bold": b"<b>", "setf": b"<fg %d>"})
        >>> backend.format(backend.get_string("setf"), 2)
        b'<fg 2>'

    """

    def __init__(
        self,
        strings: Mapping[str, bytes],
        numbers: Optional[Mapping[str, int]] = None,
        flags: Optional[Any] = None,
        name: str = "table",
    ) -> None:
        """Initialize the table backend."""
        self._strings = dict(strings)
        self._numbers = dict(numbers or {})
        self._flags = frozenset(flags or ())
        self.name = name

    @classmethod
    def ansi(cls) -> TableBackend:
        """Create a backend with standard ANSI (ECMA-48) sequences."""
        return cls(ANSI_CAPABILITIES, name="ansi")

    def get_string(self, name: str) -> Optional[bytes]:
        return self._strings.get(name)

    def format(self, capability: bytes, *params: int) -> bytes:
        if not params:
            return capability
        return capability % params

    def get_number(self, name: str) -> int:
        return self._numbers.get(name, -1)

    def get_flag(self, name: str) -> bool:
        return name in self._flags


# curses loads one terminal database per process; later setupterm calls are ignored
_loaded_terminal: dict[str, Optional[str]] = {"term": None}


def _terminal_fd() -> tuple[int, bool]:
    """Return a file descriptor for ``setupterm`` and whether we opened it."""
    try:
        return sys.stdout.fileno(), False
    except (AttributeError, OSError, ValueError):
        return os.open(os.devnull, os.O_WRONLY), True


class TerminfoBackend(CapabilityBackend):
    """Backend reading the system terminfo database via ``curses``.

    Setup happens on the first lookup, not at construction. A failed setup
    is logged at DEBUG level and leaves the backend permanently empty.

    curses holds a single terminal database per process. Once one terminal
    type is loaded, a backend for a different type degrades to empty
    instead of serving the loaded type's capabilities.

    Parameters
    ----------
    term : str, optional
        Terminal type; defaults to the ``TERM`` environment variable

    """

    name = "terminfo"

    def __init__(self, term: Optional[str] = None) -> None:
        """Initialize the backend without touching the database."""
        self.term = term
        self._curses: Any = None
        self._ready: Optional[bool] = None

    @property
    def available(self) -> bool:
        """Whether the terminal database could be set up."""
        return self._ensure_setup()

    def _setup(self) -> None:
        try:
            import curses
        except ImportError as e:
            raise TerminalCapabilityError("curses is not available", term=self.term, original_error=e) from e

        term = self.term or os.environ.get("TERM")
        if not term:
            raise TerminalCapabilityError("TERM is not set", term=None)

        self._curses = curses
        self.term = term
        self._setupterm()
        logger.debug("Terminal database initialized for %s", term)

    def _setupterm(self) -> None:
        loaded = _loaded_terminal["term"]
        if loaded == self.term:
            return
        if loaded is not None:
            raise TerminalCapabilityError(
                f"Terminal database already loaded for {loaded!r}, cannot load {self.term!r}", term=self.term
            )

        curses = self._curses
        fd, opened = _terminal_fd()
        try:
            curses.setupterm(self.term, fd)
        except curses.error as e:
            raise TerminalCapabilityError(
                f"Unknown terminal type {self.term!r}", term=self.term, original_error=e
            ) from e
        finally:
            if opened:
                os.close(fd)
        _loaded_terminal["term"] = self.term

    def _ensure_setup(self) -> bool:
        if self._ready is None:
            self._ready = False
            try:
                self._setup()
                self._ready = True
            except TerminalCapabilityError as e:
                logger.debug("Terminal styling disabled: %s", e.message)
        return self._ready

    def get_string(self, name: str) -> Optional[bytes]:
        if not self._ensure_setup():
            return None
        return self._curses.tigetstr(name)

    def format(self, capability: bytes, *params: int) -> bytes:
        if not self._ensure_setup():
            return b""
        return self._curses.tparm(capability, *params)

    def get_number(self, name: str) -> int:
        if not self._ensure_setup():
            return -1
        return self._curses.tigetnum(name)

    def get_flag(self, name: str) -> bool:
        if not self._ensure_setup():
            return False
        return self._curses.tigetflag(name) > 0


@lru_cache(maxsize=None)
def get_terminal_backend(kind: TerminalBackendName = "terminfo", term: Optional[str] = None) -> CapabilityBackend:
    """Return the process-wide backend for ``kind`` and ``term``.

    Parameters
    ----------
    kind : {"terminfo", "ansi", "none"}
        Backend family
    term : str, optional
        Terminal type for the terminfo backend

    Returns
    -------
    CapabilityBackend
        A cached backend instance

    """
    if kind == "none":
        return NullBackend()
    if kind == "ansi":
        return TableBackend.ansi()
    if kind == "terminfo":
        return TerminfoBackend(term)
    raise ValueError(f"Unknown terminal backend: {kind!r}")


class CapabilityAdapter:
    """Resolve symbolic styling requests and append them to a buffer.

    Every emitting method takes its target buffer explicitly; the adapter
    holds no reference to any output between calls.

    Parameters
    ----------
    backend : CapabilityBackend
        Source of capability strings
    baud_rate : int, default 0
        Line speed used for padding; 0 drops padding
    setaf_fallback : bool, default True
        Use ``setaf`` with translated colors when ``setf`` is missing
    sleep : callable, default time.sleep
        Pause function for terminals without a pad character

    Examples
    --------
        >>> adapter = CapabilityAdapter(TableBackend({"bold": b"<b>"}))
        >>> out = OutputBuffer()
        >>> adapter.bold(out)
        3
        >>> adapter.underline(out)
        0
        >>> out.getvalue()
        b'<b>'

    """

    def __init__(
        self,
        backend: CapabilityBackend,
        baud_rate: int = 0,
        setaf_fallback: bool = True,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the adapter."""
        self.backend = backend
        self.baud_rate = baud_rate
        self.setaf_fallback = setaf_fallback
        self._sleep = sleep
        self._padding: Optional[PaddingSettings] = None

    @property
    def padding(self) -> PaddingSettings:
        """Padding properties of the terminal, read once on first use."""
        if self._padding is None:
            pad = self.backend.get_string(CAP_PAD_CHAR)
            self._padding = PaddingSettings(
                pad_char=pad[0] if pad else 0,
                xon=self.backend.get_flag(CAP_XON_XOFF),
                padding_baud_rate=self.backend.get_number(CAP_PADDING_BAUD_RATE),
                no_pad_char=self.backend.get_flag(CAP_NO_PAD_CHAR),
            )
        return self._padding

    def put(self, target: OutputBuffer, capability: bytes, affcnt: int = 1) -> int:
        """Append a resolved capability string, expanding its padding.

        Returns
        -------
        int
            Number of bytes appended

        """
        before = target.size
        for byte in expand_padding(capability, self.padding, self.baud_rate, affcnt, self._sleep):
            target.putc(byte)
        return target.size - before

    def emit(self, target: OutputBuffer, name: str, *params: int) -> int:
        """Resolve capability ``name`` and append it to ``target``.

        Parameters
        ----------
        target : OutputBuffer
            Buffer receiving the control bytes
        name : str
            Terminfo capability name, e.g. ``"bold"`` or ``"setf"``
        *params : int
            Parameters for parameterized capabilities

        Returns
        -------
        int
            Number of bytes appended; 0 when the capability is absent

        """
        capability = self.backend.get_string(name)
        if not capability:
            return 0
        if params:
            capability = self.backend.format(capability, *params)
        return self.put(target, capability)

    def bold(self, target: OutputBuffer) -> int:
        return self.emit(target, CAP_BOLD)

    def underline(self, target: OutputBuffer) -> int:
        return self.emit(target, CAP_UNDERLINE)

    def reset(self, target: OutputBuffer) -> int:
        return self.emit(target, CAP_RESET)

    def set_foreground(self, target: OutputBuffer, color: int) -> int:
        """Set the foreground color, numbered in the ``setf`` palette."""
        if self.backend.get_string(CAP_FOREGROUND):
            return self.emit(target, CAP_FOREGROUND, color)
        if self.setaf_fallback and 0 <= color < len(SETF_TO_SETAF):
            return self.emit(target, CAP_FOREGROUND_ANSI, SETF_TO_SETAF[color])
        return 0
