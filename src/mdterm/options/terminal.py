#  Copyright (c) 2025 Tom Villani, Ph.D.
# mdterm/options/terminal.py
"""Configuration options for terminal rendering.

This module defines options for rendering the AST as terminal-styled text.
Layout (indent, fence marker, heading colors) is fixed; the options only
choose how styling requests reach the terminal.
"""

from dataclasses import dataclass, field
from typing import Optional

from mdterm.constants import (
    DEFAULT_BAUD_RATE,
    DEFAULT_TERMINAL_BACKEND,
    TERMINAL_BACKENDS,
    TerminalBackendName,
)
from mdterm.options.base import BaseRendererOptions


@dataclass(frozen=True)
class TerminalRendererOptions(BaseRendererOptions):
    """Configuration options for terminal rendering.

    Parameters
    ----------
    backend : {"terminfo", "ansi", "none"}, default "terminfo"
        Where capability strings come from:
        - "terminfo": the system terminal database for ``term``
        - "ansi": a fixed table of standard ANSI sequences
        - "none": no styling at all, plain text layout only
    term : str or None, default None
        Terminal type to look up. None uses the ``TERM`` environment variable.
    baud_rate : int, default 0
        Line speed used to turn capability padding into pad characters.
        0 means unknown, in which case padding is dropped.
    setaf_fallback : bool, default True
        When the terminal has no ``setf`` capability, set heading colors with
        ``setaf`` instead, translating the color numbers.

    Examples
    --------
        >>> from mdterm.options import TerminalRendererOptions
        >>> options = TerminalRendererOptions(backend="ansi")
        >>> options.create_updated(backend="none").backend
        'none'

    """

    backend: TerminalBackendName = field(
        default=DEFAULT_TERMINAL_BACKEND,
        metadata={
            "help": "Capability source: terminfo, ansi or none",
            "choices": list(TERMINAL_BACKENDS),
        },
    )
    term: Optional[str] = field(
        default=None,
        metadata={"help": "Terminal type (defaults to $TERM)", "type": str},
    )
    baud_rate: int = field(
        default=DEFAULT_BAUD_RATE,
        metadata={"help": "Line speed for capability padding (0 = no padding)", "type": int},
    )
    setaf_fallback: bool = field(
        default=True,
        metadata={
            "help": "Use setaf when the terminal lacks setf",
            "cli_name": "no-setaf-fallback",
        },
    )

    def __post_init__(self) -> None:
        """Validate terminal renderer options.

        Raises
        ------
        ValueError
            If the backend is unknown or the baud rate is negative.

        """
        super().__post_init__()
        if self.backend not in TERMINAL_BACKENDS:
            raise ValueError(f"backend must be one of {', '.join(TERMINAL_BACKENDS)}, got {self.backend!r}")
        if self.baud_rate < 0:
            raise ValueError(f"baud_rate must be non-negative, got {self.baud_rate}")
