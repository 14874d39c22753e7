#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/terminal/__init__.py
"""Terminal output primitives: byte buffer, padding and capabilities."""

from mdterm.terminal.buffer import OutputBuffer
from mdterm.terminal.capabilities import (
    ANSI_CAPABILITIES,
    CapabilityAdapter,
    CapabilityBackend,
    NullBackend,
    TableBackend,
    TerminfoBackend,
    get_terminal_backend,
)
from mdterm.terminal.padding import PaddingSettings, expand_padding

__all__ = [
    "ANSI_CAPABILITIES",
    "CapabilityAdapter",
    "CapabilityBackend",
    "NullBackend",
    "OutputBuffer",
    "PaddingSettings",
    "TableBackend",
    "TerminfoBackend",
    "expand_padding",
    "get_terminal_backend",
]
