#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/constants.py
"""Constants shared across the mdterm package.

Layout strings are stored as bytes because the renderer works on raw output
bytes; capability names are the terminfo short names looked up in the
terminal database.
"""

from __future__ import annotations

from typing import Literal

# Layout
INDENT = b"    "
NEWLINE_INDENT = b"\n" + INDENT
FENCE_MARKER = b"~~~~"
HEADING_LEVEL3_PREFIX = b"  "
ORDERED_ITEM_MARKER = b"# "
BULLET_ITEM_MARKER = b"* "
DEFAULT_EMPHASIS_DELIMITER = "*"

# Heading colors use the terminfo ``setf`` palette
TERM_COLOR_H1 = 2
TERM_COLOR_H2 = 3
TERM_COLOR_H3 = 1
HEADING_COLORS: dict[int, int] = {1: TERM_COLOR_H1, 2: TERM_COLOR_H2, 3: TERM_COLOR_H3}

# Entity decoding
ENTITY_MARKER = ord("&")
ENTITY_TERMINATOR = ord(";")
ENTITY_SCAN_LIMIT = 20

# Buffer growth units
READ_UNIT = 1024
OUTPUT_UNIT = 64

# Terminfo capability names
CAP_BOLD = "bold"
CAP_UNDERLINE = "smul"
CAP_RESET = "sgr0"
CAP_FOREGROUND = "setf"
CAP_FOREGROUND_ANSI = "setaf"
CAP_PAD_CHAR = "pad"
CAP_PADDING_BAUD_RATE = "pb"
CAP_XON_XOFF = "xon"
CAP_NO_PAD_CHAR = "npc"

# setf numbers colors BGR, setaf numbers them RGB
SETF_TO_SETAF: tuple[int, ...] = (0, 4, 2, 6, 1, 5, 3, 7)

# Bits per character used by terminfo when converting delays into pad characters
PADDING_BITS_PER_CHAR = 9

TerminalBackendName = Literal["terminfo", "ansi", "none"]
TERMINAL_BACKENDS: tuple[str, ...] = ("terminfo", "ansi", "none")
DEFAULT_TERMINAL_BACKEND: TerminalBackendName = "terminfo"
DEFAULT_BAUD_RATE = 0
DEFAULT_ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"

# CLI / configuration
ENV_PREFIX = "MDTERM_"
CONFIG_ENV_VAR = "MDTERM_CONFIG"
NO_COLOR_ENV_VAR = "NO_COLOR"
CONFIG_FILENAMES: tuple[str, ...] = (".mdterm.toml", ".mdterm.yaml", ".mdterm.yml", ".mdterm.json")
PYPROJECT_TOOL_SECTION = "mdterm"
