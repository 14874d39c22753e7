#  Copyright (c) 2025 Tom Villani, Ph.D.
# mdterm/options/markdown.py
"""Configuration options for markdown parsing.

This module defines options for parsing markdown into the AST.
"""

from dataclasses import dataclass, field

from mdterm.options.base import BaseParserOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for markdown-to-AST parsing.

    Parameters
    ----------
    parse_tables : bool, default False
        Recognise GFM tables. Tables have no terminal rendering, so enabling
        this removes table source text from the output instead of showing it
        as paragraphs.
    parse_strikethrough : bool, default False
        Recognise ``~~strikethrough~~`` spans (rendered to nothing).
    parse_entities : bool, default True
        Split character entity references (``&gt;``, ``&#65;``) out of text
        into Entity nodes so the renderer can decode them. When False they
        stay in the surrounding text and are printed verbatim.

    """

    parse_tables: bool = field(
        default=False,
        metadata={"help": "Parse GFM tables"},
    )
    parse_strikethrough: bool = field(
        default=False,
        metadata={"help": "Parse ~~strikethrough~~ spans"},
    )
    parse_entities: bool = field(
        default=True,
        metadata={
            "help": "Decode character entity references",
            "cli_name": "no-parse-entities",
        },
    )

    def __post_init__(self) -> None:
        """Validate options by calling parent validation."""
        super().__post_init__()
