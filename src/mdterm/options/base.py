"""Base classes for parser and renderer options.

This module defines the foundation classes for the options used by the
markdown parser and the terminal renderer.
"""

from __future__ import annotations

import codecs
import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from mdterm.constants import DEFAULT_ENCODING


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


def _validate_encoding(encoding: str) -> None:
    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise ValueError(f"Unknown text encoding: {encoding!r}") from e


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all renderer options.

    Parameters
    ----------
    encoding : str, default="utf-8"
        Encoding used to turn document text into output bytes. Undecodable
        input bytes are carried through unchanged.

    """

    encoding: str = field(
        default=DEFAULT_ENCODING,
        metadata={"help": "Encoding used for rendered text", "type": str},
    )

    def __post_init__(self) -> None:
        """Validate base renderer options.

        Raises
        ------
        ValueError
            If the encoding is not known to Python.

        """
        _validate_encoding(self.encoding)


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for all parser options.

    Parameters
    ----------
    encoding : str, default="utf-8"
        Encoding used to decode byte input before parsing

    """

    encoding: str = field(
        default=DEFAULT_ENCODING,
        metadata={"help": "Encoding used to decode input bytes", "type": str},
    )

    def __post_init__(self) -> None:
        """Validate base parser options."""
        _validate_encoding(self.encoding)
