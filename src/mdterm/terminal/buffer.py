#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/terminal/buffer.py
"""Growable byte buffer used for input and rendered output.

The buffer keeps an explicit capacity next to its size so that readers can
be handed a writable region that is guaranteed to fit (see ``read_from``).
Capacity only ever grows, by doubling, in multiples of the buffer's unit.

"""

from __future__ import annotations

from typing import IO, Optional

from mdterm.constants import OUTPUT_UNIT


class OutputBuffer:
    """Growable byte sequence with ``size <= capacity``.

    Parameters
    ----------
    unit : int, default OUTPUT_UNIT
        Allocation unit; the first allocation is one unit and later ones
        double the capacity until the request fits.

    Examples
    --------
        >>> buf = OutputBuffer()
        >>> buf.put(b"hello")
        >>> buf.putc(ord("!"))
        >>> buf.getvalue()
        b'hello!'
        >>> buf.capacity
        64

    """

    __slots__ = ("unit", "_data", "_size")

    def __init__(self, unit: int = OUTPUT_UNIT) -> None:
        """Initialize an empty buffer with no storage allocated."""
        if unit <= 0:
            raise ValueError(f"Buffer unit must be positive, got {unit}")
        self.unit = unit
        self._data = bytearray()
        self._size = 0

    @property
    def size(self) -> int:
        """Number of bytes currently held."""
        return self._size

    @property
    def capacity(self) -> int:
        """Number of bytes allocated."""
        return len(self._data)

    def __len__(self) -> int:
        return self._size

    def __bytes__(self) -> bytes:
        return self.getvalue()

    def __repr__(self) -> str:
        return f"OutputBuffer(size={self._size}, capacity={self.capacity}, unit={self.unit})"

    def grow(self, needed: int) -> None:
        """Ensure the capacity is at least ``needed`` bytes.

        Parameters
        ----------
        needed : int
            Minimum capacity required

        """
        capacity = len(self._data)
        if needed <= capacity:
            return
        new_capacity = capacity or self.unit
        while new_capacity < needed:
            new_capacity *= 2
        self._data.extend(bytes(new_capacity - capacity))

    def put(self, data: bytes) -> None:
        """Append a run of bytes."""
        if not data:
            return
        end = self._size + len(data)
        self.grow(end)
        self._data[self._size : end] = data
        self._size = end

    def putc(self, byte: int) -> None:
        """Append a single byte given as an integer (0-255)."""
        self.grow(self._size + 1)
        self._data[self._size] = byte
        self._size += 1

    def getvalue(self) -> bytes:
        """Return the held bytes as an immutable copy."""
        return bytes(self._data[: self._size])

    def read_from(self, stream: IO[bytes], chunk: Optional[int] = None) -> int:
        """Read one chunk from a binary stream straight into free capacity.

        The buffer is grown *before* the read so that ``chunk`` free bytes are
        always available and the stream never writes past capacity.

        Parameters
        ----------
        stream : IO[bytes]
            Binary stream supporting ``readinto``
        chunk : int, optional
            Bytes to make room for; defaults to the buffer unit

        Returns
        -------
        int
            Number of bytes read; 0 at end of stream

        """
        chunk = chunk or self.unit
        self.grow(self._size + chunk)
        with memoryview(self._data) as view:
            count = stream.readinto(view[self._size : self._size + chunk])  # type: ignore[attr-defined]
        if not count:
            return 0
        self._size += count
        return count
