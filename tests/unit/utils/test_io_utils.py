#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/utils/test_io_utils.py
"""Unit tests for input reading and output writing helpers."""

import io

import pytest

from mdterm.utils.io_utils import read_stream, write_content


class ShortWriter(io.RawIOBase):
    """Binary stream accepting at most ``limit`` bytes per write."""

    def __init__(self, limit):
        self.limit = limit
        self.data = bytearray()

    def writable(self):
        return True

    def write(self, b):
        accepted = bytes(b[: self.limit])
        self.data.extend(accepted)
        return len(accepted)


class BlockedWriter(io.RawIOBase):
    """Non-blocking binary stream that cannot take any data."""

    def writable(self):
        return True

    def write(self, b):
        return None


@pytest.mark.unit
class TestReadStream:
    """Tests for reading a stream to exhaustion."""

    def test_reads_everything(self) -> None:
        data = bytes(range(256)) * 20
        assert read_stream(io.BytesIO(data), unit=100) == data

    def test_empty_stream(self) -> None:
        assert read_stream(io.BytesIO(b"")) == b""

    def test_input_larger_than_unit(self) -> None:
        assert read_stream(io.BytesIO(b"x" * 5000)) == b"x" * 5000


@pytest.mark.unit
class TestWriteContent:
    """Tests for writing rendered bytes."""

    def test_binary_stream(self) -> None:
        out = io.BytesIO()
        assert write_content(b"\x1b[1mhi", out) == 6
        assert out.getvalue() == b"\x1b[1mhi"

    def test_short_write_is_reported(self) -> None:
        out = ShortWriter(3)
        assert write_content(b"abcdef", out) == 3
        assert bytes(out.data) == b"abc"

    def test_blocked_stream_counts_zero(self) -> None:
        assert write_content(b"abc", BlockedWriter()) == 0

    def test_text_stream(self) -> None:
        out = io.StringIO()
        assert write_content("héllo".encode("utf-8"), out) == 6
        assert out.getvalue() == "héllo"

    def test_text_stream_keeps_undecodable_bytes(self) -> None:
        out = io.StringIO()
        write_content(b"a\xffb", out)
        assert out.getvalue().encode("utf-8", errors="surrogateescape") == b"a\xffb"

    def test_path(self, tmp_path) -> None:
        target = tmp_path / "out.txt"
        assert write_content(b"abc\n", target) == 4
        assert target.read_bytes() == b"abc\n"

    def test_string_path(self, tmp_path) -> None:
        target = tmp_path / "out.txt"
        write_content(b"abc", str(target))
        assert target.read_bytes() == b"abc"

    def test_rejects_text_content(self) -> None:
        with pytest.raises(TypeError, match="Content must be bytes"):
            write_content("text", io.BytesIO())  # type: ignore[arg-type]

    def test_rejects_unknown_output(self) -> None:
        with pytest.raises(TypeError, match="Unsupported output type"):
            write_content(b"abc", 42)  # type: ignore[arg-type]
