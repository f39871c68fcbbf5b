"""Tests for jsm.io module."""

from __future__ import annotations

import struct

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from jsm.errors import RawFormatError
from jsm.io import (
    HEADER_SIZE,
    BufferLoader,
    MatrixRenderer,
    parse_raw_header,
    read_raw,
    read_raw_file,
)
from jsm.matrix import Matrix


def make_raw(width, height, channels, type_tag, pixels, title=b"RAW", hint=b"test"):
    header = title.ljust(4, b"\x00") + hint.ljust(16, b"\x00")
    header += struct.pack("<6I", width, height, 8, type_tag, channels, 0)
    header = header.ljust(HEADER_SIZE, b"\x00")
    return header + pixels


class TestParseRawHeader:
    """Tests for parse_raw_header."""

    def test_fields(self):
        header = parse_raw_header(make_raw(3, 2, 1, 2, b"", hint=b"camera"))
        assert header.title == "RAW"
        assert header.hint == "camera"
        assert (header.width, header.height, header.channels) == (3, 2, 1)
        assert header.precision == 8
        assert header.element_type.value == "uint8"
        assert header.numel == 6

    def test_short(self):
        with pytest.raises(RawFormatError, match="64"):
            parse_raw_header(b"\x00" * 10)

    def test_unknown_tag(self):
        header = parse_raw_header(make_raw(1, 1, 1, 9, b""))
        with pytest.raises(RawFormatError, match="type tag"):
            header.element_type


class TestReadRaw:
    """Tests for read_raw."""

    def test_single_channel_uint8(self):
        m = read_raw(make_raw(3, 2, 1, 2, bytes(range(6))))
        assert m.get_size() == (2, 3)
        assert m.type() == "uint8"
        assert m.value([1, 2]) == 5
        assert m.to_numpy().tolist() == np.arange(6).reshape(2, 3).tolist()

    def test_multi_channel_int16(self):
        pixels = np.arange(12, dtype="<i2")
        m = read_raw(make_raw(3, 2, 2, 1, pixels.tobytes()))
        assert m.get_size() == (2, 3, 2)
        assert m.type() == "int16"
        expected = np.arange(12).reshape(2, 2, 3).transpose(1, 2, 0)
        assert m.to_numpy().tolist() == expected.tolist()

    def test_double(self):
        pixels = struct.pack("<2d", 1.5, -2.5)
        m = read_raw(make_raw(2, 1, 1, 14, pixels))
        assert m.get_size() == (1, 2)
        assert m.get_data().tolist() == [1.5, -2.5]

    def test_extra_bytes_ignored(self):
        m = read_raw(make_raw(1, 1, 1, 2, b"\x07\xff\xff"))
        assert m.get_data().tolist() == [7]

    def test_truncated(self):
        with pytest.raises(RawFormatError, match="expected"):
            read_raw(make_raw(4, 4, 1, 7, b"\x00" * 10))

    def test_unknown_tag(self):
        with pytest.raises(RawFormatError):
            read_raw(make_raw(1, 1, 1, 11, b"\x00" * 8))

    def test_buffer_loader(self):
        class Loader:
            def load_buffer(self):
                return make_raw(2, 2, 1, 3, struct.pack("<4b", -1, 2, -3, 4))

        loader = Loader()
        assert isinstance(loader, BufferLoader)
        m = read_raw(loader)
        assert m.to_numpy().tolist() == [[-1, 2], [-3, 4]]

    def test_read_raw_file(self, tmp_path):
        path = tmp_path / "frame.raw"
        path.write_bytes(make_raw(2, 1, 1, 6, struct.pack("<2I", 1, 2**32 - 1)))
        m = read_raw_file(path)
        assert m.type() == "uint32"
        assert m.get_data().tolist() == [1, 2**32 - 1]

    @given(
        st.integers(min_value=1, max_value=5),
        st.integers(min_value=1, max_value=5),
        st.integers(min_value=1, max_value=3),
    )
    @settings(max_examples=10)
    def test_layout_matches_row_major_planes(self, width, height, channels):
        pixels = np.arange(width * height * channels, dtype="<u2")
        m = read_raw(make_raw(width, height, channels, 0, pixels.tobytes()))
        expected = pixels.reshape(channels, height, width).transpose(1, 2, 0)
        assert m.to_numpy().reshape(expected.shape).tolist() == expected.tolist()


class TestMatrixRenderer:
    """Tests for the MatrixRenderer protocol."""

    def test_structural(self):
        class Collect:
            def __init__(self):
                self.seen = []

            def render_matrix(self, matrix):
                self.seen.append(matrix.get_size())

        sink = Collect()
        assert isinstance(sink, MatrixRenderer)
        sink.render_matrix(Matrix([2, 2]))
        assert sink.seen == [(2, 2)]
