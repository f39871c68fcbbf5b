"""Packed RAW image reader.

Layout (little-endian, 64-byte header):

====== ====== ==========================================================
offset bytes  field
====== ====== ==========================================================
0      4      title (ASCII)
4      16     hint (ASCII)
20     24     six uint32: width, height, precision, type tag,
              channel count, reserved
44     20     padding
64     ...    pixels, row-major (channel, row, column from slowest)
====== ====== ==========================================================

Pixels are decoded as a ``[width, height, channels]`` column-major matrix
and permuted to ``[height, width, channels]``.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from jsm.errors import RawFormatError
from jsm.log import get_logger
from jsm.matrix import Matrix
from jsm.types import ElementType, buffer_factory

logger = get_logger(__name__)

HEADER_SIZE = 64

_INFO = struct.Struct("<6I")

TYPE_TAGS: dict[int, ElementType] = {
    0: ElementType.UINT16,
    1: ElementType.INT16,
    2: ElementType.UINT8,
    3: ElementType.INT8,
    4: ElementType.UINT16,
    5: ElementType.INT16,
    6: ElementType.UINT32,
    7: ElementType.INT32,
    13: ElementType.SINGLE,
    14: ElementType.DOUBLE,
}


@runtime_checkable
class BufferLoader(Protocol):
    """Source of raw bytes (file, camera frame, network payload...)."""

    def load_buffer(self) -> bytes: ...


@runtime_checkable
class MatrixRenderer(Protocol):
    """Sink that displays or stores a matrix."""

    def render_matrix(self, matrix: Matrix) -> None: ...


@dataclass(frozen=True)
class RawHeader:
    title: str
    hint: str
    width: int
    height: int
    precision: int
    type_tag: int
    channels: int
    reserved: int

    @property
    def element_type(self) -> ElementType:
        try:
            return TYPE_TAGS[self.type_tag]
        except KeyError:
            raise RawFormatError(f"read_raw: unsupported type tag {self.type_tag}") from None

    @property
    def numel(self) -> int:
        return self.width * self.height * self.channels


def _text(raw: bytes) -> str:
    return raw.decode("latin-1").rstrip("\x00")


def parse_raw_header(data: bytes) -> RawHeader:
    """Decode the 64-byte header.

    Raises:
        RawFormatError: If fewer than 64 bytes are given.
    """
    if len(data) < HEADER_SIZE:
        raise RawFormatError(f"parse_raw_header: need {HEADER_SIZE} bytes, got {len(data)}")
    width, height, precision, type_tag, channels, reserved = _INFO.unpack_from(data, 20)
    header = RawHeader(
        title=_text(bytes(data[0:4])),
        hint=_text(bytes(data[4:20])),
        width=width,
        height=height,
        precision=precision,
        type_tag=type_tag,
        channels=channels,
        reserved=reserved,
    )
    logger.debug(
        "RAW %r (%s): %dx%d, %d channel(s), type tag %d, precision %d",
        header.title,
        header.hint,
        width,
        height,
        channels,
        type_tag,
        precision,
    )
    return header


def read_raw(source: bytes | bytearray | memoryview | BufferLoader) -> Matrix:
    """Decode a packed RAW image into a ``[height, width, channels]`` matrix.

    Args:
        source: Raw bytes, or a :class:`BufferLoader` providing them.

    Raises:
        RawFormatError: On a short header, unknown type tag or truncated
            pixel data.
    """
    data = source.load_buffer() if isinstance(source, BufferLoader) else source
    header = parse_raw_header(data)
    element_type = header.element_type
    needed = header.numel * element_type.dtype.itemsize
    if len(data) - HEADER_SIZE < needed:
        raise RawFormatError(
            f"read_raw: {len(data) - HEADER_SIZE} byte(s) of pixels, expected {needed}"
        )
    pixels = buffer_factory(element_type).from_bytes(data, HEADER_SIZE, header.numel)
    image = Matrix([header.width, header.height, header.channels], pixels, element_type)
    return image.permute([1, 0, 2])


def read_raw_file(path: str | Path) -> Matrix:
    """Read a RAW image from disk."""
    return read_raw(Path(path).read_bytes())
