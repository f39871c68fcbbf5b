"""Adapters between matrices and the outside world.

Only the packed RAW image format is decoded here. Other sources and sinks
(files, cameras, canvases) plug in through the narrow
:class:`BufferLoader` and :class:`MatrixRenderer` protocols.
"""

from jsm.io.raw import (
    HEADER_SIZE,
    TYPE_TAGS,
    BufferLoader,
    MatrixRenderer,
    RawHeader,
    parse_raw_header,
    read_raw,
    read_raw_file,
)

__all__ = [
    "HEADER_SIZE",
    "TYPE_TAGS",
    "BufferLoader",
    "MatrixRenderer",
    "RawHeader",
    "parse_raw_header",
    "read_raw",
    "read_raw_file",
]
