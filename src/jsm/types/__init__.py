"""Element types and typed-buffer dispatch.

A Matrix buffer is a flat NumPy array whose dtype is chosen from a logical
element-type tag. Tags are parsed case-insensitively and accept the MATLAB
names as well as typed-array aliases ("bool", "logical" and "boolean" all
name the same type).

Casts always allocate a new buffer and follow native typed-array
conversion: saturation for ``uint8c``, truncate-and-wrap for the other
integer types.
"""

from jsm.types.dispatch import (
    BufferFactory,
    ElementType,
    buffer_factory,
    cast_buffer,
    element_type_of,
    intmax,
    intmin,
    parse_type,
    realmax,
    realmin,
    result_type,
)

__all__ = [
    "ElementType",
    "BufferFactory",
    "parse_type",
    "element_type_of",
    "buffer_factory",
    "cast_buffer",
    "result_type",
    "intmin",
    "intmax",
    "realmin",
    "realmax",
]
