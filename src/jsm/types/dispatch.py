"""Element types and typed-buffer dispatch.

Every Matrix stores its values in flat, homogeneously typed NumPy buffers.
This module owns the mapping from a logical element-type tag to a concrete
buffer dtype, the conversion rules used by casts, and the output type of
mixed-type binary operations.

The conversion rules follow native typed-array semantics rather than
NumPy's ``astype`` (whose float-to-int behaviour is undefined out of
range):

- floating targets widen or narrow with IEEE rounding;
- integer targets map NaN and infinities to 0, truncate toward zero, then
  wrap modulo ``2**bits``;
- ``uint8c`` (clamped) maps NaN to 0, saturates to ``[0, 255]`` and rounds
  half to even;
- ``logical`` maps every non-zero value (NaN included) to true.

References:
    - MATLAB numeric types: https://www.mathworks.com/help/matlab/numeric-types.html
    - NumPy dtypes: https://numpy.org/doc/stable/reference/arrays.dtypes.html

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np

from jsm.errors import SizeMismatchError, UnknownTypeError
from jsm.log import get_logger

logger = get_logger(__name__)


class ElementType(Enum):
    """Logical element type of a buffer, named as in MATLAB."""

    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    UINT8 = "uint8"
    UINT8C = "uint8c"
    UINT16 = "uint16"
    UINT32 = "uint32"
    SINGLE = "single"
    DOUBLE = "double"
    LOGICAL = "logical"

    @property
    def dtype(self) -> np.dtype:
        """NumPy dtype of buffers holding this type."""
        return _DTYPES[self]

    @property
    def isinteger(self) -> bool:
        return self in _INTEGER_TYPES

    @property
    def isfloat(self) -> bool:
        return self in (ElementType.SINGLE, ElementType.DOUBLE)

    @property
    def islogical(self) -> bool:
        return self is ElementType.LOGICAL


_DTYPES: dict[ElementType, np.dtype] = {
    ElementType.INT8: np.dtype(np.int8),
    ElementType.INT16: np.dtype(np.int16),
    ElementType.INT32: np.dtype(np.int32),
    ElementType.UINT8: np.dtype(np.uint8),
    ElementType.UINT8C: np.dtype(np.uint8),
    ElementType.UINT16: np.dtype(np.uint16),
    ElementType.UINT32: np.dtype(np.uint32),
    ElementType.SINGLE: np.dtype(np.float32),
    ElementType.DOUBLE: np.dtype(np.float64),
    ElementType.LOGICAL: np.dtype(np.bool_),
}

_INTEGER_TYPES = frozenset(
    {
        ElementType.INT8,
        ElementType.INT16,
        ElementType.INT32,
        ElementType.UINT8,
        ElementType.UINT8C,
        ElementType.UINT16,
        ElementType.UINT32,
    }
)

_ALIASES: dict[str, ElementType] = {
    "double": ElementType.DOUBLE,
    "float64": ElementType.DOUBLE,
    "float64array": ElementType.DOUBLE,
    "single": ElementType.SINGLE,
    "float": ElementType.SINGLE,
    "float32": ElementType.SINGLE,
    "float32array": ElementType.SINGLE,
    "int8": ElementType.INT8,
    "int8array": ElementType.INT8,
    "int16": ElementType.INT16,
    "int16array": ElementType.INT16,
    "int32": ElementType.INT32,
    "int32array": ElementType.INT32,
    "uint8": ElementType.UINT8,
    "uint8array": ElementType.UINT8,
    "uint8c": ElementType.UINT8C,
    "uint8clampedarray": ElementType.UINT8C,
    "canvaspixelarray": ElementType.UINT8C,
    "uint16": ElementType.UINT16,
    "uint16array": ElementType.UINT16,
    "uint32": ElementType.UINT32,
    "uint32array": ElementType.UINT32,
    "logical": ElementType.LOGICAL,
    "bool": ElementType.LOGICAL,
    "boolean": ElementType.LOGICAL,
}

_UNSUPPORTED = frozenset({"int64", "uint64"})

# uint8 dtype maps back to plain uint8; clamping is carried by the tag.
_FROM_DTYPE: dict[np.dtype, ElementType] = {
    dtype: element_type
    for element_type, dtype in _DTYPES.items()
    if element_type is not ElementType.UINT8C
}


def parse_type(name: Any) -> ElementType:
    """Resolve a type tag to an :class:`ElementType`.

    Args:
        name: An ElementType, a case-insensitive type name or alias
            (``"double"``, ``"Float32Array"``, ``"bool"``, ...), or a NumPy
            dtype / scalar type.

    Returns:
        The matching element type.

    Raises:
        UnknownTypeError: If the tag is not recognised or not supported.

    Examples:
        >>> parse_type("Logical") is parse_type("bool")
        True
        >>> parse_type("Uint8ClampedArray")
        <ElementType.UINT8C: 'uint8c'>

    """
    if isinstance(name, ElementType):
        return name
    if isinstance(name, str):
        key = name.strip().lower()
        if key in _UNSUPPORTED:
            raise UnknownTypeError(f"parse_type: {name!r} is not supported")
        try:
            return _ALIASES[key]
        except KeyError:
            raise UnknownTypeError(f"parse_type: unknown type {name!r}") from None
    if name is None:
        raise UnknownTypeError("parse_type: missing type")
    try:
        dtype = np.dtype(name)
    except TypeError:
        raise UnknownTypeError(f"parse_type: unknown type {name!r}") from None
    return element_type_of(dtype)


def element_type_of(dtype: Any) -> ElementType:
    """Element type of a NumPy dtype.

    ``uint8`` buffers map to :attr:`ElementType.UINT8`; the clamped variant
    is only reachable through an explicit tag.

    Raises:
        UnknownTypeError: For dtypes without a counterpart (int64, complex...).
    """
    dtype = np.dtype(dtype)
    try:
        return _FROM_DTYPE[dtype.newbyteorder("=")]
    except KeyError:
        raise UnknownTypeError(f"element_type_of: unsupported dtype {dtype}") from None


def cast_buffer(buffer: Any, element_type: Any) -> np.ndarray:
    """Convert a buffer to another element type.

    Always allocates, even when the source already has the target dtype.
    A ``logical`` target keeps the typed-array truth rule: every non-zero
    value is true, so NaN and negative values become true as well.

    Args:
        buffer: Flat array-like of real values.
        element_type: Destination type tag.

    Returns:
        New 1-D buffer of the destination dtype.

    Examples:
        >>> import numpy as np
        >>> src = np.array([300.0, -1.5, np.nan])
        >>> cast_buffer(src, "uint8c").tolist()
        [255, 0, 0]
        >>> cast_buffer(src, "int8").tolist()
        [44, -1, 0]

    """
    target = parse_type(element_type)
    src = np.asarray(buffer)
    if src.dtype == np.bool_:
        src = src.astype(np.uint8)

    if target.isfloat:
        out = src.astype(target.dtype)
    elif target.islogical:
        out = np.asarray(src != 0, dtype=np.bool_)
    elif target is ElementType.UINT8C:
        if src.dtype.kind == "f":
            out = np.rint(np.clip(np.nan_to_num(src, nan=0.0), 0, 255)).astype(np.uint8)
        else:
            out = np.clip(src.astype(np.int64), 0, 255).astype(np.uint8)
    elif src.dtype.kind == "f":
        values = src.astype(np.float64)
        with np.errstate(invalid="ignore"):
            values = np.where(np.isfinite(values), np.trunc(values), 0.0)
        # fmod keeps the value exact and inside int64 before wrapping
        out = np.fmod(values, 2.0**32).astype(np.int64).astype(target.dtype)
    else:
        out = src.astype(np.int64).astype(target.dtype)

    logger.debug("cast %d element(s) %s -> %s", out.size, src.dtype, target.value)
    return out


@dataclass(frozen=True)
class BufferFactory:
    """Builds flat buffers of one element type."""

    element_type: ElementType

    @property
    def dtype(self) -> np.dtype:
        return self.element_type.dtype

    def zeros(self, length: int) -> np.ndarray:
        """Zero-filled buffer of ``length`` elements."""
        return np.zeros(int(length), dtype=self.dtype)

    def from_array(self, source: Any) -> np.ndarray:
        """Buffer holding ``source`` (flattened column-major), cast as needed."""
        values = np.ravel(np.asarray(source), order="F")
        if values.dtype.kind == "c":
            raise UnknownTypeError("from_array: complex values need separate real/imag buffers")
        return cast_buffer(values, self.element_type)

    def from_bytes(self, raw: bytes | bytearray | memoryview, byte_offset: int = 0, count: int = -1) -> np.ndarray:
        """Buffer decoded from a little-endian byte region.

        Args:
            raw: Source bytes.
            byte_offset: Offset of the first element, in bytes.
            count: Number of elements to read; ``-1`` reads to the end.

        Returns:
            Writable native-order copy of the decoded elements.

        Raises:
            SizeMismatchError: If the region is too short or misaligned.
        """
        try:
            view = np.frombuffer(raw, dtype=self.dtype.newbyteorder("<"), count=count, offset=byte_offset)
        except ValueError as err:
            raise SizeMismatchError(f"from_bytes: {err}") from err
        return view.astype(self.dtype)


def buffer_factory(element_type: Any) -> BufferFactory:
    """Return the buffer factory for a type tag.

    Examples:
        >>> buffer_factory("int16").zeros(3).tolist()
        [0, 0, 0]

    """
    return BufferFactory(parse_type(element_type))


def result_type(a: Any, b: Any) -> ElementType:
    """Output element type of a binary operation on types ``a`` and ``b``.

    Integer operands win (the left one when both are integer), then
    ``single`` wins over ``double``; every other pairing gives ``double``.

    Examples:
        >>> result_type("double", "uint8").value
        'uint8'
        >>> result_type("single", "double").value
        'single'
        >>> result_type("logical", "logical").value
        'double'

    """
    a, b = parse_type(a), parse_type(b)
    if a.isinteger:
        return a
    if b.isinteger:
        return b
    if ElementType.SINGLE in (a, b):
        return ElementType.SINGLE
    return ElementType.DOUBLE


def intmin(element_type: Any) -> int:
    """Smallest value of an integer type."""
    t = parse_type(element_type)
    if not t.isinteger:
        raise UnknownTypeError(f"intmin: {t.value} is not an integer type")
    return int(np.iinfo(t.dtype).min)


def intmax(element_type: Any) -> int:
    """Largest value of an integer type."""
    t = parse_type(element_type)
    if not t.isinteger:
        raise UnknownTypeError(f"intmax: {t.value} is not an integer type")
    return int(np.iinfo(t.dtype).max)


def realmin(element_type: Any = ElementType.DOUBLE) -> float:
    """Smallest positive normalised value of a floating type."""
    t = parse_type(element_type)
    if not t.isfloat:
        raise UnknownTypeError(f"realmin: {t.value} is not a floating type")
    return float(np.finfo(t.dtype).tiny)


def realmax(element_type: Any = ElementType.DOUBLE) -> float:
    """Largest finite value of a floating type."""
    t = parse_type(element_type)
    if not t.isfloat:
        raise UnknownTypeError(f"realmax: {t.value} is not a floating type")
    return float(np.finfo(t.dtype).max)
