"""Type conversion and IEEE predicates on matrices.

``cast`` produces a new matrix of the same size, converting both parts of
a complex matrix with the destination type's rule (see
:func:`jsm.types.cast_buffer`). ``isnan``, ``isinf`` and ``isfinite``
return logical matrices of the same size.

For complex input each predicate is the OR of the per-component result.
For ``isfinite`` this means a value with one infinite component still
reports finite, which differs from the usual complex definition; callers
that need the strict form can combine ``isfinite(real(m))`` and
``isfinite(imag(m))``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np

from jsm.types import ElementType, cast_buffer, parse_type

if TYPE_CHECKING:
    from jsm.matrix import Matrix


def cast(m: Matrix, element_type: Any) -> Matrix:
    """New matrix holding ``m`` converted to ``element_type``.

    Examples:
        >>> from jsm.matrix import Matrix
        >>> m = Matrix([1, 2], [300, -7.9])
        >>> m.cast("uint8c").get_data().tolist()
        [255, 0]
        >>> m.cast("int8").get_data().tolist()
        [44, -7]

    """
    target = parse_type(element_type)
    imag = None if m.isreal() else cast_buffer(m.get_imag_data(), target)
    return type(m)(m.get_size(), cast_buffer(m.get_data(), target), target, imag=imag)


def _predicate(m: Matrix, fn: Any, default: bool) -> Matrix:
    def test(data: np.ndarray) -> np.ndarray:
        if data.dtype.kind != "f":
            return np.full(data.shape, default, dtype=np.bool_)
        return fn(data)

    out = test(m.get_data())
    if not m.isreal():
        out = out | test(m.get_imag_data())
    return type(m)(m.get_size(), out, ElementType.LOGICAL)


def isnan(m: Matrix) -> Matrix:
    """Logical matrix, true where an element is NaN."""
    return _predicate(m, np.isnan, False)


def isinf(m: Matrix) -> Matrix:
    """Logical matrix, true where an element is infinite."""
    return _predicate(m, np.isinf, False)


def isfinite(m: Matrix) -> Matrix:
    """Logical matrix, true where an element is finite.

    Complex elements are finite when either component is finite.
    """
    return _predicate(m, np.isfinite, True)
