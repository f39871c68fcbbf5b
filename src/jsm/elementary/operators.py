"""Elementwise arithmetic, comparisons and logical operators with MATLAB-style
singleton broadcasting.

Operands are matrices or scalars. Sizes are compatible when every
dimension is equal or one of them is 1; trailing dimensions are padded
with 1. Values are computed in double precision (complex when either
operand is complex) and the result is stored in the type given by
:func:`jsm.types.result_type`, using that type's cast rule. Comparisons
and logical operators return ``logical`` matrices; ordering comparisons and
the logical operators reject complex operands.

Examples:
    >>> from jsm.matrix import Matrix
    >>> a = Matrix([2, 2], [1, 2, 3, 4])
    >>> row = Matrix([1, 2], [10, 20])
    >>> plus(a, row).get_data().tolist()
    [11.0, 12.0, 23.0, 24.0]

"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import numpy as np

from jsm.errors import NotComplexError, SizeMismatchError
from jsm.types import ElementType, cast_buffer, result_type
from jsm.view import check_size

if TYPE_CHECKING:
    from jsm.matrix import Matrix


def _operand(x: Any) -> tuple[tuple[int, ...], ElementType, np.ndarray]:
    from jsm.matrix import Matrix

    if isinstance(x, Matrix):
        values = x.to_numpy()
        dtype = np.float64 if x.isreal() else np.complex128
        return x.get_size(), x.element_type, values.astype(dtype)
    if np.ndim(x) != 0:
        raise TypeError(f"expected a Matrix or a scalar, got {type(x).__name__}")
    value = np.asarray(x)
    dtype = np.complex128 if np.iscomplexobj(value) else np.float64
    return (1, 1), ElementType.DOUBLE, value.astype(dtype).reshape(1, 1)


def _broadcast_size(a: tuple[int, ...], b: tuple[int, ...], name: str) -> tuple[int, ...]:
    n = max(len(a), len(b))
    a = a + (1,) * (n - len(a))
    b = b + (1,) * (n - len(b))
    size = []
    for sa, sb in zip(a, b):
        if sa != sb and sa != 1 and sb != 1:
            raise SizeMismatchError(f"{name}: sizes {a} and {b} are not compatible")
        size.append(sb if sa == 1 else sa)
    return tuple(size)


def _binary(
    name: str,
    fn: Callable[[np.ndarray, np.ndarray], np.ndarray],
    a: Any,
    b: Any,
    output: ElementType | None = None,
    real_only: bool = False,
) -> Matrix:
    from jsm.matrix import Matrix

    size_a, type_a, values_a = _operand(a)
    size_b, type_b, values_b = _operand(b)
    if real_only and (np.iscomplexobj(values_a) or np.iscomplexobj(values_b)):
        raise NotComplexError(f"{name}: this function only works with real values")
    size = _broadcast_size(size_a, size_b, name)
    n = len(size)
    values_a = values_a.reshape(size_a + (1,) * (n - len(size_a)), order="F")
    values_b = values_b.reshape(size_b + (1,) * (n - len(size_b)), order="F")

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        out = np.broadcast_to(fn(values_a, values_b), size).ravel(order="F")

    target = output if output is not None else result_type(type_a, type_b)
    cls = type(a) if isinstance(a, Matrix) else type(b) if isinstance(b, Matrix) else Matrix
    if np.iscomplexobj(out):
        return cls(check_size(size), cast_buffer(out.real, target), target, imag=cast_buffer(out.imag, target))
    return cls(check_size(size), cast_buffer(out, target), target)


def plus(a: Any, b: Any) -> Matrix:
    """Elementwise ``a + b``."""
    return _binary("plus", np.add, a, b)


def minus(a: Any, b: Any) -> Matrix:
    """Elementwise ``a - b``."""
    return _binary("minus", np.subtract, a, b)


def times(a: Any, b: Any) -> Matrix:
    """Elementwise ``a .* b``."""
    return _binary("times", np.multiply, a, b)


def rdivide(a: Any, b: Any) -> Matrix:
    """Elementwise ``a ./ b``.

    Division by zero gives infinities for floating results and 0 for
    integer results.
    """
    return _binary("rdivide", np.true_divide, a, b)


def ldivide(a: Any, b: Any) -> Matrix:
    """Elementwise ``a .\\ b``, that is ``b ./ a``; the output type is the one of ``plus(a, b)``."""
    return _binary("ldivide", lambda x, y: y / x, a, b)


def power(a: Any, b: Any) -> Matrix:
    """Elementwise ``a .^ b``.

    A negative real base with a fractional exponent gives NaN; pass a
    complex operand to get the complex root.

    Examples:
        >>> from jsm.matrix import Matrix
        >>> power(Matrix([1, 3], [1, 2, 3]), 2).get_data().tolist()
        [1.0, 4.0, 9.0]

    """
    return _binary("power", np.power, a, b)


def atan2(y: Any, x: Any) -> Matrix:
    """Four-quadrant arctangent of ``y ./ x``, real operands only."""
    return _binary("atan2", np.arctan2, y, x, real_only=True)


# Comparisons and logical operators always produce a logical matrix.


def eq(a: Any, b: Any) -> Matrix:
    """Elementwise ``a == b``; complex values compare both parts."""
    return _binary("eq", np.equal, a, b, output=ElementType.LOGICAL)


def ne(a: Any, b: Any) -> Matrix:
    """Elementwise ``a ~= b``."""
    return _binary("ne", np.not_equal, a, b, output=ElementType.LOGICAL)


def lt(a: Any, b: Any) -> Matrix:
    """Elementwise ``a < b``.

    Raises:
        NotComplexError: If either operand is complex.
    """
    return _binary("lt", np.less, a, b, output=ElementType.LOGICAL, real_only=True)


def le(a: Any, b: Any) -> Matrix:
    return _binary("le", np.less_equal, a, b, output=ElementType.LOGICAL, real_only=True)


def gt(a: Any, b: Any) -> Matrix:
    return _binary("gt", np.greater, a, b, output=ElementType.LOGICAL, real_only=True)


def ge(a: Any, b: Any) -> Matrix:
    return _binary("ge", np.greater_equal, a, b, output=ElementType.LOGICAL, real_only=True)


def and_(a: Any, b: Any) -> Matrix:
    """Elementwise logical AND; any non-zero value, NaN included, is true."""
    return _binary("and", np.logical_and, a, b, output=ElementType.LOGICAL, real_only=True)


def or_(a: Any, b: Any) -> Matrix:
    """Elementwise logical OR."""
    return _binary("or", np.logical_or, a, b, output=ElementType.LOGICAL, real_only=True)


def not_(a: Any) -> Matrix:
    """Elementwise logical NOT of a real matrix or scalar.

    Examples:
        >>> from jsm.matrix import Matrix
        >>> not_(Matrix([1, 3], [0, 2, -1])).get_data().tolist()
        [True, False, False]

    """
    return _binary(
        "not", lambda x, _: np.logical_not(x), a, False, output=ElementType.LOGICAL, real_only=True
    )
