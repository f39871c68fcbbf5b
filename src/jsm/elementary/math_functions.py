"""Unary elementary functions: roots, exponentials, logarithms, rounding and
trigonometry.

Every function has an in-place form backing the Matrix method of the same
name (``m.sqrt()`` returns ``None``) and a copying form exported from
:mod:`jsm.elementary` (``sqrt(m)`` returns a new matrix). Values are
computed in float64, or complex128 for a complex matrix, and stored back
with the element type's cast rule, so ``sqrt`` of an ``int16`` matrix stays
``int16``.

A real matrix stays real: ``sqrt(-1)`` and ``log(-1)`` give NaN instead of
switching to complex. Convert with ``Matrix.complex`` first to get the
complex branch. ``floor``, ``ceil`` and ``round`` act on each part of a
complex value; ``sign`` of a complex value is ``z / abs(z)``.

References:
    - MATLAB elementary math: https://www.mathworks.com/help/matlab/elementary-math.html
    - NumPy mathematical functions: https://numpy.org/doc/stable/reference/routines.math.html

"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import numpy as np

from jsm.log import get_logger
from jsm.types import cast_buffer

if TYPE_CHECKING:
    from jsm.matrix import Matrix

logger = get_logger(__name__)


def _round_half_away(x: np.ndarray) -> np.ndarray:
    return np.sign(x) * np.floor(np.abs(x) + 0.5)


def _sign(x: np.ndarray) -> np.ndarray:
    if np.iscomplexobj(x):
        magnitude = np.abs(x)
        return np.where(magnitude == 0, 0, x / np.where(magnitude == 0, 1, magnitude))
    return np.sign(x)


def _by_part(fn: Callable[[np.ndarray], np.ndarray]) -> Callable[[np.ndarray], np.ndarray]:
    def apply(x: np.ndarray) -> np.ndarray:
        if not np.iscomplexobj(x):
            return fn(x)
        out = np.empty(x.shape, dtype=np.complex128)
        out.real = fn(x.real)
        out.imag = fn(x.imag)
        return out

    return apply


_KERNELS: dict[str, Callable[[np.ndarray], np.ndarray]] = {
    "sqrt": np.sqrt,
    "exp": np.exp,
    "log": np.log,
    "log2": np.log2,
    "log10": np.log10,
    "floor": _by_part(np.floor),
    "ceil": _by_part(np.ceil),
    "round": _by_part(_round_half_away),
    "sign": _sign,
    "sin": np.sin,
    "cos": np.cos,
    "tan": np.tan,
    "asin": np.arcsin,
    "acos": np.arccos,
    "atan": np.arctan,
}


def apply_inplace(m: Matrix, name: str) -> None:
    """Replace each element of ``m`` by ``name(element)``.

    Args:
        m: Matrix to update.
        name: Key of the function, e.g. ``"sqrt"``.

    Raises:
        KeyError: If ``name`` is not a known function.
        ReadOnlyBufferError: If a buffer is not writable.
    """
    fn = _KERNELS[name]
    m._check_writeable(name)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        if m.isreal():
            data = m.get_data()
            data[...] = cast_buffer(fn(data.astype(np.float64)), m.element_type)
        else:
            re, im = m.get_real_data(), m.get_imag_data()
            z = np.empty(re.shape, dtype=np.complex128)
            z.real = re
            z.imag = im
            out = fn(z)
            re[...] = cast_buffer(out.real, m.element_type)
            im[...] = cast_buffer(out.imag, m.element_type)
    logger.debug("%s on %d element(s) of type %s", name, m.numel(), m.type())


def _copying(name: str, doc: str) -> Callable[[Matrix], Matrix]:
    def function(m: Matrix) -> Matrix:
        out = m.get_copy()
        apply_inplace(out, name)
        return out

    function.__name__ = function.__qualname__ = name
    function.__doc__ = doc
    return function


def sqrt(m: Matrix) -> Matrix:
    """Square root of a copy of ``m``.

    Examples:
        >>> from jsm.matrix import Matrix
        >>> sqrt(Matrix([1, 3], [4, 9, -1])).get_data().tolist()
        [2.0, 3.0, nan]
        >>> z = sqrt(Matrix([1, 1], [-4 + 0j]))
        >>> z.value(0)
        2j

    """
    out = m.get_copy()
    apply_inplace(out, "sqrt")
    return out


def round(m: Matrix) -> Matrix:  # noqa: A001
    """Round to the nearest integer, halves away from zero.

    Examples:
        >>> from jsm.matrix import Matrix
        >>> round(Matrix([1, 4], [0.5, 1.5, 2.5, -0.5])).get_data().tolist()
        [1.0, 2.0, 3.0, -1.0]

    """
    out = m.get_copy()
    apply_inplace(out, "round")
    return out


exp = _copying("exp", "Exponential of a copy of ``m``.")
log = _copying("log", "Natural logarithm of a copy of ``m``; NaN for negative real values.")
log2 = _copying("log2", "Base 2 logarithm of a copy of ``m``.")
log10 = _copying("log10", "Base 10 logarithm of a copy of ``m``.")
floor = _copying("floor", "Round toward minus infinity.")
ceil = _copying("ceil", "Round toward plus infinity.")
sign = _copying("sign", "Signum: -1, 0 or 1, and ``z / abs(z)`` for complex values.")
sin = _copying("sin", "Sine, in radians.")
cos = _copying("cos", "Cosine, in radians.")
tan = _copying("tan", "Tangent, in radians.")
asin = _copying("asin", "Inverse sine; NaN outside [-1, 1] for real values.")
acos = _copying("acos", "Inverse cosine; NaN outside [-1, 1] for real values.")
atan = _copying("atan", "Inverse tangent.")
