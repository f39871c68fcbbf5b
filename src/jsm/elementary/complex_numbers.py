"""Complex-number elementwise operations.

Each operation has a real-buffer kernel and a complex dual-buffer kernel,
selected by ``isreal()``. The ``*_inplace`` functions back the Matrix
instance methods and mutate the receiver; :func:`absolute`, :func:`angle`
and :func:`conj` work on a copy and leave their argument untouched.

A complex matrix keeps both buffers after ``abs`` or ``angle``: the
imaginary part is zeroed, not dropped.

References:
    - MATLAB complex numbers: https://www.mathworks.com/help/matlab/complex-numbers.html

"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from jsm.errors import NotComplexError
from jsm.types import ElementType, cast_buffer

if TYPE_CHECKING:
    from jsm.matrix import Matrix

# Types whose negation is not a plain wrap-around in NumPy.
_SATURATING = (ElementType.UINT8C, ElementType.LOGICAL)


def abs_inplace(m: Matrix) -> None:
    """Replace each element by its absolute value or complex magnitude."""
    m._check_writeable("abs")
    if m.isreal():
        data = m.get_data()
        if data.dtype.kind not in "ub":
            np.abs(data, out=data)
        return
    re, im = m.get_real_data(), m.get_imag_data()
    magnitude = np.hypot(re.astype(np.float64), im.astype(np.float64))
    re[...] = cast_buffer(magnitude, m.element_type)
    im[...] = 0


def angle_inplace(m: Matrix) -> None:
    """Replace each element by its phase angle ``atan2(im, re)``."""
    m._check_writeable("angle")
    if m.isreal():
        m.get_data()[...] = 0
        return
    re, im = m.get_real_data(), m.get_imag_data()
    phase = np.arctan2(im.astype(np.float64), re.astype(np.float64))
    re[...] = cast_buffer(phase, m.element_type)
    im[...] = 0


def conj_inplace(m: Matrix) -> None:
    """Negate the imaginary part; a real matrix is left as is."""
    if m.isreal():
        return
    m._check_writeable("conj")
    im = m.get_imag_data()
    if m.element_type in _SATURATING:
        im[...] = cast_buffer(-im.astype(np.float64), m.element_type)
    else:
        np.negative(im, out=im)


def absolute(m: Matrix) -> Matrix:
    """Absolute value of a copy of ``m``.

    Examples:
        >>> from jsm.matrix import Matrix
        >>> m = Matrix([1, 3], [-1, 2, -3])
        >>> absolute(m).get_data().tolist()
        [1.0, 2.0, 3.0]
        >>> m.get_data().tolist()
        [-1.0, 2.0, -3.0]

    """
    out = m.get_copy()
    abs_inplace(out)
    return out


def angle(m: Matrix) -> Matrix:
    """Phase angle of a copy of ``m``."""
    out = m.get_copy()
    angle_inplace(out)
    return out


def conj(m: Matrix) -> Matrix:
    """Complex conjugate of a copy of ``m``; a plain copy for real input."""
    out = m.get_copy()
    conj_inplace(out)
    return out


def real(m: Matrix) -> Matrix:
    """Real part of a complex matrix, as a new real matrix.

    Raises:
        NotComplexError: If ``m`` is real.
    """
    if m.isreal():
        raise NotComplexError("real: this function can only be used with a complex Matrix")
    return type(m)(m.get_size(), m.get_real_data().copy(), m.element_type)


def imag(m: Matrix) -> Matrix:
    """Imaginary part of a complex matrix, as a new real matrix.

    Raises:
        NotComplexError: If ``m`` is real.
    """
    if m.isreal():
        raise NotComplexError("imag: this function can only be used with a complex Matrix")
    return type(m)(m.get_size(), m.get_imag_data().copy(), m.element_type)
