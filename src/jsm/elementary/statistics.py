"""Reductions and cumulative operations along one dimension.

``dim=None`` works on all elements at once: reductions return a 1x1
matrix, and ``cumsum``/``sort`` keep the size and run in column-major
order. With a ``dim``, the matrix view is permuted so that ``dim`` comes
first, the values are read as one column per remaining index, and the
result is permuted back. A ``dim`` past the last dimension is a singleton
dimension.

Output types:

- ``sum``, ``prod``, ``mean`` and ``cumsum`` give ``single`` for a
  ``single`` matrix and ``double`` otherwise.
- ``min``, ``max`` and ``sort`` keep the element type.

Complex values are summed and multiplied as complex numbers; ``min`` and
``max`` compare them by magnitude. ``sort`` only takes real matrices.
``min`` and ``max`` ignore NaN unless a whole column is NaN.

References:
    - MATLAB descriptive statistics: https://www.mathworks.com/help/matlab/descriptive-statistics.html

"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import numpy as np

from jsm.errors import IndexOutOfBoundsError, NotComplexError, SizeMismatchError
from jsm.types import ElementType, cast_buffer
from jsm.view import check_size

if TYPE_CHECKING:
    from jsm.matrix import Matrix


def _check_dim(dim: Any, name: str) -> None:
    if dim is None:
        return
    if isinstance(dim, bool) or not isinstance(dim, (int, np.integer)) or dim < 0:
        raise IndexOutOfBoundsError(f"{name}: invalid dimension {dim!r}")


def _span(m: Matrix, dim: int) -> int:
    # module-level min/max shadow the builtins here
    return dim + 1 if dim >= m.ndims() else m.ndims()


def _order(m: Matrix, dim: int) -> list[int]:
    return [dim] + [k for k in range(_span(m, dim)) if k != dim]


def _columns(m: Matrix, dim: int | None) -> np.ndarray:
    """Values of ``m`` as a 2-D array whose rows run along ``dim``."""
    if m.isreal():
        values = m.get_data().astype(np.float64)
    else:
        values = np.empty(m.numel(), dtype=np.complex128)
        values.real = m.get_real_data()
        values.imag = m.get_imag_data()
    if dim is None:
        return values.reshape(-1, 1)
    order = _order(m, dim)
    view = m.get_view().permute(order)
    rest = int(np.prod([m.size(k) for k in order[1:]], dtype=np.int64))
    return view.extract_from(values).reshape((m.size(dim), rest), order="F")


def _build(m: Matrix, size: Any, values: np.ndarray, element_type: ElementType) -> Matrix:
    values = values.ravel(order="F")
    if np.iscomplexobj(values):
        return type(m)(
            check_size(size),
            cast_buffer(values.real, element_type),
            element_type,
            imag=cast_buffer(values.imag, element_type),
        )
    return type(m)(check_size(size), cast_buffer(values, element_type), element_type)


def _accumulator(m: Matrix) -> ElementType:
    return ElementType.SINGLE if m.element_type is ElementType.SINGLE else ElementType.DOUBLE


def _reduce(
    name: str,
    m: Matrix,
    dim: int | None,
    fn: Callable[[np.ndarray], np.ndarray],
    element_type: ElementType,
) -> Matrix:
    _check_dim(dim, name)
    columns = _columns(m, dim)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        values = fn(columns)
    if dim is None:
        return _build(m, (1, 1), values, element_type)
    size = [m.size(k) for k in range(_span(m, dim))]
    size[dim] = 1
    return _build(m, size, values, element_type)


def _scan(
    name: str,
    m: Matrix,
    dim: int | None,
    fn: Callable[[np.ndarray], np.ndarray],
    element_type: ElementType,
) -> Matrix:
    _check_dim(dim, name)
    columns = _columns(m, dim)
    with np.errstate(invalid="ignore", over="ignore"):
        values = fn(columns)
    if dim is None:
        return _build(m, m.get_size(), values, element_type)
    order = _order(m, dim)
    permuted = _build(m, [m.size(k) for k in order], values, element_type)
    return permuted.ipermute(order)


def _extremum(name: str, m: Matrix, dim: int | None, pick: Callable[..., Any]) -> Matrix:
    def fn(columns: np.ndarray) -> np.ndarray:
        if columns.shape[0] == 0:
            raise SizeMismatchError(f"{name}: cannot reduce an empty dimension")
        if not np.iscomplexobj(columns):
            return pick.reduce(columns, axis=0)
        magnitude = np.abs(columns)
        best = pick.reduce(magnitude, axis=0)
        rows = np.argmax((magnitude == best) | (np.isnan(best) & np.isnan(magnitude)), axis=0)
        return columns[rows, np.arange(columns.shape[1])]

    return _reduce(name, m, dim, fn, m.element_type)


def sum(m: Matrix, dim: int | None = None) -> Matrix:  # noqa: A001
    """Sum of the elements along ``dim``.

    Examples:
        >>> from jsm.matrix import Matrix
        >>> m = Matrix([2, 3], [1, 2, 3, 4, 5, 6])
        >>> sum(m, 0).get_data().tolist()
        [3.0, 7.0, 11.0]
        >>> sum(m, 1).get_data().tolist()
        [9.0, 12.0]
        >>> sum(m).value(0)
        21.0

    """
    return _reduce("sum", m, dim, lambda c: np.sum(c, axis=0), _accumulator(m))


def prod(m: Matrix, dim: int | None = None) -> Matrix:
    """Product of the elements along ``dim``; 1 for an empty dimension."""
    return _reduce("prod", m, dim, lambda c: np.prod(c, axis=0), _accumulator(m))


def mean(m: Matrix, dim: int | None = None) -> Matrix:
    """Arithmetic mean along ``dim``; NaN for an empty dimension."""

    def fn(columns: np.ndarray) -> np.ndarray:
        return np.sum(columns, axis=0) / columns.shape[0]

    return _reduce("mean", m, dim, fn, _accumulator(m))


def min(m: Matrix, dim: int | None = None) -> Matrix:  # noqa: A001
    """Smallest element along ``dim``; complex values by magnitude.

    Raises:
        SizeMismatchError: If the reduced dimension is empty.
    """
    return _extremum("min", m, dim, np.fmin)


def max(m: Matrix, dim: int | None = None) -> Matrix:  # noqa: A001
    """Largest element along ``dim``; complex values by magnitude.

    Raises:
        SizeMismatchError: If the reduced dimension is empty.
    """
    return _extremum("max", m, dim, np.fmax)


def cumsum(m: Matrix, dim: int | None = None) -> Matrix:
    """Cumulative sum along ``dim``, same size as ``m``."""
    return _scan("cumsum", m, dim, lambda c: np.cumsum(c, axis=0), _accumulator(m))


def sort(m: Matrix, dim: int | None = None, mode: str = "ascend") -> Matrix:
    """Sorted copy of a real matrix along ``dim``.

    NaN values go last in ``"ascend"`` mode and first in ``"descend"`` mode.

    Args:
        m: Real matrix.
        dim: Dimension to sort along, or ``None`` for all elements.
        mode: ``"ascend"`` or ``"descend"``.

    Raises:
        NotComplexError: If ``m`` is complex.
        ValueError: If ``mode`` is unknown.

    Examples:
        >>> from jsm.matrix import Matrix
        >>> sort(Matrix([1, 4], [3, 1, 4, 2]), 1, "descend").get_data().tolist()
        [4.0, 3.0, 2.0, 1.0]

    """
    if not m.isreal():
        raise NotComplexError("sort: this function only works with real values")
    if mode not in ("ascend", "descend"):
        raise ValueError(f"sort: mode must be 'ascend' or 'descend', got {mode!r}")

    def fn(columns: np.ndarray) -> np.ndarray:
        ordered = np.sort(columns, axis=0)
        return ordered[::-1] if mode == "descend" else ordered

    return _scan("sort", m, dim, fn, m.element_type)
