"""Strided N-dimensional views over flat buffers.

A view maps an N-dimensional index space onto a flat buffer without owning
or copying it. Each dimension is described by a size, a stride and an
offset (all in elements), or, after an index-list or boolean selection, by
an explicit list of buffer offsets. Iteration order is column-major: the
first dimension varies fastest, as in MATLAB.

Views are immutable. ``permute``, ``select`` and the flips return new views
over the same buffer length; the buffer itself is only touched by
``extract_from`` / ``extract_to``.

References:
    - MATLAB permute: https://www.mathworks.com/help/matlab/ref/permute.html
    - NumPy strides: https://numpy.org/doc/stable/reference/generated/numpy.ndarray.strides.html

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from jsm.errors import (
    IndexOutOfBoundsError,
    InvalidPermutationError,
    ReadOnlyBufferError,
    SizeMismatchError,
)


def _is_int(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


def check_size(size: Any) -> tuple[int, ...]:
    """Canonicalise a Matrix size.

    An integer or a one-element size becomes a column ``(n, 1)``; trailing
    singleton dimensions beyond the second are dropped.

    Args:
        size: Integer or sequence of non-negative integers.

    Returns:
        Canonical size with at least two entries.

    Raises:
        SizeMismatchError: If the size is empty, negative or not integral.

    Examples:
        >>> check_size(3)
        (3, 1)
        >>> check_size([2, 3, 1, 1])
        (2, 3)
        >>> check_size([1, 1, 4])
        (1, 1, 4)

    """
    if _is_int(size):
        size = [size]
    try:
        dims = list(size)
    except TypeError:
        raise SizeMismatchError(f"check_size: invalid size {size!r}") from None
    if not dims:
        raise SizeMismatchError("check_size: size cannot be empty")
    if not all(_is_int(s) and s >= 0 for s in dims):
        raise SizeMismatchError(f"check_size: size must hold non-negative integers, got {dims!r}")
    dims = [int(s) for s in dims]
    while len(dims) > 2 and dims[-1] == 1:
        dims.pop()
    if len(dims) == 1:
        dims.append(1)
    return tuple(dims)


@dataclass(frozen=True)
class _Dim:
    size: int
    stride: int
    offset: int
    indices: tuple[int, ...] | None = None

    def positions(self) -> np.ndarray:
        if self.indices is not None:
            return np.asarray(self.indices, dtype=np.int64)
        return self.offset + self.stride * np.arange(self.size, dtype=np.int64)


class MatrixView:
    """Size/stride/offset metadata describing an N-d array over a flat buffer.

    Args:
        size: Size of the default view; see :func:`check_size`.

    Examples:
        >>> import numpy as np
        >>> v = MatrixView([3, 3])
        >>> d = np.arange(9)
        >>> v.select(None, 0).extract_from(d).tolist()
        [0, 1, 2]
        >>> v.select(0).extract_from(d).tolist()
        [0, 3, 6]
        >>> v.select(None, [-1, 0]).extract_from(d).tolist()
        [6, 7, 8, 3, 4, 5, 0, 1, 2]

    """

    __slots__ = ("_dims", "_initial_size")

    def __init__(self, size: Any) -> None:
        size = check_size(size)
        dims = []
        stride = 1
        for s in size:
            dims.append(_Dim(size=s, stride=stride, offset=0))
            stride *= s
        self._dims: tuple[_Dim, ...] = tuple(dims)
        self._initial_size: tuple[int, ...] = size

    @classmethod
    def _derive(cls, parent: MatrixView, dims: Sequence[_Dim]) -> MatrixView:
        view = cls.__new__(cls)
        view._dims = tuple(dims)
        view._initial_size = parent._initial_size
        return view

    def _padded(self, ndims: int) -> list[_Dim]:
        dims = list(self._dims)
        while len(dims) < ndims:
            dims.append(_Dim(size=1, stride=self.initial_length, offset=0))
        return dims

    def _check_dim(self, dim: Any, name: str) -> int:
        if not _is_int(dim) or dim < 0:
            raise IndexOutOfBoundsError(f"{name}: invalid dimension {dim!r}")
        return int(dim)

    # ------------------------------------------------------------------
    # Getters
    # ------------------------------------------------------------------

    @property
    def initial_length(self) -> int:
        """Length of the buffer this view indexes."""
        return int(np.prod(self._initial_size, dtype=np.int64))

    def get_initial_size(self) -> tuple[int, ...]:
        return self._initial_size

    def get_size(self, dim: int | None = None) -> tuple[int, ...] | int:
        """Size of the view, or along one dimension.

        Dimensions past the last one have size 1.
        """
        if dim is None:
            return check_size([d.size for d in self._dims])
        dim = self._check_dim(dim, "get_size")
        return self._dims[dim].size if dim < len(self._dims) else 1

    def get_dim_length(self) -> int:
        """Number of dimensions, trailing singletons excluded (at least 2)."""
        return len(self.get_size())

    ndims = get_dim_length

    def get_length(self) -> int:
        """Number of elements selected by the view."""
        return int(np.prod([d.size for d in self._dims], dtype=np.int64))

    @property
    def strides(self) -> tuple[int, ...]:
        """Per-dimension strides, one per canonical dimension."""
        return tuple(d.stride for d in self._dims[: self.get_dim_length()])

    @property
    def offsets(self) -> tuple[int, ...]:
        return tuple(d.offset for d in self._dims[: self.get_dim_length()])

    def is_indices_indexed(self, dim: int) -> bool:
        dim = self._check_dim(dim, "is_indices_indexed")
        return dim < len(self._dims) and self._dims[dim].indices is not None

    def get_indices(self, dim: int) -> tuple[int, ...]:
        """Buffer offsets selected along an index-list dimension."""
        if not self.is_indices_indexed(dim):
            raise IndexOutOfBoundsError(f"get_indices: dimension {dim} is not indexed by indices")
        return self._dims[dim].indices

    def get_index(self, coordinates: Sequence[int]) -> int:
        """Linear buffer index of an N-d coordinate.

        Missing trailing coordinates are taken as 0.

        Raises:
            IndexOutOfBoundsError: If a coordinate is outside its dimension.

        Examples:
            >>> MatrixView([3, 2]).get_index([1, 1])
            4

        """
        coords = list(coordinates)
        if len(coords) > len(self._dims) and any(c != 0 for c in coords[len(self._dims):]):
            raise IndexOutOfBoundsError(f"get_index: invalid index {coords!r}")
        index = 0
        for dim, d in enumerate(self._dims):
            c = coords[dim] if dim < len(coords) else 0
            if not _is_int(c) or not 0 <= c < d.size:
                raise IndexOutOfBoundsError(f"get_index: index {c!r} out of bounds for dimension {dim}")
            index += d.indices[c] if d.indices is not None else d.offset + c * d.stride
        return int(index)

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def permute(self, order: Sequence[int]) -> MatrixView:
        """Reorder the dimensions without copying data.

        Args:
            order: Permutation of ``range(len(order))``; must cover at least
                :meth:`ndims` dimensions. Extra entries address singleton
                dimensions.

        Returns:
            New view whose dimension ``i`` is dimension ``order[i]`` of this one.

        Raises:
            InvalidPermutationError: If ``order`` is not a permutation of all
                dimensions.

        Examples:
            >>> import numpy as np
            >>> v = MatrixView([2, 2, 2]).permute([2, 1, 0])
            >>> v.extract_from(np.arange(8)).tolist()
            [0, 4, 2, 6, 1, 5, 3, 7]

        """
        order = list(order)
        n = len(order)
        if not all(_is_int(k) for k in order) or sorted(order) != list(range(n)):
            raise InvalidPermutationError(f"permute: {order!r} is not a permutation")
        if n < self.get_dim_length():
            raise InvalidPermutationError(
                f"permute: {order!r} does not cover the {self.get_dim_length()} dimension(s)"
            )
        dims = self._padded(n)
        if any(d.size != 1 for d in dims[n:]):
            raise InvalidPermutationError(f"permute: {order!r} drops a non-singleton dimension")
        return MatrixView._derive(self, [dims[k] for k in order])

    def ipermute(self, order: Sequence[int]) -> MatrixView:
        """Undo :meth:`permute` with the same ``order``."""
        order = list(order)
        if not all(_is_int(k) for k in order) or sorted(order) != list(range(len(order))):
            raise InvalidPermutationError(f"ipermute: {order!r} is not a permutation")
        return self.permute([int(k) for k in np.argsort(order)])

    def swap_dimensions(self, dim_a: int, dim_b: int) -> MatrixView:
        dim_a = self._check_dim(dim_a, "swap_dimensions")
        dim_b = self._check_dim(dim_b, "swap_dimensions")
        dims = self._padded(max(dim_a, dim_b) + 1)
        dims[dim_a], dims[dim_b] = dims[dim_b], dims[dim_a]
        return MatrixView._derive(self, dims)

    def select(self, *selection: Any) -> MatrixView:
        """Select a sub-part of the view, one argument per dimension.

        Each argument can be:

        - ``None``, ``[]`` or ``slice(None)``: the whole dimension;
        - ``i``: a single index;
        - ``[start, end]`` / ``[start, step, end]``: inclusive range,
          negative values counting from the end;
        - ``[[i0, i1, ...]]``: an index list;
        - a list of booleans as long as the dimension: a mask;
        - a NumPy array: an index list, or a mask if boolean;
        - a Python ``slice``.

        Raises:
            IndexOutOfBoundsError: On indices outside a dimension.
            SizeMismatchError: On a mask of the wrong length.
        """
        view = self
        for dim, sel in enumerate(selection):
            view = view.select_dimension(dim, sel)
        return view

    def select_dimension(self, dim: int, selection: Any) -> MatrixView:
        """Apply one :meth:`select` argument along ``dim``."""
        dim = self._check_dim(dim, "select")
        if selection is None:
            return self
        if isinstance(selection, slice):
            picked = list(range(*selection.indices(self.get_size(dim))))
            return self.select_indices_dimension(dim, picked)
        if _is_int(selection):
            return self._select_colon(dim, [selection])
        if isinstance(selection, np.ndarray):
            if selection.dtype == np.bool_:
                return self.select_boolean_dimension(dim, selection.tolist())
            return self.select_indices_dimension(dim, [int(i) for i in selection.ravel()])
        if not isinstance(selection, Sequence) or isinstance(selection, str):
            raise IndexOutOfBoundsError(f"select: invalid selection {selection!r}")
        if len(selection) == 0:
            return self
        if all(isinstance(s, (bool, np.bool_)) for s in selection):
            return self.select_boolean_dimension(dim, selection)
        if isinstance(selection[0], (Sequence, np.ndarray)):
            return self.select_indices_dimension(dim, selection[0])
        return self._select_colon(dim, selection)

    def _select_colon(self, dim: int, colon: Sequence[Any]) -> MatrixView:
        length = self.get_size(dim)
        if len(colon) == 1:
            start, step, end = colon[0], None, colon[0]
        elif len(colon) == 2:
            start, step, end = colon[0], None, colon[1]
        elif len(colon) == 3:
            start, step, end = colon
        else:
            raise IndexOutOfBoundsError(f"select: colon expects 1, 2 or 3 values, got {list(colon)!r}")
        if not (_is_int(start) and _is_int(end) and (step is None or _is_int(step))):
            raise IndexOutOfBoundsError(f"select: colon values must be integers, got {list(colon)!r}")
        start = start if start >= 0 else start + length
        end = end if end >= 0 else end + length
        if not (0 <= start < length and 0 <= end < length):
            raise IndexOutOfBoundsError(f"select: {list(colon)!r} out of bounds for dimension {dim} of size {length}")
        if step is None:
            step = 1 if start <= end else -1
        elif step == 0 or (end - start) * step < 0:
            raise IndexOutOfBoundsError(f"select: invalid step {step} from {start} to {end}")
        size = abs(end - start) // abs(step) + 1

        dims = self._padded(dim + 1)
        d = dims[dim]
        if d.indices is None:
            dims[dim] = _Dim(size=size, stride=d.stride * step, offset=d.offset + start * d.stride)
        else:
            indices = d.indices[start::step][:size]
            dims[dim] = _Dim(size=size, stride=1, offset=indices[0], indices=indices)
        return MatrixView._derive(self, dims)

    def select_indices_dimension(self, dim: int, indices: Sequence[int]) -> MatrixView:
        """Select an explicit list of positions along ``dim``.

        Examples:
            >>> import numpy as np
            >>> v = MatrixView([6, 4]).select_indices_dimension(0, [4, 3, 1])
            >>> v.extract_from(np.arange(24)).tolist()[:3]
            [4, 3, 1]

        """
        dim = self._check_dim(dim, "select_indices_dimension")
        length = self.get_size(dim)
        picked = list(indices)
        if not all(_is_int(i) and 0 <= i < length for i in picked):
            raise IndexOutOfBoundsError(
                f"select_indices_dimension: {picked!r} out of bounds for dimension {dim} of size {length}"
            )
        dims = self._padded(dim + 1)
        d = dims[dim]
        if d.indices is None:
            offsets = tuple(int(d.offset + i * d.stride) for i in picked)
        else:
            offsets = tuple(d.indices[i] for i in picked)
        dims[dim] = _Dim(size=len(offsets), stride=1, offset=offsets[0] if offsets else 0, indices=offsets)
        return MatrixView._derive(self, dims)

    def select_boolean_dimension(self, dim: int, mask: Sequence[bool]) -> MatrixView:
        dim = self._check_dim(dim, "select_boolean_dimension")
        if len(mask) != self.get_size(dim):
            raise SizeMismatchError(
                f"select_boolean_dimension: mask of length {len(mask)} for dimension of size {self.get_size(dim)}"
            )
        return self.select_indices_dimension(dim, [i for i, keep in enumerate(mask) if keep])

    def flipdim(self, dim: int) -> MatrixView:
        """Reverse the order of elements along ``dim``."""
        if self.get_size(dim) == 0:
            return self
        return self.select_dimension(dim, [-1, 0])

    def fliplr(self) -> MatrixView:
        return self.flipdim(1)

    def flipud(self) -> MatrixView:
        return self.flipdim(0)

    def rot90(self, k: int = 1) -> MatrixView:
        """Rotate counterclockwise by ``k`` quarter turns.

        Examples:
            >>> import numpy as np
            >>> MatrixView([2, 2]).rot90().extract_from(np.arange(4)).tolist()
            [2, 0, 3, 1]

        """
        if not _is_int(k):
            raise TypeError(f"rot90: k must be an integer, got {k!r}")
        k %= 4
        if k == 1:
            return self.swap_dimensions(0, 1).flipud()
        if k == 2:
            return self.flipud().fliplr()
        if k == 3:
            return self.swap_dimensions(0, 1).fliplr()
        return self

    # ------------------------------------------------------------------
    # Data access
    # ------------------------------------------------------------------

    def linear_indices(self) -> np.ndarray:
        """Buffer indices in iteration order (first dimension fastest)."""
        grids = np.ix_(*[d.positions() for d in self._dims])
        return np.asarray(sum(grids), dtype=np.int64).ravel(order="F")

    def extract_from(self, buffer: Any) -> np.ndarray:
        """Copy the viewed elements of ``buffer`` into a new buffer.

        Raises:
            SizeMismatchError: If ``buffer`` is not of length
                :attr:`initial_length`.
        """
        data = np.asarray(buffer)
        if data.ndim != 1 or data.shape[0] != self.initial_length:
            raise SizeMismatchError(
                f"extract_from: expected a buffer of length {self.initial_length}, got shape {data.shape}"
            )
        return data[self.linear_indices()]

    def extract_to(self, values: Any, buffer: np.ndarray) -> np.ndarray:
        """Write ``values`` into the viewed elements of ``buffer``, in place.

        Args:
            values: Scalar, or array-like with :meth:`get_length` elements
                in iteration order.
            buffer: Target buffer of length :attr:`initial_length`.

        Returns:
            ``buffer``.
        """
        if buffer.ndim != 1 or buffer.shape[0] != self.initial_length:
            raise SizeMismatchError(
                f"extract_to: expected a buffer of length {self.initial_length}, got shape {buffer.shape}"
            )
        values = np.asarray(values)
        if values.size != 1 and values.size != self.get_length():
            raise SizeMismatchError(
                f"extract_to: {values.size} value(s) for a view of {self.get_length()} element(s)"
            )
        if not buffer.flags.writeable:
            raise ReadOnlyBufferError("extract_to: buffer is read-only")
        buffer[self.linear_indices()] = values.reshape(-1) if values.size != 1 else values.reshape(())
        return buffer

    # ------------------------------------------------------------------
    # Shape predicates
    # ------------------------------------------------------------------

    def isrow(self) -> bool:
        size = self.get_size()
        return len(size) == 2 and size[0] == 1

    def iscolumn(self) -> bool:
        size = self.get_size()
        return len(size) == 2 and size[1] == 1

    def isvector(self) -> bool:
        size = self.get_size()
        return len(size) == 2 and (size[0] == 1 or size[1] == 1)

    def ismatrix(self) -> bool:
        return len(self.get_size()) == 2

    def issquare(self) -> bool:
        size = self.get_size()
        return len(size) == 2 and size[0] == size[1]

    def isscalar(self) -> bool:
        return self.get_length() == 1

    def isempty(self) -> bool:
        return self.get_length() == 0

    def __eq__(self, other: object) -> bool:
        # equal when they read the same elements in the same order
        if not isinstance(other, MatrixView):
            return NotImplemented
        return (
            self._initial_size == other._initial_size
            and self.get_size() == other.get_size()
            and np.array_equal(self.linear_indices(), other.linear_indices())
        )

    def __hash__(self) -> int:
        return hash((self._initial_size, self.get_size()))

    def __repr__(self) -> str:
        return f"MatrixView(size={self.get_size()}, strides={self.strides}, offsets={self.offsets})"
