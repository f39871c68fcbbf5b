"""Matrix: typed buffers plus a column-major default view.

A Matrix pairs a canonical size with one flat buffer (real) or two buffers
of identical type and length (real and imaginary parts). The element type
tag travels with the Matrix and always agrees with the buffer dtype;
clamped ``uint8c`` and plain ``uint8`` share a dtype and differ only by tag.

Values are stored column-major (first dimension fastest), as in MATLAB.
Shapes never change in place: ``permute``, ``select``, ``reshape`` and the
flips all return new matrices. In-place methods (``abs``, ``angle``,
``conj``, the unary math functions such as ``sqrt`` and ``set``) mutate
values only and return ``None``; the module-level functions of
:mod:`jsm.elementary` are their copying counterparts.

References:
    - MATLAB matrices and arrays: https://www.mathworks.com/help/matlab/matrices-and-arrays.html

"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

from jsm.config import get_settings
from jsm.elementary import complex_numbers, math_functions, numeric_types, operators, statistics
from jsm.errors import (
    IndexOutOfBoundsError,
    NotComplexError,
    ReadOnlyBufferError,
    SizeMismatchError,
    UnknownTypeError,
)
from jsm.matrix import construction
from jsm.types import ElementType, buffer_factory, cast_buffer, element_type_of, parse_type, result_type
from jsm.view import MatrixView, check_size


def _infer_type(dtype: Any) -> ElementType:
    if dtype is not None:
        try:
            return element_type_of(dtype)
        except UnknownTypeError:
            pass
    return get_settings().default_type


def _load(source: Any, element_type: ElementType, length: int) -> np.ndarray:
    arr = np.asarray(source)
    flat = arr if arr.ndim == 1 else np.ravel(arr, order="F")
    if flat.shape[0] != length:
        raise SizeMismatchError(f"Matrix: {flat.shape[0]} value(s) given for {length} element(s)")
    shareable = isinstance(source, np.ndarray) and source.ndim == 1 and source.flags.c_contiguous
    if shareable and source.dtype == element_type.dtype:
        return source
    return buffer_factory(element_type).from_array(flat)


class Matrix:
    """Dense N-dimensional array with optional imaginary part.

    Elementwise methods such as ``m.abs()``, ``m.conj()`` or ``m.sqrt()``
    work in place and return ``None``. The copying forms live in
    :mod:`jsm.elementary` (``absolute``, ``angle``, ``conj``, ``sqrt`` and
    so on); builtin ``abs(m)`` also returns a new matrix. Operators,
    reductions and the shape methods always return new matrices.

    Args:
        size: Matrix size; see :func:`jsm.view.check_size`.
        data: ``None`` for zeros, an array-like of values (column-major),
            or a type tag for a zero matrix of that type. A 1-D NumPy array
            whose dtype already matches is shared, not copied, except with
            ``iscomplex`` where both halves are always copied.
        dtype: Element type tag. Defaults to the type of a NumPy ``data``
            array when it has one, else to the configured default
            (``double``).
        imag: Imaginary part, same length rule as ``data``.
        iscomplex: Build a complex matrix. With ``data``, its first half is
            the real part and its second half the imaginary part.

    Raises:
        SizeMismatchError: If the data length does not match the size.
        UnknownTypeError: If ``dtype`` is not a valid type tag.

    Examples:
        >>> m = Matrix([2, 2], [1, -2, 3, -4])
        >>> m.abs()
        >>> m.get_data().tolist()
        [1.0, 2.0, 3.0, 4.0]

        >>> z = Matrix([2, 1], [3, 0], imag=[4, 0])
        >>> z.abs()
        >>> z.get_real_data().tolist(), z.get_imag_data().tolist()
        ([5.0, 0.0], [0.0, 0.0])

    """

    __slots__ = ("_size", "_type", "_real", "_imag")

    def __init__(
        self,
        size: Any,
        data: Any = None,
        dtype: Any = None,
        *,
        imag: Any = None,
        iscomplex: bool = False,
    ) -> None:
        if not isinstance(iscomplex, bool):
            raise TypeError(f"Matrix: iscomplex must be a boolean, got {iscomplex!r}")
        if isinstance(data, (str, ElementType)):
            data, dtype = None, data

        self._size = check_size(size)
        length = self.numel()
        element_type = parse_type(dtype) if dtype is not None else None

        if data is None:
            element_type = element_type or get_settings().default_type
            real = buffer_factory(element_type).zeros(length)
            imag_buffer = buffer_factory(element_type).zeros(length) if iscomplex else None
        elif np.iscomplexobj(data):
            values = np.asarray(data)
            if element_type is None:
                element_type = _infer_type(values.real.dtype)
            real = _load(values.real, element_type, length)
            imag_buffer = _load(values.imag, element_type, length)
        else:
            if element_type is None:
                element_type = _infer_type(data.dtype if isinstance(data, np.ndarray) else None)
            if iscomplex:
                both = _load(data, element_type, 2 * length)
                # halves of a shared array would alias the caller's data
                real, imag_buffer = both[:length].copy(), both[length:].copy()
            else:
                real = _load(data, element_type, length)
                imag_buffer = None

        if imag is not None:
            if imag_buffer is not None and data is not None:
                raise TypeError("Matrix: imaginary part given twice")
            imag_buffer = _load(imag, element_type, length)

        self._type = element_type
        self._real = real
        self._imag = imag_buffer

    @classmethod
    def zeros(cls, *size: Any, dtype: Any = None) -> Matrix:
        """Zero matrix: ``Matrix.zeros(3, 4)`` or ``Matrix.zeros([3, 4])``."""
        return cls(_size_args(size), dtype=dtype)

    @classmethod
    def ones(cls, *size: Any, dtype: Any = None) -> Matrix:
        out = cls(_size_args(size), dtype=dtype)
        out._real[...] = 1
        return out

    @classmethod
    def complex(cls, real: Any, imag: Any) -> Matrix:
        """Complex matrix from two real matrices of the same size.

        The imaginary part is cast to the element type of the real part.
        """
        if not isinstance(real, Matrix) or not isinstance(imag, Matrix):
            raise TypeError("Matrix.complex: expected two Matrix arguments")
        if not real.isreal() or not imag.isreal():
            raise TypeError("Matrix.complex: real and imaginary parts must be real")
        if real.get_size() != imag.get_size():
            raise SizeMismatchError(
                f"Matrix.complex: sizes {real.get_size()} and {imag.get_size()} differ"
            )
        return cls(
            real.get_size(),
            real.get_data().copy(),
            real.element_type,
            imag=cast_buffer(imag.get_data(), real.element_type),
        )

    @classmethod
    def colon(cls, first: float, step: float, last: float | None = None, dtype: Any = None) -> Matrix:
        """Column ``first:step:last``, or ``first:last`` with a step of +1 or -1.

        Examples:
            >>> Matrix.colon(0, 0.5, 2).get_data().tolist()
            [0.0, 0.5, 1.0, 1.5, 2.0]

        """
        size, values = construction.colon(first, step, last)
        return cls(size, values, _resolve(dtype))

    @classmethod
    def linspace(cls, low: float, high: float, n: int = 100, dtype: Any = None) -> Matrix:
        size, values = construction.linspace(low, high, n)
        return cls(size, values, _resolve(dtype))

    @classmethod
    def eye(cls, *size: Any, dtype: Any = None) -> Matrix:
        """Identity matrix: ``Matrix.eye(3)`` is 3x3, ``Matrix.eye(2, 3)`` is 2x3."""
        size, values = construction.eye(_square(size))
        return cls(size, values, _resolve(dtype))

    @classmethod
    def diag(cls, vector: Any) -> Matrix:
        """Square matrix with the elements of ``vector`` on its diagonal.

        A Matrix argument keeps its element type and its imaginary part.
        """
        if isinstance(vector, Matrix):
            size, values = construction.diag(np.ravel(vector.to_numpy(), order="F"))
            return cls(size, values, vector.element_type)
        size, values = construction.diag(vector)
        return cls(size, values, _resolve(None))

    @classmethod
    def rand(cls, *size: Any, key: Any = None, dtype: Any = None) -> Matrix:
        """Uniform random values in ``[0, 1)``; ``key`` is a seed or a JAX PRNG key."""
        size, values = construction.rand(_square(size), key)
        return cls(size, values, _resolve(dtype))

    @classmethod
    def randn(cls, *size: Any, key: Any = None, dtype: Any = None) -> Matrix:
        """Standard normal random values."""
        size, values = construction.randn(_square(size), key)
        return cls(size, values, _resolve(dtype))

    @classmethod
    def randi(cls, bounds: Any, *size: Any, key: Any = None, dtype: Any = None) -> Matrix:
        """Random integers in ``[0, bounds]`` or ``[bounds[0], bounds[1]]``.

        Without a size the result is 1x1.

        Examples:
            >>> m = Matrix.randi([1, 6], 2, 3, key=0)
            >>> m.get_size()
            (2, 3)
            >>> bool(((m >= 1) & (m <= 6)).get_data().all())
            True

        """
        size, values = construction.randi(bounds, _square(size) if size else 1, key)
        return cls(size, values, _resolve(dtype))

    # ------------------------------------------------------------------
    # Informations
    # ------------------------------------------------------------------

    @property
    def element_type(self) -> ElementType:
        return self._type

    def type(self) -> str:
        """MATLAB name of the element type, e.g. ``"double"``."""
        return self._type.value

    def get_size(self) -> tuple[int, ...]:
        return self._size

    def size(self, dim: int | None = None) -> tuple[int, ...] | int:
        """Size of the matrix, or along ``dim`` (1 past the last dimension)."""
        if dim is None:
            return self._size
        if isinstance(dim, bool) or not isinstance(dim, (int, np.integer)) or dim < 0:
            raise IndexOutOfBoundsError(f"size: invalid dimension {dim!r}")
        return self._size[dim] if dim < len(self._size) else 1

    def numel(self) -> int:
        return int(np.prod(self._size, dtype=np.int64))

    def ndims(self) -> int:
        return len(self._size)

    get_dim_length = ndims

    def get_view(self) -> MatrixView:
        """Default (column-major, unselected) view over the buffers."""
        return MatrixView(self._size)

    def get_data(self) -> np.ndarray:
        """Reference to the real buffer."""
        return self._real

    def get_real_data(self) -> np.ndarray:
        """Reference to the real buffer of a complex matrix."""
        if self._imag is None:
            raise NotComplexError("get_real_data: expected a complex Matrix")
        return self._real

    def get_imag_data(self) -> np.ndarray:
        """Reference to the imaginary buffer of a complex matrix."""
        if self._imag is None:
            raise NotComplexError("get_imag_data: expected a complex Matrix")
        return self._imag

    def isreal(self) -> bool:
        """True iff the matrix has no imaginary buffer."""
        return self._imag is None

    def isscalar(self) -> bool:
        return self.numel() == 1

    def isempty(self) -> bool:
        return self.numel() == 0

    def islogical(self) -> bool:
        return self._type.islogical

    def isinteger(self) -> bool:
        return self._type.isinteger

    def isfloat(self) -> bool:
        return self._type.isfloat

    def isrow(self) -> bool:
        return self.get_view().isrow()

    def iscolumn(self) -> bool:
        return self.get_view().iscolumn()

    def isvector(self) -> bool:
        return self.get_view().isvector()

    def ismatrix(self) -> bool:
        return self.get_view().ismatrix()

    def issquare(self) -> bool:
        return self.get_view().issquare()

    def value(self, coordinates: int | Sequence[int]) -> Any:
        """Element at a linear index or N-d coordinate.

        Complex elements are returned as Python ``complex``.
        """
        index = self._linear_index(coordinates)
        if self._imag is None:
            return self._real[index].item()
        return complex(float(self._real[index]), float(self._imag[index]))

    def set_value(self, coordinates: int | Sequence[int], value: Any) -> None:
        """Write one element; the value is converted to the element type."""
        index = self._linear_index(coordinates)
        value = np.asarray(value)
        if np.iscomplexobj(value) and self._imag is None:
            raise NotComplexError("set_value: cannot store a complex value in a real Matrix")
        real = cast_buffer(value.real.reshape(1), self._type)
        imag = cast_buffer(value.imag.reshape(1), self._type) if np.iscomplexobj(value) else 0
        self._check_writeable("set_value")
        self._real[index] = real[0]
        if self._imag is not None:
            self._imag[index] = imag if np.isscalar(imag) else imag[0]

    def to_numpy(self) -> np.ndarray:
        """Copy as an N-d NumPy array (complex dtype for complex matrices)."""
        real = self._real.reshape(self._size, order="F")
        if self._imag is None:
            return real.copy()
        # assigning the parts keeps infinite components exact
        out = np.empty(self._size, dtype=np.result_type(self._real.dtype, np.complex64))
        out.real = real
        out.imag = self._imag.reshape(self._size, order="F")
        return out

    # ------------------------------------------------------------------
    # Copies and derived matrices
    # ------------------------------------------------------------------

    def get_copy(self) -> Matrix:
        """Independent copy sharing no storage with this matrix."""
        return type(self)(
            self._size,
            self._real.copy(),
            self._type,
            imag=None if self._imag is None else self._imag.copy(),
        )

    def extract_view(self, view: MatrixView) -> Matrix:
        """New matrix holding the elements selected by ``view``."""
        if view.initial_length != self.numel():
            raise SizeMismatchError(
                f"extract_view: view over {view.initial_length} element(s), matrix has {self.numel()}"
            )
        return type(self)(
            view.get_size(),
            view.extract_from(self._real),
            self._type,
            imag=None if self._imag is None else view.extract_from(self._imag),
        )

    def select(self, *selection: Any) -> Matrix:
        """Sub-matrix; see :meth:`jsm.view.MatrixView.select` for the forms."""
        return self.extract_view(self.get_view().select(*selection))

    get = select

    def permute(self, order: Sequence[int]) -> Matrix:
        return self.extract_view(self.get_view().permute(order))

    def ipermute(self, order: Sequence[int]) -> Matrix:
        return self.extract_view(self.get_view().ipermute(order))

    def transpose(self) -> Matrix:
        return self.permute([1, 0])

    def ctranspose(self) -> Matrix:
        """Conjugate transpose; same as :meth:`transpose` for a real matrix."""
        out = self.transpose()
        complex_numbers.conj_inplace(out)
        return out

    def flipud(self) -> Matrix:
        return self.extract_view(self.get_view().flipud())

    def fliplr(self) -> Matrix:
        return self.extract_view(self.get_view().fliplr())

    def flipdim(self, dim: int) -> Matrix:
        return self.extract_view(self.get_view().flipdim(dim))

    def rot90(self, k: int = 1) -> Matrix:
        return self.extract_view(self.get_view().rot90(k))

    def reshape(self, *size: Any) -> Matrix:
        """Copy with a new size holding the same number of elements."""
        new_size = check_size(_size_args(size) if size else self.numel())
        if int(np.prod(new_size, dtype=np.int64)) != self.numel():
            raise SizeMismatchError(f"reshape: cannot reshape {self._size} into {new_size}")
        out = self.get_copy()
        out._size = new_size
        return out

    def repmat(self, *reps: Any) -> Matrix:
        """Tile the matrix ``reps[k]`` times along each dimension ``k``.

        ``m.repmat(n)`` repeats ``n`` times along both the rows and the
        columns.

        Examples:
            >>> Matrix([1, 2], [1, 2]).repmat(2, 2).get_data().tolist()
            [1.0, 1.0, 2.0, 2.0, 1.0, 1.0, 2.0, 2.0]

        """
        counts = list(_square(reps))
        if not all(isinstance(r, (int, np.integer)) and not isinstance(r, bool) and r >= 0 for r in counts):
            raise SizeMismatchError(f"repmat: repetitions must be non-negative integers, got {reps!r}")
        view = self.get_view()
        for dim in range(max(len(counts), self.ndims())):
            count = counts[dim] if dim < len(counts) else 1
            if count != 1:
                tiled = np.tile(np.arange(self.size(dim)), count)
                view = view.select_indices_dimension(dim, tiled.tolist())
        return self.extract_view(view)

    def shiftdim(self, n: int | None = None) -> tuple[Matrix, int]:
        """Shift dimensions.

        Args:
            n: ``None`` removes the leading singleton dimensions, a positive
                value moves the first ``n`` dimensions to the end, and a
                negative value prepends ``-n`` singleton dimensions.

        Returns:
            The shifted matrix and the number of shifts, as in
            ``[B, nshifts] = shiftdim(A)``.
        """
        if n is None:
            if self.isscalar():
                return self.get_copy(), 0
            n = 0
            while n < self.ndims() - 1 and self._size[n] == 1:
                n += 1
            if n == 0:
                return self.get_copy(), 0
            return self.reshape(list(self._size[n:])), n
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            raise TypeError(f"shiftdim: expected an integer, got {n!r}")
        if n < 0:
            return self.reshape([1] * -n + list(self._size)), int(n)
        k = int(n) % self.ndims()
        order = list(range(k, self.ndims())) + list(range(k))
        return self.permute(order), int(n)

    def cat(self, dim: int, *others: Matrix) -> Matrix:
        """Concatenate ``others`` after this matrix along ``dim``.

        All sizes must agree except along ``dim``. The output type folds
        :func:`jsm.types.result_type` over the inputs, and the output is
        complex when any input is.

        Raises:
            SizeMismatchError: If the sizes do not agree.

        Examples:
            >>> a = Matrix([2, 1], [1, 2])
            >>> a.cat(1, Matrix([2, 1], [3, 4])).get_size()
            (2, 2)
            >>> a.cat(0, a).get_data().tolist()
            [1.0, 2.0, 1.0, 2.0]

        """
        if isinstance(dim, bool) or not isinstance(dim, (int, np.integer)) or dim < 0:
            raise IndexOutOfBoundsError(f"cat: invalid dimension {dim!r}")
        parts = [self, *others]
        if not all(isinstance(p, Matrix) for p in parts):
            raise TypeError("cat: expected Matrix arguments")
        n = max(max(p.ndims() for p in parts), dim + 1)
        sizes = [[p.size(k) for k in range(n)] for p in parts]
        for size in sizes[1:]:
            if any(size[k] != sizes[0][k] for k in range(n) if k != dim):
                raise SizeMismatchError(f"cat: sizes {tuple(sizes[0])} and {tuple(size)} do not agree")

        element_type = self._type
        for p in others:
            element_type = result_type(element_type, p.element_type)
        out_size = list(sizes[0])
        out_size[dim] = sum(size[dim] for size in sizes)
        out = type(self)(out_size, dtype=element_type, iscomplex=not all(p.isreal() for p in parts))

        start = 0
        for p, size in zip(parts, sizes):
            if p.isempty():
                start += size[dim]
                continue
            selection: list[Any] = [None] * n
            selection[dim] = np.arange(start, start + size[dim])
            out.set(selection[: out.ndims()], p)
            start += size[dim]
        return out

    def set(self, selection: Sequence[Any], values: Any) -> None:
        """Write ``values`` into the elements picked by ``selection``.

        Args:
            selection: One :meth:`select` argument per dimension.
            values: Scalar, array-like or Matrix with as many elements as
                the selection, converted to this matrix's element type.

        Raises:
            NotComplexError: If complex values are written to a real matrix.
            ReadOnlyBufferError: If a buffer is not writable.
        """
        view = self.get_view().select(*selection)
        if isinstance(values, Matrix):
            real, imag = values._real, values._imag
        else:
            arr = np.asarray(values)
            if np.iscomplexobj(arr):
                real, imag = arr.real, arr.imag
            else:
                real, imag = arr, None
        if imag is not None and self._imag is None:
            raise NotComplexError("set: cannot store complex values in a real Matrix")
        real = cast_buffer(np.ravel(real, order="F"), self._type)
        imag_values = None
        if self._imag is not None:
            imag_values = cast_buffer(np.ravel(imag, order="F"), self._type) if imag is not None else 0
        self._check_writeable("set")
        for part in (real, imag_values):
            if isinstance(part, np.ndarray) and part.size not in (1, view.get_length()):
                raise SizeMismatchError(
                    f"set: {part.size} value(s) for a selection of {view.get_length()} element(s)"
                )
        view.extract_to(real, self._real)
        if imag_values is not None:
            view.extract_to(imag_values, self._imag)

    # ------------------------------------------------------------------
    # Elementwise math
    # ------------------------------------------------------------------

    def abs(self) -> None:
        """Absolute value (real) or magnitude (complex), in place."""
        complex_numbers.abs_inplace(self)

    def angle(self) -> None:
        """Phase angle, in place; zero everywhere for a real matrix."""
        complex_numbers.angle_inplace(self)

    def conj(self) -> None:
        """Complex conjugate, in place; no-op for a real matrix."""
        complex_numbers.conj_inplace(self)

    def sqrt(self) -> None:
        """Square root, in place; NaN for negative values of a real matrix."""
        math_functions.apply_inplace(self, "sqrt")

    def exp(self) -> None:
        math_functions.apply_inplace(self, "exp")

    def log(self) -> None:
        math_functions.apply_inplace(self, "log")

    def log2(self) -> None:
        math_functions.apply_inplace(self, "log2")

    def log10(self) -> None:
        math_functions.apply_inplace(self, "log10")

    def floor(self) -> None:
        math_functions.apply_inplace(self, "floor")

    def ceil(self) -> None:
        math_functions.apply_inplace(self, "ceil")

    def round(self) -> None:
        """Round in place, halves away from zero."""
        math_functions.apply_inplace(self, "round")

    def sign(self) -> None:
        math_functions.apply_inplace(self, "sign")

    def sin(self) -> None:
        math_functions.apply_inplace(self, "sin")

    def cos(self) -> None:
        math_functions.apply_inplace(self, "cos")

    def tan(self) -> None:
        math_functions.apply_inplace(self, "tan")

    def asin(self) -> None:
        math_functions.apply_inplace(self, "asin")

    def acos(self) -> None:
        math_functions.apply_inplace(self, "acos")

    def atan(self) -> None:
        math_functions.apply_inplace(self, "atan")

    def real(self) -> Matrix:
        return complex_numbers.real(self)

    def imag(self) -> Matrix:
        return complex_numbers.imag(self)

    def cast(self, element_type: Any) -> Matrix:
        return numeric_types.cast(self, element_type)

    def double(self) -> Matrix:
        return self.cast(ElementType.DOUBLE)

    def single(self) -> Matrix:
        return self.cast(ElementType.SINGLE)

    def int8(self) -> Matrix:
        return self.cast(ElementType.INT8)

    def int16(self) -> Matrix:
        return self.cast(ElementType.INT16)

    def int32(self) -> Matrix:
        return self.cast(ElementType.INT32)

    def uint8(self) -> Matrix:
        return self.cast(ElementType.UINT8)

    def uint8c(self) -> Matrix:
        return self.cast(ElementType.UINT8C)

    def uint16(self) -> Matrix:
        return self.cast(ElementType.UINT16)

    def uint32(self) -> Matrix:
        return self.cast(ElementType.UINT32)

    def logical(self) -> Matrix:
        return self.cast(ElementType.LOGICAL)

    def isnan(self) -> Matrix:
        return numeric_types.isnan(self)

    def isinf(self) -> Matrix:
        return numeric_types.isinf(self)

    def isfinite(self) -> Matrix:
        return numeric_types.isfinite(self)

    # ------------------------------------------------------------------
    # Reductions
    # ------------------------------------------------------------------

    def sum(self, dim: int | None = None) -> Matrix:
        """Sum along ``dim``, or of all elements; see :mod:`jsm.elementary.statistics`."""
        return statistics.sum(self, dim)

    def prod(self, dim: int | None = None) -> Matrix:
        return statistics.prod(self, dim)

    def mean(self, dim: int | None = None) -> Matrix:
        return statistics.mean(self, dim)

    def min(self, dim: int | None = None) -> Matrix:
        return statistics.min(self, dim)

    def max(self, dim: int | None = None) -> Matrix:
        return statistics.max(self, dim)

    def cumsum(self, dim: int | None = None) -> Matrix:
        return statistics.cumsum(self, dim)

    def sort(self, dim: int | None = None, mode: str = "ascend") -> Matrix:
        """Sorted copy; unlike ``list.sort`` this leaves the matrix untouched."""
        return statistics.sort(self, dim, mode)

    def allclose(self, other: Any, rtol: float = 1e-05, atol: float = 1e-08) -> bool:
        """True iff sizes match and values are close (NaNs compare equal)."""
        if not isinstance(other, Matrix) or other.get_size() != self._size:
            return False
        a = self.to_numpy().astype(np.complex128)
        b = other.to_numpy().astype(np.complex128)
        return bool(np.allclose(a, b, rtol=rtol, atol=atol, equal_nan=True))

    def __abs__(self) -> Matrix:
        return complex_numbers.absolute(self)

    def __neg__(self) -> Matrix:
        return operators.times(self, -1)

    def __add__(self, other: Any) -> Matrix:
        return operators.plus(self, other)

    def __radd__(self, other: Any) -> Matrix:
        return operators.plus(other, self)

    def __sub__(self, other: Any) -> Matrix:
        return operators.minus(self, other)

    def __rsub__(self, other: Any) -> Matrix:
        return operators.minus(other, self)

    def __mul__(self, other: Any) -> Matrix:
        return operators.times(self, other)

    def __rmul__(self, other: Any) -> Matrix:
        return operators.times(other, self)

    def __truediv__(self, other: Any) -> Matrix:
        return operators.rdivide(self, other)

    def __rtruediv__(self, other: Any) -> Matrix:
        return operators.rdivide(other, self)

    def power(self, other: Any) -> Matrix:
        return operators.power(self, other)

    def ldivide(self, other: Any) -> Matrix:
        """Left division: ``other ./ self``."""
        return operators.ldivide(self, other)

    def eq(self, other: Any) -> Matrix:
        """Elementwise equality as a logical matrix; ``==`` keeps identity semantics."""
        return operators.eq(self, other)

    def ne(self, other: Any) -> Matrix:
        return operators.ne(self, other)

    def __pow__(self, other: Any) -> Matrix:
        return operators.power(self, other)

    def __rpow__(self, other: Any) -> Matrix:
        return operators.power(other, self)

    def __lt__(self, other: Any) -> Matrix:
        return operators.lt(self, other)

    def __le__(self, other: Any) -> Matrix:
        return operators.le(self, other)

    def __gt__(self, other: Any) -> Matrix:
        return operators.gt(self, other)

    def __ge__(self, other: Any) -> Matrix:
        return operators.ge(self, other)

    def __and__(self, other: Any) -> Matrix:
        return operators.and_(self, other)

    def __rand__(self, other: Any) -> Matrix:
        return operators.and_(other, self)

    def __or__(self, other: Any) -> Matrix:
        return operators.or_(self, other)

    def __ror__(self, other: Any) -> Matrix:
        return operators.or_(other, self)

    def __invert__(self) -> Matrix:
        return operators.not_(self)

    def __repr__(self) -> str:
        kind = "real" if self._imag is None else "complex"
        return f"Matrix(size={self._size}, type={self._type.value!r}, {kind})"

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_writeable(self, name: str) -> None:
        for buffer in (self._real, self._imag):
            if buffer is not None and not buffer.flags.writeable:
                raise ReadOnlyBufferError(f"{name}: buffer is read-only")

    def _coordinates(self, coordinates: int | Sequence[int]) -> list[int]:
        if isinstance(coordinates, (int, np.integer)):
            index = int(coordinates)
            if not 0 <= index < self.numel():
                raise IndexOutOfBoundsError(f"value: linear index {index} out of bounds")
            return [int(c) for c in np.unravel_index(index, self._size, order="F")]
        return list(coordinates)

    def _linear_index(self, coordinates: int | Sequence[int]) -> int:
        return self.get_view().get_index(self._coordinates(coordinates))


def _size_args(size: tuple[Any, ...]) -> Any:
    if len(size) == 1:
        return size[0]
    return list(size)


def _resolve(dtype: Any) -> ElementType:
    return parse_type(dtype) if dtype is not None else get_settings().default_type


def _square(size: tuple[Any, ...]) -> Any:
    """Size arguments where a single integer ``n`` means ``n x n``."""
    if not size:
        return [1, 1]
    size = _size_args(size)
    if isinstance(size, (int, np.integer)) and not isinstance(size, bool):
        return [size, size]
    return size
