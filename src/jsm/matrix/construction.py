"""Value generators behind the Matrix class constructors.

Each function returns ``(size, values)``: a canonical size and a flat
column-major NumPy buffer. :class:`jsm.matrix.Matrix` wraps them
(``Matrix.eye(3)``, ``Matrix.colon(0, 0.1, 1)``) and converts the values to
the requested element type.

Random values come from JAX's functional PRNG. ``key`` is either an integer
seed or a key from ``jax.random.key``; the same key always gives the same
values. Without a key a fresh seed is drawn from NumPy's default generator.
Draws are made in float32 and widened, so ``double`` random matrices carry
float32 resolution.

References:
    - MATLAB colon: https://www.mathworks.com/help/matlab/ref/colon.html
    - JAX PRNG: https://jax.readthedocs.io/en/latest/random-numbers.html

"""

from __future__ import annotations

import math
from typing import Any

import jax
import jax.numpy as jnp
import numpy as np
from jax import Array

from jsm.errors import SizeMismatchError
from jsm.view import check_size

_EMPTY_COLUMN = (0, 1)


def _prng_key(key: Any) -> Array:
    if key is None:
        key = int(np.random.default_rng().integers(2**31))
    if isinstance(key, (int, np.integer)) and not isinstance(key, bool):
        return jax.random.key(int(key))
    return key


def _numel(size: tuple[int, ...]) -> int:
    return int(np.prod(size, dtype=np.int64))


def _is_integer(x: float) -> bool:
    return float(x).is_integer()


def colon(first: float, step: float, last: float | None = None) -> tuple[tuple[int, ...], np.ndarray]:
    """Evenly spaced column ``first:step:last``, both ends inclusive.

    With two arguments they are ``first`` and ``last`` and the step is +1
    or -1, whichever walks from ``first`` towards ``last``. The last value
    is snapped to ``last`` when it is within rounding distance, and the
    vector is filled from both ends so it stays symmetric.

    Args:
        first: First value.
        step: Spacing, or the last value when ``last`` is omitted.
        last: Bound that is not exceeded.

    Returns:
        Size ``(n, 1)`` and float64 values; ``(0, 1)`` when the step moves
        away from ``last`` or is zero.

    Raises:
        ValueError: If an argument is NaN or infinite.

    Examples:
        >>> colon(1, 4)[1].tolist()
        [1.0, 2.0, 3.0, 4.0]
        >>> colon(3, 1)[1].tolist()
        [3.0, 2.0, 1.0]
        >>> colon(0, 0.25, 1)[1].tolist()
        [0.0, 0.25, 0.5, 0.75, 1.0]

    """
    if last is None:
        first, last = first, step
        step = 1.0 if last >= first else -1.0
    first, step, last = float(first), float(step), float(last)
    if not all(math.isfinite(v) for v in (first, step, last)):
        raise ValueError("colon: parameters must be finite numbers")
    if step == 0 or (last - first) * step < 0:
        return _EMPTY_COLUMN, np.zeros(0)

    tol = 2.0 * np.finfo(np.float64).eps * max(abs(first), abs(last))
    direction = 1.0 if step > 0 else -1.0
    if _is_integer(first) and step == 1:
        n = math.floor(last) - first
    elif _is_integer(first) and _is_integer(step):
        q = math.floor(first / step)
        r = first - q * step
        n = math.floor((last - r) / step) - q
    else:
        n = math.floor((last - first) / step + 0.5)
        if direction * (first + n * step - last) > tol:
            n -= 1
    n = int(n)

    right = first + n * step
    if direction * (right - last) > -tol:
        right = last
    half = np.arange(n // 2 + 1)
    values = np.empty(n + 1)
    values[half] = first + half * step
    values[n - half] = right - half * step
    if n % 2 == 0:
        values[n // 2] = (first + right) / 2
    return (n + 1, 1), values


def linspace(low: float, high: float, n: int = 100) -> tuple[tuple[int, ...], np.ndarray]:
    """``n`` evenly spaced values from ``low`` to ``high``, as a column.

    ``n=1`` gives ``[high]`` and ``n=0`` an empty column.

    Examples:
        >>> linspace(0, 1, 3)[1].tolist()
        [0.0, 0.5, 1.0]

    """
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 0:
        raise ValueError(f"linspace: number of values must be a non-negative integer, got {n!r}")
    if not (math.isfinite(low) and math.isfinite(high)):
        raise ValueError("linspace: bounds must be finite numbers")
    if n == 0:
        return _EMPTY_COLUMN, np.zeros(0)
    if n == 1:
        return (1, 1), np.array([float(high)])
    return (int(n), 1), np.linspace(float(low), float(high), int(n))


def eye(size: Any) -> tuple[tuple[int, ...], np.ndarray]:
    """Ones on the main diagonal of every 2-D page, zeros elsewhere.

    Examples:
        >>> eye([2, 3])[1].tolist()
        [1.0, 0.0, 0.0, 1.0, 0.0, 0.0]

    """
    size = check_size(size)
    values = np.zeros(size)
    k = np.arange(min(size[0], size[1]))
    values[k, k, ...] = 1
    return size, values.ravel(order="F")


def diag(vector: Any) -> tuple[tuple[int, ...], np.ndarray]:
    """Square matrix with ``vector`` on its main diagonal.

    Args:
        vector: Flat real or complex values.

    Examples:
        >>> diag([1, 2])[1].tolist()
        [1.0, 0.0, 0.0, 2.0]

    """
    values = np.ravel(np.asarray(vector), order="F")
    if not np.iscomplexobj(values):
        values = values.astype(np.float64)
    n = values.shape[0]
    out = np.zeros(n * n, dtype=values.dtype)
    out[:: n + 1] = values
    return check_size([n, n]), out


def rand(size: Any, key: Any = None) -> tuple[tuple[int, ...], np.ndarray]:
    """Uniform values in ``[0, 1)``."""
    size = check_size(size)
    draws = jax.random.uniform(_prng_key(key), shape=(_numel(size),), dtype=jnp.float32)
    return size, np.asarray(draws, dtype=np.float64)


def randn(size: Any, key: Any = None) -> tuple[tuple[int, ...], np.ndarray]:
    """Standard normal values."""
    size = check_size(size)
    draws = jax.random.normal(_prng_key(key), shape=(_numel(size),), dtype=jnp.float32)
    return size, np.asarray(draws, dtype=np.float64)


def randi(bounds: Any, size: Any, key: Any = None) -> tuple[tuple[int, ...], np.ndarray]:
    """Uniform integers in an inclusive range.

    Args:
        bounds: ``imax`` for ``[0, imax]``, or ``[imin, imax]``.
        size: Output size.
        key: Seed or PRNG key.

    Raises:
        ValueError: If the bounds are not integers or are out of order.
        SizeMismatchError: If ``bounds`` has more than two entries.
    """
    limits = list(np.atleast_1d(bounds))
    if len(limits) == 1:
        limits = [0, limits[0]]
    if len(limits) != 2:
        raise SizeMismatchError(f"randi: range must have 1 or 2 bounds, got {len(limits)}")
    if not all(isinstance(b, (int, np.integer)) for b in limits):
        raise ValueError(f"randi: range must be made of integers, got {bounds!r}")
    low, high = int(limits[0]), int(limits[1])
    if low > high:
        raise ValueError(f"randi: range must be [min, max] in this order, got {bounds!r}")
    size = check_size(size)
    draws = jax.random.randint(_prng_key(key), shape=(_numel(size),), minval=low, maxval=high + 1)
    return size, np.asarray(draws, dtype=np.float64)
