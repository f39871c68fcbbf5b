"""Accelerator bridge for image effects.

Effects run as jit-compiled JAX functions on a device copy of a Matrix and
come back as a new Matrix; the source matrix is never written. The device
array has the Matrix's N-d shape, so ``x[i, j]`` on the device is
``m.value([i, j])`` on the host.

JAX canonicalises dtypes: unless ``jax_enable_x64`` is set, ``double``
matrices travel as float32 and come back as ``single``.

References:
    - JAX jit: https://jax.readthedocs.io/en/latest/_autosummary/jax.jit.html
    - JAX type promotion: https://jax.readthedocs.io/en/latest/type_promotion.html

"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import jax
import jax.numpy as jnp
import numpy as np
from jax import Array

from jsm.errors import UnknownTypeError
from jsm.log import get_logger
from jsm.matrix import Matrix
from jsm.types import ElementType, element_type_of

logger = get_logger(__name__)


def to_device(m: Matrix) -> Array:
    """Copy a Matrix to the default device.

    Args:
        m: Source matrix.

    Returns:
        JAX array of shape ``m.get_size()``; complex dtype for complex input.

    Examples:
        >>> from jsm.matrix import Matrix
        >>> x = to_device(Matrix([2, 3]))
        >>> x.shape
        (2, 3)

    """
    return jnp.asarray(m.to_numpy())


def _host_type(dtype: np.dtype) -> ElementType:
    if dtype.kind == "c":
        dtype = np.empty(0, dtype=dtype).real.dtype
    try:
        return element_type_of(dtype)
    except UnknownTypeError:
        # float16/bfloat16 widen to single, 64-bit integers to double.
        # bfloat16 is an ml_dtypes extension type whose numpy kind is "V".
        if jnp.issubdtype(dtype, jnp.floating):
            return ElementType.SINGLE
        return ElementType.DOUBLE


def from_device(array: Array, element_type: Any = None) -> Matrix:
    """Copy a device array back into a new Matrix.

    Args:
        array: JAX (or NumPy) array. 0-d becomes 1x1, 1-d a column.
        element_type: Target type; inferred from the array dtype if omitted.

    Returns:
        New Matrix owning its buffers.
    """
    host = np.array(array)
    if host.ndim == 0:
        host = host.reshape(1, 1)
    if element_type is None:
        element_type = _host_type(host.dtype)
    if np.iscomplexobj(host):
        return Matrix(
            host.shape,
            np.ravel(host.real, order="F"),
            element_type,
            imag=np.ravel(host.imag, order="F"),
        )
    return Matrix(host.shape, np.ravel(host, order="F"), element_type)


def run_effect(
    fn: Callable[..., Array],
    m: Matrix,
    *args: Any,
    static_argnums: tuple[int, ...] | None = None,
) -> Matrix:
    """Run a jit-compiled effect on a device copy of ``m``.

    Args:
        fn: Pure function ``fn(pixels, *args) -> Array``.
        m: Source matrix, left unmodified.
        args: Extra arguments passed to ``fn``.
        static_argnums: Argument indices treated as compile-time constants.

    Returns:
        New Matrix built from the effect's output.

    Examples:
        >>> from jsm.matrix import Matrix
        >>> out = run_effect(lambda x, g: x * g, Matrix([1, 2], [1, 2]), 3.0)
        >>> out.get_data().tolist()
        [3.0, 6.0]

    """
    kwargs: dict[str, Any] = {}
    if static_argnums is not None:
        kwargs["static_argnums"] = static_argnums
    compiled = jax.jit(fn, **kwargs)
    result = compiled(to_device(m), *args)
    logger.debug(
        "effect %s: %s -> %s",
        getattr(fn, "__name__", repr(fn)),
        m.get_size(),
        tuple(result.shape),
    )
    return from_device(result)


@jax.jit
def device_abs(x: Array) -> Array:
    """Absolute value or complex magnitude, on device."""
    return jnp.abs(x)


@jax.jit
def device_angle(x: Array) -> Array:
    """Phase angle on device; zero for real input, as on the host."""
    if jnp.iscomplexobj(x):
        return jnp.angle(x)
    return jnp.zeros_like(x)


@jax.jit
def device_conj(x: Array) -> Array:
    return jnp.conj(x)
