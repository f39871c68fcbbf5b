"""Accelerator bridge.

Matrices are copied to a JAX device array, transformed by a jit-compiled
function and copied back into a new Matrix:

    to_device → jax.numpy array of the Matrix's N-d shape
    run_effect → jax.jit(fn) on the device copy, result as a new Matrix
    from_device → Matrix from any array (complex split into two buffers)
"""

from jsm.accel.device import (
    device_abs,
    device_angle,
    device_conj,
    from_device,
    run_effect,
    to_device,
)

__all__ = [
    "to_device",
    "from_device",
    "run_effect",
    "device_abs",
    "device_angle",
    "device_conj",
]
