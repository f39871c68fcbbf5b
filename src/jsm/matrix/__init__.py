"""Dense N-dimensional matrices.

A Matrix owns one flat buffer (real) or two (real and imaginary) plus a
column-major default view. Copies, selections and permutations always
allocate; only the in-place elementwise methods and ``set`` write into an
existing matrix, and none of them change its shape. Class constructors
(``eye``, ``colon``, ``rand`` and so on) build their values in
:mod:`jsm.matrix.construction`.
"""

from jsm.matrix.core import Matrix

__all__ = [
    "Matrix",
]
