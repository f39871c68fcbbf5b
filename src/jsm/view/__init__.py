"""Strided views over flat buffers.

A MatrixView describes how a flat buffer is read as an N-dimensional array:
size, stride and offset per dimension. Derived views (permute, select,
flips, rotations) never copy the buffer; data moves only through
``extract_from`` / ``extract_to``.

Shape predicates (``isrow``, ``iscolumn``, ``isvector``, ``ismatrix``) are
computed from the canonical size alone.
"""

from jsm.view.matrix_view import MatrixView, check_size

__all__ = [
    "MatrixView",
    "check_size",
]
