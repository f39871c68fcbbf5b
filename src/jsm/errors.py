"""Exception hierarchy for the Matrix core.

All errors are raised synchronously and propagate to the caller; nothing
in the library retries. Each class also derives from the builtin exception
a NumPy user would expect (``ValueError``, ``IndexError``, ``TypeError``)
so existing ``except`` clauses keep working.

Examples:
    >>> from jsm.types import parse_type
    >>> try:
    ...     parse_type("quaternion")
    ... except ValueError as err:
    ...     print(type(err).__name__)
    UnknownTypeError

"""

from __future__ import annotations


class JSMError(Exception):
    """Base class for every error raised by jsm."""


class UnknownTypeError(JSMError, ValueError):
    """Unrecognised or unsupported element-type tag."""


class SizeMismatchError(JSMError, ValueError):
    """Buffer length or operand size does not match the declared shape."""


class InvalidPermutationError(JSMError, ValueError):
    """Permutation is not a bijection over the view's dimensions."""


class IndexOutOfBoundsError(JSMError, IndexError):
    """Index or selection outside a dimension's extent."""


class NotComplexError(JSMError, TypeError):
    """Operation requires a complex Matrix but got a real one."""


class ReadOnlyBufferError(JSMError):
    """In-place operation on a buffer that cannot be written."""


class RawFormatError(JSMError, ValueError):
    """Malformed packed RAW image."""
