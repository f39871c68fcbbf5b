"""Elementwise math and reductions on matrices.

Real and complex variants of each operation are dispatched on
``isreal()``. Functions here never modify their arguments; the Matrix
instance methods of the same name (``m.abs()``, ``m.angle()``,
``m.conj()``, ``m.sqrt()`` and the other unary functions) are the
in-place forms.
"""

from jsm.elementary.complex_numbers import (
    absolute,
    angle,
    conj,
    imag,
    real,
)
from jsm.elementary.math_functions import (
    acos,
    asin,
    atan,
    ceil,
    cos,
    exp,
    floor,
    log,
    log2,
    log10,
    round,
    sign,
    sin,
    sqrt,
    tan,
)
from jsm.elementary.numeric_types import (
    cast,
    isfinite,
    isinf,
    isnan,
)
from jsm.elementary.operators import (
    and_,
    atan2,
    eq,
    ge,
    gt,
    ldivide,
    le,
    lt,
    minus,
    ne,
    not_,
    or_,
    plus,
    power,
    rdivide,
    times,
)
from jsm.elementary.statistics import (
    cumsum,
    max,
    mean,
    min,
    prod,
    sort,
    sum,
)

__all__ = [
    "absolute",
    "angle",
    "conj",
    "real",
    "imag",
    "sqrt",
    "exp",
    "log",
    "log2",
    "log10",
    "floor",
    "ceil",
    "round",
    "sign",
    "sin",
    "cos",
    "tan",
    "asin",
    "acos",
    "atan",
    "cast",
    "isnan",
    "isinf",
    "isfinite",
    "plus",
    "minus",
    "times",
    "rdivide",
    "ldivide",
    "power",
    "atan2",
    "eq",
    "ne",
    "lt",
    "le",
    "gt",
    "ge",
    "and_",
    "or_",
    "not_",
    "sum",
    "prod",
    "mean",
    "min",
    "max",
    "cumsum",
    "sort",
]
