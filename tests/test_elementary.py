"""Tests for jsm.elementary module."""

from __future__ import annotations

import math

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from jsm.elementary import (
    absolute,
    and_,
    angle,
    atan2,
    cast,
    conj,
    eq,
    exp,
    floor,
    ge,
    gt,
    imag,
    isfinite,
    isinf,
    isnan,
    ldivide,
    le,
    log,
    lt,
    minus,
    ne,
    not_,
    or_,
    plus,
    power,
    rdivide,
    real,
    sign,
    sqrt,
    times,
)
from jsm.elementary import math_functions
from jsm.errors import NotComplexError, ReadOnlyBufferError, SizeMismatchError
from jsm.matrix import Matrix

complex_values = st.lists(
    st.complex_numbers(max_magnitude=1e6, allow_nan=False, allow_infinity=False),
    min_size=1,
    max_size=12,
)
real_values = st.lists(st.floats(min_value=-1e6, max_value=1e6), min_size=1, max_size=12)


class TestAbs:
    """Tests for Matrix.abs and absolute."""

    def test_real_in_place(self):
        m = Matrix([2, 2], [1, -2, 3, -4])
        assert m.abs() is None
        assert m.get_data().tolist() == [1.0, 2.0, 3.0, 4.0]

    def test_complex_magnitude(self):
        z = Matrix([2, 1], [3, 0], imag=[4, 0])
        z.abs()
        assert z.get_real_data().tolist() == [5.0, 0.0]
        assert z.get_imag_data().tolist() == [0.0, 0.0]
        assert not z.isreal()

    def test_unsigned_unchanged(self):
        m = Matrix([1, 2], [3, 250], "uint8")
        m.abs()
        assert m.get_data().tolist() == [3, 250]

    def test_integer_complex_magnitude_cast(self):
        z = Matrix([1, 1], [1], "int16", imag=[1])
        z.abs()
        assert z.get_real_data().tolist() == [1]

    def test_absolute_leaves_argument(self):
        m = Matrix([1, 3], [-1, 2, -3])
        out = absolute(m)
        assert out.get_data().tolist() == [1.0, 2.0, 3.0]
        assert m.get_data().tolist() == [-1.0, 2.0, -3.0]

    def test_builtin_abs(self):
        assert abs(Matrix([1, 1], [-2.5])).value(0) == 2.5

    @given(complex_values)
    @settings(max_examples=10)
    def test_magnitude_matches_numpy(self, values):
        z = Matrix(len(values), np.array(values))
        z.abs()
        np.testing.assert_allclose(z.get_real_data(), np.abs(np.array(values)))
        assert not z.get_imag_data().any()


class TestAngle:
    """Tests for Matrix.angle and angle."""

    @given(real_values)
    @settings(max_examples=10)
    def test_real_is_zero(self, values):
        m = Matrix(len(values), values)
        out = angle(m)
        m.angle()
        assert not m.get_data().any()
        assert not out.get_data().any()
        assert out.isreal()

    def test_complex(self):
        z = Matrix([1, 2], [0, -1], imag=[1, 0])
        out = angle(z)
        assert out.get_real_data().tolist() == pytest.approx([math.pi / 2, math.pi])
        assert out.get_imag_data().tolist() == [0.0, 0.0]
        assert z.get_real_data().tolist() == [0.0, -1.0]


class TestConj:
    """Tests for Matrix.conj and conj."""

    def test_in_place(self):
        z = Matrix([1, 1], [1 + 2j])
        assert z.conj() is None
        assert z.value(0) == 1 - 2j

    @given(real_values)
    @settings(max_examples=10)
    def test_real_noop(self, values):
        m = Matrix(len(values), values)
        m.conj()
        assert m.get_data().tolist() == [float(v) for v in values]

    @given(real_values)
    @settings(max_examples=10)
    def test_real_copy_is_equal_and_independent(self, values):
        m = Matrix(len(values), values)
        out = conj(m)
        assert out is not m
        assert out.isreal()
        assert out.allclose(m)
        out.get_data()[...] = 7
        assert m.get_data().tolist() == [float(v) for v in values]

    def test_iscomplex_halves_do_not_alias_input(self):
        data = np.array([1.0, 2.0, 3.0, 4.0])
        z = Matrix([2, 1], data, iscomplex=True)
        z.conj()
        assert data.tolist() == [1.0, 2.0, 3.0, 4.0]
        assert z.get_imag_data().tolist() == [-3.0, -4.0]

    def test_clamped_imag_saturates(self):
        z = Matrix([1, 1], [1], "uint8c", imag=[5])
        z.conj()
        assert z.get_imag_data().tolist() == [0]

    @given(complex_values)
    @settings(max_examples=10)
    def test_involution(self, values):
        z = Matrix(len(values), np.array(values))
        original = z.get_copy()
        z.conj()
        z.conj()
        assert z.allclose(original)


class TestRealImag:
    """Tests for real and imag."""

    def test_parts(self):
        z = Matrix([1, 2], [1 + 2j, 3 - 4j])
        assert real(z).get_data().tolist() == [1.0, 3.0]
        assert imag(z).get_data().tolist() == [2.0, -4.0]
        assert real(z).isreal()

    def test_parts_are_copies(self):
        z = Matrix([1, 1], [1 + 2j])
        r = z.real()
        r.set_value(0, 9)
        assert z.value(0) == 1 + 2j

    def test_real_matrix_rejected(self):
        with pytest.raises(NotComplexError):
            real(Matrix([2, 2]))
        with pytest.raises(NotComplexError):
            Matrix([2, 2]).imag()


class TestCast:
    """Tests for cast and the typed shortcuts."""

    def test_clamped(self):
        m = Matrix([1, 3], [-3, 127.5, 1e9])
        out = cast(m, "uint8c")
        assert out.type() == "uint8c"
        assert out.get_data().tolist() == [0, 128, 255]
        assert m.type() == "double"

    def test_shortcuts(self):
        m = Matrix([1, 2], [300, -7.9])
        assert m.uint8().get_data().tolist() == [44, 249]
        assert m.int16().get_data().tolist() == [300, -7]
        assert m.single().type() == "single"
        assert m.logical().get_data().tolist() == [True, True]

    def test_complex_keeps_both_parts(self):
        z = Matrix([1, 1], [1.9 - 2.9j])
        out = z.int8()
        assert out.value(0) == 1 - 2j

    def test_always_new(self):
        m = Matrix([1, 2], [1, 2])
        assert not np.shares_memory(m.double().get_data(), m.get_data())


class TestPredicates:
    """Tests for isnan, isinf and isfinite."""

    def test_real(self):
        m = Matrix([1, 4], [1.0, np.nan, np.inf, -np.inf])
        assert isnan(m).get_data().tolist() == [False, True, False, False]
        assert isinf(m).get_data().tolist() == [False, False, True, True]
        assert isfinite(m).get_data().tolist() == [True, False, False, False]
        assert isnan(m).type() == "logical"
        assert isnan(m).get_size() == (1, 4)

    def test_integer(self):
        m = Matrix([1, 2], [1, 2], "int32")
        assert m.isnan().get_data().tolist() == [False, False]
        assert m.isinf().get_data().tolist() == [False, False]
        assert m.isfinite().get_data().tolist() == [True, True]

    def test_complex_any_component(self):
        z = Matrix([1, 2], [np.inf, 1.0], imag=[1.0, np.nan])
        assert isinf(z).get_data().tolist() == [True, False]
        assert isnan(z).get_data().tolist() == [False, True]

    def test_complex_isfinite_is_or(self):
        z = Matrix([1, 2], [np.inf, np.inf], imag=[1.0, np.nan])
        assert isfinite(z).get_data().tolist() == [True, False]


class TestOperators:
    """Tests for plus, minus, times and rdivide."""

    def test_broadcast_row(self):
        a = Matrix([2, 2], [1, 2, 3, 4])
        out = plus(a, Matrix([1, 2], [10, 20]))
        assert out.get_data().tolist() == [11.0, 12.0, 23.0, 24.0]

    def test_broadcast_column_and_row(self):
        out = times(Matrix([2, 1], [1, 2]), Matrix([1, 3], [1, 10, 100]))
        assert out.get_size() == (2, 3)
        assert out.get_data().tolist() == [1.0, 2.0, 10.0, 20.0, 100.0, 200.0]

    def test_scalar_operands(self):
        m = Matrix([1, 2], [1, 2])
        assert minus(m, 1).get_data().tolist() == [0.0, 1.0]
        assert minus(1, m).get_data().tolist() == [0.0, -1.0]

    def test_size_mismatch(self):
        with pytest.raises(SizeMismatchError):
            plus(Matrix([2, 2]), Matrix([3, 1]))

    def test_non_scalar_operand(self):
        with pytest.raises(TypeError):
            plus(Matrix([1, 2]), [1, 2])

    def test_integer_result_wraps(self):
        out = times(Matrix([1, 1], [100], "int8"), 2)
        assert out.type() == "int8"
        assert out.get_data().tolist() == [-56]

    def test_single_wins_over_double(self):
        out = plus(Matrix([1, 1], [1], "single"), 0.5)
        assert out.type() == "single"

    def test_divide_by_zero(self):
        assert rdivide(Matrix([1, 1], [1.0]), 0).value(0) == math.inf
        assert rdivide(Matrix([1, 1], [1], "int16"), 0).value(0) == 0

    def test_complex(self):
        out = times(Matrix([1, 1], [1 + 2j]), 1j)
        assert out.value(0) == -2 + 1j

    def test_python_operators(self):
        m = Matrix([1, 2], [1, 2])
        assert (m + 1).get_data().tolist() == [2.0, 3.0]
        assert (2 * m).get_data().tolist() == [2.0, 4.0]
        assert (-m).get_data().tolist() == [-1.0, -2.0]
        assert (1 / m).get_data().tolist() == [1.0, 0.5]
        assert (m - m).get_data().tolist() == [0.0, 0.0]


class TestPowerAndDivision:
    """Tests for power, ldivide and atan2."""

    def test_power_broadcast(self):
        out = power(Matrix([2, 1], [2, 3]), Matrix([1, 2], [1, 2]))
        assert out.get_data().tolist() == [2.0, 3.0, 4.0, 9.0]

    def test_power_operators(self):
        m = Matrix([1, 3], [1, 2, 3])
        assert (m ** 2).get_data().tolist() == [1.0, 4.0, 9.0]
        assert (2 ** m).get_data().tolist() == [2.0, 4.0, 8.0]

    def test_negative_base_fractional_exponent(self):
        assert math.isnan(power(Matrix([1, 1], [-8.0]), 1 / 3).value(0))
        root = power(Matrix([1, 1], [-1 + 0j]), 0.5)
        assert root.value(0) == pytest.approx(1j)

    def test_integer_power_wraps(self):
        out = power(Matrix([1, 1], [2], "uint8"), 9)
        assert out.type() == "uint8"
        assert out.get_data().tolist() == [0]

    def test_ldivide_is_reversed_rdivide(self):
        a = Matrix([1, 2], [2, 4])
        assert ldivide(a, 8).get_data().tolist() == [4.0, 2.0]
        assert a.ldivide(Matrix([1, 2], [1, 1])).allclose(rdivide(1, a))

    def test_ldivide_keeps_left_integer_type(self):
        out = ldivide(Matrix([1, 1], [2], "int16"), 7)
        assert out.type() == "int16"
        assert out.get_data().tolist() == [3]

    def test_atan2(self):
        out = atan2(Matrix([1, 2], [1, -1]), Matrix([1, 2], [0, 0]))
        assert out.get_data().tolist() == pytest.approx([math.pi / 2, -math.pi / 2])

    def test_atan2_rejects_complex(self):
        with pytest.raises(NotComplexError):
            atan2(Matrix([1, 1], [1j]), 1)

    @given(
        st.lists(st.floats(min_value=-10, max_value=10), min_size=1, max_size=8),
        st.integers(min_value=0, max_value=4),
    )
    @settings(max_examples=10)
    def test_integer_exponent_matches_numpy(self, values, exponent):
        out = Matrix(len(values), values) ** exponent
        np.testing.assert_allclose(out.get_data(), np.power(values, exponent))


class TestComparisons:
    """Tests for eq, ne, lt, le, gt and ge."""

    def test_logical_output(self):
        out = lt(Matrix([1, 3], [1, 2, 3]), 2)
        assert out.type() == "logical"
        assert out.get_data().tolist() == [True, False, False]

    def test_all_six(self):
        a = Matrix([1, 3], [1, 2, 3])
        b = Matrix([1, 3], [3, 2, 1])
        assert eq(a, b).get_data().tolist() == [False, True, False]
        assert ne(a, b).get_data().tolist() == [True, False, True]
        assert le(a, b).get_data().tolist() == [True, True, False]
        assert gt(a, b).get_data().tolist() == [False, False, True]
        assert ge(a, b).get_data().tolist() == [False, True, True]

    def test_python_operators(self):
        m = Matrix([1, 3], [1, 2, 3])
        assert (m < 2).get_data().tolist() == [True, False, False]
        assert (m <= 2).get_data().tolist() == [True, True, False]
        assert (m > 2).get_data().tolist() == [False, False, True]
        assert (m >= 2).get_data().tolist() == [False, True, True]
        assert (2 > m).get_data().tolist() == [True, False, False]

    def test_eq_method_and_identity(self):
        m = Matrix([1, 2], [1, 2])
        assert m.eq(m.get_copy()).get_data().tolist() == [True, True]
        assert m.ne(1).get_data().tolist() == [False, True]
        assert m != m.get_copy()

    def test_broadcast(self):
        out = eq(Matrix([2, 1], [1, 2]), Matrix([1, 2], [1, 2]))
        assert out.get_size() == (2, 2)
        assert out.get_data().tolist() == [True, False, False, True]

    def test_complex_equality(self):
        z = Matrix([1, 2], [1 + 2j, 1 - 2j])
        assert eq(z, 1 + 2j).get_data().tolist() == [True, False]

    def test_nan_is_not_equal(self):
        m = Matrix([1, 1], [np.nan])
        assert eq(m, m).get_data().tolist() == [False]
        assert ne(m, m).get_data().tolist() == [True]

    def test_ordering_rejects_complex(self):
        with pytest.raises(NotComplexError):
            lt(Matrix([1, 1], [1j]), 0)
        with pytest.raises(NotComplexError):
            Matrix([1, 1], [1]) >= Matrix([1, 1], [1j])


class TestLogicalOperators:
    """Tests for and_, or_ and not_."""

    def test_truth_table(self):
        a = Matrix([1, 4], [0, 0, 1, 1])
        b = Matrix([1, 4], [0, 1, 0, 1])
        assert and_(a, b).get_data().tolist() == [False, False, False, True]
        assert or_(a, b).get_data().tolist() == [False, True, True, True]
        assert (a & b).type() == "logical"
        assert (a | b).get_data().tolist() == [False, True, True, True]

    def test_non_zero_is_true(self):
        m = Matrix([1, 3], [-2, 0.5, np.nan])
        assert and_(m, 1).get_data().tolist() == [True, True, True]

    def test_not(self):
        m = Matrix([1, 3], [0, 2, -1])
        assert not_(m).get_data().tolist() == [True, False, False]
        assert (~m).get_size() == (1, 3)
        assert not_(0).get_data().tolist() == [True]

    def test_reflected(self):
        m = Matrix([1, 2], [0, 1])
        assert (1 & m).get_data().tolist() == [False, True]
        assert (0 | m).get_data().tolist() == [False, True]

    def test_complex_rejected(self):
        with pytest.raises(NotComplexError):
            not_(Matrix([1, 1], [1j]))
        with pytest.raises(NotComplexError):
            or_(Matrix([1, 1], [1j]), 0)


class TestMathFunctions:
    """Tests for the unary elementary functions."""

    @pytest.mark.parametrize(
        ("name", "reference"),
        [
            ("sqrt", np.sqrt),
            ("exp", np.exp),
            ("log", np.log),
            ("log2", np.log2),
            ("log10", np.log10),
            ("floor", np.floor),
            ("ceil", np.ceil),
            ("sign", np.sign),
            ("sin", np.sin),
            ("cos", np.cos),
            ("tan", np.tan),
            ("asin", np.arcsin),
            ("acos", np.arccos),
            ("atan", np.arctan),
        ],
    )
    def test_matches_numpy(self, name, reference):
        values = [0.25, 0.5, 0.75, 2.5]
        m = Matrix([2, 2], values)
        out = getattr(math_functions, name)(m)
        assert getattr(m, name)() is None
        with np.errstate(invalid="ignore"):
            expected = reference(np.array(values))
        np.testing.assert_allclose(out.get_data(), expected)
        np.testing.assert_allclose(m.get_data(), expected)
        assert out.get_size() == (2, 2)

    def test_round_half_away_from_zero(self):
        m = Matrix([1, 5], [0.5, 1.5, 2.5, -0.5, -2.4])
        m.round()
        assert m.get_data().tolist() == [1.0, 2.0, 3.0, -1.0, -2.0]

    def test_real_stays_real(self):
        out = sqrt(Matrix([1, 2], [-4.0, 4.0]))
        assert out.isreal()
        assert math.isnan(out.value(0))
        assert out.value(1) == 2.0
        assert math.isnan(log(Matrix([1, 1], [-1.0])).value(0))

    def test_log_of_zero(self):
        assert log(Matrix([1, 1], [0.0])).value(0) == -math.inf

    def test_complex_sqrt(self):
        z = sqrt(Matrix([1, 2], [-4 + 0j, 3 + 4j]))
        assert z.value(0) == pytest.approx(2j)
        assert z.value(1) == pytest.approx(2 + 1j)

    def test_complex_exp(self):
        z = exp(Matrix([1, 1], [1j * math.pi]))
        assert z.value(0) == pytest.approx(-1, abs=1e-12)

    def test_complex_floor_by_part(self):
        z = floor(Matrix([1, 1], [1.5 - 1.5j]))
        assert z.value(0) == 1 - 2j

    def test_complex_sign_is_unit(self):
        z = sign(Matrix([1, 2], [3 + 4j, 0j]))
        assert z.value(0) == pytest.approx(0.6 + 0.8j)
        assert z.value(1) == 0

    def test_integer_type_kept(self):
        m = Matrix([1, 2], [2, 9], "int16")
        m.sqrt()
        assert m.type() == "int16"
        assert m.get_data().tolist() == [1, 3]

    def test_copying_form_leaves_argument(self):
        m = Matrix([1, 2], [1.0, 4.0])
        sqrt(m)
        assert m.get_data().tolist() == [1.0, 4.0]

    def test_read_only_rejected(self):
        m = Matrix([1, 1], [4.0])
        m.get_data().flags.writeable = False
        with pytest.raises(ReadOnlyBufferError):
            m.sqrt()

    @given(st.lists(st.floats(min_value=-1e3, max_value=1e3), min_size=1, max_size=12))
    @settings(max_examples=10)
    def test_exp_log_inverse(self, values):
        m = Matrix(len(values), values)
        back = log(exp(m * 1e-2))
        np.testing.assert_allclose(back.get_data(), np.array(values) * 1e-2, rtol=1e-9, atol=1e-12)


class TestReadOnly:
    """Tests for in-place operations on read-only buffers."""

    def test_abs_rejected_without_partial_write(self):
        z = Matrix([1, 1], [3], imag=[4])
        z.get_imag_data().flags.writeable = False
        with pytest.raises(ReadOnlyBufferError):
            z.abs()
        assert z.get_real_data().tolist() == [3.0]

    def test_angle_rejected(self):
        m = Matrix([1, 1], [-1])
        m.get_data().flags.writeable = False
        with pytest.raises(ReadOnlyBufferError):
            m.angle()

    def test_copying_form_still_works(self):
        m = Matrix([1, 1], [-1])
        m.get_data().flags.writeable = False
        assert absolute(m).value(0) == 1.0
