"""Tests for jsm.elementary.statistics module."""

from __future__ import annotations

import math

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from jsm.elementary import statistics
from jsm.errors import IndexOutOfBoundsError, NotComplexError, SizeMismatchError
from jsm.matrix import Matrix


def _numpy(m):
    return m.to_numpy()


shapes = st.lists(st.integers(min_value=1, max_value=4), min_size=1, max_size=3)


@st.composite
def matrices_and_dims(draw):
    size = draw(shapes)
    n = int(np.prod(size))
    values = draw(st.lists(st.floats(min_value=-1e3, max_value=1e3), min_size=n, max_size=n))
    dim = draw(st.integers(min_value=0, max_value=len(size)))
    return Matrix(size if len(size) > 1 else [size[0], 1], values), dim


class TestSum:
    """Tests for sum."""

    def test_along_each_dimension(self):
        m = Matrix([2, 3], [1, 2, 3, 4, 5, 6])
        assert m.sum(0).get_size() == (1, 3)
        assert m.sum(0).get_data().tolist() == [3.0, 7.0, 11.0]
        assert m.sum(1).get_size() == (2, 1)
        assert m.sum(1).get_data().tolist() == [9.0, 12.0]

    def test_all_elements(self):
        m = Matrix([2, 3], [1, 2, 3, 4, 5, 6])
        out = statistics.sum(m)
        assert out.get_size() == (1, 1)
        assert out.value(0) == 21.0

    def test_dimension_past_the_end(self):
        m = Matrix([2, 3], [1, 2, 3, 4, 5, 6])
        assert m.sum(4).allclose(m)

    def test_third_dimension(self):
        m = Matrix([2, 1, 2], [1, 2, 10, 20])
        out = m.sum(2)
        assert out.get_size() == (2, 1)
        assert out.get_data().tolist() == [11.0, 22.0]

    def test_empty_dimension_is_zero(self):
        out = Matrix([0, 3]).sum(0)
        assert out.get_size() == (1, 3)
        assert out.get_data().tolist() == [0.0, 0.0, 0.0]

    def test_integer_input_gives_double(self):
        out = Matrix([1, 3], [100, 100, 100], "int8").sum(1)
        assert out.type() == "double"
        assert out.value(0) == 300.0

    def test_single_stays_single(self):
        assert Matrix([2, 2], "single").sum(0).type() == "single"

    def test_complex(self):
        z = Matrix([1, 2], [1 + 2j, 3 - 1j])
        assert z.sum(1).value(0) == 4 + 1j

    @pytest.mark.parametrize("dim", [-1, 1.5, True, "0"])
    def test_invalid_dimension(self, dim):
        with pytest.raises(IndexOutOfBoundsError):
            Matrix([2, 2]).sum(dim)

    @given(matrices_and_dims())
    @settings(max_examples=10)
    def test_matches_numpy(self, matrix_and_dim):
        m, dim = matrix_and_dim
        expected = _numpy(m).sum(axis=dim, keepdims=True) if dim < m.ndims() else _numpy(m)
        out = m.sum(dim)
        np.testing.assert_allclose(out.to_numpy().ravel(order="F"), expected.ravel(order="F"))


class TestProdAndMean:
    """Tests for prod and mean."""

    def test_prod(self):
        m = Matrix([2, 2], [1, 2, 3, 4])
        assert m.prod(0).get_data().tolist() == [2.0, 12.0]
        assert m.prod().value(0) == 24.0

    def test_prod_of_empty_is_one(self):
        assert Matrix([0, 2]).prod(0).get_data().tolist() == [1.0, 1.0]

    def test_mean(self):
        m = Matrix([2, 2], [1, 2, 3, 4])
        assert m.mean(0).get_data().tolist() == [1.5, 3.5]
        assert m.mean(1).get_data().tolist() == [2.0, 3.0]
        assert m.mean().value(0) == 2.5

    def test_mean_of_empty_is_nan(self):
        assert math.isnan(Matrix([0, 1]).mean(0).value(0))

    def test_mean_complex(self):
        z = Matrix([2, 1], [1 + 1j, 3 + 3j])
        assert z.mean(0).value(0) == 2 + 2j

    @given(matrices_and_dims())
    @settings(max_examples=10)
    def test_mean_matches_numpy(self, matrix_and_dim):
        m, dim = matrix_and_dim
        expected = _numpy(m).mean(axis=dim, keepdims=True) if dim < m.ndims() else _numpy(m)
        np.testing.assert_allclose(
            m.mean(dim).to_numpy().ravel(order="F"), expected.ravel(order="F"), atol=1e-9
        )


class TestMinMax:
    """Tests for min and max."""

    def test_along_dimensions(self):
        m = Matrix([2, 2], [4, 1, 3, 5])
        assert m.min(0).get_data().tolist() == [1.0, 3.0]
        assert m.max(0).get_data().tolist() == [4.0, 5.0]
        assert m.min(1).get_data().tolist() == [3.0, 1.0]
        assert m.max().value(0) == 5.0

    def test_type_kept(self):
        out = Matrix([1, 3], [7, 200, 3], "uint8").max(1)
        assert out.type() == "uint8"
        assert out.value(0) == 200

    def test_nan_ignored(self):
        m = Matrix([3, 1], [np.nan, 2.0, 1.0])
        assert m.min(0).value(0) == 1.0
        assert m.max(0).value(0) == 2.0

    def test_all_nan(self):
        assert math.isnan(Matrix([2, 1], [np.nan, np.nan]).min(0).value(0))

    def test_complex_by_magnitude(self):
        z = Matrix([1, 3], [3 + 4j, -1j, 2])
        assert z.max(1).value(0) == 3 + 4j
        assert z.min(1).value(0) == -1j

    def test_empty_dimension(self):
        with pytest.raises(SizeMismatchError):
            Matrix([0, 2]).min(0)

    @given(matrices_and_dims())
    @settings(max_examples=10)
    def test_matches_numpy(self, matrix_and_dim):
        m, dim = matrix_and_dim
        values = _numpy(m)
        if dim >= m.ndims():
            expected_min = expected_max = values
        else:
            expected_min = values.min(axis=dim, keepdims=True)
            expected_max = values.max(axis=dim, keepdims=True)
        assert m.min(dim).to_numpy().ravel(order="F").tolist() == expected_min.ravel(order="F").tolist()
        assert m.max(dim).to_numpy().ravel(order="F").tolist() == expected_max.ravel(order="F").tolist()


class TestCumsum:
    """Tests for cumsum."""

    def test_along_dimensions(self):
        m = Matrix([2, 2], [1, 2, 3, 4])
        assert m.cumsum(0).get_data().tolist() == [1.0, 3.0, 3.0, 7.0]
        assert m.cumsum(1).get_data().tolist() == [1.0, 2.0, 4.0, 6.0]

    def test_all_elements_keeps_size(self):
        out = Matrix([2, 2], [1, 2, 3, 4]).cumsum()
        assert out.get_size() == (2, 2)
        assert out.get_data().tolist() == [1.0, 3.0, 6.0, 10.0]

    def test_argument_untouched(self):
        m = Matrix([1, 3], [1, 1, 1])
        statistics.cumsum(m, 1)
        assert m.get_data().tolist() == [1.0, 1.0, 1.0]

    @given(matrices_and_dims())
    @settings(max_examples=10)
    def test_matches_numpy(self, matrix_and_dim):
        m, dim = matrix_and_dim
        expected = np.cumsum(_numpy(m), axis=dim) if dim < m.ndims() else _numpy(m)
        out = m.cumsum(dim)
        assert out.get_size() == m.get_size()
        np.testing.assert_allclose(out.to_numpy(), expected)


class TestSort:
    """Tests for sort."""

    def test_columns(self):
        m = Matrix([3, 2], [3, 1, 2, 6, 5, 4])
        assert m.sort(0).get_data().tolist() == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]

    def test_rows_descend(self):
        m = Matrix([2, 3], [1, 6, 3, 4, 2, 5])
        out = m.sort(1, "descend")
        assert out.to_numpy().tolist() == [[3.0, 2.0, 1.0], [6.0, 5.0, 4.0]]

    def test_nan_placement(self):
        m = Matrix([3, 1], [2.0, np.nan, 1.0])
        up = m.sort(0).get_data().tolist()
        down = m.sort(0, "descend").get_data().tolist()
        assert up[:2] == [1.0, 2.0] and math.isnan(up[2])
        assert math.isnan(down[0]) and down[1:] == [2.0, 1.0]

    def test_type_kept(self):
        out = Matrix([1, 3], [3, -1, 2], "int8").sort(1)
        assert out.type() == "int8"
        assert out.get_data().tolist() == [-1, 2, 3]

    def test_complex_rejected(self):
        with pytest.raises(NotComplexError):
            Matrix([1, 2], [1j, 2]).sort()

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            Matrix([1, 2], [1, 2]).sort(1, "up")

    @given(matrices_and_dims())
    @settings(max_examples=10)
    def test_matches_numpy(self, matrix_and_dim):
        m, dim = matrix_and_dim
        expected = np.sort(_numpy(m), axis=dim) if dim < m.ndims() else _numpy(m)
        out = m.sort(dim)
        assert out.get_size() == m.get_size()
        assert out.to_numpy().tolist() == expected.tolist()
