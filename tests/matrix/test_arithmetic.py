"""
Tests for broadcasting elementwise arithmetic.

Shape resolution order: same shape, rhs row vector, rhs column vector,
otherwise ShapeMismatchError. * and / are always Hadamard.
"""

import numpy as np
import pytest

from pymatrix import Matrix, ShapeMismatchError
from pymatrix.matrix._broadcast import resolve_broadcast


class TestResolveBroadcast:

    def test_same(self):
        assert resolve_broadcast((3, 2), (3, 2), 'add') == 'same'

    def test_row(self):
        assert resolve_broadcast((3, 2), (1, 2), 'add') == 'row'

    def test_column(self):
        assert resolve_broadcast((3, 2), (3, 1), 'add') == 'column'

    def test_same_wins_over_vectors(self):
        assert resolve_broadcast((1, 1), (1, 1), 'add') == 'same'

    def test_row_wins_over_column(self):
        # A 1x1 rhs against a 3x1 lhs fits the row rule first
        assert resolve_broadcast((3, 1), (1, 1), 'add') == 'row'

    def test_mismatch(self):
        with pytest.raises(ShapeMismatchError) as info:
            resolve_broadcast((3, 2), (2, 3), 'add')
        assert info.value.lhs_shape == (3, 2)
        assert info.value.rhs_shape == (2, 3)
        assert info.value.operation == 'add'

    def test_one_sided(self):
        with pytest.raises(ShapeMismatchError):
            resolve_broadcast((1, 2), (3, 2), 'add')


class TestAddition:

    def test_matrix_matrix(self, tall):
        b = Matrix([[10, 20], [30, 40], [50, 60]])
        assert (tall + b).tolist() == [[11, 22], [33, 44], [55, 66]]

    def test_row_vector_added_to_every_row(self, tall):
        b = Matrix([10, 20])
        assert (tall + b).tolist() == [[11, 22], [13, 24], [15, 26]]

    def test_column_vector_added_to_every_column(self, tall):
        c = Matrix([[1], [2], [3]])
        assert (tall + c).tolist() == [[2, 3], [5, 6], [8, 9]]

    def test_scalar_both_sides(self, tall):
        expected = [[2, 3], [4, 5], [6, 7]]
        assert (tall + 1).tolist() == expected
        assert (1 + tall).tolist() == expected

    def test_vector_on_left_rejected(self, tall):
        with pytest.raises(ShapeMismatchError):
            Matrix([10, 20]) + tall

    def test_incompatible(self, tall):
        with pytest.raises(ShapeMismatchError, match="3x2 matrix and 2x3 matrix"):
            tall + tall.T


class TestSubtraction:

    def test_matrix_matrix(self, tall):
        b = Matrix([[10, 20], [30, 40], [50, 60]])
        assert (b - tall).tolist() == [[9, 18], [27, 36], [45, 54]]

    def test_matrix_minus_self_is_zero(self, tall):
        assert (tall - tall).sum() == 0

    def test_row_vector(self, tall):
        assert (tall - Matrix([1, 2])).tolist() == [[0, 0], [2, 2], [4, 4]]

    def test_column_vector(self, tall):
        assert (tall - Matrix([[1], [3], [5]])).tolist() == [[0, 1], [0, 1], [0, 1]]

    def test_matrix_minus_scalar(self, tall):
        assert (tall - 1).tolist() == [[0, 1], [2, 3], [4, 5]]

    def test_scalar_minus_matrix(self, tall):
        assert (10 - tall).tolist() == [[9, 8], [7, 6], [5, 4]]

    def test_negate(self, tall):
        assert (-tall).tolist() == [[-1, -2], [-3, -4], [-5, -6]]

    def test_negate_twice(self, tall):
        assert -(-tall) == tall


class TestHadamardMultiply:

    def test_matrix_matrix_is_elementwise(self):
        a = Matrix([[1, 2], [3, 4]])
        b = Matrix([[5, 6], [7, 8]])
        assert (a * b).tolist() == [[5, 12], [21, 32]]
        assert (a @ b).tolist() == [[19, 22], [43, 50]]

    def test_product_shapes_do_not_enable_hadamard(self, tall):
        square = Matrix([[1, 0], [0, 1]])
        assert (tall @ square) == tall
        with pytest.raises(ShapeMismatchError):
            tall * square

    def test_row_vector(self, tall):
        assert (tall * Matrix([10, 100])).tolist() == [[10, 200], [30, 400], [50, 600]]

    def test_column_vector(self, tall):
        assert (tall * Matrix([[1], [0], [-1]])).tolist() == [[1, 2], [0, 0], [-5, -6]]

    def test_scalar_both_sides(self, tall):
        expected = [[10, 20], [30, 40], [50, 60]]
        assert (tall * 10).tolist() == expected
        assert (10 * tall).tolist() == expected


class TestHadamardDivide:

    def test_matrix_matrix(self):
        a = Matrix([[10, 20], [30, 40]])
        b = Matrix([[2, 4], [5, 8]])
        assert (a / b).tolist() == [[5, 5], [6, 5]]

    def test_row_vector(self):
        a = Matrix([[10, 20], [30, 40], [60, 80]])
        b = Matrix([5, 4])
        assert (a / b).tolist() == [[2, 5], [6, 10], [12, 20]]

    def test_column_vector(self):
        a = Matrix([[10, 20], [30, 40]])
        b = Matrix([[10], [10]])
        assert (a / b).tolist() == [[1, 2], [3, 4]]

    def test_matrix_by_scalar(self, tall):
        np.testing.assert_allclose(
            (tall / 10).to_numpy(), [[0.1, 0.2], [0.3, 0.4], [0.5, 0.6]], atol=1e-10
        )
        assert (Matrix([[10, 20], [30, 40]]) / 10).tolist() == [[1, 2], [3, 4]]

    def test_scalar_by_matrix(self, tall):
        np.testing.assert_allclose(
            (10 / tall).to_numpy(),
            [[10, 5], [10 / 3, 2.5], [2, 10 / 6]],
            atol=1e-10,
        )

    def test_divide_by_zero_follows_ieee(self):
        result = Matrix([[1, -1, 0]]) / 0
        assert result[0] == np.inf
        assert result[1] == -np.inf
        assert np.isnan(result[2])


class TestOperandTypes:

    def test_unsupported_operand(self, tall):
        with pytest.raises(TypeError):
            tall + "a"

    def test_bool_is_not_a_scalar(self, tall):
        with pytest.raises(TypeError):
            tall + True

    def test_numpy_scalar_on_right(self, tall):
        assert (tall * np.float64(2)).tolist() == [[2, 4], [6, 8], [10, 12]]
