"""
Tests for transpose, matrix product, inverse and right division.

Validates:
    - transpose shape and involution
    - @ against hand-computed products and the identity
    - LU inverse values, round trips and failure modes
    - mdiv as a @ inv(b), with shape checks before factorization
    - Backend swapping through set_backend
"""

import warnings

import numpy as np
import pytest

from pymatrix import (
    IllConditionedWarning,
    Matrix,
    NotSquareError,
    ShapeMismatchError,
    SingularMatrixError,
    ValidationError,
    get_backend,
    identity,
    inv,
    matmul,
    mrdivide,
    set_backend,
    transpose,
)
from pymatrix.core.compute.kernels import CPUKernels


# Rank-2 matrices whose LU pivots come out as rounding noise, not exact zeros
RANK_DEFICIENT = [
    [[2, 4, 6], [1, 3, 5], [3, 7, 11]],
    [[0.1, 0.2, 0.3], [0.4, 0.5, 0.6], [0.7, 0.8, 0.9]],
]


# ═══════════════════════════════════════════════════════════════════════
# Transpose
# ═══════════════════════════════════════════════════════════════════════

class TestTranspose:

    def test_values(self, tall):
        assert tall.transpose().tolist() == [[1, 3, 5], [2, 4, 6]]

    def test_shape_swaps(self, tall):
        assert tall.T.shape == (2, 3)

    def test_involution(self, rng):
        m = Matrix(rng.standard_normal((4, 7)))
        assert m.T.T == m

    def test_row_vector_becomes_column(self):
        assert Matrix([1, 2, 3]).T.shape == (3, 1)

    def test_free_function(self, tall):
        assert transpose(tall) == tall.T


# ═══════════════════════════════════════════════════════════════════════
# Matrix product
# ═══════════════════════════════════════════════════════════════════════

class TestMatmul:

    def test_matrix_by_column(self, tall):
        result = tall @ Matrix([[10], [20]])
        assert result.tolist() == [[50], [110], [170]]

    def test_result_shape(self, tall):
        assert (tall @ tall.T).shape == (3, 3)
        assert (tall.T @ tall).shape == (2, 2)

    def test_gram_matrix(self, tall):
        assert (tall.T @ tall).tolist() == [[35, 44], [44, 56]]

    def test_identity_is_neutral(self, rng):
        m = Matrix(rng.standard_normal((3, 4)))
        assert identity(3) @ m == m
        assert m @ identity(4) == m

    def test_matches_numpy(self, rng):
        a = rng.standard_normal((4, 6))
        b = rng.standard_normal((6, 3))
        np.testing.assert_allclose((Matrix(a) @ Matrix(b)).to_numpy(), a @ b, rtol=1e-12)

    def test_inner_dimension_mismatch(self, tall):
        with pytest.raises(ShapeMismatchError) as info:
            tall @ tall
        assert info.value.operation == 'matmul'
        assert info.value.lhs_shape == (3, 2)
        assert info.value.rhs_shape == (3, 2)

    def test_numpy_operand_rejected(self, tall):
        with pytest.raises(TypeError):
            tall @ np.eye(2)

    def test_free_function(self, tall):
        assert matmul(tall.T, tall) == tall.T @ tall


# ═══════════════════════════════════════════════════════════════════════
# Inverse
# ═══════════════════════════════════════════════════════════════════════

class TestInverse:

    def test_known_inverse(self, invertible):
        expected = [
            [-0.125, -0.125, 0.375],
            [0.0, 0.25, 0.0],
            [0.375, -0.125, -0.125],
        ]
        np.testing.assert_allclose(invertible.inverse().to_numpy(), expected, atol=1e-12)

    def test_product_with_inverse_is_identity(self, well_conditioned):
        product = well_conditioned @ well_conditioned.inverse()
        np.testing.assert_allclose(product.to_numpy(), np.eye(5), atol=1e-10)

    def test_inverse_of_inverse(self, well_conditioned):
        twice = well_conditioned.inverse().inverse()
        np.testing.assert_allclose(twice.to_numpy(), well_conditioned.to_numpy(), atol=1e-10)

    def test_identity_inverse_is_exact(self):
        assert identity(4).inverse() == identity(4)

    def test_one_by_one(self):
        assert Matrix([[4]]).inverse().value == 0.25

    def test_input_unchanged(self, invertible):
        before = invertible.to_numpy()
        invertible.inverse()
        np.testing.assert_array_equal(invertible.to_numpy(), before)

    def test_not_square(self, tall):
        with pytest.raises(NotSquareError) as info:
            tall.inverse()
        assert info.value.shape == (3, 2)

    def test_singular(self):
        with pytest.raises(SingularMatrixError) as info:
            Matrix([[1, 2], [2, 4]]).inverse()
        assert info.value.pivot_index == 1

    def test_zero_matrix_singular(self):
        with pytest.raises(SingularMatrixError):
            Matrix([[0, 0], [0, 0]]).inverse()

    @pytest.mark.parametrize("rows", RANK_DEFICIENT)
    def test_rank_deficient_rejected(self, rows):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            with pytest.raises(SingularMatrixError) as info:
                Matrix(rows).inverse()
        assert info.value.pivot_index == 2

    def test_nan_input_rejected(self):
        with pytest.raises(SingularMatrixError, match="non-finite"):
            Matrix([[1, np.nan], [0, 1]]).inverse()

    def test_nearly_singular_warns(self):
        m = Matrix([[1, 1], [1, 1 + 1e-13]])
        with pytest.warns(IllConditionedWarning, match="rcond"):
            m.inverse()

    def test_well_conditioned_does_not_warn(self, well_conditioned):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            well_conditioned.inverse()

    def test_free_function(self, invertible):
        assert inv(invertible) == invertible.inverse()


# ═══════════════════════════════════════════════════════════════════════
# Right division
# ═══════════════════════════════════════════════════════════════════════

class TestMrdivide:

    def test_known_quotient(self, tall):
        result = tall.mdiv(Matrix([[5, 6], [7, 8]]))
        np.testing.assert_allclose(
            result.to_numpy(), [[3, -2], [2, -1], [1, 0]], atol=1e-10
        )

    def test_times_divisor_recovers_dividend(self, rng, well_conditioned):
        a = Matrix(rng.standard_normal((3, 5)))
        recovered = a.mdiv(well_conditioned) @ well_conditioned
        np.testing.assert_allclose(recovered.to_numpy(), a.to_numpy(), atol=1e-10)

    def test_by_identity(self, tall):
        assert tall.mdiv(identity(2)) == tall

    def test_accepts_nested_rows(self, tall):
        assert tall.mdiv([[1, 0], [0, 1]]) == tall

    def test_divisor_not_square(self, tall):
        with pytest.raises(NotSquareError) as info:
            tall.mdiv(tall)
        assert info.value.operation == 'mrdivide'

    def test_shape_mismatch(self):
        with pytest.raises(ShapeMismatchError) as info:
            Matrix([[1, 2, 3]]).mdiv(identity(2))
        assert not isinstance(info.value, NotSquareError)
        assert info.value.operation == 'mrdivide'

    def test_square_check_comes_first(self):
        with pytest.raises(NotSquareError):
            Matrix([[1, 2, 3]]).mdiv(Matrix([[1, 2]]))

    @pytest.mark.parametrize("rows", RANK_DEFICIENT)
    def test_rank_deficient_divisor(self, rows):
        with pytest.raises(SingularMatrixError) as info:
            Matrix([[1, 2, 3], [4, 5, 6]]).mdiv(rows)
        assert info.value.matrix_name == 'divisor'

    def test_singular_divisor(self, tall):
        with pytest.raises(SingularMatrixError) as info:
            tall.mdiv(Matrix([[1, 2], [2, 4]]))
        assert info.value.matrix_name == 'divisor'

    def test_free_function(self, tall):
        divisor = Matrix([[5, 6], [7, 8]])
        assert mrdivide(tall, divisor) == tall.mdiv(divisor)


# ═══════════════════════════════════════════════════════════════════════
# Backend selection
# ═══════════════════════════════════════════════════════════════════════

class CountingKernels(CPUKernels):
    """CPU kernels that record product and factorization calls."""

    def __init__(self):
        self.calls = []

    @property
    def name(self) -> str:
        return 'counting'

    def gemm(self, a, b):
        self.calls.append('gemm')
        return super().gemm(a, b)

    def lu_factor(self, a, matrix_name='A'):
        self.calls.append('lu_factor')
        return super().lu_factor(a, matrix_name=matrix_name)

    def lu_inverse(self, factors, matrix_name='A'):
        self.calls.append('lu_inverse')
        return super().lu_inverse(factors, matrix_name=matrix_name)


class TestBackend:

    def test_default_is_cpu(self):
        assert get_backend().name == 'cpu_numpy'

    def test_operations_route_through_backend(self, tall, invertible):
        counting = CountingKernels()
        previous = set_backend(counting)
        try:
            assert get_backend() is counting
            tall.T @ tall
            invertible.inverse()
            tall.mdiv(identity(2))
        finally:
            set_backend(previous)
        assert counting.calls == [
            'gemm',
            'lu_factor', 'lu_inverse',
            'lu_factor', 'lu_inverse', 'gemm',
        ]
        assert get_backend() is previous

    def test_unknown_name(self):
        with pytest.raises(ValidationError, match="Unknown backend"):
            set_backend('gpu')

    def test_not_a_backend(self):
        with pytest.raises(ValidationError):
            set_backend(object())
