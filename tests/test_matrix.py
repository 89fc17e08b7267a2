"""
test_matrix.py
~~~~~~~~~~~~~~

Unit tests for the dense matrix engine.
"""

import numpy as np
import pytest

from feedforward.exceptions import (
    ConstructionSizeMismatch,
    DimensionMismatch,
    FeedforwardError,
)
from feedforward.matrix import Matrix, default_random_source


@pytest.fixture
def square():
    """A 2x2 matrix with distinct entries."""
    return Matrix.from_rows([[1.0, 2.0], [3.0, 4.0]])


@pytest.fixture
def wide():
    """A 2x3 matrix."""
    return Matrix.from_rows([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])


@pytest.mark.unit
class TestConstruction:
    """Test the matrix constructors."""

    def test_zeros(self):
        """Test that zeros fills every entry with 0.0."""
        m = Matrix.zeros(2, 3)

        assert m.shape == (2, 3)
        assert m.data == (0.0,) * 6

    def test_random_in_unit_interval(self):
        """Test that random entries fall in [0, 1)."""
        m = Matrix.random(3, 4, default_random_source(0))

        assert m.shape == (3, 4)
        assert len(m.data) == 12
        for value in m.data:
            assert 0.0 <= value < 1.0

    def test_random_uses_injected_source(self):
        """Test that random draws entries from the given source in order."""
        values = iter([0.1, 0.2, 0.3, 0.4, 0.5, 0.6])
        m = Matrix.random(2, 3, lambda: next(values))

        assert m.to_list() == [[0.1, 0.2, 0.3], [0.4, 0.5, 0.6]]

    def test_seeded_random_is_reproducible(self):
        """Test that the same seed produces the same matrix."""
        a = Matrix.random(3, 3, default_random_source(7))
        b = Matrix.random(3, 3, default_random_source(7))

        assert a == b

    def test_from_buffer(self):
        """Test that from_buffer lays data out in row-major order."""
        m = Matrix.from_buffer(2, 3, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])

        assert m[0, 2] == 3.0
        assert m[1, 0] == 4.0

    @pytest.mark.parametrize('length', [0, 5, 7, 12])
    def test_from_buffer_rejects_wrong_length(self, length):
        """Test that any buffer length other than rows * cols is rejected."""
        with pytest.raises(ConstructionSizeMismatch) as exc_info:
            Matrix.from_buffer(2, 3, [1.0] * length)
        assert "expected 6" in str(exc_info.value)

    def test_from_vector_is_column(self):
        """Test that from_vector produces an (n, 1) matrix."""
        m = Matrix.from_vector([1.0, 2.0, 3.0])

        assert m.shape == (3, 1)
        assert m.data == (1.0, 2.0, 3.0)

    def test_from_rows_empty(self):
        """Test that an empty row list gives a 0x0 matrix."""
        m = Matrix.from_rows([])

        assert m.shape == (0, 0)
        assert m.data == ()
        assert m == Matrix.zeros(0, 0)

    def test_from_rows_rejects_ragged_rows(self):
        """Test that rows of unequal length are rejected."""
        with pytest.raises(ConstructionSizeMismatch):
            Matrix.from_rows([[1.0, 2.0], [3.0]])

    def test_errors_are_value_errors(self):
        """Test that construction errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            Matrix.from_buffer(1, 1, [])
        with pytest.raises(FeedforwardError):
            Matrix.from_buffer(1, 1, [])

    def test_data_is_immutable(self, square):
        """Test that the backing buffer cannot be modified in place."""
        with pytest.raises(TypeError):
            square.data[0] = 10.0


@pytest.mark.unit
class TestElementwise:
    """Test elementwise operations."""

    def test_add(self):
        """Test elementwise addition of 3x3 matrices."""
        a = Matrix.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
        b = Matrix.from_rows([[5, 6, 7], [8, 9, 10], [11, 12, 13]])

        expected = Matrix.from_rows([[6, 8, 10], [12, 14, 16], [18, 20, 22]])
        assert a.add(b) == expected

    def test_add_is_commutative(self, square):
        """Test that a + b == b + a."""
        other = Matrix.from_rows([[0.5, -1.0], [2.25, 8.0]])

        assert square.add(other) == other.add(square)

    def test_subtract(self, square):
        """Test elementwise subtraction."""
        other = Matrix.from_rows([[5.0, 6.0], [7.0, 8.0]])

        assert square.subtract(other) == Matrix.from_rows([[-4, -4], [-4, -4]])

    def test_subtract_self_is_zero(self, wide):
        """Test that a - a is the zero matrix of the same shape."""
        assert wide.subtract(wide) == Matrix.zeros(2, 3)

    def test_elementwise_multiply(self, square):
        """Test the Hadamard product."""
        other = Matrix.from_rows([[5.0, 6.0], [7.0, 8.0]])

        expected = Matrix.from_rows([[5.0, 12.0], [21.0, 32.0]])
        assert square.elementwise_multiply(other) == expected

    @pytest.mark.parametrize(
        'operation', ['add', 'subtract', 'elementwise_multiply']
    )
    def test_shape_mismatch(self, square, wide, operation):
        """Test that mismatched shapes raise and leave operands untouched."""
        square_before = square.data
        wide_before = wide.data

        with pytest.raises(DimensionMismatch):
            getattr(square, operation)(wide)

        assert square.data == square_before
        assert wide.data == wide_before

    def test_operations_return_new_matrices(self, square):
        """Test that operands are not mutated by arithmetic."""
        before = square.data
        result = square.add(square)

        assert result is not square
        assert square.data == before

    def test_map_identity(self, square):
        """Test that mapping the identity returns an equal matrix."""
        assert square.map(lambda x: x) == square

    def test_map_add_one(self, square):
        """Test that mapping x + 1 increments every entry."""
        assert square.map(lambda x: x + 1) == Matrix.from_rows([[2, 3], [4, 5]])

    def test_map_square(self, square):
        """Test that mapping x * x squares every entry."""
        assert square.map(lambda x: x * x) == Matrix.from_rows([[1, 4], [9, 16]])


@pytest.mark.unit
class TestLinearAlgebra:
    """Test matrix product and transpose."""

    def test_dot_multiply(self, wide):
        """Test the textbook 2x3 by 3x2 product."""
        b = Matrix.from_rows([[7, 8], [9, 10], [11, 12]])

        expected = Matrix.from_rows([[58, 64], [139, 154]])
        assert wide.dot_multiply(b) == expected

    def test_dot_multiply_matches_numpy(self):
        """Test the product against numpy on random operands."""
        source = default_random_source(3)
        a = Matrix.random(4, 5, source)
        b = Matrix.random(5, 3, source)

        result = a.dot_multiply(b)

        assert result.shape == (4, 3)
        assert np.allclose(result.to_array(), a.to_array() @ b.to_array())

    def test_dot_multiply_mismatch(self, wide):
        """Test that incompatible inner dimensions raise DimensionMismatch."""
        with pytest.raises(DimensionMismatch) as exc_info:
            wide.dot_multiply(wide)
        assert "inner dimensions" in str(exc_info.value)

    def test_transpose_2x2(self, square):
        """Test transposing a square matrix."""
        assert square.transpose() == Matrix.from_rows([[1, 3], [2, 4]])

    def test_transpose_4x3(self):
        """Test that transposing swaps the shape."""
        m = Matrix.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 9], [10, 11, 12]])

        expected = Matrix.from_rows(
            [[1, 4, 7, 10], [2, 5, 8, 11], [3, 6, 9, 12]]
        )
        assert m.transpose() == expected

    def test_double_transpose(self, wide):
        """Test that transposing twice returns the original."""
        assert wide.transpose().transpose() == wide

    def test_operators(self, square):
        """Test the operator shortcuts."""
        assert square + square == square.add(square)
        assert square - square == Matrix.zeros(2, 2)
        assert square * square == square.elementwise_multiply(square)
        assert square @ square == square.dot_multiply(square)


@pytest.mark.unit
class TestInspection:
    """Test equality, indexing and display."""

    def test_equality_is_exact(self, square):
        """Test that a tiny difference breaks equality."""
        nudged = Matrix.from_rows([[1.0, 2.0], [3.0, 4.0 + 1e-12]])

        assert square != nudged

    def test_equality_requires_same_shape(self):
        """Test that identical buffers with different shapes are unequal."""
        data = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]

        assert Matrix.from_buffer(2, 3, data) != Matrix.from_buffer(3, 2, data)

    def test_index_out_of_range(self, square):
        """Test that indexing outside the matrix raises IndexError."""
        with pytest.raises(IndexError):
            square[2, 0]

    def test_str(self, square):
        """Test that rows are newline-separated and columns tab-separated."""
        assert str(square) == "1.0\t2.0\n3.0\t4.0"

    def test_to_list(self, wide):
        """Test conversion to nested lists."""
        assert wide.to_list() == [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]
