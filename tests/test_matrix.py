"""
Unit tests for the Matrix module.

Tests:
- Construction and capacity
- add_value / fill
- Row and column extraction
- Multiplication
"""

import pytest
from intmatrix.core.matrix import Matrix, PopulationState, multiply
from intmatrix.core.domain import IntegerDomain, WIDE_DOMAIN
from intmatrix.core.errors import (
    CapacityExhaustedError, IncompatibleMatrixError, IncompatibleReason
)


def make_matrix(cols, rows, values):
    matrix = Matrix(cols, rows)
    matrix.fill(values)
    return matrix


class TestConstruction:
    """Tests for matrix construction."""

    def test_dimensions(self):
        """Dimensions are stored as given (cols first)."""
        m = Matrix(3, 4)
        assert m.cols == 3
        assert m.rows == 4

    def test_capacity_is_product(self):
        """Capacity is rows * cols, not rows + cols."""
        assert Matrix(3, 4).capacity == 12
        assert Matrix(2, 2).capacity == 4
        assert Matrix(1, 5).capacity == 5

    def test_starts_empty(self):
        """A new matrix holds no cells."""
        m = Matrix(2, 3)
        assert len(m) == 0
        assert m.cells == ()
        assert m.remaining == 6
        assert m.state == PopulationState.PARTIAL

    def test_default_domain_is_wide(self):
        """Default domain is 128-bit."""
        assert Matrix(1, 1).domain == WIDE_DOMAIN
        assert Matrix(1, 1).domain.bits == 128

    def test_zero_dimensions(self):
        """Zero-sized matrices are full from the start."""
        m = Matrix(0, 3)
        assert m.capacity == 0
        assert m.is_populated

    def test_from_rows(self):
        """from_rows fills in row-major order."""
        m = Matrix.from_rows([[1, 2, 3], [4, 5, 6]])
        assert m.rows == 2
        assert m.cols == 3
        assert m.cells == (1, 2, 3, 4, 5, 6)
        assert m.is_populated

    def test_copy_is_independent(self):
        """Filling a copy leaves the original untouched."""
        m = make_matrix(2, 2, [1, 2])
        duplicate = m.copy()
        duplicate.fill([3, 4])
        assert m.cells == (1, 2)
        assert duplicate.cells == (1, 2, 3, 4)
        assert duplicate.domain == m.domain

    def test_dimensions_immutable(self):
        """Dimensions, capacity and domain cannot be reassigned."""
        m = make_matrix(2, 2, [1, 2, 3, 4])
        with pytest.raises(AttributeError):
            m.rows = 5
        with pytest.raises(AttributeError):
            m.cols = 5
        with pytest.raises(AttributeError):
            m.capacity = 0
        with pytest.raises(AttributeError):
            m.domain = IntegerDomain(8)
        assert (m.rows, m.cols, m.capacity) == (2, 2, 4)
        assert m.domain == WIDE_DOMAIN
        assert m.row(1) == [3, 4]
        assert m.col(0) == [1, 3]


class TestAddValue:
    """Tests for filling a matrix."""

    def test_accepts_exactly_capacity(self):
        """A 2x2 matrix takes 4 values and rejects the 5th."""
        m = Matrix(2, 2)
        for i in range(4):
            m.add_value(i)
        with pytest.raises(CapacityExhaustedError) as exc_info:
            m.add_value(5)
        assert str(exc_info.value) == "Capacity of 4 exhausted."
        assert exc_info.value.capacity == 4

    def test_returns_remaining(self):
        """add_value returns the free slots left, counting down to 0."""
        m = Matrix(3, 2)
        assert [m.add_value(i) for i in range(6)] == [5, 4, 3, 2, 1, 0]

    @pytest.mark.parametrize("cols,rows", [(1, 1), (3, 4), (5, 2), (1, 7)])
    def test_capacity_for_various_shapes(self, cols, rows):
        """Every shape accepts cols*rows values, then rejects."""
        m = Matrix(cols, rows)
        for i in range(cols * rows):
            m.add_value(i)
        with pytest.raises(CapacityExhaustedError):
            m.add_value(0)

    def test_rejected_value_not_stored(self):
        """A rejected value leaves the cells unchanged."""
        m = make_matrix(1, 1, [7])
        with pytest.raises(CapacityExhaustedError):
            m.add_value(8)
        assert m.cells == (7,)

    def test_state_transition(self):
        """State goes PARTIAL -> FULL on the last value."""
        m = Matrix(2, 1)
        m.add_value(1)
        assert m.state == PopulationState.PARTIAL
        m.add_value(2)
        assert m.state == PopulationState.FULL

    def test_fill_returns_remaining(self):
        """fill returns the remaining capacity."""
        m = Matrix(2, 2)
        assert m.fill([1, 2, 3]) == 1
        assert m.fill([]) == 1

    def test_fill_stops_at_capacity(self):
        """fill keeps values added before the failure."""
        m = Matrix(2, 1)
        with pytest.raises(CapacityExhaustedError):
            m.fill([1, 2, 3])
        assert m.cells == (1, 2)

    def test_negative_values(self):
        """Signed values are stored as-is."""
        m = make_matrix(2, 1, [-5, 9])
        assert m.row(0) == [-5, 9]


class TestRowCol:
    """Tests for row and column extraction."""

    @pytest.fixture
    def matrix(self):
        #        cols
        #       0  1  2
        # rows  3  4  5
        #       6  7  8
        #       9 10 11
        return make_matrix(3, 4, range(12))

    def test_rows(self, matrix):
        """row(i) is the contiguous slice [i*cols, i*cols+cols)."""
        assert matrix.row(0) == [0, 1, 2]
        assert matrix.row(1) == [3, 4, 5]
        assert matrix.row(2) == [6, 7, 8]
        assert matrix.row(3) == [9, 10, 11]

    def test_row_out_of_range(self, matrix):
        """row(i) for i >= rows is empty."""
        assert matrix.row(4) == []
        assert matrix.row(100) == []

    def test_cols(self, matrix):
        """col(i) strides the buffer by cols from offset i."""
        assert matrix.col(0) == [0, 3, 6, 9]
        assert matrix.col(1) == [1, 4, 7, 10]
        assert matrix.col(2) == [2, 5, 8, 11]

    def test_col_out_of_range(self, matrix):
        """col(i) for i >= cols is empty."""
        assert matrix.col(3) == []

    def test_negative_index_empty(self, matrix):
        """Negative indices are out of range."""
        assert matrix.row(-1) == []
        assert matrix.col(-1) == []

    def test_column_vector(self):
        """A 3x1 matrix has one column holding every value."""
        m = make_matrix(1, 3, [4, 5, 6])
        assert m.col(0) == [4, 5, 6]
        assert m.row(1) == [5]

    def test_row_is_a_copy(self, matrix):
        """Mutating a returned row does not touch the matrix."""
        row = matrix.row(0)
        row[0] = 99
        assert matrix.row(0) == [0, 1, 2]

    def test_to_rows(self, matrix):
        """to_rows lists every row."""
        assert matrix.to_rows() == [[0, 1, 2], [3, 4, 5], [6, 7, 8], [9, 10, 11]]


class TestMultiply:
    """Tests for matrix multiplication."""

    def test_two_by_three_times_three_by_two(self):
        """2x3 times 3x2 gives a 2x2 matrix."""
        # | 3 2 1 | * | 1 2 | = | 7 8 |
        # | 1 0 2 |   | 0 1 |   | 9 2 |
        #             | 4 0 |
        lhs = make_matrix(3, 2, [3, 2, 1, 1, 0, 2])
        rhs = make_matrix(2, 3, [1, 2, 0, 1, 4, 0])
        result = multiply(lhs, rhs)
        assert result.row(0) == [7, 8]
        assert result.row(1) == [9, 2]
        assert result.rows == 2
        assert result.cols == 2

    def test_rhs_vector(self):
        """2x3 times a 3x1 column gives a 2x1 column."""
        lhs = make_matrix(3, 2, [1, 2, 3, 3, 2, 1])
        rhs = make_matrix(1, 3, [4, 5, 6])
        result = multiply(lhs, rhs)
        assert result.col(0) == [32, 28]
        assert result.col(1) == []
        assert result.rows == 2
        assert result.cols == 1

    def test_square_lhs_rhs_vector(self):
        """3x3 times a 3x1 column."""
        lhs = make_matrix(3, 3, [1, 2, 3, 3, 2, 1, 6, 7, 8])
        rhs = make_matrix(1, 3, [4, 5, 6])
        result = multiply(lhs, rhs)
        assert result.col(0) == [32, 28, 107]
        assert result.col(1) == []
        assert result.rows == 3
        assert result.cols == 1

    def test_result_is_full(self):
        """The product is fully populated."""
        lhs = Matrix.from_rows([[1, 2], [3, 4]])
        rhs = Matrix.from_rows([[5], [6]])
        result = multiply(lhs, rhs)
        assert result.is_populated
        assert result.capacity == 2

    def test_identity(self):
        """Multiplying by the identity returns the same cells."""
        a = Matrix.from_rows([[2, -3], [7, 11]])
        identity = Matrix.from_rows([[1, 0], [0, 1]])
        assert multiply(a, identity) == a
        assert multiply(identity, a) == a

    def test_operands_unchanged(self):
        """Multiplication does not modify its operands."""
        lhs = Matrix.from_rows([[1, 2], [3, 4]])
        rhs = Matrix.from_rows([[5, 6], [7, 8]])
        multiply(lhs, rhs)
        assert lhs.cells == (1, 2, 3, 4)
        assert rhs.cells == (5, 6, 7, 8)

    def test_row_to_col_mismatch(self):
        """3x3 times 2x1 is rejected with ROW_TO_COL_MISMATCH."""
        lhs = make_matrix(3, 3, [1, 2, 3, 3, 2, 1, 6, 7, 8])
        rhs = make_matrix(1, 2, [4, 5])
        with pytest.raises(IncompatibleMatrixError) as exc_info:
            multiply(lhs, rhs)
        assert exc_info.value.reason == IncompatibleReason.ROW_TO_COL_MISMATCH
        assert exc_info.value.side is None

    def test_mismatch_checked_before_population(self):
        """Dimension mismatch wins even if operands are empty."""
        with pytest.raises(IncompatibleMatrixError) as exc_info:
            multiply(Matrix(3, 3), Matrix(1, 2))
        assert exc_info.value.reason == IncompatibleReason.ROW_TO_COL_MISMATCH

    def test_lhs_not_populated(self):
        """Under-filled lhs is rejected with NOT_POPULATED."""
        lhs = make_matrix(2, 2, [1, 2, 3])
        rhs = make_matrix(1, 2, [1, 2])
        with pytest.raises(IncompatibleMatrixError) as exc_info:
            multiply(lhs, rhs)
        assert exc_info.value.reason == IncompatibleReason.NOT_POPULATED
        assert exc_info.value.side == "lhs"

    def test_rhs_not_populated(self):
        """Under-filled rhs is rejected with NOT_POPULATED."""
        lhs = make_matrix(2, 2, [1, 2, 3, 4])
        rhs = make_matrix(1, 2, [1])
        with pytest.raises(IncompatibleMatrixError) as exc_info:
            multiply(lhs, rhs)
        assert exc_info.value.reason == IncompatibleReason.NOT_POPULATED
        assert exc_info.value.side == "rhs"

    def test_lhs_checked_before_rhs(self):
        """With both operands partial, lhs is reported."""
        with pytest.raises(IncompatibleMatrixError) as exc_info:
            multiply(Matrix(2, 2), Matrix(2, 2))
        assert exc_info.value.side == "lhs"

    def test_inner_dimension_zero(self):
        """2x0 times 0x3 is a 2x3 zero matrix."""
        result = multiply(Matrix(0, 2), Matrix(3, 0))
        assert result.rows == 2
        assert result.cols == 3
        assert result.cells == (0,) * 6

    def test_result_uses_lhs_domain(self):
        """The product lives in the lhs domain."""
        domain = IntegerDomain(32)
        lhs = Matrix.from_rows([[1, 2]], domain=domain)
        rhs = Matrix.from_rows([[3], [4]])
        assert multiply(lhs, rhs).domain == domain
