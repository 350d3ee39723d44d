"""
Fixed-Capacity Integer Matrix

A dense, row-major matrix over signed fixed-width integers, built for
integer-domain linear algebra such as Hill-style cipher transforms.

Features:
- Declared dimensions, capacity = rows * cols, fixed at construction
- Linear fill: values are appended one at a time in row-major order
- Row and column extraction
- Checked matrix multiplication (no silent wrap-around)

The matrix never reorders or mutates stored cells. Row and column
accessors only read the populated part of the buffer, so a partially
filled matrix returns shorter (or empty) rows and columns instead of
failing.

Author: intmatrix Project
"""

from enum import Enum
from typing import List, Tuple, Iterable, Sequence

from .domain import IntegerDomain, WIDE_DOMAIN
from .errors import (
    CapacityExhaustedError,
    IncompatibleMatrixError,
)


class PopulationState(Enum):
    """Fill state of a matrix. Transitions only go PARTIAL -> FULL."""
    PARTIAL = "partial"
    FULL = "full"


def _check_dimension(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


class Matrix:
    """
    Row-major matrix of signed integers with a fixed capacity.

    Cell (r, c) lives at linear index r * cols + c. Values are supplied by
    the caller in that order through add_value().

    Example:
        >>> m = Matrix(cols=2, rows=2)
        >>> m.fill([1, 2, 3, 4])
        0
        >>> m.row(1)
        [3, 4]
        >>> m.col(0)
        [1, 3]
    """

    def __init__(self, cols: int, rows: int, domain: IntegerDomain = WIDE_DOMAIN):
        """
        Create an empty matrix.

        Args:
            cols: Number of columns (>= 0)
            rows: Number of rows (>= 0)
            domain: Integer range every cell must lie in

        Raises:
            TypeError: If a dimension is not an integer, or domain is not
                an IntegerDomain
            ValueError: If a dimension is negative
        """
        self._cols = _check_dimension("cols", cols)
        self._rows = _check_dimension("rows", rows)
        self._capacity = cols * rows
        if not isinstance(domain, IntegerDomain):
            raise TypeError(f"domain must be an IntegerDomain, got {type(domain).__name__}")
        self._domain = domain
        self._cells: List[int] = []

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[int]],
        domain: IntegerDomain = WIDE_DOMAIN
    ) -> 'Matrix':
        """
        Build a fully populated matrix from a list of rows.

        Args:
            rows: Rectangular sequence of row sequences
            domain: Integer range for the cells

        Returns:
            New Matrix with len(rows) rows

        Raises:
            ValueError: If rows have different lengths
        """
        row_count = len(rows)
        col_count = len(rows[0]) if rows else 0
        for index, row in enumerate(rows):
            if len(row) != col_count:
                raise ValueError(
                    f"Row {index} has {len(row)} values, expected {col_count}"
                )

        matrix = cls(col_count, row_count, domain=domain)
        for row in rows:
            matrix.fill(row)
        return matrix

    # ========================================================================
    # Properties
    # ========================================================================

    @property
    def rows(self) -> int:
        """Number of rows."""
        return self._rows

    @property
    def cols(self) -> int:
        """Number of columns."""
        return self._cols

    @property
    def capacity(self) -> int:
        """Maximum number of cells (rows * cols)."""
        return self._capacity

    @property
    def domain(self) -> IntegerDomain:
        return self._domain

    @property
    def cells(self) -> Tuple[int, ...]:
        """Populated cells in row-major order (read-only copy)."""
        return tuple(self._cells)

    @property
    def remaining(self) -> int:
        """Number of free slots."""
        return self._capacity - len(self._cells)

    @property
    def state(self) -> PopulationState:
        if len(self._cells) == self._capacity:
            return PopulationState.FULL
        return PopulationState.PARTIAL

    @property
    def is_populated(self) -> bool:
        """True once every cell has a value."""
        return self.state is PopulationState.FULL

    def __len__(self) -> int:
        return len(self._cells)

    # ========================================================================
    # Filling
    # ========================================================================

    def add_value(self, value: int) -> int:
        """
        Append the next cell value.

        Args:
            value: Signed integer within the matrix domain

        Returns:
            Remaining free slots after the append

        Raises:
            CapacityExhaustedError: If the matrix is already full
            TypeError: If value is not an int (bool and float are rejected)
            MatrixOverflowError: If value is outside the domain
        """
        if len(self._cells) >= self._capacity:
            raise CapacityExhaustedError(self._capacity)
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Matrix values must be integers, got {type(value).__name__}")

        self._cells.append(self._domain.check(value))
        return self._capacity - len(self._cells)

    def fill(self, values: Iterable[int]) -> int:
        """
        Append several values in row-major order.

        Stops at the first failing value; values appended before it stay.

        Args:
            values: Iterable of cell values

        Returns:
            Remaining free slots after the last append
        """
        remaining = self.remaining
        for value in values:
            remaining = self.add_value(value)
        return remaining

    # ========================================================================
    # Access
    # ========================================================================

    def row(self, i: int) -> List[int]:
        """
        Get row i.

        Returns an empty list when i is out of range. On a partially filled
        matrix only the populated prefix of the row is returned.
        """
        if i < 0 or i >= self._rows:
            return []
        start = i * self._cols
        end = min(start + self._cols, len(self._cells))
        return self._cells[start:end]

    def col(self, i: int) -> List[int]:
        """
        Get column i by striding the buffer by cols from offset i.

        Returns an empty list when i is out of range. On a partially filled
        matrix the column stops at the last populated row.
        """
        if i < 0 or i >= self._cols:
            return []
        return self._cells[i::self._cols]

    def to_rows(self) -> List[List[int]]:
        """Populated rows as a list of lists."""
        return [row for row in (self.row(r) for r in range(self._rows)) if row]

    def copy(self) -> 'Matrix':
        """Independent matrix with the same dimensions, domain and cells."""
        duplicate = Matrix(self._cols, self._rows, domain=self._domain)
        duplicate._cells = list(self._cells)
        return duplicate

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return (
            self._rows == other._rows and
            self._cols == other._cols and
            self._domain == other._domain and
            self._cells == other._cells
        )

    def __repr__(self) -> str:
        return (
            f"Matrix(cols={self._cols}, rows={self._rows}, "
            f"filled={len(self._cells)}/{self._capacity}, domain={self._domain})"
        )

    def __str__(self) -> str:
        lines = [f"Matrix {self._rows}x{self._cols} ({self.state.value})"]
        for row in self.to_rows():
            lines.append("  | " + " ".join(str(v) for v in row) + " |")
        return "\n".join(lines)


# ============================================================================
# Multiplication
# ============================================================================

def multiply(lhs: Matrix, rhs: Matrix) -> Matrix:
    """
    Multiply two matrices: C = lhs * rhs.

    Checks run in order: dimensions first, then lhs population, then rhs
    population. Each product and each partial sum is checked against the
    result domain (lhs.domain) and accumulated left to right.

    Neither operand is modified. The result is a new, fully populated
    matrix with lhs.rows rows and rhs.cols columns.

    Args:
        lhs: Left operand (rows x k)
        rhs: Right operand (k x cols)

    Returns:
        New Matrix holding the product

    Raises:
        IncompatibleMatrixError: ROW_TO_COL_MISMATCH or NOT_POPULATED
        MatrixOverflowError: If an intermediate value leaves the domain
    """
    if lhs.cols != rhs.rows:
        raise IncompatibleMatrixError.row_to_col_mismatch(lhs.cols, rhs.rows)
    if not lhs.is_populated:
        raise IncompatibleMatrixError.not_populated("lhs", len(lhs), lhs.capacity)
    if not rhs.is_populated:
        raise IncompatibleMatrixError.not_populated("rhs", len(rhs), rhs.capacity)

    domain = lhs.domain
    result = Matrix(rhs.cols, lhs.rows, domain=domain)
    rhs_cols = [rhs.col(c) for c in range(rhs.cols)]

    for r in range(lhs.rows):
        lhs_row = lhs.row(r)
        for rhs_col in rhs_cols:
            value = 0
            for a, b in zip(lhs_row, rhs_col):
                value = domain.checked_add(value, domain.checked_mul(a, b))
            result.add_value(value)

    return result


# ============================================================================
# Self-Test
# ============================================================================

def _run_tests():
    """Run a quick printable check of the matrix module."""
    print("Integer Matrix Test")
    print("=" * 70)

    all_passed = True

    def check(name: str, condition: bool, details: str = ""):
        nonlocal all_passed
        all_passed = all_passed and condition
        print(f"\n{name}")
        if details:
            print(f"  {details}")
        print(f"  Status: {'✓ PASS' if condition else '✗ FAIL'}")

    # Test 1: Capacity
    m = Matrix(2, 2)
    remaining = [m.add_value(i) for i in range(4)]
    try:
        m.add_value(5)
        rejected = False
    except CapacityExhaustedError as e:
        rejected = str(e) == "Capacity of 4 exhausted."
    check("[Test 1] Capacity", remaining == [3, 2, 1, 0] and rejected,
          f"Remaining after each add: {remaining}")

    # Test 2: Rows and columns
    m = Matrix(3, 4)
    m.fill(range(12))
    check("[Test 2] Row/col extraction",
          m.row(1) == [3, 4, 5] and m.col(2) == [2, 5, 8, 11] and m.row(4) == [],
          f"row(1)={m.row(1)} col(2)={m.col(2)}")

    # Test 3: Multiplication
    lhs = Matrix.from_rows([[3, 2, 1], [1, 0, 2]])
    rhs = Matrix.from_rows([[1, 2], [0, 1], [4, 0]])
    product = multiply(lhs, rhs)
    check("[Test 3] Multiplication", product.to_rows() == [[7, 8], [9, 2]],
          f"Result:\n{product}")

    # Test 4: Incompatible dimensions
    try:
        multiply(Matrix.from_rows([[1, 2, 3]] * 3), Matrix.from_rows([[4], [5]]))
        mismatch = False
    except IncompatibleMatrixError as e:
        mismatch = e.reason.value == "row_to_col_mismatch"
    check("[Test 4] Incompatible dimensions rejected", mismatch)

    print("\n" + "=" * 70)
    print(f"Overall: {'All tests passed!' if all_passed else 'Some tests failed!'}")
    return all_passed


if __name__ == "__main__":
    success = _run_tests()
    exit(0 if success else 1)
