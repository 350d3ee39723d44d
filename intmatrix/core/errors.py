"""
Matrix Error Types

Exceptions raised by the matrix core:
- MatrixError: common base class
- CapacityExhaustedError: add_value on a fully populated matrix
- IncompatibleMatrixError: multiplication operands that cannot be combined
- MatrixOverflowError: a value or intermediate result outside the integer domain

All of them are local, recoverable conditions. Callers branch on the
exception class or on IncompatibleMatrixError.reason, never on the message.

Author: intmatrix Project
"""

from enum import Enum
from typing import Optional


class MatrixError(Exception):
    """Base class for all matrix failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CapacityExhaustedError(MatrixError):
    """Raised when a value is added to a fully populated matrix."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(f"Capacity of {capacity} exhausted.")


class IncompatibleReason(Enum):
    """Why two matrices cannot be multiplied."""

    ROW_TO_COL_MISMATCH = "row_to_col_mismatch"
    NOT_POPULATED = "not_populated"


class IncompatibleMatrixError(MatrixError):
    """
    Raised when multiplication operands are incompatible.

    Attributes:
        reason: IncompatibleReason discriminant
        side: "lhs" or "rhs" for NOT_POPULATED, None otherwise
    """

    def __init__(
        self,
        message: str,
        reason: IncompatibleReason,
        side: Optional[str] = None
    ):
        super().__init__(message)
        self.reason = reason
        self.side = side

    @classmethod
    def row_to_col_mismatch(cls, lhs_cols: int, rhs_rows: int) -> 'IncompatibleMatrixError':
        """Lhs column count does not match rhs row count."""
        return cls(
            f"Lhs matrix has {lhs_cols} cols - rhs matrix has {rhs_rows} rows "
            f"- they should be the same.",
            IncompatibleReason.ROW_TO_COL_MISMATCH,
        )

    @classmethod
    def not_populated(cls, side: str, length: int, capacity: int) -> 'IncompatibleMatrixError':
        """One operand still has free cells."""
        return cls(
            f"{side.capitalize()} matrix is not fully populated "
            f"({length} of {capacity} cells).",
            IncompatibleReason.NOT_POPULATED,
            side=side,
        )


class MatrixOverflowError(MatrixError, OverflowError):
    """
    Raised when a value leaves the signed integer domain.

    Covers both values passed to add_value and intermediate products or
    sums during multiplication. Nothing is ever wrapped.
    """

    def __init__(self, operation: str, value: int, bits: int):
        self.operation = operation
        self.value = value
        self.bits = bits
        super().__init__(
            f"{operation} result {value} does not fit in a signed {bits}-bit integer."
        )
