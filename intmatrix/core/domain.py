"""
Integer Domain

Signed fixed-width integer range used by matrix cells. Python integers are
unbounded, so the width is enforced explicitly: every stored value, every
product and every partial sum is checked, and anything out of range raises
MatrixOverflowError instead of wrapping.

The default width of 128 bits gives the range [-2^127, 2^127 - 1].

Author: intmatrix Project
"""

from dataclasses import dataclass

from .errors import MatrixOverflowError


# ============================================================================
# Constants
# ============================================================================

DEFAULT_INT_BITS = 128  # Wide signed integers
MIN_INT_BITS = 2  # Smallest width with both signs


# ============================================================================
# Integer Domain
# ============================================================================

@dataclass(frozen=True)
class IntegerDomain:
    """
    Signed two's-complement range of a given bit width.

    frozen=True so a matrix's domain cannot change after construction.
    """
    bits: int = DEFAULT_INT_BITS

    def __post_init__(self):
        if isinstance(self.bits, bool) or not isinstance(self.bits, int):
            raise TypeError("Bit width must be an integer")
        if self.bits < MIN_INT_BITS:
            raise ValueError(f"Bit width must be at least {MIN_INT_BITS}, got {self.bits}")

    @property
    def minimum(self) -> int:
        """Smallest representable value: -2^(bits-1)."""
        return -(1 << (self.bits - 1))

    @property
    def maximum(self) -> int:
        """Largest representable value: 2^(bits-1) - 1."""
        return (1 << (self.bits - 1)) - 1

    def contains(self, value: int) -> bool:
        """Check whether value lies in the domain."""
        return self.minimum <= value <= self.maximum

    def check(self, value: int, operation: str = "value") -> int:
        """
        Return value unchanged if it fits, else raise.

        Args:
            value: Integer to check
            operation: Name used in the error message ("add", "mul", ...)

        Returns:
            value

        Raises:
            MatrixOverflowError: If value is outside [minimum, maximum]
        """
        if not self.contains(value):
            raise MatrixOverflowError(operation, value, self.bits)
        return value

    def checked_add(self, a: int, b: int) -> int:
        """a + b, raising on overflow."""
        return self.check(a + b, "add")

    def checked_mul(self, a: int, b: int) -> int:
        """a * b, raising on overflow."""
        return self.check(a * b, "mul")

    def __str__(self) -> str:
        return f"i{self.bits}"


WIDE_DOMAIN = IntegerDomain(DEFAULT_INT_BITS)
