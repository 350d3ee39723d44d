"""
intmatrix - fixed-capacity dense matrices over exact signed integers.

Modules:
  - core: Matrix, multiply, IntegerDomain, error types
  - integration: hash-chained audit log of matrix operations
"""

__version__ = "1.0.0"


def __getattr__(name):
    """Expose the core names at package level."""
    if name not in __all__:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    from importlib import import_module
    return getattr(import_module(".core", __name__), name)

__all__ = [
    'Matrix',
    'PopulationState',
    'multiply',
    'IntegerDomain',
    'WIDE_DOMAIN',
    'DEFAULT_INT_BITS',
    'MatrixError',
    'CapacityExhaustedError',
    'IncompatibleMatrixError',
    'IncompatibleReason',
    'MatrixOverflowError',
]
