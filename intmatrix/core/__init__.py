# Core Matrix Module
"""
Core integer matrix implementation including:
- Fixed-capacity row-major Matrix
- Checked matrix multiplication
- Signed fixed-width integer domain
- Error types
"""

_EXPORTS = {
    'Matrix': 'matrix',
    'PopulationState': 'matrix',
    'multiply': 'matrix',
    'IntegerDomain': 'domain',
    'WIDE_DOMAIN': 'domain',
    'DEFAULT_INT_BITS': 'domain',
    'MatrixError': 'errors',
    'CapacityExhaustedError': 'errors',
    'IncompatibleMatrixError': 'errors',
    'IncompatibleReason': 'errors',
    'MatrixOverflowError': 'errors',
}


# Lazy imports to avoid RuntimeWarning when running module directly
def __getattr__(name):
    """Lazy import of the public core names."""
    if name not in _EXPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    from importlib import import_module
    module = import_module(f".{_EXPORTS[name]}", __name__)
    return getattr(module, name)

__all__ = list(_EXPORTS)
