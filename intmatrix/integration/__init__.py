# Integration Module
"""
Audit logging for matrix operations.

Events are recorded in a hash-chained journal; matrices are identified by
a SHA-256 hash of their contents rather than the contents themselves.
"""

# Lazy imports to avoid RuntimeWarning when running module directly
def __getattr__(name):
    """Lazy import to avoid circular import issues."""
    if name not in __all__:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    from importlib import import_module
    return getattr(import_module(".event_logger", __name__), name)

__all__ = [
    'EventType',
    'MatrixEvent',
    'AuditEntry',
    'EventLogger',
    'JournalIntegrityError',
    'get_matrix_hash',
    'create_event_logger',
]
