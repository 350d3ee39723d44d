"""
Event Logger Module

Records matrix operations in a tamper-evident audit journal.

Features:
- Creation, population, multiplication and rejection events
- Matrices identified by a SHA-256 hash of their contents
- Hash-chained journal entries (each digest covers the previous one)
- Full journal validation, JSON export and import

Author: intmatrix Project
"""

import time
import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any, Callable, Iterable

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.backends import default_backend

from ..core.matrix import Matrix, multiply
from ..core.errors import (
    CapacityExhaustedError,
    IncompatibleMatrixError,
    MatrixOverflowError,
)


# ============================================================================
# Constants
# ============================================================================

EVENT_VERSION = "1.0"
GENESIS_DIGEST = b'\x00' * 32  # prev_digest of the first journal entry
DEFAULT_HASH_LENGTH = 16  # Hex chars shown for matrix hashes


# ============================================================================
# Hashing
# ============================================================================

def _sha256(data: bytes) -> bytes:
    digest = hashes.Hash(hashes.SHA256(), backend=default_backend())
    digest.update(data)
    return digest.finalize()


def get_matrix_hash(matrix: Matrix) -> str:
    """
    Compute a content hash identifying a matrix.

    Covers dimensions, domain width, fill level and every cell, so two
    matrices share a hash only if they are equal.

    Args:
        matrix: The matrix to identify

    Returns:
        Hex-encoded SHA-256 hash
    """
    width = (matrix.domain.bits + 7) // 8
    header = (
        matrix.rows.to_bytes(8, 'big') +
        matrix.cols.to_bytes(8, 'big') +
        matrix.domain.bits.to_bytes(2, 'big') +
        len(matrix).to_bytes(8, 'big')
    )
    body = b''.join(
        value.to_bytes(width, 'big', signed=True) for value in matrix.cells
    )
    return _sha256(header + body).hex()


def get_matrix_hash_short(matrix: Matrix) -> str:
    """First DEFAULT_HASH_LENGTH characters of the matrix hash."""
    return get_matrix_hash(matrix)[:DEFAULT_HASH_LENGTH]


def _shape(matrix: Matrix) -> str:
    return f"{matrix.rows}x{matrix.cols}"


# ============================================================================
# Event Types
# ============================================================================

class EventType(Enum):
    """Types of matrix events that can be logged."""

    # Lifecycle events
    MATRIX_CREATED = "matrix_created"
    MATRIX_POPULATED = "matrix_populated"
    CAPACITY_EXHAUSTED = "capacity_exhausted"
    VALUE_OVERFLOW = "value_overflow"
    VALUE_REJECTED = "value_rejected"

    # Multiplication events
    MULTIPLY_SUCCESS = "multiply_success"
    MULTIPLY_REJECTED = "multiply_rejected"
    MULTIPLY_OVERFLOW = "multiply_overflow"

    # System events
    SYSTEM_START = "system_start"


# ============================================================================
# Event Structure
# ============================================================================

@dataclass
class MatrixEvent:
    """A single logged matrix event."""
    event_type: EventType
    matrix_hash: str  # SHA-256 of the matrix the event is about
    timestamp: int  # Unix timestamp
    details: Dict[str, Any] = field(default_factory=dict)

    def to_record(self) -> str:
        """Convert event to a journal record string."""
        return json.dumps({
            'version': EVENT_VERSION,
            'type': self.event_type.value,
            'matrix': self.matrix_hash,
            'time': self.timestamp,
            'details': self.details,
        }, separators=(',', ':'), sort_keys=True)

    @classmethod
    def from_record(cls, record: str) -> 'MatrixEvent':
        """Parse event from a journal record."""
        data = json.loads(record)
        return cls(
            event_type=EventType(data['type']),
            matrix_hash=data['matrix'],
            timestamp=data['time'],
            details=data.get('details', {}),
        )

    def __str__(self) -> str:
        dt = datetime.fromtimestamp(self.timestamp)
        return (
            f"[{dt.strftime('%Y-%m-%d %H:%M:%S')}] "
            f"{self.event_type.value} | "
            f"matrix:{self.matrix_hash[:8]}..."
        )


# ============================================================================
# Journal
# ============================================================================

class JournalIntegrityError(Exception):
    """Raised when journal validation fails."""
    pass


def compute_entry_digest(prev_digest: bytes, record: str) -> bytes:
    """Digest of a journal entry: SHA-256(prev_digest || record)."""
    return _sha256(prev_digest + record.encode())


@dataclass(frozen=True)
class AuditEntry:
    """
    Immutable journal entry.

    frozen=True so entries cannot be edited once chained.
    """
    index: int
    prev_digest: bytes
    digest: bytes
    record: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert entry to dictionary for serialization."""
        return {
            'index': self.index,
            'prev_digest': self.prev_digest.hex(),
            'digest': self.digest.hex(),
            'record': self.record,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AuditEntry':
        """Create entry from dictionary."""
        return cls(
            index=data['index'],
            prev_digest=bytes.fromhex(data['prev_digest']),
            digest=bytes.fromhex(data['digest']),
            record=data['record'],
        )


def validate_journal(journal: List[AuditEntry]) -> bool:
    """
    Validate a full journal.

    Returns:
        True if every entry is correctly indexed and chained

    Raises:
        JournalIntegrityError: On the first broken entry
    """
    prev_digest = GENESIS_DIGEST
    for position, entry in enumerate(journal):
        if entry.index != position:
            raise JournalIntegrityError(
                f"Entry index {entry.index} at position {position}"
            )
        if entry.prev_digest != prev_digest:
            raise JournalIntegrityError(f"Previous digest mismatch at entry {position}")
        if entry.digest != compute_entry_digest(entry.prev_digest, entry.record):
            raise JournalIntegrityError(f"Digest mismatch at entry {position}")
        prev_digest = entry.digest
    return True


# ============================================================================
# Event Logger
# ============================================================================

class EventLogger:
    """
    Hash-chained audit logger for matrix operations.

    Wraps the operations that can fail (fill, multiply) so that both
    successes and rejections are recorded. Errors are always re-raised
    after being logged.
    """

    def __init__(
        self,
        journal: Optional[List[AuditEntry]] = None,
        auto_record: bool = True
    ):
        """
        Initialize the event logger.

        Args:
            journal: Optional existing journal to continue (validated)
            auto_record: If True, fill() and multiply() log results
        """
        if journal:
            validate_journal(journal)
        self._journal: List[AuditEntry] = list(journal or [])
        self._auto_record = auto_record
        self._callbacks: List[Callable[[MatrixEvent], None]] = []

        self._log_system_event(EventType.SYSTEM_START)

    def _log_system_event(self, event_type: EventType) -> None:
        """Log a system event (no matrix)."""
        event = MatrixEvent(
            event_type=event_type,
            matrix_hash="system",
            timestamp=int(time.time()),
            details={'node': 'intmatrix'}
        )
        self._add_event(event)

    def _add_event(self, event: MatrixEvent) -> None:
        """Chain event into the journal."""
        prev_digest = self._journal[-1].digest if self._journal else GENESIS_DIGEST
        record = event.to_record()
        self._journal.append(AuditEntry(
            index=len(self._journal),
            prev_digest=prev_digest,
            digest=compute_entry_digest(prev_digest, record),
            record=record,
        ))

        # Notify callbacks
        for callback in self._callbacks:
            try:
                callback(event)
            except Exception:
                pass  # Don't let callbacks break logging

    def _record(self, event_type: EventType, matrix: Matrix,
                details: Optional[Dict[str, Any]] = None) -> MatrixEvent:
        event = MatrixEvent(
            event_type=event_type,
            matrix_hash=get_matrix_hash(matrix),
            timestamp=int(time.time()),
            details=details or {},
        )
        self._add_event(event)
        return event

    def add_callback(self, callback: Callable[[MatrixEvent], None]) -> None:
        """Add a callback to be notified of new events."""
        self._callbacks.append(callback)

    def remove_callback(self, callback: Callable[[MatrixEvent], None]) -> None:
        """Remove a callback."""
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    # ========================================================================
    # Lifecycle Events
    # ========================================================================

    def log_matrix_created(self, matrix: Matrix) -> MatrixEvent:
        """Log creation of a matrix."""
        return self._record(EventType.MATRIX_CREATED, matrix, {
            'shape': _shape(matrix),
            'capacity': matrix.capacity,
            'domain': str(matrix.domain),
        })

    def log_capacity_exhausted(self, matrix: Matrix,
                               error: CapacityExhaustedError) -> MatrixEvent:
        """Log a value rejected by a full matrix."""
        return self._record(EventType.CAPACITY_EXHAUSTED, matrix, {
            'capacity': error.capacity,
        })

    def log_value_overflow(self, matrix: Matrix,
                           error: MatrixOverflowError) -> MatrixEvent:
        """Log a value rejected for falling outside the matrix domain."""
        return self._record(EventType.VALUE_OVERFLOW, matrix, {
            'value': str(error.value),
            'bits': error.bits,
        })

    def fill(self, matrix: Matrix, values: Iterable[int]) -> int:
        """
        Fill a matrix and log the outcome.

        Logs MATRIX_POPULATED when the matrix becomes full. A rejected value
        is logged as CAPACITY_EXHAUSTED (no space left), VALUE_OVERFLOW
        (outside the domain) or VALUE_REJECTED (not an integer); values
        appended before it stay in the matrix.

        Args:
            matrix: Matrix to fill
            values: Cell values in row-major order

        Returns:
            Remaining capacity

        Raises:
            CapacityExhaustedError, MatrixOverflowError, TypeError: after logging
        """
        was_populated = matrix.is_populated
        try:
            remaining = matrix.fill(values)
        except CapacityExhaustedError as e:
            if self._auto_record:
                self.log_capacity_exhausted(matrix, e)
            raise
        except MatrixOverflowError as e:
            if self._auto_record:
                self.log_value_overflow(matrix, e)
            raise
        except TypeError as e:
            if self._auto_record:
                self._record(EventType.VALUE_REJECTED, matrix, {
                    'error': str(e),
                })
            raise

        if self._auto_record and matrix.is_populated and not was_populated:
            self._record(EventType.MATRIX_POPULATED, matrix, {
                'shape': _shape(matrix),
            })
        return remaining

    # ========================================================================
    # Multiplication Events
    # ========================================================================

    def log_multiply(self, lhs: Matrix, rhs: Matrix, result: Matrix) -> MatrixEvent:
        """Log a successful multiplication."""
        return self._record(EventType.MULTIPLY_SUCCESS, result, {
            'lhs': get_matrix_hash_short(lhs),
            'rhs': get_matrix_hash_short(rhs),
            'shape': _shape(result),
        })

    def log_multiply_rejected(self, lhs: Matrix, rhs: Matrix,
                              error: IncompatibleMatrixError) -> MatrixEvent:
        """Log a multiplication rejected for incompatible operands."""
        details = {
            'rhs': get_matrix_hash_short(rhs),
            'reason': error.reason.value,
            'lhs_shape': _shape(lhs),
            'rhs_shape': _shape(rhs),
        }
        if error.side:
            details['side'] = error.side
        return self._record(EventType.MULTIPLY_REJECTED, lhs, details)

    def log_multiply_overflow(self, lhs: Matrix, rhs: Matrix,
                              error: MatrixOverflowError) -> MatrixEvent:
        """Log a multiplication aborted by overflow."""
        return self._record(EventType.MULTIPLY_OVERFLOW, lhs, {
            'rhs': get_matrix_hash_short(rhs),
            'operation': error.operation,
            'bits': error.bits,
        })

    def multiply(self, lhs: Matrix, rhs: Matrix) -> Matrix:
        """
        Multiply two matrices and log the outcome.

        Args:
            lhs: Left operand
            rhs: Right operand

        Returns:
            The product matrix

        Raises:
            IncompatibleMatrixError, MatrixOverflowError: after logging
        """
        try:
            result = multiply(lhs, rhs)
        except IncompatibleMatrixError as e:
            if self._auto_record:
                self.log_multiply_rejected(lhs, rhs, e)
            raise
        except MatrixOverflowError as e:
            if self._auto_record:
                self.log_multiply_overflow(lhs, rhs, e)
            raise

        if self._auto_record:
            self.log_multiply(lhs, rhs, result)
        return result

    # ========================================================================
    # Retrieval
    # ========================================================================

    @property
    def journal(self) -> List[AuditEntry]:
        """Get the journal (read-only view)."""
        return list(self._journal)

    @property
    def length(self) -> int:
        return len(self._journal)

    def get_all_events(self) -> List[MatrixEvent]:
        """Retrieve all logged events in journal order."""
        return [MatrixEvent.from_record(entry.record) for entry in self._journal]

    def get_matrix_events(self, matrix: Matrix) -> List[MatrixEvent]:
        """
        Get all events about a matrix in its current state.

        Matches events whose subject is the matrix, and multiplication
        events that used it as an operand.
        """
        full_hash = get_matrix_hash(matrix)
        short_hash = full_hash[:DEFAULT_HASH_LENGTH]
        return [
            e for e in self.get_all_events()
            if e.matrix_hash == full_hash
            or short_hash in (e.details.get('lhs'), e.details.get('rhs'))
        ]

    def get_events_by_type(self, event_type: EventType) -> List[MatrixEvent]:
        """Get all events of a specific type."""
        return [
            e for e in self.get_all_events()
            if e.event_type == event_type
        ]

    def get_recent_events(self, count: int = 10) -> List[MatrixEvent]:
        """Get the most recent events."""
        if count <= 0:
            return []
        events = self.get_all_events()
        return events[-count:]

    def print_audit_log(self, last_n: Optional[int] = None) -> None:
        """Print the audit log in a readable format."""
        events = self.get_all_events()
        if last_n:
            events = events[-last_n:]

        print("\n" + "=" * 70)
        print("MATRIX AUDIT LOG")
        print("=" * 70)

        for event in events:
            print(event)
            for k, v in event.details.items():
                print(f"    {k}: {v}")

        print("=" * 70)
        print(f"Total events: {self.length}")
        print("=" * 70)

    # ========================================================================
    # Integrity and Export
    # ========================================================================

    def validate_chain(self) -> bool:
        """
        Validate the journal.

        Raises:
            JournalIntegrityError: If any entry is broken
        """
        return validate_journal(self._journal)

    def verify_integrity(self) -> bool:
        """Verify the integrity of the audit log."""
        try:
            return self.validate_chain()
        except JournalIntegrityError:
            return False

    def export_log(self) -> str:
        """Export the entire journal as JSON."""
        return json.dumps({
            'version': EVENT_VERSION,
            'entries': [entry.to_dict() for entry in self._journal],
        }, indent=2)

    @classmethod
    def import_log(cls, json_str: str) -> 'EventLogger':
        """
        Import a journal from JSON and continue logging onto it.

        Raises:
            JournalIntegrityError: If the imported journal is invalid
        """
        data = json.loads(json_str)
        journal = [AuditEntry.from_dict(item) for item in data['entries']]
        return cls(journal=journal)


# ============================================================================
# Convenience Functions
# ============================================================================

def create_event_logger(auto_record: bool = True) -> EventLogger:
    """Create a new event logger."""
    return EventLogger(auto_record=auto_record)
