"""
Exception types raised by the transaction store and service layer.

API handlers translate these into HTTP responses: validation errors
become 400, missing records 404 and persistence failures 500.  None
of them is fatal to the process.
"""


class RecordServiceError(Exception):
    """Base class for errors raised by the record service."""


class RecordValidationError(RecordServiceError, ValueError):
    """Raised when caller input violates a record field rule."""


class RecordNotFoundError(RecordServiceError):
    """Raised when no record carries the requested id."""

    def __init__(self, record_id) -> None:
        super().__init__(f"Transaction {record_id} not found")
        self.record_id = record_id


class PersistenceError(RecordServiceError):
    """Raised when the collection could not be written to disk.

    The in-memory collection already holds the mutation; the next
    successful write rewrites the whole file from it.
    """
