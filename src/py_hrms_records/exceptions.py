"""
Domain errors for the staff records service.

Callers only ever see these; SQLAlchemy and driver exceptions are translated
at the transaction boundary and kept as ``__cause__``.
"""
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError


class RecordsError(Exception):
    """Base class for all staff records errors."""


class ValidationError(RecordsError):
    """Input was malformed or incomplete; raised before any storage access."""


class NotFoundError(RecordsError):
    """No non-deleted row exists for the given identifier."""


class MissingRecordFileError(NotFoundError):
    """A live staff member has no live record file attached."""

    def __init__(self, staff_id: int):
        super().__init__(
            f"Data integrity fault: staff member {staff_id} has no associated record file"
        )
        self.staff_id = staff_id


class ConflictError(RecordsError):
    """A uniqueness constraint was violated."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class PersistenceError(RecordsError):
    """Any other storage failure."""


class UnsupportedOperationError(RecordsError):
    """A store was asked for an operation it does not implement."""


class TransactionUsageError(RecordsError, RuntimeError):
    """A standalone store operation was called inside an active transaction scope."""


# constraint name / "table.column" token -> (field, message)
UNIQUE_FIELDS = (
    (("uq_staff_national_id", "staff.national_id"), "national_id",
     "National id is already in use by another staff member"),
    (("uq_staff_email", "staff.email"), "email",
     "Email is already in use by another staff member"),
    (("uq_record_file_file_number", "record_file.file_number"), "file_number",
     "File number is already in use"),
    (("uq_record_file_staff_id", "record_file.staff_id"), "staff_id",
     "The staff member already has a record file"),
)

UNIQUE_MARKERS = ("unique", "duplicate")


def _constraint_name(exc: IntegrityError) -> Optional[str]:
    diag = getattr(exc.orig, "diag", None)
    return getattr(diag, "constraint_name", None)


def is_unique_violation(exc: IntegrityError) -> bool:
    if getattr(exc.orig, "sqlstate", None) == "23505" or getattr(exc.orig, "pgcode", None) == "23505":
        return True
    message = str(exc.orig).lower()
    return any(marker in message for marker in UNIQUE_MARKERS)


def translate_integrity_error(exc: IntegrityError) -> RecordsError:
    """Map an IntegrityError to ConflictError (naming the field when possible) or PersistenceError."""
    if not is_unique_violation(exc):
        return PersistenceError(f"Unexpected data integrity error: {exc.orig}")

    haystack = " ".join(filter(None, [_constraint_name(exc), str(exc.orig)])).lower()
    for tokens, field, message in UNIQUE_FIELDS:
        if any(token in haystack for token in tokens):
            return ConflictError(message, field=field)
    return ConflictError(
        "A unique value is already in use (national id, email or file number)"
    )


def translate_storage_error(exc: SQLAlchemyError) -> RecordsError:
    if isinstance(exc, IntegrityError):
        return translate_integrity_error(exc)
    return PersistenceError(f"Unexpected database error: {exc}")
