"""Persistence stores for staff members and record files."""

from .base import BaseStore, UNSUPPORTED_TRANSACTION_MESSAGE
from .record_file_store import RecordFileStore, to_record_file
from .staff_store import StaffStore, to_staff_member

__all__ = [
    "BaseStore",
    "UNSUPPORTED_TRANSACTION_MESSAGE",
    "RecordFileStore",
    "StaffStore",
    "to_record_file",
    "to_staff_member",
]
