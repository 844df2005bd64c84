"""Coordinators for staff members and record files."""

from typing import Optional

from ..db import SessionFactory
from ..stores import RecordFileStore, StaffStore
from .record_file_service import RecordFileService
from .staff_service import StaffService


def build_staff_service(session_factory: Optional[SessionFactory] = None) -> StaffService:
    """Wire both stores and coordinators around one session factory."""
    record_file_service = RecordFileService(RecordFileStore(session_factory))
    return StaffService(StaffStore(session_factory), record_file_service, session_factory)


__all__ = [
    "RecordFileService",
    "StaffService",
    "build_staff_service",
]
