"""Record file coordinator: field validation and delegation to the record file store."""

from typing import List, Optional

import structlog
from sqlalchemy.orm import Session

from ..db import transaction_scope
from ..entities import RecordFile, RecordStatus
from ..exceptions import NotFoundError, UnsupportedOperationError, ValidationError
from ..logging import log_audit_event
from ..stores import RecordFileStore
from .tracking import tracked_operation

logger = structlog.get_logger(__name__)

FILE_NUMBER_MAX_LENGTH = 20
CATEGORY_MAX_LENGTH = 30
OBSERVATIONS_MAX_LENGTH = 255


def _require_positive_id(record_file_id: int, what: str = "record file"):
    if not isinstance(record_file_id, int) or isinstance(record_file_id, bool) or record_file_id <= 0:
        raise ValidationError(f"The {what} id must be a positive integer")


class RecordFileService:
    """
    Standalone calls (``update``, ``delete``, reads) run in their own
    transaction. The ``*_tx`` variants are for the staff coordinator and run
    on its session without committing.
    """

    def __init__(self, store: RecordFileStore):
        if store is None:
            raise ValueError("RecordFileStore cannot be None")
        self.store = store

    def validate(self, record_file: RecordFile):
        if record_file is None:
            raise ValidationError("The record file cannot be empty")
        if record_file.file_number is None or not record_file.file_number.strip():
            raise ValidationError("The file number cannot be empty")
        if record_file.status is None:
            raise ValidationError("The record file status is required")
        if len(record_file.file_number.strip()) > FILE_NUMBER_MAX_LENGTH:
            raise ValidationError(
                f"The file number cannot exceed {FILE_NUMBER_MAX_LENGTH} characters"
            )
        if record_file.category is not None and len(record_file.category) > CATEGORY_MAX_LENGTH:
            raise ValidationError(
                f"The category cannot exceed {CATEGORY_MAX_LENGTH} characters"
            )
        if (record_file.observations is not None
                and len(record_file.observations) > OBSERVATIONS_MAX_LENGTH):
            raise ValidationError(
                f"The observations cannot exceed {OBSERVATIONS_MAX_LENGTH} characters"
            )
        if record_file.creation_date is None:
            raise ValidationError("The record file creation date is required")

    def insert(self, record_file: RecordFile) -> RecordFile:
        logger.warning(
            "Standalone record file insert rejected",
            file_number=getattr(record_file, "file_number", None),
        )
        raise UnsupportedOperationError(
            "A record file cannot be created without its staff member; "
            "create both through StaffService.insert()."
        )

    def insert_tx(self, record_file: RecordFile, staff_id: int, session: Session) -> RecordFile:
        self.validate(record_file)
        _require_positive_id(staff_id, "staff member")
        return self.store.create_for_staff_tx(record_file, staff_id, session)

    def update_tx(self, record_file: RecordFile, staff_id: int, session: Session):
        self.validate(record_file)
        _require_positive_id(record_file.id)
        _require_positive_id(staff_id, "staff member")
        if not self.store.update_for_staff_tx(record_file, staff_id, session):
            raise NotFoundError(
                f"No active record file with id {record_file.id} belongs to staff member {staff_id}"
            )

    def delete_tx(self, record_file_id: int, session: Session):
        _require_positive_id(record_file_id)
        if not self.store.soft_delete_tx(record_file_id, session):
            raise NotFoundError(f"No active record file found with id {record_file_id}")

    def update(self, record_file: RecordFile):
        self.validate(record_file)
        _require_positive_id(record_file.id)
        with tracked_operation("record_file.update", record_file_id=record_file.id):
            if not self.store.update(record_file):
                raise NotFoundError(f"No active record file found with id {record_file.id}")
        log_audit_event("update", "record_file", resource_id=record_file.id)

    def delete(self, record_file_id: int):
        """Logically delete a record file whose staff member is already deleted."""
        _require_positive_id(record_file_id)
        with tracked_operation("record_file.delete", record_file_id=record_file_id):
            with transaction_scope(self.store.session_factory) as session:
                if self.store.has_live_owner_tx(record_file_id, session):
                    raise UnsupportedOperationError(
                        "A record file is deleted together with its staff member; "
                        "use StaffService.delete()."
                    )
                self.delete_tx(record_file_id, session)
        log_audit_event("soft_delete", "record_file", resource_id=record_file_id)

    def get_by_id(self, record_file_id: int) -> Optional[RecordFile]:
        _require_positive_id(record_file_id)
        return self.store.find_by_id(record_file_id)

    def list_all(self) -> List[RecordFile]:
        return self.store.find_all()

    def get_by_status(self, status: RecordStatus) -> List[RecordFile]:
        if status is None:
            raise ValidationError("A record file status is required")
        try:
            status = RecordStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown record file status: {status!r}")
        return self.store.find_by_status(status)
