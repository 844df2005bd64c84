"""
Staff coordinator.

Owns the transaction boundary for every write: the staff row and its record
file are created, updated and logically deleted together or not at all.
Validation runs before a transaction is opened; storage failures inside the
transaction roll it back and surface as ConflictError or PersistenceError.
"""
import re
from typing import List, Optional

import structlog
from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..db import SessionFactory, transaction_scope
from ..entities import StaffMember
from ..exceptions import MissingRecordFileError, NotFoundError, PersistenceError, ValidationError
from ..logging import log_audit_event
from ..stores import StaffStore
from .record_file_service import RecordFileService
from .tracking import tracked_operation

logger = structlog.get_logger(__name__)

NATIONAL_ID_PATTERN = re.compile(r"[0-9]+")

_email_adapter = TypeAdapter(EmailStr)


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _require_positive_id(staff_id: int):
    if not isinstance(staff_id, int) or isinstance(staff_id, bool) or staff_id <= 0:
        raise ValidationError("The staff member id must be a positive integer")


class StaffService:

    def __init__(
        self,
        staff_store: StaffStore,
        record_file_service: RecordFileService,
        session_factory: Optional[SessionFactory] = None,
    ):
        if staff_store is None:
            raise ValueError("StaffStore cannot be None")
        if record_file_service is None:
            raise ValueError("RecordFileService cannot be None")
        self.staff_store = staff_store
        self.record_file_service = record_file_service
        self.session_factory = session_factory

    def validate(self, staff: StaffMember):
        if staff is None:
            raise ValidationError("The staff member cannot be empty")
        if _blank(staff.name):
            raise ValidationError("The name cannot be empty")
        if _blank(staff.surname):
            raise ValidationError("The surname cannot be empty")
        if _blank(staff.national_id):
            raise ValidationError("The national id cannot be empty")
        if not NATIONAL_ID_PATTERN.fullmatch(staff.national_id.strip()):
            raise ValidationError("Invalid national id: it must contain digits only")

        # Email is optional, but must be well formed when present
        if not _blank(staff.email):
            try:
                _email_adapter.validate_python(staff.email.strip())
            except PydanticValidationError:
                raise ValidationError(
                    "Invalid email. Expected format: user@domain.com"
                ) from None

    def insert(self, staff: StaffMember) -> StaffMember:
        """Create the staff member and its record file in one transaction."""
        self.validate(staff)
        if staff.record_file is None:
            raise ValidationError("A staff member must be created with a record file")
        self.record_file_service.validate(staff.record_file)

        try:
            with tracked_operation("staff.insert", national_id=staff.national_id):
                with transaction_scope(self.session_factory) as session:
                    # Staff first: the record file needs its generated id
                    self.staff_store.create_tx(staff, session)
                    if not staff.state.persisted:
                        raise PersistenceError("Could not create the staff member: no id was generated")
                    self.record_file_service.insert_tx(staff.record_file, staff.id, session)
        except Exception:
            # Ids handed out inside a rolled back transaction do not exist
            staff.state.id = 0
            staff.record_file.state.id = 0
            raise

        log_audit_event(
            "create", "staff",
            resource_id=staff.id,
            record_file_id=staff.record_file.id,
        )
        return staff

    def update(self, staff: StaffMember) -> StaffMember:
        """Update the record file, then the staff member, in one transaction."""
        if staff is None:
            raise ValidationError("The staff member to update cannot be empty")
        _require_positive_id(staff.id)
        if staff.record_file is None or not staff.record_file.state.persisted:
            raise ValidationError(
                "The staff member must have an associated record file with an id to be updated"
            )
        self.validate(staff)
        self.record_file_service.validate(staff.record_file)

        with tracked_operation("staff.update", staff_id=staff.id):
            with transaction_scope(self.session_factory) as session:
                self.record_file_service.update_tx(staff.record_file, staff.id, session)
                if not self.staff_store.update_tx(staff, session):
                    raise NotFoundError(f"No active staff member found with id {staff.id}")

        log_audit_event(
            "update", "staff",
            resource_id=staff.id,
            record_file_id=staff.record_file.id,
        )
        return staff

    def delete(self, staff_id: int):
        """Logically delete the record file, then the staff member, in one transaction."""
        _require_positive_id(staff_id)

        with tracked_operation("staff.delete", staff_id=staff_id):
            with transaction_scope(self.session_factory) as session:
                staff = self.staff_store.find_by_id_tx(staff_id, session)
                if staff is None:
                    raise NotFoundError(f"No active staff member found with id {staff_id}")
                if staff.record_file is None:
                    logger.error("Staff member without record file", staff_id=staff_id)
                    raise MissingRecordFileError(staff_id)

                # Record file before staff member
                self.record_file_service.delete_tx(staff.record_file.id, session)
                if not self.staff_store.soft_delete_tx(staff_id, session):
                    raise NotFoundError(f"No active staff member found with id {staff_id}")

        log_audit_event(
            "soft_delete", "staff",
            resource_id=staff_id,
            record_file_id=staff.record_file.id,
        )

    def get_by_id(self, staff_id: int) -> Optional[StaffMember]:
        _require_positive_id(staff_id)
        return self.staff_store.find_by_id(staff_id)

    def get_by_national_id(self, national_id: str) -> Optional[StaffMember]:
        if _blank(national_id):
            raise ValidationError("The national id cannot be empty")
        if not NATIONAL_ID_PATTERN.fullmatch(national_id.strip()):
            raise ValidationError("Invalid national id: it must contain digits only")
        return self.staff_store.find_by_national_id(national_id)

    def list_all(self) -> List[StaffMember]:
        return self.staff_store.find_all()
