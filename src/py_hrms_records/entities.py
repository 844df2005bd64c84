"""Domain records for staff members and their record files."""

import enum
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class RecordStatus(str, enum.Enum):
    """Contract situation of the staff member a record file belongs to."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"

    @property
    def description(self) -> str:
        return _STATUS_DESCRIPTIONS[self]

    @property
    def is_active(self) -> bool:
        return self is RecordStatus.ACTIVE

    @property
    def is_inactive(self) -> bool:
        return self is RecordStatus.INACTIVE


_STATUS_DESCRIPTIONS = {
    RecordStatus.ACTIVE: "Active / in service",
    RecordStatus.INACTIVE: "Inactive / out of service",
}


class EntityState(BaseModel):
    """Identity and logical-deletion flag, embedded in every record."""

    id: int = 0
    deleted: bool = False

    @property
    def persisted(self) -> bool:
        return self.id > 0

    def mark_deleted(self):
        self.deleted = True


class RecordFile(BaseModel):
    file_number: Optional[str] = None
    category: Optional[str] = None
    status: Optional[RecordStatus] = None
    creation_date: Optional[date] = None
    observations: Optional[str] = None
    state: EntityState = Field(default_factory=EntityState)

    @property
    def id(self) -> int:
        return self.state.id

    @property
    def deleted(self) -> bool:
        return self.state.deleted

    def mark_deleted(self):
        """Logical deletion also takes the record out of service."""
        self.state.mark_deleted()
        self.status = RecordStatus.INACTIVE


class StaffMember(BaseModel):
    name: Optional[str] = None
    surname: Optional[str] = None
    national_id: Optional[str] = None
    email: Optional[str] = None
    hire_date: Optional[date] = None
    department: Optional[str] = None
    record_file: Optional[RecordFile] = None
    state: EntityState = Field(default_factory=EntityState)

    @property
    def id(self) -> int:
        return self.state.id

    @property
    def deleted(self) -> bool:
        return self.state.deleted

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.name, self.surname) if part)

    def mark_deleted(self):
        self.state.mark_deleted()
        if self.record_file is not None:
            self.record_file.mark_deleted()
