"""Persistence for staff members."""

from typing import List, Optional

from sqlalchemy import and_, select, update
from sqlalchemy.orm import Session

from ..entities import EntityState, StaffMember
from ..metrics import track_db_operation
from ..models import RecordFileORM, StaffORM
from .base import BaseStore
from .record_file_store import to_record_file


def to_staff_member(row: StaffORM, record_row: Optional[RecordFileORM]) -> StaffMember:
    return StaffMember(
        name=row.name,
        surname=row.surname,
        national_id=row.national_id,
        email=row.email,
        hire_date=row.hire_date,
        department=row.department,
        record_file=to_record_file(record_row) if record_row is not None else None,
        state=EntityState(id=row.id, deleted=row.deleted),
    )


def _with_record_file():
    """Live staff rows, each paired with its live record file (or None)."""
    return (
        select(StaffORM, RecordFileORM)
        .outerjoin(
            RecordFileORM,
            and_(RecordFileORM.staff_id == StaffORM.id, RecordFileORM.deleted.is_(False)),
        )
        .where(StaffORM.deleted.is_(False))
    )


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


def _normalize_email(value: Optional[str]) -> Optional[str]:
    # Stored lowercased so uq_staff_email is case-insensitive
    value = _blank_to_none(value)
    return value.lower() if value is not None else None


class StaffStore(BaseStore[StaffMember]):
    """Writes only touch the staff table; the record file is the coordinator's concern."""

    table = "staff"

    def _values(self, staff: StaffMember) -> dict:
        return dict(
            name=staff.name.strip(),
            surname=staff.surname.strip(),
            national_id=staff.national_id.strip(),
            email=_normalize_email(staff.email),
            hire_date=staff.hire_date,
            department=_blank_to_none(staff.department),
        )

    @track_db_operation("insert", "staff")
    def create_tx(self, staff: StaffMember, session: Session) -> StaffMember:
        row = StaffORM(**self._values(staff))
        session.add(row)
        session.flush()
        staff.state.id = row.id
        return staff

    @track_db_operation("update", "staff")
    def update_tx(self, staff: StaffMember, session: Session) -> bool:
        result = session.execute(
            update(StaffORM)
            .where(StaffORM.id == staff.id, StaffORM.deleted.is_(False))
            .values(**self._values(staff))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    @track_db_operation("soft_delete", "staff")
    def soft_delete_tx(self, staff_id: int, session: Session) -> bool:
        result = session.execute(
            update(StaffORM)
            .where(StaffORM.id == staff_id, StaffORM.deleted.is_(False))
            .values(deleted=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    @track_db_operation("select", "staff")
    def find_by_id_tx(self, staff_id: int, session: Session) -> Optional[StaffMember]:
        row = session.execute(_with_record_file().where(StaffORM.id == staff_id)).first()
        return to_staff_member(*row) if row is not None else None

    @track_db_operation("select", "staff")
    def find_by_national_id_tx(self, national_id: str, session: Session) -> Optional[StaffMember]:
        row = session.execute(
            _with_record_file().where(StaffORM.national_id == national_id.strip())
        ).first()
        return to_staff_member(*row) if row is not None else None

    @track_db_operation("select", "staff")
    def find_all_tx(self, session: Session) -> List[StaffMember]:
        rows = session.execute(_with_record_file().order_by(StaffORM.id))
        return [to_staff_member(staff_row, record_row) for staff_row, record_row in rows]

    def find_by_national_id(self, national_id: str) -> Optional[StaffMember]:
        with self._standalone("find_by_national_id") as session:
            return self.find_by_national_id_tx(national_id, session)
