"""Persistence for record files."""

from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from ..entities import EntityState, RecordFile, RecordStatus
from ..metrics import track_db_operation
from ..models import RecordFileORM, StaffORM
from .base import BaseStore


def to_record_file(row: RecordFileORM) -> RecordFile:
    return RecordFile(
        file_number=row.file_number,
        category=row.category,
        status=row.status,
        creation_date=row.creation_date,
        observations=row.observations,
        state=EntityState(id=row.id, deleted=row.deleted),
    )


def _live():
    return RecordFileORM.deleted.is_(False)


class RecordFileStore(BaseStore[RecordFile]):
    """
    Record files are never created on their own: ``create_tx`` keeps the
    unsupported default and ``create_for_staff_tx`` is the only way in.
    """

    table = "record_file"

    @track_db_operation("insert", "record_file")
    def create_for_staff_tx(self, record_file: RecordFile, staff_id: int, session: Session) -> RecordFile:
        row = RecordFileORM(
            file_number=record_file.file_number.strip(),
            category=record_file.category,
            status=record_file.status,
            creation_date=record_file.creation_date,
            observations=record_file.observations,
            staff_id=staff_id,
        )
        session.add(row)
        session.flush()
        record_file.state.id = row.id
        return record_file

    def _update(self, record_file: RecordFile, session: Session, *criteria) -> bool:
        result = session.execute(
            update(RecordFileORM)
            .where(RecordFileORM.id == record_file.id, _live(), *criteria)
            .values(
                file_number=record_file.file_number.strip(),
                category=record_file.category,
                status=record_file.status,
                creation_date=record_file.creation_date,
                observations=record_file.observations,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    @track_db_operation("update", "record_file")
    def update_tx(self, record_file: RecordFile, session: Session) -> bool:
        return self._update(record_file, session)

    @track_db_operation("update", "record_file")
    def update_for_staff_tx(self, record_file: RecordFile, staff_id: int, session: Session) -> bool:
        """Update only if the live record file belongs to ``staff_id``."""
        return self._update(record_file, session, RecordFileORM.staff_id == staff_id)

    @track_db_operation("soft_delete", "record_file")
    def soft_delete_tx(self, record_file_id: int, session: Session) -> bool:
        result = session.execute(
            update(RecordFileORM)
            .where(RecordFileORM.id == record_file_id, _live())
            .values(deleted=True, status=RecordStatus.INACTIVE)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    @track_db_operation("select", "record_file")
    def find_by_id_tx(self, record_file_id: int, session: Session) -> Optional[RecordFile]:
        row = session.scalar(
            select(RecordFileORM).where(RecordFileORM.id == record_file_id, _live())
        )
        return to_record_file(row) if row is not None else None

    @track_db_operation("select", "record_file")
    def has_live_owner_tx(self, record_file_id: int, session: Session) -> bool:
        owner_id = session.scalar(
            select(StaffORM.id)
            .join(RecordFileORM, RecordFileORM.staff_id == StaffORM.id)
            .where(RecordFileORM.id == record_file_id, StaffORM.deleted.is_(False))
        )
        return owner_id is not None

    @track_db_operation("select", "record_file")
    def find_all_tx(self, session: Session) -> List[RecordFile]:
        rows = session.scalars(
            select(RecordFileORM).where(_live()).order_by(RecordFileORM.id)
        )
        return [to_record_file(row) for row in rows]

    @track_db_operation("select", "record_file")
    def find_by_status_tx(self, status: RecordStatus, session: Session) -> List[RecordFile]:
        rows = session.scalars(
            select(RecordFileORM)
            .where(RecordFileORM.status == status, _live())
            .order_by(RecordFileORM.id)
        )
        return [to_record_file(row) for row in rows]

    def find_by_status(self, status: RecordStatus) -> List[RecordFile]:
        with self._standalone("find_by_status") as session:
            return self.find_by_status_tx(status, session)
