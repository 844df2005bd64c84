"""Staff and record file database models."""

from datetime import date
from typing import Optional

from sqlalchemy import Boolean, Date, Enum, ForeignKey, Index, Integer, String, UniqueConstraint, false
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base
from .entities import RecordStatus


class SoftDeleteMixin:
    """Logical-deletion flag shared by both tables."""

    deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())


class StaffORM(SoftDeleteMixin, Base):
    __tablename__ = "staff"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(80), nullable=False)
    surname: Mapped[str] = mapped_column(String(80), nullable=False, index=True)
    national_id: Mapped[str] = mapped_column(String(15), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    hire_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    department: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    __table_args__ = (
        UniqueConstraint("national_id", name="uq_staff_national_id"),
        UniqueConstraint("email", name="uq_staff_email"),
        Index("ix_staff_deleted_surname", "deleted", "surname"),
    )


class RecordFileORM(SoftDeleteMixin, Base):
    __tablename__ = "record_file"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    file_number: Mapped[str] = mapped_column(String(20), nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    status: Mapped[RecordStatus] = mapped_column(
        Enum(RecordStatus, name="record_status", native_enum=False, length=10),
        nullable=False,
    )
    creation_date: Mapped[date] = mapped_column(Date, nullable=False)
    observations: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    staff_id: Mapped[int] = mapped_column(ForeignKey("staff.id"), nullable=False)

    __table_args__ = (
        UniqueConstraint("file_number", name="uq_record_file_file_number"),
        UniqueConstraint("staff_id", name="uq_record_file_staff_id"),
        Index("ix_record_file_deleted_status", "deleted", "status"),
    )
