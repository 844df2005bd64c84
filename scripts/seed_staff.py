#!/usr/bin/env python3
"""
Staff seeder script - creates demo staff members with their record files
"""
from datetime import date

from sqlalchemy import func, select

from py_hrms_records import (
    RecordFile,
    RecordsError,
    RecordStatus,
    StaffMember,
    build_staff_service,
    configure_logging,
    get_session_factory,
    init_db,
    settings,
    transaction_scope,
)
from py_hrms_records.models import StaffORM

DEMO_STAFF = [
    {
        "name": "Alice",
        "surname": "Johnson",
        "national_id": "30111222",
        "email": "alice.johnson@agentichr.com",
        "department": "Engineering",
        "hire_date": date(2021, 3, 1),
        "file_number": "LEG-001",
        "category": "Senior",
    },
    {
        "name": "Bob",
        "surname": "Smith",
        "national_id": "30111223",
        "email": "bob.smith@agentichr.com",
        "department": "Engineering",
        "hire_date": date(2022, 6, 15),
        "file_number": "LEG-002",
        "category": "Semi-senior",
    },
    {
        "name": "Carol",
        "surname": "Davis",
        "national_id": "30111224",
        "email": "carol.davis@agentichr.com",
        "department": "Product",
        "hire_date": date(2020, 1, 20),
        "file_number": "LEG-003",
        "category": "Manager",
    },
    {
        "name": "David",
        "surname": "Wilson",
        "national_id": "30111225",
        "email": None,
        "department": "Design",
        "hire_date": date(2023, 9, 4),
        "file_number": "LEG-004",
        "category": "Junior",
    },
    {
        "name": "Grace",
        "surname": "Lee",
        "national_id": "30111226",
        "email": "grace.lee@agentichr.com",
        "department": "HR",
        "hire_date": date(2019, 11, 11),
        "file_number": "LEG-005",
        "category": "Manager",
    },
    {
        "name": "Henry",
        "surname": "Taylor",
        "national_id": "30111227",
        "email": "henry.taylor@agentichr.com",
        "department": "Finance",
        "hire_date": date(2018, 5, 7),
        "file_number": "LEG-006",
        "category": "Analyst",
        "status": RecordStatus.INACTIVE,
        "observations": "On extended leave",
    },
]


def build_staff(data: dict) -> StaffMember:
    record_file = RecordFile(
        file_number=data["file_number"],
        category=data.get("category"),
        status=data.get("status", RecordStatus.ACTIVE),
        creation_date=data["hire_date"],
        observations=data.get("observations"),
    )
    return StaffMember(
        name=data["name"],
        surname=data["surname"],
        national_id=data["national_id"],
        email=data.get("email"),
        hire_date=data["hire_date"],
        department=data["department"],
        record_file=record_file,
    )


def seed_staff():
    """Seed the database with demo staff members"""
    configure_logging()
    init_db()
    print("🌱 Seeding staff...")

    with transaction_scope() as session:
        count = session.scalar(select(func.count(StaffORM.id)))

    if count > 0:
        print(f"⚠️  Database already has {count} staff members. Skipping seed.")
        return

    service = build_staff_service(get_session_factory())
    created = 0
    for data in DEMO_STAFF:
        staff = build_staff(data)
        try:
            service.insert(staff)
            created += 1
        except RecordsError as exc:
            print(f"❌ Could not create {staff.full_name}: {exc}")

    print(f"✅ Successfully seeded {created} staff members")

    with transaction_scope() as session:
        result = session.execute(
            select(StaffORM.department, func.count(StaffORM.id))
            .where(StaffORM.deleted.is_(False))
            .group_by(StaffORM.department)
            .order_by(StaffORM.department)
        )
        summary = result.all()

    print("\n📊 Staff by department:")
    for dept, dept_count in summary:
        print(f"  {dept}: {dept_count}")


if __name__ == "__main__":
    seed_staff()
