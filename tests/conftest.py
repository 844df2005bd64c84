from datetime import date

import pytest
from sqlalchemy.pool import StaticPool

from py_hrms_records.db import build_engine, build_session_factory, init_db
from py_hrms_records.entities import RecordFile, RecordStatus, StaffMember
from py_hrms_records.services import build_staff_service


@pytest.fixture
def engine():
    # One shared in-memory connection, fresh schema per test
    engine = build_engine("sqlite+pysqlite:///:memory:", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def staff_service(session_factory):
    return build_staff_service(session_factory)


@pytest.fixture
def record_file_service(staff_service):
    return staff_service.record_file_service


@pytest.fixture
def make_staff():
    """Build an unsaved staff member with a valid record file."""
    def factory(
        national_id="30111222",
        file_number="LEG-001",
        email="jane.doe@example.com",
        name="Jane",
        surname="Doe",
        status=RecordStatus.ACTIVE,
    ):
        return StaffMember(
            name=name,
            surname=surname,
            national_id=national_id,
            email=email,
            hire_date=date(2024, 1, 8),
            department="Engineering",
            record_file=RecordFile(
                file_number=file_number,
                category="Senior",
                status=status,
                creation_date=date(2024, 1, 10),
                observations="Transferred from the Cordoba office",
            ),
        )
    return factory
