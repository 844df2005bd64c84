from datetime import date

import pytest

from py_hrms_records.entities import RecordFile, RecordStatus
from py_hrms_records.exceptions import NotFoundError, UnsupportedOperationError, ValidationError
from py_hrms_records.services import RecordFileService
from py_hrms_records.stores import StaffStore


def _record_file(**overrides):
    fields = dict(
        file_number="LEG-001",
        category="Senior",
        status=RecordStatus.ACTIVE,
        creation_date=date(2024, 1, 10),
        observations=None,
    )
    fields.update(overrides)
    return RecordFile(**fields)


@pytest.mark.parametrize("overrides, message", [
    ({"file_number": None}, "file number cannot be empty"),
    ({"file_number": "   "}, "file number cannot be empty"),
    ({"file_number": "X" * 21}, "cannot exceed 20"),
    ({"status": None}, "status is required"),
    ({"category": "C" * 31}, "cannot exceed 30"),
    ({"observations": "o" * 256}, "cannot exceed 255"),
    ({"creation_date": None}, "creation date is required"),
])
def test_validate_rejects_invalid_fields(record_file_service, overrides, message):
    with pytest.raises(ValidationError, match=message):
        record_file_service.validate(_record_file(**overrides))


def test_validate_accepts_values_at_the_limits(record_file_service):
    record_file_service.validate(_record_file(
        file_number=" " + "X" * 20 + " ",
        category="C" * 30,
        observations="o" * 255,
    ))


def test_validate_rejects_missing_record_file(record_file_service):
    with pytest.raises(ValidationError):
        record_file_service.validate(None)


def test_standalone_insert_is_never_supported(record_file_service):
    with pytest.raises(UnsupportedOperationError, match="StaffService.insert"):
        record_file_service.insert(_record_file())

    assert record_file_service.list_all() == []


def test_update_persists_changes(staff_service, record_file_service, make_staff):
    staff = staff_service.insert(make_staff())
    record_file = staff.record_file
    record_file.category = "Principal"
    record_file.status = RecordStatus.INACTIVE

    record_file_service.update(record_file)

    loaded = record_file_service.get_by_id(record_file.id)
    assert loaded.category == "Principal"
    assert loaded.status is RecordStatus.INACTIVE


def test_update_of_unknown_record_file_is_not_found(record_file_service):
    record_file = _record_file()
    record_file.state.id = 999

    with pytest.raises(NotFoundError):
        record_file_service.update(record_file)


def test_update_requires_persisted_record_file(record_file_service):
    with pytest.raises(ValidationError, match="positive integer"):
        record_file_service.update(_record_file())


def test_delete_is_rejected_while_staff_member_is_live(staff_service, record_file_service, make_staff):
    staff = staff_service.insert(make_staff())

    with pytest.raises(UnsupportedOperationError, match="StaffService.delete"):
        record_file_service.delete(staff.record_file.id)

    assert staff_service.get_by_id(staff.id).record_file.id == staff.record_file.id
    staff_service.delete(staff.id)
    assert staff_service.get_by_id(staff.id) is None


def test_delete_removes_record_file_left_behind_by_deleted_owner(
    staff_service, record_file_service, make_staff, session_factory
):
    staff = staff_service.insert(make_staff())
    StaffStore(session_factory).soft_delete(staff.id)

    record_file_service.delete(staff.record_file.id)

    assert record_file_service.get_by_id(staff.record_file.id) is None
    with pytest.raises(NotFoundError):
        record_file_service.delete(staff.record_file.id)


@pytest.mark.parametrize("bad_id", [0, -3, None, "7", True])
def test_id_arguments_are_validated(record_file_service, bad_id):
    with pytest.raises(ValidationError):
        record_file_service.get_by_id(bad_id)
    with pytest.raises(ValidationError):
        record_file_service.delete(bad_id)


def test_get_by_status_accepts_enum_or_value(staff_service, record_file_service, make_staff):
    staff_service.insert(make_staff())
    staff_service.insert(make_staff(
        national_id="30111223",
        file_number="LEG-002",
        email="john.roe@example.com",
        status=RecordStatus.INACTIVE,
    ))

    assert [r.file_number for r in record_file_service.get_by_status("ACTIVE")] == ["LEG-001"]
    assert [r.file_number for r in record_file_service.get_by_status(RecordStatus.INACTIVE)] == ["LEG-002"]


@pytest.mark.parametrize("status", [None, "ARCHIVED", ""])
def test_get_by_status_rejects_unknown_values(record_file_service, status):
    with pytest.raises(ValidationError):
        record_file_service.get_by_status(status)


def test_constructor_requires_store():
    with pytest.raises(ValueError):
        RecordFileService(None)
