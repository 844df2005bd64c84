from datetime import date

import pytest

from py_hrms_records.config import settings
from py_hrms_records.db import transaction_scope
from py_hrms_records.entities import RecordFile, RecordStatus, StaffMember
from py_hrms_records.exceptions import ConflictError, UnsupportedOperationError
from py_hrms_records.metrics import get_metrics, service_registry
from py_hrms_records.models import RecordFileORM
from py_hrms_records.stores import BaseStore, RecordFileStore, StaffStore


class ReadOnlyStore(BaseStore[StaffMember]):
    table = "staff"


def _record_file(file_number="LEG-100", status=RecordStatus.ACTIVE):
    return RecordFile(file_number=file_number, status=status, creation_date=date(2024, 1, 10))


def _staff(national_id="30111222"):
    return StaffMember(name="Jane", surname="Doe", national_id=national_id)


def _create_pair(session_factory, national_id="30111222", file_number="LEG-100", status=RecordStatus.ACTIVE):
    staff_store = StaffStore(session_factory)
    record_store = RecordFileStore(session_factory)
    with transaction_scope(session_factory) as session:
        staff = staff_store.create_tx(_staff(national_id), session)
        record_file = record_store.create_for_staff_tx(_record_file(file_number, status), staff.id, session)
    return staff, record_file


@pytest.mark.parametrize("call", [
    lambda store, s: store.create_tx(_staff(), s),
    lambda store, s: store.update_tx(_staff(), s),
    lambda store, s: store.soft_delete_tx(1, s),
    lambda store, s: store.find_by_id_tx(1, s),
    lambda store, s: store.find_all_tx(s),
])
def test_participating_forms_fail_unless_overridden(session_factory, call):
    store = ReadOnlyStore(session_factory)

    with pytest.raises(UnsupportedOperationError, match="Override"):
        with transaction_scope(session_factory) as session:
            call(store, session)


def test_standalone_forms_inherit_the_unsupported_default(session_factory):
    with pytest.raises(UnsupportedOperationError, match="ReadOnlyStore"):
        ReadOnlyStore(session_factory).find_all()


def test_record_file_store_has_no_ownerless_create(session_factory):
    store = RecordFileStore(session_factory)

    with pytest.raises(UnsupportedOperationError):
        store.create(_record_file())


def test_staff_store_create_assigns_generated_id(session_factory):
    staff = StaffStore(session_factory).create(_staff())

    assert staff.id > 0
    assert StaffStore(session_factory).find_by_id(staff.id).national_id == "30111222"


def test_staff_reads_attach_live_record_file(session_factory):
    staff, record_file = _create_pair(session_factory)
    store = StaffStore(session_factory)

    loaded = store.find_by_national_id(" 30111222 ")
    assert loaded.id == staff.id
    assert loaded.record_file.id == record_file.id
    assert loaded.record_file.file_number == "LEG-100"

    RecordFileStore(session_factory).soft_delete(record_file.id)
    assert store.find_by_id(staff.id).record_file is None


def test_soft_delete_reports_whether_a_live_row_changed(session_factory):
    staff, record_file = _create_pair(session_factory)
    record_store = RecordFileStore(session_factory)

    assert record_store.soft_delete(record_file.id) is True
    assert record_store.soft_delete(record_file.id) is False
    assert record_store.find_by_id(record_file.id) is None
    assert record_store.find_all() == []


def test_record_file_soft_delete_forces_inactive_status(session_factory):
    staff, record_file = _create_pair(session_factory)
    RecordFileStore(session_factory).soft_delete(record_file.id)

    with transaction_scope(session_factory) as session:
        row = session.get(RecordFileORM, record_file.id)
        assert row.deleted is True
        assert row.status is RecordStatus.INACTIVE


def test_update_skips_deleted_rows(session_factory):
    staff, _ = _create_pair(session_factory)
    store = StaffStore(session_factory)
    store.soft_delete(staff.id)

    staff.name = "Janet"
    assert store.update(staff) is False


def test_find_by_status_filters_live_rows(session_factory):
    _create_pair(session_factory, "30111222", "LEG-100", RecordStatus.ACTIVE)
    _, inactive = _create_pair(session_factory, "30111223", "LEG-101", RecordStatus.INACTIVE)
    _, deleted = _create_pair(session_factory, "30111224", "LEG-102", RecordStatus.ACTIVE)
    store = RecordFileStore(session_factory)
    store.soft_delete(deleted.id)

    assert [r.file_number for r in store.find_by_status(RecordStatus.ACTIVE)] == ["LEG-100"]
    assert [r.id for r in store.find_by_status(RecordStatus.INACTIVE)] == [inactive.id]


def test_store_operations_are_counted(session_factory):
    labels = {"operation": "insert", "table": "staff", "status": "success", "service": settings.service_name}
    before = service_registry.get_sample_value("records_store_operations_total", labels) or 0.0

    StaffStore(session_factory).create(_staff())

    assert service_registry.get_sample_value("records_store_operations_total", labels) == before + 1


def test_failed_store_operations_are_counted_as_errors(session_factory):
    StaffStore(session_factory).create(_staff())
    labels = {"operation": "insert", "table": "staff", "status": "error", "service": settings.service_name}
    before = service_registry.get_sample_value("records_store_operations_total", labels) or 0.0

    with pytest.raises(ConflictError):
        StaffStore(session_factory).create(_staff())

    assert service_registry.get_sample_value("records_store_operations_total", labels) == before + 1
    assert "records_store_operation_duration_seconds" in get_metrics()


def test_owner_scoped_update_ignores_other_staff_members_record_file(session_factory):
    first, _ = _create_pair(session_factory, "30111222", "LEG-100")
    _, other_record = _create_pair(session_factory, "30111223", "LEG-101")
    store = RecordFileStore(session_factory)
    other_record.category = "Lead"

    with transaction_scope(session_factory) as session:
        assert store.update_for_staff_tx(other_record, first.id, session) is False

    assert store.find_by_id(other_record.id).category is None


def test_second_record_file_for_same_staff_member_conflicts(session_factory):
    staff, _ = _create_pair(session_factory)

    with pytest.raises(ConflictError) as exc_info:
        with transaction_scope(session_factory) as session:
            RecordFileStore(session_factory).create_for_staff_tx(_record_file("LEG-101"), staff.id, session)

    assert exc_info.value.field == "staff_id"


def test_has_live_owner_follows_staff_deletion(session_factory):
    staff, record_file = _create_pair(session_factory)
    store = RecordFileStore(session_factory)

    with transaction_scope(session_factory) as session:
        assert store.has_live_owner_tx(record_file.id, session) is True
    StaffStore(session_factory).soft_delete(staff.id)
    with transaction_scope(session_factory) as session:
        assert store.has_live_owner_tx(record_file.id, session) is False
