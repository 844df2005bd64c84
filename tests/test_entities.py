from py_hrms_records.entities import RecordFile, RecordStatus, StaffMember


def test_status_descriptions_and_flags():
    assert RecordStatus.ACTIVE.description == "Active / in service"
    assert RecordStatus.INACTIVE.description == "Inactive / out of service"
    assert RecordStatus.ACTIVE.is_active and not RecordStatus.ACTIVE.is_inactive
    assert RecordStatus("INACTIVE").is_inactive


def test_new_entities_are_not_persisted():
    staff = StaffMember(name="Jane")

    assert staff.id == 0
    assert not staff.state.persisted
    assert staff.deleted is False


def test_mark_deleted_cascades_to_record_file():
    record_file = RecordFile(file_number="LEG-001", status=RecordStatus.ACTIVE)
    staff = StaffMember(name="Jane", surname="Doe", record_file=record_file)

    staff.mark_deleted()

    assert staff.deleted is True
    assert record_file.deleted is True
    assert record_file.status is RecordStatus.INACTIVE


def test_full_name_skips_missing_parts():
    assert StaffMember(name="Jane", surname="Doe").full_name == "Jane Doe"
    assert StaffMember(surname="Doe").full_name == "Doe"
