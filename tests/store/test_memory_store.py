from __future__ import annotations

from datetime import date, datetime

import pytest

from staff_attendance.attendance.model import AttendanceRecord
from staff_attendance.core.enums import AttendanceStatus
from staff_attendance.core.exceptions import ConcurrentModificationError
from staff_attendance.store.memory_store import InMemoryRecordStore


def _record(attendance_id: int) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=attendance_id,
        user_id=2,
        work_date=date(2026, 2, attendance_id),
        check_in_time=datetime(2026, 2, attendance_id, 8),
        check_out_time=None,
        status=AttendanceStatus.PRESENT,
    )


def test_save_replaces_whole_collection():
    store = InMemoryRecordStore(records=[_record(1), _record(2)])

    store.save_records([_record(3)])

    assert [r.attendance_id for r in store.load_records()] == [3]


def test_loaded_list_is_a_copy():
    store = InMemoryRecordStore(records=[_record(1)])

    rows = store.load_records()
    rows.append(_record(2))

    assert len(store.load_records()) == 1


def test_versions_bump_per_collection(manager):
    store = InMemoryRecordStore()
    assert (store.users_version(), store.records_version()) == (0, 0)

    store.save_records([_record(1)])
    store.save_records([_record(1), _record(2)])
    store.save_users([manager])

    assert (store.users_version(), store.records_version()) == (1, 2)


def test_stale_expected_version_is_rejected():
    store = InMemoryRecordStore()
    store.save_records([_record(1)])

    with pytest.raises(ConcurrentModificationError):
        store.save_records([_record(2)], expected_version=0)

    assert [r.attendance_id for r in store.load_records()] == [1]
    assert store.records_version() == 1

    store.save_records([_record(2)], expected_version=1)
    assert store.records_version() == 2
