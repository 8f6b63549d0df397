from __future__ import annotations

import logging
import threading
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.exceptions import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    NoCheckInFoundError,
    ValidationError,
)
from ..store.repository import RecordStore
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord

logger = logging.getLogger(__name__)


def find_record(records: Sequence[AttendanceRecord], user_id: int, work_date: date) -> Optional[AttendanceRecord]:
    for r in records:
        if r.user_id == user_id and r.work_date == work_date:
            return r
    return None


class AttendanceService:
    """Use case: the check-in/check-out state machine of one user-day.

    NoRecord -> check_in -> CheckedIn -> check_out -> CheckedOut. Repeating a
    transition raises instead of succeeding silently.

    Writes are read-all/mutate/replace-all. ``_write_lock`` serializes them in
    this process and the store's version check rejects a save when another
    writer got in between.
    """

    def __init__(self, store: RecordStore, *, strategy_factory: AttendanceStrategyFactory | None = None):
        self._store = store
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._write_lock = threading.Lock()

    def _require_user(self, user_id: int) -> None:
        if not any(u.user_id == user_id for u in self._store.load_users()):
            raise ValidationError("Employee does not exist")

    def check_in(self, user_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()
        self._require_user(user_id)

        with self._write_lock:
            version = self._store.records_version()
            records = list(self._store.load_records())

            if find_record(records, user_id, today):
                logger.warning("Rejected check-in: user %s already checked in on %s", user_id, today)
                raise AlreadyCheckedInError("Already checked in today")

            decision = self._factory.for_checkin(now=now).decide_checkin(now=now)
            record = AttendanceRecord(
                attendance_id=max((r.attendance_id for r in records), default=0) + 1,
                user_id=user_id,
                work_date=today,
                check_in_time=now,
                check_out_time=None,
                status=decision.status,
                total_hours=None,
            )
            records.append(record)
            self._store.save_records(records, expected_version=version)

        logger.info("User %s checked in on %s at %s (%s)", user_id, today, now.time(), record.status.value)
        return record

    def check_out(self, user_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()

        with self._write_lock:
            version = self._store.records_version()
            records = list(self._store.load_records())

            record = find_record(records, user_id, today)
            if not record:
                logger.warning("Rejected check-out: user %s has no check-in on %s", user_id, today)
                raise NoCheckInFoundError("No check-in found")
            if record.is_checked_out:
                logger.warning("Rejected check-out: user %s already checked out on %s", user_id, today)
                raise AlreadyCheckedOutError("Already checked out")
            if record.check_in_time is None or now <= record.check_in_time:
                raise ValidationError("Check-out time must be later than check-in time")

            updated = record.closed_at(now)
            records[records.index(record)] = updated
            self._store.save_records(records, expected_version=version)

        logger.info("User %s checked out on %s after %.2f h", user_id, today, updated.total_hours)
        return updated

    def get_today(self, user_id: int, *, now: datetime | None = None) -> Optional[AttendanceRecord]:
        now = now or now_local()
        return find_record(self._store.load_records(), user_id, now.date())

    def get_history(self, user_id: int, *, month: int | None = None, year: int | None = None) -> list[AttendanceRecord]:
        """All records of a user, newest date first.

        The month filter applies only when both ``month`` and ``year`` are given.
        """

        rows = [r for r in self._store.load_records() if r.user_id == user_id]
        if month and year:
            rows = [r for r in rows if r.work_date.month == int(month) and r.work_date.year == int(year)]
        rows.sort(key=lambda r: r.work_date, reverse=True)
        return rows
