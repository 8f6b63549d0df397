from __future__ import annotations

import logging
import threading
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..core.exceptions import ConcurrentModificationError
from ..users.model import User
from .repository import RecordStore

logger = logging.getLogger(__name__)


class InMemoryRecordStore(RecordStore):
    """Process-local store; used by tests and the ``memory`` backend."""

    def __init__(self, *, users: Sequence[User] = (), records: Sequence[AttendanceRecord] = ()):
        self._lock = threading.RLock()
        self._users: tuple[User, ...] = tuple(users)
        self._records: tuple[AttendanceRecord, ...] = tuple(records)
        self._versions = {"users": 0, "attendance": 0}

    def _check_version(self, collection: str, expected_version: Optional[int]) -> None:
        current = self._versions[collection]
        if expected_version is not None and expected_version != current:
            raise ConcurrentModificationError(
                f"{collection} changed since it was read (expected v{expected_version}, found v{current})"
            )

    def load_users(self) -> Sequence[User]:
        with self._lock:
            return list(self._users)

    def users_version(self) -> int:
        with self._lock:
            return self._versions["users"]

    def save_users(self, users: Sequence[User], *, expected_version: Optional[int] = None) -> None:
        with self._lock:
            self._check_version("users", expected_version)
            self._users = tuple(users)
            self._versions["users"] += 1
            logger.debug("Saved %d users (v%d)", len(self._users), self._versions["users"])

    def load_records(self) -> Sequence[AttendanceRecord]:
        with self._lock:
            return list(self._records)

    def records_version(self) -> int:
        with self._lock:
            return self._versions["attendance"]

    def save_records(self, records: Sequence[AttendanceRecord], *, expected_version: Optional[int] = None) -> None:
        with self._lock:
            self._check_version("attendance", expected_version)
            self._records = tuple(records)
            self._versions["attendance"] += 1
            logger.debug("Saved %d attendance records (v%d)", len(self._records), self._versions["attendance"])
