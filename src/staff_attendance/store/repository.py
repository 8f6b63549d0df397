from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..attendance.model import AttendanceRecord
from ..users.model import User


class RecordStore(Protocol):
    """Storage interface for the Users and AttendanceRecords collections.

    Note (DIP): services depend on this interface, never on a concrete backend.
    Each save replaces the whole collection; no ordering is implied and no
    domain invariant is checked here.

    Every successful save bumps that collection's version. A save given
    ``expected_version`` raises ConcurrentModificationError, writing nothing,
    when the stored version no longer matches.
    """

    def load_users(self) -> Sequence[User]:
        raise NotImplementedError

    def users_version(self) -> int:
        raise NotImplementedError

    def save_users(self, users: Sequence[User], *, expected_version: Optional[int] = None) -> None:
        raise NotImplementedError

    def load_records(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def records_version(self) -> int:
        raise NotImplementedError

    def save_records(self, records: Sequence[AttendanceRecord], *, expected_version: Optional[int] = None) -> None:
        raise NotImplementedError
