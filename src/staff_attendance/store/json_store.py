from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Optional, Sequence

from filelock import FileLock

from ..attendance.model import AttendanceRecord
from ..core.exceptions import ConcurrentModificationError
from ..users.model import User
from .repository import RecordStore
from .serialization import record_from_dict, record_to_dict, user_from_dict, user_to_dict

logger = logging.getLogger(__name__)


class JsonFileRecordStore(RecordStore):
    """Both collections kept in one JSON document on disk.

    Layout: ``{"users": [...], "attendance": [...], "versions": {"users": n, "attendance": n}}``.
    Saves go through a temp file and ``os.replace`` so readers only ever see a
    complete document. The version check and the replace run under a sidecar
    ``<file>.lock`` so writers in other processes cannot interleave.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._lock = threading.RLock()
        self._file_lock = FileLock(str(self._path) + ".lock")

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {"users": [], "attendance": [], "versions": {"users": 0, "attendance": 0}}
        with self._path.open("r", encoding="utf-8") as f:
            doc = json.load(f)
        doc.setdefault("users", [])
        doc.setdefault("attendance", [])
        doc.setdefault("versions", {})
        doc["versions"].setdefault("users", 0)
        doc["versions"].setdefault("attendance", 0)
        return doc

    def _write(self, doc: dict[str, Any]) -> None:
        fd, tmp = tempfile.mkstemp(prefix=self._path.name, suffix=".tmp", dir=str(self._path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(doc, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self._path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def _replace(self, key: str, items: list[dict[str, Any]], expected_version: Optional[int]) -> int:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock, self._file_lock:
            doc = self._read()
            current = int(doc["versions"][key])
            if expected_version is not None and expected_version != current:
                raise ConcurrentModificationError(
                    f"{key} changed since it was read (expected v{expected_version}, found v{current})"
                )
            doc[key] = items
            doc["versions"][key] = current + 1
            self._write(doc)
            return current + 1

    def load_users(self) -> Sequence[User]:
        with self._lock:
            return [user_from_dict(d) for d in self._read()["users"]]

    def users_version(self) -> int:
        with self._lock:
            return int(self._read()["versions"]["users"])

    def save_users(self, users: Sequence[User], *, expected_version: Optional[int] = None) -> None:
        version = self._replace("users", [user_to_dict(u) for u in users], expected_version)
        logger.debug("Saved %d users to %s (v%d)", len(users), self._path, version)

    def load_records(self) -> Sequence[AttendanceRecord]:
        with self._lock:
            return [record_from_dict(d) for d in self._read()["attendance"]]

    def records_version(self) -> int:
        with self._lock:
            return int(self._read()["versions"]["attendance"])

    def save_records(self, records: Sequence[AttendanceRecord], *, expected_version: Optional[int] = None) -> None:
        version = self._replace("attendance", [record_to_dict(r) for r in records], expected_version)
        logger.debug("Saved %d attendance records to %s (v%d)", len(records), self._path, version)
