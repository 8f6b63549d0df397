from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_LATE_END_HOUR, DEFAULT_LATE_START_HOUR
from .core.exceptions import ValidationError
from .database.bootstrap import apply_schema
from .database.connection import DBConfig, DatabaseConnection
from .reports.aggregation import AggregationService
from .reports.filters import ReportService
from .store.json_store import JsonFileRecordStore
from .store.memory_store import InMemoryRecordStore
from .store.mysql_store import MySQLRecordStore
from .store.repository import RecordStore
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    store: RecordStore

    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    aggregation_service: AggregationService
    report_service: ReportService


def build_store(settings: Any) -> RecordStore:
    backend = str(getattr(settings, "STORE_BACKEND", "memory")).lower()

    if backend == "memory":
        return InMemoryRecordStore()
    if backend == "json":
        return JsonFileRecordStore(getattr(settings, "JSON_STORE_PATH"))
    if backend == "mysql":
        db_config = dict(getattr(settings, "DB_CONFIG"))
        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config)
        return MySQLRecordStore(DatabaseConnection(DBConfig.from_dict(db_config)))

    raise ValidationError(f"Unknown STORE_BACKEND: {backend}")


def build_container(*, settings: Any, store: Optional[RecordStore] = None) -> Container:
    store = store or build_store(settings)

    factory = AttendanceStrategyFactory(
        late_start_hour=int(getattr(settings, "LATE_START_HOUR", DEFAULT_LATE_START_HOUR)),
        late_end_hour=int(getattr(settings, "LATE_END_HOUR", DEFAULT_LATE_END_HOUR)),
    )

    return Container(
        store=store,
        auth_service=AuthService(store),
        user_service=UserService(store),
        attendance_service=AttendanceService(store, strategy_factory=factory),
        aggregation_service=AggregationService(store),
        report_service=ReportService(store),
    )
