from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.constants import DEFAULT_LATE_END_HOUR, DEFAULT_LATE_START_HOUR
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the check-in strategy from the hour of day.

    Hours in ``[late_start_hour, late_end_hour)`` are late; every other hour,
    including before the window and from noon on, counts as present.
    """

    late_start_hour: int = DEFAULT_LATE_START_HOUR
    late_end_hour: int = DEFAULT_LATE_END_HOUR

    def for_checkin(self, *, now: datetime) -> AttendanceStrategy:
        if self.late_start_hour <= now.hour < self.late_end_hour:
            return LateStrategy()
        return NormalStrategy()
