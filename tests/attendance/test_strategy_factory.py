from datetime import datetime

import pytest

from staff_attendance.attendance.factory import AttendanceStrategyFactory
from staff_attendance.attendance.strategies.late_strategy import LateStrategy
from staff_attendance.attendance.strategies.normal_strategy import NormalStrategy
from staff_attendance.core.enums import AttendanceStatus


@pytest.mark.parametrize("hour", [9, 10, 11])
def test_factory_checkin_late_inside_window(hour):
    now = datetime(2025, 1, 1, hour, 59, 59)

    strategy = AttendanceStrategyFactory().for_checkin(now=now)

    assert isinstance(strategy, LateStrategy)
    assert strategy.decide_checkin(now=now).status == AttendanceStatus.LATE


@pytest.mark.parametrize("hour", [0, 7, 8, 12, 13, 23])
def test_factory_checkin_present_outside_window(hour):
    now = datetime(2025, 1, 1, hour, 0, 0)

    strategy = AttendanceStrategyFactory().for_checkin(now=now)

    assert isinstance(strategy, NormalStrategy)
    assert strategy.decide_checkin(now=now).status == AttendanceStatus.PRESENT


def test_factory_respects_configured_window():
    factory = AttendanceStrategyFactory(late_start_hour=8, late_end_hour=10)

    assert isinstance(factory.for_checkin(now=datetime(2025, 1, 1, 8, 1)), LateStrategy)
    assert isinstance(factory.for_checkin(now=datetime(2025, 1, 1, 10, 0)), NormalStrategy)
