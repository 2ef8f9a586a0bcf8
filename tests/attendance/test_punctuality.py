from datetime import datetime, time, timedelta, timezone

import pytest

from conftest import utc, weekday_office
from geo_attendance.attendance.factory import AttendanceStrategyFactory
from geo_attendance.attendance.punctuality import PunctualityPolicy, classify, classify_check_out
from geo_attendance.attendance.strategies.early_strategy import EarlyDepartureStrategy
from geo_attendance.attendance.strategies.late_strategy import LateStrategy
from geo_attendance.attendance.strategies.normal_strategy import NormalStrategy
from geo_attendance.core.enums import AttendanceStatus
from geo_attendance.offices.model import WorkingHours

NINE = time(9, 0)
EAT = timezone(timedelta(hours=3))


@pytest.mark.parametrize(
    "local_hm,expected",
    [
        ((8, 45), AttendanceStatus.ON_TIME),
        ((9, 15), AttendanceStatus.ON_TIME),
        ((9, 30), AttendanceStatus.ON_TIME),
        ((9, 31), AttendanceStatus.LATE),
        ((13, 0), AttendanceStatus.LATE),
    ],
)
def test_classify_in_office_time(local_hm, expected):
    hour, minute = local_hm
    instant = datetime(2025, 3, 3, hour, minute, tzinfo=EAT).astimezone(timezone.utc)

    assert classify(instant, NINE, grace_minutes=30, utc_offset_minutes=180) == expected


def test_one_second_past_grace_is_late():
    instant = utc(2025, 3, 3, 6, 30, 1)
    assert classify(instant, NINE, grace_minutes=30, utc_offset_minutes=180) == AttendanceStatus.LATE


def test_offset_is_configurable():
    # 08:20 UTC is 09:20 at UTC+1 (on time) but 11:20 at UTC+3 (late)
    instant = utc(2025, 3, 3, 8, 20)

    assert classify(instant, NINE, utc_offset_minutes=60) == AttendanceStatus.ON_TIME
    assert classify(instant, NINE, utc_offset_minutes=180) == AttendanceStatus.LATE


def test_naive_instant_is_taken_as_utc():
    assert classify(datetime(2025, 3, 3, 6, 15), NINE, utc_offset_minutes=180) == AttendanceStatus.ON_TIME


def test_no_start_time_counts_as_on_time():
    assert classify(utc(2025, 3, 2, 12, 0), None) == AttendanceStatus.ON_TIME


def test_factory_checkin_on_time_within_grace():
    local_now = datetime(2025, 1, 1, 8, 4, 59, tzinfo=EAT)
    strategy = AttendanceStrategyFactory().for_checkin(local_now=local_now, start=time(8, 0), grace_minutes=5)

    assert isinstance(strategy, NormalStrategy)


def test_factory_checkin_late_after_grace():
    local_now = datetime(2025, 1, 1, 8, 6, 0, tzinfo=EAT)
    strategy = AttendanceStrategyFactory().for_checkin(local_now=local_now, start=time(8, 0), grace_minutes=5)

    assert isinstance(strategy, LateStrategy)


def test_checkout_is_unclassified_without_margin():
    instant = datetime(2025, 3, 3, 12, 0, tzinfo=EAT)
    assert classify_check_out(instant, time(18, 0), utc_offset_minutes=180) is None


def test_factory_checkout_before_margin_is_early_departure():
    factory = AttendanceStrategyFactory(early_departure_margin_minutes=15)
    end = time(18, 0)

    early = factory.for_checkout(local_now=datetime(2025, 3, 3, 17, 44, tzinfo=EAT), end=end)
    on_margin = factory.for_checkout(local_now=datetime(2025, 3, 3, 17, 45, tzinfo=EAT), end=end)

    assert isinstance(early, EarlyDepartureStrategy)
    assert isinstance(on_margin, NormalStrategy)


def test_policy_uses_the_days_own_hours():
    office = weekday_office(
        working_hours={
            1: WorkingHours(start=time(9, 0), end=time(18, 0)),
            6: WorkingHours(start=time(8, 0), end=time(12, 0)),
        }
    )
    policy = PunctualityPolicy()

    # Saturday 2025-03-08 08:45 local: late against 08:00 + 30
    saturday = datetime(2025, 3, 8, 8, 45, tzinfo=EAT)
    # Monday 2025-03-03 08:45 local: on time against 09:00
    monday = datetime(2025, 3, 3, 8, 45, tzinfo=EAT)

    assert policy.check_in_status(saturday, office) == AttendanceStatus.LATE
    assert policy.check_in_status(monday, office) == AttendanceStatus.ON_TIME


def test_policy_early_departure(office):
    policy = PunctualityPolicy(early_departure_margin_minutes=30)

    assert policy.check_out_status(datetime(2025, 3, 3, 16, 0, tzinfo=EAT), office) == AttendanceStatus.EARLY_DEPARTURE
    assert policy.check_out_status(datetime(2025, 3, 3, 17, 30, tzinfo=EAT), office) is None
