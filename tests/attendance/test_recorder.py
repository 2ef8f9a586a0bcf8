from datetime import datetime, timedelta, timezone

import pytest

from conftest import OFFICE_CENTER, InMemoryBindings, point_east, utc
from geo_attendance.attendance.punctuality import PunctualityPolicy
from geo_attendance.attendance.recorder import record_check_in, record_check_out
from geo_attendance.core.enums import AttendanceStatus, EventKind
from geo_attendance.core.exceptions import (
    DeviceConflict,
    DuplicateEvent,
    LocationUnavailable,
    NotAuthenticated,
    OfficeNotConfigured,
    OutOfGeofence,
)
from geo_attendance.geo.model import Coordinate


def test_check_in_produces_classified_event(office, bindings, fixed_now):
    event = record_check_in("u1", "phone-1", point_east(40), office, bindings, fixed_now, id_factory=lambda: "ev-1")

    assert event.event_id == "ev-1"
    assert event.kind == EventKind.CHECK_IN
    assert event.status == AttendanceStatus.ON_TIME
    assert event.timestamp == fixed_now
    assert event.distance_m == 40
    assert event.device_id == "phone-1"
    assert bindings.get_user_for_device("phone-1") == "u1"


def test_check_in_after_grace_is_late(office, bindings):
    event = record_check_in("u1", None, OFFICE_CENTER, office, bindings, utc(2025, 3, 3, 6, 31))

    assert event.status == AttendanceStatus.LATE
    assert event.device_id is None


def test_timestamp_is_normalized_to_utc(office, bindings):
    local_now = datetime(2025, 3, 3, 9, 15, tzinfo=timezone(timedelta(hours=3)))

    event = record_check_in("u1", None, OFFICE_CENTER, office, bindings, local_now)

    assert event.timestamp.utcoffset() == timedelta(0)
    assert event.timestamp == utc(2025, 3, 3, 6, 15)


@pytest.mark.parametrize("user_id", [None, ""])
def test_missing_user_is_not_authenticated(office, bindings, fixed_now, user_id):
    with pytest.raises(NotAuthenticated):
        record_check_in(user_id, "phone-1", OFFICE_CENTER, office, bindings, fixed_now)
    assert bindings.owner_by_device == {}


@pytest.mark.parametrize("location", [None, Coordinate(None, 39.2), Coordinate(-6.7, None)])
def test_missing_location(office, bindings, fixed_now, location):
    with pytest.raises(LocationUnavailable):
        record_check_in("u1", "phone-1", location, office, bindings, fixed_now)


def test_missing_office(bindings, fixed_now):
    with pytest.raises(OfficeNotConfigured):
        record_check_in("u1", "phone-1", OFFICE_CENTER, None, bindings, fixed_now)
    assert bindings.owner_by_device == {}


def test_device_conflict_stops_before_geofence(office, fixed_now):
    bindings = InMemoryBindings({"phone-1": "u2"})

    # Far outside the fence: the device check must fail first.
    with pytest.raises(DeviceConflict):
        record_check_in("u1", "phone-1", point_east(5000), office, bindings, fixed_now)


def test_out_of_geofence_carries_distance(office, bindings, fixed_now):
    with pytest.raises(OutOfGeofence) as exc:
        record_check_in("u1", None, point_east(1240), office, bindings, fixed_now)

    assert exc.value.distance_m == pytest.approx(1240, abs=0.5)
    assert exc.value.radius_m == 100
    assert "1.24km away" in str(exc.value)
    assert exc.value.to_dict()["kind"] == "out_of_geofence"


def test_binding_survives_geofence_rejection(office, bindings, fixed_now):
    with pytest.raises(OutOfGeofence):
        record_check_in("u1", "phone-1", point_east(500), office, bindings, fixed_now)

    assert bindings.get_user_for_device("phone-1") == "u1"
    # Retrying from inside the fence with the same device is fine.
    assert record_check_in("u1", "phone-1", OFFICE_CENTER, office, bindings, fixed_now).device_id == "phone-1"


def test_duplicate_check_in_same_office_day_is_rejected(office, bindings, fixed_now):
    first = record_check_in("u1", None, OFFICE_CENTER, office, bindings, fixed_now)

    with pytest.raises(DuplicateEvent) as exc:
        record_check_in("u1", None, OFFICE_CENTER, office, bindings, fixed_now + timedelta(hours=1), todays_events=[first])
    assert exc.value.event_kind == "check-in"


def test_duplicate_guard_ignores_other_days_kinds_and_users(office, bindings, fixed_now):
    yesterday = record_check_in("u1", None, OFFICE_CENTER, office, bindings, fixed_now - timedelta(days=1))
    other_user = record_check_in("u2", None, OFFICE_CENTER, office, bindings, fixed_now)
    check_out = record_check_out("u1", None, OFFICE_CENTER, office, fixed_now - timedelta(hours=1))

    event = record_check_in(
        "u1", None, OFFICE_CENTER, office, bindings, fixed_now, todays_events=[yesterday, other_user, check_out]
    )
    assert event.kind == EventKind.CHECK_IN


def test_multiple_events_allowed_when_configured(office, bindings, fixed_now):
    first = record_check_in("u1", None, OFFICE_CENTER, office, bindings, fixed_now)

    second = record_check_in(
        "u1", None, OFFICE_CENTER, office, bindings, fixed_now, todays_events=[first], allow_multiple=True
    )
    assert second.event_id != first.event_id


def test_check_out_does_not_bind_device(office, bindings, fixed_now):
    event = record_check_out("u1", "phone-9", point_east(10), office, fixed_now + timedelta(hours=8))

    assert event.kind == EventKind.CHECK_OUT
    assert event.status is None
    assert event.device_id == "phone-9"
    assert bindings.owner_by_device == {}


def test_check_out_outside_fence_is_rejected(office, fixed_now):
    with pytest.raises(OutOfGeofence):
        record_check_out("u1", None, point_east(150), office, fixed_now)


def test_check_out_early_departure_with_margin(office, fixed_now):
    policy = PunctualityPolicy(early_departure_margin_minutes=30)

    # 15:00 local, closing 18:00
    early = record_check_out("u1", None, OFFICE_CENTER, office, utc(2025, 3, 3, 12, 0), policy=policy)
    normal = record_check_out("u2", None, OFFICE_CENTER, office, utc(2025, 3, 3, 14, 45), policy=policy)

    assert early.status == AttendanceStatus.EARLY_DEPARTURE
    assert normal.status is None
