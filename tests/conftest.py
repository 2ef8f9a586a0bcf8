from __future__ import annotations

import math
from datetime import datetime, time, timezone
from typing import Optional

import pytest

from geo_attendance.attendance.model import AttendanceEvent
from geo_attendance.core.constants import EARTH_RADIUS_M
from geo_attendance.core.enums import Role
from geo_attendance.geo.model import Coordinate
from geo_attendance.offices.model import Office, WorkingHours
from geo_attendance.users.model import Employee

OFFICE_CENTER = Coordinate(latitude=0.0, longitude=0.0)


def point_east(meters: float, origin: Coordinate = OFFICE_CENTER) -> Coordinate:
    """A point ``meters`` due east of ``origin`` along the equator."""

    return Coordinate(latitude=origin.latitude, longitude=origin.longitude + math.degrees(meters / EARTH_RADIUS_M))


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def weekday_office(**overrides) -> Office:
    """Mon-Fri 09:00-18:00, UTC+3, 100 m fence around (0, 0)."""

    values = dict(
        office_id=1,
        name="HQ",
        center=OFFICE_CENTER,
        radius_m=100.0,
        working_hours={d: WorkingHours(start=time(9, 0), end=time(18, 0)) for d in range(1, 6)},
        utc_offset_minutes=180,
    )
    values.update(overrides)
    return Office(**values)


class InMemoryBindings:
    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.owner_by_device: dict[str, str] = dict(initial or {})
        self.bind_calls = 0

    def get_user_for_device(self, device_id: str) -> Optional[str]:
        return self.owner_by_device.get(device_id)

    def list_devices_for_user(self, user_id: str):
        return [d for d, u in self.owner_by_device.items() if u == user_id]

    def bind_if_absent(self, *, device_id: str, user_id: str) -> str:
        self.bind_calls += 1
        return self.owner_by_device.setdefault(device_id, user_id)

    def unbind_device(self, device_id: str) -> bool:
        return self.owner_by_device.pop(device_id, None) is not None

    def unbind_user(self, user_id: str) -> int:
        devices = self.list_devices_for_user(user_id)
        for d in devices:
            del self.owner_by_device[d]
        return len(devices)


class InMemoryEvents:
    def __init__(self, events=()):
        self.events: list[AttendanceEvent] = list(events)

    def add(self, event: AttendanceEvent) -> None:
        self.events.append(event)

    def list_between(self, *, start: datetime, end: datetime, user_id: Optional[str] = None):
        return [
            e
            for e in self.events
            if start <= e.timestamp < end and (user_id is None or e.user_id == user_id)
        ]


class InMemoryOffices:
    def __init__(self, offices=()):
        self._by_id: dict[int, Office] = {o.office_id: o for o in offices}

    def list_all(self):
        return [self._by_id[k] for k in sorted(self._by_id)]

    def get_by_id(self, office_id: int) -> Optional[Office]:
        return self._by_id.get(office_id)

    def create(self, office: Office) -> int:
        new_id = max(self._by_id, default=0) + 1
        self._by_id[new_id] = Office(
            office_id=new_id,
            name=office.name,
            center=office.center,
            radius_m=office.radius_m,
            working_hours=office.working_hours,
            utc_offset_minutes=office.utc_offset_minutes,
        )
        return new_id

    def update(self, office: Office) -> bool:
        if office.office_id not in self._by_id:
            return False
        self._by_id[office.office_id] = office
        return True

    def delete(self, office_id: int) -> bool:
        return self._by_id.pop(office_id, None) is not None


class InMemoryEmployees:
    def __init__(self, employees=()):
        self._by_id = {e.user_id: e for e in employees}

    def list_all(self):
        return list(self._by_id.values())


@pytest.fixture
def office() -> Office:
    return weekday_office()


@pytest.fixture
def fixed_now() -> datetime:
    # Monday 2025-03-03, 09:15 in the office (UTC+3)
    return utc(2025, 3, 3, 6, 15)


@pytest.fixture
def bindings() -> InMemoryBindings:
    return InMemoryBindings()


@pytest.fixture
def employees() -> InMemoryEmployees:
    return InMemoryEmployees(
        [
            Employee(user_id="u1", name="Asha", email="asha@example.com"),
            Employee(user_id="u2", name="Baraka", email="baraka@example.com"),
            Employee(user_id="admin", name="Admin", email="admin@example.com", role=Role.ADMIN),
        ]
    )
