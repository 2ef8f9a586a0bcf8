from datetime import time

import pytest

from conftest import InMemoryOffices, weekday_office
from geo_attendance.core.enums import Role
from geo_attendance.core.exceptions import AuthorizationError, ValidationError
from geo_attendance.offices.model import WorkingHours
from geo_attendance.offices.service import OfficeService, build_office, parse_working_hours


def payload(**overrides):
    data = {
        "name": "Silabu Office",
        "coordinates": {"latitude": -6.78, "longitude": 39.20},
        "radius_m": 500,
        "working_hours": {"1": {"start": "09:00", "end": "17:00"}},
        "utc_offset_minutes": 180,
    }
    data.update(overrides)
    return data


def test_build_office_from_payload():
    office = build_office(payload(), office_id=4)

    assert office.office_id == 4
    assert office.name == "Silabu Office"
    assert office.center.latitude == -6.78
    assert office.radius_m == 500.0
    assert office.working_hours == {1: WorkingHours(start=time(9, 0), end=time(17, 0))}


def test_missing_working_hours_use_defaults():
    office = build_office(payload(working_hours=None))

    assert sorted(office.working_hours) == [1, 2, 3, 4, 5, 6]
    assert 0 not in office.working_hours
    assert office.working_hours[6] == WorkingHours(start=time(8, 0), end=time(12, 0))


def test_none_day_is_non_working():
    hours = parse_working_hours({0: None, 1: {"start": "09:00", "end": "18:00"}})

    assert list(hours) == [1]


@pytest.mark.parametrize(
    "raw",
    [
        {"7": {"start": "09:00", "end": "18:00"}},
        {"mon": {"start": "09:00", "end": "18:00"}},
        {1: {"start": "18:00", "end": "09:00"}},
        {1: {"start": "09:00", "end": "09:00"}},
        {1: {"start": "9am", "end": "18:00"}},
        {1: {"start": "09:00"}},
    ],
)
def test_invalid_working_hours(raw):
    with pytest.raises(ValidationError):
        parse_working_hours(raw)


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "  "},
        {"coordinates": {"latitude": 91, "longitude": 0}},
        {"coordinates": {"latitude": "x", "longitude": 0}},
        {"coordinates": {}},
        {"radius_m": 0},
        {"radius_m": -5},
        {"utc_offset_minutes": 15 * 60},
        {"utc_offset_minutes": "soon"},
    ],
)
def test_invalid_office_payload(overrides):
    with pytest.raises(ValidationError):
        build_office(payload(**overrides))


def test_governing_office_is_first():
    service = OfficeService(InMemoryOffices([weekday_office(office_id=2, name="B"), weekday_office(office_id=1)]))

    assert service.governing_office().office_id == 1


def test_no_offices_means_no_governing_office():
    assert OfficeService(InMemoryOffices()).governing_office() is None


def test_admin_crud():
    repo = InMemoryOffices()
    service = OfficeService(repo)

    office_id = service.create(current_role=Role.ADMIN, payload=payload())
    updated = service.update(current_role=Role.ADMIN, office_id=office_id, payload=payload(radius_m=250))

    assert updated.radius_m == 250.0
    assert repo.get_by_id(office_id).radius_m == 250.0

    service.delete(current_role=Role.ADMIN, office_id=office_id)
    assert service.list_offices() == []


def test_update_unknown_office():
    with pytest.raises(ValidationError):
        OfficeService(InMemoryOffices()).update(current_role=Role.ADMIN, office_id=9, payload=payload())


def test_employees_cannot_manage_offices():
    service = OfficeService(InMemoryOffices([weekday_office()]))

    with pytest.raises(AuthorizationError):
        service.create(current_role=Role.EMPLOYEE, payload=payload())
    with pytest.raises(AuthorizationError):
        service.update(current_role=Role.EMPLOYEE, office_id=1, payload=payload())
    with pytest.raises(AuthorizationError):
        service.delete(current_role=Role.EMPLOYEE, office_id=1)
