from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceEventRepository
from .attendance.punctuality import PunctualityPolicy
from .attendance.repository import AttendanceEventRepository
from .attendance.service import AttendanceService
from .database.connection import DatabaseConnection, DBConfig
from .devices.mysql_device_repository import MySQLDeviceBindingRepository
from .devices.repository import DeviceBindingRepository
from .devices.service import DeviceAdminService
from .offices.mysql_office_repository import MySQLOfficeRepository
from .offices.repository import OfficeRepository
from .offices.service import OfficeService
from .reports.service import AttendanceReportService
from .users.mysql_employee_repository import MySQLEmployeeRepository
from .users.repository import EmployeeRepository


@dataclass(frozen=True)
class Container:
    offices_repo: OfficeRepository
    devices_repo: DeviceBindingRepository
    events_repo: AttendanceEventRepository
    employees_repo: EmployeeRepository

    office_service: OfficeService
    device_service: DeviceAdminService
    attendance_service: AttendanceService
    report_service: AttendanceReportService


def wire(
    *,
    offices_repo: OfficeRepository,
    devices_repo: DeviceBindingRepository,
    events_repo: AttendanceEventRepository,
    employees_repo: EmployeeRepository,
    settings: Optional[Any] = None,
) -> Container:
    """Assemble services over any set of repositories (MySQL or in-memory)."""

    policy = PunctualityPolicy(
        grace_minutes=int(getattr(settings, "GRACE_MINUTES", 30)),
        early_departure_margin_minutes=getattr(settings, "EARLY_DEPARTURE_MARGIN_MINUTES", None),
    )

    office_service = OfficeService(offices_repo)
    attendance_service = AttendanceService(
        events_repo,
        devices_repo,
        office_service,
        policy=policy,
        allow_multiple_per_day=bool(getattr(settings, "ALLOW_MULTIPLE_EVENTS_PER_DAY", False)),
        public_holidays=getattr(settings, "PUBLIC_HOLIDAYS", ()),
    )

    return Container(
        offices_repo=offices_repo,
        devices_repo=devices_repo,
        events_repo=events_repo,
        employees_repo=employees_repo,
        office_service=office_service,
        device_service=DeviceAdminService(devices_repo),
        attendance_service=attendance_service,
        report_service=AttendanceReportService(attendance_service, employees_repo),
    )


def build_container(*, db_config: dict, settings: Optional[Any] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        offices_repo=MySQLOfficeRepository(conn),
        devices_repo=MySQLDeviceBindingRepository(conn),
        events_repo=MySQLAttendanceEventRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        settings=settings,
    )
