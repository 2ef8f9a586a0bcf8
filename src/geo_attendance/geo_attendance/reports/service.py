from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from ..attendance.model import AttendanceEvent, DayRecord
from ..attendance.service import AttendanceService
from ..attendance.timeline import format_hours
from ..common.datetime_utils import to_local
from ..core.enums import AttendanceStatus
from ..offices.model import Office
from ..users.model import Employee
from ..users.repository import EmployeeRepository


@dataclass(frozen=True)
class EmployeeMonthSummary:
    employee: Employee
    present_days: int
    absent_days: int
    late_days: int
    early_departures: int
    total_hours: float
    days: tuple[DayRecord, ...]

    def to_dict(self, *, with_days: bool = False, status: Optional[AttendanceStatus] = None) -> dict:
        data = {
            "user_id": self.employee.user_id,
            "name": self.employee.name,
            "present_days": self.present_days,
            "absent_days": self.absent_days,
            "late_days": self.late_days,
            "early_departures": self.early_departures,
            "total_hours": round(self.total_hours, 2),
        }
        if with_days:
            data["days"] = [d.to_dict() for d in self.days if status is None or d.status == status]
        return data


@dataclass(frozen=True)
class TodayStats:
    total_employees: int
    present_today: int
    late_today: int
    average_hours: float

    def to_dict(self) -> dict:
        return {
            "total_employees": self.total_employees,
            "present_today": self.present_today,
            "late_today": self.late_today,
            "average_hours": round(self.average_hours, 2),
        }


def summarize_days(employee: Employee, days: Iterable[DayRecord]) -> EmployeeMonthSummary:
    days = tuple(days)
    return EmployeeMonthSummary(
        employee=employee,
        present_days=sum(1 for d in days if d.status != AttendanceStatus.ABSENT),
        absent_days=sum(1 for d in days if d.status == AttendanceStatus.ABSENT),
        late_days=sum(1 for d in days if d.status == AttendanceStatus.LATE),
        early_departures=sum(1 for d in days if d.status == AttendanceStatus.EARLY_DEPARTURE),
        total_hours=sum(d.hours_worked for d in days if d.hours_worked and d.hours_worked > 0),
        days=days,
    )


def find_shared_devices(events: Iterable[AttendanceEvent]) -> dict[str, list[str]]:
    """Device ids that appear on events of more than one user."""

    users_by_device: dict[str, set[str]] = defaultdict(set)
    for event in events:
        if event.device_id:
            users_by_device[event.device_id].add(event.user_id)
    return {device: sorted(users) for device, users in sorted(users_by_device.items()) if len(users) > 1}


def day_stats(employees: Iterable[Employee], events: Iterable[AttendanceEvent]) -> TodayStats:
    """Headline numbers for one day's events. Admin accounts are not counted."""

    staff = [e for e in employees if not e.is_admin]
    staff_ids = {e.user_id for e in staff}
    events = [e for e in events if e.user_id in staff_ids]

    first_in: dict[str, AttendanceEvent] = {}
    last_out: dict[str, AttendanceEvent] = {}
    for event in sorted(events, key=lambda e: e.timestamp):
        if event.is_check_in:
            first_in.setdefault(event.user_id, event)
        elif event.is_check_out:
            last_out[event.user_id] = event

    late = sum(1 for e in first_in.values() if e.status == AttendanceStatus.LATE)

    worked = []
    for user_id, check_in in first_in.items():
        check_out = last_out.get(user_id)
        if check_out:
            hours = (check_out.timestamp - check_in.timestamp).total_seconds() / 3600
            if hours > 0:
                worked.append(hours)

    return TodayStats(
        total_employees=len(staff),
        present_today=len(first_in),
        late_today=late,
        average_hours=sum(worked) / len(worked) if worked else 0.0,
    )


def timeline_rows(days: Iterable[DayRecord], office: Office) -> list[dict]:
    """Flatten a timeline for tables and CSV export."""

    rows = []
    for d in days:
        check_in = next((e for e in d.events if e.is_check_in), None)
        check_out = next((e for e in reversed(d.events) if e.is_check_out), None)
        rows.append(
            {
                "date": d.day.strftime("%Y-%m-%d"),
                "check_in": to_local(check_in.timestamp, office.utc_offset_minutes).strftime("%H:%M") if check_in else "-",
                "check_out": to_local(check_out.timestamp, office.utc_offset_minutes).strftime("%H:%M") if check_out else "-",
                "status": d.status.value,
                "hours_worked": format_hours(d.hours_worked),
            }
        )
    return rows


class AttendanceReportService:
    def __init__(self, attendance: AttendanceService, employees: EmployeeRepository):
        self._attendance = attendance
        self._employees = employees

    def monthly_summary(self, *, month: int, year: int, office: Office) -> list[EmployeeMonthSummary]:
        events = self._attendance.month_events(month=month, year=year)

        out = []
        for employee in self._employees.list_all():
            if employee.is_admin:
                continue
            days = self._attendance.build_history(
                employee.user_id,
                month=month,
                year=year,
                office=office,
                events=events,
                newest_first=True,
            )
            out.append(summarize_days(employee, days))

        out.sort(key=lambda s: (s.employee.name.lower(), s.employee.user_id))
        return out

    def today(self, *, now: Optional[datetime] = None) -> TodayStats:
        employees = list(self._employees.list_all())
        return day_stats(employees, self._attendance.today_events(now=now))

    def suspicious_devices(self, *, month: int, year: int) -> dict[str, list[str]]:
        return find_shared_devices(self._attendance.month_events(month=month, year=year))
