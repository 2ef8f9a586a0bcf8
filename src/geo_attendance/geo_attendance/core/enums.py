from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class EventKind(str, Enum):
    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"


class AttendanceStatus(str, Enum):
    """Normalized attendance status as stored with events and shown in reports."""

    ON_TIME = "on-time"
    LATE = "late"
    ABSENT = "absent"
    EARLY_DEPARTURE = "early-departure"
