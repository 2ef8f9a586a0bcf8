from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class AttendanceRejected(DomainError):
    """A check-in/check-out attempt that was refused.

    Every rejection carries a machine-readable ``kind`` plus whatever numeric
    context the caller needs to build its own message.
    """

    kind = "rejected"
    default_message = "Attendance attempt rejected"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": self.message}


class NotAuthenticated(AttendanceRejected):
    kind = "not_authenticated"
    default_message = "You must be logged in to record attendance"


class LocationUnavailable(AttendanceRejected):
    kind = "location_unavailable"
    default_message = "Unable to get your current location"


class OfficeNotConfigured(AttendanceRejected):
    kind = "office_not_configured"
    default_message = "Office location not loaded"


class DeviceConflict(AttendanceRejected):
    kind = "device_conflict"

    REGISTERED_TO_OTHER = "registered_to_other"
    UNRECOGNIZED = "unrecognized"

    _messages = {
        REGISTERED_TO_OTHER: "This device is already registered to another employee. Please contact admin.",
        UNRECOGNIZED: "Unrecognized device. Please contact admin.",
    }

    def __init__(self, reason: str, *, device_id: str):
        self.reason = reason
        self.device_id = device_id
        super().__init__(self._messages.get(reason, "Device not allowed"))

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["reason"] = self.reason
        return data


class OutOfGeofence(AttendanceRejected):
    kind = "out_of_geofence"

    def __init__(self, *, distance_m: float, radius_m: float):
        # Local import: geo depends on core, not the other way round.
        from ..geo.distance import format_distance

        self.distance_m = float(distance_m)
        self.radius_m = float(radius_m)
        super().__init__(
            f"You are {format_distance(self.distance_m)} away from the office. "
            f"You must be within {format_distance(self.radius_m)} to record attendance."
        )

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["distance_m"] = round(self.distance_m)
        data["radius_m"] = round(self.radius_m)
        return data


class DuplicateEvent(AttendanceRejected):
    kind = "duplicate_event"

    def __init__(self, event_kind: str):
        self.event_kind = event_kind
        super().__init__(f"You have already recorded a {event_kind} today")

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["event_kind"] = self.event_kind
        return data
