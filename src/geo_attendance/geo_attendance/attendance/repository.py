from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceEvent


class AttendanceEventRepository(Protocol):
    """Append-only event log. Bounds are aware UTC instants, half-open [start, end)."""

    def add(self, event: AttendanceEvent) -> None:
        raise NotImplementedError

    def list_between(
        self,
        *,
        start: datetime,
        end: datetime,
        user_id: Optional[str] = None,
    ) -> Sequence[AttendanceEvent]:
        raise NotImplementedError
