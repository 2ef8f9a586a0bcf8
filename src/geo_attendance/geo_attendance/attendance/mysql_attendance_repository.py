from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, EventKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, from_db_datetime, to_db_datetime
from ..geo.model import Coordinate
from .model import AttendanceEvent
from .repository import AttendanceEventRepository


class MySQLAttendanceEventRepository(AttendanceEventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(self, event: AttendanceEvent) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_events(
                    event_id, user_id, kind, event_time, latitude, longitude, distance_m, device_id, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    event.event_id,
                    event.user_id,
                    event.kind.value,
                    to_db_datetime(event.timestamp),
                    event.coordinates.latitude,
                    event.coordinates.longitude,
                    event.distance_m,
                    event.device_id,
                    event.status.value if event.status else None,
                ),
            )

    def list_between(
        self,
        *,
        start: datetime,
        end: datetime,
        user_id: Optional[str] = None,
    ) -> Sequence[AttendanceEvent]:
        clauses = ["event_time >= %s", "event_time < %s"]
        params: list[object] = [to_db_datetime(start), to_db_datetime(end)]
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(user_id)

        where_sql = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT event_id, user_id, kind, event_time, latitude, longitude, distance_m, device_id, status
                FROM attendance_events
                WHERE {where_sql}
                ORDER BY event_time
                """,
                tuple(params),
            )
            return [
                AttendanceEvent(
                    event_id=str(r["event_id"]),
                    user_id=str(r["user_id"]),
                    kind=EventKind(r["kind"]),
                    timestamp=from_db_datetime(r["event_time"]),
                    coordinates=Coordinate(latitude=float(r["latitude"]), longitude=float(r["longitude"])),
                    distance_m=int(r["distance_m"]),
                    device_id=r.get("device_id"),
                    status=AttendanceStatus(r["status"]) if r.get("status") else None,
                )
                for r in fetchall(cur)
            ]
