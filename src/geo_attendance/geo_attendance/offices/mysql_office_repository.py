from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from ..geo.model import Coordinate
from .model import Office, WorkingHours
from .repository import OfficeRepository


class MySQLOfficeRepository(OfficeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _hours_for(cur, office_ids: Sequence[int]) -> dict[int, dict[int, WorkingHours]]:
        out: dict[int, dict[int, WorkingHours]] = {oid: {} for oid in office_ids}
        if not office_ids:
            return out

        placeholders = ",".join(["%s"] * len(office_ids))
        cur.execute(
            f"""
            SELECT office_id, weekday, start_time, end_time
            FROM office_working_hours
            WHERE office_id IN ({placeholders})
            """,
            tuple(office_ids),
        )
        for r in fetchall(cur):
            out[int(r["office_id"])][int(r["weekday"])] = WorkingHours(
                start=normalize_mysql_time(r["start_time"]),
                end=normalize_mysql_time(r["end_time"]),
            )
        return out

    @staticmethod
    def _to_office(r: dict, hours: dict[int, WorkingHours]) -> Office:
        return Office(
            office_id=int(r["office_id"]),
            name=r["name"],
            center=Coordinate(latitude=float(r["latitude"]), longitude=float(r["longitude"])),
            radius_m=float(r["radius_m"]),
            working_hours=hours,
            utc_offset_minutes=int(r["utc_offset_minutes"]),
        )

    @staticmethod
    def _write_hours(cur, office: Office, office_id: int) -> None:
        cur.execute("DELETE FROM office_working_hours WHERE office_id=%s", (office_id,))
        for weekday, wh in sorted(office.working_hours.items()):
            cur.execute(
                """
                INSERT INTO office_working_hours(office_id, weekday, start_time, end_time)
                VALUES(%s,%s,%s,%s)
                """,
                (office_id, weekday, wh.start, wh.end),
            )

    def list_all(self) -> Sequence[Office]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT office_id, name, latitude, longitude, radius_m, utc_offset_minutes
                FROM offices
                ORDER BY office_id
                """
            )
            rows = fetchall(cur)
            hours = self._hours_for(cur, [int(r["office_id"]) for r in rows])
            return [self._to_office(r, hours[int(r["office_id"])]) for r in rows]

    def get_by_id(self, office_id: int) -> Optional[Office]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT office_id, name, latitude, longitude, radius_m, utc_offset_minutes
                FROM offices
                WHERE office_id=%s
                """,
                (int(office_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return self._to_office(r, self._hours_for(cur, [int(office_id)])[int(office_id)])

    def create(self, office: Office) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO offices(name, latitude, longitude, radius_m, utc_offset_minutes)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (office.name, office.center.latitude, office.center.longitude, office.radius_m, office.utc_offset_minutes),
            )
            office_id = int(cur.lastrowid)
            self._write_hours(cur, office, office_id)
            return office_id

    def update(self, office: Office) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE offices
                SET name=%s, latitude=%s, longitude=%s, radius_m=%s, utc_offset_minutes=%s
                WHERE office_id=%s
                """,
                (
                    office.name,
                    office.center.latitude,
                    office.center.longitude,
                    office.radius_m,
                    office.utc_offset_minutes,
                    office.office_id,
                ),
            )
            # rowcount is 0 when nothing but the hours changed.
            cur.execute("SELECT 1 AS found FROM offices WHERE office_id=%s", (office.office_id,))
            if not fetchone(cur):
                return False
            self._write_hours(cur, office, office.office_id)
            return True

    def delete(self, office_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM office_working_hours WHERE office_id=%s", (int(office_id),))
            cur.execute("DELETE FROM offices WHERE office_id=%s", (int(office_id),))
            return cur.rowcount > 0
