from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .repository import DeviceBindingRepository


class MySQLDeviceBindingRepository(DeviceBindingRepository):
    """device_id is the primary key, so a device can only ever have one owner row."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_user_for_device(self, device_id: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id FROM device_bindings WHERE device_id=%s", (device_id,))
            r = fetchone(cur)
            return str(r["user_id"]) if r else None

    def list_devices_for_user(self, user_id: str) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT device_id
                FROM device_bindings
                WHERE user_id=%s
                ORDER BY bound_at
                """,
                (user_id,),
            )
            return [str(r["device_id"]) for r in fetchall(cur)]

    def bind_if_absent(self, *, device_id: str, user_id: str) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            # INSERT IGNORE keeps the existing owner when two requests race.
            cur.execute(
                "INSERT IGNORE INTO device_bindings(device_id, user_id) VALUES(%s,%s)",
                (device_id, user_id),
            )
            cur.execute("SELECT user_id FROM device_bindings WHERE device_id=%s", (device_id,))
            return str(fetchone(cur)["user_id"])

    def unbind_device(self, device_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM device_bindings WHERE device_id=%s", (device_id,))
            return cur.rowcount > 0

    def unbind_user(self, user_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM device_bindings WHERE user_id=%s", (user_id,))
            return int(cur.rowcount)
