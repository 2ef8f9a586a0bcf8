"""Load the employee directory.

Usage: python scripts/seed_db.py [employees.json]

The JSON file holds a list of ``{"user_id", "name", "email", "role", "phone"}``
objects. Without it a small demo roster is written.
"""

from __future__ import annotations

import importlib
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from config import get_settings_module
from geo_attendance.core.enums import Role
from geo_attendance.database.bootstrap import ensure_employees
from geo_attendance.users.model import Employee

logger = logging.getLogger("seed_db")

DEMO_EMPLOYEES = [
    {"user_id": "admin", "name": "Administrator", "email": "admin@example.com", "role": "admin"},
    {"user_id": "emp-001", "name": "Asha Mwakyusa", "email": "asha@example.com"},
    {"user_id": "emp-002", "name": "Baraka Njau", "email": "baraka@example.com"},
]


def _load(path: str | None) -> list[Employee]:
    rows = json.loads(Path(path).read_text(encoding="utf-8")) if path else DEMO_EMPLOYEES
    return [
        Employee(
            user_id=str(r["user_id"]),
            name=r["name"],
            email=r["email"],
            role=Role(r.get("role") or Role.EMPLOYEE.value),
            phone=r.get("phone"),
        )
        for r in rows
    ]


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    written = ensure_employees(db_config, _load(sys.argv[1] if len(sys.argv) > 1 else None))
    logger.info(
        "Seeded %d employee(s) -> %s@%s:%s/%s",
        written,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )


if __name__ == "__main__":
    main()
