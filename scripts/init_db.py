from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv

from config import get_settings_module
from geo_attendance.database.bootstrap import apply_schema, ensure_default_office, list_tables

logger = logging.getLogger("init_db")


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    schema_path = Path(__file__).resolve().parents[1] / "database" / "schema.sql"
    apply_schema(db_config, schema_path=schema_path)
    office_id = ensure_default_office(db_config, getattr(settings, "DEFAULT_OFFICE", None))

    logger.info(
        "Applied schema.sql -> %s@%s:%s/%s (tables=%d, default office=%s)",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
        len(list_tables(db_config)),
        office_id if office_id is not None else "unchanged",
    )


if __name__ == "__main__":
    main()
