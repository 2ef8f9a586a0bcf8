"""Shared settings. Environment modules import these and override."""

import json
import os

SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key"

DB_CONFIG = {
    "host": os.environ.get("DB_HOST", "localhost"),
    "port": int(os.environ.get("DB_PORT", "3306")),
    "user": os.environ.get("DB_USER", "root"),
    "password": os.environ.get("DB_PASSWORD", ""),
    "database": os.environ.get("DB_NAME", "geo_attendance"),
}

# Attendance policy
GRACE_MINUTES = int(os.environ.get("GRACE_MINUTES", "30"))
# Office civil time as a fixed offset from UTC (Africa/Dar_es_Salaam = +180)
UTC_OFFSET_MINUTES = int(os.environ.get("UTC_OFFSET_MINUTES", "180"))
# Unset: check-outs are never classified as early departures
_margin = os.environ.get("EARLY_DEPARTURE_MARGIN_MINUTES", "").strip()
EARLY_DEPARTURE_MARGIN_MINUTES = int(_margin) if _margin else None
ALLOW_MULTIPLE_EVENTS_PER_DAY = bool(int(os.environ.get("ALLOW_MULTIPLE_EVENTS_PER_DAY", "0")))
# "MM-DD", comma separated
PUBLIC_HOLIDAYS = [d.strip() for d in os.environ.get("PUBLIC_HOLIDAYS", "").split(",") if d.strip()]

# Registered on first start when the offices table is empty
DEFAULT_OFFICE = {
    "name": os.environ.get("OFFICE_NAME", "Silabu Office"),
    "coordinates": {
        "latitude": float(os.environ.get("OFFICE_LATITUDE", "-6.7799869491586655")),
        "longitude": float(os.environ.get("OFFICE_LONGITUDE", "39.2023453342857")),
    },
    "radius_m": float(os.environ.get("OFFICE_RADIUS_M", "1000")),
    "utc_offset_minutes": UTC_OFFSET_MINUTES,
    "working_hours": json.loads(os.environ["OFFICE_WORKING_HOURS"]) if os.environ.get("OFFICE_WORKING_HOURS") else None,
}

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
