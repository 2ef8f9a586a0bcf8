"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_M = 6_371_000

DEFAULT_GRACE_MINUTES = 30
# Africa/Dar_es_Salaam
DEFAULT_UTC_OFFSET_MINUTES = 180
DEFAULT_GEOFENCE_RADIUS_M = 1000

# weekday (0=Sunday..6=Saturday) -> ("HH:MM", "HH:MM")
DEFAULT_WORKING_HOURS = {
    1: ("09:00", "18:00"),
    2: ("09:00", "18:00"),
    3: ("09:00", "18:00"),
    4: ("09:00", "18:00"),
    5: ("09:00", "18:00"),
    6: ("08:00", "12:00"),
}
