"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

NOTE_MAX_LENGTH = 100

DEFAULT_TRAINING_START_TIME = "09:00"
DEFAULT_TRAINING_END_TIME = "18:00"

BLANK_TIME_STEP_MINUTES = 15
BLANK_TIME_MAX_MINUTES = 480

HOURS_PER_DAY = 24
MINUTES_PER_HOUR = 60

ISO_DATE_FORMAT = "%Y-%m-%d"
