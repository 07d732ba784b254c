"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * 60

# Extended-hour display notation ("25:00") never goes past this hour.
EXTENDED_HOUR_LIMIT = 36

# (label, start, end) triples; end <= start wraps past midnight.
DEFAULT_REPORT_BANDS = (
    ("morning", "00:00", "12:00"),
    ("afternoon", "12:00", "18:00"),
    ("night", "18:00", "00:00"),
)

DEFAULT_STAFF_SLOTS = (
    ("early", "06:00", "12:00"),
    ("day", "12:00", "17:00"),
    ("evening", "17:00", "22:00"),
    ("night", "22:00", "06:00"),
)

UNCLASSIFIED_SLOT = "unclassified"
