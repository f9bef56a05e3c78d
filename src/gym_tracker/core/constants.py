"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

CALENDAR_GRID_CELLS = 42
MONTHS_PER_YEAR = 12

UNTYPED_ID = "none"
UNTYPED_NAME = "No type"
UNTYPED_ICON = "❓"
UNTYPED_COLOR = "#94a3b8"

DEFAULT_TYPE_ICON = "🏋️"
DEFAULT_TYPE_COLOR = "#6366f1"

PLACEHOLDER_PREFIXES = ("YOUR_", "CHANGE_ME")

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
