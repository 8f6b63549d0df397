"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Check-in hours in [LATE_START_HOUR, LATE_END_HOUR) are marked late.
DEFAULT_LATE_START_HOUR = 9
DEFAULT_LATE_END_HOUR = 12

DEFAULT_EMPLOYEE_RECORDS_LIMIT = 30
DEFAULT_RECENT_LIMIT = 7

EMPLOYEE_CODE_PREFIX = "EMP"
EMPLOYEE_CODE_DIGITS = 3

CSV_HEADER = (
    "Employee ID",
    "Name",
    "Department",
    "Date",
    "Check In",
    "Check Out",
    "Status",
    "Total Hours",
)
