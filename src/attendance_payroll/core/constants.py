"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIMEZONE = "Asia/Jakarta"
DEFAULT_BASE_SALARY = 80000
DEFAULT_EXPECTED_HOURS = 6
