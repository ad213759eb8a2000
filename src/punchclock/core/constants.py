"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

API_PREFIX = "/api"

DEFAULT_HISTORY_LIMIT = 30
MAX_HISTORY_LIMIT = 366

ADMIN_AVG_WINDOW_DAYS = 7
EMPLOYEE_WINDOW_DAYS = 30

HOURS_PRECISION = 2
MIN_PASSWORD_LENGTH = 6

DEFAULT_DASHBOARD_WORKERS = 4
DEFAULT_DASHBOARD_QUERY_TIMEOUT = 5.0
