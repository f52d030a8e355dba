"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

DEFAULT_API_PREFIX = "/api"
DEFAULT_TIMEZONE = "UTC"
DEFAULT_CLIENT_TIMEOUT_SECONDS = 10

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

# MySQL error numbers the repositories translate into domain errors.
ER_DUP_ENTRY = 1062
ER_NO_REFERENCED_ROW = 1452

# User-facing messages shared by services and repositories.
MSG_EMPLOYEE_NOT_FOUND = "Employee not found"
MSG_EMPLOYEE_ID_EXISTS = "Employee ID already exists"
MSG_EMAIL_EXISTS = "Email already exists"
MSG_ATTENDANCE_EXISTS = "Attendance already marked for this date"

# Column widths in database/schema.sql.
MAX_EMPLOYEE_ID_LENGTH = 64
MAX_TEXT_LENGTH = 255

# MySQL DATE range.
MIN_WORK_YEAR = 1000
