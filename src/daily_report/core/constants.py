"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 16
DEFAULT_PASSWORD_HASH_METHOD = "scrypt"

EMPLOYEE_CODE_MAX_LENGTH = 10
EMPLOYEE_NAME_MAX_LENGTH = 20
REPORT_TITLE_MAX_LENGTH = 100
REPORT_CONTENT_MAX_LENGTH = 600
