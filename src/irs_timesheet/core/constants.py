"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MIN_PASSWORD_LENGTH = 6
GENERATED_PASSWORD_LENGTH = 10
# No 0/O, 1/l/I so credentials can be read aloud or retyped.
PASSWORD_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghjkmnpqrstuvwxyz23456789"

LUNCH_BREAK_MINUTES = 30

DISPLAY_DATE_FORMAT = "%d/%m/%Y"
ISO_DATE_FORMAT = "%Y-%m-%d"

UNKNOWN_EMPLOYEE_NAME = "Unknown"

CREDENTIALS_SUBJECT = "Your IRS Timesheet login credentials"
CSV_HEADER = "Employee,Week End,Week Start,Day,Hours,Status"
UTF8_BOM = "\ufeff"
