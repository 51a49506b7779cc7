"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

ATTENDANCE_UPDATE_EVENT = "attendance-update"

MSG_PUNCHED_IN = "Punched in successfully"
MSG_PUNCHED_OUT = "Punched out successfully"
MSG_ALREADY_PUNCHED = "Already punched in and out for today"
MSG_EMPLOYEE_NOT_FOUND = "Employee not found"
MSG_INTERNAL_ERROR = "Internal server error"

TOTAL_HOURS_PRECISION = 2
