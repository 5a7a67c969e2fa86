"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_UPCOMING_DAYS = 7
DEFAULT_HEALTH_DASHBOARD_DAYS = 7

# At-risk table on the health dashboard
DEFAULT_AT_RISK_MIN_SCORE = 20
DEFAULT_AT_RISK_LIMIT = 10

# 5S inspection
FIVE_S_MIN_SUBSCORE = 0
FIVE_S_MAX_SUBSCORE = 10
FIVE_S_TOP_BAND_SIZE = 3
FIVE_S_BOTTOM_BAND_SIZE = 2
FIVE_S_BOTTOM_BAND_MIN_DEPARTMENTS = 5

# Accepted vitals ranges (inclusive), as offered by the entry form
SYSTOLIC_RANGE = (50, 250)
DIASTOLIC_RANGE = (30, 150)
HEART_RATE_RANGE = (30, 200)
WEIGHT_RANGE = (20.0, 200.0)
HEIGHT_RANGE = (100.0, 250.0)
BLOOD_SUGAR_RANGE = (50, 500)

MIN_PASSWORD_LENGTH = 6
