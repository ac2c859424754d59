"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_SESSION_DAYS = 1
DEFAULT_HISTORY_LIMIT = 30

# Company attendance policy defaults
DEFAULT_START_TIME = "09:00"
DEFAULT_WORK_HOURS = 9.0
DEFAULT_GRACE_MINUTES = 15
MIN_CHECKOUT_MINUTES = 1

# Salary structure
BASIC_RATE = Decimal("0.50")
HRA_RATE = Decimal("0.50")
STANDARD_ALLOWANCE = Decimal("4167")
PERFORMANCE_BONUS_RATE = Decimal("0.0833")
LTA_RATE = Decimal("0.0833")
PF_RATE = Decimal("0.12")
PF_CAP = Decimal("1800")
PROFESSIONAL_TAX = Decimal("200")
MONTHS_PER_YEAR = 12
# Largest amount a DECIMAL(12,2) column holds
MAX_STORED_AMOUNT = Decimal("9999999999.99")

# Leave allowances granted when a balance row is first created
DEFAULT_PAID_LEAVE_DAYS = 24
DEFAULT_SICK_LEAVE_DAYS = 7
DEFAULT_UNPAID_LEAVE_DAYS = 365

NOTIFICATION_LIST_LIMIT = 100
