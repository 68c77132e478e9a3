from enum import Enum


class Category(str, Enum):
    DAIRY = "Dairy"
    BAKERY = "Bakery"
    MEAT_FISH = "Meat & Fish"
    PRODUCE = "Fresh Produce"
    DRINKS = "Soft Drinks"
    ALCOHOL = "Alcohol"
    CANNED = "Canned Goods"
    SNACKS = "Snacks"
    HOUSEHOLD = "Household"


ALL_CATEGORIES = "All"

BATCH_STATUSES = ("active", "reduced", "wasted", "sold")
URGENCY_LEVELS = ("expired", "critical", "warning", "safe")
URGENCY_FILTERS = ("all",) + URGENCY_LEVELS
HORIZONS = ("week", "month", "future")

UNKNOWN_PRODUCT_NAME = "Unknown Product"
FALLBACK_CATEGORY = Category.HOUSEHOLD

WEEK_HORIZON_DAYS = 7
MONTH_HORIZON_DAYS = 30
CRITICAL_WINDOW_DAYS = 3
VALUE_AT_RISK_WINDOW_DAYS = 7
URGENT_ALERT_DAYS = 2

FALLBACK_MARKDOWN_RATE = 0.5
MARKDOWN_RECOVERY_RATE = 0.5
MAX_BUNDLE_ITEMS = 12

# (category, critical_days, warning_days)
DEFAULT_ALERT_SETTINGS = (
    (Category.DAIRY, 3, 7),
    (Category.MEAT_FISH, 3, 5),
    (Category.PRODUCE, 2, 4),
    (Category.BAKERY, 2, 4),
    (Category.DRINKS, 30, 60),
    (Category.SNACKS, 30, 60),
    (Category.CANNED, 30, 90),
    (Category.HOUSEHOLD, 0, 0),
    (Category.ALCOHOL, 30, 60),
)

DEFAULT_STORE_PROFILE = {
    "store_name": "John's Shop",
    "owner_name": "John Doe",
    "email": "john@example.com",
    "phone": "07700 900900",
    "currency": "GBP",
    "default_markdown_percent": 50.0,
}

DEFAULT_CURRENCY = DEFAULT_STORE_PROFILE["currency"]
