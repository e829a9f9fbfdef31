APP_NAME = "ZenBudget"
APP_WIDTH = 1100
APP_HEIGHT = 760
STATE_FILE = "state.json"
DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Income transactions are not filed under user categories.
INCOME_CATEGORY_ID = "income"
INCOME_LABEL = "Income"
UNCATEGORIZED_LABEL = "Uncategorized"
DEFAULT_ICON = "Tag"

# Day of month used for entries added while viewing another month.
DEFAULT_ENTRY_DAY = 15

TRANSACTION_TYPES = ("expense", "income")
RECURRENCE_FREQUENCIES = ("none", "daily", "weekly", "monthly", "yearly")
DEFAULT_RECURRENCE = "monthly"

FILTER_TYPES = ("all", "expense", "income")
FILTER_RECURRENCE = ("all", "recurring", "non-recurring")

# Category progress bands, in percent of the limit
NEAR_LIMIT_PERCENT = 85.0
OVER_LIMIT_PERCENT = 100.0

STATUS_NORMAL = "normal"
STATUS_NEAR_LIMIT = "near_limit"
STATUS_OVER_LIMIT = "over_limit"

STATUS_COLORS = {
    STATUS_NORMAL:     "#10b981",
    STATUS_NEAR_LIMIT: "#f59e0b",
    STATUS_OVER_LIMIT: "#ef4444",
}

THEMES = ("light", "dark")

DEFAULT_STATE = {
    "hasOnboarded": False,
    "monthlyIncome": 0.0,
    "currency": "$",
    "theme": "light",
    "categories": [],
    "transactions": [],
}

COLORS = [
    "#8b5cf6",  # violet
    "#ec4899",  # pink
    "#06b6d4",  # cyan
    "#f59e0b",  # amber
    "#10b981",  # emerald
    "#f43f5e",  # rose
    "#3b82f6",  # blue
    "#6366f1",  # indigo
]

CURRENCIES = [
    {"symbol": "$",  "code": "USD", "name": "US Dollar"},
    {"symbol": "€",  "code": "EUR", "name": "Euro"},
    {"symbol": "£",  "code": "GBP", "name": "British Pound"},
    {"symbol": "₹",  "code": "INR", "name": "Indian Rupee"},
    {"symbol": "¥",  "code": "JPY", "name": "Japanese Yen"},
    {"symbol": "C$", "code": "CAD", "name": "Canadian Dollar"},
    {"symbol": "A$", "code": "AUD", "name": "Australian Dollar"},
]

TEMPLATES = [
    {
        "id": "student",
        "name": "Student",
        "description": "Focused on essentials, books, and social life.",
        "categories": [
            {"name": "Rent/Dorm",        "color": "#8b5cf6", "icon": "Home"},
            {"name": "Food & Dining",    "color": "#ec4899", "icon": "Coffee"},
            {"name": "Transportation",   "color": "#06b6d4", "icon": "Car"},
            {"name": "Entertainment",    "color": "#f59e0b", "icon": "Film"},
            {"name": "Books & Supplies", "color": "#10b981", "icon": "Briefcase"},
        ],
    },
    {
        "id": "young-pro",
        "name": "Young Professional",
        "description": "Balancing career growth, loans, and lifestyle.",
        "categories": [
            {"name": "Rent",          "color": "#8b5cf6", "icon": "Home"},
            {"name": "Groceries",     "color": "#10b981", "icon": "ShoppingCart"},
            {"name": "Utilities",     "color": "#f59e0b", "icon": "Zap"},
            {"name": "Dining Out",    "color": "#ec4899", "icon": "Coffee"},
            {"name": "Student Loans", "color": "#f43f5e", "icon": "Briefcase"},
            {"name": "Travel",        "color": "#06b6d4", "icon": "Car"},
        ],
    },
    {
        "id": "family",
        "name": "Family",
        "description": "Comprehensive tracking for household needs.",
        "categories": [
            {"name": "Mortgage/Rent", "color": "#8b5cf6", "icon": "Home"},
            {"name": "Groceries",     "color": "#10b981", "icon": "ShoppingCart"},
            {"name": "Utilities",     "color": "#f59e0b", "icon": "Zap"},
            {"name": "Childcare",     "color": "#ec4899", "icon": "HeartPulse"},
            {"name": "Healthcare",    "color": "#f43f5e", "icon": "HeartPulse"},
            {"name": "Insurance",     "color": "#6366f1", "icon": "Briefcase"},
        ],
    },
    {
        "id": "retiree",
        "name": "Retiree",
        "description": "Simple tracking for enjoyment and health.",
        "categories": [
            {"name": "Housing",        "color": "#8b5cf6", "icon": "Home"},
            {"name": "Healthcare",     "color": "#f43f5e", "icon": "HeartPulse"},
            {"name": "Groceries",      "color": "#10b981", "icon": "ShoppingCart"},
            {"name": "Travel/Leisure", "color": "#f59e0b", "icon": "Car"},
            {"name": "Gifts",          "color": "#ec4899", "icon": "HeartPulse"},
        ],
    },
]

# ── Advice collaborator ──────────────────────────────────────────────────────
DEFAULT_ADVICE_MODEL = "claude-sonnet-4-20250514"
ADVICE_MAX_TOKENS = 300
ADVICE_NO_KEY_MESSAGE = "Please configure your API key to receive AI-powered financial advice."
ADVICE_ERROR_MESSAGE = "I'm having trouble connecting right now. Check back later!"
ADVICE_EMPTY_MESSAGE = "Keep tracking your spending to stay on top of your goals!"
ADVICE_LOADING_MESSAGE = "Thinking about your budget..."
PARSE_RETRY_MESSAGE = "Sorry, I couldn't understand that. Try something like 'Spent 12 on lunch'."
FALLBACK_CATEGORY_NAME = "Miscellaneous"
