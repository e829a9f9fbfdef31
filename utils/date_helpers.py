from datetime import date, datetime
import calendar
from utils.constants import DATETIME_FORMAT, DEFAULT_ENTRY_DAY


def now() -> datetime:
    return datetime.now()


def current_month() -> tuple[int, int]:
    d = date.today()
    return d.year, d.month


def parse_datetime(value: str) -> datetime | None:
    """Parse an ISO-8601 date or datetime string, returning None on failure.

    Accepts a trailing 'Z' and date-only strings (read as midnight). Any
    timezone offset is dropped; all datetimes are naive local time.
    """
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1]
    try:
        return datetime.fromisoformat(text).replace(tzinfo=None)
    except ValueError:
        pass
    for fmt in ("%Y/%m/%d", "%Y.%m.%d"):
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def format_datetime(dt: datetime) -> str:
    return dt.strftime(DATETIME_FORMAT)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def clamp_day_to_month(year: int, month: int, day: int) -> int:
    """Clamp day to valid range for the given year/month."""
    return min(day, days_in_month(year, month))


def validate_month(year: int, month: int):
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")
    if not 1 <= year <= 9999:
        raise ValueError(f"Invalid year: {year}")


def same_month(d: date, year: int, month: int) -> bool:
    return d.year == year and d.month == month


def prev_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    if month == 12:
        return year + 1, 1
    return year, month + 1


def friendly_month(year: int, month: int) -> str:
    """(2026, 2) -> 'February 2026'."""
    return date(year, month, 1).strftime("%B %Y")


def default_transaction_date(
    view_year: int, view_month: int, reference: datetime | None = None
) -> datetime:
    """Date given to a new entry when the form does not set one.

    'Now' while viewing the current month, otherwise the 15th of the viewed
    month at midnight.
    """
    ref = reference or now()
    if ref.year == view_year and ref.month == view_month:
        return ref.replace(microsecond=0)
    return datetime(view_year, view_month, DEFAULT_ENTRY_DAY)


def format_display_date(value: str, fmt: str = "%b %d, %Y") -> str:
    """Convert a stored ISO string to the user-facing display format."""
    dt = parse_datetime(value)
    if dt is None:
        return value
    return dt.strftime(fmt)
