def format_currency(amount: float, symbol: str = "$") -> str:
    """Format a float as currency string, e.g. '$1,234.56'."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_signed(amount: float, symbol: str = "$") -> str:
    """Format with +/- sign."""
    sign = "+" if amount >= 0 else "-"
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_for_type(amount: float, type_: str, symbol: str = "$") -> str:
    """Income shows as '+$12.00', expenses as '-$12.00'."""
    return format_signed(amount if type_ == "income" else -amount, symbol)
