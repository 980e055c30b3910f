from datetime import date, datetime
from typing import Union

DateLike = Union[str, date, datetime]


def _to_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    # fromisoformat only learned the "Z" suffix in 3.11
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def format_price(price: float) -> str:
    """US dollars with thousands separators: 1299.99 -> "$1,299.99"."""
    sign = "-" if price < 0 else ""
    return f"{sign}${abs(price):,.2f}"


def format_date(value: DateLike) -> str:
    d = _to_datetime(value)
    return f"{d.strftime('%b')} {d.day}, {d.year}"


def format_datetime(value: DateLike) -> str:
    d = _to_datetime(value)
    hour = d.hour % 12 or 12
    meridiem = "AM" if d.hour < 12 else "PM"
    return f"{d.strftime('%B')} {d.day}, {d.year} at {hour}:{d.minute:02d} {meridiem}"


def capitalize_first_letter(text: str) -> str:
    return text[:1].upper() + text[1:]


def truncate_text(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."
