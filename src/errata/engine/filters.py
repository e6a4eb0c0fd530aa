"""Custom Jinja2 filters for site templates."""

from datetime import date, datetime

from errata.core.types import format_iso_utc


def format_date(value: date | datetime, format_str: str = "%b %d, %Y") -> str:
    """Format a date or datetime object.

    Args:
        value: Date to format
        format_str: strftime format string

    Returns:
        Formatted date string

    """
    if not isinstance(value, date):
        return str(value)
    return value.strftime(format_str)


def isoformat(value: date | datetime) -> str:
    if isinstance(value, datetime):
        return format_iso_utc(value)
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def truncate_words(text: str, words: int = 50, suffix: str = "…") -> str:
    parts = text.split()
    if len(parts) <= words:
        return text
    return " ".join(parts[:words]) + suffix
