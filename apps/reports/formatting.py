"""
Display formatting shared by report builders, renderers and templates.

- format_logged_time: minutes → "2 days 13 hours 5 min"
- format_date: DD-MM-YYYY
- format_datetime: DD-MM-YYYY at HH:MM
"""

from datetime import date, datetime

from django.utils import timezone

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR


def _plural(count, unit):
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def format_logged_time(minutes):
    """
    Format a logged duration given in whole minutes.

    Only the largest applicable units are shown and zero components are
    dropped:

        0    -> "0 min"
        59   -> "59 min"
        90   -> "1 hour 30 min"
        1440 -> "1 day"
        3665 -> "2 days 13 hours 5 min"

    Raises:
        ValueError: If minutes is negative
    """
    minutes = int(minutes)
    if minutes < 0:
        raise ValueError(f"Logged time cannot be negative: {minutes}")

    if minutes < MINUTES_PER_HOUR:
        return f"{minutes} min"

    if minutes < MINUTES_PER_DAY:
        hours, mins = divmod(minutes, MINUTES_PER_HOUR)
        parts = [_plural(hours, 'hour')]
    else:
        days, remainder = divmod(minutes, MINUTES_PER_DAY)
        hours, mins = divmod(remainder, MINUTES_PER_HOUR)
        parts = [_plural(days, 'day')]
        if hours:
            parts.append(_plural(hours, 'hour'))

    if mins:
        parts.append(f"{mins} min")
    return ' '.join(parts)


def _local(value):
    if isinstance(value, datetime) and timezone.is_aware(value):
        return timezone.localtime(value)
    return value


def format_date(value):
    """Format a date or datetime as DD-MM-YYYY (local time for aware datetimes)."""
    value = _local(value)
    if not isinstance(value, date):
        raise TypeError(f"Expected a date or datetime, got {type(value).__name__}")
    return value.strftime('%d-%m-%Y')


def format_datetime(value):
    """Format a datetime as 'DD-MM-YYYY at HH:MM' (24-hour clock)."""
    value = _local(value)
    return f"{format_date(value)} at {value.strftime('%H:%M')}"
