"""
Template tags and filters for reports app.

Filters:
- logged_time: Format minutes as "2 days 13 hours 5 min"
- report_date: Format a date/datetime as DD-MM-YYYY

Usage:
    {% load report_tags %}

    {{ row.time_taken|logged_time }}
    {{ week_start|report_date }}
"""

from django import template

from apps.reports.formatting import format_date, format_logged_time

register = template.Library()


@register.filter
def logged_time(minutes):
    """
    Format logged minutes for display.

    Examples:
        None -> "0 min"
        90 -> "1 hour 30 min"
        "abc" -> "N/A"
    """
    if minutes is None or minutes == '':
        return format_logged_time(0)

    try:
        return format_logged_time(int(minutes))
    except (ValueError, TypeError):
        return "N/A"


@register.filter
def report_date(value):
    """Format a date or datetime as DD-MM-YYYY, empty string for None."""
    if value is None:
        return ""

    try:
        return format_date(value)
    except TypeError:
        return ""
