"""
Template tags package for reports app.

Available tag libraries:
- report_tags: Formatting tags for reports (hours_overdue, escalation_level, format_percentage)

Usage in templates:
    {% load report_tags %}
"""