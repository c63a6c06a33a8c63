"""
Input validation for task and subtask records.

These run before data reaches the store (model field validators and
``clean()``), so the report layer only has to cope with the documented
field contracts.
"""

from django.core.exceptions import ValidationError

TO_DO = 'To Do'
IN_PROGRESS = 'In Progress'
BLOCKED = 'Blocked'
COMPLETED = 'Completed'

STATUS_VALUES = (TO_DO, IN_PROGRESS, BLOCKED, COMPLETED)

# Older records were written with "Done" before the status set settled.
LEGACY_STATUS_MAP = {
    'Done': COMPLETED,
}

MIN_PRIORITY = 1
MAX_PRIORITY = 10
MAX_ASSIGNEES = 5


def map_legacy_status(value):
    """Replace a legacy status with its current value; other values pass through trimmed."""
    value = (value or '').strip()
    return LEGACY_STATUS_MAP.get(value, value)


def canonical_status(value):
    """
    Map a submitted status onto the canonical status set.

    Raises:
        ValidationError: If the value is neither canonical nor a known legacy value
    """
    value = map_legacy_status(value)
    if value not in STATUS_VALUES:
        raise ValidationError(
            f'Invalid status "{value}". Must be one of: {", ".join(STATUS_VALUES)}.'
        )
    return value


def validate_priority(value):
    if value is None or not MIN_PRIORITY <= value <= MAX_PRIORITY:
        raise ValidationError(
            f'Priority must be between {MIN_PRIORITY} and {MAX_PRIORITY}.'
        )


def validate_time_taken(value):
    """Logged time is whole minutes and can never be negative."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError('Time taken must be a whole number of minutes.')
    if value < 0:
        raise ValidationError('Time taken must be a positive number.')


def validate_assignee_count(assignees):
    if len(assignees) > MAX_ASSIGNEES:
        raise ValidationError(
            f'A task can have a maximum of {MAX_ASSIGNEES} assignees.'
        )


def migrate_legacy_statuses(*models):
    """
    Rewrite legacy status values on every given model.

    Used by the data migration; returns the number of rows changed.
    """
    changed = 0
    for model in models:
        for legacy, current in LEGACY_STATUS_MAP.items():
            changed += model.objects.filter(status=legacy).update(status=current)
    return changed
