"""
Grouping and aggregation over normalized report records.

The set of status buckets is always passed in by the caller: completion
and logged-time reports use COMPLETION_STATUSES, team summaries leave
out "Blocked".

Records whose status is not one of the buckets are still counted in
``total`` (and still contribute logged time) but appear in no bucket.
Existing consumers rely on this, so it is kept as is.
"""

from apps.tasks.models import Task

from .formatting import format_date, format_logged_time

TO_DO = Task.Status.TO_DO.value
IN_PROGRESS = Task.Status.IN_PROGRESS.value
BLOCKED = Task.Status.BLOCKED.value
COMPLETED = Task.Status.COMPLETED.value

COMPLETION_STATUSES = (TO_DO, IN_PROGRESS, BLOCKED, COMPLETED)
TEAM_SUMMARY_STATUSES = (TO_DO, IN_PROGRESS, COMPLETED)


# =============================================================================
# Row Formatting
# =============================================================================

def _text_or(value, default):
    value = (value or '').strip()
    return value or default


def format_assignees(assignees):
    """Comma-joined usernames of assignees that have one, else 'Unassigned'."""
    names = [a.username for a in assignees if a is not None and a.username]
    return ', '.join(names) if names else 'Unassigned'


def format_task_row(record):
    """Display row for task-completion reports."""
    return {
        'id': record.id,
        'title': record.title,
        'deadline': format_date(record.due_date) if record.due_date else 'No deadline',
        'priority': str(record.priority) if record.priority else 'Not set',
        'tags': _text_or(record.tags, 'No tags'),
        'description': _text_or(record.description, 'No description'),
        'owner': record.owner.username if record.owner else 'No owner',
        'assignee': format_assignees(record.assignees),
        'project': record.project.name if record.project else 'No project',
        'created_at': format_date(record.created_at),
    }


def format_logged_time_row(record):
    """Task row plus the record's own logged time."""
    row = format_task_row(record)
    row['time_taken'] = record.time_taken or 0
    row['logged_time'] = format_logged_time(record.time_taken or 0)
    return row


def format_team_row(record):
    """Display row for team summaries: owner/assignees carry department and role."""
    if record.assignees:
        assignee = '; '.join(a.describe() for a in record.assignees)
    else:
        assignee = 'Unassigned'
    return {
        'id': record.id,
        'title': record.title,
        'owner': record.owner.describe() if record.owner else 'No owner',
        'assignee': assignee,
        'created_at': format_date(record.created_at),
        'due_date': format_date(record.due_date) if record.due_date else 'No deadline',
    }


# =============================================================================
# Grouping & Totals
# =============================================================================

def group_by_status(records, statuses, row_formatter=format_task_row):
    """
    Partition records into one list per status, keeping input order.

    Records with a status outside ``statuses`` are left out.
    """
    grouped = {status: [] for status in statuses}
    for record in records:
        bucket = grouped.get(record.status)
        if bucket is not None:
            bucket.append(row_formatter(record))
    return grouped


def total_logged_minutes(records):
    return sum(record.time_taken or 0 for record in records)


def build_aggregates(records, grouped, include_logged_time=False):
    """
    Per-status counts plus ``total`` over every input record.

    With ``include_logged_time`` the minutes of all records are summed
    first and formatted once into ``total_logged_time``.
    """
    aggregates = {status: len(rows) for status, rows in grouped.items()}
    aggregates['total'] = len(records)
    if include_logged_time:
        aggregates['total_logged_time'] = format_logged_time(total_logged_minutes(records))
    return aggregates


def aggregate(records, statuses, row_formatter=format_task_row, include_logged_time=False):
    """Group and total in one go. Returns ``(data, aggregates)``."""
    grouped = group_by_status(records, statuses, row_formatter)
    return grouped, build_aggregates(records, grouped, include_logged_time)


# =============================================================================
# Team Summary
# =============================================================================

def identify_team_members(records):
    """
    Unique owners and assignees across all records, in first-seen order.

    The first occurrence of a user decides the department and role shown.
    """
    members = {}
    for record in records:
        people = ([record.owner] if record.owner else []) + list(record.assignees)
        for person in people:
            if person is None or not person.id or person.id in members:
                continue
            members[person.id] = {
                'user_id': person.id,
                'username': person.username,
                'department': person.department_display,
                'role': person.role,
            }
    return list(members.values())


def count_tasks_by_member(records, members):
    """Records per member, where owning or being assigned both count."""
    return {
        member['username']: sum(1 for record in records if record.involves(member['user_id']))
        for member in members
    }


def summary_statistics(records, members, statuses=TEAM_SUMMARY_STATUSES):
    return {
        'total_tasks': len(records),
        'tasks_by_status': {
            status: sum(1 for record in records if record.status == status)
            for status in statuses
        },
        'team_member_count': len(members),
        'tasks_by_member': count_tasks_by_member(records, members),
    }


# =============================================================================
# Department Scope
# =============================================================================

def involves_department(record, department):
    """True if the owner or any assignee belongs to the department."""
    if record.owner is not None and record.owner.department == department:
        return True
    return any(
        assignee is not None and assignee.department == department
        for assignee in record.assignees
    )
