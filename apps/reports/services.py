"""
Service layer for reports app.

Builds structured report data from tasks and subtasks. Every builder
follows the same pipeline:

    fetch tasks + subtasks → normalize (records.py) → group/total (aggregation.py)

Services:
- generate_project_task_completion_report_data: One project, by status, in a date range
- generate_user_task_completion_report_data: One user's owned/assigned work, by status
- generate_team_summary_report_data: Project contributors over a week or month
- generate_project_logged_time_report_data: Logged minutes across a project
- generate_department_logged_time_report_data: Logged minutes across all projects for a department

The returned dicts are JSON-serializable and feed the Excel/PDF renderers.
Store errors propagate to the caller unchanged.
"""

import calendar
import logging
from datetime import date, datetime, time, timedelta

from django.core.exceptions import ValidationError
from django.db.models import F, Q
from django.utils import timezone

from apps.accounts.models import User
from apps.projects.models import Project
from apps.tasks.models import Task, Subtask

from .aggregation import (
    COMPLETION_STATUSES, TEAM_SUMMARY_STATUSES,
    aggregate, format_logged_time_row, format_team_row, group_by_status,
    identify_team_members, involves_department, summary_statistics,
)
from .exceptions import NotFoundError, PROJECT_NOT_FOUND, USER_NOT_FOUND
from .formatting import format_date, format_datetime
from .records import normalize_all

logger = logging.getLogger(__name__)


# Earliest deadline first, tasks without a deadline ahead of the rest
DEADLINE_ORDERING = (F('due_date').asc(nulls_first=True), 'created_at')


# =============================================================================
# Query Helpers
# =============================================================================

def _tasks():
    return Task.objects.select_related('owner', 'project').prefetch_related('assignees')


def _subtasks():
    return Subtask.objects.select_related('owner', 'assignee', 'project')


def _created_between(start, end):
    return {'created_at__gte': start, 'created_at__lte': end}


def get_project_or_raise(project_id):
    try:
        return Project.objects.select_related('owner').get(pk=project_id)
    except (Project.DoesNotExist, ValueError):
        raise NotFoundError(PROJECT_NOT_FOUND)


def get_user_or_raise(user_id):
    try:
        return User.objects.get(pk=user_id)
    except (User.DoesNotExist, ValueError):
        raise NotFoundError(USER_NOT_FOUND)


def validate_department(department):
    """
    Check a department against the closed set used on user records.

    Returns:
        The canonical (lower-case) department value

    Raises:
        ValidationError: "Invalid department ..." for anything else
    """
    value = (department or '').strip().lower()
    if value not in User.Department.values:
        raise ValidationError(
            f'Invalid department "{department}". '
            f'Must be one of: {", ".join(User.Department.values)}.'
        )
    return value


def _build_metadata(report_type, start=None, end=None, **extra):
    metadata = {'type': report_type}
    if start is not None and end is not None:
        metadata['date_range'] = {
            'start_date': format_date(start),
            'end_date': format_date(end),
        }
    metadata['generated_at'] = format_datetime(timezone.now())
    metadata.update(extra)
    return metadata


def process_records_for_report(records, report_type, metadata, statuses=COMPLETION_STATUSES):
    """
    Group normalized records by status for a task-completion report.

    Args:
        records: ReportRecord list, tasks before subtasks
        report_type: 'project' or 'user'
        metadata: Report-specific metadata, must carry start/end datetimes
            under 'start_date' / 'end_date'
        statuses: Status buckets to group into

    Returns:
        dict with 'data', 'aggregates' and 'metadata'
    """
    data, aggregates = aggregate(records, statuses)
    extra = dict(metadata)
    start = extra.pop('start_date')
    end = extra.pop('end_date')
    return {
        'data': data,
        'aggregates': aggregates,
        'metadata': _build_metadata(report_type, start, end, **extra),
    }


# =============================================================================
# Task Completion Reports
# =============================================================================

def generate_project_task_completion_report_data(project_id, start_date, end_date):
    """
    Task completion report for one project.

    Args:
        project_id: Project primary key
        start_date: Aware datetime, inclusive lower bound on created_at
        end_date: Aware datetime, inclusive upper bound on created_at

    Raises:
        NotFoundError: "Project not found"
    """
    project = get_project_or_raise(project_id)
    created = _created_between(start_date, end_date)

    tasks = _tasks().filter(project=project, **created).order_by(*DEADLINE_ORDERING)
    subtasks = _subtasks().filter(project=project, **created).order_by('created_at')

    records = normalize_all(tasks, subtasks, project=project)
    logger.info(
        "Project task completion report for project %s: %d records",
        project.pk, len(records),
    )
    return process_records_for_report(records, 'project', {
        'project_id': str(project.pk),
        'project_name': project.name,
        'project_owner': project.owner.email,
        'start_date': start_date,
        'end_date': end_date,
    })


def generate_user_task_completion_report_data(user_id, start_date, end_date):
    """
    Task completion report for one user: everything they own or are assigned to.

    Raises:
        NotFoundError: "User not found"
    """
    user = get_user_or_raise(user_id)
    created = _created_between(start_date, end_date)

    tasks = (
        _tasks()
        .filter(Q(owner=user) | Q(assignees=user), **created)
        .distinct()
        .order_by(*DEADLINE_ORDERING)
    )
    subtasks = (
        _subtasks()
        .filter(Q(owner=user) | Q(assignee=user), **created)
        .order_by('created_at')
    )

    records = normalize_all(tasks, subtasks)
    logger.info(
        "User task completion report for user %s: %d records",
        user.pk, len(records),
    )
    return process_records_for_report(records, 'user', {
        'user_id': str(user.pk),
        'username': user.email,
        'start_date': start_date,
        'end_date': end_date,
    })


# =============================================================================
# Team Summary
# =============================================================================

def _as_local_date(value):
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()
    if isinstance(value, date):
        return value
    raise ValidationError('Start date must be a date.')


def calculate_date_range(timeframe, start_date):
    """
    Full-day bounds for a team summary window.

    - week: start_date through start_date + 6 days
    - month: the calendar month containing start_date

    Returns:
        (start, end) aware datetimes, end at 23:59:59.999999
    """
    day = _as_local_date(start_date)

    if timeframe == 'week':
        first_day = day
        last_day = day + timedelta(days=6)
    elif timeframe == 'month':
        first_day = day.replace(day=1)
        last_day = day.replace(day=calendar.monthrange(day.year, day.month)[1])
    else:
        raise ValidationError(
            f'Invalid timeframe "{timeframe}". Must be either "week" or "month".'
        )

    start = timezone.make_aware(datetime.combine(first_day, time.min))
    end = timezone.make_aware(datetime.combine(last_day, time.max))
    return start, end


def generate_team_summary_report_data(project_id, timeframe, start_date):
    """
    Who worked on a project during a week or month, and on what.

    Blocked work is left out of both the fetch and the statistics.

    Returns:
        dict with 'metadata', 'team_members', 'tasks_by_status', 'summary_stats'

    Raises:
        NotFoundError: "Project not found"
        ValidationError: Unknown timeframe
    """
    project = get_project_or_raise(project_id)
    start, end = calculate_date_range(timeframe, start_date)
    created = _created_between(start, end)

    tasks = (
        _tasks()
        .filter(project=project, status__in=TEAM_SUMMARY_STATUSES, **created)
        .order_by('status', 'created_at')
    )
    subtasks = (
        _subtasks()
        .filter(project=project, status__in=TEAM_SUMMARY_STATUSES, **created)
        .order_by('status', 'created_at')
    )

    records = normalize_all(tasks, subtasks, project=project)
    team_members = identify_team_members(records)
    logger.info(
        "Team summary for project %s (%s from %s): %d records, %d members",
        project.pk, timeframe, format_date(start), len(records), len(team_members),
    )

    return {
        'metadata': _build_metadata(
            'team_summary', start, end,
            project_id=str(project.pk),
            project_name=project.name,
            timeframe=timeframe,
        ),
        'team_members': team_members,
        'tasks_by_status': group_by_status(records, TEAM_SUMMARY_STATUSES, format_team_row),
        'summary_stats': summary_statistics(records, team_members, TEAM_SUMMARY_STATUSES),
    }


# =============================================================================
# Logged Time Reports
# =============================================================================

def _logged_time_report(records, metadata):
    data, aggregates = aggregate(
        records,
        COMPLETION_STATUSES,
        row_formatter=format_logged_time_row,
        include_logged_time=True,
    )
    return {'data': data, 'aggregates': aggregates, 'metadata': metadata}


def generate_project_logged_time_report_data(project_id):
    """
    Logged time across every non-archived task and subtask of a project.

    No date filtering; all statuses are fetched.

    Raises:
        NotFoundError: "Project not found"
    """
    project = get_project_or_raise(project_id)

    tasks = _tasks().filter(project=project, archived=False).order_by('created_at')
    subtasks = _subtasks().filter(project=project, archived=False).order_by('created_at')

    records = normalize_all(tasks, subtasks, project=project)
    report = _logged_time_report(records, _build_metadata(
        'logged_time_project',
        project_id=str(project.pk),
        project_name=project.name,
        project_owner=project.owner.email,
    ))
    logger.info(
        "Logged time report for project %s: %d records, %s",
        project.pk, len(records), report['aggregates']['total_logged_time'],
    )
    return report


def generate_department_logged_time_report_data(department):
    """
    Logged time for a department across all projects.

    A record is included when its owner or any assignee belongs to the
    department. Archived records never are.

    Raises:
        ValidationError: "Invalid department ..."
    """
    department = validate_department(department)
    involved = Q(owner__department=department)

    tasks = (
        _tasks()
        .filter(involved | Q(assignees__department=department), archived=False)
        .distinct()
        .order_by('created_at')
    )
    subtasks = (
        _subtasks()
        .filter(involved | Q(assignee__department=department), archived=False)
        .order_by('created_at')
    )

    records = [
        record for record in normalize_all(tasks, subtasks)
        if involves_department(record, department)
    ]
    project_names = sorted({record.project.name for record in records if record.project})

    report = _logged_time_report(records, _build_metadata(
        'logged_time_department',
        department=department,
        department_name=User.Department(department).label,
        projects=project_names,
    ))
    logger.info(
        "Logged time report for department %s: %d records across %d projects, %s",
        department, len(records), len(project_names), report['aggregates']['total_logged_time'],
    )
    return report
