"""
Excel (xlsx) rendering for reports.

One worksheet per status bucket plus a Summary sheet. Task completion and
logged-time workbooks put the Summary first; team summary workbooks append
it after the status sheets.

Every builder takes the dict produced by apps.reports.services and returns
the workbook as bytes.
"""

from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Font

from .aggregation import COMPLETION_STATUSES, TEAM_SUMMARY_STATUSES

TASK_COLUMNS = (
    # (header, row key, width)
    ('Task ID', 'id', 25),
    ('Task Name', 'title', 30),
    ('Deadline', 'deadline', 15),
    ('Priority', 'priority', 10),
    ('Tags', 'tags', 20),
    ('Owner', 'owner', 15),
    ('Assignee', 'assignee', 15),
    ('Project', 'project', 20),
    ('Created At', 'created_at', 15),
    ('Description', 'description', 40),
)

LOGGED_TIME_COLUMNS = TASK_COLUMNS[:9] + (
    ('Logged Time', 'logged_time', 20),
) + TASK_COLUMNS[9:]

TEAM_COLUMNS = (
    ('Task ID', 'id', 25),
    ('Task Name', 'title', 30),
    ('Owner', 'owner', 40),
    ('Assignee(s)', 'assignee', 50),
    ('Created Date', 'created_at', 15),
    ('Due Date', 'due_date', 15),
)

CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

TITLE_FONT = Font(bold=True, size=12)
HEADER_FONT = Font(bold=True)


def _column_letter(index):
    return chr(ord('A') + index)


def _save(workbook):
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def _write_status_sheet(workbook, title, rows, columns):
    sheet = workbook.create_sheet(title=title)
    sheet.append([header for header, _, _ in columns])
    for cell in sheet[1]:
        cell.font = HEADER_FONT
    for row in rows:
        sheet.append([row.get(key) for _, key, _ in columns])
    for index, (_, _, width) in enumerate(columns):
        sheet.column_dimensions[_column_letter(index)].width = width
    return sheet


def _summary_rows(report, title):
    metadata = report['metadata']
    date_range = metadata.get('date_range')
    rows = [
        [title],
        ['Generated At', metadata['generated_at']],
    ]
    if date_range:
        rows.append(['Date Range', f"{date_range['start_date']} to {date_range['end_date']}"])
    rows.append(['Report Type', metadata['type'].upper()])

    if 'project_name' in metadata:
        rows.append(['Project Name', metadata['project_name']])
        rows.append(['Project Owner', metadata.get('project_owner', '')])
    elif 'username' in metadata:
        rows.append(['Username', metadata['username']])
    elif 'department' in metadata:
        rows.append(['Department', metadata.get('department_name', metadata['department'])])
    return rows


def _write_summary_sheet(workbook, rows, widths, index=None):
    sheet = workbook.create_sheet(title='Summary', index=index)
    for row in rows:
        sheet.append(row)
    sheet['A1'].font = TITLE_FONT
    for column, width in enumerate(widths):
        sheet.column_dimensions[_column_letter(column)].width = width
    return sheet


def _completion_workbook(report, columns, title, extra_rows=()):
    workbook = Workbook()
    workbook.remove(workbook.active)

    for status in COMPLETION_STATUSES:
        _write_status_sheet(workbook, status, report['data'].get(status, []), columns)

    aggregates = report['aggregates']
    rows = _summary_rows(report, title)
    rows.append([])
    rows.append(['Status', 'Count'])
    for status in COMPLETION_STATUSES:
        rows.append([status, aggregates.get(status, 0)])
    rows.append(['Total Tasks', aggregates['total']])
    rows.extend(extra_rows)

    summary = _write_summary_sheet(workbook, rows, (25, 15), index=0)
    status_header = len(rows) - len(COMPLETION_STATUSES) - 1 - len(extra_rows)
    for cell in summary[status_header]:
        cell.font = HEADER_FONT
    return _save(workbook)


def build_task_completion_workbook(report):
    """Workbook for a project or user task completion report."""
    return _completion_workbook(report, TASK_COLUMNS, 'Task Completion Report Summary')


def build_logged_time_workbook(report):
    """Workbook for a project or department logged time report."""
    return _completion_workbook(
        report,
        LOGGED_TIME_COLUMNS,
        'Logged Time Report Summary',
        extra_rows=[['Total Logged Time', report['aggregates']['total_logged_time']]],
    )


def build_team_summary_workbook(report):
    """Workbook for a team summary: status sheets first, Summary last."""
    workbook = Workbook()
    workbook.remove(workbook.active)

    for status in TEAM_SUMMARY_STATUSES:
        _write_status_sheet(
            workbook, status, report['tasks_by_status'].get(status, []), TEAM_COLUMNS,
        )

    metadata = report['metadata']
    stats = report['summary_stats']
    date_range = metadata['date_range']
    rows = [
        ['Team Summary Report'],
        ['Project:', metadata['project_name']],
        ['Timeframe:', metadata['timeframe']],
        ['Date Range:', f"{date_range['start_date']} to {date_range['end_date']}"],
        ['Generated:', metadata['generated_at']],
        [],
        ['Task Statistics'],
        ['Total Tasks:', stats['total_tasks']],
    ]
    for status in TEAM_SUMMARY_STATUSES:
        rows.append([f'{status}:', stats['tasks_by_status'].get(status, 0)])
    rows.append([])
    rows.append([f"Team Members ({stats['team_member_count']})"])
    rows.append(['Username', 'Department', 'Role', 'Task Count'])
    member_header = len(rows)
    for member in report['team_members']:
        rows.append([
            member['username'],
            member['department'],
            member['role'],
            stats['tasks_by_member'].get(member['username'], 0),
        ])

    summary = _write_summary_sheet(workbook, rows, (20, 30, 15, 15))
    for cell in summary[member_header]:
        cell.font = HEADER_FONT
    return _save(workbook)
