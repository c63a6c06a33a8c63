"""
Views for reports app.

Report downloads (GET, query parameters validated by apps.reports.forms):
- Task completion by project / by user (Admin, Manager)
- Team summary by project (Admin, Manager)
- Logged time by project / by department (Admin only)

Errors are returned as JSON:
- 400 {"error", "message"} for invalid parameters
- 404 {"error": "Resource not found", "message"} for a missing project/user
- 200 {"success": false, "message", "type": "NO_DATA_FOUND"} for an empty report
- 500 {"error", "message"} when the file could not be rendered
"""

import logging

from django.contrib.auth.decorators import login_required, user_passes_test
from django.core.exceptions import PermissionDenied, ValidationError
from django.http import HttpResponse, JsonResponse
from django.utils import timezone
from django.utils.text import slugify
from django.views.decorators.http import require_GET

from . import excel, pdf
from .exceptions import NotFoundError
from .forms import (
    FORMAT_PDF, LoggedTimeReportForm, TaskCompletionReportForm,
    TeamSummaryReportForm, first_error,
)
from .services import (
    generate_department_logged_time_report_data,
    generate_project_logged_time_report_data,
    generate_project_task_completion_report_data,
    generate_team_summary_report_data,
    generate_user_task_completion_report_data,
)

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = 'application/pdf'
XLSX_CONTENT_TYPE = excel.CONTENT_TYPE

NO_DATA_FOUND = 'NO_DATA_FOUND'


# =============================================================================
# Access Checks
# =============================================================================

def can_view_reports(user):
    """Admin or Manager; other signed-in users get 403."""
    if not user.is_authenticated:
        return False
    if not user.can_view_reports():
        raise PermissionDenied
    return True


def can_view_logged_time_reports(user):
    """Admin only; other signed-in users get 403."""
    if not user.is_authenticated:
        return False
    if not user.can_view_logged_time_reports():
        raise PermissionDenied
    return True


# =============================================================================
# Responses
# =============================================================================

def error_response(message, status=400, error='Invalid parameters'):
    return JsonResponse({'error': error, 'message': message}, status=status)


def not_found_response(exc):
    return error_response(str(exc), status=404, error='Resource not found')


def no_data_response(message):
    return JsonResponse({
        'success': False,
        'message': message,
        'type': NO_DATA_FOUND,
    })


def validation_message(exc):
    return exc.messages[0] if exc.messages else 'Invalid parameters.'


def file_response(report, report_format, basename, pdf_builder, excel_builder):
    """
    Render the report in the requested format and return it as a download.

    Rendering failures are logged and turned into a 500 JSON response.
    """
    if report_format == FORMAT_PDF:
        builder, content_type, extension = pdf_builder, PDF_CONTENT_TYPE, 'pdf'
    else:
        builder, content_type, extension = excel_builder, XLSX_CONTENT_TYPE, 'xlsx'

    try:
        content = builder(report)
    except Exception:
        logger.exception("Failed to render %s as %s", basename, extension)
        return error_response(
            'An error occurred while generating the report file.',
            status=500,
            error='Report generation failed',
        )

    filename = f'{basename}.{extension}'
    response = HttpResponse(content, content_type=content_type)
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    logger.info("Report %s generated (%d bytes)", filename, len(content))
    return response


def _today():
    return timezone.localdate().isoformat()


# =============================================================================
# Task Completion
# =============================================================================

@login_required
@user_passes_test(can_view_reports)
@require_GET
def project_task_completion_report(request, project_id):
    form = TaskCompletionReportForm(request.GET)
    if not form.is_valid():
        return error_response(first_error(form))

    try:
        report = generate_project_task_completion_report_data(
            project_id, form.cleaned_data['start'], form.cleaned_data['end'],
        )
    except NotFoundError as exc:
        return not_found_response(exc)

    if report['aggregates']['total'] == 0:
        return no_data_response('No tasks found for this project in the selected date range.')

    return file_response(
        report,
        form.cleaned_data['format'],
        f'task-completion-report-project-{project_id}-{_today()}',
        pdf.build_task_completion_pdf,
        excel.build_task_completion_workbook,
    )


@login_required
@user_passes_test(can_view_reports)
@require_GET
def user_task_completion_report(request, user_id):
    form = TaskCompletionReportForm(request.GET)
    if not form.is_valid():
        return error_response(first_error(form))

    try:
        report = generate_user_task_completion_report_data(
            user_id, form.cleaned_data['start'], form.cleaned_data['end'],
        )
    except NotFoundError as exc:
        return not_found_response(exc)

    if report['aggregates']['total'] == 0:
        return no_data_response('No tasks found for this user in the selected date range.')

    return file_response(
        report,
        form.cleaned_data['format'],
        f'task-completion-report-user-{user_id}-{_today()}',
        pdf.build_task_completion_pdf,
        excel.build_task_completion_workbook,
    )


# =============================================================================
# Team Summary
# =============================================================================

@login_required
@user_passes_test(can_view_reports)
@require_GET
def team_summary_report(request, project_id):
    form = TeamSummaryReportForm(request.GET)
    if not form.is_valid():
        return error_response(first_error(form))

    try:
        report = generate_team_summary_report_data(
            project_id, form.cleaned_data['timeframe'], form.cleaned_data['start_date'],
        )
    except NotFoundError as exc:
        return not_found_response(exc)
    except ValidationError as exc:
        return error_response(validation_message(exc))

    if report['summary_stats']['total_tasks'] == 0:
        return no_data_response('No tasks found for this project in the selected timeframe.')

    return file_response(
        report,
        form.cleaned_data['format'],
        f'team-summary-report-project-{project_id}-{_today()}',
        pdf.build_team_summary_pdf,
        excel.build_team_summary_workbook,
    )


# =============================================================================
# Logged Time
# =============================================================================

@login_required
@user_passes_test(can_view_logged_time_reports)
@require_GET
def project_logged_time_report(request, project_id):
    form = LoggedTimeReportForm(request.GET)
    if not form.is_valid():
        return error_response(first_error(form))

    try:
        report = generate_project_logged_time_report_data(project_id)
    except NotFoundError as exc:
        return not_found_response(exc)

    if report['aggregates']['total'] == 0:
        return no_data_response('No tasks found for this project.')

    return file_response(
        report,
        form.cleaned_data['format'],
        f'logged-time-report-project-{project_id}-{_today()}',
        pdf.build_logged_time_pdf,
        excel.build_logged_time_workbook,
    )


@login_required
@user_passes_test(can_view_logged_time_reports)
@require_GET
def department_logged_time_report(request, department):
    form = LoggedTimeReportForm(request.GET)
    if not form.is_valid():
        return error_response(first_error(form))

    try:
        report = generate_department_logged_time_report_data(department)
    except ValidationError as exc:
        return error_response(validation_message(exc))

    if report['aggregates']['total'] == 0:
        return no_data_response('No tasks found for this department.')

    return file_response(
        report,
        form.cleaned_data['format'],
        f"logged-time-report-department-{slugify(report['metadata']['department'])}-{_today()}",
        pdf.build_logged_time_pdf,
        excel.build_logged_time_workbook,
    )
