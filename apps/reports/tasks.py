"""
Scheduled tasks for reports app.

Background jobs for:
- Weekly team summary emails (Mondays at 8 AM)

Registered with Django-Q2 by the setup_schedules management command.
"""

import logging
from datetime import timedelta

from django.conf import settings
from django.core.mail import EmailMessage
from django.template.loader import render_to_string
from django.utils import timezone

from apps.projects.models import Project

from .excel import CONTENT_TYPE as XLSX_CONTENT_TYPE, build_team_summary_workbook
from .services import generate_team_summary_report_data

logger = logging.getLogger(__name__)


def send_weekly_team_summary(project, week_start):
    """
    Email one project's team summary for the week starting at week_start.

    Returns:
        bool: True if an email was sent, False if the project had no tasks
              that week, its owner has no email address, or sending failed
    """
    report = generate_team_summary_report_data(project.pk, 'week', week_start)
    stats = report['summary_stats']
    if stats['total_tasks'] == 0 or not project.owner.email:
        return False

    week_end = week_start + timedelta(days=6)
    body = render_to_string('reports/emails/weekly_team_summary.txt', {
        'project_name': project.name,
        'week_start': week_start,
        'week_end': week_end,
        'stats': stats,
    })
    message = EmailMessage(
        subject=f'Weekly Team Summary: {project.name}',
        body=body,
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[project.owner.email],
    )
    message.attach(
        f'team-summary-report-{project.pk}-{week_start.isoformat()}.xlsx',
        build_team_summary_workbook(report),
        XLSX_CONTENT_TYPE,
    )
    try:
        message.send()
    except Exception:
        logger.exception(
            "Failed to send weekly team summary for project %s to %s",
            project.pk, project.owner.email,
        )
        return False
    return True


def send_weekly_team_summaries():
    """
    Scheduled job to run weekly on Monday at 8:00 AM.

    Sends last week's team summary workbook to every project owner.
    Projects with no tasks in that week are skipped, and a failed send
    does not stop the remaining projects.
    """
    week_start = timezone.localdate() - timedelta(days=7)
    sent = 0

    for project in Project.objects.select_related('owner'):
        if send_weekly_team_summary(project, week_start):
            sent += 1

    logger.info(
        "Weekly team summaries for week of %s: %d email(s) sent",
        week_start.isoformat(), sent,
    )
    return sent
