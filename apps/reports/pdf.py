"""
PDF rendering for reports.

Reports are rendered to HTML with Django templates, then printed to PDF
by headless Chromium (Playwright). The browser is launched per document
and always closed, whether or not printing succeeds; any Playwright
error propagates to the caller.
"""

import logging

from django.conf import settings
from django.template.loader import render_to_string
from playwright.sync_api import sync_playwright

from .aggregation import COMPLETION_STATUSES, TEAM_SUMMARY_STATUSES

logger = logging.getLogger(__name__)

PAGE_FORMAT = 'A4'
PAGE_MARGIN = {
    'top': '20mm',
    'right': '15mm',
    'bottom': '20mm',
    'left': '15mm',
}


def _sections(rows_by_status, statuses):
    return [
        {'status': status, 'rows': rows_by_status.get(status, [])}
        for status in statuses
    ]


def _counts(counts_by_status, statuses):
    return [
        {'status': status, 'count': counts_by_status.get(status, 0)}
        for status in statuses
    ]


def _report_title(prefix, metadata):
    if 'project_name' in metadata:
        return f"{prefix} - Project: {metadata['project_name']}"
    if 'username' in metadata:
        return f"{prefix} - User: {metadata['username']}"
    if 'department' in metadata:
        return f"{prefix} - Department: {metadata.get('department_name', metadata['department'])}"
    return prefix


# =============================================================================
# HTML
# =============================================================================

def render_task_completion_html(report):
    metadata = report['metadata']
    return render_to_string('reports/task_completion_report.html', {
        'title': _report_title('Task Completion Report', metadata),
        'metadata': metadata,
        'report_type': metadata['type'].upper(),
        'aggregates': report['aggregates'],
        'counts': _counts(report['aggregates'], COMPLETION_STATUSES),
        'sections': _sections(report['data'], COMPLETION_STATUSES),
    })


def render_logged_time_html(report):
    metadata = report['metadata']
    return render_to_string('reports/logged_time_report.html', {
        'title': _report_title('Logged Time Report', metadata),
        'metadata': metadata,
        'aggregates': report['aggregates'],
        'counts': _counts(report['aggregates'], COMPLETION_STATUSES),
        'sections': _sections(report['data'], COMPLETION_STATUSES),
    })


def render_team_summary_html(report):
    stats = report['summary_stats']
    members = [
        dict(member, task_count=stats['tasks_by_member'].get(member['username'], 0))
        for member in report['team_members']
    ]
    return render_to_string('reports/team_summary_report.html', {
        'metadata': report['metadata'],
        'stats': stats,
        'members': members,
        'counts': _counts(stats['tasks_by_status'], TEAM_SUMMARY_STATUSES),
        'sections': _sections(report['tasks_by_status'], TEAM_SUMMARY_STATUSES),
    })


# =============================================================================
# PDF
# =============================================================================

def html_to_pdf(html):
    """
    Print an HTML document to PDF bytes.

    A4, 20mm top/bottom and 15mm left/right margins, backgrounds printed.
    Browser launch arguments come from settings.PDF_BROWSER_ARGS.
    """
    with sync_playwright() as playwright:
        browser = playwright.chromium.launch(
            headless=True,
            args=list(getattr(settings, 'PDF_BROWSER_ARGS', [])),
        )
        try:
            page = browser.new_page()
            page.set_content(html, wait_until='networkidle')
            pdf = page.pdf(
                format=PAGE_FORMAT,
                margin=PAGE_MARGIN,
                print_background=True,
            )
        finally:
            browser.close()

    logger.debug("Rendered PDF (%d bytes)", len(pdf))
    return pdf


def build_task_completion_pdf(report):
    return html_to_pdf(render_task_completion_html(report))


def build_logged_time_pdf(report):
    return html_to_pdf(render_logged_time_html(report))


def build_team_summary_pdf(report):
    return html_to_pdf(render_team_summary_html(report))
