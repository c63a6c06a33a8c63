"""
Tests for report download views.
"""

from io import BytesIO
from unittest import mock

from django.test import TestCase
from django.urls import reverse
from openpyxl import load_workbook

from apps.accounts.models import User
from apps.reports import pdf

from tests.helpers import aware, make_project, make_task, make_user

RANGE = {'start_date': '2024-01-01', 'end_date': '2024-01-31'}


class ReportViewTestCase(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.admin = make_user('admin@example.com', roles=[User.Role.ADMIN])
        cls.manager = make_user('manager@example.com', department='sales', roles=[User.Role.MANAGER])
        cls.staff = make_user('staff@example.com', roles=[User.Role.STAFF])
        cls.project = make_project(cls.manager, name='Apollo')
        cls.empty_project = make_project(cls.manager, name='Empty')
        make_task(cls.project, cls.manager, 'Plan', created_at=aware(2024, 1, 10), time_taken=30)
        make_task(cls.project, cls.staff, 'Build', status='Completed',
                  created_at=aware(2024, 1, 11), assignees=[cls.manager])


# =============================================================================
# Access Control
# =============================================================================

class ReportAccessTests(ReportViewTestCase):

    def test_anonymous_redirected_to_login(self):
        url = reverse('reports:project_task_completion', args=[self.project.pk])
        response = self.client.get(url, {**RANGE, 'format': 'excel'})
        self.assertEqual(response.status_code, 302)
        self.assertIn(reverse('admin:login'), response['Location'])

    def test_staff_forbidden(self):
        self.client.force_login(self.staff)
        url = reverse('reports:project_task_completion', args=[self.project.pk])
        response = self.client.get(url, {**RANGE, 'format': 'excel'})
        self.assertEqual(response.status_code, 403)

    def test_manager_cannot_download_logged_time(self):
        self.client.force_login(self.manager)
        url = reverse('reports:project_logged_time', args=[self.project.pk])
        response = self.client.get(url, {'format': 'excel'})
        self.assertEqual(response.status_code, 403)

    def test_post_not_allowed(self):
        self.client.force_login(self.manager)
        url = reverse('reports:project_task_completion', args=[self.project.pk])
        response = self.client.post(url, {**RANGE, 'format': 'excel'})
        self.assertEqual(response.status_code, 405)


# =============================================================================
# Task Completion
# =============================================================================

class TaskCompletionViewTests(ReportViewTestCase):

    def setUp(self):
        self.client.force_login(self.manager)

    def test_project_excel_download(self):
        url = reverse('reports:project_task_completion', args=[self.project.pk])
        response = self.client.get(url, {**RANGE, 'format': 'excel'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response['Content-Type'],
            'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        )
        self.assertRegex(
            response['Content-Disposition'],
            rf'attachment; filename="task-completion-report-project-{self.project.pk}-\d{{4}}-\d{{2}}-\d{{2}}\.xlsx"',
        )
        workbook = load_workbook(BytesIO(response.content))
        self.assertEqual(workbook.sheetnames[0], 'Summary')

    def test_user_pdf_download(self):
        url = reverse('reports:user_task_completion', args=[self.manager.pk])
        with mock.patch.object(pdf, 'html_to_pdf', return_value=b'%PDF-1.7') as html_to_pdf:
            response = self.client.get(url, {**RANGE, 'format': 'pdf'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Content-Type'], 'application/pdf')
        self.assertEqual(response.content, b'%PDF-1.7')
        self.assertIn('Task Completion Report - User: manager@example.com', html_to_pdf.call_args.args[0])

    def test_missing_parameters(self):
        url = reverse('reports:project_task_completion', args=[self.project.pk])
        response = self.client.get(url, {'format': 'pdf'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['error'], 'Invalid parameters')

    def test_start_after_end(self):
        url = reverse('reports:project_task_completion', args=[self.project.pk])
        response = self.client.get(url, {'start_date': '2024-02-01', 'end_date': '2024-01-01', 'format': 'pdf'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Start date cannot be after end date')

    def test_unknown_project(self):
        url = reverse('reports:project_task_completion', args=[999999])
        response = self.client.get(url, {**RANGE, 'format': 'excel'})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {'error': 'Resource not found', 'message': 'Project not found'})

    def test_unknown_user(self):
        url = reverse('reports:user_task_completion', args=[999999])
        response = self.client.get(url, {**RANGE, 'format': 'excel'})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['message'], 'User not found')

    def test_no_data(self):
        url = reverse('reports:project_task_completion', args=[self.empty_project.pk])
        response = self.client.get(url, {**RANGE, 'format': 'excel'})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertFalse(body['success'])
        self.assertEqual(body['type'], 'NO_DATA_FOUND')

    def test_render_failure_returns_500(self):
        url = reverse('reports:project_task_completion', args=[self.project.pk])
        with mock.patch.object(pdf, 'html_to_pdf', side_effect=RuntimeError('browser crashed')):
            response = self.client.get(url, {**RANGE, 'format': 'pdf'})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()['error'], 'Report generation failed')


# =============================================================================
# Team Summary
# =============================================================================

class TeamSummaryViewTests(ReportViewTestCase):

    def setUp(self):
        self.client.force_login(self.admin)

    def test_excel_download(self):
        url = reverse('reports:team_summary', args=[self.project.pk])
        response = self.client.get(url, {'timeframe': 'month', 'start_date': '2024-01-15', 'format': 'excel'})
        self.assertEqual(response.status_code, 200)
        self.assertRegex(
            response['Content-Disposition'],
            rf'team-summary-report-project-{self.project.pk}-\d{{4}}-\d{{2}}-\d{{2}}\.xlsx',
        )
        workbook = load_workbook(BytesIO(response.content))
        self.assertEqual(workbook.sheetnames[-1], 'Summary')

    def test_invalid_timeframe(self):
        url = reverse('reports:team_summary', args=[self.project.pk])
        response = self.client.get(url, {'timeframe': 'day', 'start_date': '2024-01-15', 'format': 'excel'})
        self.assertEqual(response.status_code, 400)

    def test_no_data_in_week(self):
        url = reverse('reports:team_summary', args=[self.project.pk])
        response = self.client.get(url, {'timeframe': 'week', 'start_date': '2023-06-01', 'format': 'pdf'})
        self.assertEqual(response.json()['type'], 'NO_DATA_FOUND')


# =============================================================================
# Logged Time
# =============================================================================

class LoggedTimeViewTests(ReportViewTestCase):

    def setUp(self):
        self.client.force_login(self.admin)

    def test_project_excel_download(self):
        url = reverse('reports:project_logged_time', args=[self.project.pk])
        response = self.client.get(url, {'format': 'excel'})
        self.assertEqual(response.status_code, 200)
        summary = list(load_workbook(BytesIO(response.content))['Summary'].iter_rows(values_only=True))
        self.assertEqual(summary[-1][:2], ('Total Logged Time', '30 min'))

    def test_department_download(self):
        url = reverse('reports:department_logged_time', args=['sales'])
        response = self.client.get(url, {'format': 'excel'})
        self.assertEqual(response.status_code, 200)
        self.assertIn('logged-time-report-department-sales-', response['Content-Disposition'])

    def test_multi_word_department(self):
        url = reverse('reports:department_logged_time', args=['managing director'])
        response = self.client.get(url, {'format': 'excel'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['type'], 'NO_DATA_FOUND')

    def test_invalid_department(self):
        url = reverse('reports:department_logged_time', args=['marketing'])
        response = self.client.get(url, {'format': 'excel'})
        self.assertEqual(response.status_code, 400)
        self.assertIn('Invalid department', response.json()['message'])
