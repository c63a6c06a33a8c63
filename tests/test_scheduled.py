"""
Tests for the weekly team summary email job and its schedule command.
"""

from datetime import date, datetime, time, timedelta
from io import StringIO
from smtplib import SMTPException
from unittest import mock

from django.conf import settings
from django.core import mail
from django.core.mail import EmailMessage
from django.core.management import call_command
from django.test import SimpleTestCase, TestCase, override_settings
from django.utils import timezone
from django_q.models import Schedule

from apps.reports.tasks import send_weekly_team_summaries, send_weekly_team_summary

from tests.helpers import make_project, make_task, make_user


@override_settings(DEFAULT_FROM_EMAIL='reports@example.com')
class WeeklyTeamSummaryTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.owner = make_user('owner@example.com')
        cls.busy = make_project(cls.owner, name='Busy')
        cls.quiet = make_project(cls.owner, name='Quiet')

    def _last_week(self, days_after_start=1):
        week_start = timezone.localdate() - timedelta(days=7)
        day = week_start + timedelta(days=days_after_start)
        return week_start, timezone.make_aware(datetime.combine(day, time(10, 0)))

    def test_sends_workbook_to_project_owner(self):
        week_start, created = self._last_week()
        make_task(self.busy, self.owner, 'Done last week', status='Completed', created_at=created)

        sent = send_weekly_team_summaries()

        self.assertEqual(sent, 1)
        self.assertEqual(len(mail.outbox), 1)
        message = mail.outbox[0]
        self.assertEqual(message.to, ['owner@example.com'])
        self.assertEqual(message.from_email, 'reports@example.com')
        self.assertEqual(message.subject, 'Weekly Team Summary: Busy')
        self.assertIn('Total tasks: 1', message.body)
        filename, content, mimetype = message.attachments[0]
        self.assertEqual(filename, f'team-summary-report-{self.busy.pk}-{week_start.isoformat()}.xlsx')
        self.assertTrue(content.startswith(b'PK'))

    def test_failed_send_does_not_stop_other_projects(self):
        _, created = self._last_week()
        other_owner = make_user('other@example.com')
        other = make_project(other_owner, name='Other')
        make_task(self.busy, self.owner, 'Busy task', status='Completed', created_at=created)
        make_task(other, other_owner, 'Other task', status='In Progress', created_at=created)

        real_send = EmailMessage.send

        def send(message, *args, **kwargs):
            if message.to == ['owner@example.com']:
                raise SMTPException('Connection refused')
            return real_send(message, *args, **kwargs)

        with mock.patch.object(EmailMessage, 'send', autospec=True, side_effect=send):
            with self.assertLogs('apps.reports.tasks', level='ERROR'):
                sent = send_weekly_team_summaries()

        self.assertEqual(sent, 1)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ['other@example.com'])

    def test_projects_without_tasks_are_skipped(self):
        self.assertEqual(send_weekly_team_summaries(), 0)
        self.assertEqual(mail.outbox, [])

    def test_single_project_returns_false_when_empty(self):
        self.assertFalse(send_weekly_team_summary(self.quiet, date(2024, 1, 1)))


class SetupSchedulesCommandTests(TestCase):

    def test_creates_weekly_schedule_idempotently(self):
        call_command('setup_schedules', stdout=StringIO())
        call_command('setup_schedules', stdout=StringIO())

        schedule = Schedule.objects.get(name='Weekly Team Summary Email')
        self.assertEqual(schedule.func, 'apps.reports.tasks.send_weekly_team_summaries')
        self.assertEqual(schedule.schedule_type, Schedule.CRON)
        self.assertEqual(schedule.cron, '0 8 * * 1')
        self.assertEqual(Schedule.objects.filter(name='Weekly Team Summary Email').count(), 1)


class QueueSettingsTests(SimpleTestCase):

    def test_retry_outlasts_task_timeout(self):
        cluster = settings.Q_CLUSTER
        self.assertGreater(cluster['retry'], cluster['timeout'])
