"""
Tests for report request parameter forms.
"""

from datetime import date, time

from django.test import SimpleTestCase, override_settings

from apps.reports.forms import (
    LoggedTimeReportForm, TaskCompletionReportForm, TeamSummaryReportForm, first_error,
)


@override_settings(TIME_ZONE='UTC')
class TaskCompletionReportFormTests(SimpleTestCase):

    def test_valid_range_widened_to_full_days(self):
        form = TaskCompletionReportForm({
            'start_date': '2024-01-01', 'end_date': '2024-01-31', 'format': 'PDF',
        })
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['format'], 'pdf')
        self.assertEqual(form.cleaned_data['start'].time(), time.min)
        self.assertEqual(form.cleaned_data['end'].date(), date(2024, 1, 31))
        self.assertEqual(form.cleaned_data['end'].time(), time.max)

    def test_same_day_range_allowed(self):
        form = TaskCompletionReportForm({
            'start_date': '2024-01-01', 'end_date': '2024-01-01', 'format': 'excel',
        })
        self.assertTrue(form.is_valid(), form.errors)

    def test_start_after_end(self):
        form = TaskCompletionReportForm({
            'start_date': '2024-02-01', 'end_date': '2024-01-01', 'format': 'excel',
        })
        self.assertFalse(form.is_valid())
        self.assertEqual(first_error(form), 'Start date cannot be after end date')

    def test_missing_parameters(self):
        form = TaskCompletionReportForm({'format': 'pdf'})
        self.assertFalse(form.is_valid())
        self.assertIn('start_date', form.errors)
        self.assertIn('end_date', form.errors)

    def test_invalid_format(self):
        form = TaskCompletionReportForm({
            'start_date': '2024-01-01', 'end_date': '2024-01-31', 'format': 'csv',
        })
        self.assertFalse(form.is_valid())
        self.assertIn('Invalid format', first_error(form))


class TeamSummaryReportFormTests(SimpleTestCase):

    def test_timeframe_is_case_insensitive(self):
        form = TeamSummaryReportForm({'timeframe': 'Week', 'start_date': '2024-01-10', 'format': 'excel'})
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['timeframe'], 'week')

    def test_invalid_timeframe(self):
        form = TeamSummaryReportForm({'timeframe': 'year', 'start_date': '2024-01-10', 'format': 'pdf'})
        self.assertFalse(form.is_valid())
        self.assertIn('Invalid timeframe', first_error(form))


class LoggedTimeReportFormTests(SimpleTestCase):

    def test_format_required(self):
        form = LoggedTimeReportForm({})
        self.assertFalse(form.is_valid())
        self.assertEqual(first_error(form), 'Format is required.')

    def test_valid(self):
        form = LoggedTimeReportForm({'format': ' Excel '})
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['format'], 'excel')
