"""
Forms for reports app.

Validate the query parameters of report download requests:
- TaskCompletionReportForm: start_date, end_date, format
- TeamSummaryReportForm: timeframe, start_date, format
- LoggedTimeReportForm: format

Choice parameters are matched case-insensitively. Cleaned date ranges
are aware datetimes in the current time zone, with the end date widened
to the last instant of that day.
"""

from datetime import datetime, time

from django import forms
from django.core.exceptions import ValidationError
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

FORMAT_PDF = 'pdf'
FORMAT_EXCEL = 'excel'
FORMATS = (FORMAT_PDF, FORMAT_EXCEL)

TIMEFRAMES = ('week', 'month')


def start_of_day(day):
    return timezone.make_aware(datetime.combine(day, time.min))


def end_of_day(day):
    return timezone.make_aware(datetime.combine(day, time.max))


class ReportFormatMixin:
    """Case-insensitive 'format' parameter: pdf or excel."""

    def clean_format(self):
        value = self.cleaned_data.get('format', '').strip().lower()
        if value not in FORMATS:
            raise ValidationError(
                _('Invalid format. Must be either "pdf" or "excel".'),
                code='invalid_format',
            )
        return value


class TaskCompletionReportForm(ReportFormatMixin, forms.Form):
    """Parameters for project and user task completion reports."""

    start_date = forms.DateField(error_messages={'required': _('Start date is required.')})
    end_date = forms.DateField(error_messages={'required': _('End date is required.')})
    format = forms.CharField(error_messages={'required': _('Format is required.')})

    def clean(self):
        cleaned_data = super().clean()
        start_date = cleaned_data.get('start_date')
        end_date = cleaned_data.get('end_date')

        if start_date and end_date:
            if start_date > end_date:
                raise ValidationError(
                    _('Start date cannot be after end date'),
                    code='invalid_range',
                )
            cleaned_data['start'] = start_of_day(start_date)
            cleaned_data['end'] = end_of_day(end_date)

        return cleaned_data


class TeamSummaryReportForm(ReportFormatMixin, forms.Form):
    """Parameters for the team summary report."""

    timeframe = forms.CharField(error_messages={'required': _('Timeframe is required.')})
    start_date = forms.DateField(error_messages={'required': _('Start date is required.')})
    format = forms.CharField(error_messages={'required': _('Format is required.')})

    def clean_timeframe(self):
        value = self.cleaned_data.get('timeframe', '').strip().lower()
        if value not in TIMEFRAMES:
            raise ValidationError(
                _('Invalid timeframe. Must be either "week" or "month".'),
                code='invalid_timeframe',
            )
        return value


class LoggedTimeReportForm(ReportFormatMixin, forms.Form):
    """Parameters for project and department logged time reports."""

    format = forms.CharField(error_messages={'required': _('Format is required.')})


def first_error(form):
    """First validation message of a bound, invalid form."""
    for errors in form.errors.values():
        if errors:
            return str(errors[0])
    return str(_('Invalid parameters.'))
