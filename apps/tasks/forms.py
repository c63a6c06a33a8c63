"""
Forms for tasks app.

Includes:
- TaskAdminForm: Admin create/edit form enforcing the assignee limit
"""

from django import forms

from .models import Task
from .validators import validate_assignee_count


class TaskAdminForm(forms.ModelForm):
    """
    Admin form for tasks.

    The assignee set is saved after model validation runs, so the
    limit is checked here against the submitted selection.
    """

    class Meta:
        model = Task
        fields = '__all__'

    def clean_assignees(self):
        assignees = self.cleaned_data.get('assignees')
        if assignees is not None:
            validate_assignee_count(list(assignees))
        return assignees
