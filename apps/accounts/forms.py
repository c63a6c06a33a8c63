"""
Forms for accounts app.

Admin forms for creating and editing users:
- AdminUserCreationForm: email, department, roles and initial password
- AdminUserChangeForm: edit an existing user
"""

from django import forms
from django.contrib.auth.forms import UserChangeForm, UserCreationForm
from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _

from .models import User


def clean_roles_value(roles):
    """Roles must be a non-empty list of known role codes."""
    valid_roles = set(User.Role.values)
    if not isinstance(roles, list) or not roles:
        raise ValidationError(_('At least one role is required.'), code='roles_required')
    unknown = [role for role in roles if role not in valid_roles]
    if unknown:
        raise ValidationError(
            _('Unknown role(s): %(roles)s'),
            code='invalid_role',
            params={'roles': ', '.join(map(str, unknown))},
        )
    return roles


class AdminUserCreationForm(UserCreationForm):
    """Form for admin to create new users."""

    class Meta:
        model = User
        fields = ('email', 'first_name', 'last_name', 'roles', 'department')

    def clean_email(self):
        return self.cleaned_data.get('email', '').lower().strip()

    def clean_roles(self):
        return clean_roles_value(self.cleaned_data.get('roles'))


class AdminUserChangeForm(UserChangeForm):
    """Form for admin to edit existing users."""

    class Meta:
        model = User
        fields = ('email', 'first_name', 'last_name', 'roles', 'department')

    def clean_roles(self):
        return clean_roles_value(self.cleaned_data.get('roles'))
