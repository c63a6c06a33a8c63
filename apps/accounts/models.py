"""
Custom User model for the project tracker.

CRITICAL: This file must be created and AUTH_USER_MODEL set before running
any migrations. Changing the User model after migrations is very complex.

The email address is the login identifier and is what reports display as
the user's "username".
"""

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.core.exceptions import ValidationError
from django.db import models


class UserManager(BaseUserManager):
    """
    Custom user manager where email is the unique identifier
    for authentication instead of username.
    """

    def create_user(self, email, password=None, **extra_fields):
        """Create and save a regular user with the given email and password."""
        if not email:
            raise ValueError('The Email field must be set')

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """Create and save a SuperUser with the given email and password."""
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('roles', [User.Role.ADMIN])
        extra_fields.setdefault('department', User.Department.MANAGING_DIRECTOR)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self.create_user(email, password, **extra_fields)


class User(AbstractUser):
    """
    Custom User model with email authentication and role-based access.

    Roles (a user may hold several, the first one is the primary role):
    - Admin: Full access, including logged-time reports
    - Manager: Task-completion and team-summary reports
    - Staff: Works on tasks, no report access
    """

    class Role(models.TextChoices):
        ADMIN = 'admin', 'Admin'
        MANAGER = 'manager', 'Manager'
        STAFF = 'staff', 'Staff'

    class Department(models.TextChoices):
        HR = 'hr', 'HR'
        IT = 'it', 'IT'
        SALES = 'sales', 'Sales'
        CONSULTANCY = 'consultancy', 'Consultancy'
        SYSTEMS = 'systems', 'Systems'
        ENGINEERING = 'engineering', 'Engineering'
        FINANCE = 'finance', 'Finance'
        MANAGING_DIRECTOR = 'managing director', 'Managing Director'

    # Remove username field, use email instead
    username = None
    email = models.EmailField(
        'email address',
        unique=True,
        error_messages={
            'unique': 'A user with that email already exists.',
        },
    )

    roles = models.JSONField(
        default=list,
        blank=True,
        help_text='List of role codes; the first entry is the primary role.',
    )
    department = models.CharField(
        max_length=30,
        choices=Department.choices,
        db_index=True,
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['department']

    class Meta:
        verbose_name = 'user'
        verbose_name_plural = 'users'
        ordering = ['email']
        indexes = [
            models.Index(fields=['email']),
            models.Index(fields=['department']),
        ]

    def __str__(self):
        return self.email

    def clean(self):
        super().clean()
        valid_roles = set(self.Role.values)
        if not self.roles or any(role not in valid_roles for role in self.roles):
            raise ValidationError({
                'roles': f'Roles must be a non-empty list drawn from: {", ".join(self.Role.values)}.'
            })

    @property
    def primary_role(self):
        """Return the first role, or None when no role is set."""
        return self.roles[0] if self.roles else None

    # ==========================================================================
    # Role Permission Methods
    # ==========================================================================

    def has_role(self, *roles):
        """Check if user holds any of the given roles."""
        return any(role in (self.roles or []) for role in roles)

    def is_admin(self):
        """Check if user is an Admin."""
        return self.has_role(self.Role.ADMIN)

    def is_manager(self):
        """Check if user is a Manager."""
        return self.has_role(self.Role.MANAGER)

    def can_view_reports(self):
        """Admins and managers can generate task and team reports."""
        return self.has_role(self.Role.ADMIN, self.Role.MANAGER)

    def can_view_logged_time_reports(self):
        """Logged-time reports are admin only."""
        return self.is_admin()
