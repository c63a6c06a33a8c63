"""
Task management models.

Models:
- Task: Work item inside a project, with up to five assignees and logged time
- Subtask: Child of a task; same fields, but a single optional assignee
"""

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from .validators import (
    canonical_status, map_legacy_status, validate_priority, validate_time_taken,
    validate_assignee_count,
)


class Task(models.Model):
    """
    Main Task model.

    Status workflow: To Do → In Progress → Completed, with Blocked
    reachable from any open state. Logged time is stored in minutes.
    """

    class Status(models.TextChoices):
        TO_DO = 'To Do', 'To Do'
        IN_PROGRESS = 'In Progress', 'In Progress'
        BLOCKED = 'Blocked', 'Blocked'
        COMPLETED = 'Completed', 'Completed'

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.TO_DO,
        db_index=True,
    )
    priority = models.PositiveSmallIntegerField(
        default=5,
        validators=[validate_priority],
        help_text='1 (lowest) to 10 (highest)'
    )
    tags = models.CharField(max_length=255, blank=True, default='')

    # Relationships
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='owned_tasks',
    )
    assignees = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name='assigned_tasks',
        help_text='Up to five users'
    )
    project = models.ForeignKey(
        'projects.Project',
        on_delete=models.CASCADE,
        related_name='tasks',
    )

    due_date = models.DateTimeField(null=True, blank=True, db_index=True)
    time_taken = models.PositiveIntegerField(
        default=0,
        validators=[validate_time_taken],
        help_text='Logged time in minutes'
    )

    archived = models.BooleanField(default=False, db_index=True)
    archived_at = models.DateTimeField(null=True, blank=True)

    # Timestamps
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'task'
        verbose_name_plural = 'tasks'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['project', 'created_at']),
            models.Index(fields=['owner', 'created_at']),
            models.Index(fields=['status', 'archived']),
        ]

    def __str__(self):
        return self.title

    def clean_fields(self, exclude=None):
        # Legacy values must be mapped before the choices check rejects them.
        self.status = map_legacy_status(self.status)
        super().clean_fields(exclude=exclude)

    def clean(self):
        if not self.title or not self.title.strip():
            raise ValidationError({'title': 'Title must be a non-empty string.'})
        self.status = canonical_status(self.status)
        if self.pk:
            validate_assignee_count(list(self.assignees.all()))

    def archive(self):
        """Archive the task; archived tasks drop out of logged-time reports."""
        self.archived = True
        self.archived_at = timezone.now()
        self.save(update_fields=['archived', 'archived_at', 'updated_at'])


class Subtask(models.Model):
    """
    Subtask of a Task.

    Always belongs to one parent task and one project. Unlike tasks, a
    subtask has at most one assignee.
    """

    Status = Task.Status

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    parent_task = models.ForeignKey(
        Task,
        on_delete=models.CASCADE,
        related_name='subtasks',
    )
    project = models.ForeignKey(
        'projects.Project',
        on_delete=models.CASCADE,
        related_name='subtasks',
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.TO_DO,
        db_index=True,
    )
    priority = models.PositiveSmallIntegerField(
        default=5,
        validators=[validate_priority],
    )
    tags = models.CharField(max_length=255, blank=True, default='')
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='owned_subtasks',
    )
    assignee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assigned_subtasks',
    )
    due_date = models.DateTimeField(null=True, blank=True)
    time_taken = models.PositiveIntegerField(
        default=0,
        validators=[validate_time_taken],
    )
    archived = models.BooleanField(default=False, db_index=True)
    archived_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'subtask'
        verbose_name_plural = 'subtasks'
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['project', 'created_at']),
            models.Index(fields=['parent_task']),
        ]

    def __str__(self):
        return f"{self.title} (subtask of {self.parent_task_id})"

    def clean_fields(self, exclude=None):
        self.status = map_legacy_status(self.status)
        super().clean_fields(exclude=exclude)

    def clean(self):
        if not self.title or not self.title.strip():
            raise ValidationError({'title': 'Subtask title is required.'})
        self.status = canonical_status(self.status)
        if self.parent_task_id and self.project_id and self.parent_task.project_id != self.project_id:
            raise ValidationError({'project': 'Subtask must belong to the same project as its parent task.'})

    def archive(self):
        self.archived = True
        self.archived_at = timezone.now()
        self.save(update_fields=['archived', 'archived_at', 'updated_at'])
