"""
Project model.

A project groups tasks and subtasks. Every task belongs to exactly one
project; reports are scoped by project, user or department.
"""

from django.conf import settings
from django.db import models


class Project(models.Model):
    """
    A project owned by one user with any number of members.
    """

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='owned_projects',
    )
    members = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name='projects',
    )
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'project'
        verbose_name_plural = 'projects'
        ordering = ['name']

    def __str__(self):
        return self.name

    def clean(self):
        from django.core.exceptions import ValidationError

        if not self.name or not self.name.strip():
            raise ValidationError({'name': 'Project name is required.'})
