"""
Shared builders for report tests.
"""

from datetime import datetime

from django.utils import timezone

from apps.accounts.models import User
from apps.projects.models import Project
from apps.tasks.models import Task, Subtask

PASSWORD = 'Str0ng!Passw0rd'


def aware(year, month, day, hour=12, minute=0):
    return timezone.make_aware(datetime(year, month, day, hour, minute))


def make_user(email, department=User.Department.IT, roles=(User.Role.STAFF,), **extra):
    return User.objects.create_user(
        email=email,
        password=PASSWORD,
        department=department,
        roles=list(roles),
        **extra,
    )


def make_project(owner, name='Apollo', members=()):
    project = Project.objects.create(name=name, owner=owner)
    if members:
        project.members.set(members)
    return project


def make_task(project, owner, title, status=Task.Status.TO_DO, created_at=None,
              assignees=(), **fields):
    task = Task.objects.create(
        project=project,
        owner=owner,
        title=title,
        status=status,
        created_at=created_at or timezone.now(),
        **fields,
    )
    if assignees:
        task.assignees.set(assignees)
    return task


def make_subtask(task, owner, title, status=Task.Status.TO_DO, created_at=None,
                 assignee=None, **fields):
    return Subtask.objects.create(
        parent_task=task,
        project=task.project,
        owner=owner,
        assignee=assignee,
        title=title,
        status=status,
        created_at=created_at or timezone.now(),
        **fields,
    )
