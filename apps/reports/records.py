"""
Normalized report records.

Tasks and subtasks are stored with different shapes (a task has up to
five assignees, a subtask a single optional one). Report code never
looks at the models directly: every fetched row is mapped into a
ReportRecord first, so the grouping and rendering code handles both
kinds identically.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

NOT_SET = 'Not set'


@dataclass(frozen=True)
class Member:
    """A user as seen by the reports: identity, department and roles."""

    id: str
    username: str
    department: Optional[str] = None
    roles: tuple = ()

    @classmethod
    def from_user(cls, user):
        return cls(
            id=str(user.pk),
            username=user.email,
            department=user.department or None,
            roles=tuple(user.roles or ()),
        )

    @property
    def role(self):
        return self.roles[0] if self.roles else NOT_SET

    @property
    def department_display(self):
        return self.department or NOT_SET

    def describe(self):
        """'user@example.com (it, manager)' as shown in team summaries."""
        return f"{self.username} ({self.department_display}, {self.role})"


@dataclass(frozen=True)
class ProjectRef:
    id: str
    name: str

    @classmethod
    def from_project(cls, project):
        return cls(id=str(project.pk), name=project.name)


@dataclass(frozen=True)
class ReportRecord:
    """One task or subtask, flattened for reporting."""

    id: str
    title: str
    status: str
    created_at: datetime
    due_date: Optional[datetime] = None
    priority: Optional[int] = None
    tags: str = ''
    description: str = ''
    owner: Optional[Member] = None
    assignees: tuple = ()
    project: Optional[ProjectRef] = None
    time_taken: int = 0
    kind: str = 'task'

    def involves(self, member_id):
        """True if the member owns the record or is one of its assignees."""
        if self.owner is not None and self.owner.id == member_id:
            return True
        return any(assignee.id == member_id for assignee in self.assignees)


def _member(user):
    return Member.from_user(user) if user is not None else None


def coerce_assignees(value):
    """
    Turn whatever the store handed back for "assignee" into a list of Members.

    Accepts None, a single user, a list/tuple of users, or a related
    manager (``task.assignees``). Missing entries are dropped.
    """
    if value is None:
        return []
    if hasattr(value, 'all'):
        users = list(value.all())
    elif isinstance(value, (list, tuple, set)):
        users = list(value)
    else:
        users = [value]
    return [Member.from_user(user) for user in users if user is not None]


def normalize_task(task):
    return ReportRecord(
        id=str(task.pk),
        title=task.title,
        status=task.status,
        created_at=task.created_at,
        due_date=task.due_date,
        priority=task.priority,
        tags=task.tags,
        description=task.description,
        owner=_member(task.owner),
        assignees=tuple(coerce_assignees(task.assignees)),
        project=ProjectRef.from_project(task.project) if task.project_id else None,
        time_taken=task.time_taken or 0,
        kind='task',
    )


def normalize_subtask(subtask, project=None):
    """
    Map a subtask onto the task-shaped record.

    ``project`` is an already-loaded project to use instead of following
    the subtask's own foreign key, for callers that fetched by project.
    """
    if project is None and subtask.project_id:
        project = subtask.project
    return ReportRecord(
        id=str(subtask.pk),
        title=subtask.title,
        status=subtask.status,
        created_at=subtask.created_at,
        due_date=subtask.due_date,
        priority=subtask.priority,
        tags=subtask.tags,
        description=subtask.description,
        owner=_member(subtask.owner),
        assignees=tuple(coerce_assignees(subtask.assignee)),
        project=ProjectRef.from_project(project) if project is not None else None,
        time_taken=subtask.time_taken or 0,
        kind='subtask',
    )


def normalize_all(tasks, subtasks, project=None):
    """Tasks first, then subtasks, each in fetch order."""
    records = [normalize_task(task) for task in tasks]
    records.extend(normalize_subtask(subtask, project=project) for subtask in subtasks)
    return records
