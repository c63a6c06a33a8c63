"""
Tests for task/subtask input validation and the legacy status mapping.
"""

from django.core.exceptions import ValidationError
from django.test import SimpleTestCase, TestCase

from apps.accounts.models import User
from apps.tasks.forms import TaskAdminForm
from apps.tasks.models import Task, Subtask
from apps.tasks.validators import (
    canonical_status, migrate_legacy_statuses, validate_assignee_count,
    validate_priority, validate_time_taken,
)

from tests.helpers import make_project, make_subtask, make_task, make_user


class ValidatorTests(SimpleTestCase):

    def test_canonical_status(self):
        self.assertEqual(canonical_status('In Progress'), 'In Progress')
        self.assertEqual(canonical_status(' Done '), 'Completed')
        with self.assertRaises(ValidationError):
            canonical_status('Archived')

    def test_priority_bounds(self):
        validate_priority(1)
        validate_priority(10)
        for value in (0, 11, None):
            with self.subTest(value=value), self.assertRaises(ValidationError):
                validate_priority(value)

    def test_time_taken(self):
        validate_time_taken(0)
        for value in (-1, 1.5, True, '10'):
            with self.subTest(value=value), self.assertRaises(ValidationError):
                validate_time_taken(value)

    def test_assignee_limit(self):
        validate_assignee_count(range(5))
        with self.assertRaises(ValidationError):
            validate_assignee_count(range(6))


class TaskModelTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.owner = make_user('owner@example.com')
        cls.project = make_project(cls.owner)

    def test_full_clean_maps_legacy_status(self):
        task = Task(project=self.project, owner=self.owner, title='Old', status='Done')
        task.full_clean()
        self.assertEqual(task.status, Task.Status.COMPLETED)

    def test_full_clean_maps_legacy_subtask_status(self):
        parent = make_task(self.project, self.owner, 'Parent')
        subtask = Subtask(
            parent_task=parent, project=self.project, owner=self.owner,
            title='Old sub', status=' Done ',
        )
        subtask.full_clean()
        self.assertEqual(subtask.status, Subtask.Status.COMPLETED)

    def test_full_clean_rejects_unknown_status(self):
        task = Task(project=self.project, owner=self.owner, title='Odd', status='Archived')
        with self.assertRaises(ValidationError) as ctx:
            task.full_clean()
        self.assertIn('status', ctx.exception.message_dict)

    def test_clean_rejects_too_many_assignees(self):
        task = make_task(self.project, self.owner, 'Crowded')
        task.assignees.set([make_user(f'user{i}@example.com') for i in range(6)])
        with self.assertRaises(ValidationError):
            task.full_clean()

    def test_subtask_must_share_parent_project(self):
        parent = make_task(self.project, self.owner, 'Parent')
        other = make_project(self.owner, name='Other')
        subtask = Subtask(parent_task=parent, project=other, owner=self.owner, title='Stray')
        with self.assertRaises(ValidationError):
            subtask.full_clean()

    def test_archive(self):
        task = make_task(self.project, self.owner, 'Finished')
        task.archive()
        task.refresh_from_db()
        self.assertTrue(task.archived)
        self.assertIsNotNone(task.archived_at)

    def test_migrate_legacy_statuses(self):
        parent = make_task(self.project, self.owner, 'Legacy', status='Done')
        make_subtask(parent, self.owner, 'Legacy sub', status='Done')
        make_task(self.project, self.owner, 'Current', status='In Progress')

        self.assertEqual(migrate_legacy_statuses(Task, Subtask), 2)
        self.assertFalse(Task.objects.filter(status='Done').exists())
        self.assertEqual(Subtask.objects.get(title='Legacy sub').status, 'Completed')
        self.assertEqual(migrate_legacy_statuses(Task, Subtask), 0)


class TaskAdminFormTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.owner = make_user('owner@example.com')
        cls.project = make_project(cls.owner)
        cls.users = [make_user(f'member{i}@example.com') for i in range(6)]

    def _data(self, assignees):
        return {
            'title': 'Staffed',
            'status': Task.Status.TO_DO,
            'priority': 5,
            'owner': self.owner.pk,
            'project': self.project.pk,
            'assignees': [user.pk for user in assignees],
            'time_taken': 0,
            'created_at': '2024-01-10 09:00:00',
        }

    def test_accepts_five_assignees(self):
        form = TaskAdminForm(data=self._data(self.users[:5]))
        self.assertTrue(form.is_valid(), form.errors)
        task = form.save()
        self.assertEqual(task.assignees.count(), 5)

    def test_rejects_six_assignees(self):
        form = TaskAdminForm(data=self._data(self.users))
        self.assertFalse(form.is_valid())
        self.assertIn('assignees', form.errors)
        self.assertFalse(Task.objects.filter(title='Staffed').exists())


class UserModelTests(TestCase):

    def test_report_permissions_by_role(self):
        admin = make_user('a@example.com', roles=[User.Role.ADMIN])
        manager = make_user('m@example.com', roles=[User.Role.MANAGER])
        staff = make_user('s@example.com', roles=[User.Role.STAFF])

        self.assertTrue(admin.can_view_reports())
        self.assertTrue(admin.can_view_logged_time_reports())
        self.assertTrue(manager.can_view_reports())
        self.assertFalse(manager.can_view_logged_time_reports())
        self.assertFalse(staff.can_view_reports())

    def test_primary_role(self):
        user = make_user('multi@example.com', roles=[User.Role.MANAGER, User.Role.STAFF])
        self.assertEqual(user.primary_role, 'manager')

    def test_superuser_defaults(self):
        user = User.objects.create_superuser('root@example.com', 'Str0ng!Passw0rd')
        self.assertTrue(user.is_admin())
        self.assertEqual(user.department, User.Department.MANAGING_DIRECTOR)

    def test_clean_rejects_unknown_role(self):
        user = User(email='x@example.com', department='it', roles=['owner'])
        with self.assertRaises(ValidationError):
            user.clean()
