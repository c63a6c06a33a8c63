import apps.tasks.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


STATUS_CHOICES = [
    ('To Do', 'To Do'),
    ('In Progress', 'In Progress'),
    ('Blocked', 'Blocked'),
    ('Completed', 'Completed'),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('projects', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Task',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, default='')),
                ('status', models.CharField(choices=STATUS_CHOICES, db_index=True, default='To Do', max_length=20)),
                ('priority', models.PositiveSmallIntegerField(default=5, help_text='1 (lowest) to 10 (highest)', validators=[apps.tasks.validators.validate_priority])),
                ('tags', models.CharField(blank=True, default='', max_length=255)),
                ('due_date', models.DateTimeField(blank=True, db_index=True, null=True)),
                ('time_taken', models.PositiveIntegerField(default=0, help_text='Logged time in minutes', validators=[apps.tasks.validators.validate_time_taken])),
                ('archived', models.BooleanField(db_index=True, default=False)),
                ('archived_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='owned_tasks', to=settings.AUTH_USER_MODEL)),
                ('assignees', models.ManyToManyField(blank=True, help_text='Up to five users', related_name='assigned_tasks', to=settings.AUTH_USER_MODEL)),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tasks', to='projects.project')),
            ],
            options={
                'verbose_name': 'task',
                'verbose_name_plural': 'tasks',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['project', 'created_at'], name='tasks_task_project_8a1c2e_idx'),
                    models.Index(fields=['owner', 'created_at'], name='tasks_task_owner_i_3f6b0d_idx'),
                    models.Index(fields=['status', 'archived'], name='tasks_task_status_c7e91a_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Subtask',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, default='')),
                ('status', models.CharField(choices=STATUS_CHOICES, db_index=True, default='To Do', max_length=20)),
                ('priority', models.PositiveSmallIntegerField(default=5, validators=[apps.tasks.validators.validate_priority])),
                ('tags', models.CharField(blank=True, default='', max_length=255)),
                ('due_date', models.DateTimeField(blank=True, null=True)),
                ('time_taken', models.PositiveIntegerField(default=0, validators=[apps.tasks.validators.validate_time_taken])),
                ('archived', models.BooleanField(db_index=True, default=False)),
                ('archived_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('parent_task', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='subtasks', to='tasks.task')),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='subtasks', to='projects.project')),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='owned_subtasks', to=settings.AUTH_USER_MODEL)),
                ('assignee', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='assigned_subtasks', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'subtask',
                'verbose_name_plural': 'subtasks',
                'ordering': ['created_at'],
                'indexes': [
                    models.Index(fields=['project', 'created_at'], name='tasks_subta_project_4d2e8b_idx'),
                    models.Index(fields=['parent_task'], name='tasks_subta_parent__9b7f1c_idx'),
                ],
            },
        ),
    ]
