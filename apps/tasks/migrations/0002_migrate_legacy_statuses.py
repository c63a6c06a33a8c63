from django.db import migrations

from apps.tasks.validators import migrate_legacy_statuses


def forwards(apps, schema_editor):
    migrate_legacy_statuses(
        apps.get_model('tasks', 'Task'),
        apps.get_model('tasks', 'Subtask'),
    )


class Migration(migrations.Migration):

    dependencies = [
        ('tasks', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(forwards, migrations.RunPython.noop),
    ]
