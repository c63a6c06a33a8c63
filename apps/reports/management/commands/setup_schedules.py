"""
Management command to set up Django-Q2 schedules for report jobs.

This command creates/updates the scheduled tasks required for:
- Weekly team summary emails (Mondays at 8:00 AM)

Usage:
    python manage.py setup_schedules

The command is idempotent - safe to run multiple times.
Existing schedules will be updated if their configuration changes.
"""
from django.core.management.base import BaseCommand
from django_q.models import Schedule

SCHEDULES = (
    # (name, func, cron, description)
    (
        'Weekly Team Summary Email',
        'apps.reports.tasks.send_weekly_team_summaries',
        '0 8 * * 1',
        'weekly on Monday at 8:00 AM',
    ),
)


class Command(BaseCommand):
    help = 'Set up Django-Q2 schedules for report jobs'

    def handle(self, *args, **options):
        self.stdout.write('\nSetting up Django-Q2 schedules...\n')

        schedules_created = 0
        schedules_updated = 0

        for name, func, cron, description in SCHEDULES:
            _, created = Schedule.objects.update_or_create(
                name=name,
                defaults={
                    'func': func,
                    'schedule_type': Schedule.CRON,
                    'cron': cron,
                    'repeats': -1,  # Run forever
                },
            )
            if created:
                schedules_created += 1
                self.stdout.write(
                    self.style.SUCCESS(f'✓ Created schedule: {name} ({description})')
                )
            else:
                schedules_updated += 1
                self.stdout.write(
                    self.style.WARNING(f'↻ Updated schedule: {name} ({description})')
                )

        self.stdout.write('')
        self.stdout.write(
            self.style.SUCCESS(
                f'Done! {schedules_created} schedule(s) created, '
                f'{schedules_updated} schedule(s) updated.'
            )
        )
        self.stdout.write('')
        self.stdout.write(
            self.style.NOTICE(
                'Note: Ensure Django-Q cluster is running: python manage.py qcluster'
            )
        )
        self.stdout.write('')
