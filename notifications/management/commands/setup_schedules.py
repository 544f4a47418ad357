"""
Management command that registers the Django-Q2 schedules for the
notification engine.

- Daily notification check  → 00:00 every day
- Read notification cleanup → 00:30 every day

Usage:
    python manage.py setup_schedules

The command is idempotent; existing schedules are updated in place.
"""
from django.core.management.base import BaseCommand
from django_q.models import Schedule

SCHEDULES = [
    {
        "name": "Daily Notification Check",
        "func": "notifications.tasks.run_daily_notification_check",
        "cron": "0 0 * * *",
    },
    {
        "name": "Cleanup Read Notifications",
        "func": "notifications.tasks.cleanup_read_notifications",
        "cron": "30 0 * * *",
    },
]


class Command(BaseCommand):
    help = "Set up Django-Q2 schedules for the notification engine"

    def handle(self, *args, **options):
        self.stdout.write("\nSetting up Django-Q2 schedules...\n")

        created_count = 0
        for entry in SCHEDULES:
            _, created = Schedule.objects.update_or_create(
                name=entry["name"],
                defaults={
                    "func": entry["func"],
                    "schedule_type": Schedule.CRON,
                    "cron": entry["cron"],
                    "repeats": -1,
                },
            )
            if created:
                created_count += 1
                self.stdout.write(self.style.SUCCESS(f"✓ Created schedule: {entry['name']} ({entry['cron']})"))
            else:
                self.stdout.write(self.style.WARNING(f"↻ Updated schedule: {entry['name']} ({entry['cron']})"))

        self.stdout.write(
            self.style.SUCCESS(
                f"\nDone! {created_count} created, {len(SCHEDULES) - created_count} updated."
            )
        )
        self.stdout.write(
            self.style.NOTICE("Note: Ensure the Django-Q cluster is running: python manage.py qcluster\n")
        )
