"""
Run the nightly notification check once, outside the scheduler.

Usage:
    python manage.py run_notification_check
    python manage.py run_notification_check --date 2025-03-01 --cleanup
"""
from datetime import date

from django.core.management.base import BaseCommand, CommandError

from notifications import engine


class Command(BaseCommand):
    help = "Run the birthday / salary-review notification check once"

    def add_arguments(self, parser):
        parser.add_argument("--date", default=None, help="Treat this day (YYYY-MM-DD) as today")
        parser.add_argument(
            "--cleanup",
            action="store_true",
            help="Also delete old read notifications",
        )

    def handle(self, *args, **options):
        today = None
        if options["date"]:
            try:
                today = date.fromisoformat(options["date"])
            except ValueError:
                raise CommandError(f"Invalid --date value: {options['date']}")

        summary = engine.run_daily_check(today)
        self.stdout.write(
            self.style.SUCCESS(
                f"Checked {summary['users_checked']} users on {summary['date']}: "
                f"{summary['notifications_created']} notifications, "
                f"{summary['raises_applied']} raises, {summary['errors']} errors"
            )
        )

        if options["cleanup"]:
            deleted = engine.delete_old_read_notifications(today)
            self.stdout.write(self.style.SUCCESS(f"Deleted {deleted} old read notifications"))
