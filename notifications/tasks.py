"""
Scheduled jobs for the notifications app, run by the Django-Q2 cluster.

- Daily notification check (00:00)
- Old read notification cleanup (00:30)

See ``manage.py setup_schedules``.
"""
from . import engine


def run_daily_notification_check():
    """Birthday and salary-review notifications plus automatic raises."""
    return engine.run_daily_check()


def cleanup_read_notifications():
    """Remove read notifications past the retention period."""
    return engine.delete_old_read_notifications()
