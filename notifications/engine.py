# ===========================================================
# notifications/engine.py
# ===========================================================
"""
Nightly notification engine.

Every night each active user is checked for two date-driven events:

* Birthdays: admins get a reminder 30 days ahead and a notice on the day.
* Salary reviews: six months after the last raise (or the hire date)
  admins get a reminder 30 days ahead. Once the review date is reached
  and the salary is below the ceiling, the salary is raised by a fixed
  step under a row lock and admins are told about it.

A separate sweep removes read notifications once they are older than
the retention period.

All thresholds come from ``settings.NOTIFICATION_ENGINE``.
"""
from datetime import datetime
from decimal import Decimal

from dateutil.relativedelta import relativedelta
from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction
from django.db.models import Q
from django.utils import timezone
import logging

from .models import Notification

logger = logging.getLogger(__name__)
User = get_user_model()

DEFAULTS = {
    "REMINDER_DAYS": 30,
    "SALARY_REVIEW_MONTHS": 6,
    "SALARY_CEILING": 1500,
    "SALARY_STEP": 200,
    "SALARY_THRESHOLD": 1400,
    "RETRIES": 3,
    "READ_RETENTION_MONTHS": 6,
}


def get_config():
    config = dict(DEFAULTS)
    config.update(getattr(settings, "NOTIFICATION_ENGINE", {}))
    return config


def _as_date(value):
    if value is None:
        return timezone.localdate()
    if isinstance(value, datetime):
        return value.date()
    return value


def _money(value):
    return Decimal(str(value))


# ===========================================================
# DATE ARITHMETIC
# ===========================================================
def next_birthday(birth_date, today):
    """
    Next anniversary of ``birth_date`` on or after ``today``.
    Feb 29 birthdays fall on Feb 28 in non-leap years.
    """
    upcoming = birth_date + relativedelta(years=today.year - birth_date.year)
    if upcoming < today:
        upcoming = birth_date + relativedelta(years=today.year + 1 - birth_date.year)
    return upcoming


def next_salary_review(user, months=None):
    if months is None:
        months = get_config()["SALARY_REVIEW_MONTHS"]
    base = user.last_salary_increase_date or user.hire_date
    if base is None:
        return None
    return base + relativedelta(months=months)


# ===========================================================
# DELIVERY
# ===========================================================
def _deliver(admin, related_user, type, message, event_date):
    with transaction.atomic():
        existing = (
            Notification.objects.select_for_update()
            .filter(recipient=admin, related_user=related_user, type=type, event_date=event_date)
            .first()
        )
        if existing is not None:
            logger.info(
                f"Notification '{type}' for user {related_user.pk} on {event_date} "
                f"already sent to admin {admin.pk}"
            )
            return False

        Notification.objects.create(
            recipient=admin,
            related_user=related_user,
            type=type,
            message=message,
            event_date=event_date,
        )
    logger.info(f"Notification '{type}' created for admin {admin.pk} about user {related_user.pk}")
    return True


def notify_admins(admins, related_user, type, message, event_date):
    """
    Send one notification per admin, skipping admins that already have
    the same (related_user, type, event_date) entry.

    Each delivery runs in its own transaction and is retried on database
    errors. Returns the number of notifications created.
    """
    retries = get_config()["RETRIES"]
    created = 0

    for admin in admins:
        for attempt in range(1, retries + 1):
            try:
                was_created = _deliver(admin, related_user, type, message, event_date)
            except DatabaseError as exc:
                logger.warning(
                    f"Failed to create '{type}' notification for admin {admin.pk} "
                    f"(attempt {attempt} of {retries}): {exc}"
                )
                continue
            created += int(was_created)
            break
        else:
            logger.error(
                f"Giving up on '{type}' notification for admin {admin.pk} "
                f"after {retries} attempts"
            )

    return created


# ===========================================================
# CHECKS
# ===========================================================
def check_birthday(user, admins, today):
    """Birthday reminder (30 days ahead) and same-day notice. Returns notifications created."""
    if user.birth_date is None:
        return 0

    config = get_config()
    birthday = next_birthday(user.birth_date, today)
    days_left = (birthday - today).days
    name = f"{user.first_name} {user.last_name}"
    logger.debug(f"Birthday check for {name}: {days_left} days left")

    if days_left == config["REMINDER_DAYS"]:
        return notify_admins(
            admins,
            user,
            Notification.TYPE_BIRTHDAY_REMINDER,
            f"Birthday of {name} is in one month.",
            birthday,
        )
    if days_left == 0:
        return notify_admins(
            admins,
            user,
            Notification.TYPE_BIRTHDAY,
            f"Today is the birthday of {name}.",
            birthday,
        )
    return 0


def _raise_salary(user, today, config):
    ceiling = _money(config["SALARY_CEILING"])
    step = _money(config["SALARY_STEP"])

    with transaction.atomic():
        locked = User.objects.select_for_update().get(pk=user.pk)

        if locked.salary >= ceiling:
            logger.info(f"Salary of {locked.email} is already at the ceiling")
            return None

        review_date = next_salary_review(locked, config["SALARY_REVIEW_MONTHS"])
        if review_date is None or review_date > today:
            logger.info(f"Salary raise for {locked.email} was already applied")
            return None

        new_salary = min(locked.salary + step, ceiling)
        locked.salary = new_salary
        locked.last_salary_increase_date = today
        locked.save(update_fields=["salary", "last_salary_increase_date", "updated_at"])

    user.salary = new_salary
    user.last_salary_increase_date = today
    return new_salary


def apply_salary_increase(user, admins, today):
    """
    Raise ``user``'s salary by one step, capped at the ceiling, and tell
    the admins.

    The row is re-read under ``SELECT ... FOR UPDATE`` and both conditions
    (salary below the ceiling, review date reached) are checked again, so
    concurrent runs raise at most once. Notifications are sent after the
    raise is committed.

    Returns ``(new_salary, notifications_created)``; ``new_salary`` is None
    when no raise was applied.
    """
    config = get_config()
    new_salary = _raise_salary(user, today, config)
    if new_salary is None:
        return None, 0

    name = f"{user.first_name} {user.last_name}"
    logger.info(f"Salary of {user.email} raised to {new_salary}")

    created = notify_admins(
        admins,
        user,
        Notification.TYPE_SALARY_INCREASED,
        f"Salary of employee {name} was automatically increased to {new_salary}.",
        today,
    )
    if new_salary >= _money(config["SALARY_THRESHOLD"]):
        created += notify_admins(
            admins,
            user,
            Notification.TYPE_SALARY_THRESHOLD_REACHED,
            f"Employee {name} has reached the salary threshold.",
            today,
        )
    return new_salary, created


def check_salary_review(user, admins, today):
    """
    Salary-review reminder and automatic raise.
    Returns ``(notifications_created, raised)``.
    """
    config = get_config()
    review_date = next_salary_review(user, config["SALARY_REVIEW_MONTHS"])
    if review_date is None:
        return 0, False

    days_left = (review_date - today).days
    logger.debug(f"Salary review check for {user.email}: {days_left} days left")

    if days_left == config["REMINDER_DAYS"]:
        created = notify_admins(
            admins,
            user,
            Notification.TYPE_SALARY_INCREASE_REMINDER,
            f"Salary increase for employee {user.first_name} {user.last_name} "
            f"is scheduled in one month.",
            review_date,
        )
        return created, False

    if days_left > 0 or user.salary >= _money(config["SALARY_CEILING"]):
        return 0, False

    new_salary, created = apply_salary_increase(user, admins, today)
    return created, new_salary is not None


# ===========================================================
# ENTRY POINTS
# ===========================================================
def run_daily_check(today=None):
    """
    Run the birthday and salary checks for every active user.

    A failure for one user is logged and the run moves on to the next.
    Returns a summary dict.
    """
    today = _as_date(today)
    admins = list(User.objects.admins())
    users = User.objects.filter(
        is_active=True,
        role__in=[User.ROLE_EMPLOYEE, User.ROLE_ADMIN],
    ).order_by("pk")

    summary = {
        "date": today.isoformat(),
        "users_checked": 0,
        "notifications_created": 0,
        "raises_applied": 0,
        "errors": 0,
    }
    logger.info(f"Daily notification check for {today} ({len(admins)} admins)")

    for user in users:
        summary["users_checked"] += 1
        try:
            summary["notifications_created"] += check_birthday(user, admins, today)
            created, raised = check_salary_review(user, admins, today)
        except Exception:
            logger.exception(f"Notification check failed for user {user.pk}")
            summary["errors"] += 1
            continue
        summary["notifications_created"] += created
        summary["raises_applied"] += int(raised)

    logger.info(
        f"Daily notification check done: {summary['users_checked']} users, "
        f"{summary['notifications_created']} notifications, "
        f"{summary['raises_applied']} raises, {summary['errors']} errors"
    )
    return summary


def delete_old_read_notifications(today=None):
    """Delete read notifications older than the retention period. Returns the count."""
    today = _as_date(today)
    cutoff = today - relativedelta(months=get_config()["READ_RETENTION_MONTHS"])

    deleted, _ = (
        Notification.objects.read()
        .filter(
            Q(event_date__lte=cutoff)
            | Q(event_date__isnull=True, created_at__date__lte=cutoff)
        )
        .delete()
    )
    logger.info(f"Deleted {deleted} read notifications older than {cutoff}")
    return deleted
