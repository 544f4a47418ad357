"""
Tests for the nightly notification engine.

Every test passes an explicit ``today`` so results do not depend on the
calendar.
"""
from datetime import date, datetime
from decimal import Decimal

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone
from django_q.models import Schedule

from notifications import engine, tasks
from notifications.models import Notification
from users.models import User

TODAY = date(2025, 3, 1)


@pytest.fixture
def admins(make_user):
    return [
        make_user(role=User.ROLE_ADMIN, email="boss1@example.com"),
        make_user(role=User.ROLE_ADMIN, email="boss2@example.com"),
    ]


@pytest.fixture
def staff(make_user):
    """Factory for an employee whose salary review is far away unless overridden."""

    def _make(**overrides):
        fields = {"last_salary_increase_date": TODAY, "hire_date": date(2020, 1, 1)}
        fields.update(overrides)
        return make_user(**fields)

    return _make


# =============================================================================
# Date arithmetic
# =============================================================================

class TestNextBirthday:

    def test_later_this_year(self):
        assert engine.next_birthday(date(1990, 5, 20), TODAY) == date(2025, 5, 20)

    def test_already_passed_rolls_to_next_year(self):
        assert engine.next_birthday(date(1990, 1, 10), TODAY) == date(2026, 1, 10)

    def test_today(self):
        assert engine.next_birthday(date(1990, 3, 1), TODAY) == TODAY

    def test_leap_day_in_common_year(self):
        assert engine.next_birthday(date(2000, 2, 29), date(2025, 2, 1)) == date(2025, 2, 28)

    def test_leap_day_in_leap_year(self):
        assert engine.next_birthday(date(2000, 2, 29), date(2028, 2, 1)) == date(2028, 2, 29)


class TestNextSalaryReview:

    def test_six_months_after_last_increase(self):
        user = User(last_salary_increase_date=date(2024, 8, 31), hire_date=date(2020, 1, 1))

        assert engine.next_salary_review(user) == date(2025, 2, 28)

    def test_falls_back_to_hire_date(self):
        user = User(last_salary_increase_date=None, hire_date=date(2024, 9, 1))

        assert engine.next_salary_review(user) == date(2025, 3, 1)


# =============================================================================
# Birthdays
# =============================================================================

@pytest.mark.django_db
class TestBirthdayCheck:

    def test_reminder_thirty_days_ahead(self, admins, staff):
        user = staff(birth_date=date(1990, 3, 31))

        created = engine.check_birthday(user, admins, TODAY)

        assert created == 2
        rows = Notification.objects.filter(type=Notification.TYPE_BIRTHDAY_REMINDER)
        assert {n.recipient_id for n in rows} == {a.id for a in admins}
        assert all(n.event_date == date(2025, 3, 31) and n.related_user == user for n in rows)

    def test_notice_on_the_day(self, admins, staff):
        user = staff(birth_date=date(1990, 3, 1))

        assert engine.check_birthday(user, admins, TODAY) == 2
        assert Notification.objects.filter(type=Notification.TYPE_BIRTHDAY, event_date=TODAY).count() == 2

    @pytest.mark.parametrize("birth_date", [date(1990, 3, 30), date(1990, 4, 1), date(1990, 3, 2)])
    def test_other_days_are_quiet(self, admins, staff, birth_date):
        user = staff(birth_date=birth_date)

        assert engine.check_birthday(user, admins, TODAY) == 0
        assert not Notification.objects.exists()

    def test_user_without_birth_date_is_skipped(self, admins, staff):
        assert engine.check_birthday(staff(birth_date=None), admins, TODAY) == 0

    def test_repeat_run_does_not_duplicate(self, admins, staff):
        user = staff(birth_date=date(1990, 3, 31))

        engine.check_birthday(user, admins, TODAY)
        assert engine.check_birthday(user, admins, TODAY) == 0
        assert Notification.objects.count() == 2

    def test_new_admin_still_gets_notified(self, admins, staff, make_user):
        user = staff(birth_date=date(1990, 3, 31))
        engine.check_birthday(user, admins[:1], TODAY)

        created = engine.check_birthday(user, admins, TODAY)

        assert created == 1
        assert Notification.objects.filter(recipient=admins[1]).count() == 1


# =============================================================================
# Salary review
# =============================================================================

@pytest.mark.django_db
class TestSalaryReview:

    def test_reminder_thirty_days_ahead(self, admins, staff):
        user = staff(last_salary_increase_date=date(2024, 10, 1))

        created, raised = engine.check_salary_review(user, admins, date(2025, 3, 2))

        assert (created, raised) == (2, False)
        row = Notification.objects.filter(type=Notification.TYPE_SALARY_INCREASE_REMINDER).first()
        assert row.event_date == date(2025, 4, 1)

    def test_raise_when_review_is_due(self, admins, staff):
        user = staff(last_salary_increase_date=date(2024, 9, 1), salary=Decimal("400.00"))

        created, raised = engine.check_salary_review(user, admins, TODAY)

        assert raised is True
        assert created == 2
        user.refresh_from_db()
        assert user.salary == Decimal("600.00")
        assert user.last_salary_increase_date == TODAY
        assert Notification.objects.filter(type=Notification.TYPE_SALARY_INCREASED, event_date=TODAY).count() == 2
        assert not Notification.objects.filter(type=Notification.TYPE_SALARY_THRESHOLD_REACHED).exists()

    def test_overdue_review_also_raises(self, admins, staff):
        user = staff(last_salary_increase_date=date(2023, 1, 1), salary=Decimal("700.00"))

        _, raised = engine.check_salary_review(user, admins, TODAY)

        assert raised is True
        user.refresh_from_db()
        assert user.salary == Decimal("900.00")

    @pytest.mark.parametrize(
        "salary, expected",
        [(Decimal("1200.00"), Decimal("1400.00")), (Decimal("1450.00"), Decimal("1500.00"))],
    )
    def test_threshold_reached(self, admins, staff, salary, expected):
        user = staff(last_salary_increase_date=date(2024, 9, 1), salary=salary)

        created, raised = engine.check_salary_review(user, admins, TODAY)

        assert raised is True
        assert created == 4
        user.refresh_from_db()
        assert user.salary == expected
        assert Notification.objects.filter(type=Notification.TYPE_SALARY_THRESHOLD_REACHED).count() == 2

    def test_no_raise_at_ceiling(self, admins, staff):
        user = staff(last_salary_increase_date=date(2024, 9, 1), salary=Decimal("1500.00"))

        assert engine.check_salary_review(user, admins, TODAY) == (0, False)
        user.refresh_from_db()
        assert user.last_salary_increase_date == date(2024, 9, 1)
        assert not Notification.objects.exists()

    def test_raise_applies_without_admins(self, staff):
        user = staff(last_salary_increase_date=date(2024, 9, 1), salary=Decimal("400.00"))

        assert engine.check_salary_review(user, [], TODAY) == (0, True)
        user.refresh_from_db()
        assert user.salary == Decimal("600.00")

    def test_stale_copy_does_not_raise_twice(self, admins, staff):
        user = staff(last_salary_increase_date=date(2024, 9, 1), salary=Decimal("400.00"))
        stale = User.objects.get(pk=user.pk)

        engine.apply_salary_increase(user, admins, TODAY)
        new_salary, created = engine.apply_salary_increase(stale, admins, TODAY)

        assert (new_salary, created) == (None, 0)
        user.refresh_from_db()
        assert user.salary == Decimal("600.00")

    def test_ceiling_comes_from_settings(self, admins, staff, settings):
        settings.NOTIFICATION_ENGINE = {**settings.NOTIFICATION_ENGINE, "SALARY_CEILING": 500}
        user = staff(last_salary_increase_date=date(2024, 9, 1), salary=Decimal("400.00"))

        engine.check_salary_review(user, admins, TODAY)

        user.refresh_from_db()
        assert user.salary == Decimal("500.00")


# =============================================================================
# Delivery
# =============================================================================

@pytest.mark.django_db
class TestNotifyAdmins:

    def test_retries_then_gives_up(self, admins, staff, monkeypatch):
        user = staff()
        calls = []

        def broken(*args, **kwargs):
            calls.append(args[0].pk)
            raise DatabaseError("database is locked")

        monkeypatch.setattr(engine, "_deliver", broken)

        created = engine.notify_admins(admins, user, Notification.TYPE_BIRTHDAY, "msg", TODAY)

        assert created == 0
        assert calls == [admins[0].pk] * 3 + [admins[1].pk] * 3

    def test_recovers_after_transient_failure(self, admins, staff, monkeypatch):
        user = staff()
        real_deliver = engine._deliver
        failures = {"left": 1}

        def flaky(*args, **kwargs):
            if failures["left"]:
                failures["left"] -= 1
                raise DatabaseError("deadlock detected")
            return real_deliver(*args, **kwargs)

        monkeypatch.setattr(engine, "_deliver", flaky)

        created = engine.notify_admins(admins, user, Notification.TYPE_BIRTHDAY, "msg", TODAY)

        assert created == 2
        assert Notification.objects.count() == 2

    def test_database_rejects_duplicate_engine_rows(self, admin_user, employee):
        fields = dict(
            recipient=admin_user,
            related_user=employee,
            type=Notification.TYPE_BIRTHDAY,
            event_date=TODAY,
            message="msg",
        )
        Notification.objects.create(**fields)

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                Notification.objects.create(**fields)

    def test_general_notifications_may_repeat(self, admin_user, employee):
        for _ in range(2):
            Notification.objects.create(
                recipient=admin_user, related_user=employee, type=Notification.TYPE_GENERAL, message="hi"
            )

        assert Notification.objects.count() == 2


# =============================================================================
# Daily run
# =============================================================================

@pytest.mark.django_db
class TestRunDailyCheck:

    def test_summary(self, admins, staff):
        staff(birth_date=date(1990, 3, 31))
        staff(last_salary_increase_date=date(2024, 9, 1), salary=Decimal("1300.00"))
        staff(is_active=False, birth_date=date(1990, 3, 1))

        summary = engine.run_daily_check(TODAY)

        assert summary == {
            "date": "2025-03-01",
            "users_checked": 4,
            "notifications_created": 6,
            "raises_applied": 1,
            "errors": 0,
        }

    def test_one_failing_user_does_not_stop_the_run(self, admins, staff, monkeypatch):
        bad = staff(birth_date=date(1990, 3, 31))
        good = staff(birth_date=date(1991, 3, 31))
        real_check = engine.check_birthday

        def check(user, admin_list, today):
            if user.pk == bad.pk:
                raise RuntimeError("boom")
            return real_check(user, admin_list, today)

        monkeypatch.setattr(engine, "check_birthday", check)

        summary = engine.run_daily_check(TODAY)

        assert summary["errors"] == 1
        assert Notification.objects.filter(related_user=good).count() == 2
        assert not Notification.objects.filter(related_user=bad).exists()

    def test_second_run_is_idempotent(self, admins, staff):
        staff(birth_date=date(1990, 3, 1), last_salary_increase_date=date(2024, 9, 1))

        first = engine.run_daily_check(TODAY)
        second = engine.run_daily_check(TODAY)

        assert first["raises_applied"] == 1
        assert second["raises_applied"] == 0
        assert second["notifications_created"] == 0

    def test_accepts_datetime(self, admins, staff):
        staff(birth_date=date(1990, 3, 1))

        summary = engine.run_daily_check(datetime(2025, 3, 1, 23, 59))

        assert summary["date"] == "2025-03-01"
        assert summary["notifications_created"] == 2


# =============================================================================
# Cleanup
# =============================================================================

@pytest.mark.django_db
class TestDeleteOldReadNotifications:

    def make(self, admin_user, employee, **fields):
        return Notification.objects.create(recipient=admin_user, related_user=employee, message="m", **fields)

    def test_sweep(self, admin_user, employee):
        old_read = self.make(admin_user, employee, is_read=True, event_date=date(2024, 8, 1))
        boundary = self.make(admin_user, employee, is_read=True, event_date=date(2024, 9, 1))
        old_unread = self.make(admin_user, employee, is_read=False, event_date=date(2024, 1, 1))
        recent_read = self.make(admin_user, employee, is_read=True, event_date=date(2025, 1, 1))
        undated_old = self.make(admin_user, employee, is_read=True)
        undated_recent = self.make(admin_user, employee, is_read=True)
        Notification.objects.filter(pk=undated_old.pk).update(
            created_at=timezone.make_aware(datetime(2024, 1, 1, 12, 0))
        )

        deleted = engine.delete_old_read_notifications(TODAY)

        assert deleted == 3
        remaining = set(Notification.objects.values_list("pk", flat=True))
        assert remaining == {old_unread.pk, recent_read.pk, undated_recent.pk}
        assert boundary.pk not in remaining
        assert old_read.pk not in remaining


# =============================================================================
# Scheduling entry points
# =============================================================================

@pytest.mark.django_db
class TestEntryPoints:

    def test_task_runs_check_for_today(self, monkeypatch):
        seen = {}
        monkeypatch.setattr(engine, "run_daily_check", lambda today=None: seen.setdefault("today", today))

        tasks.run_daily_notification_check()

        assert seen == {"today": None}

    def test_cleanup_task(self, monkeypatch):
        monkeypatch.setattr(engine, "delete_old_read_notifications", lambda today=None: 7)

        assert tasks.cleanup_read_notifications() == 7

    def test_setup_schedules_is_idempotent(self):
        call_command("setup_schedules")
        call_command("setup_schedules")

        schedules = {s.func: s for s in Schedule.objects.all()}
        assert set(schedules) == {
            "notifications.tasks.run_daily_notification_check",
            "notifications.tasks.cleanup_read_notifications",
        }
        assert schedules["notifications.tasks.run_daily_notification_check"].cron == "0 0 * * *"
        assert schedules["notifications.tasks.cleanup_read_notifications"].cron == "30 0 * * *"
        assert all(s.schedule_type == Schedule.CRON for s in schedules.values())

    def test_run_notification_check_command(self, admins, staff):
        staff(birth_date=date(1990, 3, 1))

        call_command("run_notification_check", "--date", "2025-03-01", "--cleanup")

        assert Notification.objects.filter(type=Notification.TYPE_BIRTHDAY).count() == 2

    def test_run_notification_check_rejects_bad_date(self):
        with pytest.raises(CommandError):
            call_command("run_notification_check", "--date", "01/03/2025")
