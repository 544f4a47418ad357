# ===========================================================
# notifications/models.py
# ===========================================================
from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone
import logging

logger = logging.getLogger("notifications")


class NotificationQuerySet(models.QuerySet):
    """Common notification filters."""

    def unread(self):
        return self.filter(is_read=False)

    def read(self):
        return self.filter(is_read=True)

    def for_recipient(self, user):
        return self.filter(recipient=user)


class Notification(models.Model):
    """
    A message addressed to one admin (``recipient``), usually about
    another user (``related_user``).

    Rows produced by the nightly engine are unique per
    (recipient, related_user, type, event_date).
    """

    TYPE_BIRTHDAY_REMINDER = "birthday_reminder"
    TYPE_BIRTHDAY = "birthday"
    TYPE_SALARY_INCREASE_REMINDER = "salary_increase_reminder"
    TYPE_SALARY_INCREASED = "salary_increased"
    TYPE_SALARY_THRESHOLD_REACHED = "salary_threshold_reached"
    TYPE_USER_UPDATE = "user_update"
    TYPE_EMPLOYEE_CREATED = "employee_created"
    TYPE_GENERAL = "general"

    TYPE_CHOICES = [
        (TYPE_BIRTHDAY_REMINDER, "Birthday reminder"),
        (TYPE_BIRTHDAY, "Birthday"),
        (TYPE_SALARY_INCREASE_REMINDER, "Salary increase reminder"),
        (TYPE_SALARY_INCREASED, "Salary increased"),
        (TYPE_SALARY_THRESHOLD_REACHED, "Salary threshold reached"),
        (TYPE_USER_UPDATE, "User update"),
        (TYPE_EMPLOYEE_CREATED, "Employee created"),
        (TYPE_GENERAL, "General"),
    ]

    # Types emitted by the scheduled engine; these are deduplicated.
    ENGINE_TYPES = (
        TYPE_BIRTHDAY_REMINDER,
        TYPE_BIRTHDAY,
        TYPE_SALARY_INCREASE_REMINDER,
        TYPE_SALARY_INCREASED,
        TYPE_SALARY_THRESHOLD_REACHED,
    )

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
        help_text="Admin who receives this notification.",
    )
    related_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="related_notifications",
        help_text="User the notification is about.",
    )

    message = models.CharField(max_length=255)
    type = models.CharField(
        max_length=50,
        choices=TYPE_CHOICES,
        default=TYPE_GENERAL,
        db_index=True,
    )
    event_date = models.DateField(null=True, blank=True)

    is_read = models.BooleanField(default=False, db_index=True)
    read_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = NotificationQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Notification"
        verbose_name_plural = "Notifications"
        indexes = [
            models.Index(fields=["recipient", "is_read"], name="notif_recipient_read_idx"),
            models.Index(fields=["recipient", "-created_at"], name="notif_recipient_created_idx"),
            models.Index(fields=["related_user", "type", "event_date"], name="notif_dedupe_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["recipient", "related_user", "type", "event_date"],
                condition=Q(
                    type__in=[
                        "birthday_reminder",
                        "birthday",
                        "salary_increase_reminder",
                        "salary_increased",
                        "salary_threshold_reached",
                    ]
                ),
                name="unique_engine_notification",
            ),
        ]

    def __str__(self):
        status = "read" if self.is_read else "unread"
        return f"[{self.type}] {self.message[:50]} ({status})"

    def mark_as_read(self):
        """Mark as read and stamp ``read_at``. Already-read rows are left alone."""
        if self.is_read:
            return False

        self.is_read = True
        self.read_at = timezone.now()
        self.save(update_fields=["is_read", "read_at", "updated_at"])
        logger.info(f"Notification {self.pk} marked as read by recipient {self.recipient_id}")
        return True
