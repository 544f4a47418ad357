# ===========================================================
# notifications/services.py
# ===========================================================
"""
Notification helpers used by other apps (user create/update) and by
the unread-count endpoint.
"""
from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.utils import timezone
import logging

from .models import Notification

logger = logging.getLogger("notifications")
User = get_user_model()

UNREAD_COUNT_TIMEOUT = 60


def unread_count_cache_key(user_id):
    return f"unread_count_{user_id}"


def clear_unread_count(user_id):
    cache.delete(unread_count_cache_key(user_id))


def get_unread_count(user):
    """Unread notifications for ``user``, cached for a minute."""
    key = unread_count_cache_key(user.pk)
    count = cache.get(key)
    if count is None:
        count = Notification.objects.for_recipient(user).unread().count()
        cache.set(key, count, UNREAD_COUNT_TIMEOUT)
    return count


def create_notification(recipient, message, type=Notification.TYPE_GENERAL, related_user=None, event_date=None):
    notification = Notification.objects.create(
        recipient=recipient,
        related_user=related_user,
        message=message,
        type=type,
        event_date=event_date,
    )
    logger.info(f"Notification '{type}' created for {recipient.email}: {message[:50]}")
    return notification


def notify_employee_created(admin, employee):
    """Tell the acting admin that a new employee record exists."""
    return create_notification(
        admin,
        f"Administrator created new employee: {employee.first_name} {employee.last_name}",
        type=Notification.TYPE_EMPLOYEE_CREATED,
        related_user=employee,
        event_date=timezone.localdate(),
    )


def notify_profile_update(user, changed_fields):
    """Tell every active admin which fields ``user`` changed on their own record."""
    message = (
        f"Employee {user.first_name} {user.last_name} updated their data: "
        f"{', '.join(changed_fields)}"
    )
    today = timezone.localdate()
    return [
        create_notification(
            admin,
            message,
            type=Notification.TYPE_USER_UPDATE,
            related_user=user,
            event_date=today,
        )
        for admin in User.objects.admins()
    ]
