# ===============================================
# notifications/signals.py
# ===============================================
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import Notification
from .services import clear_unread_count


@receiver(post_save, sender=Notification)
def invalidate_unread_count_on_save(sender, instance, **kwargs):
    clear_unread_count(instance.recipient_id)


@receiver(post_delete, sender=Notification)
def invalidate_unread_count_on_delete(sender, instance, **kwargs):
    clear_unread_count(instance.recipient_id)
