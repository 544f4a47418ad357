# ===============================================
# notifications/serializers.py
# ===============================================
from rest_framework import serializers

from users.serializers import UserSummarySerializer
from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    """Notification as shown to its recipient."""

    related_user = UserSummarySerializer(read_only=True)
    type_display = serializers.CharField(source="get_type_display", read_only=True)

    class Meta:
        model = Notification
        fields = [
            "id",
            "message",
            "type",
            "type_display",
            "event_date",
            "related_user",
            "is_read",
            "read_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
