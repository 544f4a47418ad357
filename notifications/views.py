# ===============================================
# notifications/views.py
# ===============================================
from django.shortcuts import get_object_or_404
from django_filters import rest_framework as django_filters
from rest_framework import filters, generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
import logging

from users.permissions import IsAdmin
from . import services
from .models import Notification
from .serializers import NotificationSerializer

logger = logging.getLogger("notifications")


# ===============================================================
# Notification List (admins, own notifications only)
# ===============================================================
class NotificationListView(generics.ListAPIView):
    """
    GET /api/notifications/

    Query Parameters:
      - type: one of the notification types
      - ordering: created_at | -created_at | type | -type (default: -created_at)
      - page, limit (max 100)
    """
    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated, IsAdmin]
    filter_backends = [django_filters.DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ["type"]
    ordering_fields = ["created_at", "type"]
    ordering = ["-created_at"]

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return Notification.objects.none()
        return Notification.objects.for_recipient(self.request.user).select_related("related_user")


# ===============================================================
# Mark a single notification as read
# ===============================================================
class MarkNotificationReadView(generics.GenericAPIView):
    """
    PATCH /api/notifications/{id}/mark-as-read/

    Only the recipient may mark a notification; anything else is a 404.
    """
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = NotificationSerializer

    def patch(self, request, pk):
        notification = get_object_or_404(Notification, pk=pk, recipient=request.user)
        notification.mark_as_read()

        return Response(
            {
                "message": "Notification marked as read.",
                "notification": self.get_serializer(notification).data,
            },
            status=status.HTTP_200_OK,
        )


# ===============================================================
# Unread count (bell icon)
# ===============================================================
class UnreadCountView(APIView):
    """
    GET /api/notifications/unread-count/
    Cached per user; the cache is dropped whenever a notification changes.
    """
    permission_classes = [IsAuthenticated, IsAdmin]

    def get(self, request):
        return Response({"unread_count": services.get_unread_count(request.user)}, status=status.HTTP_200_OK)
