from django.urls import path

from .views import MarkNotificationReadView, NotificationListView, UnreadCountView

app_name = "notifications"

urlpatterns = [
    path("", NotificationListView.as_view(), name="notification-list"),
    path("unread-count/", UnreadCountView.as_view(), name="unread-count"),
    path("<int:pk>/mark-as-read/", MarkNotificationReadView.as_view(), name="mark-as-read"),
]
