# ===============================================
# notifications/admin.py
# ===============================================
from django.contrib import admin
from django.utils import timezone

from . import services
from .models import Notification


class ReadStatusFilter(admin.SimpleListFilter):
    title = "Read Status"
    parameter_name = "read_status"

    def lookups(self, request, model_admin):
        return [("unread", "Unread"), ("read", "Read")]

    def queryset(self, request, queryset):
        if self.value() == "unread":
            return queryset.unread()
        if self.value() == "read":
            return queryset.read()
        return queryset


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("id", "recipient", "related_user", "type", "event_date", "is_read", "created_at")
    list_filter = (ReadStatusFilter, "type", "event_date")
    search_fields = ("message", "recipient__email", "related_user__email")
    list_select_related = ("recipient", "related_user")
    readonly_fields = ("created_at", "updated_at", "read_at")
    date_hierarchy = "created_at"
    actions = ["mark_selected_read"]

    @admin.action(description="Mark selected notifications as read")
    def mark_selected_read(self, request, queryset):
        updated = queryset.unread().update(is_read=True, read_at=timezone.now())
        for recipient_id in queryset.values_list("recipient_id", flat=True).distinct():
            services.clear_unread_count(recipient_id)
        self.message_user(request, f"{updated} notification(s) marked as read.")
