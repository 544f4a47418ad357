from django.contrib import admin
from django.db.models import Count

from .models import Project


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("name", "wage", "active", "employee_count", "updated_at")
    list_filter = ("active",)
    search_fields = ("name", "description")
    filter_horizontal = ("employees",)
    readonly_fields = ("created_at", "updated_at")

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(_employee_count=Count("employees"))

    def employee_count(self, obj):
        return obj._employee_count

    employee_count.short_description = "Employees"
    employee_count.admin_order_field = "_employee_count"
