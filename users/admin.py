# ===============================================
# users/admin.py
# ===============================================
# Django Admin configuration for the custom User model.
# Features:
# - Color-coded roles (Admin / Employee)
# - HR fields grouped separately from login info
# - Salary and review dates at a glance
# ===============================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.forms import UserChangeForm as BaseUserChangeForm
from django.contrib.auth.forms import UserCreationForm as BaseUserCreationForm
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from .models import User


class UserCreationForm(BaseUserCreationForm):
    class Meta:
        model = User
        fields = ("email", "first_name", "last_name", "role")


class UserChangeForm(BaseUserChangeForm):
    class Meta:
        model = User
        fields = "__all__"


class ProjectMembershipInline(admin.TabularInline):
    model = User.projects.through
    extra = 0
    verbose_name = "Project"
    verbose_name_plural = "Projects"


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    form = UserChangeForm
    add_form = UserCreationForm
    inlines = [ProjectMembershipInline]

    list_display = (
        "email",
        "get_full_name",
        "colored_role",
        "position",
        "salary",
        "last_salary_increase_date",
        "birth_date",
        "is_active",
        "registration_date",
    )
    list_filter = ("role", "is_active", "is_staff", "english_level", "country")
    search_fields = ("email", "first_name", "last_name", "middle_name", "position")
    ordering = ("-registration_date",)
    list_per_page = 25
    date_hierarchy = "registration_date"

    readonly_fields = ("registration_date", "last_login", "created_at", "updated_at")

    fieldsets = (
        (_("Login Info"), {"fields": ("email", "password")}),
        (
            _("Personal Info"),
            {
                "fields": (
                    "first_name",
                    "last_name",
                    "middle_name",
                    "birth_date",
                    "phone",
                    "programming_language",
                    "country",
                    "bank_card",
                    "github_link",
                    "linkedin_link",
                )
            },
        ),
        (
            _("HR (Admin only)"),
            {
                "fields": (
                    "position",
                    "mentor_name",
                    "english_level",
                    "salary",
                    "last_salary_increase_date",
                    "hire_date",
                    "working_hours_per_week",
                    "vacation_dates",
                    "admin_note",
                )
            },
        ),
        (
            _("Role & Access"),
            {"fields": ("role", "is_active", "is_staff", "is_superuser", "groups", "user_permissions")},
        ),
        (_("System Info"), {"fields": ("registration_date", "last_login", "created_at", "updated_at")}),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "first_name", "last_name", "role", "password1", "password2"),
            },
        ),
    )

    def get_full_name(self, obj):
        return obj.get_full_name()

    get_full_name.short_description = "Full Name"
    get_full_name.admin_order_field = "first_name"

    def colored_role(self, obj):
        color = "#28a745" if obj.role == User.ROLE_ADMIN else "#007bff"
        return format_html(
            '<span style="font-weight:bold;color:{};padding:3px 8px;'
            'background-color:{}20;border-radius:3px;">{}</span>',
            color, color, obj.get_role_display()
        )

    colored_role.short_description = "Role"
    colored_role.admin_order_field = "role"
