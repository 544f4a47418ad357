# ===========================================================
# users/apps.py
# ===========================================================

from django.apps import AppConfig


class UsersConfig(AppConfig):
    """AppConfig for the user and profile module."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "users"
    verbose_name = "User Management"
