from django.apps import AppConfig


class ProjectsConfig(AppConfig):
    """AppConfig for the Projects module."""
    default_auto_field = "django.db.models.BigAutoField"
    name = "projects"
    verbose_name = "Projects"
