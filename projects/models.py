# ===========================================================
# projects/models.py
# ===========================================================
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinLengthValidator, MinValueValidator
from django.db import models


class ProjectQuerySet(models.QuerySet):
    def active(self):
        return self.filter(active=True)


class Project(models.Model):
    """A named work engagement that employees are assigned to."""

    name = models.CharField(
        max_length=100,
        unique=True,
        validators=[MinLengthValidator(2)],
    )
    description = models.TextField(
        max_length=5000,
        validators=[MinLengthValidator(10)],
    )
    wage = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0"),
        validators=[MinValueValidator(Decimal("0"))],
        help_text="Hourly wage; visible to admins only.",
    )
    active = models.BooleanField(default=True, db_index=True)
    employees = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name="projects",
        blank=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProjectQuerySet.as_manager()

    class Meta:
        ordering = ["name"]
        verbose_name = "Project"
        verbose_name_plural = "Projects"

    def __str__(self):
        return self.name
