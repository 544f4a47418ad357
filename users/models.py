# ===========================================================
# users/models.py
# ===========================================================

from decimal import Decimal

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin, BaseUserManager
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone
import logging

logger = logging.getLogger("users")


def default_salary():
    return Decimal("400.00")


# ===========================================================
# USER MANAGER
# ===========================================================
class UserManager(BaseUserManager):
    """Manager that keys users by lower-cased email."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("Users must have an email address.")

        email = self.normalize_email(email).lower()
        extra_fields.setdefault("is_active", True)
        extra_fields.setdefault("role", User.ROLE_EMPLOYEE)

        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)

        logger.info(
            f"User created: {email} ({user.role})",
            extra={"user_id": user.pk, "role": user.role},
        )
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """Create and save a superuser with the admin role."""
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", User.ROLE_ADMIN)

        if not password:
            raise ValueError("Superuser must have a password.")

        return self.create_user(email, password=password, **extra_fields)

    def admins(self):
        return self.filter(role=User.ROLE_ADMIN, is_active=True)


# ===========================================================
# USER MODEL
# ===========================================================
class User(AbstractBaseUser, PermissionsMixin):
    """
    Account for both employees and admins.

    HR fields (salary, review dates, notes) are only visible to and
    editable by admins; see ``users.serializers`` for the field split.
    """

    ROLE_EMPLOYEE = "employee"
    ROLE_ADMIN = "admin"

    ROLE_CHOICES = [
        (ROLE_EMPLOYEE, "Employee"),
        (ROLE_ADMIN, "Admin"),
    ]

    # ---------- CORE ----------
    email = models.EmailField(max_length=80, unique=True, db_index=True)
    first_name = models.CharField(max_length=40)
    last_name = models.CharField(max_length=40)
    middle_name = models.CharField(max_length=40, blank=True, default="")

    role = models.CharField(
        max_length=20,
        choices=ROLE_CHOICES,
        default=ROLE_EMPLOYEE,
        db_index=True,
    )

    # ---------- PERSONAL ----------
    birth_date = models.DateField(null=True, blank=True)
    phone = models.CharField(max_length=50, blank=True, default="")
    programming_language = models.CharField(max_length=100, blank=True, default="")
    country = models.CharField(max_length=100, blank=True, default="")
    bank_card = models.CharField(max_length=50, blank=True, default="")
    github_link = models.URLField(blank=True, default="")
    linkedin_link = models.URLField(blank=True, default="")

    # ---------- HR (admin only) ----------
    salary = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=default_salary,
        validators=[MinValueValidator(Decimal("0"))],
    )
    last_salary_increase_date = models.DateField(default=timezone.localdate, null=True, blank=True)
    hire_date = models.DateField(default=timezone.localdate)
    position = models.CharField(max_length=100, blank=True, default="")
    mentor_name = models.CharField(max_length=100, blank=True, default="")
    vacation_dates = models.JSONField(default=list, blank=True)
    admin_note = models.TextField(blank=True, default="")
    english_level = models.CharField(max_length=50, blank=True, default="")
    working_hours_per_week = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )

    # ---------- DJANGO FLAGS ----------
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # ---------- AUDIT ----------
    registration_date = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["first_name", "last_name"]

    class Meta:
        verbose_name = "User"
        verbose_name_plural = "Users"
        ordering = ["registration_date"]
        indexes = [
            models.Index(fields=["role", "is_active"], name="user_role_active_idx"),
            models.Index(fields=["last_name", "first_name"], name="user_name_idx"),
        ]

    def __str__(self):
        return f"{self.get_full_name()} <{self.email}>"

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)

    # ======================================================
    # BASIC METHODS
    # ======================================================
    def get_full_name(self):
        name = f"{self.first_name} {self.last_name}".strip()
        return name or self.email

    def get_short_name(self):
        return self.first_name or self.email

    # ======================================================
    # ROLE HELPERS
    # ======================================================
    def is_admin(self):
        return self.role == self.ROLE_ADMIN or self.is_superuser

    def is_employee(self):
        return self.role == self.ROLE_EMPLOYEE
