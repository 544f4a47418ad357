"""
Management command that makes sure the default admin account exists.

Credentials come from the DEFAULT_ADMIN_EMAIL / DEFAULT_ADMIN_PASSWORD
settings (environment variables of the same name).

Usage:
    python manage.py bootstrap_admin

The command is idempotent - an existing account is left untouched.
"""
import logging

from django.conf import settings
from django.core.management.base import BaseCommand
from django.db import IntegrityError

from users.models import User

logger = logging.getLogger("users")


class Command(BaseCommand):
    help = "Create the default admin account if it does not exist"

    def add_arguments(self, parser):
        parser.add_argument("--email", default=None, help="Override DEFAULT_ADMIN_EMAIL")
        parser.add_argument("--password", default=None, help="Override DEFAULT_ADMIN_PASSWORD")

    def handle(self, *args, **options):
        email = (options["email"] or settings.DEFAULT_ADMIN_EMAIL).lower()
        password = options["password"] or settings.DEFAULT_ADMIN_PASSWORD

        if User.objects.filter(email=email).exists():
            self.stdout.write(self.style.WARNING(f"Admin already exists: {email}"))
            return

        try:
            User.objects.create_user(
                email,
                password=password,
                first_name="Default",
                last_name="Admin",
                middle_name="User",
                phone="+0000000000",
                programming_language="N/A",
                role=User.ROLE_ADMIN,
                is_staff=True,
            )
        except IntegrityError:
            # Created concurrently by another process.
            self.stdout.write(self.style.WARNING(f"Admin already exists: {email}"))
            return

        logger.info(f"Default admin created: {email}")
        self.stdout.write(self.style.SUCCESS(f"Default admin created: {email}"))
