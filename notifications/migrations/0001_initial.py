import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("message", models.CharField(max_length=255)),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("birthday_reminder", "Birthday reminder"),
                            ("birthday", "Birthday"),
                            ("salary_increase_reminder", "Salary increase reminder"),
                            ("salary_increased", "Salary increased"),
                            ("salary_threshold_reached", "Salary threshold reached"),
                            ("user_update", "User update"),
                            ("employee_created", "Employee created"),
                            ("general", "General"),
                        ],
                        db_index=True,
                        default="general",
                        max_length=50,
                    ),
                ),
                ("event_date", models.DateField(blank=True, null=True)),
                ("is_read", models.BooleanField(db_index=True, default=False)),
                ("read_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "recipient",
                    models.ForeignKey(
                        help_text="Admin who receives this notification.",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="notifications",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "related_user",
                    models.ForeignKey(
                        blank=True,
                        help_text="User the notification is about.",
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="related_notifications",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Notification",
                "verbose_name_plural": "Notifications",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["recipient", "is_read"], name="notif_recipient_read_idx"),
                    models.Index(fields=["recipient", "-created_at"], name="notif_recipient_created_idx"),
                    models.Index(fields=["related_user", "type", "event_date"], name="notif_dedupe_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(
                            (
                                "type__in",
                                [
                                    "birthday_reminder",
                                    "birthday",
                                    "salary_increase_reminder",
                                    "salary_increased",
                                    "salary_threshold_reached",
                                ],
                            )
                        ),
                        fields=("recipient", "related_user", "type", "event_date"),
                        name="unique_engine_notification",
                    ),
                ],
            },
        ),
    ]
