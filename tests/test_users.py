"""
Tests for the user directory and employee CRUD endpoints.
"""
from decimal import Decimal

import pytest

from notifications.models import Notification
from projects.models import Project
from users.models import User

USERS_URL = "/api/users/"


def detail_url(pk):
    return f"{USERS_URL}{pk}/"


# =============================================================================
# List / retrieve
# =============================================================================

@pytest.mark.django_db
class TestUserDirectory:

    def test_employee_sees_public_fields_only(self, employee_client, admin_user, employee):
        response = employee_client.get(USERS_URL)

        assert response.status_code == 200
        assert response.data["count"] == 2
        row = response.data["results"][0]
        assert "email" in row
        for hidden in ("salary", "bank_card", "admin_note", "vacation_dates", "hire_date"):
            assert hidden not in row

    def test_admin_sees_hr_fields(self, admin_client, employee):
        response = admin_client.get(USERS_URL)

        assert response.status_code == 200
        row = next(r for r in response.data["results"] if r["id"] == employee.id)
        assert Decimal(row["salary"]) == Decimal("400.00")
        assert "last_salary_increase_date" in row

    def test_filter_by_name(self, admin_client, make_user):
        make_user(first_name="Marianne", last_name="Stone")
        make_user(first_name="Oscar", last_name="Reed")

        response = admin_client.get(USERS_URL, {"first_name": "mari"})

        assert [r["first_name"] for r in response.data["results"]] == ["Marianne"]

    def test_ordering_and_pagination(self, admin_client, make_user):
        make_user(country="Brazil")
        make_user(country="Austria")

        response = admin_client.get(USERS_URL, {"ordering": "country", "limit": 2, "page": 1})

        assert response.status_code == 200
        assert response.data["page_size"] == 2
        assert response.data["total_pages"] == 2
        countries = [r["country"] for r in response.data["results"]]
        assert countries == sorted(countries)

    def test_page_number_is_clamped(self, admin_client):
        response = admin_client.get(USERS_URL, {"page": -3})

        assert response.status_code == 200
        assert response.data["current_page"] == 1

    def test_page_past_the_end_is_empty(self, admin_client, employee):
        response = admin_client.get(USERS_URL, {"page": 50})

        assert response.status_code == 200
        assert response.data["results"] == []
        assert response.data["count"] == 2
        assert response.data["current_page"] == 50
        assert response.data["next"] is None
        assert response.data["previous"] is None

    @pytest.mark.parametrize("limit, expected", [("500", 100), ("0", 1), ("abc", 10)])
    def test_limit_is_clamped(self, admin_client, limit, expected):
        response = admin_client.get(USERS_URL, {"limit": limit})

        assert response.data["page_size"] == expected

    def test_employee_sees_own_full_record(self, employee_client, employee):
        response = employee_client.get(detail_url(employee.id))

        assert response.status_code == 200
        assert "salary" in response.data

    def test_employee_sees_colleague_public_record(self, employee_client, make_user):
        colleague = make_user()

        response = employee_client.get(detail_url(colleague.id))

        assert response.status_code == 200
        assert "salary" not in response.data

    def test_missing_user(self, admin_client):
        assert admin_client.get(detail_url(99999)).status_code == 404

    def test_profile_includes_projects_without_wage(self, employee_client, employee, project):
        project.employees.add(employee)

        response = employee_client.get(f"{USERS_URL}profile/")

        assert response.status_code == 200
        assert response.data["projects"][0]["name"] == project.name
        assert "wage" not in response.data["projects"][0]


# =============================================================================
# Create
# =============================================================================

@pytest.mark.django_db
class TestCreateEmployee:

    payload = {
        "email": "hire@example.com",
        "password": "secret123",
        "first_name": "Hannah",
        "last_name": "Hire",
        "position": "Backend developer",
        "salary": "800.00",
        "vacation_dates": "2025-08-01",
    }

    def test_employee_cannot_create(self, employee_client):
        response = employee_client.post(USERS_URL, self.payload, format="json")

        assert response.status_code == 403

    def test_admin_creates_employee(self, admin_client, admin_user, project):
        response = admin_client.post(
            USERS_URL, {**self.payload, "project_ids": [project.id]}, format="json"
        )

        assert response.status_code == 201
        user = User.objects.get(email="hire@example.com")
        assert user.check_password("secret123")
        assert user.salary == Decimal("800.00")
        assert user.vacation_dates == ["2025-08-01"]
        assert list(user.projects.all()) == [project]

        notification = Notification.objects.get(type=Notification.TYPE_EMPLOYEE_CREATED)
        assert notification.recipient == admin_user
        assert notification.related_user == user

    def test_unknown_project_ids(self, admin_client):
        response = admin_client.post(USERS_URL, {**self.payload, "project_ids": [424242]}, format="json")

        assert response.status_code == 400
        assert "project_ids" in response.data
        assert not User.objects.filter(email="hire@example.com").exists()

    def test_duplicate_email(self, admin_client, employee):
        response = admin_client.post(USERS_URL, {**self.payload, "email": employee.email}, format="json")

        assert response.status_code == 400
        assert "email" in response.data


# =============================================================================
# Update
# =============================================================================

@pytest.mark.django_db
class TestUpdateUser:

    def test_employee_updates_own_data_and_admins_are_notified(self, employee_client, employee, admin_user):
        response = employee_client.put(
            detail_url(employee.id), {"phone": "+999", "country": "Norway"}, format="json"
        )

        assert response.status_code == 200
        employee.refresh_from_db()
        assert employee.phone == "+999"
        assert employee.country == "Norway"

        notification = Notification.objects.get(type=Notification.TYPE_USER_UPDATE)
        assert notification.recipient == admin_user
        assert notification.related_user == employee
        assert "phone" in notification.message
        assert "country" in notification.message

    def test_employee_cannot_touch_admin_fields(self, employee_client, employee):
        response = employee_client.patch(detail_url(employee.id), {"salary": "5000"}, format="json")

        assert response.status_code == 403
        assert "salary" in str(response.data["detail"])
        employee.refresh_from_db()
        assert employee.salary == Decimal("400.00")

    def test_employee_cannot_update_someone_else(self, employee_client, make_user):
        other = make_user()

        response = employee_client.patch(detail_url(other.id), {"phone": "+1"}, format="json")

        assert response.status_code == 403

    def test_admin_updates_hr_fields_and_projects(self, admin_client, employee, project):
        other = Project.objects.create(name="Zeus", description="Billing platform migration.")
        project.employees.add(employee)

        response = admin_client.put(
            detail_url(employee.id),
            {"salary": "950.00", "position": "Lead", "project_ids": [other.id]},
            format="json",
        )

        assert response.status_code == 200
        employee.refresh_from_db()
        assert employee.salary == Decimal("950.00")
        assert employee.position == "Lead"
        assert list(employee.projects.all()) == [other]
        assert not Notification.objects.filter(type=Notification.TYPE_USER_UPDATE).exists()

    def test_admin_changes_password(self, admin_client, employee):
        response = admin_client.patch(detail_url(employee.id), {"password": "newpass1"}, format="json")

        assert response.status_code == 200
        employee.refresh_from_db()
        assert employee.check_password("newpass1")

    def test_project_ids_must_be_a_list(self, admin_client, employee):
        response = admin_client.patch(detail_url(employee.id), {"project_ids": 3}, format="json")

        assert response.status_code == 400

    def test_duplicate_email_on_update(self, employee_client, employee, make_user):
        other = make_user()

        response = employee_client.patch(detail_url(employee.id), {"email": other.email.upper()}, format="json")

        assert response.status_code == 400
        assert "email" in response.data


# =============================================================================
# Delete
# =============================================================================

@pytest.mark.django_db
class TestDeleteEmployee:

    def test_admin_deletes_employee(self, admin_client, employee, admin_user):
        Notification.objects.create(recipient=admin_user, related_user=employee, message="x")

        response = admin_client.delete(detail_url(employee.id))

        assert response.status_code == 200
        assert not User.objects.filter(pk=employee.id).exists()
        assert not Notification.objects.filter(related_user_id=employee.id).exists()

    def test_admin_cannot_delete_self(self, admin_client, admin_user):
        response = admin_client.delete(detail_url(admin_user.id))

        assert response.status_code == 400
        assert User.objects.filter(pk=admin_user.id).exists()

    def test_only_employees_can_be_deleted(self, admin_client, make_user):
        other_admin = make_user(role=User.ROLE_ADMIN)

        response = admin_client.delete(detail_url(other_admin.id))

        assert response.status_code == 404

    def test_employee_cannot_delete(self, employee_client, make_user):
        other = make_user()

        response = employee_client.delete(detail_url(other.id))

        assert response.status_code == 403


# =============================================================================
# bootstrap_admin command
# =============================================================================

@pytest.mark.django_db
def test_bootstrap_admin_is_idempotent(settings):
    from django.core.management import call_command

    settings.DEFAULT_ADMIN_EMAIL = "Boot@Example.com"
    settings.DEFAULT_ADMIN_PASSWORD = "bootpass"

    call_command("bootstrap_admin")
    call_command("bootstrap_admin")

    admins = User.objects.filter(email="boot@example.com")
    assert admins.count() == 1
    assert admins.get().is_admin()
    assert admins.get().check_password("bootpass")
