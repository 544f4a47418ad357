# ===========================================================
# projects/serializers.py
# ===========================================================
from django.contrib.auth import get_user_model
from rest_framework import serializers

from users.serializers import UserSummarySerializer, is_admin_request
from .models import Project

User = get_user_model()


class ProjectSerializer(serializers.ModelSerializer):
    """Project record. ``wage`` is only returned to admins."""

    class Meta:
        model = Project
        fields = ["id", "name", "description", "wage", "active", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]

    def to_representation(self, instance):
        rep = super().to_representation(instance)
        if not is_admin_request(self.context):
            rep.pop("wage", None)
        return rep


class ProjectDetailSerializer(ProjectSerializer):
    employees = UserSummarySerializer(many=True, read_only=True)

    class Meta(ProjectSerializer.Meta):
        fields = ProjectSerializer.Meta.fields + ["employees"]


class ProjectEmployeeSerializer(serializers.ModelSerializer):
    """Employee as listed under a project. ``salary`` is admin-only."""

    class Meta:
        model = User
        fields = ["id", "first_name", "last_name", "email", "position", "salary", "programming_language"]
        read_only_fields = fields

    def to_representation(self, instance):
        rep = super().to_representation(instance)
        if not is_admin_request(self.context):
            rep.pop("salary", None)
        return rep


class AssignEmployeesSerializer(serializers.Serializer):
    employee_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        allow_empty=True,
        error_messages={"not_a_list": "employee_ids must be an array."},
    )

    def validate_employee_ids(self, value):
        value = list(dict.fromkeys(value))
        if value and User.objects.filter(id__in=value).count() != len(value):
            raise serializers.ValidationError("Some employees not found.")
        return value


class AddEmployeeSerializer(serializers.Serializer):
    employee_id = serializers.IntegerField(min_value=1)
