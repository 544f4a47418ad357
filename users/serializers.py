# ===========================================================
# users/serializers.py
# ===========================================================

from django.contrib.auth import get_user_model
from django.contrib.auth.models import update_last_login
from django.db import transaction
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
import logging

from projects.models import Project

User = get_user_model()
logger = logging.getLogger("users")


# Fields any employee may change on their own record.
EMPLOYEE_EDITABLE_FIELDS = (
    "first_name",
    "last_name",
    "middle_name",
    "birth_date",
    "phone",
    "email",
    "programming_language",
    "country",
    "bank_card",
    "linkedin_link",
    "github_link",
)

# Fields only an admin may change.
ADMIN_ONLY_FIELDS = (
    "hire_date",
    "admin_note",
    "english_level",
    "vacation_dates",
    "mentor_name",
    "position",
    "salary",
    "role",
    "password",
    "working_hours_per_week",
    "project_ids",
)

PUBLIC_FIELDS = [
    "id",
    "email",
    "first_name",
    "last_name",
    "middle_name",
    "birth_date",
    "phone",
    "programming_language",
    "position",
    "registration_date",
    "country",
    "mentor_name",
    "english_level",
    "role",
    "projects",
]

FULL_FIELDS = PUBLIC_FIELDS + [
    "bank_card",
    "github_link",
    "linkedin_link",
    "salary",
    "last_salary_increase_date",
    "hire_date",
    "vacation_dates",
    "admin_note",
    "working_hours_per_week",
    "last_login",
    "is_active",
]


def is_admin_request(context):
    request = context.get("request")
    return bool(request and request.user.is_authenticated and request.user.is_admin())


def normalize_vacation_dates(value):
    """A single date is accepted and stored as a one-item list."""
    if value in (None, ""):
        return []
    if not isinstance(value, list):
        return [value]
    return value


# ===========================================================
# 1. LOGIN SERIALIZER (email + password)
# ===========================================================
class EmailTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    Email login returning a JWT pair.
    Any failure answers with the same message so accounts cannot be probed.
    """

    default_error_messages = {"invalid_credentials": "Invalid credentials."}

    def validate(self, attrs):
        email = (attrs.get(self.username_field) or "").strip().lower()
        password = attrs.get("password")

        user = User.objects.filter(email=email).first()
        if user is None or not user.is_active or not user.check_password(password):
            logger.warning(f"Login failed for {email}")
            raise serializers.ValidationError({"error": self.error_messages["invalid_credentials"]})

        refresh = self.get_token(user)
        update_last_login(None, user)
        logger.info(f"Login successful for {user.email}")

        return {
            "refresh": str(refresh),
            "access": str(refresh.access_token),
            "user": {
                "id": user.id,
                "email": user.email,
                "first_name": user.first_name,
                "last_name": user.last_name,
                "role": user.role,
            },
        }

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token["role"] = user.role
        return token


# ===========================================================
# 2. REGISTER SERIALIZER (public self-registration)
# ===========================================================
class RegisterSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, min_length=6, max_length=20)
    secret_word = serializers.CharField(write_only=True, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=User.ROLE_CHOICES, required=False, default=User.ROLE_EMPLOYEE)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "password",
            "first_name",
            "last_name",
            "middle_name",
            "birth_date",
            "phone",
            "programming_language",
            "role",
            "secret_word",
        ]
        read_only_fields = ["id"]
        extra_kwargs = {
            "email": {"min_length": 5},
            "first_name": {"min_length": 2},
            "last_name": {"min_length": 2},
            "middle_name": {"min_length": 2, "required": True, "allow_blank": False},
            "birth_date": {"required": True, "allow_null": False},
            "phone": {"required": True, "allow_blank": False},
            "programming_language": {"required": True, "allow_blank": False},
        }

    def validate_email(self, value):
        value = value.strip().lower()
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("User with this email already exists.")
        return value

    def create(self, validated_data):
        validated_data.pop("secret_word", None)
        password = validated_data.pop("password")
        email = validated_data.pop("email")
        return User.objects.create_user(email, password=password, **validated_data)


# ===========================================================
# 3. NESTED PROJECT SUMMARY
# ===========================================================
class UserProjectSerializer(serializers.ModelSerializer):
    """Projects nested under a user. ``wage`` is stripped for non-admins."""

    class Meta:
        model = Project
        fields = ["id", "name", "description", "wage", "active"]

    def to_representation(self, instance):
        rep = super().to_representation(instance)
        if not is_admin_request(self.context):
            rep.pop("wage", None)
        return rep


# ===========================================================
# 4. READ SERIALIZERS
# ===========================================================
class PublicUserSerializer(serializers.ModelSerializer):
    """What an employee may see about colleagues."""

    projects = UserProjectSerializer(many=True, read_only=True)

    class Meta:
        model = User
        fields = PUBLIC_FIELDS
        read_only_fields = PUBLIC_FIELDS


class UserSerializer(serializers.ModelSerializer):
    """Full record: admins, and users looking at themselves."""

    projects = UserProjectSerializer(many=True, read_only=True)
    full_name = serializers.CharField(source="get_full_name", read_only=True)

    class Meta:
        model = User
        fields = FULL_FIELDS + ["full_name"]
        read_only_fields = FULL_FIELDS + ["full_name"]


class UserSummarySerializer(serializers.ModelSerializer):
    """Compact user reference used by other modules."""

    class Meta:
        model = User
        fields = ["id", "first_name", "last_name", "email", "position"]
        read_only_fields = fields


# ===========================================================
# 5. WRITE SERIALIZERS
# ===========================================================
class UserWriteMixin(serializers.Serializer):
    project_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        required=False,
        write_only=True,
        error_messages={"not_a_list": "project_ids must be an array."},
    )

    def validate_project_ids(self, value):
        value = list(dict.fromkeys(value))
        found = Project.objects.filter(id__in=value).count()
        if found != len(value):
            raise serializers.ValidationError("Some projects not found.")
        return value

    def validate_vacation_dates(self, value):
        return normalize_vacation_dates(value)

    def validate_email(self, value):
        value = value.strip().lower()
        qs = User.objects.filter(email__iexact=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("User with this email already exists.")
        return value


class UserCreateSerializer(UserWriteMixin, serializers.ModelSerializer):
    """Admin-side employee creation."""

    password = serializers.CharField(write_only=True, min_length=6, max_length=20)
    role = serializers.ChoiceField(choices=User.ROLE_CHOICES, required=False, default=User.ROLE_EMPLOYEE)

    class Meta:
        model = User
        fields = list(EMPLOYEE_EDITABLE_FIELDS) + [
            f for f in ADMIN_ONLY_FIELDS if f != "project_ids"
        ] + ["id", "project_ids"]
        read_only_fields = ["id"]
        extra_kwargs = {
            "email": {"min_length": 5},
            "first_name": {"min_length": 2},
            "last_name": {"min_length": 2},
            "middle_name": {"min_length": 2},
        }

    @transaction.atomic
    def create(self, validated_data):
        project_ids = validated_data.pop("project_ids", None)
        password = validated_data.pop("password")
        email = validated_data.pop("email")

        user = User.objects.create_user(email, password=password, **validated_data)
        if project_ids:
            user.projects.set(project_ids)
        return user

    def to_representation(self, instance):
        return UserSerializer(instance, context=self.context).data


class UserUpdateSerializer(UserWriteMixin, serializers.ModelSerializer):
    """
    Partial update of a user record.

    Which keys the caller may send is decided by the view; this
    serializer only validates and applies them.
    """

    password = serializers.CharField(write_only=True, min_length=6, max_length=20, required=False)
    role = serializers.ChoiceField(choices=User.ROLE_CHOICES, required=False)

    class Meta:
        model = User
        fields = list(EMPLOYEE_EDITABLE_FIELDS) + list(ADMIN_ONLY_FIELDS)
        extra_kwargs = {
            "email": {"min_length": 5},
            "first_name": {"min_length": 2},
            "last_name": {"min_length": 2},
            "middle_name": {"min_length": 2},
            "phone": {"allow_blank": False},
            "programming_language": {"allow_blank": False},
            "country": {"allow_blank": False},
            "bank_card": {"allow_blank": False},
        }

    @transaction.atomic
    def update(self, instance, validated_data):
        project_ids = validated_data.pop("project_ids", None)
        password = validated_data.pop("password", None)

        for field, value in validated_data.items():
            setattr(instance, field, value)
        if password:
            instance.set_password(password)
        instance.save()

        if project_ids is not None:
            instance.projects.set(project_ids)
        return instance

    def to_representation(self, instance):
        return UserSerializer(instance, context=self.context).data
