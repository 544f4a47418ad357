# ===========================================================
# users/views.py
# Employee Management System (EMS)
# ===========================================================

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django_filters import rest_framework as django_filters
from rest_framework import filters, generics, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
import logging

from notifications import services as notification_services
from .permissions import IsAdmin, IsSelfOrAdmin
from .serializers import (
    ADMIN_ONLY_FIELDS,
    EmailTokenObtainPairSerializer,
    PublicUserSerializer,
    RegisterSerializer,
    UserCreateSerializer,
    UserSerializer,
    UserUpdateSerializer,
)

logger = logging.getLogger("users")
User = get_user_model()


# ===========================================================
# 1. LOGIN (email + password)
# ===========================================================
class LoginView(TokenObtainPairView):
    """
    POST /api/auth/login/
    Returns a JWT pair and a small user payload.
    """
    serializer_class = EmailTokenObtainPairSerializer
    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        return Response(
            {
                "refresh": data["refresh"],
                "access": data["access"],
                "user": data["user"],
                "message": "Login successful.",
            },
            status=status.HTTP_200_OK,
        )


# ===========================================================
# 2. REFRESH TOKEN
# ===========================================================
class RefreshTokenView(TokenRefreshView):
    """
    POST /api/auth/token/refresh/
    """
    permission_classes = [AllowAny]


# ===========================================================
# 3. REGISTER (public)
# ===========================================================
class RegisterView(generics.CreateAPIView):
    """
    POST /api/auth/register/
    Anyone may register as an employee. Registering as an admin
    requires the configured secret word.
    """
    queryset = User.objects.all()
    serializer_class = RegisterSerializer
    permission_classes = [AllowAny]
    authentication_classes = []

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        if serializer.validated_data.get("role") == User.ROLE_ADMIN:
            if serializer.validated_data.get("secret_word") != settings.ADMIN_SECRET_WORD:
                logger.warning(f"Admin registration rejected for {serializer.validated_data['email']}")
                raise PermissionDenied("Invalid secret word for admin registration.")

        user = serializer.save()
        logger.info(f"User {user.email} registered as {user.role}")
        return Response(
            {"message": "User registered successfully.", "user_id": user.id},
            status=status.HTTP_201_CREATED,
        )


# ===========================================================
# 4. USER DIRECTORY / CRUD
# ===========================================================
class UserFilter(django_filters.FilterSet):
    first_name = django_filters.CharFilter(lookup_expr="icontains")
    last_name = django_filters.CharFilter(lookup_expr="icontains")

    class Meta:
        model = User
        fields = ["first_name", "last_name"]


class UserViewSet(viewsets.ModelViewSet):
    """
    /api/users/

    GET     /                 → list (admins see HR fields)
    POST    /                 → create employee (admin)
    GET     /profile/         → current user with projects
    GET     /{id}/            → retrieve
    PUT     /{id}/            → update self, or anyone as admin
    PATCH   /{id}/            → same as PUT
    DELETE  /{id}/            → delete employee (admin)

    Query Parameters (list):
      - first_name, last_name: case-insensitive substring
      - ordering: registration_date | programming_language | country |
        mentor_name | english_level | position (prefix "-" for DESC)
      - page, limit (max 100)
    """
    queryset = User.objects.prefetch_related("projects").all()
    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"
    filter_backends = [django_filters.DjangoFilterBackend, filters.OrderingFilter]
    filterset_class = UserFilter
    ordering_fields = [
        "registration_date",
        "programming_language",
        "country",
        "mentor_name",
        "english_level",
        "position",
    ]
    ordering = ["registration_date"]
    http_method_names = ["get", "post", "put", "patch", "delete", "head", "options"]

    def get_permissions(self):
        if self.action in ("create", "destroy"):
            return [IsAuthenticated(), IsAdmin()]
        if self.action in ("update", "partial_update"):
            return [IsAuthenticated(), IsSelfOrAdmin()]
        return super().get_permissions()

    def get_serializer_class(self):
        if getattr(self, "swagger_fake_view", False):
            return UserSerializer
        if self.action == "create":
            return UserCreateSerializer
        if self.action in ("update", "partial_update"):
            return UserUpdateSerializer
        if self.action == "profile" or self.request.user.is_admin():
            return UserSerializer
        if self.action == "retrieve" and str(self.kwargs.get("pk")) == str(self.request.user.pk):
            return UserSerializer
        return PublicUserSerializer

    # -------------------------------------------------------
    # Create (admin)
    # -------------------------------------------------------
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        notification_services.notify_employee_created(request.user, user)
        logger.info(f"Employee {user.email} created by admin {request.user.email}")

        return Response(
            {"message": "Employee created successfully.", "user": serializer.data},
            status=status.HTTP_201_CREATED,
        )

    # -------------------------------------------------------
    # Update (self or admin)
    # -------------------------------------------------------
    def update(self, request, *args, **kwargs):
        user = self.get_object()
        acting = request.user

        if not acting.is_admin():
            for field in ADMIN_ONLY_FIELDS:
                if field in request.data:
                    raise PermissionDenied(f"Only an admin can update the field {field}.")

        serializer = self.get_serializer(user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        changed_fields = list(serializer.validated_data.keys())
        user = serializer.save()

        if not acting.is_admin() and changed_fields:
            notification_services.notify_profile_update(user, changed_fields)

        logger.info(f"User {user.email} updated by {acting.email}: {', '.join(changed_fields) or 'no changes'}")
        return Response(
            {"message": "Data updated successfully.", "user": serializer.data},
            status=status.HTTP_200_OK,
        )

    def partial_update(self, request, *args, **kwargs):
        return self.update(request, *args, **kwargs)

    # -------------------------------------------------------
    # Delete (admin)
    # -------------------------------------------------------
    @transaction.atomic
    def destroy(self, request, *args, **kwargs):
        if str(kwargs.get("pk")) == str(request.user.pk):
            return Response(
                {"error": "You cannot delete your own account."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        user = User.objects.filter(pk=kwargs.get("pk"), role=User.ROLE_EMPLOYEE).first()
        if user is None:
            return Response({"error": "Employee not found."}, status=status.HTTP_404_NOT_FOUND)

        email = user.email
        user.delete()
        logger.warning(f"Employee {email} deleted by admin {request.user.email}")
        return Response({"message": "Employee deleted successfully."}, status=status.HTTP_200_OK)

    # -------------------------------------------------------
    # Current user's profile
    # -------------------------------------------------------
    @action(detail=False, methods=["get"])
    def profile(self, request):
        user = self.get_queryset().get(pk=request.user.pk)
        serializer = self.get_serializer(user)
        return Response(serializer.data, status=status.HTTP_200_OK)
