# ===========================================================
# projects/views.py
# Employee Management System (EMS)
# ===========================================================

from django.contrib.auth import get_user_model
from django.db import transaction
from django.shortcuts import get_object_or_404
from django_filters import rest_framework as django_filters
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
import logging

from ems_backend.pagination import ProjectPagination
from users.permissions import IsAdminOrReadOnly
from .filters import ProjectFilter
from .models import Project
from .serializers import (
    AddEmployeeSerializer,
    AssignEmployeesSerializer,
    ProjectDetailSerializer,
    ProjectEmployeeSerializer,
    ProjectSerializer,
)

logger = logging.getLogger("projects")
User = get_user_model()


class ProjectViewSet(viewsets.ModelViewSet):
    """
    /api/projects/

    GET     /                               → list (?active=, ?search=)
    POST    /                               → create (admin)
    GET     /{id}/                          → retrieve with employees
    PUT     /{id}/                          → update (admin)
    DELETE  /{id}/                          → delete (admin)
    GET     /{id}/employees/                → employees on the project
    POST    /{id}/employees/                → replace employee set (admin)
    POST    /{id}/employee/                 → add one employee (admin)
    DELETE  /{id}/employees/{employee_id}/  → remove one employee (admin)
    """
    queryset = Project.objects.all()
    permission_classes = [IsAuthenticated, IsAdminOrReadOnly]
    pagination_class = ProjectPagination
    filter_backends = [django_filters.DjangoFilterBackend]
    filterset_class = ProjectFilter
    lookup_value_regex = r"\d+"

    def get_queryset(self):
        qs = super().get_queryset()
        if self.action in ("retrieve", "employees"):
            qs = qs.prefetch_related("employees")
        if self.action in ("update", "partial_update"):
            qs = qs.select_for_update()
        return qs

    def get_serializer_class(self):
        if self.action == "retrieve":
            return ProjectDetailSerializer
        return ProjectSerializer

    # -------------------------------------------------------
    # CRUD
    # -------------------------------------------------------
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        project = serializer.save()
        logger.info(f"Project '{project.name}' created by {request.user.email}")
        return Response(
            {"message": "Project created successfully.", "project": serializer.data},
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, *args, **kwargs):
        with transaction.atomic():
            project = self.get_object()
            serializer = self.get_serializer(project, data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            project = serializer.save()

        logger.info(f"Project {project.id} updated by {request.user.email}")
        return Response(
            {"message": "Project updated successfully.", "project": serializer.data},
            status=status.HTTP_200_OK,
        )

    def partial_update(self, request, *args, **kwargs):
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        project = self.get_object()
        name = project.name
        project.delete()
        logger.warning(f"Project '{name}' deleted by {request.user.email}")
        return Response({"message": "Project deleted successfully."}, status=status.HTTP_200_OK)

    # -------------------------------------------------------
    # Employees on a project
    # -------------------------------------------------------
    @action(detail=True, methods=["get", "post"])
    def employees(self, request, pk=None):
        if request.method == "POST":
            return self._assign_employees(request)

        project = self.get_object()
        serializer = ProjectEmployeeSerializer(
            project.employees.all(), many=True, context=self.get_serializer_context()
        )
        return Response({"employees": serializer.data}, status=status.HTTP_200_OK)

    def _assign_employees(self, request):
        serializer = AssignEmployeesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        employee_ids = serializer.validated_data["employee_ids"]

        with transaction.atomic():
            project = self.get_object()
            project.employees.set(employee_ids)

        logger.info(f"Project {project.id} employees set to {employee_ids} by {request.user.email}")
        return Response(
            {"message": "Employees assigned successfully.", "employee_ids": employee_ids},
            status=status.HTTP_200_OK,
        )

    @action(detail=True, methods=["post"], url_path="employee")
    def add_employee(self, request, pk=None):
        serializer = AddEmployeeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        project = self.get_object()
        employee = User.objects.filter(pk=serializer.validated_data["employee_id"]).first()
        if employee is None:
            return Response({"error": "Employee not found."}, status=status.HTTP_404_NOT_FOUND)

        project.employees.add(employee)
        logger.info(f"Employee {employee.email} added to project {project.id}")
        return Response({"message": "Employee added to project."}, status=status.HTTP_200_OK)

    @action(
        detail=True,
        methods=["delete"],
        url_path=r"employees/(?P<employee_id>\d+)",
    )
    def remove_employee(self, request, pk=None, employee_id=None):
        project = self.get_object()
        employee = get_object_or_404(User, pk=employee_id)

        project.employees.remove(employee)
        logger.info(f"Employee {employee.email} removed from project {project.id}")
        return Response({"message": "Employee removed from project."}, status=status.HTTP_200_OK)
