from django.contrib import admin
from django.http import JsonResponse
from django.urls import path, include, re_path
from drf_yasg.views import get_schema_view
from drf_yasg import openapi
from rest_framework import permissions


def health(request):
    return JsonResponse({"status": "ok"})


# Swagger schema setup
schema_view = get_schema_view(
    openapi.Info(
        title="EMS API",
        default_version="v1",
        description="Employee Management System API documentation",
        contact=openapi.Contact(email="support@ems.local"),
        license=openapi.License(name="BSD License"),
    ),
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    path("health/", health, name="health"),

    # Admin panel
    path("admin/", admin.site.urls),

    # API modules
    path("api/auth/", include("users.urls_auth")),
    path("api/users/", include("users.urls")),
    path("api/projects/", include("projects.urls")),
    path("api/notifications/", include("notifications.urls")),

    # Swagger and Redoc routes
    re_path(r"^swagger(?P<format>\.json|\.yaml)$", schema_view.without_ui(cache_timeout=0), name="schema-json"),
    path("swagger/", schema_view.with_ui("swagger", cache_timeout=0), name="schema-swagger-ui"),
    path("redoc/", schema_view.with_ui("redoc", cache_timeout=0), name="schema-redoc"),
]
