from django_filters import rest_framework as filters

from .models import Project


class ProjectFilter(filters.FilterSet):
    """
    ?active=true|false  → filter by status
    ?search=<text>      → case-insensitive name match (max 100 chars)
    """
    active = filters.BooleanFilter()
    search = filters.CharFilter(field_name="name", lookup_expr="icontains", max_length=100)

    class Meta:
        model = Project
        fields = ["active", "search"]
