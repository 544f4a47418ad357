# ===========================================================
# ems_backend/pagination.py
# ===========================================================
from django.core.paginator import Page
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class LimitPagePagination(PageNumberPagination):
    """
    ?page=<n>&limit=<size> pagination shared by every list endpoint.
    ``limit`` is clamped to 1..100 and page numbers below 1 fall back
    to the first page. Pages past the end are empty rather than 404.
    """
    page_size = 10
    page_size_query_param = "limit"
    max_page_size = 100

    def get_page_size(self, request):
        raw = request.query_params.get(self.page_size_query_param)
        if raw is None:
            return self.page_size
        try:
            return max(1, min(int(raw), self.max_page_size))
        except (TypeError, ValueError):
            return self.page_size

    def get_page_number(self, request, paginator):
        page_number = request.query_params.get(self.page_query_param, 1)
        if page_number in self.last_page_strings:
            return paginator.num_pages
        try:
            return max(1, int(page_number))
        except (TypeError, ValueError):
            return 1

    def paginate_queryset(self, queryset, request, view=None):
        self.request = request
        paginator = self.django_paginator_class(queryset, self.get_page_size(request))
        page_number = self.get_page_number(request, paginator)

        if page_number > paginator.num_pages:
            self.page = Page([], page_number, paginator)
        else:
            self.page = paginator.page(page_number)

        if paginator.num_pages > 1 and self.template is not None:
            self.display_page_controls = True
        return list(self.page)

    def get_previous_link(self):
        if self.page.number > self.page.paginator.num_pages:
            return None
        return super().get_previous_link()

    def get_paginated_response(self, data):
        return Response(
            {
                "count": self.page.paginator.count,
                "total_pages": self.page.paginator.num_pages,
                "current_page": self.page.number,
                "page_size": self.get_page_size(self.request),
                "next": self.get_next_link(),
                "previous": self.get_previous_link(),
                "results": data,
            }
        )


class ProjectPagination(LimitPagePagination):
    page_size = 100
