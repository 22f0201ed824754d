from rest_framework.pagination import LimitOffsetPagination


class ListPagination(LimitOffsetPagination):
    """limit/offset pagination for company lists (50 rows by default)."""
    default_limit = 50
    max_limit = 200
