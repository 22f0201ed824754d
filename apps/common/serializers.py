from rest_framework import serializers


class CompanyFilterSerializer(serializers.Serializer):
    """Query parameters shared by every company-scoped list endpoint."""

    company = serializers.UUIDField(required=True)
    search = serializers.CharField(required=False, allow_blank=True, max_length=200)

    def validate_search(self, value):
        return value.strip()
