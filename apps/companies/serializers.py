from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer
from .models import Company, CompanyMember


class CompanySerializer(serializers.ModelSerializer):
    """Main serializer for companies."""

    class Meta:
        model = Company
        fields = ['id', 'name', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']


class CompanyMembershipSerializer(serializers.ModelSerializer):
    """A membership of the current user, with its company."""

    company = CompanySerializer(read_only=True)
    company_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = CompanyMember
        fields = ['id', 'company_id', 'company', 'role', 'created_at']
        read_only_fields = fields


class CompanyMemberSerializer(serializers.ModelSerializer):
    """Detailed member information."""

    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = CompanyMember
        fields = ['id', 'user', 'role', 'created_at']
        read_only_fields = fields


class CompanyInputSerializer(serializers.Serializer):
    """Input for onboarding and renaming a company."""

    name = serializers.CharField(max_length=200)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Company name is required")
        return value
