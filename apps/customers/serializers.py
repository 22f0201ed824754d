from rest_framework import serializers

from apps.common.serializers import CompanyFilterSerializer
from .models import (
    Customer,
    CustomerContact,
    CustomerSite,
    CustomerStatus,
    CustomerType,
)


def _name(max_length, **kwargs):
    return serializers.CharField(
        min_length=2,
        max_length=max_length,
        error_messages={'min_length': "Name must be at least 2 characters"},
        **kwargs
    )


def _optional(max_length=None, **kwargs):
    """Optional text. Blank and null both end up as ''."""
    return serializers.CharField(
        max_length=max_length,
        required=False,
        allow_blank=True,
        allow_null=True,
        **kwargs
    )


def _optional_email():
    return serializers.EmailField(max_length=100, required=False, allow_blank=True, allow_null=True)


class OptionalTextMixin:
    """Turns ``None`` in optional text fields into ''."""

    optional_fields = ()

    def validate(self, attrs):
        attrs = super().validate(attrs)
        for field in self.optional_fields:
            if field in attrs and attrs[field] is None:
                attrs[field] = ''
        return attrs

    def validate_name(self, value):
        value = value.strip()
        if len(value) < 2:
            raise serializers.ValidationError("Name must be at least 2 characters")
        return value


# =============================================================================
# Contacts and sites
# =============================================================================

class CustomerContactSerializer(serializers.ModelSerializer):
    customer_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = CustomerContact
        fields = [
            'id',
            'customer_id',
            'name',
            'phone',
            'role',
            'department',
            'email',
            'is_primary',
            'notes',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class CustomerContactCreateSerializer(OptionalTextMixin, serializers.Serializer):
    optional_fields = ('role', 'department', 'email', 'notes')

    name = _name(100)
    phone = serializers.CharField(max_length=20)
    role = _optional(100)
    department = _optional(100)
    email = _optional_email()
    is_primary = serializers.BooleanField(default=False)
    notes = _optional()


class CustomerContactUpdateSerializer(OptionalTextMixin, serializers.Serializer):
    optional_fields = ('role', 'department', 'email', 'notes')

    name = _name(100, required=False)
    phone = serializers.CharField(max_length=20, required=False)
    role = _optional(100)
    department = _optional(100)
    email = _optional_email()
    is_primary = serializers.BooleanField(required=False)
    notes = _optional()


class CustomerSiteSerializer(serializers.ModelSerializer):
    customer_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = CustomerSite
        fields = [
            'id',
            'customer_id',
            'name',
            'address',
            'city',
            'gps_coordinates',
            'landmarks',
            'notes',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class CustomerSiteCreateSerializer(OptionalTextMixin, serializers.Serializer):
    optional_fields = ('address', 'city', 'gps_coordinates', 'landmarks', 'notes')

    name = _name(200)
    address = _optional(500)
    city = _optional(100)
    gps_coordinates = _optional(50)
    landmarks = _optional(200)
    notes = _optional()


class CustomerSiteUpdateSerializer(CustomerSiteCreateSerializer):
    name = _name(200, required=False)


# =============================================================================
# Customers
# =============================================================================

class CustomerSerializer(serializers.ModelSerializer):
    """Main serializer for customers."""

    company_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Customer
        fields = [
            'id',
            'company_id',
            'name',
            'customer_type',
            'status',
            'phone',
            'email',
            'address',
            'notes',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class CustomerDetailSerializer(CustomerSerializer):
    """Customer with contacts and live sites."""

    contacts = CustomerContactSerializer(many=True, read_only=True)
    sites = CustomerSiteSerializer(many=True, read_only=True)

    class Meta(CustomerSerializer.Meta):
        fields = CustomerSerializer.Meta.fields + ['contacts', 'sites']
        read_only_fields = fields


class CustomerCreateSerializer(OptionalTextMixin, serializers.Serializer):
    optional_fields = ('phone', 'email', 'address', 'notes')

    company = serializers.UUIDField()
    name = _name(200)
    customer_type = serializers.ChoiceField(choices=CustomerType.choices, default=CustomerType.COMPANY)
    status = serializers.ChoiceField(choices=CustomerStatus.choices, default=CustomerStatus.ACTIVE)
    phone = _optional(20)
    email = _optional_email()
    address = _optional(500)
    notes = _optional()


class CustomerUpdateSerializer(OptionalTextMixin, serializers.Serializer):
    """Partial update. ``null`` clears an optional field."""

    optional_fields = ('phone', 'email', 'address', 'notes')

    name = _name(200, required=False)
    customer_type = serializers.ChoiceField(choices=CustomerType.choices, required=False)
    status = serializers.ChoiceField(choices=CustomerStatus.choices, required=False)
    phone = _optional(20)
    email = _optional_email()
    address = _optional(500)
    notes = _optional()


class CustomerFilterSerializer(CompanyFilterSerializer):
    status = serializers.ChoiceField(choices=CustomerStatus.choices, required=False)
    customer_type = serializers.ChoiceField(choices=CustomerType.choices, required=False)
