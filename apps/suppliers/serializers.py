from rest_framework import serializers

from apps.common.serializers import CompanyFilterSerializer
from apps.equipment.models import Equipment
from .models import Supplier


class SupplierSerializer(serializers.ModelSerializer):
    """Main serializer for suppliers."""

    company_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Supplier
        fields = ['id', 'company_id', 'name', 'phone', 'created_at', 'updated_at']
        read_only_fields = fields


class SupplierListSerializer(SupplierSerializer):
    """List rows carry the number of linked equipment records."""

    equipment_count = serializers.IntegerField(read_only=True)

    class Meta(SupplierSerializer.Meta):
        fields = SupplierSerializer.Meta.fields + ['equipment_count']
        read_only_fields = fields


class SupplierEquipmentSerializer(serializers.ModelSerializer):
    """Equipment rented from a supplier, with its rents."""

    class Meta:
        model = Equipment
        fields = ['id', 'name', 'serial_number', 'status', 'monthly_rent', 'daily_rent']
        read_only_fields = fields


class SupplierDetailSerializer(SupplierSerializer):
    """Supplier with its linked equipment."""

    equipment = serializers.SerializerMethodField()

    class Meta(SupplierSerializer.Meta):
        fields = SupplierSerializer.Meta.fields + ['equipment']
        read_only_fields = fields

    def get_equipment(self, obj):
        return SupplierEquipmentSerializer(obj.equipment.order_by('name'), many=True).data


class SupplierCreateSerializer(serializers.Serializer):
    """Input for creating a supplier."""

    company = serializers.UUIDField()
    name = serializers.CharField(max_length=200)
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Supplier name is required")
        return value


class SupplierUpdateSerializer(serializers.Serializer):
    """Partial update. ``phone: null`` clears the phone number."""

    name = serializers.CharField(max_length=200, required=False)
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Supplier name is required")
        return value

    def validate_phone(self, value):
        return value or ''


class SupplierFilterSerializer(CompanyFilterSerializer):
    """Query params for the supplier list."""
    pass
