from decimal import Decimal

from rest_framework import serializers

from apps.common.serializers import CompanyFilterSerializer
from apps.suppliers.serializers import SupplierSerializer
from .models import Equipment, EquipmentPartner, EquipmentStatus, EquipmentType, OwnershipType


# =============================================================================
# Equipment types
# =============================================================================

class EquipmentTypeSerializer(serializers.ModelSerializer):
    company_id = serializers.UUIDField(read_only=True, allow_null=True)
    is_system_default = serializers.BooleanField(read_only=True)

    class Meta:
        model = EquipmentType
        fields = ['id', 'company_id', 'name', 'is_system_default', 'created_at']
        read_only_fields = fields


class EquipmentTypeCreateSerializer(serializers.Serializer):
    company = serializers.UUIDField()
    name = serializers.CharField(max_length=100)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Type name is required")
        return value


class EquipmentTypeFilterSerializer(serializers.Serializer):
    company = serializers.UUIDField(required=True)


# =============================================================================
# Equipment
# =============================================================================

class EquipmentSerializer(serializers.ModelSerializer):
    """List representation with type and supplier name."""

    company_id = serializers.UUIDField(read_only=True)
    equipment_type = EquipmentTypeSerializer(read_only=True)
    supplier_id = serializers.UUIDField(read_only=True, allow_null=True)
    supplier_name = serializers.CharField(source='supplier.name', read_only=True, default=None)

    class Meta:
        model = Equipment
        fields = [
            'id',
            'company_id',
            'name',
            'serial_number',
            'equipment_type',
            'model',
            'ownership_type',
            'status',
            'supplier_id',
            'supplier_name',
            'monthly_rent',
            'daily_rent',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class EquipmentDetailSerializer(EquipmentSerializer):
    """Detail representation with the full supplier."""

    supplier = SupplierSerializer(read_only=True, allow_null=True)

    class Meta(EquipmentSerializer.Meta):
        fields = EquipmentSerializer.Meta.fields + ['supplier']
        read_only_fields = fields


class EquipmentCreateSerializer(serializers.Serializer):
    """
    Input for creating equipment.

    Whether the rental fields are required depends on ``ownership_type``;
    that rule is enforced by the service layer.
    """

    company = serializers.UUIDField()
    name = serializers.CharField(max_length=200)
    serial_number = serializers.CharField(max_length=100)
    equipment_type_id = serializers.UUIDField()
    model = serializers.CharField(max_length=200, required=False, allow_blank=True, allow_null=True)
    ownership_type = serializers.ChoiceField(choices=OwnershipType.choices, default=OwnershipType.OWNED)
    supplier_id = serializers.UUIDField(required=False, allow_null=True)
    monthly_rent = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal('0.01'), required=False, allow_null=True
    )
    daily_rent = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal('0.01'), required=False, allow_null=True
    )

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Equipment name is required")
        return value

    def validate_serial_number(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Serial number is required")
        return value

    def validate_model(self, value):
        return value or ''


class EquipmentUpdateSerializer(EquipmentCreateSerializer):
    """Partial update input. Only the fields sent are changed."""

    company = None
    name = serializers.CharField(max_length=200, required=False)
    serial_number = serializers.CharField(max_length=100, required=False)
    equipment_type_id = serializers.UUIDField(required=False)
    ownership_type = serializers.ChoiceField(choices=OwnershipType.choices, required=False)
    status = serializers.ChoiceField(choices=EquipmentStatus.choices, required=False)


class EquipmentFilterSerializer(CompanyFilterSerializer):
    status = serializers.ChoiceField(choices=EquipmentStatus.choices, required=False)
    ownership_type = serializers.ChoiceField(choices=OwnershipType.choices, required=False)
    equipment_type = serializers.UUIDField(required=False)


# =============================================================================
# Partner ownership
# =============================================================================

class EquipmentPartnerSerializer(serializers.ModelSerializer):
    """Ledger row with the partner name."""

    equipment_id = serializers.UUIDField(read_only=True)
    partner_id = serializers.UUIDField(read_only=True)
    partner_name = serializers.CharField(source='partner.name', read_only=True)

    class Meta:
        model = EquipmentPartner
        fields = ['id', 'equipment_id', 'partner_id', 'partner_name', 'percentage', 'created_at']
        read_only_fields = fields


class EquipmentPartnerCreateSerializer(serializers.Serializer):
    """
    Input for adding a partner share.

    ``percentage`` is taken as given (number or numeric string) and checked
    by the ledger, which reports unparseable values itself.
    """

    partner_id = serializers.UUIDField()
    percentage = serializers.CharField(allow_blank=True)


class EquipmentPartnerUpdateSerializer(serializers.Serializer):
    percentage = serializers.CharField(allow_blank=True)


class OwnershipSummarySerializer(serializers.Serializer):
    """Ledger rows plus the derived company share."""

    equipment_id = serializers.UUIDField(source='equipment.id')
    ownership_type = serializers.CharField(source='equipment.ownership_type')
    rows = EquipmentPartnerSerializer(many=True)
    partner_total = serializers.DecimalField(max_digits=10, decimal_places=2)
    company_share = serializers.DecimalField(max_digits=10, decimal_places=2)
    warning = serializers.SerializerMethodField()

    def get_warning(self, obj):
        if obj.warning is None:
            return None
        return {'code': obj.warning.code, 'message': obj.warning.message}
