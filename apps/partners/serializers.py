from rest_framework import serializers

from apps.common.serializers import CompanyFilterSerializer
from apps.equipment.models import EquipmentPartner
from .models import Partner


class PartnerSerializer(serializers.ModelSerializer):
    """Main serializer for partners."""

    company_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Partner
        fields = ['id', 'company_id', 'name', 'phone', 'created_at', 'updated_at']
        read_only_fields = fields


class PartnerListSerializer(PartnerSerializer):
    equipment_count = serializers.IntegerField(read_only=True)

    class Meta(PartnerSerializer.Meta):
        fields = PartnerSerializer.Meta.fields + ['equipment_count']
        read_only_fields = fields


class PartnerShareSerializer(serializers.ModelSerializer):
    """One equipment record the partner co-owns, with the share."""

    equipment_id = serializers.UUIDField(source='equipment.id', read_only=True)
    equipment_name = serializers.CharField(source='equipment.name', read_only=True)
    serial_number = serializers.CharField(source='equipment.serial_number', read_only=True)
    status = serializers.CharField(source='equipment.status', read_only=True)

    class Meta:
        model = EquipmentPartner
        fields = ['id', 'equipment_id', 'equipment_name', 'serial_number', 'status', 'percentage']
        read_only_fields = fields


class PartnerDetailSerializer(PartnerSerializer):
    """Partner with linked equipment and percentages."""

    equipment = serializers.SerializerMethodField()

    class Meta(PartnerSerializer.Meta):
        fields = PartnerSerializer.Meta.fields + ['equipment']
        read_only_fields = fields

    def get_equipment(self, obj):
        shares = obj.ownerships.select_related('equipment').order_by('equipment__name')
        return PartnerShareSerializer(shares, many=True).data


class PartnerCreateSerializer(serializers.Serializer):
    """Input for creating a partner."""

    company = serializers.UUIDField()
    name = serializers.CharField(max_length=200)
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Partner name is required")
        return value


class PartnerUpdateSerializer(serializers.Serializer):
    """Partial update. ``phone: null`` clears the phone number."""

    name = serializers.CharField(max_length=200, required=False)
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Partner name is required")
        return value

    def validate_phone(self, value):
        return value or ''


class PartnerFilterSerializer(CompanyFilterSerializer):
    """Query params for the partner list."""
    pass
