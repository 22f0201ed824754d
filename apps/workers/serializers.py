from decimal import Decimal

from rest_framework import serializers

from apps.common.serializers import CompanyFilterSerializer
from .models import (
    EquipmentBrand,
    Software,
    Worker,
    WorkerCategory,
    WorkerEquipmentSkill,
    WorkerSoftwareSkill,
    WorkerStatus,
)


# =============================================================================
# Catalogues
# =============================================================================

class SoftwareSerializer(serializers.ModelSerializer):
    company_id = serializers.UUIDField(read_only=True, allow_null=True)
    is_seeded = serializers.BooleanField(read_only=True)

    class Meta:
        model = Software
        fields = ['id', 'company_id', 'name', 'is_seeded', 'created_at']
        read_only_fields = fields


class EquipmentBrandSerializer(serializers.ModelSerializer):
    company_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = EquipmentBrand
        fields = ['id', 'company_id', 'name', 'created_at']
        read_only_fields = fields


class CatalogEntryCreateSerializer(serializers.Serializer):
    """Input for a new software or brand entry."""

    company = serializers.UUIDField()
    name = serializers.CharField(max_length=100)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name is required")
        return value


class CatalogFilterSerializer(serializers.Serializer):
    company = serializers.UUIDField(required=True)


# =============================================================================
# Skills
# =============================================================================

def _proficiency_rating():
    return serializers.IntegerField(min_value=1, max_value=5)


class WorkerEquipmentSkillSerializer(serializers.ModelSerializer):
    worker_id = serializers.UUIDField(read_only=True)
    equipment_type_id = serializers.UUIDField(read_only=True)
    equipment_type_name = serializers.CharField(source='equipment_type.name', read_only=True)
    equipment_brand_id = serializers.UUIDField(read_only=True)
    equipment_brand_name = serializers.CharField(source='equipment_brand.name', read_only=True)

    class Meta:
        model = WorkerEquipmentSkill
        fields = [
            'id',
            'worker_id',
            'equipment_type_id',
            'equipment_type_name',
            'equipment_brand_id',
            'equipment_brand_name',
            'proficiency_rating',
            'created_at',
        ]
        read_only_fields = fields


class WorkerEquipmentSkillCreateSerializer(serializers.Serializer):
    equipment_type_id = serializers.UUIDField()
    equipment_brand_id = serializers.UUIDField()
    proficiency_rating = _proficiency_rating()


class WorkerEquipmentSkillUpdateSerializer(serializers.Serializer):
    proficiency_rating = _proficiency_rating()


class WorkerSoftwareSkillSerializer(serializers.ModelSerializer):
    worker_id = serializers.UUIDField(read_only=True)
    software = SoftwareSerializer(read_only=True)

    class Meta:
        model = WorkerSoftwareSkill
        fields = ['id', 'worker_id', 'software', 'created_at']
        read_only_fields = fields


class WorkerSoftwareSkillCreateSerializer(serializers.Serializer):
    software_id = serializers.UUIDField()


# =============================================================================
# Workers
# =============================================================================

class WorkerSerializer(serializers.ModelSerializer):
    """Main serializer for workers."""

    company_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Worker
        fields = [
            'id',
            'company_id',
            'name',
            'phone',
            'category',
            'salary_month',
            'salary_day',
            'status',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class WorkerDetailSerializer(WorkerSerializer):
    """Worker with equipment and software skills."""

    equipment_skills = WorkerEquipmentSkillSerializer(many=True, read_only=True)
    software_skills = WorkerSoftwareSkillSerializer(many=True, read_only=True)

    class Meta(WorkerSerializer.Meta):
        fields = WorkerSerializer.Meta.fields + ['equipment_skills', 'software_skills']
        read_only_fields = fields


def _non_negative_salary(**kwargs):
    return serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0'), **kwargs)


class WorkerCreateSerializer(serializers.Serializer):
    """
    Input for creating a worker, optionally with initial skills.

    At least one of the two salaries must be positive.
    """

    company = serializers.UUIDField()
    name = serializers.CharField(max_length=100)
    phone = serializers.CharField(max_length=50)
    category = serializers.ChoiceField(choices=WorkerCategory.choices)
    salary_month = _non_negative_salary(default=Decimal('0'))
    salary_day = _non_negative_salary(default=Decimal('0'))
    equipment_skills = WorkerEquipmentSkillCreateSerializer(many=True, required=False)
    software_ids = serializers.ListField(child=serializers.UUIDField(), required=False)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name is required")
        return value

    def validate_phone(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Phone is required")
        return value

    def validate(self, attrs):
        if not (attrs['salary_month'] > 0 or attrs['salary_day'] > 0):
            raise serializers.ValidationError(
                {'salary_month': "At least one salary must be greater than 0"}
            )
        return attrs


class WorkerUpdateSerializer(serializers.Serializer):
    """Partial update. The salary rule is checked by the service on the result."""

    name = serializers.CharField(max_length=100, required=False)
    phone = serializers.CharField(max_length=50, required=False)
    category = serializers.ChoiceField(choices=WorkerCategory.choices, required=False)
    salary_month = _non_negative_salary(required=False)
    salary_day = _non_negative_salary(required=False)
    status = serializers.ChoiceField(choices=WorkerStatus.choices, required=False)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name is required")
        return value

    def validate_phone(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Phone is required")
        return value


class WorkerFilterSerializer(CompanyFilterSerializer):
    status = serializers.ChoiceField(choices=WorkerStatus.choices, required=False)
    category = serializers.ChoiceField(choices=WorkerCategory.choices, required=False)
