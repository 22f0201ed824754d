from django.db import models
from django.db.models import Q
import uuid


class OwnershipType(models.TextChoices):
    OWNED = 'owned', 'Owned'
    RENTED = 'rented', 'Rented'


class EquipmentStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    INACTIVE = 'inactive', 'Inactive'


class EquipmentType(models.Model):
    """
    Category of equipment.

    Types without a company are system defaults shared by every company.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='equipment_types'
    )
    name = models.CharField(max_length=100)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'equipment_types'
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(fields=['company', 'name'], name='unique_equipment_type_per_company'),
        ]

    def __str__(self):
        return self.name

    @property
    def is_system_default(self):
        return self.company_id is None


class Equipment(models.Model):
    """
    Physical asset of a company.

    Owned equipment can be shared with partners; rented equipment carries a
    supplier and rents instead. The check constraint keeps the rental fields
    in line with ``ownership_type``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey('companies.Company', on_delete=models.CASCADE, related_name='equipment')
    name = models.CharField(max_length=200)
    serial_number = models.CharField(max_length=100)
    equipment_type = models.ForeignKey(EquipmentType, on_delete=models.PROTECT, related_name='equipment')
    model = models.CharField(max_length=200, blank=True)
    ownership_type = models.CharField(max_length=10, choices=OwnershipType.choices, default=OwnershipType.OWNED)
    status = models.CharField(max_length=10, choices=EquipmentStatus.choices, default=EquipmentStatus.ACTIVE)

    # Rental fields, only set for rented equipment
    supplier = models.ForeignKey(
        'suppliers.Supplier',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='equipment'
    )
    monthly_rent = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    daily_rent = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'equipment'
        ordering = ['-created_at']
        verbose_name_plural = 'equipment'
        constraints = [
            models.UniqueConstraint(fields=['company', 'serial_number'], name='unique_equipment_serial_per_company'),
            models.CheckConstraint(
                condition=(
                    Q(
                        ownership_type=OwnershipType.OWNED,
                        supplier__isnull=True,
                        monthly_rent__isnull=True,
                        daily_rent__isnull=True,
                    )
                    | Q(
                        ownership_type=OwnershipType.RENTED,
                        supplier__isnull=False,
                        monthly_rent__gt=0,
                        daily_rent__gt=0,
                    )
                ),
                name='equipment_rental_fields_match_ownership',
            ),
        ]
        indexes = [
            models.Index(fields=['company', 'status'], name='equipment_company_status_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.serial_number})"

    @property
    def is_owned(self):
        return self.ownership_type == OwnershipType.OWNED


class EquipmentPartner(models.Model):
    """
    Ledger row: a partner's percentage share of one owned equipment record.

    Whatever the partners do not hold is the company share, which is never
    stored.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    equipment = models.ForeignKey(Equipment, on_delete=models.CASCADE, related_name='partner_rows')
    partner = models.ForeignKey('partners.Partner', on_delete=models.CASCADE, related_name='ownerships')
    percentage = models.DecimalField(max_digits=5, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'equipment_partners'
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(fields=['equipment', 'partner'], name='unique_equipment_partner'),
            models.CheckConstraint(
                condition=Q(percentage__gte=1) & Q(percentage__lte=99),
                name='equipment_partner_percentage_range',
            ),
        ]

    def __str__(self):
        return f"{self.partner} holds {self.percentage}% of {self.equipment}"
