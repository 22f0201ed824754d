from django.contrib import admin
from apps.equipment.models import EquipmentPartner
from apps.partners.models import Partner


class OwnershipInline(admin.TabularInline):
    """Read-only view of the partner's equipment shares."""
    model = EquipmentPartner
    extra = 0
    fields = ['equipment', 'percentage', 'created_at']
    readonly_fields = fields
    can_delete = False


@admin.register(Partner)
class PartnerAdmin(admin.ModelAdmin):
    """Admin interface for Partners."""

    list_display = ['name', 'company', 'phone', 'created_at']
    list_filter = ['company']
    search_fields = ['name', 'phone']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [OwnershipInline]
