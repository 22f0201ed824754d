from django.contrib import admin
from apps.equipment.models import Equipment, EquipmentPartner, EquipmentType


class EquipmentPartnerInline(admin.TabularInline):
    """Inline admin for partner shares."""
    model = EquipmentPartner
    extra = 0
    fields = ['partner', 'percentage', 'created_at']
    readonly_fields = ['created_at']


@admin.register(Equipment)
class EquipmentAdmin(admin.ModelAdmin):
    """Admin interface for Equipment."""

    list_display = ['name', 'serial_number', 'company', 'ownership_type', 'status', 'created_at']
    list_filter = ['ownership_type', 'status', 'equipment_type']
    search_fields = ['name', 'serial_number', 'model']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [EquipmentPartnerInline]

    fieldsets = (
        ('Basic Info', {
            'fields': ('company', 'name', 'serial_number', 'equipment_type', 'model', 'status')
        }),
        ('Ownership', {
            'fields': ('ownership_type', 'supplier', 'monthly_rent', 'daily_rent')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(EquipmentType)
class EquipmentTypeAdmin(admin.ModelAdmin):
    """Admin interface for Equipment Types. Types without company are system defaults."""

    list_display = ['name', 'company', 'created_at']
    search_fields = ['name']
