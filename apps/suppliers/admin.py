from django.contrib import admin
from apps.suppliers.models import Supplier


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    """Admin interface for Suppliers."""

    list_display = ['name', 'company', 'phone', 'created_at']
    list_filter = ['company']
    search_fields = ['name', 'phone']
    readonly_fields = ['created_at', 'updated_at']
