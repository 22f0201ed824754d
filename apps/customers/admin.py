from django.contrib import admin
from apps.customers.models import Customer, CustomerContact, CustomerSite


class CustomerContactInline(admin.TabularInline):
    model = CustomerContact
    extra = 0
    fields = ['name', 'phone', 'role', 'email', 'is_primary']


class CustomerSiteInline(admin.TabularInline):
    model = CustomerSite
    extra = 0
    fields = ['name', 'city', 'address', 'deleted_at']
    readonly_fields = ['deleted_at']


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    """Admin interface for Customers. Deleted customers are listed too."""

    list_display = ['name', 'company', 'customer_type', 'status', 'phone', 'deleted_at', 'created_at']
    list_filter = ['customer_type', 'status']
    search_fields = ['name', 'phone', 'email']
    readonly_fields = ['created_at', 'updated_at', 'deleted_at']
    inlines = [CustomerContactInline, CustomerSiteInline]
