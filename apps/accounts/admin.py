from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from apps.companies.models import CompanyMember
from .models import User


class MembershipInline(admin.TabularInline):
    model = CompanyMember
    fk_name = 'user'
    extra = 0
    fields = ['company', 'role', 'created_at']
    readonly_fields = ['created_at']


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ['email', 'full_name', 'phone', 'is_active', 'last_login']
    list_filter = ['is_active', 'is_staff']
    search_fields = ['email', 'full_name', 'phone']
    ordering = ['full_name']
    readonly_fields = ['created_at', 'updated_at', 'last_login']
    inlines = [MembershipInline]

    fieldsets = (
        (None, {'fields': ('email', 'full_name', 'phone', 'password')}),
        ('Access', {'fields': ('is_active', 'is_staff', 'is_superuser')}),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'full_name', 'password1', 'password2'),
        }),
    )
