from django.contrib import admin
from apps.companies.models import Company, CompanyMember


class CompanyMemberInline(admin.TabularInline):
    """Inline admin for company memberships."""
    model = CompanyMember
    extra = 0
    fields = ['user', 'role', 'created_at']
    readonly_fields = ['created_at']


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    """Admin interface for Companies."""

    list_display = ['name', 'member_count', 'created_at']
    search_fields = ['name', 'members__user__email']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [CompanyMemberInline]
    ordering = ['name']

    def member_count(self, obj):
        """Show number of members."""
        return obj.members.count()
    member_count.short_description = 'Members'
