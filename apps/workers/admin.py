from django.contrib import admin
from apps.workers.models import (
    EquipmentBrand,
    Software,
    Worker,
    WorkerEquipmentSkill,
    WorkerSoftwareSkill,
)


class WorkerEquipmentSkillInline(admin.TabularInline):
    model = WorkerEquipmentSkill
    extra = 0
    fields = ['equipment_type', 'equipment_brand', 'proficiency_rating', 'created_at']
    readonly_fields = ['created_at']


class WorkerSoftwareSkillInline(admin.TabularInline):
    model = WorkerSoftwareSkill
    extra = 0
    fields = ['software', 'created_at']
    readonly_fields = ['created_at']


@admin.register(Worker)
class WorkerAdmin(admin.ModelAdmin):
    """Admin interface for Workers."""

    list_display = ['name', 'company', 'category', 'status', 'salary_month', 'salary_day', 'created_at']
    list_filter = ['category', 'status']
    search_fields = ['name', 'phone']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [WorkerEquipmentSkillInline, WorkerSoftwareSkillInline]


@admin.register(Software, EquipmentBrand)
class CatalogAdmin(admin.ModelAdmin):
    """Software and brands. Entries without company are shared defaults."""

    list_display = ['name', 'company', 'created_at']
    search_fields = ['name']
