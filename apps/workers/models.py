from django.db import models
from django.db.models import Q
import uuid


class WorkerCategory(models.TextChoices):
    ENGINEER = 'engineer', 'Engineer'
    SURVEYOR = 'surveyor', 'Surveyor'
    ASSISTANT = 'assistant', 'Assistant'


class WorkerStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    INACTIVE = 'inactive', 'Inactive'


class Worker(models.Model):
    """
    Field worker of a company.

    Paid monthly, daily or both; at least one salary is positive. Workers are
    archived (status inactive), never deleted.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey('companies.Company', on_delete=models.CASCADE, related_name='workers')
    name = models.CharField(max_length=100)
    phone = models.CharField(max_length=50)
    category = models.CharField(max_length=20, choices=WorkerCategory.choices)
    salary_month = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    salary_day = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    status = models.CharField(max_length=10, choices=WorkerStatus.choices, default=WorkerStatus.ACTIVE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'workers'
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(salary_month__gte=0)
                    & Q(salary_day__gte=0)
                    & (Q(salary_month__gt=0) | Q(salary_day__gt=0))
                ),
                name='worker_salary_positive',
            ),
        ]
        indexes = [
            models.Index(fields=['company', 'status'], name='workers_company_status_idx'),
        ]

    def __str__(self):
        return self.name


class Software(models.Model):
    """Software a worker can use. Rows without a company are seeded for everyone."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='software'
    )
    name = models.CharField(max_length=100)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'software'
        ordering = ['name']
        verbose_name_plural = 'software'
        constraints = [
            models.UniqueConstraint(fields=['company', 'name'], name='unique_software_per_company'),
        ]

    def __str__(self):
        return self.name

    @property
    def is_seeded(self):
        return self.company_id is None


class EquipmentBrand(models.Model):
    """Equipment manufacturer. Rows without a company are shared defaults."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='equipment_brands'
    )
    name = models.CharField(max_length=100)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'equipment_brands'
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(fields=['company', 'name'], name='unique_equipment_brand_per_company'),
        ]

    def __str__(self):
        return self.name


class WorkerEquipmentSkill(models.Model):
    """A worker's proficiency (1-5) with one type and brand of equipment."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    worker = models.ForeignKey(Worker, on_delete=models.CASCADE, related_name='equipment_skills')
    equipment_type = models.ForeignKey(
        'equipment.EquipmentType',
        on_delete=models.PROTECT,
        related_name='worker_skills'
    )
    equipment_brand = models.ForeignKey(EquipmentBrand, on_delete=models.PROTECT, related_name='worker_skills')
    proficiency_rating = models.PositiveSmallIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'worker_equipment_skills'
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['worker', 'equipment_type', 'equipment_brand'],
                name='unique_worker_equipment_skill'
            ),
            models.CheckConstraint(
                condition=Q(proficiency_rating__gte=1) & Q(proficiency_rating__lte=5),
                name='worker_equipment_skill_rating_range',
            ),
        ]

    def __str__(self):
        return f"{self.worker.name}: {self.equipment_brand.name} {self.equipment_type.name} ({self.proficiency_rating})"


class WorkerSoftwareSkill(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    worker = models.ForeignKey(Worker, on_delete=models.CASCADE, related_name='software_skills')
    software = models.ForeignKey(Software, on_delete=models.PROTECT, related_name='worker_skills')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'worker_software_skills'
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(fields=['worker', 'software'], name='unique_worker_software_skill'),
        ]

    def __str__(self):
        return f"{self.worker.name}: {self.software.name}"
