import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('companies', '0001_initial'),
        ('equipment', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='EquipmentBrand',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('company', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='equipment_brands', to='companies.company')),
            ],
            options={
                'db_table': 'equipment_brands',
                'ordering': ['name'],
                'constraints': [models.UniqueConstraint(fields=('company', 'name'), name='unique_equipment_brand_per_company')],
            },
        ),
        migrations.CreateModel(
            name='Software',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('company', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='software', to='companies.company')),
            ],
            options={
                'verbose_name_plural': 'software',
                'db_table': 'software',
                'ordering': ['name'],
                'constraints': [models.UniqueConstraint(fields=('company', 'name'), name='unique_software_per_company')],
            },
        ),
        migrations.CreateModel(
            name='Worker',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('phone', models.CharField(max_length=50)),
                ('category', models.CharField(choices=[('engineer', 'Engineer'), ('surveyor', 'Surveyor'), ('assistant', 'Assistant')], max_length=20)),
                ('salary_month', models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ('salary_day', models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ('status', models.CharField(choices=[('active', 'Active'), ('inactive', 'Inactive')], default='active', max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='workers', to='companies.company')),
            ],
            options={
                'db_table': 'workers',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['company', 'status'], name='workers_company_status_idx')],
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(
                            ('salary_month__gte', 0),
                            ('salary_day__gte', 0),
                            models.Q(('salary_month__gt', 0), ('salary_day__gt', 0), _connector='OR'),
                        ),
                        name='worker_salary_positive',
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name='WorkerEquipmentSkill',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('proficiency_rating', models.PositiveSmallIntegerField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('equipment_brand', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='worker_skills', to='workers.equipmentbrand')),
                ('equipment_type', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='worker_skills', to='equipment.equipmenttype')),
                ('worker', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='equipment_skills', to='workers.worker')),
            ],
            options={
                'db_table': 'worker_equipment_skills',
                'ordering': ['created_at'],
                'constraints': [
                    models.UniqueConstraint(fields=('worker', 'equipment_type', 'equipment_brand'), name='unique_worker_equipment_skill'),
                    models.CheckConstraint(
                        condition=models.Q(('proficiency_rating__gte', 1), ('proficiency_rating__lte', 5)),
                        name='worker_equipment_skill_rating_range',
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name='WorkerSoftwareSkill',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('software', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='worker_skills', to='workers.software')),
                ('worker', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='software_skills', to='workers.worker')),
            ],
            options={
                'db_table': 'worker_software_skills',
                'ordering': ['created_at'],
                'constraints': [models.UniqueConstraint(fields=('worker', 'software'), name='unique_worker_software_skill')],
            },
        ),
    ]
