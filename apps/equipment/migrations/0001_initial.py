import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('companies', '0001_initial'),
        ('partners', '0001_initial'),
        ('suppliers', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='EquipmentType',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('company', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='equipment_types', to='companies.company')),
            ],
            options={
                'db_table': 'equipment_types',
                'ordering': ['name'],
                'constraints': [models.UniqueConstraint(fields=('company', 'name'), name='unique_equipment_type_per_company')],
            },
        ),
        migrations.CreateModel(
            name='Equipment',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('serial_number', models.CharField(max_length=100)),
                ('model', models.CharField(blank=True, max_length=200)),
                ('ownership_type', models.CharField(choices=[('owned', 'Owned'), ('rented', 'Rented')], default='owned', max_length=10)),
                ('status', models.CharField(choices=[('active', 'Active'), ('inactive', 'Inactive')], default='active', max_length=10)),
                ('monthly_rent', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('daily_rent', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='equipment', to='companies.company')),
                ('equipment_type', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='equipment', to='equipment.equipmenttype')),
                ('supplier', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='equipment', to='suppliers.supplier')),
            ],
            options={
                'db_table': 'equipment',
                'ordering': ['-created_at'],
                'verbose_name_plural': 'equipment',
                'indexes': [models.Index(fields=['company', 'status'], name='equipment_company_status_idx')],
                'constraints': [
                    models.UniqueConstraint(fields=('company', 'serial_number'), name='unique_equipment_serial_per_company'),
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(('daily_rent__isnull', True), ('monthly_rent__isnull', True), ('ownership_type', 'owned'), ('supplier__isnull', True)),
                            models.Q(('daily_rent__gt', 0), ('monthly_rent__gt', 0), ('ownership_type', 'rented'), ('supplier__isnull', False)),
                            _connector='OR',
                        ),
                        name='equipment_rental_fields_match_ownership',
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name='EquipmentPartner',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('percentage', models.DecimalField(decimal_places=2, max_digits=5)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('equipment', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='partner_rows', to='equipment.equipment')),
                ('partner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='ownerships', to='partners.partner')),
            ],
            options={
                'db_table': 'equipment_partners',
                'ordering': ['created_at'],
                'constraints': [
                    models.UniqueConstraint(fields=('equipment', 'partner'), name='unique_equipment_partner'),
                    models.CheckConstraint(
                        condition=models.Q(('percentage__gte', 1), ('percentage__lte', 99)),
                        name='equipment_partner_percentage_range',
                    ),
                ],
            },
        ),
    ]
