from decimal import Decimal

import pytest

from apps.workers.models import (
    EquipmentBrand,
    Software,
    Worker,
    WorkerCategory,
    WorkerEquipmentSkill,
    WorkerSoftwareSkill,
)


@pytest.fixture
def worker(company):
    """Surveyor paid monthly."""
    return Worker.objects.create(
        company=company,
        name='Petr Dvorak',
        phone='+420 602 000 111',
        category=WorkerCategory.SURVEYOR,
        salary_month=Decimal('42000.00'),
    )


@pytest.fixture
def foreign_worker(other_company):
    return Worker.objects.create(
        company=other_company,
        name='Rival Surveyor',
        phone='+420 603 999 999',
        category=WorkerCategory.ENGINEER,
        salary_day=Decimal('1800.00'),
    )


@pytest.fixture
def brand(db):
    """Shared brand visible to every company."""
    return EquipmentBrand.objects.create(name='Leica')


@pytest.fixture
def software(db):
    """Seeded software visible to every company."""
    return Software.objects.create(name='AutoCAD')


@pytest.fixture
def equipment_skill(worker, equipment_type, brand):
    return WorkerEquipmentSkill.objects.create(
        worker=worker,
        equipment_type=equipment_type,
        equipment_brand=brand,
        proficiency_rating=3,
    )


@pytest.fixture
def software_skill(worker, software):
    return WorkerSoftwareSkill.objects.create(worker=worker, software=software)
