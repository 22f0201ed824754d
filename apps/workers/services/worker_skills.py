"""
Worker skill service: equipment skills with a 1-5 rating and software skills.
"""

from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.common.cache import get_query_store, query_keys
from apps.workers.models import (
    EquipmentBrand,
    Software,
    WorkerEquipmentSkill,
    WorkerSoftwareSkill,
)

from .catalog import visible_entry, visible_equipment_type
from .exceptions import SkillNotFoundError, DuplicateSkillError, WorkerNotFoundError
from .worker_management import load_worker


def _invalidate_equipment_skills(store, worker_id) -> None:
    store.invalidate(query_keys.workers.equipment_skills(worker_id), query_keys.workers.detail(worker_id))


def _invalidate_software_skills(store, worker_id) -> None:
    store.invalidate(query_keys.workers.software_skills(worker_id), query_keys.workers.detail(worker_id))


def _load_skill(model, *, skill_id: UUID, user: User):
    try:
        skill = model.objects.select_related('worker').get(id=skill_id)
    except (model.DoesNotExist, ValidationError):
        raise SkillNotFoundError(f"Skill with ID {skill_id} not found")

    try:
        load_worker(worker_id=skill.worker_id, user=user)
    except WorkerNotFoundError:
        raise SkillNotFoundError(f"Skill with ID {skill_id} not found")

    return skill


# =============================================================================
# Equipment skills
# =============================================================================

def list_equipment_skills(*, worker_id: UUID, user: User) -> QuerySet[WorkerEquipmentSkill]:
    """
    Equipment skills of a worker, oldest first.

    Raises:
        WorkerNotFoundError: If worker doesn't exist or is not visible
    """
    worker = load_worker(worker_id=worker_id, user=user)
    return (
        WorkerEquipmentSkill.objects
        .filter(worker=worker)
        .select_related('equipment_type', 'equipment_brand')
        .order_by('created_at')
    )


def add_equipment_skill(
    *,
    worker_id: UUID,
    user: User,
    equipment_type_id: UUID,
    equipment_brand_id: UUID,
    proficiency_rating: int,
    store=None
) -> WorkerEquipmentSkill:
    """
    Record that a worker can operate a type and brand of equipment.

    Raises:
        WorkerNotFoundError: If worker doesn't exist or is not visible
        CatalogEntryNotFoundError: If type or brand is unknown to the company
        DuplicateSkillError: If the worker already has this type and brand
    """
    worker = load_worker(worker_id=worker_id, user=user)
    equipment_type = visible_equipment_type(equipment_type_id=equipment_type_id, company_id=worker.company_id)
    brand = visible_entry(EquipmentBrand, entry_id=equipment_brand_id, company_id=worker.company_id)

    try:
        with transaction.atomic():
            skill = WorkerEquipmentSkill.objects.create(
                worker=worker,
                equipment_type=equipment_type,
                equipment_brand=brand,
                proficiency_rating=proficiency_rating,
            )
    except IntegrityError:
        raise DuplicateSkillError(f"{worker.name} already has a {brand.name} {equipment_type.name} skill")

    _invalidate_equipment_skills(store or get_query_store(), worker.id)
    return skill


def update_equipment_skill(
    *,
    skill_id: UUID,
    user: User,
    proficiency_rating: int,
    store=None
) -> WorkerEquipmentSkill:
    """
    Change the proficiency rating of an equipment skill.

    Raises:
        SkillNotFoundError: If the skill doesn't exist or is not visible
    """
    skill = _load_skill(WorkerEquipmentSkill, skill_id=skill_id, user=user)
    skill.proficiency_rating = proficiency_rating
    skill.save(update_fields=['proficiency_rating'])

    _invalidate_equipment_skills(store or get_query_store(), skill.worker_id)
    return skill


def remove_equipment_skill(*, skill_id: UUID, user: User, store=None) -> None:
    skill = _load_skill(WorkerEquipmentSkill, skill_id=skill_id, user=user)
    skill.delete()
    _invalidate_equipment_skills(store or get_query_store(), skill.worker_id)


# =============================================================================
# Software skills
# =============================================================================

def list_software_skills(*, worker_id: UUID, user: User) -> QuerySet[WorkerSoftwareSkill]:
    worker = load_worker(worker_id=worker_id, user=user)
    return (
        WorkerSoftwareSkill.objects
        .filter(worker=worker)
        .select_related('software')
        .order_by('created_at')
    )


def add_software_skill(*, worker_id: UUID, user: User, software_id: UUID, store=None) -> WorkerSoftwareSkill:
    """
    Record that a worker can use a piece of software.

    Raises:
        WorkerNotFoundError: If worker doesn't exist or is not visible
        CatalogEntryNotFoundError: If the software is unknown to the company
        DuplicateSkillError: If the worker already has this software
    """
    worker = load_worker(worker_id=worker_id, user=user)
    software = visible_entry(Software, entry_id=software_id, company_id=worker.company_id)

    try:
        with transaction.atomic():
            skill = WorkerSoftwareSkill.objects.create(worker=worker, software=software)
    except IntegrityError:
        raise DuplicateSkillError(f"{worker.name} already has {software.name}")

    _invalidate_software_skills(store or get_query_store(), worker.id)
    return skill


def remove_software_skill(*, skill_id: UUID, user: User, store=None) -> None:
    """
    Raises:
        SkillNotFoundError: If the skill doesn't exist or is not visible
    """
    skill = _load_skill(WorkerSoftwareSkill, skill_id=skill_id, user=user)
    skill.delete()
    _invalidate_software_skills(store or get_query_store(), skill.worker_id)
