"""
Worker management service.

Workers are created together with their initial skills in one transaction.
They are archived instead of deleted.
"""

import logging
from decimal import Decimal
from typing import Iterable, Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction, IntegrityError
from django.db.models import Q, QuerySet

from apps.accounts.models import User
from apps.common.cache import get_query_store, query_keys
from apps.companies.services import require_membership, CompanyNotFoundError
from apps.workers.models import (
    EquipmentBrand,
    Software,
    Worker,
    WorkerEquipmentSkill,
    WorkerSoftwareSkill,
    WorkerStatus,
)

from .catalog import visible_entry, visible_equipment_type
from .exceptions import WorkerNotFoundError, InvalidSalaryError, DuplicateSkillError

logger = logging.getLogger(__name__)

SALARY_MESSAGE = "At least one salary must be greater than 0"

UPDATABLE_FIELDS = ('name', 'phone', 'category', 'salary_month', 'salary_day', 'status')


def check_salaries(salary_month, salary_day) -> None:
    """
    Raises:
        InvalidSalaryError: If a salary is negative or both are zero
    """
    salary_month = Decimal(salary_month or 0)
    salary_day = Decimal(salary_day or 0)
    if salary_month < 0 or salary_day < 0:
        raise InvalidSalaryError("Salaries must be non-negative")
    if salary_month == 0 and salary_day == 0:
        raise InvalidSalaryError(SALARY_MESSAGE)


def load_worker(*, worker_id: UUID, user: User, lock: bool = False) -> Worker:
    """
    Get a worker of one of the user's companies.

    Raises:
        WorkerNotFoundError: If worker doesn't exist or is not visible
    """
    queryset = Worker.objects.select_for_update() if lock else Worker.objects.all()
    try:
        worker = queryset.get(id=worker_id)
    except (Worker.DoesNotExist, ValidationError):
        raise WorkerNotFoundError(f"Worker with ID {worker_id} not found")

    try:
        require_membership(company_id=worker.company_id, user=user)
    except CompanyNotFoundError:
        raise WorkerNotFoundError(f"Worker with ID {worker_id} not found")

    return worker


def _invalidate(store, worker: Worker) -> None:
    store.invalidate(
        query_keys.workers.detail(worker.id),
        query_keys.workers.all(worker.company_id),
    )


def list_workers(
    *,
    company_id: UUID,
    user: User,
    status: Optional[str] = None,
    category: Optional[str] = None,
    search: Optional[str] = None
) -> QuerySet[Worker]:
    """
    Workers of a company, newest first.

    ``search`` matches name or phone, case-insensitively.

    Raises:
        CompanyNotFoundError: If company doesn't exist or user is not a member
    """
    require_membership(company_id=company_id, user=user)

    queryset = Worker.objects.filter(company_id=company_id).order_by('-created_at')
    if status:
        queryset = queryset.filter(status=status)
    if category:
        queryset = queryset.filter(category=category)
    if search:
        queryset = queryset.filter(Q(name__icontains=search) | Q(phone__icontains=search))
    return queryset


def get_worker_by_id(*, worker_id: UUID, user: User) -> Worker:
    """
    Get a worker with equipment and software skills prefetched.

    Raises:
        WorkerNotFoundError: If worker doesn't exist or is not visible
    """
    worker = load_worker(worker_id=worker_id, user=user)
    return (
        Worker.objects
        .prefetch_related(
            'equipment_skills__equipment_type',
            'equipment_skills__equipment_brand',
            'software_skills__software',
        )
        .get(id=worker.id)
    )


def create_worker(
    *,
    company_id: UUID,
    user: User,
    name: str,
    phone: str,
    category: str,
    salary_month=0,
    salary_day=0,
    equipment_skills: Iterable[dict] = (),
    software_ids: Iterable[UUID] = (),
    store=None
) -> Worker:
    """
    Create a worker with optional initial skills.

    Args:
        equipment_skills: Dicts with ``equipment_type_id``,
            ``equipment_brand_id`` and ``proficiency_rating``
        software_ids: Software the worker can use

    Raises:
        CompanyNotFoundError: If company doesn't exist or user is not a member
        InvalidSalaryError: If no salary is positive
        CatalogEntryNotFoundError: If a skill names an unknown type, brand
            or software
        DuplicateSkillError: If the same skill is listed twice
    """
    require_membership(company_id=company_id, user=user)
    check_salaries(salary_month, salary_day)

    with transaction.atomic():
        worker = Worker.objects.create(
            company_id=company_id,
            name=name,
            phone=phone,
            category=category,
            salary_month=salary_month or 0,
            salary_day=salary_day or 0,
        )

        try:
            with transaction.atomic():
                for skill in equipment_skills:
                    WorkerEquipmentSkill.objects.create(
                        worker=worker,
                        equipment_type=visible_equipment_type(
                            equipment_type_id=skill['equipment_type_id'], company_id=company_id
                        ),
                        equipment_brand=visible_entry(
                            EquipmentBrand, entry_id=skill['equipment_brand_id'], company_id=company_id
                        ),
                        proficiency_rating=skill['proficiency_rating'],
                    )
                for software_id in dict.fromkeys(software_ids):
                    WorkerSoftwareSkill.objects.create(
                        worker=worker,
                        software=visible_entry(Software, entry_id=software_id, company_id=company_id),
                    )
        except IntegrityError:
            raise DuplicateSkillError("The same equipment skill is listed more than once")

    logger.info("User %s created worker %s in company %s", user.id, worker.id, company_id)
    (store or get_query_store()).invalidate(query_keys.workers.all(company_id))
    return worker


def update_worker(*, worker_id: UUID, user: User, store=None, **changes) -> Worker:
    """
    Update worker fields. Only the keys passed are changed.

    The salary rule is checked against the resulting pair, so lowering one
    salary to zero is fine while the other stays positive.

    Raises:
        WorkerNotFoundError: If worker doesn't exist or is not visible
        InvalidSalaryError: If the update leaves no positive salary
    """
    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        raise TypeError(f"Unexpected fields: {', '.join(sorted(unknown))}")

    with transaction.atomic():
        worker = load_worker(worker_id=worker_id, user=user, lock=True)

        for name, value in changes.items():
            setattr(worker, name, value)
        check_salaries(worker.salary_month, worker.salary_day)
        worker.save()

    _invalidate(store or get_query_store(), worker)
    return worker


def _set_status(*, worker_id: UUID, user: User, status: str, store=None) -> Worker:
    with transaction.atomic():
        worker = load_worker(worker_id=worker_id, user=user, lock=True)
        worker.status = status
        worker.save(update_fields=['status', 'updated_at'])

    _invalidate(store or get_query_store(), worker)
    return worker


def archive_worker(*, worker_id: UUID, user: User, store=None) -> Worker:
    """
    Archive a worker (status -> inactive). Skills are kept.

    Raises:
        WorkerNotFoundError: If worker doesn't exist or is not visible
    """
    return _set_status(worker_id=worker_id, user=user, status=WorkerStatus.INACTIVE, store=store)


def reactivate_worker(*, worker_id: UUID, user: User, store=None) -> Worker:
    """Reactivate an archived worker."""
    return _set_status(worker_id=worker_id, user=user, status=WorkerStatus.ACTIVE, store=store)
