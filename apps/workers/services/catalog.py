"""
Skill catalogues: software and equipment brands.

Both are shared defaults (no company) plus the company's own entries, the
same way equipment types are.
"""

from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction, IntegrityError
from django.db.models import Q, QuerySet

from apps.accounts.models import User
from apps.common.cache import get_query_store, query_keys
from apps.companies.services import require_membership
from apps.equipment.models import EquipmentType
from apps.workers.models import EquipmentBrand, Software

from .exceptions import CatalogEntryNotFoundError, DuplicateCatalogEntryError


def _visible(model, company_id):
    return model.objects.filter(Q(company__isnull=True) | Q(company_id=company_id))


def visible_entry(model, *, entry_id: UUID, company_id: UUID):
    """Get a shared or company entry of ``model``, else CatalogEntryNotFoundError."""
    try:
        return _visible(model, company_id).get(id=entry_id)
    except (model.DoesNotExist, ValidationError):
        label = model._meta.verbose_name
        raise CatalogEntryNotFoundError(f"{label.capitalize()} with ID {entry_id} not found")


def _create_entry(model, *, company_id: UUID, user: User, name: str, label: str):
    require_membership(company_id=company_id, user=user)

    if _visible(model, company_id).filter(name__iexact=name).exists():
        raise DuplicateCatalogEntryError(f"{label} '{name}' already exists")

    try:
        with transaction.atomic():
            return model.objects.create(company_id=company_id, name=name)
    except IntegrityError:
        raise DuplicateCatalogEntryError(f"{label} '{name}' already exists")


def list_software(*, company_id: UUID, user: User) -> QuerySet[Software]:
    """
    Seeded software plus the company's own entries, by name.

    Raises:
        CompanyNotFoundError: If company doesn't exist or user is not a member
    """
    require_membership(company_id=company_id, user=user)
    return _visible(Software, company_id).order_by('name')


def create_software(*, company_id: UUID, user: User, name: str, store=None) -> Software:
    """
    Add a company-specific software entry.

    Raises:
        CompanyNotFoundError: If company doesn't exist or user is not a member
        DuplicateCatalogEntryError: If a visible entry already has this name
    """
    software = _create_entry(Software, company_id=company_id, user=user, name=name, label='Software')
    (store or get_query_store()).invalidate(query_keys.workers.software(company_id))
    return software


def list_equipment_brands(*, company_id: UUID, user: User) -> QuerySet[EquipmentBrand]:
    """Shared brands plus the company's own, by name."""
    require_membership(company_id=company_id, user=user)
    return _visible(EquipmentBrand, company_id).order_by('name')


def create_equipment_brand(*, company_id: UUID, user: User, name: str, store=None) -> EquipmentBrand:
    """
    Add a company-specific equipment brand.

    Raises:
        CompanyNotFoundError: If company doesn't exist or user is not a member
        DuplicateCatalogEntryError: If a visible brand already has this name
    """
    brand = _create_entry(EquipmentBrand, company_id=company_id, user=user, name=name, label='Brand')
    (store or get_query_store()).invalidate(query_keys.workers.equipment_brands(company_id))
    return brand


def visible_equipment_type(*, equipment_type_id: UUID, company_id: UUID) -> EquipmentType:
    return visible_entry(EquipmentType, entry_id=equipment_type_id, company_id=company_id)
