"""
Supplier management service.

Suppliers are company-scoped. Every entry point resolves the company
membership of the calling user first.
"""

import logging
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction, IntegrityError
from django.db.models import Count, ProtectedError, QuerySet

from apps.accounts.models import User
from apps.common.cache import get_query_store, query_keys
from apps.companies.services import require_membership
from apps.suppliers.models import Supplier

from .exceptions import (
    SupplierNotFoundError,
    DuplicateSupplierError,
    SupplierInUseError,
)

logger = logging.getLogger(__name__)


def list_suppliers(
    *,
    company_id: UUID,
    user: User,
    search: Optional[str] = None
) -> QuerySet[Supplier]:
    """
    Suppliers of a company by name, each with its equipment count.

    Raises:
        CompanyNotFoundError: If company doesn't exist or user is not a member
    """
    require_membership(company_id=company_id, user=user)

    queryset = (
        Supplier.objects
        .filter(company_id=company_id)
        .annotate(equipment_count=Count('equipment'))
        .order_by('name')
    )
    if search:
        queryset = queryset.filter(name__icontains=search)
    return queryset


def get_supplier_by_id(*, supplier_id: UUID, user: User) -> Supplier:
    """
    Get a supplier of one of the user's companies.

    Raises:
        SupplierNotFoundError: If supplier doesn't exist or is not visible
    """
    try:
        supplier = Supplier.objects.select_related('company').get(id=supplier_id)
    except (Supplier.DoesNotExist, ValidationError):
        raise SupplierNotFoundError(f"Supplier with ID {supplier_id} not found")

    if not supplier.company.has_member(user):
        raise SupplierNotFoundError(f"Supplier with ID {supplier_id} not found")

    return supplier


def create_supplier(
    *,
    company_id: UUID,
    user: User,
    name: str,
    phone: str = '',
    store=None
) -> Supplier:
    """
    Create a supplier.

    Raises:
        CompanyNotFoundError: If company doesn't exist or user is not a member
        DuplicateSupplierError: If the company already has this supplier name
    """
    require_membership(company_id=company_id, user=user)

    if Supplier.objects.filter(company_id=company_id, name=name).exists():
        raise DuplicateSupplierError(f"Supplier '{name}' already exists")

    try:
        with transaction.atomic():
            supplier = Supplier.objects.create(
                company_id=company_id,
                name=name,
                phone=phone or ''
            )
    except IntegrityError:
        raise DuplicateSupplierError(f"Supplier '{name}' already exists")

    (store or get_query_store()).invalidate(query_keys.suppliers.all(company_id))
    return supplier


def update_supplier(
    *,
    supplier_id: UUID,
    user: User,
    name: Optional[str] = None,
    phone: Optional[str] = None,
    store=None
) -> Supplier:
    """
    Update supplier name and/or phone. A ``phone`` of ``''`` clears it.

    Raises:
        SupplierNotFoundError: If supplier doesn't exist or is not visible
        DuplicateSupplierError: If the new name is taken in the company
    """
    supplier = get_supplier_by_id(supplier_id=supplier_id, user=user)

    if name is not None and name != supplier.name:
        taken = (
            Supplier.objects
            .filter(company_id=supplier.company_id, name=name)
            .exclude(id=supplier.id)
            .exists()
        )
        if taken:
            raise DuplicateSupplierError(f"Supplier '{name}' already exists")
        supplier.name = name

    if phone is not None:
        supplier.phone = phone

    try:
        with transaction.atomic():
            supplier.save()
    except IntegrityError:
        raise DuplicateSupplierError(f"Supplier '{name}' already exists")

    store = store or get_query_store()
    store.invalidate(query_keys.suppliers.detail(supplier.id), query_keys.suppliers.root)
    # Equipment rows render the supplier name
    store.invalidate(query_keys.equipment.all(supplier.company_id))
    for equipment_id in supplier.equipment.values_list('id', flat=True):
        store.invalidate(query_keys.equipment.detail(equipment_id))
    return supplier


def delete_supplier(*, supplier_id: UUID, user: User, store=None) -> None:
    """
    Delete a supplier that no equipment references.

    Raises:
        SupplierNotFoundError: If supplier doesn't exist or is not visible
        SupplierInUseError: If equipment still references the supplier
    """
    supplier = get_supplier_by_id(supplier_id=supplier_id, user=user)

    in_use = supplier.equipment.count()
    if in_use:
        raise SupplierInUseError(
            f"Supplier is linked to {in_use} equipment record(s) and cannot be deleted"
        )

    try:
        with transaction.atomic():
            supplier.delete()
    except ProtectedError:
        raise SupplierInUseError("Supplier is linked to equipment and cannot be deleted")

    logger.info("User %s deleted supplier %s", user.id, supplier_id)
    (store or get_query_store()).invalidate(query_keys.suppliers.root)
