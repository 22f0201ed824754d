"""
Equipment management service.

Handles equipment CRUD, archiving and equipment types. Every write that
touches ``ownership_type`` or the rental fields goes through the transition
guard in ``ownership``.
"""

import logging
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction, IntegrityError
from django.db.models import ProtectedError, Q, QuerySet

from apps.accounts.models import User
from apps.common.cache import get_query_store, query_keys
from apps.companies.services import require_membership, CompanyNotFoundError
from apps.equipment.models import (
    Equipment,
    EquipmentPartner,
    EquipmentStatus,
    EquipmentType,
    OwnershipType,
)
from apps.suppliers.models import Supplier

from .exceptions import (
    EquipmentNotFoundError,
    DuplicateSerialNumberError,
    InvalidRentalFieldsError,
    EquipmentTypeNotFoundError,
    DuplicateEquipmentTypeError,
    EquipmentTypeInUseError,
    SystemEquipmentTypeError,
)
from .ownership import plan_ownership_change

logger = logging.getLogger(__name__)

DUPLICATE_SERIAL_MESSAGE = "An equipment record with this serial number already exists."

UPDATABLE_FIELDS = (
    'name',
    'serial_number',
    'equipment_type_id',
    'model',
    'ownership_type',
    'status',
    'supplier_id',
    'monthly_rent',
    'daily_rent',
)

# Partner details render these
SHARE_DISPLAY_FIELDS = {'name', 'serial_number', 'status'}


# =============================================================================
# Lookups
# =============================================================================

def load_equipment(*, equipment_id: UUID, user: User, lock: bool = False) -> Equipment:
    """
    Get equipment of one of the user's companies, optionally row-locked.

    Raises:
        EquipmentNotFoundError: If equipment doesn't exist or is not visible
    """
    if lock:
        queryset = Equipment.objects.select_for_update()
    else:
        queryset = Equipment.objects.select_related('equipment_type', 'supplier')

    try:
        equipment = queryset.get(id=equipment_id)
    except (Equipment.DoesNotExist, ValidationError):
        raise EquipmentNotFoundError(f"Equipment with ID {equipment_id} not found")

    try:
        require_membership(company_id=equipment.company_id, user=user)
    except CompanyNotFoundError:
        raise EquipmentNotFoundError(f"Equipment with ID {equipment_id} not found")

    return equipment


def _visible_type(*, equipment_type_id: UUID, company_id: UUID) -> EquipmentType:
    try:
        return EquipmentType.objects.get(
            Q(company__isnull=True) | Q(company_id=company_id),
            id=equipment_type_id,
        )
    except (EquipmentType.DoesNotExist, ValidationError):
        raise EquipmentTypeNotFoundError(f"Equipment type with ID {equipment_type_id} not found")


def _check_supplier(*, supplier_id: Optional[UUID], company_id: UUID) -> None:
    if supplier_id is None:
        return
    try:
        found = Supplier.objects.filter(id=supplier_id, company_id=company_id).exists()
    except ValidationError:
        found = False
    if not found:
        raise InvalidRentalFieldsError(f"Supplier with ID {supplier_id} not found in this company")


def _serial_taken(*, company_id: UUID, serial_number: str, exclude_id: Optional[UUID] = None) -> bool:
    queryset = Equipment.objects.filter(company_id=company_id, serial_number=serial_number)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    return queryset.exists()


def _invalidate(store, equipment: Equipment, *, supplier_ids=(), drop_partners: bool = False) -> None:
    store.invalidate(
        query_keys.equipment.detail(equipment.id),
        query_keys.equipment.all(equipment.company_id),
        query_keys.equipment.partners(equipment.id),
    )
    supplier_ids = {sid for sid in supplier_ids if sid is not None}
    if supplier_ids:
        store.invalidate(query_keys.suppliers.all(equipment.company_id))
        for supplier_id in supplier_ids:
            store.invalidate(query_keys.suppliers.detail(supplier_id))
    if drop_partners:
        store.invalidate(query_keys.partners.root)


# =============================================================================
# Equipment
# =============================================================================

def list_equipment(
    *,
    company_id: UUID,
    user: User,
    status: Optional[str] = None,
    ownership_type: Optional[str] = None,
    equipment_type_id: Optional[UUID] = None,
    search: Optional[str] = None
) -> QuerySet[Equipment]:
    """
    Equipment of a company, newest first.

    Args:
        company_id: Company to list
        user: Requesting user (must be a member)
        status: Optional 'active' / 'inactive' filter
        ownership_type: Optional 'owned' / 'rented' filter
        equipment_type_id: Optional type filter
        search: Case-insensitive substring of the name

    Raises:
        CompanyNotFoundError: If company doesn't exist or user is not a member
    """
    require_membership(company_id=company_id, user=user)

    queryset = (
        Equipment.objects
        .filter(company_id=company_id)
        .select_related('equipment_type', 'supplier')
        .order_by('-created_at')
    )

    if status:
        queryset = queryset.filter(status=status)
    if ownership_type:
        queryset = queryset.filter(ownership_type=ownership_type)
    if equipment_type_id:
        queryset = queryset.filter(equipment_type_id=equipment_type_id)
    if search:
        queryset = queryset.filter(name__icontains=search)

    return queryset


def get_equipment_by_id(*, equipment_id: UUID, user: User) -> Equipment:
    """
    Get equipment with its type and supplier.

    Raises:
        EquipmentNotFoundError: If equipment doesn't exist or is not visible
    """
    return load_equipment(equipment_id=equipment_id, user=user)


def create_equipment(
    *,
    company_id: UUID,
    user: User,
    name: str,
    serial_number: str,
    equipment_type_id: UUID,
    model: str = '',
    ownership_type: str = OwnershipType.OWNED,
    supplier_id: Optional[UUID] = None,
    monthly_rent=None,
    daily_rent=None,
    store=None
) -> Equipment:
    """
    Create an equipment record.

    Rental fields are only stored for rented equipment.

    Raises:
        CompanyNotFoundError: If company doesn't exist or user is not a member
        EquipmentTypeNotFoundError: If the type is not visible to the company
        MissingRentalFieldsError: If rented equipment lacks a rental field
        InvalidRentalFieldsError: If a rent is not positive or the supplier
            belongs to another company
        DuplicateSerialNumberError: If the serial number is taken
    """
    require_membership(company_id=company_id, user=user)

    plan = plan_ownership_change(
        current_type=None,
        changes={
            'ownership_type': ownership_type,
            'supplier_id': supplier_id,
            'monthly_rent': monthly_rent,
            'daily_rent': daily_rent,
        },
    )
    _visible_type(equipment_type_id=equipment_type_id, company_id=company_id)
    _check_supplier(supplier_id=plan.changes['supplier_id'], company_id=company_id)

    if _serial_taken(company_id=company_id, serial_number=serial_number):
        raise DuplicateSerialNumberError(DUPLICATE_SERIAL_MESSAGE)

    try:
        with transaction.atomic():
            equipment = Equipment.objects.create(
                company_id=company_id,
                name=name,
                serial_number=serial_number,
                equipment_type_id=equipment_type_id,
                model=model or '',
                **plan.changes
            )
    except IntegrityError:
        raise DuplicateSerialNumberError(DUPLICATE_SERIAL_MESSAGE)

    logger.info(
        "User %s created %s equipment %s in company %s",
        user.id, equipment.ownership_type, equipment.id, company_id
    )
    _invalidate(store or get_query_store(), equipment, supplier_ids=[equipment.supplier_id])
    return equipment


def update_equipment(*, equipment_id: UUID, user: User, store=None, **changes) -> Equipment:
    """
    Update equipment fields.

    The row is locked for the whole update. Switching to owned clears the
    rental fields; switching from owned to rented deletes every partner
    share of the equipment in the same transaction.

    Args:
        equipment_id: Equipment to update
        user: Requesting user (must be a member)
        **changes: Any of UPDATABLE_FIELDS

    Raises:
        EquipmentNotFoundError: If equipment doesn't exist or is not visible
        EquipmentTypeNotFoundError: If the new type is not visible
        MissingRentalFieldsError: If the result would be rented without a
            supplier, monthly rent or daily rent
        InvalidRentalFieldsError: If a rent is not positive or the supplier
            belongs to another company
        DuplicateSerialNumberError: If the new serial number is taken
    """
    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        raise TypeError(f"Unexpected equipment fields: {', '.join(sorted(unknown))}")

    with transaction.atomic():
        equipment = load_equipment(equipment_id=equipment_id, user=user, lock=True)
        previous_supplier_id = equipment.supplier_id

        plan = plan_ownership_change(current_type=equipment.ownership_type, changes=changes)

        if 'equipment_type_id' in changes:
            _visible_type(equipment_type_id=changes['equipment_type_id'], company_id=equipment.company_id)
        if 'supplier_id' in plan.changes:
            _check_supplier(supplier_id=plan.changes['supplier_id'], company_id=equipment.company_id)

        serial_number = changes.get('serial_number')
        if serial_number and serial_number != equipment.serial_number:
            if _serial_taken(
                company_id=equipment.company_id,
                serial_number=serial_number,
                exclude_id=equipment.id,
            ):
                raise DuplicateSerialNumberError(DUPLICATE_SERIAL_MESSAGE)

        dropped = 0
        if plan.drop_partner_rows:
            dropped, _ = EquipmentPartner.objects.filter(equipment=equipment).delete()

        for name, value in plan.changes.items():
            setattr(equipment, name, value)

        try:
            with transaction.atomic():
                equipment.save()
        except IntegrityError:
            raise DuplicateSerialNumberError(DUPLICATE_SERIAL_MESSAGE)

    if plan.is_transition:
        logger.info(
            "Equipment %s switched from %s to %s by user %s (%d partner shares removed)",
            equipment.id, plan.from_type, plan.to_type, user.id, dropped
        )

    _invalidate(
        store or get_query_store(),
        equipment,
        supplier_ids=[previous_supplier_id, equipment.supplier_id],
        drop_partners=plan.drop_partner_rows or bool(SHARE_DISPLAY_FIELDS & set(changes)),
    )
    return equipment


def _set_status(*, equipment_id: UUID, user: User, status: str, store=None) -> Equipment:
    with transaction.atomic():
        equipment = load_equipment(equipment_id=equipment_id, user=user, lock=True)
        equipment.status = status
        equipment.save(update_fields=['status', 'updated_at'])

    store = store or get_query_store()
    _invalidate(store, equipment, supplier_ids=[equipment.supplier_id])
    # Partner details show the equipment status
    store.invalidate(query_keys.partners.root)
    return equipment


def archive_equipment(*, equipment_id: UUID, user: User, store=None) -> Equipment:
    """
    Archive equipment (status -> inactive). Equipment is never deleted.

    Raises:
        EquipmentNotFoundError: If equipment doesn't exist or is not visible
    """
    return _set_status(equipment_id=equipment_id, user=user, status=EquipmentStatus.INACTIVE, store=store)


def reactivate_equipment(*, equipment_id: UUID, user: User, store=None) -> Equipment:
    """
    Reactivate archived equipment (status -> active).

    Raises:
        EquipmentNotFoundError: If equipment doesn't exist or is not visible
    """
    return _set_status(equipment_id=equipment_id, user=user, status=EquipmentStatus.ACTIVE, store=store)


# =============================================================================
# Equipment types
# =============================================================================

def list_equipment_types(*, company_id: UUID, user: User) -> QuerySet[EquipmentType]:
    """
    System default types plus the company's own types, by name.

    Raises:
        CompanyNotFoundError: If company doesn't exist or user is not a member
    """
    require_membership(company_id=company_id, user=user)
    return (
        EquipmentType.objects
        .filter(Q(company__isnull=True) | Q(company_id=company_id))
        .order_by('name')
    )


def create_equipment_type(*, company_id: UUID, user: User, name: str, store=None) -> EquipmentType:
    """
    Create a company-specific equipment type.

    Raises:
        CompanyNotFoundError: If company doesn't exist or user is not a member
        DuplicateEquipmentTypeError: If a visible type already has this name
    """
    require_membership(company_id=company_id, user=user)

    taken = EquipmentType.objects.filter(
        Q(company__isnull=True) | Q(company_id=company_id),
        name__iexact=name,
    ).exists()
    if taken:
        raise DuplicateEquipmentTypeError(f"Equipment type '{name}' already exists")

    try:
        with transaction.atomic():
            equipment_type = EquipmentType.objects.create(company_id=company_id, name=name)
    except IntegrityError:
        raise DuplicateEquipmentTypeError(f"Equipment type '{name}' already exists")

    (store or get_query_store()).invalidate(query_keys.equipment.types(company_id))
    return equipment_type


def delete_equipment_type(*, equipment_type_id: UUID, user: User, store=None) -> None:
    """
    Delete a company-specific equipment type that no equipment uses.

    Raises:
        EquipmentTypeNotFoundError: If type doesn't exist or is not visible
        SystemEquipmentTypeError: If the type is a system default
        EquipmentTypeInUseError: If equipment still uses the type
    """
    try:
        equipment_type = EquipmentType.objects.get(id=equipment_type_id)
    except (EquipmentType.DoesNotExist, ValidationError):
        raise EquipmentTypeNotFoundError(f"Equipment type with ID {equipment_type_id} not found")

    if equipment_type.is_system_default:
        raise SystemEquipmentTypeError("System equipment types cannot be deleted")

    try:
        require_membership(company_id=equipment_type.company_id, user=user)
    except CompanyNotFoundError:
        raise EquipmentTypeNotFoundError(f"Equipment type with ID {equipment_type_id} not found")

    if equipment_type.equipment.exists():
        raise EquipmentTypeInUseError("Equipment type is in use and cannot be deleted")

    try:
        with transaction.atomic():
            equipment_type.delete()
    except ProtectedError:
        raise EquipmentTypeInUseError("Equipment type is in use and cannot be deleted")

    (store or get_query_store()).invalidate(query_keys.equipment.types(equipment_type.company_id))
