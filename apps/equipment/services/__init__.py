"""
Equipment app services layer.

This module provides business logic for:
- Equipment CRUD, archiving and equipment types
- The ownership-type transition guard
- The partner ownership ledger (pure checks + locked writes)
"""

from .exceptions import (
    EquipmentServiceError,
    EquipmentNotFoundError,
    DuplicateSerialNumberError,
    MissingRentalFieldsError,
    InvalidRentalFieldsError,
    EquipmentTypeNotFoundError,
    DuplicateEquipmentTypeError,
    EquipmentTypeInUseError,
    SystemEquipmentTypeError,
    EquipmentNotOwnedError,
    EquipmentPartnerNotFoundError,
    OwnershipRuleError,
)

from .ledger import (
    LedgerCheck,
    LedgerFailure,
    LedgerRow,
    can_add,
    can_update,
    company_share,
    check_company_share,
)

from .ownership import (
    OwnershipChange,
    plan_ownership_change,
)

from .equipment_management import (
    list_equipment,
    get_equipment_by_id,
    create_equipment,
    update_equipment,
    archive_equipment,
    reactivate_equipment,
    list_equipment_types,
    create_equipment_type,
    delete_equipment_type,
)

from .partner_ownership import (
    OwnershipSummary,
    list_equipment_partners,
    get_ownership_summary,
    add_equipment_partner,
    update_equipment_partner,
    remove_equipment_partner,
)


__all__ = [
    # Exceptions
    'EquipmentServiceError',
    'EquipmentNotFoundError',
    'DuplicateSerialNumberError',
    'MissingRentalFieldsError',
    'InvalidRentalFieldsError',
    'EquipmentTypeNotFoundError',
    'DuplicateEquipmentTypeError',
    'EquipmentTypeInUseError',
    'SystemEquipmentTypeError',
    'EquipmentNotOwnedError',
    'EquipmentPartnerNotFoundError',
    'OwnershipRuleError',

    # Ledger
    'LedgerCheck',
    'LedgerFailure',
    'LedgerRow',
    'can_add',
    'can_update',
    'company_share',
    'check_company_share',

    # Transition guard
    'OwnershipChange',
    'plan_ownership_change',

    # Equipment Management
    'list_equipment',
    'get_equipment_by_id',
    'create_equipment',
    'update_equipment',
    'archive_equipment',
    'reactivate_equipment',
    'list_equipment_types',
    'create_equipment_type',
    'delete_equipment_type',

    # Partner Ownership
    'OwnershipSummary',
    'list_equipment_partners',
    'get_ownership_summary',
    'add_equipment_partner',
    'update_equipment_partner',
    'remove_equipment_partner',
]
