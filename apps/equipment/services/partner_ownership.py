"""
Partner ownership service.

Writes to the ledger lock the equipment row first, then re-read the ledger
rows and run the ledger checks against them. Two concurrent additions to the
same equipment are serialized on that lock, so the second one sees the first
one's share when it checks the total.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.common.cache import get_query_store, query_keys
from apps.equipment.models import Equipment, EquipmentPartner
from apps.partners.models import Partner
from apps.partners.services import PartnerNotFoundError

from .equipment_management import load_equipment
from .exceptions import (
    EquipmentNotFoundError,
    EquipmentNotOwnedError,
    EquipmentPartnerNotFoundError,
    OwnershipRuleError,
)
from .ledger import (
    LedgerCheck,
    LedgerFailure,
    can_add,
    can_update,
    check_company_share,
    company_share,
    stored_percentage,
    total_percentage,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OwnershipSummary:
    """Ledger rows of one equipment record with the derived company share."""

    equipment: Equipment
    rows: List[EquipmentPartner]
    partner_total: Decimal
    company_share: Decimal
    warning: Optional[LedgerCheck] = None


def _ledger_rows(equipment_id) -> QuerySet[EquipmentPartner]:
    return (
        EquipmentPartner.objects
        .filter(equipment_id=equipment_id)
        .select_related('partner')
        .order_by('created_at')
    )


def _invalidate(store, *, equipment: Equipment, partner_id) -> None:
    store.invalidate(
        query_keys.equipment.partners(equipment.id),
        query_keys.partners.detail(partner_id),
        query_keys.partners.all(equipment.company_id),
    )


def _load_row(equipment_partner_id) -> EquipmentPartner:
    try:
        return EquipmentPartner.objects.get(id=equipment_partner_id)
    except (EquipmentPartner.DoesNotExist, ValidationError):
        raise EquipmentPartnerNotFoundError(
            f"Ownership row with ID {equipment_partner_id} not found"
        )


def list_equipment_partners(*, equipment_id: UUID, user: User) -> QuerySet[EquipmentPartner]:
    """
    Ledger rows of an equipment record with partner names, oldest first.

    Raises:
        EquipmentNotFoundError: If equipment doesn't exist or is not visible
    """
    load_equipment(equipment_id=equipment_id, user=user)
    return _ledger_rows(equipment_id)


def get_ownership_summary(*, equipment_id: UUID, user: User) -> OwnershipSummary:
    """
    Ledger rows, partner total and company share of an equipment record.

    A ledger whose partners hold more than 100% is reported through
    ``warning`` instead of showing a negative share as if it were valid.

    Raises:
        EquipmentNotFoundError: If equipment doesn't exist or is not visible
    """
    equipment = load_equipment(equipment_id=equipment_id, user=user)
    rows = list(_ledger_rows(equipment.id))

    integrity = check_company_share(rows)
    if not integrity.ok:
        logger.warning(
            "Ledger of equipment %s is inconsistent: %s", equipment.id, integrity.message
        )

    return OwnershipSummary(
        equipment=equipment,
        rows=rows,
        partner_total=total_percentage(rows),
        company_share=company_share(rows),
        warning=None if integrity.ok else integrity,
    )


def add_equipment_partner(
    *,
    equipment_id: UUID,
    partner_id: UUID,
    percentage,
    user: User,
    store=None
) -> EquipmentPartner:
    """
    Give a partner a share of owned equipment.

    Args:
        equipment_id: Equipment to share
        partner_id: Partner of the same company
        percentage: Share in percent, number or numeric string
        user: Requesting user (must be a member)

    Returns:
        Created EquipmentPartner row

    Raises:
        EquipmentNotFoundError: If equipment doesn't exist or is not visible
        EquipmentNotOwnedError: If the equipment is rented
        PartnerNotFoundError: If the partner is not in the equipment's company
        OwnershipRuleError: If the ledger check fails
    """
    with transaction.atomic():
        equipment = load_equipment(equipment_id=equipment_id, user=user, lock=True)

        if not equipment.is_owned:
            raise EquipmentNotOwnedError("Only owned equipment can have partners")

        try:
            partner = Partner.objects.get(id=partner_id, company_id=equipment.company_id)
        except (Partner.DoesNotExist, ValidationError):
            raise PartnerNotFoundError(f"Partner with ID {partner_id} not found")

        # Re-read under the lock, never from the query cache
        rows = list(EquipmentPartner.objects.filter(equipment=equipment))
        check = can_add(rows, partner.id, percentage)
        if not check.ok:
            logger.info("Rejected share of %s for equipment %s: %s", partner.id, equipment.id, check.code)
            raise OwnershipRuleError(check)

        try:
            with transaction.atomic():
                row = EquipmentPartner.objects.create(
                    equipment=equipment,
                    partner=partner,
                    percentage=stored_percentage(percentage),
                )
        except IntegrityError:
            raise OwnershipRuleError(LedgerCheck(
                ok=False,
                reason=LedgerFailure.DUPLICATE_PARTNER,
                message="This partner already has a share in this equipment",
            ))

    logger.info(
        "User %s gave partner %s %s%% of equipment %s",
        user.id, partner.id, row.percentage, equipment.id
    )
    _invalidate(store or get_query_store(), equipment=equipment, partner_id=partner.id)
    return row


def update_equipment_partner(
    *,
    equipment_partner_id: UUID,
    percentage,
    user: User,
    store=None
) -> EquipmentPartner:
    """
    Change the percentage of a ledger row.

    Raises:
        EquipmentPartnerNotFoundError: If the row doesn't exist or is not visible
        OwnershipRuleError: If the ledger check fails (``RowNotFound`` when the
            row was removed while waiting for the lock)
    """
    row = _load_row(equipment_partner_id)

    with transaction.atomic():
        try:
            equipment = load_equipment(equipment_id=row.equipment_id, user=user, lock=True)
        except EquipmentNotFoundError:
            raise EquipmentPartnerNotFoundError(
                f"Ownership row with ID {equipment_partner_id} not found"
            )

        rows = list(EquipmentPartner.objects.filter(equipment=equipment))
        check = can_update(rows, row.id, percentage)
        if not check.ok:
            logger.info("Rejected change of ownership row %s: %s", row.id, check.code)
            raise OwnershipRuleError(check)

        row = next(r for r in rows if r.id == row.id)
        row.percentage = stored_percentage(percentage)
        row.save(update_fields=['percentage'])

    _invalidate(store or get_query_store(), equipment=equipment, partner_id=row.partner_id)
    return row


def remove_equipment_partner(*, equipment_partner_id: UUID, user: User, store=None) -> None:
    """
    Remove a partner's share. The partner itself is kept.

    Raises:
        EquipmentPartnerNotFoundError: If the row doesn't exist, is not
            visible or was already removed
    """
    row = _load_row(equipment_partner_id)

    with transaction.atomic():
        try:
            equipment = load_equipment(equipment_id=row.equipment_id, user=user, lock=True)
        except EquipmentNotFoundError:
            raise EquipmentPartnerNotFoundError(
                f"Ownership row with ID {equipment_partner_id} not found"
            )

        deleted, _ = EquipmentPartner.objects.filter(id=row.id).delete()
        if not deleted:
            raise EquipmentPartnerNotFoundError(
                f"Ownership row with ID {equipment_partner_id} not found"
            )

    logger.info("User %s removed partner %s from equipment %s", user.id, row.partner_id, equipment.id)
    _invalidate(store or get_query_store(), equipment=equipment, partner_id=row.partner_id)
