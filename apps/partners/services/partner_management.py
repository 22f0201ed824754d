"""
Partner management service.

Deleting a partner removes its ownership rows through the database cascade.
The equipment itself is never touched.
"""

import logging
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction, IntegrityError
from django.db.models import Count, QuerySet

from apps.accounts.models import User
from apps.common.cache import get_query_store, query_keys
from apps.companies.services import require_membership
from apps.partners.models import Partner

from .exceptions import PartnerNotFoundError, DuplicatePartnerNameError

logger = logging.getLogger(__name__)


def list_partners(
    *,
    company_id: UUID,
    user: User,
    search: Optional[str] = None
) -> QuerySet[Partner]:
    """
    Partners of a company by name, each with the number of equipment
    records they hold a share in.

    Raises:
        CompanyNotFoundError: If company doesn't exist or user is not a member
    """
    require_membership(company_id=company_id, user=user)

    queryset = (
        Partner.objects
        .filter(company_id=company_id)
        .annotate(equipment_count=Count('ownerships'))
        .order_by('name')
    )
    if search:
        queryset = queryset.filter(name__icontains=search)
    return queryset


def get_partner_by_id(*, partner_id: UUID, user: User) -> Partner:
    """
    Get a partner of one of the user's companies.

    Raises:
        PartnerNotFoundError: If partner doesn't exist or is not visible
    """
    try:
        partner = Partner.objects.select_related('company').get(id=partner_id)
    except (Partner.DoesNotExist, ValidationError):
        raise PartnerNotFoundError(f"Partner with ID {partner_id} not found")

    if not partner.company.has_member(user):
        raise PartnerNotFoundError(f"Partner with ID {partner_id} not found")

    return partner


def create_partner(
    *,
    company_id: UUID,
    user: User,
    name: str,
    phone: str = '',
    store=None
) -> Partner:
    """
    Create a partner.

    Raises:
        CompanyNotFoundError: If company doesn't exist or user is not a member
        DuplicatePartnerNameError: If the company already has this partner name
    """
    require_membership(company_id=company_id, user=user)

    if Partner.objects.filter(company_id=company_id, name=name).exists():
        raise DuplicatePartnerNameError(f"Partner '{name}' already exists")

    try:
        with transaction.atomic():
            partner = Partner.objects.create(
                company_id=company_id,
                name=name,
                phone=phone or ''
            )
    except IntegrityError:
        raise DuplicatePartnerNameError(f"Partner '{name}' already exists")

    (store or get_query_store()).invalidate(query_keys.partners.all(company_id))
    return partner


def update_partner(
    *,
    partner_id: UUID,
    user: User,
    name: Optional[str] = None,
    phone: Optional[str] = None,
    store=None
) -> Partner:
    """
    Update partner name and/or phone.

    Raises:
        PartnerNotFoundError: If partner doesn't exist or is not visible
        DuplicatePartnerNameError: If the new name is taken in the company
    """
    partner = get_partner_by_id(partner_id=partner_id, user=user)

    if name is not None and name != partner.name:
        taken = (
            Partner.objects
            .filter(company_id=partner.company_id, name=name)
            .exclude(id=partner.id)
            .exists()
        )
        if taken:
            raise DuplicatePartnerNameError(f"Partner '{name}' already exists")
        partner.name = name

    if phone is not None:
        partner.phone = phone

    try:
        with transaction.atomic():
            partner.save()
    except IntegrityError:
        raise DuplicatePartnerNameError(f"Partner '{name}' already exists")

    store = store or get_query_store()
    store.invalidate(query_keys.partners.detail(partner.id), query_keys.partners.root)
    # Ownership rows render the partner name
    for equipment_id in partner.ownerships.values_list('equipment_id', flat=True):
        store.invalidate(query_keys.equipment.partners(equipment_id))
    return partner


def delete_partner(*, partner_id: UUID, user: User, store=None) -> None:
    """
    Delete a partner together with all of its ownership rows.

    Raises:
        PartnerNotFoundError: If partner doesn't exist or is not visible
    """
    partner = get_partner_by_id(partner_id=partner_id, user=user)

    with transaction.atomic():
        equipment_ids = list(partner.ownerships.values_list('equipment_id', flat=True))
        partner.delete()

    logger.info(
        "User %s deleted partner %s (%d ownership rows removed)",
        user.id, partner_id, len(equipment_ids)
    )

    store = store or get_query_store()
    store.invalidate(query_keys.partners.root)
    for equipment_id in equipment_ids:
        store.invalidate(query_keys.equipment.partners(equipment_id))
