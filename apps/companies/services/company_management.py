"""
Company management service.

Handles onboarding (company + owner membership) and company updates.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.common.cache import get_query_store, query_keys
from apps.companies.models import Company, CompanyMember, CompanyRole

from .exceptions import CompanyNotFoundError
from .membership import require_membership, require_owner

logger = logging.getLogger(__name__)


def onboard_company(*, name: str, user: User, store=None) -> Company:
    """
    Create a company and insert the creating user as its owner.

    Both rows are written in one transaction, so a company never exists
    without an owner.

    Args:
        name: Company name
        user: User who will own the company

    Returns:
        Created Company instance
    """
    with transaction.atomic():
        company = Company.objects.create(name=name)
        CompanyMember.objects.create(
            company=company,
            user=user,
            role=CompanyRole.OWNER
        )

    logger.info("User %s onboarded company %s", user.id, company.id)
    (store or get_query_store()).invalidate(query_keys.companies.mine(user.id))
    return company


def get_my_companies(*, user: User) -> QuerySet[CompanyMember]:
    """Memberships of the user, with their companies."""
    return (
        CompanyMember.objects
        .filter(user=user)
        .select_related('company')
        .order_by('created_at')
    )


def get_company_by_id(*, company_id: UUID, user: User) -> Company:
    """
    Get a company the user is a member of.

    Raises:
        CompanyNotFoundError: If company doesn't exist or user is not a member
    """
    return require_membership(company_id=company_id, user=user).company


@transaction.atomic
def update_company(*, company_id: UUID, user: User, name: str, store=None) -> Company:
    """
    Rename a company (owner only).

    Raises:
        CompanyNotFoundError: If company doesn't exist or user is not a member
        InsufficientPermissionsError: If user is not the owner
    """
    require_owner(company_id=company_id, user=user)

    try:
        company = Company.objects.select_for_update().get(id=company_id)
    except Company.DoesNotExist:
        raise CompanyNotFoundError(f"Company with ID {company_id} not found")

    company.name = name
    company.save(update_fields=['name', 'updated_at'])

    store = store or get_query_store()
    store.invalidate(query_keys.companies.detail(company.id))
    for user_id in company.members.values_list('user_id', flat=True):
        store.invalidate(query_keys.companies.mine(user_id))

    return company


def get_company_members(*, company_id: UUID, user: User) -> QuerySet[CompanyMember]:
    """
    Members of a company, owners first.

    Raises:
        CompanyNotFoundError: If company doesn't exist or user is not a member
    """
    require_membership(company_id=company_id, user=user)
    return (
        CompanyMember.objects
        .filter(company_id=company_id)
        .select_related('user')
        .order_by('-role', 'created_at')
    )
