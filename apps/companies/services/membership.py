"""
Tenant membership checks.

Every tenant-scoped service resolves its company through these helpers, so
non-members see the same error as for a company that does not exist.
"""

from uuid import UUID

from django.core.exceptions import ValidationError

from apps.accounts.models import User
from apps.companies.models import CompanyMember, CompanyRole

from .exceptions import CompanyNotFoundError, InsufficientPermissionsError


def require_membership(*, company_id: UUID, user: User) -> CompanyMember:
    """
    Return the user's membership in the company.

    Raises:
        CompanyNotFoundError: If company doesn't exist or user is not a member
    """
    try:
        return (
            CompanyMember.objects
            .select_related('company')
            .get(company_id=company_id, user=user)
        )
    except (CompanyMember.DoesNotExist, ValidationError):
        raise CompanyNotFoundError(f"Company with ID {company_id} not found")


def require_owner(*, company_id: UUID, user: User) -> CompanyMember:
    """
    Return the user's membership, which must carry the owner role.

    Raises:
        CompanyNotFoundError: If company doesn't exist or user is not a member
        InsufficientPermissionsError: If user is a plain member
    """
    membership = require_membership(company_id=company_id, user=user)
    if membership.role != CompanyRole.OWNER:
        raise InsufficientPermissionsError("Only the company owner can perform this action")
    return membership
