"""
Companies app services layer.

Companies are the tenants of the system. Membership helpers here are used by
every tenant-scoped service in the other apps.
"""

from .exceptions import (
    CompaniesServiceError,
    CompanyNotFoundError,
    InsufficientPermissionsError,
)

from .membership import (
    require_membership,
    require_owner,
)

from .company_management import (
    onboard_company,
    get_my_companies,
    get_company_by_id,
    update_company,
    get_company_members,
)


__all__ = [
    # Exceptions
    'CompaniesServiceError',
    'CompanyNotFoundError',
    'InsufficientPermissionsError',

    # Membership
    'require_membership',
    'require_owner',

    # Company Management
    'onboard_company',
    'get_my_companies',
    'get_company_by_id',
    'update_company',
    'get_company_members',
]
