"""
Partners app services layer.
"""

from .exceptions import (
    PartnersServiceError,
    PartnerNotFoundError,
    DuplicatePartnerNameError,
)

from .partner_management import (
    list_partners,
    get_partner_by_id,
    create_partner,
    update_partner,
    delete_partner,
)


__all__ = [
    # Exceptions
    'PartnersServiceError',
    'PartnerNotFoundError',
    'DuplicatePartnerNameError',

    # Partner Management
    'list_partners',
    'get_partner_by_id',
    'create_partner',
    'update_partner',
    'delete_partner',
]
