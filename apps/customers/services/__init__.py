"""
Customers app services layer.
"""

from .exceptions import (
    CustomersServiceError,
    CustomerNotFoundError,
    ContactNotFoundError,
    SiteNotFoundError,
)

from .customer_management import (
    list_customers,
    get_customer_by_id,
    create_customer,
    update_customer,
    delete_customer,
)

from .customer_contacts import (
    list_contacts,
    create_contact,
    update_contact,
    delete_contact,
)

from .customer_sites import (
    list_sites,
    create_site,
    update_site,
    delete_site,
)


__all__ = [
    # Exceptions
    'CustomersServiceError',
    'CustomerNotFoundError',
    'ContactNotFoundError',
    'SiteNotFoundError',

    # Customer Management
    'list_customers',
    'get_customer_by_id',
    'create_customer',
    'update_customer',
    'delete_customer',

    # Contacts
    'list_contacts',
    'create_contact',
    'update_contact',
    'delete_contact',

    # Sites
    'list_sites',
    'create_site',
    'update_site',
    'delete_site',
]
