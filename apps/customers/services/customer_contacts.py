"""
Customer contacts. A customer has at most one primary contact: marking a
contact primary demotes the previous one.
"""

from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.common.cache import get_query_store, query_keys
from apps.customers.models import CustomerContact

from .customer_management import load_customer
from .exceptions import ContactNotFoundError, CustomerNotFoundError

UPDATABLE_FIELDS = ('name', 'phone', 'role', 'department', 'email', 'is_primary', 'notes')


def _load_contact(*, contact_id: UUID, user: User, lock: bool = False) -> CustomerContact:
    queryset = CustomerContact.objects.select_for_update() if lock else CustomerContact.objects.all()
    try:
        contact = queryset.get(id=contact_id)
    except (CustomerContact.DoesNotExist, ValidationError):
        raise ContactNotFoundError(f"Contact with ID {contact_id} not found")

    try:
        load_customer(customer_id=contact.customer_id, user=user)
    except CustomerNotFoundError:
        raise ContactNotFoundError(f"Contact with ID {contact_id} not found")

    return contact


def _demote_primary(contact: CustomerContact) -> None:
    (
        CustomerContact.objects
        .filter(customer_id=contact.customer_id, is_primary=True)
        .exclude(id=contact.id)
        .update(is_primary=False)
    )


def list_contacts(*, customer_id: UUID, user: User) -> QuerySet[CustomerContact]:
    """
    Contacts of a customer, primary first, then oldest first.

    Raises:
        CustomerNotFoundError: If customer doesn't exist, is deleted or is not visible
    """
    customer = load_customer(customer_id=customer_id, user=user)
    return CustomerContact.objects.filter(customer=customer).order_by('-is_primary', 'created_at')


def create_contact(
    *,
    customer_id: UUID,
    user: User,
    name: str,
    phone: str,
    role: str = '',
    department: str = '',
    email: str = '',
    is_primary: bool = False,
    notes: str = '',
    store=None
) -> CustomerContact:
    """
    Add a contact to a customer.

    Raises:
        CustomerNotFoundError: If customer doesn't exist, is deleted or is not visible
    """
    with transaction.atomic():
        customer = load_customer(customer_id=customer_id, user=user, lock=True)
        contact = CustomerContact.objects.create(
            customer=customer,
            name=name,
            phone=phone,
            role=role or '',
            department=department or '',
            email=email or '',
            is_primary=is_primary,
            notes=notes or '',
        )
        if contact.is_primary:
            _demote_primary(contact)

    (store or get_query_store()).invalidate(query_keys.customers.detail(customer.id))
    return contact


def update_contact(*, contact_id: UUID, user: User, store=None, **changes) -> CustomerContact:
    """
    Update contact fields. ``None`` clears an optional text field.

    Raises:
        ContactNotFoundError: If the contact doesn't exist or is not visible
    """
    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        raise TypeError(f"Unexpected fields: {', '.join(sorted(unknown))}")

    with transaction.atomic():
        contact = _load_contact(contact_id=contact_id, user=user, lock=True)
        for name, value in changes.items():
            setattr(contact, name, '' if value is None else value)
        contact.save()
        if changes.get('is_primary'):
            _demote_primary(contact)

    (store or get_query_store()).invalidate(query_keys.customers.detail(contact.customer_id))
    return contact


def delete_contact(*, contact_id: UUID, user: User, store=None) -> None:
    """
    Raises:
        ContactNotFoundError: If the contact doesn't exist or is not visible
    """
    contact = _load_contact(contact_id=contact_id, user=user)
    contact.delete()
    (store or get_query_store()).invalidate(query_keys.customers.detail(contact.customer_id))
