"""
Customer management service.

Deleted customers keep their row with ``deleted_at`` set and disappear from
every read, including their contacts and sites.
"""

import logging
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Prefetch, Q, QuerySet

from apps.accounts.models import User
from apps.common.cache import get_query_store, query_keys
from apps.companies.services import require_membership, CompanyNotFoundError
from apps.customers.models import Customer, CustomerSite

from .exceptions import CustomerNotFoundError

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('name', 'customer_type', 'status', 'phone', 'email', 'address', 'notes')


def load_customer(*, customer_id: UUID, user: User, lock: bool = False) -> Customer:
    """
    Get a live customer of one of the user's companies.

    Raises:
        CustomerNotFoundError: If customer doesn't exist, is deleted or is not visible
    """
    queryset = Customer.objects.select_for_update() if lock else Customer.objects.all()
    try:
        customer = queryset.get(id=customer_id, deleted_at__isnull=True)
    except (Customer.DoesNotExist, ValidationError):
        raise CustomerNotFoundError(f"Customer with ID {customer_id} not found")

    try:
        require_membership(company_id=customer.company_id, user=user)
    except CompanyNotFoundError:
        raise CustomerNotFoundError(f"Customer with ID {customer_id} not found")

    return customer


def _invalidate(store, customer: Customer) -> None:
    store.invalidate(
        query_keys.customers.detail(customer.id),
        query_keys.customers.all(customer.company_id),
    )


def list_customers(
    *,
    company_id: UUID,
    user: User,
    status: Optional[str] = None,
    customer_type: Optional[str] = None,
    search: Optional[str] = None
) -> QuerySet[Customer]:
    """
    Live customers of a company, newest first.

    ``search`` matches name or phone, case-insensitively.

    Raises:
        CompanyNotFoundError: If company doesn't exist or user is not a member
    """
    require_membership(company_id=company_id, user=user)

    queryset = (
        Customer.objects
        .filter(company_id=company_id, deleted_at__isnull=True)
        .order_by('-created_at')
    )
    if status:
        queryset = queryset.filter(status=status)
    if customer_type:
        queryset = queryset.filter(customer_type=customer_type)
    if search:
        queryset = queryset.filter(Q(name__icontains=search) | Q(phone__icontains=search))
    return queryset


def get_customer_by_id(*, customer_id: UUID, user: User) -> Customer:
    """
    Get a customer with contacts (primary first) and live sites prefetched.

    Raises:
        CustomerNotFoundError: If customer doesn't exist, is deleted or is not visible
    """
    customer = load_customer(customer_id=customer_id, user=user)
    return (
        Customer.objects
        .prefetch_related(
            'contacts',
            Prefetch('sites', queryset=CustomerSite.objects.filter(deleted_at__isnull=True)),
        )
        .get(id=customer.id)
    )


def create_customer(
    *,
    company_id: UUID,
    user: User,
    name: str,
    customer_type: str = 'company',
    status: str = 'active',
    phone: str = '',
    email: str = '',
    address: str = '',
    notes: str = '',
    store=None
) -> Customer:
    """
    Create a customer.

    Raises:
        CompanyNotFoundError: If company doesn't exist or user is not a member
    """
    require_membership(company_id=company_id, user=user)

    customer = Customer.objects.create(
        company_id=company_id,
        name=name,
        customer_type=customer_type,
        status=status,
        phone=phone or '',
        email=email or '',
        address=address or '',
        notes=notes or '',
    )

    (store or get_query_store()).invalidate(query_keys.customers.all(company_id))
    return customer


def update_customer(*, customer_id: UUID, user: User, store=None, **changes) -> Customer:
    """
    Update customer fields. Only the keys passed are changed; ``None``
    clears a text field.

    Raises:
        CustomerNotFoundError: If customer doesn't exist, is deleted or is not visible
    """
    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        raise TypeError(f"Unexpected fields: {', '.join(sorted(unknown))}")

    with transaction.atomic():
        customer = load_customer(customer_id=customer_id, user=user, lock=True)
        for name, value in changes.items():
            setattr(customer, name, '' if value is None else value)
        customer.save()

    _invalidate(store or get_query_store(), customer)
    return customer


def delete_customer(*, customer_id: UUID, user: User, store=None) -> None:
    """
    Soft delete a customer.

    Raises:
        CustomerNotFoundError: If customer doesn't exist, is already deleted or is not visible
    """
    with transaction.atomic():
        customer = load_customer(customer_id=customer_id, user=user, lock=True)
        customer.soft_delete()

    logger.info("User %s deleted customer %s", user.id, customer_id)
    _invalidate(store or get_query_store(), customer)
