"""
Customer sites, soft deleted like customers.
"""

from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.common.cache import get_query_store, query_keys
from apps.customers.models import CustomerSite

from .customer_management import load_customer
from .exceptions import SiteNotFoundError, CustomerNotFoundError

UPDATABLE_FIELDS = ('name', 'address', 'city', 'gps_coordinates', 'landmarks', 'notes')


def _load_site(*, site_id: UUID, user: User, lock: bool = False) -> CustomerSite:
    queryset = CustomerSite.objects.select_for_update() if lock else CustomerSite.objects.all()
    try:
        site = queryset.get(id=site_id, deleted_at__isnull=True)
    except (CustomerSite.DoesNotExist, ValidationError):
        raise SiteNotFoundError(f"Site with ID {site_id} not found")

    try:
        load_customer(customer_id=site.customer_id, user=user)
    except CustomerNotFoundError:
        raise SiteNotFoundError(f"Site with ID {site_id} not found")

    return site


def list_sites(*, customer_id: UUID, user: User) -> QuerySet[CustomerSite]:
    """
    Live sites of a customer, oldest first.

    Raises:
        CustomerNotFoundError: If customer doesn't exist, is deleted or is not visible
    """
    customer = load_customer(customer_id=customer_id, user=user)
    return CustomerSite.objects.filter(customer=customer, deleted_at__isnull=True).order_by('created_at')


def create_site(
    *,
    customer_id: UUID,
    user: User,
    name: str,
    address: str = '',
    city: str = '',
    gps_coordinates: str = '',
    landmarks: str = '',
    notes: str = '',
    store=None
) -> CustomerSite:
    """
    Add a site to a customer.

    Raises:
        CustomerNotFoundError: If customer doesn't exist, is deleted or is not visible
    """
    customer = load_customer(customer_id=customer_id, user=user)
    site = CustomerSite.objects.create(
        customer=customer,
        name=name,
        address=address or '',
        city=city or '',
        gps_coordinates=gps_coordinates or '',
        landmarks=landmarks or '',
        notes=notes or '',
    )

    (store or get_query_store()).invalidate(query_keys.customers.detail(customer.id))
    return site


def update_site(*, site_id: UUID, user: User, store=None, **changes) -> CustomerSite:
    """
    Update site fields. ``None`` clears an optional text field.

    Raises:
        SiteNotFoundError: If the site doesn't exist, is deleted or is not visible
    """
    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        raise TypeError(f"Unexpected fields: {', '.join(sorted(unknown))}")

    with transaction.atomic():
        site = _load_site(site_id=site_id, user=user, lock=True)
        for name, value in changes.items():
            setattr(site, name, '' if value is None else value)
        site.save()

    (store or get_query_store()).invalidate(query_keys.customers.detail(site.customer_id))
    return site


def delete_site(*, site_id: UUID, user: User, store=None) -> None:
    """
    Soft delete a site.

    Raises:
        SiteNotFoundError: If the site doesn't exist, is already deleted or is not visible
    """
    with transaction.atomic():
        site = _load_site(site_id=site_id, user=user, lock=True)
        site.soft_delete()

    (store or get_query_store()).invalidate(query_keys.customers.detail(site.customer_id))
