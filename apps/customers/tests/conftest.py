import pytest

from apps.customers.models import Customer, CustomerContact, CustomerSite, CustomerType


@pytest.fixture
def customer(company):
    return Customer.objects.create(
        company=company,
        name='Skanska Brno',
        phone='+420 541 000 000',
        email='office@skanska.example',
    )


@pytest.fixture
def foreign_customer(other_company):
    return Customer.objects.create(
        company=other_company,
        name='Rival Client',
        customer_type=CustomerType.INDIVIDUAL,
    )


@pytest.fixture
def contact(customer):
    """Primary contact of ``customer``."""
    return CustomerContact.objects.create(
        customer=customer,
        name='Martin Svoboda',
        phone='+420 731 222 333',
        role='Site manager',
        is_primary=True,
    )


@pytest.fixture
def site(customer):
    return CustomerSite.objects.create(
        customer=customer,
        name='D1 Bridge Section',
        city='Brno',
        gps_coordinates='49.1951, 16.6068',
    )
