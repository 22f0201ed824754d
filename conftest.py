from decimal import Decimal

import pytest
from django.core.cache import caches
from django.conf import settings
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User
from apps.companies.models import Company, CompanyMember, CompanyRole
from apps.equipment.models import Equipment, EquipmentPartner, EquipmentType, OwnershipType
from apps.partners.models import Partner
from apps.suppliers.models import Supplier


def bearer(client, user):
    """Authenticate an APIClient with a fresh access token for ``user``."""
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture(autouse=True)
def _clear_query_cache():
    """Each test starts with an empty query cache."""
    caches[settings.QUERY_CACHE_ALIAS].clear()
    yield
    caches[settings.QUERY_CACHE_ALIAS].clear()


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user (owner of ``company``)."""
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        full_name='Test User',
    )


@pytest.fixture
def other_user(db):
    """Create and return a user outside ``company``."""
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        full_name='Other User',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return API client authenticated as ``user``."""
    return bearer(api_client, user)


@pytest.fixture
def other_client(other_user):
    """Return API client authenticated as ``other_user``."""
    return bearer(APIClient(), other_user)


@pytest.fixture
def company(db, user):
    """Create a company owned by ``user``."""
    company = Company.objects.create(name='Acme Surveying')
    CompanyMember.objects.create(company=company, user=user, role=CompanyRole.OWNER)
    return company


@pytest.fixture
def other_company(db, other_user):
    """Create a company owned by ``other_user``."""
    company = Company.objects.create(name='Rival Mapping')
    CompanyMember.objects.create(company=company, user=other_user, role=CompanyRole.OWNER)
    return company


@pytest.fixture
def member_user(db, company):
    """Create a plain (non-owner) member of ``company``."""
    member = User.objects.create_user(
        email='member@example.com',
        password='TestPass123!',
        full_name='Member User',
    )
    CompanyMember.objects.create(company=company, user=member, role=CompanyRole.MEMBER)
    return member


@pytest.fixture
def member_client(member_user):
    """Return API client authenticated as ``member_user``."""
    return bearer(APIClient(), member_user)


@pytest.fixture
def equipment_type(db):
    """System default equipment type."""
    return EquipmentType.objects.create(name='Total Station')


@pytest.fixture
def supplier(company):
    return Supplier.objects.create(company=company, name='GeoRent', phone='+420 111 222 333')


@pytest.fixture
def partner_a(company):
    return Partner.objects.create(company=company, name='Alice Partner')


@pytest.fixture
def partner_b(company):
    return Partner.objects.create(company=company, name='Bob Partner')


@pytest.fixture
def partner_c(company):
    return Partner.objects.create(company=company, name='Carol Partner')


@pytest.fixture
def owned_equipment(company, equipment_type):
    """Owned equipment with an empty ledger."""
    return Equipment.objects.create(
        company=company,
        name='Leica TS16',
        serial_number='SN-001',
        equipment_type=equipment_type,
        ownership_type=OwnershipType.OWNED,
    )


@pytest.fixture
def rented_equipment(company, equipment_type, supplier):
    return Equipment.objects.create(
        company=company,
        name='Trimble R12',
        serial_number='SN-002',
        equipment_type=equipment_type,
        ownership_type=OwnershipType.RENTED,
        supplier=supplier,
        monthly_rent=Decimal('1200.00'),
        daily_rent=Decimal('80.00'),
    )


@pytest.fixture
def share_a(owned_equipment, partner_a):
    """Alice holds 30% of ``owned_equipment``."""
    return EquipmentPartner.objects.create(
        equipment=owned_equipment,
        partner=partner_a,
        percentage=Decimal('30.00'),
    )


@pytest.fixture
def foreign_equipment(other_company, equipment_type):
    """Equipment of a company ``user`` is not a member of."""
    return Equipment.objects.create(
        company=other_company,
        name='Rival Scanner',
        serial_number='RV-001',
        equipment_type=equipment_type,
    )
