import pytest
from django.urls import reverse
from rest_framework import status

from apps.companies.models import Company, CompanyRole


# =============================================================================
# Company List / Onboarding Tests
# =============================================================================

@pytest.mark.django_db
class TestCompanyList:
    """Tests for GET /api/companies/"""

    def test_list_returns_my_memberships(self, authenticated_client, company, other_company):
        url = reverse('companies:company-list')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['company']['name'] == 'Acme Surveying'
        assert response.data[0]['role'] == CompanyRole.OWNER

    def test_list_unauthenticated(self, api_client):
        url = reverse('companies:company-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestCompanyOnboarding:
    """Tests for POST /api/companies/"""

    def test_onboard_company(self, authenticated_client, user):
        url = reverse('companies:company-list')
        response = authenticated_client.post(url, {'name': 'Northwind Rentals'})

        assert response.status_code == status.HTTP_201_CREATED
        company = Company.objects.get(name='Northwind Rentals')
        assert company.is_owner(user)

    def test_onboarded_company_shows_up_in_list(self, authenticated_client):
        """The list is refetched after onboarding even when it was cached."""
        url = reverse('companies:company-list')
        assert authenticated_client.get(url).data == []

        authenticated_client.post(url, {'name': 'Northwind Rentals'})
        response = authenticated_client.get(url)

        assert len(response.data) == 1

    def test_onboard_requires_name(self, authenticated_client):
        url = reverse('companies:company-list')
        response = authenticated_client.post(url, {'name': '   '})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Company Detail Tests
# =============================================================================

@pytest.mark.django_db
class TestCompanyDetail:
    """Tests for GET/PATCH /api/companies/{id}/"""

    def test_retrieve_company(self, authenticated_client, company):
        url = reverse('companies:company-detail', kwargs={'pk': company.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == company.name

    def test_retrieve_foreign_company_is_not_found(self, other_client, company):
        url = reverse('companies:company-detail', kwargs={'pk': company.id})
        response = other_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_owner_renames_company(self, authenticated_client, company):
        url = reverse('companies:company-detail', kwargs={'pk': company.id})
        response = authenticated_client.patch(url, {'name': 'Acme Geodesy'})

        assert response.status_code == status.HTTP_200_OK
        assert authenticated_client.get(url).data['name'] == 'Acme Geodesy'

    def test_member_cannot_rename(self, member_client, company):
        url = reverse('companies:company-detail', kwargs={'pk': company.id})
        response = member_client.patch(url, {'name': 'Hijacked'})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert 'error' in response.data


@pytest.mark.django_db
class TestCompanyMembers:
    """Tests for GET /api/companies/{id}/members/"""

    def test_list_members(self, authenticated_client, company, member_user):
        url = reverse('companies:company-members', kwargs={'pk': company.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [m['role'] for m in response.data] == [CompanyRole.OWNER, CompanyRole.MEMBER]

    def test_non_member_cannot_list_members(self, other_client, company):
        url = reverse('companies:company-members', kwargs={'pk': company.id})
        response = other_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
