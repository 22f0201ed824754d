import pytest
from django.urls import reverse
from rest_framework import status

from apps.suppliers.models import Supplier


@pytest.mark.django_db
class TestSupplierList:
    """Tests for GET /api/suppliers/"""

    def test_list(self, authenticated_client, company, supplier, rented_equipment):
        url = reverse('suppliers:supplier-list')
        response = authenticated_client.get(url, {'company': company.id})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['equipment_count'] == 1

    def test_list_search(self, authenticated_client, company, supplier):
        Supplier.objects.create(company=company, name='Alpha Tools')
        url = reverse('suppliers:supplier-list')

        response = authenticated_client.get(url, {'company': company.id, 'search': 'alpha'})

        assert [s['name'] for s in response.data['results']] == ['Alpha Tools']

    def test_list_as_member(self, member_client, company, supplier):
        url = reverse('suppliers:supplier-list')
        response = member_client.get(url, {'company': company.id})

        assert response.status_code == status.HTTP_200_OK

    def test_list_foreign_company(self, other_client, company):
        url = reverse('suppliers:supplier-list')
        response = other_client.get(url, {'company': company.id})

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestSupplierWrite:
    """Tests for POST/PATCH/DELETE /api/suppliers/"""

    def test_create_shows_in_cached_list(self, authenticated_client, company):
        url = reverse('suppliers:supplier-list')
        authenticated_client.get(url, {'company': company.id})

        response = authenticated_client.post(url, {'company': str(company.id), 'name': 'GeoRent'}, format='json')
        assert response.status_code == status.HTTP_201_CREATED

        response = authenticated_client.get(url, {'company': company.id})
        assert response.data['count'] == 1

    def test_create_duplicate(self, authenticated_client, company, supplier):
        url = reverse('suppliers:supplier-list')
        response = authenticated_client.post(url, {'company': str(company.id), 'name': 'GeoRent'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_blank_name(self, authenticated_client, company):
        url = reverse('suppliers:supplier-list')
        response = authenticated_client.post(url, {'company': str(company.id), 'name': '  '}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_detail_lists_equipment(self, authenticated_client, supplier, rented_equipment):
        url = reverse('suppliers:supplier-detail', kwargs={'pk': supplier.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['equipment'][0]['serial_number'] == 'SN-002'
        assert response.data['equipment'][0]['daily_rent'] == '80.00'

    def test_update_phone_null_clears(self, authenticated_client, supplier):
        url = reverse('suppliers:supplier-detail', kwargs={'pk': supplier.id})
        response = authenticated_client.patch(url, {'phone': None}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['phone'] == ''

    def test_delete_in_use(self, authenticated_client, supplier, rented_equipment):
        url = reverse('suppliers:supplier-detail', kwargs={'pk': supplier.id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert Supplier.objects.filter(id=supplier.id).exists()

    def test_delete(self, authenticated_client, supplier):
        url = reverse('suppliers:supplier-detail', kwargs={'pk': supplier.id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT

    def test_delete_foreign(self, other_client, supplier):
        url = reverse('suppliers:supplier-detail', kwargs={'pk': supplier.id})
        response = other_client.delete(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
