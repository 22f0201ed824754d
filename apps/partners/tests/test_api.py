import pytest
from django.urls import reverse
from rest_framework import status

from apps.equipment.models import EquipmentPartner
from apps.partners.models import Partner


@pytest.mark.django_db
class TestPartnerList:
    """Tests for GET /api/partners/"""

    def test_list(self, authenticated_client, company, partner_a, share_a):
        url = reverse('partners:partner-list')
        response = authenticated_client.get(url, {'company': company.id})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['results'][0]['equipment_count'] == 1

    def test_list_foreign_company(self, other_client, company):
        url = reverse('partners:partner-list')
        response = other_client.get(url, {'company': company.id})

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestPartnerDetail:
    """Tests for /api/partners/{id}/"""

    def test_detail_lists_shares(self, authenticated_client, partner_a, share_a):
        url = reverse('partners:partner-detail', kwargs={'pk': partner_a.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        share = response.data['equipment'][0]
        assert share['equipment_name'] == 'Leica TS16'
        assert share['percentage'] == '30.00'

    def test_detail_refreshes_after_share_added(self, authenticated_client, owned_equipment, partner_b):
        url = reverse('partners:partner-detail', kwargs={'pk': partner_b.id})
        assert authenticated_client.get(url).data['equipment'] == []

        add_url = reverse('equipment:equipment-partners', kwargs={'pk': owned_equipment.id})
        authenticated_client.post(add_url, {'partner_id': str(partner_b.id), 'percentage': '15'}, format='json')

        response = authenticated_client.get(url)
        assert len(response.data['equipment']) == 1

    def test_create(self, authenticated_client, company):
        url = reverse('partners:partner-list')
        response = authenticated_client.post(url, {'company': str(company.id), 'name': 'Dana Partner'}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert Partner.objects.filter(company=company, name='Dana Partner').exists()

    def test_rename(self, authenticated_client, partner_a):
        url = reverse('partners:partner-detail', kwargs={'pk': partner_a.id})
        response = authenticated_client.patch(url, {'name': 'Alice Novak'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'Alice Novak'

    def test_delete_cascades_shares(self, authenticated_client, partner_a, share_a):
        url = reverse('partners:partner-detail', kwargs={'pk': partner_a.id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not EquipmentPartner.objects.filter(id=share_a.id).exists()

    def test_delete_foreign(self, other_client, partner_a):
        url = reverse('partners:partner-detail', kwargs={'pk': partner_a.id})
        response = other_client.delete(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
