from decimal import Decimal

import pytest
from django.urls import reverse
from rest_framework import status

from apps.equipment.models import Equipment, EquipmentPartner, EquipmentType, OwnershipType


# =============================================================================
# Equipment CRUD
# =============================================================================

@pytest.mark.django_db
class TestEquipmentList:
    """Tests for GET /api/equipment/"""

    def test_list_equipment(self, authenticated_client, company, owned_equipment, rented_equipment, foreign_equipment):
        url = reverse('equipment:equipment-list')
        response = authenticated_client.get(url, {'company': company.id})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2
        names = {item['name'] for item in response.data['results']}
        assert names == {'Leica TS16', 'Trimble R12'}

    def test_list_filter_by_ownership_type(self, authenticated_client, company, owned_equipment, rented_equipment):
        url = reverse('equipment:equipment-list')
        response = authenticated_client.get(url, {'company': company.id, 'ownership_type': 'rented'})

        assert response.data['count'] == 1
        result = response.data['results'][0]
        assert result['supplier_name'] == 'GeoRent'
        assert result['monthly_rent'] == '1200.00'

    def test_filtered_and_unfiltered_lists_cached_separately(self, authenticated_client, company, owned_equipment, rented_equipment):
        url = reverse('equipment:equipment-list')
        authenticated_client.get(url, {'company': company.id, 'ownership_type': 'owned'})

        response = authenticated_client.get(url, {'company': company.id})

        assert response.data['count'] == 2

    def test_list_requires_company(self, authenticated_client):
        url = reverse('equipment:equipment-list')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_list_foreign_company(self, other_client, company):
        url = reverse('equipment:equipment-list')
        response = other_client.get(url, {'company': company.id})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_list_pagination(self, authenticated_client, company, owned_equipment, rented_equipment):
        url = reverse('equipment:equipment-list')
        response = authenticated_client.get(url, {'company': company.id, 'limit': 1})

        assert response.data['count'] == 2
        assert len(response.data['results']) == 1
        assert response.data['next'] is not None


@pytest.mark.django_db
class TestEquipmentCreate:
    """Tests for POST /api/equipment/"""

    def test_create_owned(self, authenticated_client, company, equipment_type):
        url = reverse('equipment:equipment-list')
        data = {
            'company': str(company.id),
            'name': 'Leica GS18',
            'serial_number': 'GS-100',
            'equipment_type_id': str(equipment_type.id),
        }
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['ownership_type'] == OwnershipType.OWNED
        assert response.data['supplier'] is None

    def test_create_rented_missing_fields(self, authenticated_client, company, equipment_type, supplier):
        url = reverse('equipment:equipment-list')
        data = {
            'company': str(company.id),
            'name': 'Trimble SX12',
            'serial_number': 'SX-1',
            'equipment_type_id': str(equipment_type.id),
            'ownership_type': 'rented',
            'supplier_id': str(supplier.id),
        }
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['fields'] == ['monthly_rent', 'daily_rent']

    def test_create_rented(self, authenticated_client, company, equipment_type, supplier):
        url = reverse('equipment:equipment-list')
        data = {
            'company': str(company.id),
            'name': 'Trimble SX12',
            'serial_number': 'SX-1',
            'equipment_type_id': str(equipment_type.id),
            'ownership_type': 'rented',
            'supplier_id': str(supplier.id),
            'monthly_rent': '1500.00',
            'daily_rent': '95.00',
        }
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['supplier']['name'] == 'GeoRent'

    def test_create_zero_rent_rejected(self, authenticated_client, company, equipment_type, supplier):
        url = reverse('equipment:equipment-list')
        data = {
            'company': str(company.id),
            'name': 'Trimble SX12',
            'serial_number': 'SX-1',
            'equipment_type_id': str(equipment_type.id),
            'ownership_type': 'rented',
            'supplier_id': str(supplier.id),
            'monthly_rent': '0',
            'daily_rent': '95.00',
        }
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'monthly_rent' in response.data

    def test_create_duplicate_serial(self, authenticated_client, company, equipment_type, owned_equipment):
        url = reverse('equipment:equipment-list')
        data = {
            'company': str(company.id),
            'name': 'Copy',
            'serial_number': owned_equipment.serial_number,
            'equipment_type_id': str(equipment_type.id),
        }
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'serial number' in response.data['error']


@pytest.mark.django_db
class TestEquipmentDetail:
    """Tests for GET/PATCH /api/equipment/{id}/"""

    def test_retrieve(self, authenticated_client, rented_equipment):
        url = reverse('equipment:equipment-detail', kwargs={'pk': rented_equipment.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['supplier']['id'] == str(rented_equipment.supplier_id)

    def test_retrieve_foreign(self, authenticated_client, foreign_equipment):
        url = reverse('equipment:equipment-detail', kwargs={'pk': foreign_equipment.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_rename_refreshes_cached_detail(self, authenticated_client, owned_equipment):
        url = reverse('equipment:equipment-detail', kwargs={'pk': owned_equipment.id})
        authenticated_client.get(url)

        authenticated_client.patch(url, {'name': 'Leica TS16 A'}, format='json')
        response = authenticated_client.get(url)

        assert response.data['name'] == 'Leica TS16 A'

    def test_switch_to_rented_removes_shares(self, authenticated_client, owned_equipment, share_a, supplier):
        url = reverse('equipment:equipment-detail', kwargs={'pk': owned_equipment.id})
        data = {
            'ownership_type': 'rented',
            'supplier_id': str(supplier.id),
            'monthly_rent': '900.00',
            'daily_rent': '45.00',
        }
        response = authenticated_client.patch(url, data, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['ownership_type'] == 'rented'
        assert not EquipmentPartner.objects.filter(equipment=owned_equipment).exists()

    def test_switch_to_rented_without_fields(self, authenticated_client, owned_equipment, share_a):
        url = reverse('equipment:equipment-detail', kwargs={'pk': owned_equipment.id})
        response = authenticated_client.patch(url, {'ownership_type': 'rented'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['fields'] == ['supplier_id', 'monthly_rent', 'daily_rent']
        assert EquipmentPartner.objects.filter(equipment=owned_equipment).count() == 1

    def test_switch_to_owned_clears_rental_fields(self, authenticated_client, rented_equipment):
        url = reverse('equipment:equipment-detail', kwargs={'pk': rented_equipment.id})
        response = authenticated_client.patch(url, {'ownership_type': 'owned'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['supplier'] is None
        assert response.data['monthly_rent'] is None
        assert response.data['daily_rent'] is None

    def test_update_foreign(self, other_client, owned_equipment):
        url = reverse('equipment:equipment-detail', kwargs={'pk': owned_equipment.id})
        response = other_client.patch(url, {'name': 'Mine now'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_archive_and_reactivate(self, authenticated_client, owned_equipment):
        archive_url = reverse('equipment:equipment-archive', kwargs={'pk': owned_equipment.id})
        response = authenticated_client.post(archive_url)
        assert response.data['status'] == 'inactive'

        reactivate_url = reverse('equipment:equipment-reactivate', kwargs={'pk': owned_equipment.id})
        response = authenticated_client.post(reactivate_url)
        assert response.data['status'] == 'active'

    def test_delete_not_allowed(self, authenticated_client, owned_equipment):
        url = reverse('equipment:equipment-detail', kwargs={'pk': owned_equipment.id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
        assert Equipment.objects.filter(id=owned_equipment.id).exists()


# =============================================================================
# Partner ownership
# =============================================================================

@pytest.mark.django_db
class TestEquipmentPartners:
    """Tests for /api/equipment/{id}/partners/ and /api/equipment/ownership/{row_id}/"""

    def test_list_partners(self, authenticated_client, owned_equipment, share_a):
        url = reverse('equipment:equipment-partners', kwargs={'pk': owned_equipment.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['partner_name'] == 'Alice Partner'
        assert response.data[0]['percentage'] == '30.00'

    def test_add_partner(self, authenticated_client, owned_equipment, share_a, partner_b):
        url = reverse('equipment:equipment-partners', kwargs={'pk': owned_equipment.id})
        authenticated_client.get(url)

        response = authenticated_client.post(url, {'partner_id': str(partner_b.id), 'percentage': '70'}, format='json')
        assert response.status_code == status.HTTP_201_CREATED

        # Cached ledger refetched after the write
        response = authenticated_client.get(url)
        assert len(response.data) == 2

    def test_add_partner_exceeding_total(self, authenticated_client, owned_equipment, share_a, partner_b):
        url = reverse('equipment:equipment-partners', kwargs={'pk': owned_equipment.id})
        response = authenticated_client.post(url, {'partner_id': str(partner_b.id), 'percentage': 71}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'ExceedsTotal'
        assert response.data['current_total'] == '30.00'
        assert response.data['error'] == 'Total would exceed 100% (current: 30%)'

    def test_add_partner_invalid_percentage(self, authenticated_client, owned_equipment, partner_a):
        url = reverse('equipment:equipment-partners', kwargs={'pk': owned_equipment.id})
        response = authenticated_client.post(url, {'partner_id': str(partner_a.id), 'percentage': 'abc'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'InvalidPercentage'
        assert response.data['current_total'] is None

    def test_add_partner_duplicate(self, authenticated_client, owned_equipment, share_a, partner_a):
        url = reverse('equipment:equipment-partners', kwargs={'pk': owned_equipment.id})
        response = authenticated_client.post(url, {'partner_id': str(partner_a.id), 'percentage': 5}, format='json')

        assert response.data['code'] == 'DuplicatePartner'

    def test_add_partner_to_rented(self, authenticated_client, rented_equipment, partner_a):
        url = reverse('equipment:equipment-partners', kwargs={'pk': rented_equipment.id})
        response = authenticated_client.post(url, {'partner_id': str(partner_a.id), 'percentage': 5}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not EquipmentPartner.objects.filter(equipment=rented_equipment).exists()

    def test_partners_of_foreign_equipment(self, authenticated_client, foreign_equipment):
        url = reverse('equipment:equipment-partners', kwargs={'pk': foreign_equipment.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_share(self, authenticated_client, share_a):
        url = reverse('equipment:equipment-partner-detail', kwargs={'pk': share_a.id})
        response = authenticated_client.patch(url, {'percentage': '99'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['percentage'] == '99.00'

    def test_update_share_exceeding(self, authenticated_client, owned_equipment, share_a, partner_b):
        EquipmentPartner.objects.create(equipment=owned_equipment, partner=partner_b, percentage=Decimal('50'))
        url = reverse('equipment:equipment-partner-detail', kwargs={'pk': share_a.id})
        response = authenticated_client.patch(url, {'percentage': '51'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['current_total'] == '50.00'
        assert response.data['error'] == 'Total would exceed 100% (others: 50%)'

    def test_remove_share(self, authenticated_client, share_a):
        url = reverse('equipment:equipment-partner-detail', kwargs={'pk': share_a.id})

        response = authenticated_client.delete(url)
        assert response.status_code == status.HTTP_204_NO_CONTENT

        response = authenticated_client.delete(url)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_remove_share_as_non_member(self, other_client, share_a):
        url = reverse('equipment:equipment-partner-detail', kwargs={'pk': share_a.id})
        response = other_client.delete(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert EquipmentPartner.objects.filter(id=share_a.id).exists()


@pytest.mark.django_db
class TestOwnershipSummary:
    """Tests for GET /api/equipment/{id}/ownership/"""

    def test_summary(self, authenticated_client, owned_equipment, share_a):
        url = reverse('equipment:equipment-ownership', kwargs={'pk': owned_equipment.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['partner_total'] == '30.00'
        assert response.data['company_share'] == '70.00'
        assert response.data['warning'] is None

    def test_summary_refreshes_after_add(self, authenticated_client, owned_equipment, share_a, partner_b):
        url = reverse('equipment:equipment-ownership', kwargs={'pk': owned_equipment.id})
        authenticated_client.get(url)

        add_url = reverse('equipment:equipment-partners', kwargs={'pk': owned_equipment.id})
        authenticated_client.post(add_url, {'partner_id': str(partner_b.id), 'percentage': '20'}, format='json')
        response = authenticated_client.get(url)

        assert response.data['company_share'] == '50.00'

    def test_summary_flags_negative_share(self, authenticated_client, owned_equipment, share_a, partner_b):
        EquipmentPartner.objects.create(equipment=owned_equipment, partner=partner_b, percentage=Decimal('80'))
        url = reverse('equipment:equipment-ownership', kwargs={'pk': owned_equipment.id})
        response = authenticated_client.get(url)

        assert response.data['company_share'] == '-10.00'
        assert response.data['warning']['code'] == 'NegativeCompanyShare'


# =============================================================================
# Equipment types
# =============================================================================

@pytest.mark.django_db
class TestEquipmentTypes:
    """Tests for /api/equipment/types/"""

    def test_list_types(self, authenticated_client, company, equipment_type):
        url = reverse('equipment:equipment-type-list')
        response = authenticated_client.get(url, {'company': company.id})

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['is_system_default'] is True

    def test_create_type_shows_in_cached_list(self, authenticated_client, company, equipment_type):
        url = reverse('equipment:equipment-type-list')
        authenticated_client.get(url, {'company': company.id})

        response = authenticated_client.post(url, {'company': str(company.id), 'name': 'Drone'}, format='json')
        assert response.status_code == status.HTTP_201_CREATED

        response = authenticated_client.get(url, {'company': company.id})
        assert [t['name'] for t in response.data] == ['Drone', 'Total Station']

    def test_delete_system_type_forbidden(self, authenticated_client, equipment_type):
        url = reverse('equipment:equipment-type-detail', kwargs={'pk': equipment_type.id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_delete_type_in_use(self, authenticated_client, company):
        drone = EquipmentType.objects.create(company=company, name='Drone')
        Equipment.objects.create(company=company, name='DJI', serial_number='D-1', equipment_type=drone)
        url = reverse('equipment:equipment-type-detail', kwargs={'pk': drone.id})

        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
