import pytest
from django.urls import reverse
from rest_framework import status

from apps.workers.models import Software, Worker, WorkerEquipmentSkill, WorkerStatus


@pytest.mark.django_db
class TestWorkerList:
    """Tests for GET /api/workers/"""

    def test_list(self, authenticated_client, company, worker, foreign_worker):
        url = reverse('workers:worker-list')
        response = authenticated_client.get(url, {'company': company.id})

        assert response.status_code == status.HTTP_200_OK
        assert [w['name'] for w in response.data['results']] == ['Petr Dvorak']

    def test_list_filtered_by_status(self, authenticated_client, company, worker):
        url = reverse('workers:worker-list')
        response = authenticated_client.get(url, {'company': company.id, 'status': 'inactive'})

        assert response.data['results'] == []

    def test_list_foreign_company(self, other_client, company):
        url = reverse('workers:worker-list')
        response = other_client.get(url, {'company': company.id})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_list_refreshes_after_archive(self, authenticated_client, company, worker):
        url = reverse('workers:worker-list')
        first = authenticated_client.get(url, {'company': company.id})
        assert first.data['results'][0]['status'] == WorkerStatus.ACTIVE

        authenticated_client.post(reverse('workers:worker-archive', kwargs={'pk': worker.id}))

        response = authenticated_client.get(url, {'company': company.id})
        assert response.data['results'][0]['status'] == WorkerStatus.INACTIVE


@pytest.mark.django_db
class TestWorkerCreate:
    """Tests for POST /api/workers/"""

    def test_create_with_skills(self, authenticated_client, company, equipment_type, brand, software):
        url = reverse('workers:worker-list')
        payload = {
            'company': str(company.id),
            'name': 'Jana Novak',
            'phone': '+420 777 000 111',
            'category': 'engineer',
            'salary_day': '1500.00',
            'equipment_skills': [{
                'equipment_type_id': str(equipment_type.id),
                'equipment_brand_id': str(brand.id),
                'proficiency_rating': 4,
            }],
            'software_ids': [str(software.id)],
        }
        response = authenticated_client.post(url, payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['salary_month'] == '0.00'
        assert response.data['equipment_skills'][0]['equipment_brand_name'] == 'Leica'
        assert response.data['software_skills'][0]['software']['name'] == 'AutoCAD'

    def test_create_without_salary(self, authenticated_client, company):
        url = reverse('workers:worker-list')
        payload = {'company': str(company.id), 'name': 'Unpaid', 'phone': '1', 'category': 'assistant'}
        response = authenticated_client.post(url, payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'salary_month' in response.data

    def test_create_rating_out_of_range(self, authenticated_client, company, equipment_type, brand):
        url = reverse('workers:worker-list')
        payload = {
            'company': str(company.id),
            'name': 'Jana Novak',
            'phone': '1',
            'category': 'engineer',
            'salary_month': '30000',
            'equipment_skills': [{
                'equipment_type_id': str(equipment_type.id),
                'equipment_brand_id': str(brand.id),
                'proficiency_rating': 6,
            }],
        }
        response = authenticated_client.post(url, payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not Worker.objects.filter(name='Jana Novak').exists()

    def test_create_foreign_company(self, other_client, company):
        url = reverse('workers:worker-list')
        payload = {
            'company': str(company.id),
            'name': 'Intruder',
            'phone': '1',
            'category': 'assistant',
            'salary_day': '500',
        }
        response = other_client.post(url, payload, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestWorkerDetail:
    """Tests for /api/workers/{id}/"""

    def test_retrieve(self, authenticated_client, worker, equipment_skill, software_skill):
        url = reverse('workers:worker-detail', kwargs={'pk': worker.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['equipment_skills'][0]['equipment_type_name'] == 'Total Station'
        assert len(response.data['software_skills']) == 1

    def test_retrieve_foreign(self, authenticated_client, foreign_worker):
        url = reverse('workers:worker-detail', kwargs={'pk': foreign_worker.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_leaving_no_salary(self, authenticated_client, worker):
        url = reverse('workers:worker-detail', kwargs={'pk': worker.id})
        response = authenticated_client.patch(url, {'salary_month': '0'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_update_refreshes_detail(self, authenticated_client, worker):
        url = reverse('workers:worker-detail', kwargs={'pk': worker.id})
        authenticated_client.get(url)

        authenticated_client.patch(url, {'phone': '+420 600 111 222'}, format='json')

        assert authenticated_client.get(url).data['phone'] == '+420 600 111 222'

    def test_archive_and_reactivate(self, authenticated_client, worker):
        archive_url = reverse('workers:worker-archive', kwargs={'pk': worker.id})
        assert authenticated_client.post(archive_url).data['status'] == 'inactive'

        reactivate_url = reverse('workers:worker-reactivate', kwargs={'pk': worker.id})
        assert authenticated_client.post(reactivate_url).data['status'] == 'active'

    def test_no_delete(self, authenticated_client, worker):
        url = reverse('workers:worker-detail', kwargs={'pk': worker.id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED


@pytest.mark.django_db
class TestWorkerSkills:
    """Tests for skill endpoints."""

    def test_add_equipment_skill(self, authenticated_client, worker, equipment_type, brand):
        url = reverse('workers:worker-equipment-skills', kwargs={'pk': worker.id})
        payload = {
            'equipment_type_id': str(equipment_type.id),
            'equipment_brand_id': str(brand.id),
            'proficiency_rating': 5,
        }
        response = authenticated_client.post(url, payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert authenticated_client.get(url).data[0]['proficiency_rating'] == 5

    def test_add_duplicate_equipment_skill(self, authenticated_client, worker, equipment_skill):
        url = reverse('workers:worker-equipment-skills', kwargs={'pk': worker.id})
        payload = {
            'equipment_type_id': str(equipment_skill.equipment_type_id),
            'equipment_brand_id': str(equipment_skill.equipment_brand_id),
            'proficiency_rating': 2,
        }
        response = authenticated_client.post(url, payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_change_rating(self, authenticated_client, worker, equipment_skill):
        list_url = reverse('workers:worker-equipment-skills', kwargs={'pk': worker.id})
        authenticated_client.get(list_url)

        url = reverse('workers:equipment-skill-detail', kwargs={'pk': equipment_skill.id})
        response = authenticated_client.patch(url, {'proficiency_rating': 1}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert authenticated_client.get(list_url).data[0]['proficiency_rating'] == 1

    def test_change_rating_out_of_range(self, authenticated_client, equipment_skill):
        url = reverse('workers:equipment-skill-detail', kwargs={'pk': equipment_skill.id})
        response = authenticated_client.patch(url, {'proficiency_rating': 0}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_remove_equipment_skill_foreign(self, other_client, equipment_skill):
        url = reverse('workers:equipment-skill-detail', kwargs={'pk': equipment_skill.id})
        response = other_client.delete(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert WorkerEquipmentSkill.objects.filter(id=equipment_skill.id).exists()

    def test_add_and_remove_software_skill(self, authenticated_client, worker, software):
        url = reverse('workers:worker-software-skills', kwargs={'pk': worker.id})
        created = authenticated_client.post(url, {'software_id': str(software.id)}, format='json')
        assert created.status_code == status.HTTP_201_CREATED

        remove_url = reverse('workers:software-skill-detail', kwargs={'pk': created.data['id']})
        assert authenticated_client.delete(remove_url).status_code == status.HTTP_204_NO_CONTENT

        assert authenticated_client.get(url).data == []


@pytest.mark.django_db
class TestCatalogEndpoints:
    """Tests for /api/workers/software/ and /api/workers/brands/"""

    def test_software_list(self, authenticated_client, company, software):
        url = reverse('workers:software-list')
        response = authenticated_client.get(url, {'company': company.id})

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['is_seeded'] is True

    def test_create_software(self, authenticated_client, company):
        url = reverse('workers:software-list')
        response = authenticated_client.post(url, {'company': str(company.id), 'name': 'QGIS'}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert Software.objects.get(name='QGIS').company == company

    def test_create_duplicate_brand(self, authenticated_client, company, brand):
        url = reverse('workers:equipment-brand-list')
        response = authenticated_client.post(url, {'company': str(company.id), 'name': 'LEICA'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_brand_list_foreign_company(self, other_client, company):
        url = reverse('workers:equipment-brand-list')
        response = other_client.get(url, {'company': company.id})

        assert response.status_code == status.HTTP_404_NOT_FOUND
