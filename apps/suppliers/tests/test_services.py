"""
Service layer unit tests for suppliers app.
"""

from uuid import uuid4

import pytest

from apps.common.cache import get_query_store, query_keys
from apps.companies.services.exceptions import CompanyNotFoundError
from apps.equipment.models import OwnershipType
from apps.equipment.services import update_equipment
from apps.suppliers.models import Supplier
from apps.suppliers.services import (
    list_suppliers,
    get_supplier_by_id,
    create_supplier,
    update_supplier,
    delete_supplier,
    SupplierNotFoundError,
    DuplicateSupplierError,
    SupplierInUseError,
)


@pytest.mark.django_db
class TestListSuppliers:

    def test_list_with_equipment_count(self, company, user, supplier, rented_equipment):
        Supplier.objects.create(company=company, name='Alpha Tools')

        suppliers = list(list_suppliers(company_id=company.id, user=user))

        assert [s.name for s in suppliers] == ['Alpha Tools', 'GeoRent']
        assert [s.equipment_count for s in suppliers] == [0, 1]

    def test_search(self, company, user, supplier):
        Supplier.objects.create(company=company, name='Alpha Tools')

        assert list(list_suppliers(company_id=company.id, user=user, search='geo')) == [supplier]

    def test_non_member(self, company, other_user):
        with pytest.raises(CompanyNotFoundError):
            list_suppliers(company_id=company.id, user=other_user)


@pytest.mark.django_db
class TestCreateSupplier:

    def test_create(self, company, user):
        supplier = create_supplier(company_id=company.id, user=user, name='Alpha Tools', phone='123')

        assert supplier.company == company
        assert supplier.phone == '123'

    def test_duplicate_name(self, company, user, supplier):
        with pytest.raises(DuplicateSupplierError):
            create_supplier(company_id=company.id, user=user, name='GeoRent')

    def test_same_name_in_other_company(self, other_company, other_user, supplier):
        created = create_supplier(company_id=other_company.id, user=other_user, name='GeoRent')

        assert created.company == other_company

    def test_invalidates_list(self, company, user):
        store = get_query_store()
        key = query_keys.suppliers.all(company.id) + ({'search': None},)
        store.set(key, [])

        create_supplier(company_id=company.id, user=user, name='Alpha Tools')

        assert store.get(key) is None


@pytest.mark.django_db
class TestUpdateSupplier:

    def test_update_name_and_clear_phone(self, user, supplier):
        updated = update_supplier(supplier_id=supplier.id, user=user, name='GeoRent CZ', phone='')

        updated.refresh_from_db()
        assert updated.name == 'GeoRent CZ'
        assert updated.phone == ''

    def test_rename_to_taken_name(self, company, user, supplier):
        Supplier.objects.create(company=company, name='Alpha Tools')

        with pytest.raises(DuplicateSupplierError):
            update_supplier(supplier_id=supplier.id, user=user, name='Alpha Tools')

    def test_rename_refreshes_equipment(self, company, user, supplier, rented_equipment):
        store = get_query_store()
        store.set(query_keys.equipment.detail(rented_equipment.id), {'supplier_name': 'GeoRent'})

        update_supplier(supplier_id=supplier.id, user=user, name='GeoRent CZ')

        assert store.get(query_keys.equipment.detail(rented_equipment.id)) is None

    def test_foreign_supplier(self, other_user, supplier):
        with pytest.raises(SupplierNotFoundError):
            update_supplier(supplier_id=supplier.id, user=other_user, name='Taken over')


@pytest.mark.django_db
class TestDeleteSupplier:

    def test_delete_unused(self, user, supplier):
        delete_supplier(supplier_id=supplier.id, user=user)

        assert not Supplier.objects.filter(id=supplier.id).exists()

    def test_delete_in_use(self, user, supplier, rented_equipment):
        with pytest.raises(SupplierInUseError) as exc_info:
            delete_supplier(supplier_id=supplier.id, user=user)

        assert '1 equipment record' in str(exc_info.value)
        assert Supplier.objects.filter(id=supplier.id).exists()

    def test_delete_after_equipment_switched_to_owned(self, user, supplier, rented_equipment):
        update_equipment(equipment_id=rented_equipment.id, user=user, ownership_type=OwnershipType.OWNED)

        delete_supplier(supplier_id=supplier.id, user=user)

        assert not Supplier.objects.filter(id=supplier.id).exists()

    def test_delete_missing(self, user):
        with pytest.raises(SupplierNotFoundError):
            delete_supplier(supplier_id=uuid4(), user=user)

    def test_get_malformed_id(self, user):
        with pytest.raises(SupplierNotFoundError):
            get_supplier_by_id(supplier_id='not-a-uuid', user=user)
