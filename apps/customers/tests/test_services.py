"""
Service layer unit tests for customers app.
"""

import pytest

from apps.common.cache import get_query_store, query_keys
from apps.companies.services.exceptions import CompanyNotFoundError
from apps.customers.models import Customer, CustomerContact, CustomerSite, CustomerStatus
from apps.customers.services import (
    list_customers,
    get_customer_by_id,
    create_customer,
    update_customer,
    delete_customer,
    list_contacts,
    create_contact,
    update_contact,
    delete_contact,
    list_sites,
    create_site,
    update_site,
    delete_site,
    CustomerNotFoundError,
    ContactNotFoundError,
    SiteNotFoundError,
)


# =============================================================================
# Customers
# =============================================================================

@pytest.mark.django_db
class TestListCustomers:

    def test_hides_deleted(self, company, user, customer):
        gone = Customer.objects.create(company=company, name='Old Client')
        gone.soft_delete()

        assert list(list_customers(company_id=company.id, user=user)) == [customer]

    def test_filters(self, company, user, customer):
        Customer.objects.create(company=company, name='Lead', phone='605 111 222', status=CustomerStatus.PROSPECT)

        assert [c.name for c in list_customers(company_id=company.id, user=user, status='prospect')] == ['Lead']
        assert [c.name for c in list_customers(company_id=company.id, user=user, search='605 111')] == ['Lead']
        assert list(list_customers(company_id=company.id, user=user, customer_type='government')) == []

    def test_non_member(self, company, other_user):
        with pytest.raises(CompanyNotFoundError):
            list_customers(company_id=company.id, user=other_user)


@pytest.mark.django_db
class TestCustomerLifecycle:

    def test_create_defaults(self, company, user):
        customer = create_customer(company_id=company.id, user=user, name='Metrostav', email=None)

        assert customer.customer_type == 'company'
        assert customer.status == 'active'
        assert customer.email == ''

    def test_update_clears_with_none(self, user, customer):
        updated = update_customer(customer_id=customer.id, user=user, phone=None, status='inactive')

        assert updated.phone == ''
        assert updated.status == 'inactive'

    def test_update_unknown_field(self, user, customer):
        with pytest.raises(TypeError):
            update_customer(customer_id=customer.id, user=user, company_id=None)

    def test_delete_is_soft(self, user, customer, contact, site):
        delete_customer(customer_id=customer.id, user=user)

        customer.refresh_from_db()
        assert customer.deleted_at is not None
        assert CustomerContact.objects.filter(id=contact.id).exists()
        with pytest.raises(CustomerNotFoundError):
            get_customer_by_id(customer_id=customer.id, user=user)

    def test_delete_twice(self, user, customer):
        delete_customer(customer_id=customer.id, user=user)

        with pytest.raises(CustomerNotFoundError):
            delete_customer(customer_id=customer.id, user=user)

    def test_delete_invalidates_list(self, company, user, customer):
        store = get_query_store()
        store.set(query_keys.customers.all(company.id) + ({'search': None},), ['Skanska Brno'])

        delete_customer(customer_id=customer.id, user=user)

        assert store.get(query_keys.customers.all(company.id) + ({'search': None},)) is None

    def test_foreign_customer(self, user, foreign_customer):
        with pytest.raises(CustomerNotFoundError):
            update_customer(customer_id=foreign_customer.id, user=user, name='Mine now')

    def test_detail_hides_deleted_sites(self, user, customer, site):
        CustomerSite.objects.create(customer=customer, name='Closed Yard').soft_delete()

        detail = get_customer_by_id(customer_id=customer.id, user=user)

        assert [s.name for s in detail.sites.all()] == ['D1 Bridge Section']


# =============================================================================
# Contacts
# =============================================================================

@pytest.mark.django_db
class TestContacts:

    def test_primary_listed_first(self, user, customer, contact):
        create_contact(customer_id=customer.id, user=user, name='Accounts Desk', phone='541 000 001')

        names = [c.name for c in list_contacts(customer_id=customer.id, user=user)]

        assert names == ['Martin Svoboda', 'Accounts Desk']

    def test_new_primary_demotes_previous(self, user, customer, contact):
        new = create_contact(
            customer_id=customer.id,
            user=user,
            name='Lucie Horakova',
            phone='777 888 999',
            is_primary=True,
        )

        contact.refresh_from_db()
        assert contact.is_primary is False
        assert list_contacts(customer_id=customer.id, user=user)[0] == new

    def test_update_to_primary_demotes_previous(self, user, customer, contact):
        other = CustomerContact.objects.create(customer=customer, name='Jan Cerny', phone='1')

        update_contact(contact_id=other.id, user=user, is_primary=True, role=None)

        contact.refresh_from_db()
        other.refresh_from_db()
        assert contact.is_primary is False
        assert other.is_primary is True
        assert other.role == ''

    def test_delete_is_hard(self, user, contact):
        delete_contact(contact_id=contact.id, user=user)

        assert not CustomerContact.objects.filter(id=contact.id).exists()

    def test_contact_of_deleted_customer(self, user, customer, contact):
        customer.soft_delete()

        with pytest.raises(ContactNotFoundError):
            update_contact(contact_id=contact.id, user=user, phone='2')

    def test_add_to_foreign_customer(self, user, foreign_customer):
        with pytest.raises(CustomerNotFoundError):
            create_contact(customer_id=foreign_customer.id, user=user, name='Spy', phone='1')

    def test_change_invalidates_detail(self, user, customer, contact):
        store = get_query_store()
        store.set(query_keys.customers.contacts(customer.id), ['stale'])

        update_contact(contact_id=contact.id, user=user, phone='+420 731 000 000')

        assert store.get(query_keys.customers.contacts(customer.id)) is None


# =============================================================================
# Sites
# =============================================================================

@pytest.mark.django_db
class TestSites:

    def test_create_and_list(self, user, customer):
        create_site(customer_id=customer.id, user=user, name='Ostrava Depot', city='Ostrava', landmarks=None)

        sites = list(list_sites(customer_id=customer.id, user=user))

        assert [s.name for s in sites] == ['Ostrava Depot']
        assert sites[0].landmarks == ''

    def test_update(self, user, site):
        updated = update_site(site_id=site.id, user=user, city='Praha', gps_coordinates=None)

        assert updated.city == 'Praha'
        assert updated.gps_coordinates == ''

    def test_delete_is_soft(self, user, customer, site):
        delete_site(site_id=site.id, user=user)

        site.refresh_from_db()
        assert site.deleted_at is not None
        assert list(list_sites(customer_id=customer.id, user=user)) == []

    def test_deleted_site_cannot_be_edited(self, user, site):
        delete_site(site_id=site.id, user=user)

        with pytest.raises(SiteNotFoundError):
            update_site(site_id=site.id, user=user, name='Back again')

    def test_foreign_site(self, other_user, site):
        with pytest.raises(SiteNotFoundError):
            delete_site(site_id=site.id, user=other_user)
