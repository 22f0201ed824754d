"""
Service layer unit tests for companies app.

Tests cover:
- Onboarding (company + owner membership in one transaction)
- Membership checks used by every tenant-scoped service
- Owner-only updates
- Query cache invalidation
"""

import pytest
from uuid import uuid4
from unittest.mock import patch

from apps.common.cache import get_query_store, query_keys
from apps.companies.models import Company, CompanyMember, CompanyRole
from apps.companies.services import (
    onboard_company,
    get_my_companies,
    get_company_by_id,
    update_company,
    get_company_members,
    require_membership,
    require_owner,
)
from apps.companies.services.exceptions import (
    CompanyNotFoundError,
    InsufficientPermissionsError,
)


@pytest.mark.django_db
class TestOnboarding:
    """Tests for onboard_company."""

    def test_onboard_creates_owner_membership(self, user):
        company = onboard_company(name='Northwind Rentals', user=user)

        membership = CompanyMember.objects.get(company=company, user=user)
        assert membership.role == CompanyRole.OWNER
        assert company.is_owner(user)

    def test_onboard_rolls_back_company_when_membership_fails(self, user):
        """A company never exists without its owner."""
        with patch(
            'apps.companies.services.company_management.CompanyMember.objects.create',
            side_effect=RuntimeError('boom'),
        ):
            with pytest.raises(RuntimeError):
                onboard_company(name='Half Made', user=user)

        assert not Company.objects.filter(name='Half Made').exists()

    def test_onboard_invalidates_my_companies(self, user):
        store = get_query_store()
        key = query_keys.companies.mine(user.id)
        store.set(key, ['stale'])

        onboard_company(name='Fresh Co', user=user)

        assert store.get(key) is None


@pytest.mark.django_db
class TestMembership:
    """Tests for membership helpers."""

    def test_require_membership_returns_membership(self, company, user):
        membership = require_membership(company_id=company.id, user=user)
        assert membership.company == company

    def test_require_membership_non_member(self, company, other_user):
        with pytest.raises(CompanyNotFoundError):
            require_membership(company_id=company.id, user=other_user)

    def test_require_membership_unknown_company(self, user):
        with pytest.raises(CompanyNotFoundError):
            require_membership(company_id=uuid4(), user=user)

    def test_require_membership_malformed_id(self, user):
        with pytest.raises(CompanyNotFoundError):
            require_membership(company_id='not-a-uuid', user=user)

    def test_require_owner_rejects_member(self, company, member_user):
        with pytest.raises(InsufficientPermissionsError):
            require_owner(company_id=company.id, user=member_user)


@pytest.mark.django_db
class TestCompanyQueries:
    """Tests for read services."""

    def test_get_my_companies_only_memberships(self, company, other_company, user):
        memberships = list(get_my_companies(user=user))

        assert [m.company for m in memberships] == [company]

    def test_get_company_by_id(self, company, user):
        assert get_company_by_id(company_id=company.id, user=user) == company

    def test_get_company_by_id_hides_foreign_company(self, other_company, user):
        with pytest.raises(CompanyNotFoundError):
            get_company_by_id(company_id=other_company.id, user=user)

    def test_members_owner_first(self, company, user, member_user):
        members = list(get_company_members(company_id=company.id, user=member_user))

        assert [m.user for m in members] == [user, member_user]


@pytest.mark.django_db
class TestUpdateCompany:
    """Tests for update_company."""

    def test_owner_can_rename(self, company, user):
        updated = update_company(company_id=company.id, user=user, name='Acme Geodesy')

        company.refresh_from_db()
        assert updated.name == 'Acme Geodesy'
        assert company.name == 'Acme Geodesy'

    def test_member_cannot_rename(self, company, member_user):
        with pytest.raises(InsufficientPermissionsError):
            update_company(company_id=company.id, user=member_user, name='Hijacked')

        company.refresh_from_db()
        assert company.name == 'Acme Surveying'

    def test_rename_invalidates_every_member_list(self, company, user, member_user):
        store = get_query_store()
        store.set(query_keys.companies.mine(user.id), ['stale'])
        store.set(query_keys.companies.mine(member_user.id), ['stale'])
        store.set(query_keys.companies.detail(company.id), {'name': 'stale'})

        update_company(company_id=company.id, user=user, name='Renamed')

        assert store.get(query_keys.companies.mine(user.id)) is None
        assert store.get(query_keys.companies.mine(member_user.id)) is None
        assert store.get(query_keys.companies.detail(company.id)) is None
