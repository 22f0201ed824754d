from typing import Optional

from django.contrib.auth import get_user_model

from apps.common.cache import get_query_store, query_keys

from .exceptions import InvalidProfileError

User = get_user_model()


def update_profile(*, user: User, full_name: Optional[str] = None, phone: Optional[str] = None, store=None) -> User:
    """
    Change the user's own name and/or phone. ``phone=''`` clears it.

    Member lists of the user's companies show the name, so they are
    refetched afterwards.

    Raises:
        InvalidProfileError: If ``full_name`` is blank
    """
    fields = ['updated_at']
    if full_name is not None:
        full_name = full_name.strip()
        if not full_name:
            raise InvalidProfileError("Full name cannot be empty")
        user.full_name = full_name
        fields.append('full_name')
    if phone is not None:
        user.phone = phone
        fields.append('phone')

    user.save(update_fields=fields)

    store = store or get_query_store()
    for company_id in user.company_memberships.values_list('company_id', flat=True):
        store.invalidate(query_keys.companies.members(company_id))
    return user
