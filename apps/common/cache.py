"""
Keyed read cache with prefix invalidation.

Reads are cached under tuple keys such as ``("equipment", company_id)`` or
``("equipment", equipment_id, "partners")``. Invalidating a prefix marks every
key that starts with it as stale, so the next read refetches from the
database. Staleness is tracked with a version counter per prefix: the storage
key of a value embeds the current version of each of its prefixes, and an
invalidation bumps the counter.

Usage:
    store = get_query_store()
    data = store.get_or_fetch(query_keys.partners.all(company_id), fetch)
    ...
    store.invalidate(query_keys.partners.all(company_id))
"""

import hashlib
import json
import logging
from typing import Any, Callable, Hashable, Iterable, Optional, Tuple

from django.conf import settings
from django.core.cache import caches

logger = logging.getLogger(__name__)

Key = Tuple[Hashable, ...]


def _part(value: Any) -> str:
    if isinstance(value, dict):
        return hashlib.sha1(
            json.dumps(value, sort_keys=True, default=str).encode()
        ).hexdigest()[:16]
    return str(value)


def _encode(key: Iterable[Any]) -> str:
    return ':'.join(_part(part) for part in key)


class QueryStore:
    """Last-fetched values by key, with prefix invalidation."""

    def __init__(self, cache, timeout: Optional[int] = None, namespace: str = 'q'):
        self.cache = cache
        self.timeout = timeout
        self.namespace = namespace

    def _version_keys(self, key: Key):
        return [f'{self.namespace}:v:{_encode(key[:i])}' for i in range(1, len(key) + 1)]

    def _storage_key(self, key: Key) -> str:
        version_keys = self._version_keys(key)
        versions = self.cache.get_many(version_keys)
        stamp = '.'.join(str(versions.get(vk, 0)) for vk in version_keys)
        return f'{self.namespace}:d:{_encode(key)}@{stamp}'

    def get(self, key: Key, default=None):
        return self.cache.get(self._storage_key(key), default)

    def set(self, key: Key, value) -> None:
        self.cache.set(self._storage_key(key), value, self.timeout)

    def get_or_fetch(self, key: Key, fetch: Callable[[], Any]):
        """Return the cached value for ``key`` or fetch, store and return it."""
        storage_key = self._storage_key(key)
        sentinel = object()
        value = self.cache.get(storage_key, sentinel)
        if value is sentinel:
            value = fetch()
            self.cache.set(storage_key, value, self.timeout)
        return value

    def invalidate(self, *prefixes: Key) -> None:
        """Mark every key under each prefix stale."""
        for prefix in prefixes:
            version_key = f'{self.namespace}:v:{_encode(prefix)}'
            if not self.cache.add(version_key, 1, None):
                try:
                    self.cache.incr(version_key)
                except ValueError:
                    # Evicted between add() and incr()
                    self.cache.set(version_key, 1, None)
            logger.debug("Invalidated query prefix %s", prefix)


class _Keys:
    """Key factory mirroring the API's read surfaces."""

    class companies:
        all = ('companies',)

        @staticmethod
        def mine(user_id):
            return ('companies', 'user', user_id)

        @staticmethod
        def detail(company_id):
            return ('companies', company_id)

        @staticmethod
        def members(company_id):
            return ('companies', company_id, 'members')

    class equipment:
        root = ('equipment',)

        @staticmethod
        def all(company_id):
            return ('equipment', company_id)

        @staticmethod
        def detail(equipment_id):
            return ('equipment', 'detail', equipment_id)

        @staticmethod
        def partners(equipment_id):
            return ('equipment', equipment_id, 'partners')

        @staticmethod
        def types(company_id):
            return ('equipment-types', company_id)

    class suppliers:
        root = ('suppliers',)

        @staticmethod
        def all(company_id):
            return ('suppliers', company_id)

        @staticmethod
        def detail(supplier_id):
            return ('suppliers', 'detail', supplier_id)

    class partners:
        root = ('partners',)

        @staticmethod
        def all(company_id):
            return ('partners', company_id)

        @staticmethod
        def detail(partner_id):
            return ('partners', 'detail', partner_id)

    class workers:
        root = ('workers',)

        @staticmethod
        def all(company_id):
            return ('workers', company_id)

        @staticmethod
        def detail(worker_id):
            return ('workers', 'detail', worker_id)

        # Skill lists sit under the worker detail, so refreshing it covers them
        @staticmethod
        def equipment_skills(worker_id):
            return ('workers', 'detail', worker_id, 'equipment-skills')

        @staticmethod
        def software_skills(worker_id):
            return ('workers', 'detail', worker_id, 'software-skills')

        @staticmethod
        def software(company_id):
            return ('software', company_id)

        @staticmethod
        def equipment_brands(company_id):
            return ('equipment-brands', company_id)

    class customers:
        root = ('customers',)

        @staticmethod
        def all(company_id):
            return ('customers', company_id)

        @staticmethod
        def detail(customer_id):
            return ('customers', 'detail', customer_id)

        @staticmethod
        def contacts(customer_id):
            return ('customers', 'detail', customer_id, 'contacts')

        @staticmethod
        def sites(customer_id):
            return ('customers', 'detail', customer_id, 'sites')


query_keys = _Keys


_store: Optional[QueryStore] = None


def get_query_store() -> QueryStore:
    """Return the process-wide store configured by ``QUERY_CACHE_ALIAS``."""
    global _store
    if _store is None:
        _store = QueryStore(
            caches[settings.QUERY_CACHE_ALIAS],
            timeout=settings.QUERY_CACHE_TIMEOUT,
        )
    return _store
