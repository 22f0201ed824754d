"""
System checks for the query cache configuration.
"""

from django.conf import settings
from django.core.checks import Tags, Warning, register

PROCESS_LOCAL_BACKENDS = {
    'django.core.cache.backends.locmem.LocMemCache',
    'django.core.cache.backends.dummy.DummyCache',
}


@register(Tags.caches, deploy=True)
def check_query_cache_shared(app_configs, **kwargs):
    """Warn when the query cache cannot carry invalidations across workers."""
    alias = settings.QUERY_CACHE_ALIAS
    backend = settings.CACHES.get(alias, {}).get('BACKEND')
    if backend in PROCESS_LOCAL_BACKENDS:
        return [
            Warning(
                f"Query cache '{alias}' uses {backend}, which is local to one process.",
                hint=(
                    "Set QUERY_CACHE_BACKEND to a shared backend such as "
                    "django.core.cache.backends.db.DatabaseCache when running "
                    "more than one worker."
                ),
                id='common.W001',
            )
        ]
    return []
