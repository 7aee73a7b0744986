"""Cache keys for playground listings."""

from django.core.cache import cache

ACTIVE_LIST_KEY = "playgrounds:active"


def invalidate_playground_lists() -> None:
    cache.delete(ACTIVE_LIST_KEY)
