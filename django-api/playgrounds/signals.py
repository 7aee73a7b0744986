"""Django signals for cache invalidation."""

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from playgrounds.cache import invalidate_playground_lists
from playgrounds.models import Playground


@receiver([post_save, post_delete], sender=Playground)
def invalidate_playground_cache(sender, instance, **kwargs):
    """Invalidate the public list once the change is committed."""
    transaction.on_commit(invalidate_playground_lists)
