from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
from django.core.cache import cache
from .models import TurnoverEntry

def increment_user_cache_version(user_id):
    """
    Increment the cache version for a specific user.
    """
    version_key = f'user_cache_version:{user_id}'
    try:
        cache.incr(version_key)
    except ValueError:
        # Key doesn't exist, initialize it
        cache.set(version_key, 1, timeout=None)

@receiver(post_save, sender=TurnoverEntry)
@receiver(post_delete, sender=TurnoverEntry)
def turnover_entry_changed(sender, instance, **kwargs):
    """
    Clear cached dashboards when an entry is added, updated, or deleted.
    """
    increment_user_cache_version(instance.user_id)
