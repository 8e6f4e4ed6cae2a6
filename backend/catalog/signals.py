from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .cache import MoodboardCache
from .models import ModelProfile, Moodboard, MoodboardModel


@receiver(post_save, sender=Moodboard)
@receiver(post_delete, sender=Moodboard)
@receiver(post_save, sender=ModelProfile)
@receiver(post_delete, sender=ModelProfile)
@receiver(post_save, sender=MoodboardModel)
@receiver(post_delete, sender=MoodboardModel)
def invalidate_catalog_cache(sender, **kwargs):
    MoodboardCache().clear()
