"""
Django signals for the catalog app.
Removes stored files when the rows that reference them are deleted.
"""

import logging

from django.db.models.signals import post_delete
from django.dispatch import receiver

from .models import Product, ProductImage

logger = logging.getLogger(__name__)


@receiver(post_delete, sender=ProductImage)
def delete_gallery_file(sender, instance, **kwargs):
    """
    Delete the image file of a removed gallery image.
    """
    if not instance.image:
        return
    name = instance.image.name
    instance.image.delete(save=False)
    logger.debug("Deleted gallery file %s", name)


@receiver(post_delete, sender=Product)
def delete_technical_drawing(sender, instance, **kwargs):
    if instance.technical_drawing:
        instance.technical_drawing.delete(save=False)
