"""
Removes attachment files when an enquiry is deleted.
"""

from django.db.models.signals import post_delete
from django.dispatch import receiver

from .models import Enquiry


@receiver(post_delete, sender=Enquiry)
def delete_attachments(sender, instance, **kwargs):
    for field in (instance.document, instance.image):
        if field:
            field.delete(save=False)
