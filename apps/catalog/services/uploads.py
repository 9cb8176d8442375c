"""
Storage helpers for images uploaded from the product editor.

Finish, type, application and size images are referenced by URL from the
product's JSON fields, so they are stored directly in the default storage
rather than through a model field.
"""

import logging
import os
import uuid

from django.core.files.storage import default_storage
from django.utils import timezone

logger = logging.getLogger(__name__)

UPLOAD_FOLDERS = {
    'finishes': 'products/finishes',
    'types': 'products/types',
    'applications': 'products/applications',
    'sizes': 'products/sizes',
}


class UploadRejected(ValueError):
    pass


def store_editor_image(uploaded_file, folder: str) -> str:
    """
    Save an editor image and return its public URL.

    Raises:
        UploadRejected: unknown folder or a file that is not an image
    """
    if folder not in UPLOAD_FOLDERS:
        raise UploadRejected(f"Unknown upload folder '{folder}'")

    content_type = getattr(uploaded_file, 'content_type', '') or ''
    if not content_type.startswith('image/'):
        logger.warning("Rejected %s upload %r with content type %r", folder, uploaded_file.name, content_type)
        raise UploadRejected('Only image files can be uploaded here')

    ext = os.path.splitext(uploaded_file.name)[1].lower() or '.jpg'
    stamp = timezone.now().strftime('%Y%m%d%H%M%S')
    path = f"{UPLOAD_FOLDERS[folder]}/{stamp}-{uuid.uuid4().hex[:8]}{ext}"
    saved = default_storage.save(path, uploaded_file)
    return default_storage.url(saved)
