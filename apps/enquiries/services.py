"""
Enquiry id generation and spreadsheet sync.
"""

import logging
import secrets
import string
from typing import Any, Dict, Optional

import requests
from django.conf import settings
from django.utils import timezone

from .models import Enquiry

logger = logging.getLogger(__name__)

ID_ALPHABET = string.ascii_uppercase + string.digits
ID_SUFFIX_LENGTH = 5


def generate_enquiry_id(now=None) -> str:
    """
    New enquiry id of the form DF-<YY><MM>-<5 upper-case alphanumerics>.
    Example: DF-2503-K7Q2Z
    """
    now = now or timezone.localtime()
    suffix = ''.join(secrets.choice(ID_ALPHABET) for _ in range(ID_SUFFIX_LENGTH))
    return f"DF-{now:%y%m}-{suffix}"


def unique_enquiry_id(attempts: int = 10) -> str:
    for _ in range(attempts):
        candidate = generate_enquiry_id()
        if not Enquiry.objects.filter(enquiry_id=candidate).exists():
            return candidate
    raise RuntimeError('Could not allocate a unique enquiry id')


class SheetSyncService:
    """Pushes enquiries to the spreadsheet webhook (a Google Apps Script endpoint)."""

    @staticmethod
    def is_configured() -> bool:
        return bool(getattr(settings, 'ENQUIRY_SHEET_WEBHOOK_URL', ''))

    @staticmethod
    def build_payload(enquiry: Enquiry, request=None) -> Dict[str, Any]:
        def absolute(field, fallback):
            if not field:
                return fallback
            url = field.url
            return request.build_absolute_uri(url) if request is not None else url

        return {
            'enquiry_id': enquiry.enquiry_id,
            'timestamp': timezone.localtime(enquiry.created_at).strftime('%d/%m/%Y, %H:%M:%S'),
            'first_name': enquiry.first_name,
            'last_name': enquiry.last_name,
            'email': enquiry.email,
            'phone': enquiry.phone,
            'subject': enquiry.subject,
            'message': enquiry.message,
            'status': enquiry.status,
            'document_url': absolute(enquiry.document, 'No Document'),
            'image_url': absolute(enquiry.image, 'No Image'),
        }

    @staticmethod
    def push(enquiry: Enquiry, request=None) -> bool:
        """
        Send one enquiry to the sheet.

        Returns:
            True when the webhook accepted it. Failures are logged and
            reported as False; they never propagate to the caller.
        """
        url = getattr(settings, 'ENQUIRY_SHEET_WEBHOOK_URL', '')
        if not url:
            return False

        payload = SheetSyncService.build_payload(enquiry, request)
        timeout = getattr(settings, 'ENQUIRY_SHEET_TIMEOUT', 10)
        try:
            response = requests.post(url, json=payload, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.warning("Sheet sync failed for %s: %s", enquiry.enquiry_id, exc)
            return False

        Enquiry.objects.filter(pk=enquiry.pk).update(synced_at=timezone.now())
        logger.info("Enquiry %s synced to sheet", enquiry.enquiry_id)
        return True

    @staticmethod
    def sync_and_mark_read(enquiry: Enquiry, request=None) -> Optional[Enquiry]:
        """Manual sync from the back office; a successful sync marks the enquiry read."""
        if not SheetSyncService.push(enquiry, request):
            return None
        if enquiry.status == Enquiry.STATUS_NEW:
            enquiry.status = Enquiry.STATUS_READ
            enquiry.save(update_fields=['status'])
        enquiry.refresh_from_db()
        return enquiry
