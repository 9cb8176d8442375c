"""
Tests for the contact form, enquiry ids and the spreadsheet sync.
"""
import re
import shutil
import tempfile
from datetime import datetime
from unittest import mock

import requests
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import IntegrityError
from django.test import SimpleTestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.enquiries.models import Enquiry
from apps.enquiries.services import SheetSyncService, generate_enquiry_id

WEBHOOK_URL = "https://script.example.com/macros/s/abc/exec"
ID_PATTERN = re.compile(r"^DF-\d{4}-[A-Z0-9]{5}$")


class EnquiryIdTests(SimpleTestCase):
    def test_format_uses_year_and_month(self):
        enquiry_id = generate_enquiry_id(datetime(2025, 3, 14, 10, 30))
        self.assertTrue(enquiry_id.startswith("DF-2503-"))
        self.assertRegex(enquiry_id, ID_PATTERN)

    def test_ids_differ(self):
        ids = {generate_enquiry_id() for _ in range(50)}
        self.assertGreater(len(ids), 45)


def form_data(**overrides):
    data = {
        "first_name": "Asha",
        "last_name": "Rao",
        "email": "asha@example.com",
        "phone": "+91 98765 43210",
        "subject": "Bulk Purchase / Dealership Inquiry",
        "message": "Need 50,000 pcs of 4.2 x 25 SDS.",
    }
    data.update(overrides)
    return data


class EnquiryAPITests(APITestCase):
    @classmethod
    def setUpClass(cls):
        super().setUpClass()
        cls._media_root = tempfile.mkdtemp()

    @classmethod
    def tearDownClass(cls):
        shutil.rmtree(cls._media_root, ignore_errors=True)
        super().tearDownClass()

    @classmethod
    def setUpTestData(cls):
        cls.staff = get_user_model().objects.create_user(
            username="sales", password="pass12345", is_staff=True,
        )

    def setUp(self):
        override = self.settings(MEDIA_ROOT=self._media_root, ENQUIRY_SHEET_WEBHOOK_URL="")
        override.enable()
        self.addCleanup(override.disable)

    def submit(self, **overrides):
        return self.client.post(reverse("enquiry-list"), form_data(**overrides), format="multipart")

    def test_submission_returns_enquiry_id(self):
        response = self.submit()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["status"], "new")
        self.assertRegex(response.data["enquiry_id"], ID_PATTERN)

        enquiry = Enquiry.objects.get(enquiry_id=response.data["enquiry_id"])
        self.assertEqual(enquiry.full_name, "Asha Rao")
        self.assertEqual(enquiry.status, Enquiry.STATUS_NEW)

    def test_attachment_is_stored_under_enquiry_id(self):
        document = SimpleUploadedFile("drawing.PDF", b"%PDF-1.4 test", content_type="application/pdf")
        response = self.submit(document=document)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        enquiry = Enquiry.objects.get(enquiry_id=response.data["enquiry_id"])
        self.assertRegex(
            enquiry.document.name,
            rf"^enquiries/docs/{enquiry.enquiry_id}-\d+\.pdf$",
        )

    def test_oversized_attachment_is_rejected(self):
        document = SimpleUploadedFile("big.pdf", b"x" * 2048, content_type="application/pdf")
        with self.settings(ENQUIRY_MAX_ATTACHMENT_SIZE=1024):
            response = self.submit(document=document)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("document", response.data)
        self.assertFalse(Enquiry.objects.exists())

    def test_missing_required_fields(self):
        response = self.submit(email="", message="")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", response.data)
        self.assertIn("message", response.data)

    def test_unknown_subject_is_rejected(self):
        response = self.submit(subject="Lottery Winner")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_id_taken_by_concurrent_request_is_replaced(self):
        Enquiry.objects.create(
            enquiry_id="DF-2503-TAKEN", first_name="Ravi", email="ravi@example.com", message="Hi",
        )
        with mock.patch(
            "apps.enquiries.views.unique_enquiry_id",
            side_effect=["DF-2503-TAKEN", "DF-2503-FRESH"],
        ):
            with self.assertLogs("apps.enquiries.views", level="WARNING"):
                response = self.submit()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["enquiry_id"], "DF-2503-FRESH")
        self.assertEqual(Enquiry.objects.count(), 2)

    def test_gives_up_after_repeated_id_clashes(self):
        Enquiry.objects.create(
            enquiry_id="DF-2503-TAKEN", first_name="Ravi", email="ravi@example.com", message="Hi",
        )
        with mock.patch("apps.enquiries.views.unique_enquiry_id", return_value="DF-2503-TAKEN"):
            with self.assertLogs("apps.enquiries.views", level="WARNING"):
                with self.assertRaises(IntegrityError):
                    self.submit()
        self.assertEqual(Enquiry.objects.count(), 1)

    @mock.patch("apps.enquiries.services.requests.post")
    def test_webhook_receives_enquiry(self, post):
        post.return_value = mock.Mock(status_code=200, raise_for_status=mock.Mock())
        with self.settings(ENQUIRY_SHEET_WEBHOOK_URL=WEBHOOK_URL):
            response = self.submit()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        post.assert_called_once()
        args, kwargs = post.call_args
        self.assertEqual(args[0], WEBHOOK_URL)
        self.assertEqual(kwargs["json"]["enquiry_id"], response.data["enquiry_id"])
        self.assertEqual(kwargs["json"]["document_url"], "No Document")
        self.assertIn("timeout", kwargs)
        self.assertIsNotNone(Enquiry.objects.get().synced_at)

    @mock.patch("apps.enquiries.services.requests.post")
    def test_webhook_failure_does_not_fail_submission(self, post):
        post.side_effect = requests.ConnectionError("sheet down")
        with self.settings(ENQUIRY_SHEET_WEBHOOK_URL=WEBHOOK_URL):
            with self.assertLogs("apps.enquiries.services", level="WARNING"):
                response = self.submit()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        enquiry = Enquiry.objects.get()
        self.assertIsNone(enquiry.synced_at)

    @mock.patch("apps.enquiries.services.requests.post")
    def test_webhook_not_called_when_unconfigured(self, post):
        self.submit()
        post.assert_not_called()

    def test_list_is_staff_only(self):
        self.submit()
        response = self.client.get(reverse("enquiry-list"))
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

        self.client.force_login(self.staff)
        response = self.client.get(reverse("enquiry-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

    def test_staff_can_change_status_only(self):
        enquiry_id = self.submit().data["enquiry_id"]
        enquiry = Enquiry.objects.get(enquiry_id=enquiry_id)
        self.client.force_login(self.staff)
        response = self.client.patch(
            reverse("enquiry-detail", args=[enquiry.pk]),
            {"status": "contacted", "email": "changed@example.com"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        enquiry.refresh_from_db()
        self.assertEqual(enquiry.status, Enquiry.STATUS_CONTACTED)
        self.assertEqual(enquiry.email, "asha@example.com")

    @mock.patch("apps.enquiries.services.requests.post")
    def test_manual_sync_marks_read(self, post):
        enquiry = Enquiry.objects.get(enquiry_id=self.submit().data["enquiry_id"])
        post.return_value = mock.Mock(status_code=200, raise_for_status=mock.Mock())
        self.client.force_login(self.staff)
        with self.settings(ENQUIRY_SHEET_WEBHOOK_URL=WEBHOOK_URL):
            response = self.client.post(reverse("enquiry-sync", args=[enquiry.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "read")
        self.assertIsNotNone(response.data["synced_at"])

    @mock.patch("apps.enquiries.services.requests.post")
    def test_manual_sync_failure_keeps_status(self, post):
        enquiry = Enquiry.objects.get(enquiry_id=self.submit().data["enquiry_id"])
        post.side_effect = requests.Timeout("slow")
        self.client.force_login(self.staff)
        with self.settings(ENQUIRY_SHEET_WEBHOOK_URL=WEBHOOK_URL):
            response = self.client.post(reverse("enquiry-sync", args=[enquiry.pk]))

        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)
        enquiry.refresh_from_db()
        self.assertEqual(enquiry.status, Enquiry.STATUS_NEW)

    def test_manual_sync_requires_webhook(self):
        enquiry = Enquiry.objects.get(enquiry_id=self.submit().data["enquiry_id"])
        self.client.force_login(self.staff)
        response = self.client.post(reverse("enquiry-sync", args=[enquiry.pk]))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class SheetPayloadTests(SimpleTestCase):
    def test_payload_uses_placeholders_for_missing_files(self):
        enquiry = Enquiry(
            enquiry_id="DF-2503-ABCDE",
            first_name="Asha",
            email="asha@example.com",
            message="Hello",
            created_at=timezone.make_aware(datetime(2025, 3, 14, 10, 30)),
        )
        payload = SheetSyncService.build_payload(enquiry)
        self.assertEqual(payload["timestamp"], "14/03/2025, 10:30:00")
        self.assertEqual(payload["image_url"], "No Image")
        self.assertEqual(payload["subject"], "General Inquiry")
