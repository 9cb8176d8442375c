"""
Tests for the manufacturing page content and the dashboard counters.
"""
import shutil
import tempfile

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase, TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.blog.models import BlogPost
from apps.catalog.models import Product
from apps.content.models import ManufacturingContent, validate_image_or_video
from apps.enquiries.models import Enquiry


class MediaValidatorTests(SimpleTestCase):
    def test_images_and_videos_pass(self):
        validate_image_or_video(SimpleUploadedFile("line.jpg", b"x", content_type="image/jpeg"))
        validate_image_or_video(SimpleUploadedFile("press.mp4", b"x", content_type="video/mp4"))

    def test_other_files_fail(self):
        with self.assertRaises(ValidationError):
            validate_image_or_video(SimpleUploadedFile("specs.pdf", b"x", content_type="application/pdf"))


class ManufacturingContentTests(TestCase):
    def test_single_row(self):
        ManufacturingContent(hero_title="First").save()
        ManufacturingContent(hero_title="Second").save()
        self.assertEqual(ManufacturingContent.objects.count(), 1)
        self.assertEqual(ManufacturingContent.load().hero_title, "Second")

    def test_load_creates_empty_row(self):
        content = ManufacturingContent.load()
        self.assertEqual(content.pk, 1)
        blocks = content.media_blocks()
        self.assertEqual([block['slot'] for block in blocks], [1, 2, 3])
        self.assertEqual(blocks[0]['url'], '')
        self.assertFalse(blocks[0]['is_video'])


class ManufacturingContentAPITests(APITestCase):
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
            username="marketing", password="pass12345", is_staff=True,
        )

    def setUp(self):
        override = self.settings(MEDIA_ROOT=self._media_root)
        override.enable()
        self.addCleanup(override.disable)

    def test_public_read(self):
        response = self.client.get(reverse('manufacturing-content'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['media_blocks']), 3)

    def test_visitors_cannot_edit(self):
        response = self.client.patch(reverse('manufacturing-content'), {'hero_title': "Hacked"}, format='json')
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

    def test_staff_upload_video_block(self):
        self.client.force_login(self.staff)
        response = self.client.patch(reverse('manufacturing-content'), {
            'hero_title': "Precision Manufacturing",
            'media2_title': "Heading",
            'media2_file': SimpleUploadedFile("heading.mp4", b"\x00\x00\x00\x18ftyp", content_type="video/mp4"),
        }, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        block = response.data['media_blocks'][1]
        self.assertEqual(block['title'], "Heading")
        self.assertTrue(block['is_video'])
        self.assertEqual(ManufacturingContent.load().hero_title, "Precision Manufacturing")

    def test_staff_upload_rejects_documents(self):
        self.client.force_login(self.staff)
        response = self.client.patch(reverse('manufacturing-content'), {
            'media1_file': SimpleUploadedFile("specs.pdf", b"%PDF-1.4", content_type="application/pdf"),
        }, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('media1_file', response.data)


class DashboardStatsTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        Product.objects.create(name="Hex Bolt")
        Product.objects.create(name="Old Rivet", is_active=False)
        Enquiry.objects.create(enquiry_id="DF-2503-AAAAA", first_name="A", email="a@example.com", message="Hi")
        Enquiry.objects.create(
            enquiry_id="DF-2503-BBBBB", first_name="B", email="b@example.com", message="Hi",
            status=Enquiry.STATUS_READ,
        )
        BlogPost.objects.create(title="Finishes 101")
        cls.staff = get_user_model().objects.create_user(
            username="owner", password="pass12345", is_staff=True,
        )

    def test_counts(self):
        self.client.force_login(self.staff)
        response = self.client.get(reverse('back_office:dashboard_stats'))
        self.assertEqual(response.json(), {
            'status': 'ok',
            'products': 2,
            'active_products': 1,
            'enquiries': 2,
            'new_enquiries': 1,
            'blog_posts': 1,
        })

    def test_staff_only(self):
        response = self.client.get(reverse('back_office:dashboard_stats'))
        self.assertEqual(response.status_code, 302)
