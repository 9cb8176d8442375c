"""
Tests for the back-office JSON endpoints (ordering, variant editor, images).
"""
import io
import json
import shutil
import tempfile

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase
from django.urls import reverse
from PIL import Image

from apps.catalog.models import Category, Product, ProductImage, ProductVariant


def png_bytes(size=(4, 4), color=(200, 30, 30)):
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def png_upload(name="photo.png"):
    return SimpleUploadedFile(name, png_bytes(), content_type="image/png")


class StaffViewTestCase(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.screws = Category.objects.create(name="Self Drilling Screws")
        cls.channels = Category.objects.create(name="Drawer Channels")
        cls.staff = get_user_model().objects.create_user(
            username="editor", password="pass12345", is_staff=True,
        )

    def setUp(self):
        self.client.force_login(self.staff)

    def post_json(self, url, payload):
        return self.client.post(url, data=json.dumps(payload), content_type="application/json")


class ReorderViewTests(StaffViewTestCase):
    @classmethod
    def setUpTestData(cls):
        super().setUpTestData()
        cls.first = Product.objects.create(name="A Bolt", position=0)
        cls.second = Product.objects.create(name="B Nut", position=1)
        cls.third = Product.objects.create(name="C Washer", position=2)

    def positions(self):
        return list(Product.objects.order_by("position", "name").values_list("pk", flat=True))

    def test_reorder_assigns_index_as_position(self):
        new_order = [self.third.pk, self.first.pk, self.second.pk]
        response = self.post_json(reverse("catalog:products_reorder"), {"order": new_order})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok", "order": new_order})
        self.assertEqual(self.positions(), new_order)
        self.third.refresh_from_db()
        self.assertEqual(self.third.position, 0)

    def test_unknown_id_changes_nothing_and_returns_stored_order(self):
        before = self.positions()
        response = self.post_json(
            reverse("catalog:products_reorder"),
            {"order": [self.third.pk, 987654, self.first.pk]},
        )
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["status"], "error")
        self.assertEqual(body["order"], before)
        self.assertEqual(self.positions(), before)

    def test_duplicate_ids_are_rejected(self):
        before = self.positions()
        response = self.post_json(
            reverse("catalog:products_reorder"),
            {"order": [self.first.pk, self.first.pk, self.second.pk]},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["order"], before)

    def test_order_must_be_a_list(self):
        response = self.post_json(reverse("catalog:products_reorder"), {"order": "1,2,3"})
        self.assertEqual(response.status_code, 400)

    def test_anonymous_user_is_redirected_to_login(self):
        self.client.logout()
        response = self.post_json(reverse("catalog:products_reorder"), {"order": []})
        self.assertEqual(response.status_code, 302)

    def test_get_is_not_allowed(self):
        response = self.client.get(reverse("catalog:products_reorder"))
        self.assertEqual(response.status_code, 405)

    def test_delete_product(self):
        response = self.client.delete(reverse("catalog:product_delete", args=[self.second.pk]))
        self.assertEqual(response.status_code, 200)
        self.assertFalse(Product.objects.filter(pk=self.second.pk).exists())

        response = self.client.delete(reverse("catalog:product_delete", args=[self.second.pk]))
        self.assertEqual(response.status_code, 404)


class VariantEditorViewTests(StaffViewTestCase):
    def test_save_fastener_grid_expands_rows(self):
        product = Product.objects.create(name="CSK Screw", category=self.screws)
        ProductVariant.objects.create(product=product, diameter="9", finish="Old")

        response = self.post_json(reverse("catalog:product_variants_save", args=[product.pk]), {
            "sizes": [
                {"diameter": "4.2", "diameterUnit": "mm", "length": "13, 16", "unit": "mm"},
                {"diameter": "8", "diameterUnit": "gauge", "length": "1", "unit": "inch"},
                {"diameter": "", "length": ""},
            ],
            "finishes": [
                {"name": "Zinc", "image": "/media/products/finishes/zinc.jpg"},
                {"name": "Black", "image": ""},
            ],
            "types": [{"name": "Full Thread", "image": "/media/products/types/ft.jpg"}],
        })

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["saved"], 4)
        self.assertEqual(body["finish_images"], {"Zinc": "/media/products/finishes/zinc.jpg"})
        self.assertEqual(body["type_images"], {"Full Thread": "/media/products/types/ft.jpg"})

        rows = list(product.variants.values_list("diameter", "diameter_unit", "length", "unit", "finish"))
        self.assertEqual(rows, [
            ("4.2", "mm", "13, 16", "mm", "Zinc"),
            ("4.2", "mm", "13, 16", "mm", "Black"),
            ("8", "gauge", "1", "inch", "Zinc"),
            ("8", "gauge", "1", "inch", "Black"),
        ])
        self.assertFalse(product.variants.filter(finish="Old").exists())

    def test_sizes_without_finishes_get_standard_row(self):
        product = Product.objects.create(name="Plain Screw", category=self.screws)
        response = self.post_json(reverse("catalog:product_variants_save", args=[product.pk]), {
            "sizes": [{"diameter": "6", "length": "50"}],
        })
        self.assertEqual(response.json()["saved"], 1)
        self.assertEqual(product.variants.get().finish, "Standard")

    def test_save_fitting_groups(self):
        product = Product.objects.create(name="Ball Bearing Channel", category=self.channels)
        response = self.post_json(reverse("catalog:product_variants_save", args=[product.pk]), {
            "groups": [
                {"sizeLabel": "12 inch", "finishes": [
                    {"name": "Black", "type": "Soft Close", "image": ""},
                    {"name": "Zinc", "image": "/media/products/finishes/zinc.jpg"},
                ]},
                {"sizeLabel": "18 inch", "finishes": []},
                {"sizeLabel": "", "finishes": [{"name": "Ignored"}]},
            ],
        })

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["saved"], 3)
        rows = list(product.variants.values_list("diameter", "length", "finish", "type"))
        self.assertEqual(rows, [
            ("12 inch", "", "Black", "Soft Close"),
            ("12 inch", "", "Zinc", ""),
            ("18 inch", "", "Standard", ""),
        ])
        product.refresh_from_db()
        self.assertEqual(product.finish_images, {"Zinc": "/media/products/finishes/zinc.jpg"})

    def test_editor_payload_round_trip(self):
        product = Product.objects.create(name="Ball Bearing Channel", category=self.channels)
        self.post_json(reverse("catalog:product_variants_save", args=[product.pk]), {
            "groups": [{"sizeLabel": "12 inch", "finishes": [{"name": "Black"}]}],
        })
        response = self.client.get(reverse("catalog:product_variants_data", args=[product.pk]))
        body = response.json()
        self.assertEqual(body["style"], "fitting")
        self.assertEqual(body["groups"], [
            {"sizeLabel": "12 inch", "finishes": [{"name": "Black", "type": "", "image": ""}]},
        ])

    def test_fitting_rows_without_size_label_are_left_out(self):
        product = Product.objects.create(name="Ball Bearing Channel", category=self.channels)
        ProductVariant.objects.create(product=product, diameter="", length="", finish="Black")
        ProductVariant.objects.create(product=product, diameter="12 inch", finish="Zinc")

        body = self.client.get(reverse("catalog:product_variants_data", args=[product.pk])).json()
        self.assertEqual(body["groups"], [
            {"sizeLabel": "12 inch", "finishes": [{"name": "Zinc", "type": "", "image": ""}]},
        ])

        self.post_json(reverse("catalog:product_variants_save", args=[product.pk]), body)
        rows = list(product.variants.values_list("diameter", "finish"))
        self.assertEqual(rows, [("12 inch", "Zinc")])

    def test_fastener_editor_payload(self):
        product = Product.objects.create(
            name="Hex Screw", category=self.screws, type_images={"Half Thread": "/m/ht.jpg"},
        )
        ProductVariant.objects.create(product=product, diameter="6", length="25", finish="Zinc", type="Full Thread")
        ProductVariant.objects.create(product=product, diameter="6", length="25", finish="Black")
        body = self.client.get(reverse("catalog:product_variants_data", args=[product.pk])).json()
        self.assertEqual(body["style"], "fastener")
        self.assertEqual(body["sizes"], [{"diameter": "6", "diameterUnit": "mm", "length": "25", "unit": "mm"}])
        self.assertEqual([f["name"] for f in body["finishes"]], ["Zinc", "Black"])
        self.assertEqual(body["types"], [
            {"name": "Full Thread", "image": ""},
            {"name": "Half Thread", "image": "/m/ht.jpg"},
        ])

    def test_malformed_payload_leaves_rows_untouched(self):
        product = Product.objects.create(name="CSK Screw", category=self.screws)
        ProductVariant.objects.create(product=product, diameter="4", finish="Zinc")

        response = self.post_json(reverse("catalog:product_variants_save", args=[product.pk]), {
            "sizes": [{"diameter": "4", "length": "25", "unit": "furlong"}],
        })
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["status"], "error")
        self.assertEqual(product.variants.count(), 1)

    def test_invalid_json_is_rejected(self):
        product = Product.objects.create(name="CSK Screw", category=self.screws)
        response = self.client.post(
            reverse("catalog:product_variants_save", args=[product.pk]),
            data="{not json", content_type="application/json",
        )
        self.assertEqual(response.status_code, 400)

    def test_saving_writes_history(self):
        product = Product.objects.create(name="CSK Screw", category=self.screws)
        self.post_json(reverse("catalog:product_variants_save", args=[product.pk]), {
            "sizes": [{"diameter": "4", "length": "25"}],
            "finishes": [{"name": "Zinc"}],
        })
        self.assertEqual(ProductVariant.history.filter(product_id=product.pk).count(), 1)


class ImageViewTests(StaffViewTestCase):
    @classmethod
    def setUpClass(cls):
        super().setUpClass()
        cls._media_root = tempfile.mkdtemp()

    @classmethod
    def tearDownClass(cls):
        shutil.rmtree(cls._media_root, ignore_errors=True)
        super().tearDownClass()

    def setUp(self):
        super().setUp()
        override = self.settings(MEDIA_ROOT=self._media_root)
        override.enable()
        self.addCleanup(override.disable)
        self.product = Product.objects.create(name="Hex Bolt", category=self.screws)

    def test_gallery_upload_skips_non_images(self):
        response = self.client.post(
            reverse("catalog:product_image_upload", args=[self.product.pk]),
            {"images": [
                png_upload("front.png"),
                SimpleUploadedFile("notes.txt", b"not an image", content_type="text/plain"),
                png_upload("side.png"),
            ]},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["uploaded"], 2)
        self.assertEqual(body["skipped"], ["notes.txt"])
        self.assertEqual(
            list(self.product.images.values_list("display_order", flat=True)), [0, 1],
        )
        self.assertEqual(self.product.images.first().alt_text, "Hex Bolt")
        self.assertEqual(len(self.product.gallery_urls), 2)

    def test_gallery_upload_requires_files(self):
        response = self.client.post(reverse("catalog:product_image_upload", args=[self.product.pk]))
        self.assertEqual(response.status_code, 400)

    def test_delete_image_compacts_order(self):
        images = [
            ProductImage.objects.create(product=self.product, image=png_upload(f"{i}.png"), display_order=i)
            for i in range(3)
        ]
        response = self.client.post(reverse("catalog:product_image_delete", args=[images[0].pk]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            list(self.product.images.values_list("pk", "display_order")),
            [(images[1].pk, 0), (images[2].pk, 1)],
        )

    def test_list_images(self):
        ProductImage.objects.create(product=self.product, image=png_upload(), display_order=0)
        body = self.client.get(reverse("catalog:product_images_list", args=[self.product.pk])).json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(len(body["images"]), 1)

    def test_editor_image_upload_returns_url(self):
        response = self.client.post(
            reverse("catalog:editor_image_upload", args=["finishes"]),
            {"file": png_upload("zinc.png")},
        )
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["url"].startswith("/media/products/finishes/"))

    def test_editor_image_upload_rejects_non_images(self):
        response = self.client.post(
            reverse("catalog:editor_image_upload", args=["finishes"]),
            {"file": SimpleUploadedFile("drawing.pdf", b"%PDF-1.4", content_type="application/pdf")},
        )
        self.assertEqual(response.status_code, 400)

    def test_editor_image_upload_rejects_unknown_folder(self):
        response = self.client.post(
            reverse("catalog:editor_image_upload", args=["secrets"]),
            {"file": png_upload()},
        )
        self.assertEqual(response.status_code, 400)
