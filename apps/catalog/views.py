import json
import logging

from django.http import JsonResponse
from django.views.decorators.http import require_http_methods
from django.contrib.admin.views.decorators import staff_member_required
from django.views.decorators.csrf import csrf_protect
from django.db import transaction

from .models import Product, ProductImage
from .services import (
    ProductOrderingService,
    ReorderError,
    VariantEditorService,
    VariantPayloadError,
)
from .services.uploads import UploadRejected, store_editor_image

logger = logging.getLogger(__name__)


def _load_json(request):
    try:
        return json.loads(request.body or b'{}')
    except json.JSONDecodeError:
        return None


# =============================================================================
# PRODUCTS
# =============================================================================

@staff_member_required
@require_http_methods(["POST"])
@csrf_protect
def products_reorder(request):
    """
    Persist the product order after a drag-and-drop.

    Expected payload:
    {"order": [12, 4, 7, ...]}

    On failure nothing is changed and 'order' holds the stored order so the
    list can be redrawn from it.
    """
    payload = _load_json(request)
    if payload is None:
        return JsonResponse({'status': 'error', 'message': 'Invalid JSON'}, status=400)

    order = payload.get('order')
    if not isinstance(order, list):
        return JsonResponse({
            'status': 'error',
            'message': "'order' must be a list of product ids",
            'order': ProductOrderingService.current_order(),
        }, status=400)

    try:
        stored = ProductOrderingService.reorder(order)
    except ReorderError as exc:
        return JsonResponse({
            'status': 'error',
            'message': str(exc),
            'order': exc.current_order,
        }, status=400)

    return JsonResponse({'status': 'ok', 'order': stored})


@staff_member_required
@require_http_methods(["DELETE", "POST"])
@csrf_protect
def product_delete(request, product_id):
    """Delete a product with its gallery and variants."""
    try:
        product = Product.objects.get(pk=product_id)
    except Product.DoesNotExist:
        return JsonResponse({'status': 'error', 'message': 'Product not found'}, status=404)

    name = product.name
    product.delete()
    logger.info("Product %s (%s) deleted by %s", product_id, name, request.user)
    return JsonResponse({'status': 'ok'})


# =============================================================================
# VARIANTS
# =============================================================================

@staff_member_required
@require_http_methods(["GET"])
def product_variants_data(request, product_id):
    """Variant grid for the product editor."""
    try:
        product = Product.objects.select_related('category', 'category__parent').get(pk=product_id)
    except Product.DoesNotExist:
        return JsonResponse({'status': 'error', 'message': 'Product not found'}, status=404)

    data = VariantEditorService.get_editor_payload(product)
    data['status'] = 'ok'
    data['product_id'] = product.pk
    return JsonResponse(data)


@staff_member_required
@require_http_methods(["POST"])
@csrf_protect
def product_variants_save(request, product_id):
    """
    Replace a product's variants from the editor grid.

    Expected payload (fastener):
    {
        "sizes": [{"diameter": "4.2", "diameterUnit": "mm", "length": "25, 32", "unit": "mm"}],
        "finishes": [{"name": "Zinc Plated", "image": "/media/..."}],
        "types": [{"name": "Full Thread", "image": ""}]
    }

    Expected payload (fitting):
    {"groups": [{"sizeLabel": "4 inch", "finishes": [{"name": "Gold", "type": "", "image": ""}]}]}
    """
    try:
        product = Product.objects.select_related('category', 'category__parent').get(pk=product_id)
    except Product.DoesNotExist:
        return JsonResponse({'status': 'error', 'message': 'Product not found'}, status=404)

    payload = _load_json(request)
    if not isinstance(payload, dict):
        return JsonResponse({'status': 'error', 'message': 'Invalid JSON'}, status=400)

    try:
        saved = VariantEditorService.save_variants(product, payload)
    except VariantPayloadError as exc:
        return JsonResponse({'status': 'error', 'message': str(exc)}, status=400)

    return JsonResponse({
        'status': 'ok',
        'saved': saved,
        'finish_images': product.finish_images,
        'type_images': product.type_images,
    })


# =============================================================================
# IMAGE UPLOAD
# =============================================================================

def _image_json(img):
    return {
        'id': img.id,
        'thumbnail_url': img.thumbnail_small.url,
        'full_url': img.image.url,
        'alt_text': img.alt_text,
        'display_order': img.display_order,
    }


@staff_member_required
@require_http_methods(["GET"])
def product_images_list(request, product_id):
    """Get the gallery of a product."""
    try:
        product = Product.objects.get(pk=product_id)
    except Product.DoesNotExist:
        return JsonResponse({'status': 'error', 'message': 'Product not found'}, status=404)

    return JsonResponse({
        'status': 'ok',
        'product_id': product.id,
        'images': [_image_json(img) for img in product.images.all()],
    })


@staff_member_required
@require_http_methods(["POST"])
def product_image_upload(request, product_id):
    """Upload image(s) to a product's gallery."""
    try:
        product = Product.objects.get(pk=product_id)
    except Product.DoesNotExist:
        return JsonResponse({'status': 'error', 'message': 'Product not found'}, status=404)

    files = request.FILES.getlist('images')
    if not files:
        return JsonResponse({'status': 'error', 'message': 'No image uploaded'}, status=400)

    uploaded = []
    skipped = []
    next_order = product.images.count()
    for file in files:
        if not file.content_type.startswith('image/'):
            logger.warning("Skipped non-image upload %r for product %s", file.name, product.pk)
            skipped.append(file.name)
            continue

        img = ProductImage.objects.create(
            product=product,
            image=file,
            display_order=next_order,
        )
        next_order += 1
        uploaded.append(_image_json(img))

    return JsonResponse({
        'status': 'ok',
        'uploaded': len(uploaded),
        'skipped': skipped,
        'images': uploaded,
    })


@staff_member_required
@require_http_methods(["POST"])
@csrf_protect
def product_image_delete(request, image_id):
    """Delete a gallery image and close the gap in display order."""
    try:
        img = ProductImage.objects.get(pk=image_id)
    except ProductImage.DoesNotExist:
        return JsonResponse({'status': 'error', 'message': 'Image not found'}, status=404)

    product_id = img.product_id
    with transaction.atomic():
        img.delete()
        for index, remaining in enumerate(ProductImage.objects.filter(product_id=product_id)):
            if remaining.display_order != index:
                ProductImage.objects.filter(pk=remaining.pk).update(display_order=index)

    return JsonResponse({'status': 'ok'})


@staff_member_required
@require_http_methods(["POST"])
@csrf_protect
def editor_image_upload(request, folder):
    """
    Upload a finish, type, application or size image from the product editor.
    Returns the stored URL, which the editor writes into the product JSON.
    """
    file = request.FILES.get('file')
    if file is None:
        return JsonResponse({'status': 'error', 'message': 'No file uploaded'}, status=400)

    try:
        url = store_editor_image(file, folder)
    except UploadRejected as exc:
        return JsonResponse({'status': 'error', 'message': str(exc)}, status=400)

    return JsonResponse({'status': 'ok', 'url': url})
