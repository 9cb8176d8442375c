"""
Back-office variant editor.

The admin edits variants as a compact grid rather than row by row:

- fasteners: a list of sizes (diameter + length + units), a list of
  finishes and a list of types, each finish/type with an optional image;
- fittings: groups of ``{sizeLabel, finishes: [{name, type, image}]}``.

Saving expands the grid into one ProductVariant row per combination and
rebuilds the product's finish/type image maps.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from django.db import transaction

from apps.catalog.models import Product, ProductVariant
from apps.catalog.services.configurator import STYLE_FITTING

logger = logging.getLogger(__name__)

STANDARD_FINISH = 'Standard'


class VariantPayloadError(ValueError):
    """Raised when the editor payload cannot be turned into variant rows."""


def _text(value) -> str:
    if value is None:
        return ''
    return str(value).strip()


@dataclass
class SizeRow:
    diameter: str = ''
    diameter_unit: str = 'mm'
    length: str = ''
    unit: str = 'mm'


@dataclass
class NamedImage:
    name: str = ''
    image: str = ''
    type: str = ''


@dataclass
class FittingGroup:
    size_label: str = ''
    finishes: List[NamedImage] = field(default_factory=list)


def _named_images(items, label) -> List[NamedImage]:
    if items is None:
        return []
    if not isinstance(items, list):
        raise VariantPayloadError(f"'{label}' must be a list")
    result = []
    for item in items:
        if isinstance(item, str):
            result.append(NamedImage(name=_text(item)))
        elif isinstance(item, dict):
            result.append(NamedImage(
                name=_text(item.get('name')),
                image=_text(item.get('image')),
                type=_text(item.get('type')),
            ))
        else:
            raise VariantPayloadError(f"Invalid entry in '{label}'")
    return result


def _image_map(items: List[NamedImage]) -> Dict[str, str]:
    return {item.name: item.image for item in items if item.name and item.image}


class VariantEditorService:
    """Reads and writes the admin's variant grid for a product."""

    @staticmethod
    def get_editor_payload(product: Product) -> Dict[str, Any]:
        """
        Rebuild the editor grid from the stored rows.

        Returns:
            Dict with 'style' plus either 'sizes'/'finishes'/'types'
            (fastener) or 'groups' (fitting)
        """
        variants = list(product.variants.all())
        finish_images = product.finish_images or {}

        if product.variant_style == STYLE_FITTING:
            groups: Dict[str, List[Dict[str, str]]] = {}
            for variant in variants:
                size_key = variant.diameter or variant.length
                if not size_key:
                    # The configurator never offers a row without a size label
                    continue
                groups.setdefault(size_key, []).append({
                    'name': variant.finish,
                    'type': variant.type,
                    'image': variant.image or finish_images.get(variant.finish, ''),
                })
            return {
                'style': STYLE_FITTING,
                'groups': [
                    {'sizeLabel': label, 'finishes': finishes}
                    for label, finishes in groups.items()
                ],
            }

        sizes: Dict[tuple, Dict[str, str]] = {}
        finishes: Dict[str, Dict[str, str]] = {}
        types: Dict[str, Dict[str, str]] = {}
        for variant in variants:
            key = (variant.diameter, variant.length)
            if key not in sizes and (variant.diameter or variant.length):
                sizes[key] = {
                    'diameter': variant.diameter,
                    'diameterUnit': variant.diameter_unit or 'mm',
                    'length': variant.length,
                    'unit': variant.unit or 'mm',
                }
            if variant.finish and variant.finish not in finishes:
                finishes[variant.finish] = {
                    'name': variant.finish,
                    'image': variant.image or finish_images.get(variant.finish, ''),
                }
            if variant.type and variant.type not in types:
                types[variant.type] = {'name': variant.type, 'image': ''}
        for name, image in (product.type_images or {}).items():
            types.setdefault(name, {'name': name, 'image': ''})['image'] = image

        return {
            'style': 'fastener',
            'sizes': list(sizes.values()),
            'finishes': list(finishes.values()),
            'types': list(types.values()),
        }

    @staticmethod
    def parse_fastener_payload(data: Dict[str, Any]):
        raw_sizes = data.get('sizes') or []
        if not isinstance(raw_sizes, list):
            raise VariantPayloadError("'sizes' must be a list")
        sizes = []
        for raw in raw_sizes:
            if not isinstance(raw, dict):
                raise VariantPayloadError("Invalid entry in 'sizes'")
            size = SizeRow(
                diameter=_text(raw.get('diameter')),
                diameter_unit=_text(raw.get('diameterUnit') or raw.get('diameter_unit')) or 'mm',
                length=_text(raw.get('length')),
                unit=_text(raw.get('unit')) or 'mm',
            )
            if size.diameter_unit not in dict(ProductVariant.DIAMETER_UNIT_CHOICES):
                raise VariantPayloadError(f"Unknown diameter unit '{size.diameter_unit}'")
            if size.unit not in dict(ProductVariant.UNIT_CHOICES):
                raise VariantPayloadError(f"Unknown length unit '{size.unit}'")
            sizes.append(size)
        finishes = _named_images(data.get('finishes'), 'finishes')
        types = _named_images(data.get('types'), 'types')
        return sizes, finishes, types

    @staticmethod
    def parse_fitting_payload(data: Dict[str, Any]) -> List[FittingGroup]:
        raw_groups = data.get('groups') or []
        if not isinstance(raw_groups, list):
            raise VariantPayloadError("'groups' must be a list")
        groups = []
        for raw in raw_groups:
            if not isinstance(raw, dict):
                raise VariantPayloadError("Invalid entry in 'groups'")
            groups.append(FittingGroup(
                size_label=_text(raw.get('sizeLabel') or raw.get('size_label')),
                finishes=_named_images(raw.get('finishes'), 'finishes'),
            ))
        return groups

    @staticmethod
    def build_rows(product: Product, data: Dict[str, Any]) -> List[ProductVariant]:
        """
        Expand the editor grid into unsaved variant rows.

        Sizes without a diameter or length (and fitting groups without a
        size label) are skipped. A size with no finishes gets a single
        'Standard' row.
        """
        rows: List[ProductVariant] = []
        order = 0

        if product.variant_style == STYLE_FITTING:
            for group in VariantEditorService.parse_fitting_payload(data):
                if not group.size_label:
                    continue
                finishes = group.finishes or [NamedImage(name=STANDARD_FINISH)]
                for finish in finishes:
                    rows.append(ProductVariant(
                        product=product,
                        diameter=group.size_label,
                        length='',
                        finish=finish.name or STANDARD_FINISH,
                        type=finish.type,
                        image=finish.image,
                        display_order=order,
                    ))
                    order += 1
            return rows

        sizes, finishes, _types = VariantEditorService.parse_fastener_payload(data)
        finishes = finishes or [NamedImage(name=STANDARD_FINISH)]
        for size in sizes:
            if not (size.diameter or size.length):
                continue
            for finish in finishes:
                rows.append(ProductVariant(
                    product=product,
                    diameter=size.diameter,
                    diameter_unit=size.diameter_unit,
                    length=size.length,
                    unit=size.unit,
                    finish=finish.name or STANDARD_FINISH,
                    image=finish.image,
                    display_order=order,
                ))
                order += 1
        return rows

    @staticmethod
    def save_variants(product: Product, data: Dict[str, Any]) -> int:
        """
        Replace all of a product's variants with the rows described by ``data``.

        Args:
            product: The product being edited
            data: Editor payload (see module docstring)

        Returns:
            Number of variant rows written

        Raises:
            VariantPayloadError: if the payload is malformed; nothing is written
        """
        rows = VariantEditorService.build_rows(product, data)

        if product.variant_style == STYLE_FITTING:
            groups = VariantEditorService.parse_fitting_payload(data)
            finish_images = {}
            for group in groups:
                finish_images.update(_image_map(group.finishes))
            type_images = {}
        else:
            _sizes, finishes, types = VariantEditorService.parse_fastener_payload(data)
            finish_images = _image_map(finishes)
            type_images = _image_map(types)

        with transaction.atomic():
            product.variants.all().delete()
            # bulk_create skips save(), so history rows are not written here
            for row in rows:
                row.save()
            product.finish_images = finish_images
            product.type_images = type_images
            product.save(update_fields=['finish_images', 'type_images', 'updated_at'])

        logger.info(
            "Saved %d variant rows for product %s (%s)",
            len(rows), product.pk, product.variant_style,
        )
        return len(rows)
