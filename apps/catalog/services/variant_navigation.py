"""
Service for navigating a product's variants on its detail page.
Choices are INFERRED from the actual variant rows, not configured manually.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Union

from django.conf import settings

from apps.catalog.models import Product
from apps.catalog.services.configurator import (
    STYLE_FITTING,
    FastenerConfigurator,
    FastenerSelection,
    FittingConfigurator,
    FittingIndex,
    FittingSelection,
    VariantIndex,
    build_variants,
)

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER_IMAGE = 'https://via.placeholder.com/600x600?text=No+Image'

FASTENER_EVENTS = ('load', 'diameter', 'length', 'finish', 'type')
FITTING_EVENTS = ('load', 'size', 'finish')
DEFAULT_DIAMETER_TITLE = 'Select Diameter'

Configurator = Union[FastenerConfigurator, FittingConfigurator]


class VariantNavigationService:
    """
    Service to handle navigation between a product's variants.

    The product's rows are read once per request and converted into
    fastener or fitting records according to the product's category;
    the configurator then does the rest in memory.
    """

    @staticmethod
    def placeholder_image() -> str:
        return getattr(settings, 'CATALOG_PLACEHOLDER_IMAGE', '') or DEFAULT_PLACEHOLDER_IMAGE

    @staticmethod
    def legacy_length_match() -> bool:
        return bool(getattr(settings, 'CATALOG_LEGACY_LENGTH_MATCH', False))

    @staticmethod
    def build_configurator(product: Product) -> Configurator:
        """
        Build the configurator for a product.

        Args:
            product: The product whose variants are navigated

        Returns:
            FastenerConfigurator or FittingConfigurator, chosen by the
            product's variant style
        """
        style = product.variant_style
        rows = [variant.as_record() for variant in product.variants.all()]
        variants = build_variants(rows, style)
        gallery = product.gallery_urls
        placeholder = VariantNavigationService.placeholder_image()

        if style == STYLE_FITTING:
            return FittingConfigurator(
                FittingIndex(variants),
                finish_images=product.finish_images,
                gallery=gallery,
                placeholder=placeholder,
            )
        return FastenerConfigurator(
            VariantIndex(variants, legacy_length_match=VariantNavigationService.legacy_length_match()),
            finish_images=product.finish_images,
            type_images=product.type_images,
            gallery=gallery,
            placeholder=placeholder,
        )

    @staticmethod
    def get_configurator_data(
        product: Product,
        selection: Optional[Mapping[str, str]] = None,
        event: str = 'load'
    ) -> Dict[str, Any]:
        """
        Apply one user interaction and return the resolved configurator state.

        Example:
            selection = {'diameter': '4', 'length': '25', 'unit': 'mm', 'finish': 'Zinc'}
            event = 'diameter' with selection['diameter'] = '6'
            -> length/finish are re-validated against diameter 6 and replaced
               by the first legal values if they are not offered there

        Args:
            product: The product to configure
            selection: Current selection as sent by the page; the facet named
                by ``event`` carries its new value
            event: 'load', or the facet that changed ('diameter', 'length',
                'finish', 'type' for fasteners; 'size', 'finish' for fittings)

        Returns:
            Dict with choice sets, corrected selection, stage, image and gallery
        """
        selection = selection or {}
        configurator = VariantNavigationService.build_configurator(product)

        if isinstance(configurator, FittingConfigurator):
            resolved = VariantNavigationService._apply_fitting_event(configurator, selection, event)
        else:
            resolved = VariantNavigationService._apply_fastener_event(configurator, selection, event)

        data = configurator.resolve(resolved).as_dict()
        data['product'] = {'id': product.pk, 'slug': product.slug, 'name': product.name}
        data['event'] = event or 'load'
        return data

    @staticmethod
    def _apply_fastener_event(
        configurator: FastenerConfigurator,
        selection: Mapping[str, str],
        event: str
    ) -> FastenerSelection:
        if not event or event == 'load':
            return configurator.load()

        current = FastenerSelection(
            diameter=(selection.get('diameter') or '').strip(),
            length=(selection.get('length') or '').strip(),
            unit=(selection.get('unit') or '').strip(),
            finish=(selection.get('finish') or '').strip(),
            type=(selection.get('type') or '').strip(),
            focus=(selection.get('focus') or '').strip(),
        )
        if event == 'diameter':
            return configurator.select_diameter(current, current.diameter)
        if event == 'length':
            return configurator.select_length(current, current.length, current.unit)
        if event == 'finish':
            return configurator.select_finish(current, current.finish)
        if event == 'type':
            return configurator.select_type(current, current.type)
        raise ValueError(f"Unknown event '{event}', expected one of {', '.join(FASTENER_EVENTS)}")

    @staticmethod
    def _apply_fitting_event(
        configurator: FittingConfigurator,
        selection: Mapping[str, str],
        event: str
    ) -> FittingSelection:
        if not event or event == 'load':
            return configurator.load()

        current = FittingSelection(
            size_label=(selection.get('size') or selection.get('size_label') or '').strip(),
            finish=(selection.get('finish') or '').strip(),
        )
        if event == 'size':
            return configurator.select_size(current, current.size_label)
        if event == 'finish':
            return configurator.select_finish(current, current.finish)
        raise ValueError(f"Unknown event '{event}', expected one of {', '.join(FITTING_EVENTS)}")

    @staticmethod
    def diameter_title(product: Product) -> str:
        """
        Title of the diameter selector on page load: 'Select Gauge' when the
        diameter the configurator starts on is a gauge, as in the
        configurator's own 'load' response.
        """
        configurator = VariantNavigationService.build_configurator(product)
        if isinstance(configurator, FittingConfigurator):
            return DEFAULT_DIAMETER_TITLE
        return configurator.index.diameter_title(configurator.load().diameter)
