"""
Drag-and-drop ordering of products.

The back office applies a new order locally first, then persists it
here. Either every product gets ``position = index`` or nothing changes,
and on failure the caller receives the authoritative order so the list
can be redrawn from it.
"""

import logging
from typing import Iterable, List

from django.db import DatabaseError, transaction

from apps.catalog.models import Product

logger = logging.getLogger(__name__)


class ReorderError(Exception):
    """Raised when a new order cannot be applied; carries the stored order."""

    def __init__(self, message: str, current_order: List[int]):
        super().__init__(message)
        self.current_order = current_order


class ProductOrderingService:

    @staticmethod
    def current_order() -> List[int]:
        """Product ids as currently stored, by position."""
        return list(Product.objects.order_by('position', 'name').values_list('pk', flat=True))

    @staticmethod
    def reorder(product_ids: Iterable) -> List[int]:
        """
        Persist a new product order.

        Args:
            product_ids: Product ids in their new order; index becomes position

        Returns:
            The stored order after the update

        Raises:
            ReorderError: unknown or duplicate ids, or a database failure.
                No position is changed in that case.
        """
        try:
            ids = [int(pk) for pk in product_ids]
        except (TypeError, ValueError):
            raise ReorderError('Order must be a list of product ids', ProductOrderingService.current_order())

        if len(set(ids)) != len(ids):
            raise ReorderError('Order contains duplicate ids', ProductOrderingService.current_order())

        try:
            with transaction.atomic():
                existing = set(Product.objects.filter(pk__in=ids).values_list('pk', flat=True))
                missing = [pk for pk in ids if pk not in existing]
                if missing:
                    raise ReorderError(
                        f"Unknown product ids: {', '.join(str(pk) for pk in missing)}",
                        [],
                    )
                for index, pk in enumerate(ids):
                    Product.objects.filter(pk=pk).update(position=index)
        except ReorderError as exc:
            logger.warning("Reorder rejected: %s", exc)
            raise ReorderError(str(exc), ProductOrderingService.current_order())
        except DatabaseError:
            logger.exception("Reorder failed, positions rolled back")
            raise ReorderError('Could not save the new order', ProductOrderingService.current_order())

        return ProductOrderingService.current_order()
