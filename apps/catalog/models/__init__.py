"""
Catalog models for a fastener and fittings catalog.

Model Hierarchy:
- Category: Fastener or fitting category, one level of sub-categories
- Product: Catalog product with its detail page sections
- ProductImage: Gallery images, ordered
- ProductVariant: Size x finish x type combinations for the configurator
"""

from .category import Category
from .product import Product, ProductImage
from .variant import ProductVariant

__all__ = [
    'Category',
    'Product',
    'ProductImage',
    'ProductVariant',
]
