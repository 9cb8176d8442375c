from .serializers import (
    CategorySerializer,
    ProductSerializer,
    ProductListSerializer,
    ProductDetailSerializer,
    ProductImageSerializer,
    ProductVariantSerializer,
)

__all__ = [
    'CategorySerializer',
    'ProductSerializer',
    'ProductListSerializer',
    'ProductDetailSerializer',
    'ProductImageSerializer',
    'ProductVariantSerializer',
]
