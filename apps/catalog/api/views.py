import logging

from rest_framework import viewsets, filters, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend
from django.db.models import Prefetch

from apps.catalog.models import (
    Category,
    Product,
    ProductVariant,
)
from apps.catalog.services import VariantNavigationService
from .permissions import IsStaffOrReadOnly
from .serializers import (
    CategorySerializer,
    ProductSerializer,
    ProductListSerializer,
    ProductDetailSerializer,
    ProductVariantSerializer,
    ConfiguratorQuerySerializer,
)
from .filters import ProductFilter, ProductVariantFilter

logger = logging.getLogger(__name__)


class CategoryViewSet(viewsets.ReadOnlyModelViewSet):
    """
    API endpoint for the category tree.

    list: Top-level categories with their sub-categories
    retrieve: One category by slug
    """
    serializer_class = CategorySerializer
    lookup_field = 'slug'

    def get_queryset(self):
        queryset = Category.objects.filter(is_active=True).prefetch_related('children')
        if self.action == 'list':
            queryset = queryset.filter(parent__isnull=True)
        return queryset


class ProductViewSet(viewsets.ModelViewSet):
    """
    API endpoint for products.

    list: List active products in drag order
    retrieve: Get product detail with gallery and variants
    configurator: Resolve one configurator interaction
    create/update/delete: staff only
    """
    queryset = Product.objects.select_related('category', 'category__parent')
    lookup_field = 'slug'
    permission_classes = [IsStaffOrReadOnly]
    filterset_class = ProductFilter
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name', 'short_description', 'material']
    ordering_fields = ['position', 'name', 'created_at']
    ordering = ['position', 'name']

    def get_serializer_class(self):
        if self.action == 'list':
            return ProductListSerializer
        elif self.action == 'retrieve':
            return ProductDetailSerializer
        return ProductSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        if not (self.request.user and self.request.user.is_staff):
            queryset = queryset.filter(is_active=True)
        if self.action in ('retrieve', 'configurator'):
            queryset = queryset.prefetch_related(
                'images',
                Prefetch('variants', queryset=ProductVariant.objects.order_by('display_order', 'pk')),
            )
        elif self.action == 'list':
            queryset = queryset.prefetch_related('images')
        return queryset

    @action(detail=True, methods=['get'])
    def configurator(self, request, slug=None):
        """
        Resolve the product's configurator for one interaction.

        Query params:
        - event: load | diameter | length | finish | type (fasteners),
          load | size | finish (fittings)
        - diameter, length, unit, finish, type, focus: current fastener selection
        - size, finish: current fitting selection
        """
        product = self.get_object()
        query = ConfiguratorQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = dict(query.validated_data)
        event = params.pop('event')

        try:
            data = VariantNavigationService.get_configurator_data(product, params, event)
        except ValueError as exc:
            logger.info("Configurator request rejected for %s: %s", product.slug, exc)
            return Response({'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(data)


class ProductVariantViewSet(viewsets.ModelViewSet):
    """
    API endpoint for variant rows (staff only).

    Supports filtering by product, diameter, finish, type and unit.
    """
    queryset = ProductVariant.objects.select_related('product')
    serializer_class = ProductVariantSerializer
    permission_classes = [IsAdminUser]
    filterset_class = ProductVariantFilter
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    ordering_fields = ['display_order', 'diameter', 'finish']
    ordering = ['product', 'display_order']

