from django.db.models import Q
from django_filters import rest_framework as filters
from apps.catalog.models import Category, Product, ProductVariant


class ProductFilter(filters.FilterSet):
    """Filter for the storefront product list."""

    category_slug = filters.CharFilter(method='filter_by_category')
    sub_category = filters.CharFilter(method='filter_by_sub_category')

    class Meta:
        model = Product
        fields = ['category_slug', 'sub_category', 'is_active']

    def filter_by_category(self, queryset, name, value):
        """
        Match a category by slug, or by name with hyphens read as spaces.
        Example: ?category_slug=self-drilling-screws
        Products of its sub-categories are included.
        """
        name_from_slug = value.replace('-', ' ')
        categories = Category.objects.filter(
            Q(slug=value) | Q(name__iexact=name_from_slug)
        )
        category_ids = set()
        for category in categories:
            category_ids.add(category.pk)
            category_ids.update(child.pk for child in category.get_descendants())
        return queryset.filter(category_id__in=category_ids)

    def filter_by_sub_category(self, queryset, name, value):
        if value.isdigit():
            return queryset.filter(category_id=int(value))
        return queryset.filter(category__slug=value)


class ProductVariantFilter(filters.FilterSet):
    """Filter for the staff variant list."""

    product = filters.CharFilter(field_name='product__slug')
    product_id = filters.NumberFilter(field_name='product__id')

    class Meta:
        model = ProductVariant
        fields = ['product', 'product_id', 'diameter', 'finish', 'type', 'unit']
