from rest_framework import serializers
from apps.catalog.models import (
    Category,
    Product,
    ProductImage,
    ProductVariant,
)
from apps.catalog.services import VariantNavigationService


# =============================================================================
# Category Serializers
# =============================================================================

class SubCategorySerializer(serializers.ModelSerializer):
    variant_style = serializers.CharField(source='resolved_style', read_only=True)

    class Meta:
        model = Category
        fields = ['id', 'name', 'slug', 'variant_style', 'display_order']


class CategorySerializer(serializers.ModelSerializer):
    variant_style = serializers.CharField(source='resolved_style', read_only=True)
    sub_categories = serializers.SerializerMethodField()

    class Meta:
        model = Category
        fields = [
            'id', 'name', 'slug', 'description', 'variant_style',
            'display_order', 'sub_categories'
        ]

    def get_sub_categories(self, obj):
        children = [child for child in obj.children.all() if child.is_active]
        return SubCategorySerializer(children, many=True).data


# =============================================================================
# Image Serializer
# =============================================================================

class ProductImageSerializer(serializers.ModelSerializer):
    thumbnail_url = serializers.SerializerMethodField()
    thumbnail_small_url = serializers.SerializerMethodField()

    class Meta:
        model = ProductImage
        fields = [
            'id', 'image', 'thumbnail_url', 'thumbnail_small_url',
            'alt_text', 'display_order'
        ]

    def get_thumbnail_url(self, obj):
        if obj.thumbnail:
            request = self.context.get('request')
            if request:
                return request.build_absolute_uri(obj.thumbnail.url)
            return obj.thumbnail.url
        return None

    def get_thumbnail_small_url(self, obj):
        if obj.thumbnail_small:
            request = self.context.get('request')
            if request:
                return request.build_absolute_uri(obj.thumbnail_small.url)
            return obj.thumbnail_small.url
        return None


# =============================================================================
# Variant Serializer
# =============================================================================

class ProductVariantSerializer(serializers.ModelSerializer):
    diameter_display = serializers.CharField(read_only=True)

    class Meta:
        model = ProductVariant
        fields = [
            'id', 'product', 'diameter', 'diameter_unit', 'diameter_display', 'length',
            'unit', 'finish', 'type', 'image', 'display_order'
        ]


# =============================================================================
# Product Serializers
# =============================================================================

class ProductSerializer(serializers.ModelSerializer):
    """Base product serializer used for writes."""

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'category', 'short_description', 'description',
            'material', 'material_grade', 'head_type', 'drive_type', 'thread_type',
            'specifications', 'dimensional_specifications', 'applications',
            'certifications', 'faqs', 'finish_images', 'type_images', 'size_images',
            'position', 'is_active', 'created_at', 'updated_at'
        ]
        read_only_fields = ['slug', 'created_at', 'updated_at']

    def validate_specifications(self, value):
        return self._validate_rows(value, ('key', 'value'))

    def validate_faqs(self, value):
        return self._validate_rows(value, ('question', 'answer'))

    def validate_finish_images(self, value):
        return self._validate_map(value)

    def validate_type_images(self, value):
        return self._validate_map(value)

    @staticmethod
    def _validate_rows(value, keys):
        if not isinstance(value, list):
            raise serializers.ValidationError('Expected a list.')
        for row in value:
            if not isinstance(row, dict) or any(key not in row for key in keys):
                raise serializers.ValidationError(f"Each entry needs {' and '.join(keys)}.")
        return value

    @staticmethod
    def _validate_map(value):
        if not isinstance(value, dict):
            raise serializers.ValidationError('Expected an object of name to image URL.')
        for name, url in value.items():
            if not isinstance(url, str):
                raise serializers.ValidationError(f"Image for '{name}' must be a URL string.")
        return value


class ProductListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for product lists."""
    category_name = serializers.CharField(source='category.name', read_only=True, default=None)
    variant_style = serializers.CharField(read_only=True)
    primary_image = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'category', 'category_name', 'short_description',
            'material', 'variant_style', 'primary_image', 'position'
        ]

    def get_primary_image(self, obj):
        images = list(obj.images.all())
        if not images:
            return None
        request = self.context.get('request')
        url = images[0].image.url
        if request:
            return request.build_absolute_uri(url)
        return url


class ProductDetailSerializer(serializers.ModelSerializer):
    """Full product serializer with gallery, variants and detail sections."""
    category = SubCategorySerializer(read_only=True)
    parent_category = serializers.SerializerMethodField()
    images = ProductImageSerializer(many=True, read_only=True)
    gallery = serializers.ListField(source='gallery_urls', read_only=True)
    variants = ProductVariantSerializer(many=True, read_only=True)
    variant_style = serializers.CharField(read_only=True)
    diameter_title = serializers.SerializerMethodField()
    technical_drawing = serializers.FileField(read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'category', 'parent_category',
            'short_description', 'description', 'material', 'material_grade',
            'head_type', 'drive_type', 'thread_type', 'specifications',
            'dimensional_specifications', 'applications', 'certifications',
            'faqs', 'finish_images', 'type_images', 'size_images',
            'technical_drawing', 'images', 'gallery', 'variants',
            'variant_style', 'diameter_title', 'created_at', 'updated_at'
        ]

    def get_parent_category(self, obj):
        if obj.category is None or obj.category.parent is None:
            return None
        return SubCategorySerializer(obj.category.parent).data

    def get_diameter_title(self, obj):
        return VariantNavigationService.diameter_title(obj)


class ConfiguratorQuerySerializer(serializers.Serializer):
    """Query parameters of the configurator endpoint."""
    event = serializers.ChoiceField(
        choices=['load', 'diameter', 'length', 'finish', 'type', 'size'],
        default='load'
    )
    diameter = serializers.CharField(required=False, allow_blank=True, default='')
    length = serializers.CharField(required=False, allow_blank=True, default='')
    unit = serializers.CharField(required=False, allow_blank=True, default='')
    finish = serializers.CharField(required=False, allow_blank=True, default='')
    type = serializers.CharField(required=False, allow_blank=True, default='')
    focus = serializers.CharField(required=False, allow_blank=True, default='')
    size = serializers.CharField(required=False, allow_blank=True, default='')
