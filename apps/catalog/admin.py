from django.contrib import admin
from django.utils.html import format_html
from import_export import resources, fields
from import_export.admin import ImportExportModelAdmin
from import_export.widgets import ForeignKeyWidget
from adminsortable2.admin import SortableAdminMixin, SortableInlineAdminMixin
from simple_history.admin import SimpleHistoryAdmin

from .models import (
    Category,
    Product,
    ProductImage,
    ProductVariant,
)


# =============================================================================
# Import/Export Resources
# =============================================================================

class ProductVariantResource(resources.ModelResource):
    """Resource for importing/exporting variant rows."""

    product = fields.Field(
        column_name='product',
        attribute='product',
        widget=ForeignKeyWidget(Product, 'slug')
    )

    class Meta:
        model = ProductVariant
        fields = (
            'id', 'product', 'diameter', 'diameter_unit', 'length', 'unit',
            'finish', 'type', 'image', 'display_order'
        )
        export_order = fields


# =============================================================================
# Inlines
# =============================================================================

class SubCategoryInline(admin.TabularInline):
    model = Category
    fk_name = 'parent'
    extra = 0
    fields = ['name', 'slug', 'variant_style', 'is_active', 'display_order']
    prepopulated_fields = {'slug': ('name',)}
    show_change_link = True


class ProductImageInline(SortableInlineAdminMixin, admin.TabularInline):
    model = ProductImage
    extra = 1
    fields = ['image', 'alt_text', 'display_order', 'image_preview']
    readonly_fields = ['image_preview']

    def image_preview(self, obj):
        if obj.image:
            return format_html(
                '<img src="{}" style="max-height: 50px; max-width: 100px;" />',
                obj.thumbnail_small.url if obj.thumbnail_small else obj.image.url
            )
        return '-'
    image_preview.short_description = 'Preview'


class ProductVariantInline(SortableInlineAdminMixin, admin.TabularInline):
    model = ProductVariant
    extra = 0
    fields = ['diameter', 'diameter_unit', 'length', 'unit', 'finish', 'type', 'image', 'display_order']


# =============================================================================
# Model Admins
# =============================================================================

@admin.register(Category)
class CategoryAdmin(SortableAdminMixin, admin.ModelAdmin):
    list_display = ['name', 'parent', 'slug', 'style_display', 'product_count', 'is_active', 'display_order']
    list_filter = ['is_active', 'variant_style', 'parent']
    search_fields = ['name', 'slug']
    prepopulated_fields = {'slug': ('name',)}
    inlines = [SubCategoryInline]

    def style_display(self, obj):
        return obj.resolved_style
    style_display.short_description = 'Variant style'

    def product_count(self, obj):
        return obj.products.count()
    product_count.short_description = 'Products'


@admin.register(Product)
class ProductAdmin(SortableAdminMixin, SimpleHistoryAdmin):
    list_display = ['name', 'category', 'variant_style', 'variant_count', 'is_active', 'position', 'primary_image_preview']
    list_filter = ['is_active', 'category', 'created_at']
    search_fields = ['name', 'slug', 'short_description', 'material']
    prepopulated_fields = {'slug': ('name',)}
    autocomplete_fields = ['category']
    readonly_fields = ['variant_style', 'variant_count', 'created_at', 'updated_at']
    inlines = [ProductImageInline, ProductVariantInline]

    fieldsets = (
        (None, {
            'fields': ('name', 'slug', 'category', 'variant_style', 'is_active')
        }),
        ('Description', {
            'fields': ('short_description', 'description')
        }),
        ('Material', {
            'fields': ('material', 'material_grade', 'head_type', 'drive_type', 'thread_type')
        }),
        ('Detail page', {
            'fields': (
                'specifications', 'dimensional_specifications', 'applications',
                'certifications', 'faqs', 'technical_drawing'
            ),
            'classes': ('collapse',)
        }),
        ('Configurator images', {
            'fields': ('finish_images', 'type_images', 'size_images'),
            'classes': ('collapse',)
        }),
        ('Info', {
            'fields': ('variant_count', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['activate_products', 'deactivate_products']

    def primary_image_preview(self, obj):
        url = obj.get_thumbnail_url()
        if url:
            return format_html('<img src="{}" style="max-height: 40px; max-width: 60px;" />', url)
        return '-'
    primary_image_preview.short_description = 'Image'

    @admin.action(description='Activate selected products')
    def activate_products(self, request, queryset):
        count = queryset.update(is_active=True)
        self.message_user(request, f'{count} products activated.')

    @admin.action(description='Deactivate selected products')
    def deactivate_products(self, request, queryset):
        count = queryset.update(is_active=False)
        self.message_user(request, f'{count} products deactivated.')


@admin.register(ProductVariant)
class ProductVariantAdmin(ImportExportModelAdmin, SimpleHistoryAdmin):
    resource_class = ProductVariantResource
    list_display = ['product', 'diameter_display', 'length', 'unit', 'finish', 'type', 'image_preview']
    list_filter = ['diameter_unit', 'unit', 'finish', 'product__category']
    search_fields = ['product__name', 'diameter', 'length', 'finish', 'type']
    autocomplete_fields = ['product']
    list_per_page = 50

    def diameter_display(self, obj):
        return obj.diameter_display or '-'
    diameter_display.short_description = 'Diameter'

    def image_preview(self, obj):
        if obj.image:
            return format_html('<img src="{}" style="max-height: 40px; max-width: 60px;" />', obj.image)
        return '-'
    image_preview.short_description = 'Image'


# =============================================================================
# Admin Site Configuration
# =============================================================================

admin.site.site_header = 'Durable Fasteners Admin'
admin.site.site_title = 'Durable Fasteners'
admin.site.index_title = 'Back office'
