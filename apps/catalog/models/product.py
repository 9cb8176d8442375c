from django.db import models
from django.utils.text import slugify
from simple_history.models import HistoricalRecords
from imagekit.models import ProcessedImageField, ImageSpecField
from imagekit.processors import ResizeToFill, ResizeToFit


class Product(models.Model):
    """
    Catalog product.
    Example: "Self Drilling Screw CSK Phillips", sold in many diameter /
    length / finish combinations (see ProductVariant).

    The structured sections of the detail page (specifications,
    dimensional table, applications, certifications, FAQs) are kept as
    JSON lists in the shape the admin editor produces.
    """
    name = models.CharField(
        max_length=255,
        verbose_name='Name'
    )
    slug = models.SlugField(
        max_length=255,
        unique=True,
        blank=True,
        verbose_name='Slug'
    )
    category = models.ForeignKey(
        'catalog.Category',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='products',
        verbose_name='Category',
        help_text='Either a top-level category or a sub-category'
    )
    short_description = models.CharField(
        max_length=500,
        blank=True,
        verbose_name='Short description'
    )
    description = models.TextField(
        blank=True,
        verbose_name='Description'
    )

    # Material and geometry
    material = models.CharField(max_length=120, blank=True, verbose_name='Material')
    material_grade = models.CharField(max_length=120, blank=True, verbose_name='Material grade')
    head_type = models.CharField(max_length=120, blank=True, verbose_name='Head type')
    drive_type = models.CharField(max_length=120, blank=True, verbose_name='Drive type')
    thread_type = models.CharField(max_length=120, blank=True, verbose_name='Thread type')

    # Detail page sections
    specifications = models.JSONField(
        default=list,
        blank=True,
        verbose_name='Specifications',
        help_text='List of {"key": ..., "value": ...}'
    )
    dimensional_specifications = models.JSONField(
        default=list,
        blank=True,
        verbose_name='Dimensional specifications',
        help_text='List of {"label": ..., "symbol": ..., "values": {diameter: value}}'
    )
    applications = models.JSONField(
        default=list,
        blank=True,
        verbose_name='Applications',
        help_text='List of {"name": ..., "image": ...}'
    )
    certifications = models.JSONField(
        default=list,
        blank=True,
        verbose_name='Certifications',
        help_text='List of {"title": ..., "subtitle": ...}'
    )
    faqs = models.JSONField(
        default=list,
        blank=True,
        verbose_name='FAQs',
        help_text='List of {"question": ..., "answer": ...}'
    )

    # Image fallbacks used by the configurator
    finish_images = models.JSONField(
        default=dict,
        blank=True,
        verbose_name='Finish images',
        help_text='Map of finish name to image URL'
    )
    type_images = models.JSONField(
        default=dict,
        blank=True,
        verbose_name='Type images',
        help_text='Map of type name to image URL'
    )
    size_images = models.JSONField(
        default=list,
        blank=True,
        verbose_name='Size images',
        help_text='List of {"labels": [...], "name": ..., "image": ...}'
    )
    technical_drawing = models.FileField(
        upload_to='products/drawings/',
        blank=True,
        null=True,
        verbose_name='Technical drawing'
    )

    position = models.PositiveIntegerField(
        default=0,
        db_index=True,
        verbose_name='Position'
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name='Active'
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Created at'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Updated at'
    )

    # History tracking
    history = HistoricalRecords(excluded_fields=['technical_drawing'])

    class Meta:
        ordering = ['position', 'name']
        verbose_name = 'Product'
        verbose_name_plural = 'Products'

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)
            base_slug = self.slug
            counter = 1
            while Product.objects.filter(slug=self.slug).exclude(pk=self.pk).exists():
                self.slug = f"{base_slug}-{counter}"
                counter += 1
        super().save(*args, **kwargs)

    @property
    def variant_style(self):
        """'fitting' or 'fastener', decided by the product's category."""
        from .category import Category
        if self.category is None:
            return Category.STYLE_FASTENER
        return self.category.resolved_style

    @property
    def variant_count(self):
        return self.variants.count()

    @property
    def gallery_urls(self):
        """Gallery image URLs in display order; index 0 is the primary image."""
        return [image.image.url for image in self.images.all() if image.image]

    def get_thumbnail_url(self):
        """Thumbnail of the primary gallery image."""
        image = self.images.first()
        if image is None or not image.image:
            return None
        return image.thumbnail.url


class ProductImage(models.Model):
    """Gallery images for each product with automatic thumbnail generation."""
    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='images',
        verbose_name='Product'
    )
    image = ProcessedImageField(
        upload_to='products/%Y/%m/',
        processors=[ResizeToFit(1600, 1600)],
        format='JPEG',
        options={'quality': 85},
        verbose_name='Image'
    )
    thumbnail = ImageSpecField(
        source='image',
        processors=[ResizeToFill(300, 300)],
        format='JPEG',
        options={'quality': 70}
    )
    thumbnail_small = ImageSpecField(
        source='image',
        processors=[ResizeToFill(100, 100)],
        format='JPEG',
        options={'quality': 60}
    )
    alt_text = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Alt text'
    )
    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Display order'
    )

    class Meta:
        ordering = ['display_order', 'pk']
        verbose_name = 'Product image'
        verbose_name_plural = 'Product images'

    def __str__(self):
        return f"{self.product.name} - Image {self.display_order}"

    def save(self, *args, **kwargs):
        # Auto-generate alt text if empty
        if not self.alt_text:
            self.alt_text = self.product.name
        super().save(*args, **kwargs)
