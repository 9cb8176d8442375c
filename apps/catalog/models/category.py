from django.db import models
from django.utils.text import slugify


FITTING_KEYWORDS = ('fitting', 'channel', 'hinge', 'handle', 'lock', 'hardware')


class Category(models.Model):
    """
    Hierarchical product categories.
    Examples: Fasteners > Self Drilling Screws, Fittings > Drawer Channels
    """
    STYLE_FASTENER = 'fastener'
    STYLE_FITTING = 'fitting'
    STYLE_CHOICES = [
        (STYLE_FASTENER, 'Fastener (diameter / length / finish / type)'),
        (STYLE_FITTING, 'Fitting (size / finish)'),
    ]

    name = models.CharField(
        max_length=200,
        verbose_name='Name'
    )
    slug = models.SlugField(
        max_length=200,
        unique=True,
        blank=True,
        verbose_name='Slug'
    )
    parent = models.ForeignKey(
        'self',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='children',
        verbose_name='Parent category'
    )
    description = models.TextField(
        blank=True,
        verbose_name='Description'
    )
    image = models.ImageField(
        upload_to='categories/',
        blank=True,
        null=True,
        verbose_name='Image'
    )
    variant_style = models.CharField(
        max_length=20,
        choices=STYLE_CHOICES,
        blank=True,
        verbose_name='Variant style',
        help_text='Leave empty to derive it from the category name'
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name='Active'
    )
    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Display order'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['display_order', 'name']
        verbose_name = 'Category'
        verbose_name_plural = 'Categories'

    def __str__(self):
        return self.full_path

    @property
    def full_path(self):
        """Returns the full category path: Parent > Child > Grandchild"""
        ancestors = self.get_ancestors()
        path = [a.name for a in ancestors] + [self.name]
        return ' > '.join(path)

    def get_ancestors(self):
        """Returns list of all ancestor categories, from root to immediate parent."""
        ancestors = []
        current = self.parent
        while current:
            ancestors.insert(0, current)
            current = current.parent
        return ancestors

    def get_descendants(self):
        """Returns all descendant categories (children, grandchildren, etc.)"""
        descendants = []
        for child in self.children.all():
            descendants.append(child)
            descendants.extend(child.get_descendants())
        return descendants

    @property
    def level(self):
        """Returns the depth level (0 for root categories)."""
        return len(self.get_ancestors())

    @staticmethod
    def style_for_name(name):
        lowered = (name or '').lower()
        if any(keyword in lowered for keyword in FITTING_KEYWORDS):
            return Category.STYLE_FITTING
        return Category.STYLE_FASTENER

    @property
    def resolved_style(self):
        """
        Explicit style if set, otherwise derived from the name.
        A sub-category of a fitting category is a fitting category too.
        """
        if self.variant_style:
            return self.variant_style
        if self.style_for_name(self.name) == self.STYLE_FITTING:
            return self.STYLE_FITTING
        for ancestor in self.get_ancestors():
            if ancestor.resolved_style == self.STYLE_FITTING:
                return self.STYLE_FITTING
        return self.STYLE_FASTENER

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)
            # Ensure unique slug
            base_slug = self.slug
            counter = 1
            while Category.objects.filter(slug=self.slug).exclude(pk=self.pk).exists():
                self.slug = f"{base_slug}-{counter}"
                counter += 1
        super().save(*args, **kwargs)
