from django.db import models
from simple_history.models import HistoricalRecords


class ProductVariant(models.Model):
    """
    One orderable combination of a product's size, finish and type.

    Fastener rows use diameter / length / unit; ``length`` may hold a
    comma separated list of lengths sharing one unit. Fitting rows keep
    their opaque size label in ``diameter`` (older rows in ``length``).
    """
    DIAMETER_UNIT_CHOICES = [
        ('mm', 'mm'),
        ('gauge', 'Gauge'),
    ]
    UNIT_CHOICES = [
        ('mm', 'mm'),
        ('inch', 'inch'),
    ]

    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='variants',
        verbose_name='Product'
    )
    diameter = models.CharField(
        max_length=50,
        blank=True,
        verbose_name='Diameter / size',
        help_text='Diameter or gauge number; the size label for fittings'
    )
    diameter_unit = models.CharField(
        max_length=10,
        choices=DIAMETER_UNIT_CHOICES,
        default='mm',
        verbose_name='Diameter unit'
    )
    length = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Length',
        help_text='Single length or comma separated lengths, e.g. "25, 32, 40"'
    )
    unit = models.CharField(
        max_length=10,
        choices=UNIT_CHOICES,
        default='mm',
        verbose_name='Length unit'
    )
    finish = models.CharField(
        max_length=120,
        blank=True,
        verbose_name='Finish'
    )
    type = models.CharField(
        max_length=120,
        blank=True,
        verbose_name='Type'
    )
    image = models.CharField(
        max_length=500,
        blank=True,
        verbose_name='Image URL',
        help_text='Image shown for this exact combination'
    )
    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Display order'
    )

    # History tracking
    history = HistoricalRecords()

    class Meta:
        ordering = ['display_order', 'pk']
        verbose_name = 'Variant'
        verbose_name_plural = 'Variants'

    def __str__(self):
        parts = [self.size_display, self.finish, self.type]
        return f"{self.product.name} - {' / '.join(p for p in parts if p)}"

    @property
    def diameter_display(self):
        if not self.diameter:
            return ''
        if self.diameter_unit == 'gauge':
            return f"#{self.diameter}"
        return f"{self.diameter}mm"

    @property
    def size_display(self):
        if self.length:
            return f"{self.diameter_display} x {self.length} {self.unit}".strip()
        return self.diameter_display

    def as_record(self):
        """Row shape consumed by the configurator."""
        return {
            'diameter': self.diameter,
            'diameter_unit': self.diameter_unit,
            'length': self.length,
            'unit': self.unit,
            'finish': self.finish,
            'type': self.type,
            'image': self.image,
        }
