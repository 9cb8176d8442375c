import mimetypes

from django.core.exceptions import ValidationError
from django.db import models


MEDIA_SLOTS = (1, 2, 3)


def validate_image_or_video(file):
    """Accept only files whose type is image/* or video/*."""
    content_type = getattr(file, 'content_type', None) or mimetypes.guess_type(file.name)[0] or ''
    if not (content_type.startswith('image/') or content_type.startswith('video/')):
        raise ValidationError('Please upload a valid image or video file.')


class ManufacturingContent(models.Model):
    """
    Editable copy of the manufacturing page.
    A single row (pk=1) exists; use ManufacturingContent.load().
    """
    hero_title = models.CharField(max_length=255, blank=True, verbose_name='Hero title')
    hero_subtitle = models.TextField(blank=True, verbose_name='Hero subtitle')
    overview_title = models.CharField(max_length=255, blank=True, verbose_name='Overview title')
    overview_description = models.TextField(blank=True, verbose_name='Overview description')

    media1_title = models.CharField(max_length=255, blank=True, verbose_name='Block 1 title')
    media1_subtitle = models.CharField(max_length=255, blank=True, verbose_name='Block 1 subtitle')
    media1_file = models.FileField(
        upload_to='manufacturing/',
        blank=True,
        null=True,
        validators=[validate_image_or_video],
        verbose_name='Block 1 image or video'
    )
    media2_title = models.CharField(max_length=255, blank=True, verbose_name='Block 2 title')
    media2_subtitle = models.CharField(max_length=255, blank=True, verbose_name='Block 2 subtitle')
    media2_file = models.FileField(
        upload_to='manufacturing/',
        blank=True,
        null=True,
        validators=[validate_image_or_video],
        verbose_name='Block 2 image or video'
    )
    media3_title = models.CharField(max_length=255, blank=True, verbose_name='Block 3 title')
    media3_subtitle = models.CharField(max_length=255, blank=True, verbose_name='Block 3 subtitle')
    media3_file = models.FileField(
        upload_to='manufacturing/',
        blank=True,
        null=True,
        validators=[validate_image_or_video],
        verbose_name='Block 3 image or video'
    )

    updated_at = models.DateTimeField(auto_now=True, verbose_name='Updated at')

    class Meta:
        verbose_name = 'Manufacturing page'
        verbose_name_plural = 'Manufacturing page'

    def __str__(self):
        return 'Manufacturing page'

    def save(self, *args, **kwargs):
        self.pk = 1
        super().save(*args, **kwargs)

    @classmethod
    def load(cls):
        obj, _ = cls.objects.get_or_create(pk=1)
        return obj

    def media_blocks(self):
        """The three media blocks as dicts, in page order."""
        blocks = []
        for slot in MEDIA_SLOTS:
            file = getattr(self, f'media{slot}_file')
            url = file.url if file else ''
            content_type = mimetypes.guess_type(file.name)[0] if file else None
            blocks.append({
                'slot': slot,
                'title': getattr(self, f'media{slot}_title'),
                'subtitle': getattr(self, f'media{slot}_subtitle'),
                'url': url,
                'is_video': bool(content_type and content_type.startswith('video/')),
            })
        return blocks
