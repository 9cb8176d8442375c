import json

from django.db import models
from django.utils.text import slugify
from imagekit.models import ProcessedImageField
from imagekit.processors import ResizeToFit


SECTION_TEXT = 'text'
SECTION_TABLE = 'table'


def parse_sections(content):
    """
    Turn stored content into a list of sections.

    Content is a JSON list of {type: text, heading, body} and
    {type: table, heading, headers, rows}. Older posts hold plain text,
    which is shown as a single text section.
    """
    if not content:
        return []
    if isinstance(content, list):
        return content
    try:
        parsed = json.loads(content)
    except (TypeError, ValueError):
        return [{'type': SECTION_TEXT, 'heading': '', 'body': content}]
    if isinstance(parsed, list):
        return parsed
    return [{'type': SECTION_TEXT, 'heading': '', 'body': content}]


class BlogPost(models.Model):
    """Article with sectioned content for the insights blog."""
    CATEGORY_CHOICES = [
        ('Industry Trends', 'Industry Trends'),
        ('Technical Guide', 'Technical Guide'),
        ('Company News', 'Company News'),
    ]

    title = models.CharField(
        max_length=255,
        verbose_name='Title'
    )
    slug = models.SlugField(
        max_length=255,
        unique=True,
        blank=True,
        verbose_name='Slug'
    )
    category = models.CharField(
        max_length=50,
        choices=CATEGORY_CHOICES,
        default='Technical Guide',
        verbose_name='Category'
    )
    excerpt = models.TextField(
        blank=True,
        verbose_name='Excerpt'
    )
    author = models.CharField(
        max_length=120,
        default='Durable Editorial',
        verbose_name='Author'
    )
    cover_image = ProcessedImageField(
        upload_to='blog/%Y/%m/',
        processors=[ResizeToFit(1600, 1600)],
        format='JPEG',
        options={'quality': 85},
        blank=True,
        null=True,
        verbose_name='Cover image'
    )
    content = models.TextField(
        blank=True,
        verbose_name='Content',
        help_text='JSON list of text and table sections'
    )
    is_published = models.BooleanField(
        default=True,
        verbose_name='Published'
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Created at'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Updated at'
    )

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Blog post'
        verbose_name_plural = 'Blog posts'

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.title)
            base_slug = self.slug
            counter = 1
            while BlogPost.objects.filter(slug=self.slug).exclude(pk=self.pk).exists():
                self.slug = f"{base_slug}-{counter}"
                counter += 1
        super().save(*args, **kwargs)

    @property
    def sections(self):
        return parse_sections(self.content)

    def set_sections(self, sections):
        self.content = json.dumps(sections)
