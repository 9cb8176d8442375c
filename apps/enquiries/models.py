import os

from django.db import models
from django.utils import timezone


def _attachment_path(folder, instance, filename):
    ext = os.path.splitext(filename)[1].lower().lstrip('.') or 'bin'
    stamp = int(timezone.now().timestamp() * 1000)
    return f"enquiries/{folder}/{instance.enquiry_id}-{stamp}.{ext}"


def document_upload_to(instance, filename):
    return _attachment_path('docs', instance, filename)


def image_upload_to(instance, filename):
    return _attachment_path('images', instance, filename)


class Enquiry(models.Model):
    """Message sent from the contact page, optionally with a document and an image."""
    STATUS_NEW = 'new'
    STATUS_READ = 'read'
    STATUS_CONTACTED = 'contacted'
    STATUS_CHOICES = [
        (STATUS_NEW, 'New'),
        (STATUS_READ, 'Read'),
        (STATUS_CONTACTED, 'Contacted'),
    ]

    SUBJECT_CHOICES = [
        ('Export Inquiry', 'Export Inquiry'),
        ('Custom Fastener / OEM Requirement', 'Custom Fastener / OEM Requirement'),
        ('Product Inquiry - Standard Items', 'Product Inquiry - Standard Items'),
        ('Bulk Purchase / Dealership Inquiry', 'Bulk Purchase / Dealership Inquiry'),
        ('Existing Order / Customer Support', 'Existing Order / Customer Support'),
        ('Direct Complaint / Feedback to Management', 'Direct Complaint / Feedback to Management'),
        ('Vendor / Raw Material / Service Proposal', 'Vendor / Raw Material / Service Proposal'),
        ('Career / Job Application', 'Career / Job Application'),
        ('Marketing / Business Collaboration', 'Marketing / Business Collaboration'),
        ('General Inquiry', 'General Inquiry'),
    ]

    enquiry_id = models.CharField(
        max_length=20,
        unique=True,
        editable=False,
        verbose_name='Enquiry ID'
    )
    first_name = models.CharField(max_length=120, verbose_name='First name')
    last_name = models.CharField(max_length=120, blank=True, verbose_name='Last name')
    email = models.EmailField(verbose_name='Email')
    phone = models.CharField(max_length=40, blank=True, verbose_name='Phone')
    subject = models.CharField(
        max_length=100,
        choices=SUBJECT_CHOICES,
        default='General Inquiry',
        verbose_name='Subject'
    )
    message = models.TextField(verbose_name='Message')
    document = models.FileField(
        upload_to=document_upload_to,
        blank=True,
        null=True,
        verbose_name='Document'
    )
    image = models.ImageField(
        upload_to=image_upload_to,
        blank=True,
        null=True,
        verbose_name='Image'
    )
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_NEW,
        db_index=True,
        verbose_name='Status'
    )
    synced_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name='Synced to sheet at'
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Received at'
    )

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Enquiry'
        verbose_name_plural = 'Enquiries'

    def __str__(self):
        return f"{self.enquiry_id} - {self.full_name}"

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()
