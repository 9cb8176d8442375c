from django.conf import settings
from rest_framework import serializers

from .models import Enquiry


class EnquiryCreateSerializer(serializers.ModelSerializer):
    """Public contact form submission."""

    class Meta:
        model = Enquiry
        fields = [
            'enquiry_id', 'first_name', 'last_name', 'email', 'phone',
            'subject', 'message', 'document', 'image'
        ]
        read_only_fields = ['enquiry_id']

    def _check_size(self, upload):
        limit = getattr(settings, 'ENQUIRY_MAX_ATTACHMENT_SIZE', 10 * 1024 * 1024)
        if upload is not None and upload.size > limit:
            raise serializers.ValidationError(f"Files must be smaller than {limit // (1024 * 1024)} MB.")
        return upload

    def validate_document(self, value):
        return self._check_size(value)

    def validate_image(self, value):
        return self._check_size(value)


class EnquirySerializer(serializers.ModelSerializer):
    """Back-office view of an enquiry; only the status can change."""
    full_name = serializers.CharField(read_only=True)

    class Meta:
        model = Enquiry
        fields = [
            'id', 'enquiry_id', 'first_name', 'last_name', 'full_name', 'email',
            'phone', 'subject', 'message', 'document', 'image', 'status',
            'synced_at', 'created_at'
        ]
        read_only_fields = [
            'enquiry_id', 'first_name', 'last_name', 'email', 'phone', 'subject',
            'message', 'document', 'image', 'synced_at', 'created_at'
        ]
