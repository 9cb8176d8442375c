from rest_framework import serializers

from .models import ManufacturingContent


class ManufacturingContentSerializer(serializers.ModelSerializer):
    media_blocks = serializers.SerializerMethodField()

    class Meta:
        model = ManufacturingContent
        fields = [
            'hero_title', 'hero_subtitle', 'overview_title', 'overview_description',
            'media1_title', 'media1_subtitle', 'media1_file',
            'media2_title', 'media2_subtitle', 'media2_file',
            'media3_title', 'media3_subtitle', 'media3_file',
            'media_blocks', 'updated_at'
        ]
        read_only_fields = ['updated_at']

    def get_media_blocks(self, obj):
        return obj.media_blocks()
