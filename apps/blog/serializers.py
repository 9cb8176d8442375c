from rest_framework import serializers

from .models import SECTION_TABLE, SECTION_TEXT, BlogPost


class SectionField(serializers.ListField):
    """Sections in and out; validates the text/table shapes on write."""

    def to_internal_value(self, data):
        sections = super().to_internal_value(data)
        for index, section in enumerate(sections):
            if not isinstance(section, dict):
                raise serializers.ValidationError(f"Section {index + 1} must be an object.")
            kind = section.get('type')
            if kind == SECTION_TEXT:
                if not isinstance(section.get('body', ''), str):
                    raise serializers.ValidationError(f"Section {index + 1}: body must be text.")
            elif kind == SECTION_TABLE:
                headers = section.get('headers')
                rows = section.get('rows')
                if not isinstance(headers, list) or not isinstance(rows, list):
                    raise serializers.ValidationError(f"Section {index + 1}: tables need headers and rows.")
                if any(not isinstance(row, list) or len(row) != len(headers) for row in rows):
                    raise serializers.ValidationError(
                        f"Section {index + 1}: every row needs {len(headers)} cells."
                    )
            else:
                raise serializers.ValidationError(f"Section {index + 1}: unknown type '{kind}'.")
        return sections


class BlogPostListSerializer(serializers.ModelSerializer):
    class Meta:
        model = BlogPost
        fields = ['id', 'title', 'slug', 'category', 'excerpt', 'author', 'cover_image', 'created_at']


class BlogPostSerializer(serializers.ModelSerializer):
    sections = SectionField(child=serializers.DictField(), required=False)

    class Meta:
        model = BlogPost
        fields = [
            'id', 'title', 'slug', 'category', 'excerpt', 'author', 'cover_image',
            'sections', 'is_published', 'created_at', 'updated_at'
        ]
        read_only_fields = ['slug', 'created_at', 'updated_at']

    def create(self, validated_data):
        sections = validated_data.pop('sections', [])
        post = BlogPost(**validated_data)
        post.set_sections(sections)
        post.save()
        return post

    def update(self, instance, validated_data):
        sections = validated_data.pop('sections', None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        if sections is not None:
            instance.set_sections(sections)
        instance.save()
        return instance
