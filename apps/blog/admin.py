from django.contrib import admin
from django.utils.html import format_html

from .models import BlogPost


@admin.register(BlogPost)
class BlogPostAdmin(admin.ModelAdmin):
    list_display = ['title', 'category', 'author', 'is_published', 'section_count', 'created_at']
    list_filter = ['category', 'is_published', 'created_at']
    search_fields = ['title', 'excerpt', 'content']
    prepopulated_fields = {'slug': ('title',)}
    readonly_fields = ['cover_preview', 'created_at', 'updated_at']

    fieldsets = (
        (None, {
            'fields': ('title', 'slug', 'category', 'author', 'is_published')
        }),
        ('Content', {
            'fields': ('excerpt', 'cover_image', 'cover_preview', 'content')
        }),
        ('Info', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def section_count(self, obj):
        return len(obj.sections)
    section_count.short_description = 'Sections'

    def cover_preview(self, obj):
        if obj.cover_image:
            return format_html('<img src="{}" style="max-height: 120px;" />', obj.cover_image.url)
        return '-'
    cover_preview.short_description = 'Preview'
