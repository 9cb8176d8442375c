from django.contrib import admin

from .models import ManufacturingContent


@admin.register(ManufacturingContent)
class ManufacturingContentAdmin(admin.ModelAdmin):
    fieldsets = (
        ('Hero', {
            'fields': ('hero_title', 'hero_subtitle')
        }),
        ('Overview', {
            'fields': ('overview_title', 'overview_description')
        }),
        ('Block 1', {
            'fields': ('media1_title', 'media1_subtitle', 'media1_file')
        }),
        ('Block 2', {
            'fields': ('media2_title', 'media2_subtitle', 'media2_file')
        }),
        ('Block 3', {
            'fields': ('media3_title', 'media3_subtitle', 'media3_file')
        }),
    )

    def has_add_permission(self, request):
        return not ManufacturingContent.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False
