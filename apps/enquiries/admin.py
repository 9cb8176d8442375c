from django.contrib import admin, messages
from django.utils.html import format_html

from .models import Enquiry
from .services import SheetSyncService


@admin.register(Enquiry)
class EnquiryAdmin(admin.ModelAdmin):
    list_display = ['enquiry_id', 'full_name', 'email', 'subject', 'status_badge', 'has_attachments', 'created_at']
    list_filter = ['status', 'subject', 'created_at']
    search_fields = ['enquiry_id', 'first_name', 'last_name', 'email', 'phone', 'message']
    readonly_fields = [
        'enquiry_id', 'first_name', 'last_name', 'email', 'phone', 'subject',
        'message', 'document', 'image', 'synced_at', 'created_at'
    ]
    date_hierarchy = 'created_at'
    actions = ['mark_read', 'mark_contacted', 'sync_to_sheet']

    fieldsets = (
        (None, {
            'fields': ('enquiry_id', 'status', 'subject', 'message')
        }),
        ('Contact', {
            'fields': ('first_name', 'last_name', 'email', 'phone')
        }),
        ('Attachments', {
            'fields': ('document', 'image')
        }),
        ('Info', {
            'fields': ('synced_at', 'created_at'),
            'classes': ('collapse',)
        }),
    )

    def has_add_permission(self, request):
        return False

    def status_badge(self, obj):
        colours = {
            Enquiry.STATUS_NEW: 'blue',
            Enquiry.STATUS_READ: 'gray',
            Enquiry.STATUS_CONTACTED: 'green',
        }
        return format_html(
            '<span style="color: {};">{}</span>',
            colours.get(obj.status, 'black'),
            obj.get_status_display()
        )
    status_badge.short_description = 'Status'

    def has_attachments(self, obj):
        return bool(obj.document or obj.image)
    has_attachments.boolean = True
    has_attachments.short_description = 'Files'

    @admin.action(description='Mark selected enquiries as read')
    def mark_read(self, request, queryset):
        count = queryset.update(status=Enquiry.STATUS_READ)
        self.message_user(request, f'{count} enquiries marked as read.')

    @admin.action(description='Mark selected enquiries as contacted')
    def mark_contacted(self, request, queryset):
        count = queryset.update(status=Enquiry.STATUS_CONTACTED)
        self.message_user(request, f'{count} enquiries marked as contacted.')

    @admin.action(description='Sync selected enquiries to the sheet')
    def sync_to_sheet(self, request, queryset):
        if not SheetSyncService.is_configured():
            self.message_user(request, 'Sheet webhook is not configured.', level=messages.ERROR)
            return
        synced = sum(1 for enquiry in queryset if SheetSyncService.sync_and_mark_read(enquiry, request))
        failed = queryset.count() - synced
        self.message_user(request, f'{synced} enquiries synced.')
        if failed:
            self.message_user(request, f'{failed} enquiries could not be synced.', level=messages.WARNING)
