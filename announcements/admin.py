"""
announcements/admin.py

Django admin for quick manual curation. Push audit fields are read-only:
only the publish flow writes them.
"""
from django.contrib import admin

from .models import Announcement, BoardMember, Program
from .serializers import PUSH_AUDIT_FIELDS


@admin.register(Announcement)
class AnnouncementAdmin(admin.ModelAdmin):
    list_display = ("title", "priority", "is_active", "live", "expiry_date", "push_sent", "push_recipients", "created_at")
    list_filter = ("priority", "is_active", "push_sent")
    search_fields = ("title", "message", "published_by")
    ordering = ("-created_at",)
    readonly_fields = ("published_by", "updated_at", *PUSH_AUDIT_FIELDS)

    @admin.display(boolean=True, description="Live")
    def live(self, obj):
        return obj.is_live()


@admin.register(Program)
class ProgramAdmin(admin.ModelAdmin):
    list_display = ("name", "timing", "icon", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name", "timing")


@admin.register(BoardMember)
class BoardMemberAdmin(admin.ModelAdmin):
    list_display = ("name", "order", "is_active")
    list_filter = ("is_active",)
    search_fields = ("name",)
    ordering = ("order", "name")
