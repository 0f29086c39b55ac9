"""
announcements/models.py

Data model for the public site content managed from the admin panel:
- Announcement: timed message with priority, active flag and optional expiry,
  plus the push-delivery audit trail written after a push attempt
- Program: recurring programs listed on the home page
- BoardMember: board of directors, shown in display order

Notes & design choices
----------------------
- Updates overwrite in place and deletes are hard deletes; nothing is versioned.
- created_at defaults to "now" but stays writable: it is the ordering and
  tie-break key for announcement selection, and imports keep their own value.
- The push audit fields are only ever patched by the publish flow
  (notifications.services); the admin form never writes them.
- BoardMember.order may be missing on legacy rows; listings sort those as 999.
"""
from django.db import models
from django.utils import timezone

from .priority import Priority

DEFAULT_BOARD_ORDER = 999


class Announcement(models.Model):
    Priority = Priority

    title = models.CharField(max_length=200)
    message = models.TextField()
    priority = models.CharField(max_length=10, choices=Priority.choices, default=Priority.LOW, db_index=True)
    is_active = models.BooleanField(default=True, db_index=True, help_text="Only active announcements are shown or pushed.")
    expiry_date = models.DateTimeField(null=True, blank=True, help_text="Once passed, the announcement is hidden even if active.")
    published_by = models.CharField(max_length=254, blank=True, default="")

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Push delivery audit (set after a push attempt)
    push_sent = models.BooleanField(null=True, blank=True)
    push_sent_at = models.DateTimeField(null=True, blank=True)
    push_recipients = models.PositiveIntegerField(null=True, blank=True)
    push_failed = models.PositiveIntegerField(null=True, blank=True)
    push_error = models.TextField(blank=True, default="")
    push_attempted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"[{self.priority_enum.display_label}] {self.title}"

    @property
    def priority_enum(self) -> Priority:
        return Priority.coerce(self.priority)

    def is_expired(self, now=None) -> bool:
        if not self.expiry_date:
            return False
        return self.expiry_date < (now or timezone.now())

    def is_live(self, now=None) -> bool:
        """Active and not expired: the admin list's "✓ Active"."""
        return bool(self.is_active) and not self.is_expired(now)


class Program(models.Model):
    name = models.CharField(max_length=200)
    timing = models.CharField(max_length=200, help_text="Free text, e.g. 'Thursdays after sunset'.")
    icon = models.CharField(max_length=80, help_text="Icon CSS class, e.g. 'fas fa-calendar-week'.")
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.name


class BoardMember(models.Model):
    name = models.CharField(max_length=200)
    order = models.PositiveIntegerField(null=True, blank=True, default=DEFAULT_BOARD_ORDER)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["order", "name"]

    def __str__(self) -> str:
        return self.name

    @property
    def display_order(self) -> int:
        return self.order if self.order is not None else DEFAULT_BOARD_ORDER
