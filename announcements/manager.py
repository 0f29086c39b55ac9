"""
announcements/manager.py

AnnouncementManager ties the database, the selection rules and one visitor's
display state together. Views build one per request around the session.

Failure policy: nothing here may break the hosting page. Any database error
while loading is logged and treated as "no announcement to show".
"""
import logging

from django.db import DatabaseError
from django.utils import timezone

from .display_state import DisplayPhase, VisitorDisplayState
from .models import Announcement
from .selection import Selection, pick_for_bell, select_announcement

logger = logging.getLogger(__name__)


class AnnouncementManager:
    def __init__(self, state: VisitorDisplayState, now=None):
        self.state = state
        self.now = now or timezone.now()

    def load_active_announcement(self) -> Selection:
        try:
            active = list(Announcement.objects.filter(is_active=True).order_by("-created_at"))
        except DatabaseError:
            logger.exception("Error loading announcements")
            return Selection()
        return select_announcement(active, self.state.closed_ids(), self.now)

    def load_specific(self, announcement_id):
        """Deep-link lookup: must still exist, be active and not be expired."""
        try:
            announcement = Announcement.objects.filter(pk=announcement_id).first()
        except (ValueError, TypeError):
            logger.info("Ignoring malformed announcement id %r", announcement_id)
            return None
        except DatabaseError:
            logger.exception("Error loading announcement %s", announcement_id)
            return None
        if announcement is None:
            logger.info("Deep-linked announcement %s does not exist", announcement_id)
            return None
        if not announcement.is_active:
            logger.info("Deep-linked announcement %s is not active", announcement_id)
            return None
        if announcement.is_expired(self.now):
            logger.info("Deep-linked announcement %s is expired", announcement_id)
            return None
        return announcement

    def show_specific(self, announcement_id) -> DisplayPhase:
        # Forced display ignores the closed-list and any minimized flag.
        return self.state.expand(announcement_id)

    def display_mode(self, announcement_id) -> DisplayPhase:
        if self.state.is_minimized(announcement_id):
            return DisplayPhase.MINIMIZED
        return DisplayPhase.SHOWN

    def ring_bell(self, current_id=None):
        selection = self.load_active_announcement()
        chosen = pick_for_bell(selection.available, current_id)
        if chosen is not None:
            self.state.expand(chosen.id)
        return selection, chosen

    def minimize(self, announcement_id) -> DisplayPhase:
        return self.state.minimize(announcement_id)

    def expand(self, announcement_id) -> DisplayPhase:
        return self.state.expand(announcement_id)

    def close(self, announcement_id) -> DisplayPhase:
        return self.state.close(announcement_id)
