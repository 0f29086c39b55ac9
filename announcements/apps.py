"""
announcements/apps.py

AppConfig for the Announcements app.

Why this app exists
-------------------
Everything the public site shows that an operator edits:

1) announcements: timed, prioritized messages shown as a modal or a
   minimized floating button, one per visitor at a time
2) programs and board members: plain listings with built-in fallbacks

Push delivery lives in the notifications app; this app only decides what a
visitor sees.
"""
from django.apps import AppConfig


class AnnouncementsConfig(AppConfig):
    name = "announcements"
    verbose_name = "Announcements, Programs & Board"
