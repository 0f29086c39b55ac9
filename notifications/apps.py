"""
notifications/apps.py

AppConfig for the Notifications app.

Why this app exists
-------------------
Everything between the site and the push relay lives here:

1) the relay client (store-token, send-push, stats, debug, wipe, remove)
2) publish-then-push for announcements, with the delivery audit patch
3) the background handler: duplicate suppression, OS notification shape,
   notification-click routing, foreground banners
4) visitor push subscription bound to the session

The app owns no tables; device tokens belong to the relay.
"""
from django.apps import AppConfig


class NotificationsConfig(AppConfig):
    name = "notifications"
    verbose_name = "Push Notifications"
