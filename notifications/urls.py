"""
notifications/urls.py

Include under the global /api/ prefix.
"""
from django.urls import path

from .views import (
    BackgroundMessageView,
    DebugTokensView,
    NotificationClickView,
    NotificationStatusView,
    PushStatsView,
    RemoveTokenView,
    SubscribeView,
    WipeTokensView,
)

app_name = "notifications"

urlpatterns = [
    path("notifications/subscribe/", SubscribeView.as_view(), name="subscribe"),
    path("notifications/status/", NotificationStatusView.as_view(), name="status"),
    path("notifications/background/", BackgroundMessageView.as_view(), name="background"),
    path("notifications/click/", NotificationClickView.as_view(), name="click"),
    path("push/stats/", PushStatsView.as_view(), name="push-stats"),
    path("push/debug-tokens/", DebugTokensView.as_view(), name="push-debug-tokens"),
    path("push/wipe-tokens/", WipeTokensView.as_view(), name="push-wipe-tokens"),
    path("push/tokens/<str:user_id>/", RemoveTokenView.as_view(), name="push-remove-token"),
]
