"""
urls.py — Root URL configuration for the Community Backend

Purpose
===============================================================================
- Wire Django admin, the app URLconfs and auth endpoints.
- Provide JWT auth endpoints for operators (login, refresh, logout, me).
- Provide interactive API docs:
    * /api/docs/   → Swagger UI
    * /api/schema/ → OpenAPI JSON (machine-readable)

Notes
- announcements.urls: announcement CRUD + visitor display actions, programs,
  board members, public site listings.
- notifications.urls: visitor subscription, push delivery/click handling,
  admin relay maintenance.
- Auth views are centralized in accounts.auth_views.
"""

from django.conf import settings
from django.contrib import admin
from django.shortcuts import redirect
from django.urls import include, path
from rest_framework import permissions

# Auth endpoints (centralized)
from accounts.auth_views import (
    AuthMeView,
    EmailTokenObtainPairView,
    TokenRefreshTaggedView,
    logout as jwt_logout,
)

# ----------------------------------------------------------------------------- #
# API Docs (Swagger/OpenAPI via drf-yasg)                                       #
# ----------------------------------------------------------------------------- #
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

schema_view = get_schema_view(
    openapi.Info(
        title="Community Site API",
        default_version="v1",
        description=(
            "Announcements, programs, board members and push notifications for the public site. "
            "Admin endpoints use JWT (Bearer) tokens: click 'Authorize' and paste: Bearer <ACCESS_TOKEN>. "
            "Visitor endpoints are public and keep their display state in the session."
        ),
    ),
    public=True,
    permission_classes=[permissions.AllowAny],
)

# ----------------------------------------------------------------------------- #
# URL Patterns                                                                  #
# ----------------------------------------------------------------------------- #
urlpatterns = [
    # tiny root view that redirects to the FE (configurable per env)
    path("", lambda r: redirect(settings.FRONTEND_URL), name="root-redirect"),

    path("admin/", admin.site.urls),

    # Auth (JWT)
    path("api/auth/login/",   EmailTokenObtainPairView.as_view(), name="auth_login"),
    path("api/auth/refresh/", TokenRefreshTaggedView.as_view(),   name="auth_refresh_create"),
    path("api/auth/logout/",  jwt_logout,                         name="logout"),
    path("api/auth/me/",      AuthMeView.as_view(),               name="auth-me"),

    # API docs
    path("api/docs/",   schema_view.with_ui("swagger", cache_timeout=0), name="api-docs-swagger"),
    path("api/schema/", schema_view.without_ui(cache_timeout=0),         name="openapi-schema"),

    path("api/", include("notifications.urls", namespace="notifications")),
    path("api/", include("announcements.urls", namespace="announcements")),
]
