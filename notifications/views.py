"""
notifications/views.py

Public (visitor) endpoints
- POST   /api/notifications/subscribe/    {fcmToken} → store with the relay
- DELETE /api/notifications/subscribe/    → remove this visitor's token
- GET    /api/notifications/status/       → {notificationsEnabled, subscriberId}
- POST   /api/notifications/background/   {payload, focused} → banner / notification / 204 duplicate
- POST   /api/notifications/click/        {action, data, windows} → DISMISS / FOCUS_WINDOW / OPEN_WINDOW

Admin endpoints (is_staff)
- GET    /api/push/stats/
- GET    /api/push/debug-tokens/
- POST   /api/push/wipe-tokens/           {confirm: "DELETE"}
- DELETE /api/push/tokens/{userId}/

Relay failures are raised as PushRelayError subclasses and rendered by DRF
as {"detail": ...} with the status carried by the exception.
"""
import logging

from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

# Swagger / OpenAPI
from drf_yasg.utils import swagger_auto_schema

from .background import get_handler
from .diagnostics import analyze_tokens, render_token_report, render_wipe_report
from .relay import PushRelayClient
from .serializers import (
    BackgroundMessageSerializer,
    NotificationClickSerializer,
    SubscribeSerializer,
    WipeTokensSerializer,
)
from .services import subscriber_summary
from .visitor import SUBSCRIBER_KEY, is_subscribed, subscribe_visitor, unsubscribe_visitor

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------------- #
# Visitor subscription                                                          #
# ----------------------------------------------------------------------------- #
class SubscribeView(APIView):
    permission_classes = [permissions.AllowAny]

    @swagger_auto_schema(
        tags=["Notifications"],
        operation_description=(
            "Register this browser's push token with the relay.\n\n"
            "The visitor id is created once and kept in the session."
        ),
        request_body=SubscribeSerializer,
        responses={201: "Created", 400: "Bad Request", 502: "Relay error", 503: "Relay not configured"},
    )
    def post(self, request):
        serializer = SubscribeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = subscribe_visitor(
            request.session,
            serializer.validated_data["fcmToken"],
            user_agent=request.META.get("HTTP_USER_AGENT", ""),
            relay=PushRelayClient.from_settings(),
        )
        return Response(result, status=status.HTTP_201_CREATED)

    @swagger_auto_schema(
        tags=["Notifications"],
        operation_description="Stop notifications for this browser.",
        responses={200: "OK"},
    )
    def delete(self, request):
        removed = unsubscribe_visitor(request.session, relay=PushRelayClient.from_settings())
        return Response({"removed": removed, "notificationsEnabled": False})


class NotificationStatusView(APIView):
    permission_classes = [permissions.AllowAny]

    @swagger_auto_schema(tags=["Notifications"], responses={200: "OK"})
    def get(self, request):
        return Response({
            "notificationsEnabled": is_subscribed(request.session),
            "subscriberId": request.session.get(SUBSCRIBER_KEY),
        })


# ----------------------------------------------------------------------------- #
# Delivery & click handling                                                     #
# ----------------------------------------------------------------------------- #
class BackgroundMessageView(APIView):
    permission_classes = [permissions.AllowAny]

    @swagger_auto_schema(
        tags=["Notifications"],
        operation_description=(
            "Decide what an incoming push turns into.\n\n"
            "- focused page → `SHOW_BANNER`\n"
            "- otherwise → `SHOW_NOTIFICATION`\n"
            "- duplicate inside the dedup window → 204"
        ),
        request_body=BackgroundMessageSerializer,
        responses={200: "OK", 204: "Duplicate ignored", 400: "Bad Request"},
    )
    def post(self, request):
        serializer = BackgroundMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        handler = get_handler()
        payload = serializer.validated_data["payload"]

        if serializer.validated_data["focused"]:
            return Response(handler.on_foreground_message(payload).to_dict())

        message = handler.on_background_message(payload, serializer.validated_data.get("received_ms"))
        if message is None:
            return Response(status=status.HTTP_204_NO_CONTENT)
        return Response(message.to_dict())


class NotificationClickView(APIView):
    permission_classes = [permissions.AllowAny]

    @swagger_auto_schema(
        tags=["Notifications"],
        operation_description="Resolve a notification click into a window action.",
        request_body=NotificationClickSerializer,
        responses={200: "OK", 400: "Bad Request"},
    )
    def post(self, request):
        serializer = NotificationClickSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        message = get_handler().on_notification_click(data.get("action"), data.get("data"), data.get("windows"))
        return Response(message.to_dict())


# ----------------------------------------------------------------------------- #
# Admin: relay maintenance                                                      #
# ----------------------------------------------------------------------------- #
class PushStatsView(APIView):
    permission_classes = [permissions.IsAdminUser]

    @swagger_auto_schema(tags=["Push (admin)"], responses={200: "OK", 403: "Forbidden"})
    def get(self, request):
        count = PushRelayClient.from_settings().subscriber_count()
        return Response({"subscriberCount": count, "summary": subscriber_summary(count)})


class DebugTokensView(APIView):
    permission_classes = [permissions.IsAdminUser]

    @swagger_auto_schema(
        tags=["Push (admin)"],
        operation_description="Stored tokens grouped by platform, with likely duplicate devices.",
        responses={200: "OK", 403: "Forbidden", 502: "Relay error"},
    )
    def get(self, request):
        analysis = analyze_tokens(PushRelayClient.from_settings().debug_tokens())
        body = analysis.as_dict()
        body["report"] = render_token_report(analysis)
        return Response(body)


class WipeTokensView(APIView):
    permission_classes = [permissions.IsAdminUser]

    @swagger_auto_schema(
        tags=["Push (admin)"],
        operation_description=(
            "Delete every stored push token. Cannot be undone.\n\n"
            'Body must be `{"confirm": "DELETE"}`.'
        ),
        request_body=WipeTokensSerializer,
        responses={200: "OK", 400: "Bad Request", 403: "Forbidden", 502: "Relay error"},
    )
    def post(self, request):
        serializer = WipeTokensSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = PushRelayClient.from_settings().wipe_all_tokens()
        logger.warning("All push tokens wiped by %s: %s/%s", request.user, result.deleted, result.total)
        return Response({
            "success": result.success,
            "deleted": result.deleted,
            "total": result.total,
            "timestamp": result.timestamp,
            "message": result.message,
            "report": render_wipe_report(result),
        })


class RemoveTokenView(APIView):
    permission_classes = [permissions.IsAdminUser]

    @swagger_auto_schema(
        tags=["Push (admin)"],
        operation_description="Remove one stored token by its relay userId.",
        responses={200: "OK", 403: "Forbidden"},
    )
    def delete(self, request, user_id):
        removed = PushRelayClient.from_settings().remove_token(user_id)
        return Response({"removed": removed})
