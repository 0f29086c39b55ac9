"""
announcements/views.py

Endpoints:
- /api/announcements/                 (admin CRUD; POST publishes, optionally with push)
- /api/announcements/active/          (GET; public) what this visitor should see now
- /api/announcements/show/            (POST; public) force-show a SHOW_ANNOUNCEMENT payload
- /api/announcements/bell/            (POST; public) bell count + announcement to re-surface
- /api/announcements/position/        (GET/PUT; public) floating button position
- /api/announcements/{id}/minimize/   (POST; public)
- /api/announcements/{id}/expand/     (POST; public)
- /api/announcements/{id}/close/      (POST; public)
- /api/programs/, /api/board-members/ (admin CRUD)
- /api/site/programs/, /api/site/board/ (GET; public, with fallback content)

Display state (closed-list, minimized flags, button position) lives in the
visitor's session; see display_state.py.

Admin filtering:
- priority=low|medium|high
- is_active=true|false
- search=free text (title, message)
- ordering=-created_at (default), priority, expiry_date
"""
import logging

from django.db import DatabaseError
from django_filters import rest_framework as dj_filters
from rest_framework import filters, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

# Swagger / OpenAPI
from drf_yasg.utils import no_body, swagger_auto_schema
from drf_yasg import openapi

from notifications.services import publish_announcement

from .deeplink import DEEP_LINK_PARAM, consume_deep_link
from .display_state import DisplayPhase, VisitorDisplayState
from .fallbacks import FALLBACK_BOARD, FALLBACK_PROGRAMS
from .manager import AnnouncementManager
from .models import Announcement, BoardMember, Program
from .priority import Priority
from .serializers import (
    AnnouncementSerializer,
    BellSerializer,
    BoardMemberSerializer,
    PositionSerializer,
    ProgramSerializer,
    PublicAnnouncementSerializer,
    PublicBoardMemberSerializer,
    PublicProgramSerializer,
    ShowAnnouncementMessageSerializer,
)

logger = logging.getLogger(__name__)

PUBLIC_ACTIONS = {"active", "show", "bell", "position", "minimize", "expand", "close"}


def _manager(request) -> AnnouncementManager:
    return AnnouncementManager(VisitorDisplayState(request.session))


def _public(announcement):
    return PublicAnnouncementSerializer(announcement).data if announcement is not None else None


# ----------------------------------------------------------------------------- #
# Filters                                                                       #
# ----------------------------------------------------------------------------- #
class AnnouncementFilter(dj_filters.FilterSet):
    priority = dj_filters.ChoiceFilter(field_name="priority", choices=Priority.choices)
    is_active = dj_filters.BooleanFilter(field_name="is_active")

    class Meta:
        model = Announcement
        fields = ["priority", "is_active"]


# ----------------------------------------------------------------------------- #
# Announcements                                                                 #
# ----------------------------------------------------------------------------- #
class AnnouncementViewSet(viewsets.ModelViewSet):
    """
    Admin CRUD for announcements plus the visitor-facing display endpoints.

    Security: CRUD is staff-only. The display actions are public and only
    ever touch the caller's own session.
    """
    queryset = Announcement.objects.all()
    serializer_class = AnnouncementSerializer
    permission_classes = [permissions.IsAdminUser]

    filter_backends = [dj_filters.DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_class = AnnouncementFilter
    search_fields = ["title", "message"]
    ordering_fields = ["created_at", "priority", "expiry_date"]
    ordering = ["-created_at"]

    def get_permissions(self):
        if self.action in PUBLIC_ACTIONS:
            return [permissions.AllowAny()]
        return super().get_permissions()

    # ---- publish -------------------------------------------------------------
    @swagger_auto_schema(
        tags=["Announcements"],
        operation_description=(
            "Publish an announcement (staff only).\n\n"
            "With `send_push: true` and `is_active: true` a push goes out after the "
            "row is saved. A failed push never undoes the save: the response carries "
            "`push` (outcome) and `messages.success` / `messages.error` separately."
        ),
        request_body=AnnouncementSerializer,
        responses={201: openapi.Response("Created", AnnouncementSerializer), 400: "Bad Request", 403: "Forbidden"},
    )
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = request.user
        result = publish_announcement(
            serializer,
            send_push=serializer.validated_data.get("send_push", False),
            published_by=getattr(user, "email", "") or getattr(user, "username", "") or "admin",
        )
        data = dict(self.get_serializer(result.announcement).data)
        data["push"] = result.push.as_dict()
        data["messages"] = result.messages
        return Response(data, status=status.HTTP_201_CREATED)

    # ---- visitor display -----------------------------------------------------
    @swagger_auto_schema(
        method="get",
        tags=["Announcements (public)"],
        operation_description=(
            "The announcement this visitor should see now.\n\n"
            "Highest priority wins, newer first on ties; expired and closed ones are "
            f"skipped. `?{DEEP_LINK_PARAM}=<id>` forces that announcement when it is "
            "still active and not expired; the page must then strip the parameter."
        ),
        manual_parameters=[
            openapi.Parameter(DEEP_LINK_PARAM, openapi.IN_QUERY, type=openapi.TYPE_STRING,
                              description="Announcement id from a notification click (single use)"),
        ],
        responses={200: "OK"},
    )
    @action(detail=False, methods=["get"])
    def active(self, request):
        manager = _manager(request)
        requested_id, _ = consume_deep_link(request.get_full_path())
        selection = manager.load_active_announcement()

        body = {
            "announcement": None,
            "display": DisplayPhase.HIDDEN.value,
            "source": "selection",
            "count": selection.count,
            "available": [_public(a) for a in selection.available],
            "deep_link": None,
        }

        if requested_id is not None:
            linked = manager.load_specific(requested_id)
            body["deep_link"] = {"id": requested_id, "found": linked is not None, "strip": DEEP_LINK_PARAM}
            if linked is not None:
                body.update(
                    announcement=_public(linked),
                    display=manager.show_specific(linked.id).value,
                    source="deep_link",
                )
                return Response(body)

        if selection.current is not None:
            body["announcement"] = _public(selection.current)
            body["display"] = manager.display_mode(selection.current.id).value
        return Response(body)

    @swagger_auto_schema(
        method="post",
        tags=["Announcements (public)"],
        operation_description=(
            "Handle a `SHOW_ANNOUNCEMENT` message forwarded from a notification click. "
            "The announcement is shown even if this visitor closed it before."
        ),
        request_body=ShowAnnouncementMessageSerializer,
        responses={200: "OK", 400: "Bad Request"},
    )
    @action(detail=False, methods=["post"])
    def show(self, request):
        serializer = ShowAnnouncementMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        announcement = serializer.validated_data["announcement"]
        phase = _manager(request).show_specific(announcement["id"])
        return Response({"announcement": announcement, "display": phase.value})

    @swagger_auto_schema(
        method="post",
        tags=["Announcements (public)"],
        operation_description=(
            "Bell click. `count` includes announcements this visitor closed. Re-surfaces "
            "`current` when still valid, else the highest-priority valid one, and clears "
            "its minimized flag for this visitor."
        ),
        request_body=BellSerializer,
        responses={200: "OK", 400: "Bad Request"},
    )
    @action(detail=False, methods=["post"])
    def bell(self, request):
        serializer = BellSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        current = serializer.validated_data.get("current") or None
        selection, chosen = _manager(request).ring_bell(current)
        return Response({
            "count": selection.count,
            "announcement": _public(chosen),
            "display": (DisplayPhase.SHOWN if chosen is not None else DisplayPhase.HIDDEN).value,
        })

    @swagger_auto_schema(method="get", tags=["Announcements (public)"], responses={200: "OK"})
    @swagger_auto_schema(
        method="put",
        tags=["Announcements (public)"],
        operation_description="Remember where the floating button was dragged.",
        request_body=PositionSerializer,
        responses={200: "OK", 400: "Bad Request"},
    )
    @action(detail=False, methods=["get", "put"])
    def position(self, request):
        state = VisitorDisplayState(request.session)
        if request.method == "PUT":
            serializer = PositionSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            return Response(state.save_position(serializer.validated_data["x"], serializer.validated_data["y"]))
        return Response(state.position() or {"x": None, "y": None})

    @swagger_auto_schema(method="post", tags=["Announcements (public)"], request_body=no_body, responses={200: "OK"})
    @action(detail=True, methods=["post"])
    def minimize(self, request, pk=None):
        return Response({"id": pk, "display": _manager(request).minimize(pk).value})

    @swagger_auto_schema(method="post", tags=["Announcements (public)"], request_body=no_body, responses={200: "OK"})
    @action(detail=True, methods=["post"])
    def expand(self, request, pk=None):
        return Response({"id": pk, "display": _manager(request).expand(pk).value})

    @swagger_auto_schema(
        method="post",
        tags=["Announcements (public)"],
        operation_description="Close for this visitor; it will not auto-display again.",
        request_body=no_body,
        responses={200: "OK"},
    )
    @action(detail=True, methods=["post"])
    def close(self, request, pk=None):
        return Response({"id": pk, "display": _manager(request).close(pk).value})


# ----------------------------------------------------------------------------- #
# Programs & board (admin CRUD)                                                 #
# ----------------------------------------------------------------------------- #
class ProgramViewSet(viewsets.ModelViewSet):
    queryset = Program.objects.all()
    serializer_class = ProgramSerializer
    permission_classes = [permissions.IsAdminUser]
    filterset_fields = ["is_active"]
    search_fields = ["name", "timing"]
    ordering_fields = ["created_at", "name"]
    ordering = ["-created_at"]


class BoardMemberViewSet(viewsets.ModelViewSet):
    queryset = BoardMember.objects.all()
    serializer_class = BoardMemberSerializer
    permission_classes = [permissions.IsAdminUser]
    filterset_fields = ["is_active"]
    search_fields = ["name"]
    ordering_fields = ["order", "name", "created_at"]
    ordering = ["order", "name"]


# ----------------------------------------------------------------------------- #
# Public site listings (with fallback)                                          #
# ----------------------------------------------------------------------------- #
class PublicProgramsView(APIView):
    """Active programs, oldest first. Falls back to built-in content when empty or unreachable."""
    permission_classes = [permissions.AllowAny]

    @swagger_auto_schema(tags=["Site"], responses={200: "OK"})
    def get(self, request):
        try:
            programs = list(Program.objects.filter(is_active=True).order_by("created_at"))
        except DatabaseError:
            logger.exception("Error loading programs")
            programs = []
        if not programs:
            return Response({"items": FALLBACK_PROGRAMS, "fallback": True})
        return Response({"items": PublicProgramSerializer(programs, many=True).data, "fallback": False})


class PublicBoardView(APIView):
    """Active board members by display order (missing order sorts last)."""
    permission_classes = [permissions.AllowAny]

    @swagger_auto_schema(tags=["Site"], responses={200: "OK"})
    def get(self, request):
        try:
            members = list(BoardMember.objects.filter(is_active=True))
        except DatabaseError:
            logger.exception("Error loading board members")
            members = []
        if not members:
            return Response({"items": FALLBACK_BOARD, "fallback": True})
        members.sort(key=lambda m: (m.display_order, m.name))
        return Response({"items": PublicBoardMemberSerializer(members, many=True).data, "fallback": False})
