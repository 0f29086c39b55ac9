"""
announcements/urls.py

Router for announcements, programs and board members, plus the public site
listings. Include this under the global /api/ prefix.
"""
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import (
    AnnouncementViewSet,
    BoardMemberViewSet,
    ProgramViewSet,
    PublicBoardView,
    PublicProgramsView,
)


app_name = "announcements"

router = DefaultRouter()
router.register(r"announcements", AnnouncementViewSet, basename="announcement")
router.register(r"programs", ProgramViewSet, basename="program")
router.register(r"board-members", BoardMemberViewSet, basename="board-member")

urlpatterns = [
    path("", include(router.urls)),
    path("site/programs/", PublicProgramsView.as_view(), name="site-programs"),
    path("site/board/", PublicBoardView.as_view(), name="site-board"),
]
