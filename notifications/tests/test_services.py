from unittest import mock

import pytest
from django.db import DatabaseError

from announcements.models import Announcement
from announcements.serializers import AnnouncementSerializer
from notifications.exceptions import RelayPermissionError
from notifications.relay import SendResult
from notifications.services import publish_announcement, subscriber_summary


def serializer_for(**data):
    data = {"title": "Title", "message": "Message", **data}
    serializer = AnnouncementSerializer(data=data)
    assert serializer.is_valid(), serializer.errors
    return serializer


@pytest.mark.django_db
def test_persists_before_pushing():
    relay = mock.Mock()

    def check_saved(*args):
        assert Announcement.objects.filter(title="Title").exists()
        return SendResult(sent=3, failed=0)

    relay.send_push.side_effect = check_saved

    result = publish_announcement(serializer_for(), send_push=True, relay=relay, published_by="ops@example.org")

    assert result.push.sent and result.push.recipients == 3
    assert result.announcement.published_by == "ops@example.org"


@pytest.mark.django_db
def test_push_failure_is_recorded_not_raised():
    relay = mock.Mock()
    relay.send_push.side_effect = RelayPermissionError()

    result = publish_announcement(serializer_for(), send_push=True, relay=relay)

    assert result.push.attempted and not result.push.sent
    assert result.messages["error"] == "⚠️ Push notification error: Push relay rejected the API key."
    stored = Announcement.objects.get(pk=result.announcement.pk)
    assert stored.push_sent is False
    assert stored.push_error == "Push relay rejected the API key."


@pytest.mark.django_db
def test_audit_patch_failure_is_only_logged():
    relay = mock.Mock()
    relay.send_push.return_value = SendResult(sent=1, failed=0)

    with mock.patch("notifications.services.Announcement.objects.filter", side_effect=DatabaseError("locked")), \
            mock.patch("notifications.services.logger") as logger:
        result = publish_announcement(serializer_for(), send_push=True, relay=relay)

    assert result.push.sent
    assert result.announcement.push_recipients == 1
    assert logger.exception.called


@pytest.mark.django_db
def test_no_push_requested():
    relay = mock.Mock()
    result = publish_announcement(serializer_for(), send_push=False, relay=relay)
    assert not result.push.attempted
    relay.send_push.assert_not_called()


def test_subscriber_summary():
    assert subscriber_summary(2) == "Will notify 2 subscribers"
    assert subscriber_summary(1) == "Will notify 1 subscriber"
    assert subscriber_summary(0) == "No subscribers yet. Users need to enable notifications first."
