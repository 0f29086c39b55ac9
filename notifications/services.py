"""
notifications/services.py

Publishing an announcement: persist first, then push, then record how the
push went on the stored row.

- The push is only attempted when the operator asked for it AND the
  announcement is active.
- A failed push never undoes the save. The operator gets a success message
  for the save and a separate error message for the push.
- Writing the push audit fields is best effort; a failure there is logged
  and the response still reflects the push outcome.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

from django.db import DatabaseError
from django.utils import timezone

from announcements.models import Announcement

from .exceptions import PushRelayError
from .relay import PushRelayClient

logger = logging.getLogger(__name__)


@dataclass
class PushOutcome:
    attempted: bool = False
    sent: bool = False
    recipients: int = 0
    failed: int = 0
    error: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "attempted": self.attempted,
            "sent": self.sent,
            "recipients": self.recipients,
            "failed": self.failed,
            "error": self.error,
        }


@dataclass
class PublishResult:
    announcement: Announcement
    push: PushOutcome = field(default_factory=PushOutcome)

    @property
    def messages(self) -> dict:
        """Operator-facing text: persistence and push reported separately."""
        if not self.push.attempted:
            return {"success": "✅ Announcement published successfully!", "error": None}
        if self.push.sent:
            return {
                "success": f"✅ Announcement published and sent to {self.push.recipients} subscribers!",
                "error": None,
            }
        return {
            "success": "✅ Announcement published (push notification failed)",
            "error": f"⚠️ Push notification error: {self.push.error}",
        }


def _patch_audit_fields(announcement: Announcement, **fields) -> None:
    for name, value in fields.items():
        setattr(announcement, name, value)
    try:
        Announcement.objects.filter(pk=announcement.pk).update(**fields)
    except DatabaseError:
        logger.exception("Could not record push status on announcement %s", announcement.pk)


def publish_announcement(serializer, send_push: bool, relay: Optional[PushRelayClient] = None, published_by: str = "admin") -> PublishResult:
    announcement = serializer.save(published_by=published_by or "admin")
    result = PublishResult(announcement=announcement)

    if not (send_push and announcement.is_active):
        logger.info("Announcement %s published without push", announcement.pk)
        return result

    relay = relay or PushRelayClient.from_settings()
    result.push.attempted = True
    try:
        sent = relay.send_push(announcement.title, announcement.message, announcement.priority)
    except PushRelayError as exc:
        result.push.error = str(exc.detail)
        logger.warning("Push for announcement %s failed: %s", announcement.pk, result.push.error)
        _patch_audit_fields(
            announcement,
            push_sent=False,
            push_error=result.push.error,
            push_attempted_at=timezone.now(),
        )
        return result

    result.push.sent = True
    result.push.recipients = sent.sent
    result.push.failed = sent.failed
    logger.info("Announcement %s pushed: %s sent, %s failed", announcement.pk, sent.sent, sent.failed)
    _patch_audit_fields(
        announcement,
        push_sent=True,
        push_sent_at=timezone.now(),
        push_recipients=sent.sent,
        push_failed=sent.failed,
    )
    return result


def subscriber_summary(count: int) -> str:
    if count > 0:
        return f"Will notify {count} subscriber{'' if count == 1 else 's'}"
    return "No subscribers yet. Users need to enable notifications first."
