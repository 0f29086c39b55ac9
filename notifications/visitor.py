"""
notifications/visitor.py

Anonymous visitor subscriptions. A visitor is identified by an id kept in
their session (`visitor_<epoch ms>_<9 base36 chars>`); that id is the userId
the relay stores the device token under.
"""
import logging
import secrets
import string
import time

from django.utils import timezone

from .relay import PushRelayClient

logger = logging.getLogger(__name__)

VISITOR_ID_KEY = "visitor_id"
ENABLED_KEY = "notificationsEnabled"
TOKEN_KEY = "fcmToken"
SUBSCRIBER_KEY = "subscriberId"

_BASE36 = string.digits + string.ascii_lowercase


def new_visitor_id() -> str:
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"visitor_{int(time.time() * 1000)}_{suffix}"


def visitor_id(session) -> str:
    value = session.get(VISITOR_ID_KEY)
    if not value:
        value = new_visitor_id()
        session[VISITOR_ID_KEY] = value
    return value


def is_subscribed(session) -> bool:
    return session.get(ENABLED_KEY) is True


def subscribe_visitor(session, fcm_token: str, user_agent: str = "", relay=None) -> dict:
    """Register the device token with the relay; relay errors propagate."""
    relay = relay or PushRelayClient.from_settings()
    user_id = visitor_id(session)
    relay.store_token(
        user_id,
        fcm_token,
        user_type="visitor",
        subscribed_at=timezone.now().isoformat(),
        user_agent=user_agent or None,
    )
    session[ENABLED_KEY] = True
    session[TOKEN_KEY] = fcm_token
    session[SUBSCRIBER_KEY] = user_id
    logger.info("Visitor %s subscribed to notifications", user_id)
    return {"subscriberId": user_id, "notificationsEnabled": True}


def unsubscribe_visitor(session, relay=None) -> bool:
    user_id = session.get(SUBSCRIBER_KEY) or session.get(VISITOR_ID_KEY)
    removed = False
    if user_id:
        relay = relay or PushRelayClient.from_settings()
        removed = relay.remove_token(user_id)
    for key in (ENABLED_KEY, TOKEN_KEY, SUBSCRIBER_KEY):
        session.pop(key, None)
    return removed
