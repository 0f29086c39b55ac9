import re
from unittest import mock

from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from notifications.background import reset_handler
from notifications.exceptions import RelayResponseError, RelayUnavailable
from notifications.relay import WipeResult

User = get_user_model()


class RelayPatchMixin:
    def patch_relay(self):
        patcher = mock.patch("notifications.views.PushRelayClient")
        relay_cls = patcher.start()
        self.addCleanup(patcher.stop)
        return relay_cls.from_settings.return_value


class VisitorSubscriptionTests(RelayPatchMixin, APITestCase):
    """
    Visitor subscription:
      - visitor id is created once per session and reused
      - relay failures surface as {"detail"} with the relay status
      - unsubscribe clears the local flags even when the relay call fails
    """

    def setUp(self):
        self.client = APIClient()
        self.relay = self.patch_relay()
        self.relay.store_token.return_value = {"success": True}

    def test_subscribe_then_status(self):
        r = self.client.post("/api/notifications/subscribe/", {"fcmToken": "tok-1"}, format="json", HTTP_USER_AGENT="Safari")
        self.assertEqual(r.status_code, status.HTTP_201_CREATED, r.data)
        subscriber_id = r.data["subscriberId"]
        self.assertRegex(subscriber_id, r"^visitor_\d+_[0-9a-z]{9}$")

        args, kwargs = self.relay.store_token.call_args
        self.assertEqual(args, (subscriber_id, "tok-1"))
        self.assertEqual(kwargs["user_type"], "visitor")
        self.assertEqual(kwargs["user_agent"], "Safari")

        r = self.client.get("/api/notifications/status/")
        self.assertEqual(r.data, {"notificationsEnabled": True, "subscriberId": subscriber_id})

        # same browser, same id
        self.client.post("/api/notifications/subscribe/", {"fcmToken": "tok-2"}, format="json")
        self.assertEqual(self.relay.store_token.call_args.args[0], subscriber_id)

    def test_subscribe_relay_failure(self):
        self.relay.store_token.side_effect = RelayResponseError("Push relay returned an HTML page instead of JSON.")
        r = self.client.post("/api/notifications/subscribe/", {"fcmToken": "tok"}, format="json")
        self.assertEqual(r.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertIn("HTML", r.data["detail"])

        r = self.client.get("/api/notifications/status/")
        self.assertFalse(r.data["notificationsEnabled"])

    def test_subscribe_requires_token(self):
        r = self.client.post("/api/notifications/subscribe/", {}, format="json")
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unsubscribe(self):
        self.client.post("/api/notifications/subscribe/", {"fcmToken": "tok"}, format="json")
        self.relay.remove_token.return_value = False

        r = self.client.delete("/api/notifications/subscribe/")
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(r.data, {"removed": False, "notificationsEnabled": False})
        self.assertTrue(self.relay.remove_token.called)

        r = self.client.get("/api/notifications/status/")
        self.assertFalse(r.data["notificationsEnabled"])


class DeliveryEndpointTests(APITestCase):
    """Background delivery, foreground banner and click routing over HTTP."""

    def setUp(self):
        reset_handler()
        self.addCleanup(reset_handler)

    def test_background_then_duplicate(self):
        body = {"payload": {"notification": {"title": "Hi"}, "data": {"timestamp": "t-1"}}, "focused": False}

        r = self.client.post("/api/notifications/background/", body, format="json")
        self.assertEqual(r.status_code, status.HTTP_200_OK, r.data)
        self.assertEqual(r.data["type"], "SHOW_NOTIFICATION")
        self.assertEqual(r.data["title"], "Hi")

        r = self.client.post("/api/notifications/background/", body, format="json")
        self.assertEqual(r.status_code, status.HTTP_204_NO_CONTENT)

    def test_focused_page_gets_banner(self):
        body = {"payload": {"notification": {"title": "Hi", "body": "There"}}, "focused": True}
        r = self.client.post("/api/notifications/background/", body, format="json")
        self.assertEqual(r.data, {"type": "SHOW_BANNER", "title": "Hi", "body": "There", "timeoutSeconds": 8})

    def test_click_routes(self):
        r = self.client.post("/api/notifications/click/", {"action": "dismiss"}, format="json")
        self.assertEqual(r.data, {"type": "DISMISS"})

        r = self.client.post(
            "/api/notifications/click/",
            {"action": "view", "data": {"click_action": "https://site.example/", "announcement": {"id": 3}}},
            format="json",
        )
        self.assertEqual(r.data["type"], "OPEN_WINDOW")
        self.assertTrue(r.data["url"].endswith("showAnnouncement=3"))


class PushAdminTests(RelayPatchMixin, APITestCase):
    """Staff-only relay maintenance: stats, token analysis, wipe, remove."""

    def setUp(self):
        self.relay = self.patch_relay()
        staff = User.objects.create_user(username="ops", password="pass1234", is_staff=True)
        self.client = APIClient()
        self.client.force_authenticate(staff)

    def test_requires_staff(self):
        user = User.objects.create_user(username="visitor", password="pass1234")
        other = APIClient()
        other.force_authenticate(user)
        self.assertEqual(other.get("/api/push/stats/").status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(APIClient().post("/api/push/wipe-tokens/", {"confirm": "DELETE"}, format="json").status_code, status.HTTP_401_UNAUTHORIZED)

    def test_stats_summary(self):
        self.relay.subscriber_count.return_value = 1
        r = self.client.get("/api/push/stats/")
        self.assertEqual(r.data, {"subscriberCount": 1, "summary": "Will notify 1 subscriber"})

        self.relay.subscriber_count.return_value = 0
        r = self.client.get("/api/push/stats/")
        self.assertEqual(r.data["summary"], "No subscribers yet. Users need to enable notifications first.")

    def test_debug_tokens(self):
        self.relay.debug_tokens.return_value = {
            "tokens": [
                {"userId": "a", "platform": "iOS", "deviceInfo": "iPhone"},
                {"userId": "b", "platform": "iOS", "deviceInfo": "iPhone"},
            ]
        }
        r = self.client.get("/api/push/debug-tokens/")
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(r.data["summary"], {"totalTokens": 2})
        self.assertIn("iPhone_iOS", r.data["duplicates"])
        self.assertIn("=== POTENTIAL DUPLICATES ===", r.data["report"])

    def test_debug_tokens_relay_down(self):
        self.relay.debug_tokens.side_effect = RelayUnavailable()
        r = self.client.get("/api/push/debug-tokens/")
        self.assertEqual(r.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(r.data["detail"].code, "push_relay_unavailable")

    def test_wipe_requires_confirmation_word(self):
        r = self.client.post("/api/push/wipe-tokens/", {"confirm": "yes"}, format="json")
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
        self.relay.wipe_all_tokens.assert_not_called()

        self.relay.wipe_all_tokens.return_value = WipeResult(True, 5, 5, "2025-01-01T00:00:00Z", "All tokens deleted")
        r = self.client.post("/api/push/wipe-tokens/", {"confirm": "DELETE"}, format="json")
        self.assertEqual(r.status_code, status.HTTP_200_OK, r.data)
        self.assertEqual(r.data["deleted"], 5)
        self.assertTrue(re.search(r"Tokens Deleted: 5/5", r.data["report"]))

    def test_remove_token(self):
        self.relay.remove_token.return_value = True
        r = self.client.delete("/api/push/tokens/visitor_1_abc/")
        self.assertEqual(r.data, {"removed": True})
        self.relay.remove_token.assert_called_once_with("visitor_1_abc")
