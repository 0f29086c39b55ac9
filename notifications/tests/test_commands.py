from io import StringIO
from unittest import mock

import pytest
from django.core.management import CommandError, call_command

from notifications.exceptions import RelayUnavailable
from notifications.relay import WipeResult


@pytest.fixture
def relay():
    with mock.patch("notifications.relay.PushRelayClient.from_settings") as from_settings:
        yield from_settings.return_value


def test_debug_tokens_prints_report(relay):
    relay.debug_tokens.return_value = {"tokens": [{"userId": "a", "platform": "Web"}]}
    out = StringIO()
    call_command("push_debug_tokens", stdout=out)
    assert "--- Web TOKENS (1) ---" in out.getvalue()


def test_debug_tokens_relay_error(relay):
    relay.debug_tokens.side_effect = RelayUnavailable()
    with pytest.raises(CommandError):
        call_command("push_debug_tokens", stdout=StringIO())


def test_wipe_aborts_without_confirmation(relay):
    out = StringIO()
    with mock.patch("builtins.input", return_value="no"):
        call_command("push_wipe_tokens", stdout=out)
    relay.wipe_all_tokens.assert_not_called()
    assert "Aborted." in out.getvalue()


def test_wipe_with_yes(relay):
    relay.wipe_all_tokens.return_value = WipeResult(True, 2, 2, None, "ok")
    out = StringIO()
    call_command("push_wipe_tokens", "--yes", stdout=out)
    assert "Tokens Deleted: 2/2" in out.getvalue()
