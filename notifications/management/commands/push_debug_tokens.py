"""
Management command: push_debug_tokens
-------------------------------------

Prints the relay's token analysis (tokens per platform, likely duplicate
devices). Same report as GET /api/push/debug-tokens/.

Usage:
    python manage.py push_debug_tokens
"""
from django.core.management.base import BaseCommand, CommandError

from notifications.diagnostics import analyze_tokens, render_token_report
from notifications.exceptions import PushRelayError
from notifications.relay import PushRelayClient


class Command(BaseCommand):
    help = "Print stored push tokens grouped by platform, with likely duplicates."

    def handle(self, *args, **options):
        try:
            data = PushRelayClient.from_settings().debug_tokens()
        except PushRelayError as exc:
            raise CommandError(f"Error analyzing tokens: {exc}") from exc
        self.stdout.write(render_token_report(analyze_tokens(data)))
