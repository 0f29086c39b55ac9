"""
Management command: push_wipe_tokens
------------------------------------

Deletes EVERY push token stored by the relay. Subscribers must re-enable
notifications afterwards. Asks for the word DELETE unless --yes is given.

Usage:
    python manage.py push_wipe_tokens
    python manage.py push_wipe_tokens --yes
"""
from django.core.management.base import BaseCommand, CommandError

from notifications.diagnostics import render_wipe_report
from notifications.exceptions import PushRelayError
from notifications.relay import PushRelayClient


class Command(BaseCommand):
    help = "Delete all push tokens stored by the relay (cannot be undone)."

    def add_arguments(self, parser):
        parser.add_argument("--yes", action="store_true", help="Skip the DELETE confirmation prompt")

    def handle(self, *args, **options):
        if not options["yes"]:
            answer = input('This permanently deletes all notification subscribers. Type "DELETE" to confirm: ')
            if answer.strip() != "DELETE":
                self.stdout.write("Aborted.")
                return

        try:
            result = PushRelayClient.from_settings().wipe_all_tokens()
        except PushRelayError as exc:
            raise CommandError(f"Failed to wipe tokens: {exc}") from exc

        self.stdout.write(render_wipe_report(result))
        self.stdout.write(self.style.SUCCESS(f"All {result.deleted} push tokens have been wiped."))
