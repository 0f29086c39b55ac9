import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError
from django.utils.dateparse import parse_datetime

from announcements.models import Announcement, BoardMember, Program
from announcements.priority import Priority


class Command(BaseCommand):
    help = "Seed announcements, programs and board members from a JSON file."

    def add_arguments(self, parser):
        parser.add_argument("json_path", type=str, help="Path to a JSON file with announcements/programs/board keys")

    def handle(self, *args, **opts):
        path = Path(opts["json_path"])
        if not path.exists():
            raise CommandError(f"File not found: {path}")
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except ValueError as exc:
            raise CommandError(f"Invalid JSON in {path}: {exc}") from exc
        if isinstance(data, list):
            data = {"announcements": data}

        created = 0
        for x in data.get("announcements", []):
            _, made = Announcement.objects.get_or_create(
                title=x.get("title", ""),
                defaults=dict(
                    message=x.get("message", ""),
                    priority=Priority.coerce(x.get("priority")).value,
                    is_active=x.get("is_active", True),
                    expiry_date=parse_datetime(x["expiry_date"]) if x.get("expiry_date") else None,
                    published_by=x.get("published_by", "seed"),
                ),
            )
            created += 1 if made else 0
        self.stdout.write(self.style.SUCCESS(f"Seeded {created} announcement(s)."))

        created = 0
        for x in data.get("programs", []):
            _, made = Program.objects.get_or_create(
                name=x.get("name", ""),
                defaults=dict(timing=x.get("timing", ""), icon=x.get("icon", ""), is_active=x.get("is_active", True)),
            )
            created += 1 if made else 0
        self.stdout.write(self.style.SUCCESS(f"Seeded {created} program(s)."))

        created = 0
        for x in data.get("board", []):
            _, made = BoardMember.objects.get_or_create(
                name=x.get("name", ""),
                defaults=dict(order=x.get("order"), is_active=x.get("is_active", True)),
            )
            created += 1 if made else 0
        self.stdout.write(self.style.SUCCESS(f"Seeded {created} board member(s)."))
