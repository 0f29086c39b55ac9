"""
Management command: seed_admin
------------------------------

Purpose:
    Creates (or promotes) a staff operator so a fresh database can be managed
    from the admin panel right away.

Behavior:
    - Idempotent: an existing user with that email is promoted to staff and
      keeps their password unless --reset-password is given.
    - Username is the email address.

Usage:
    python manage.py seed_admin --email admin@example.org --password change-me
"""

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError


class Command(BaseCommand):
    help = "Create or promote a staff operator account (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--email", required=True)
        parser.add_argument("--password", default=None)
        parser.add_argument("--reset-password", action="store_true")

    def handle(self, *args, **options):
        User = get_user_model()
        email = options["email"].strip().lower()
        if "@" not in email:
            raise CommandError(f"Not an email address: {email}")

        user = User.objects.filter(username=email).first()
        created = user is None
        if created:
            if not options["password"]:
                raise CommandError("--password is required when creating a new operator.")
            user = User(username=email, email=email)

        user.is_staff = True
        if created or options["reset_password"]:
            if not options["password"]:
                raise CommandError("--password is required with --reset-password.")
            user.set_password(options["password"])
        user.save()

        if created:
            self.stdout.write(self.style.SUCCESS(f"Created staff operator {email}"))
        else:
            self.stdout.write(f"Operator {email} already exists; ensured staff access.")
