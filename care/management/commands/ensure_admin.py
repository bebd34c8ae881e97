# care/management/commands/ensure_admin.py
from django.core.management.base import BaseCommand, CommandError

from care.models import User
from care.services.passwords import hash_password


class Command(BaseCommand):
    help = "Create or reset an active admin account (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--username", required=True)
        parser.add_argument("--password", required=True)
        parser.add_argument("--full-name", dest="full_name", default="Administrator")

    def handle(self, *args, **opts):
        if len(opts["password"]) < 6:
            raise CommandError("password must be at least 6 characters")
        u, created = User.objects.get_or_create(
            username=opts["username"],
            defaults={
                "full_name": opts["full_name"],
                "role": User.ROLE_ADMIN,
                "password": hash_password(opts["password"]),
                "is_active": True,
            },
        )
        if not created:
            # reset credentials, role and active flag
            u.password = hash_password(opts["password"])
            u.full_name = opts["full_name"]
            u.role = User.ROLE_ADMIN
            u.is_active = True
            u.save(update_fields=["password", "full_name", "role", "is_active", "updated_at"])
        verb = "created" if created else "reset"
        self.stdout.write(self.style.SUCCESS(f"ok: admin {u.username} {verb}"))
