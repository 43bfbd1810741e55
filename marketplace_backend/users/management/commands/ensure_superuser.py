"""
PATH: users/management/commands/ensure_superuser.py

Admin account bootstrap for deploys without a shell.

- Credentials come from --email/--password, else AUTO_ADMIN_EMAIL /
  AUTO_ADMIN_PASSWORD.
- Idempotent: an existing account (any role) is promoted to ADMIN,
  reactivated and given the new password.
- Never prints the password.
"""

from __future__ import annotations

import logging
import os

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from permissions.roles import ROLE_ADMIN

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Create or promote the marketplace admin account (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--email", default=None)
        parser.add_argument("--password", default=None)

    def handle(self, *args, **options):
        email = (options.get("email") or os.environ.get("AUTO_ADMIN_EMAIL") or "").strip()
        password = (options.get("password") or os.environ.get("AUTO_ADMIN_PASSWORD") or "").strip()

        if not email or not password:
            self.stdout.write(self.style.WARNING("No admin credentials given. Skipping."))
            return

        User = get_user_model()

        with transaction.atomic():
            user = User.objects.select_for_update().filter(email__iexact=email).first()

            if user is None:
                User.objects.create_superuser(email=email, password=password)
                outcome = "created"
            else:
                user.role = ROLE_ADMIN
                user.is_active = True
                user.is_staff = True
                user.is_superuser = True
                user.set_password(password)
                user.save()
                outcome = "promoted"

        logger.info("Admin account ensured", extra={"email": email, "outcome": outcome})
        self.stdout.write(self.style.SUCCESS(f"Admin ensured: {email} ({outcome})"))
