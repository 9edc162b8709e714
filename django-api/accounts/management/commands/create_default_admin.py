"""Create the administrator account configured by MUSEUM_ADMIN_EMAIL/PASSWORD."""

import logging

from django.core.management.base import BaseCommand, CommandError

from accounts.services import ensure_admin
from common.wiring import museum_config

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Create the default administrator account if it does not exist yet."

    def handle(self, *args, **options):
        config = museum_config()
        if not config.admin_email or not config.admin_password:
            raise CommandError("MUSEUM_ADMIN_EMAIL and MUSEUM_ADMIN_PASSWORD must be set")

        user, created = ensure_admin(config.admin_email, config.admin_password)
        if created:
            logger.info("Default administrator created: %s", user.email)
            self.stdout.write(self.style.SUCCESS(f"Created administrator {user.email}"))
        else:
            self.stdout.write(f"Administrator {user.email} already exists")
