"""
Expire Purchase Sessions Management Command

Dieses Management Command markiert laufende Kaufvorgänge als abgelaufen,
wenn Stripe innerhalb der vorgegebenen Zeit weder `checkout.session.completed`
noch `checkout.session.expired` gemeldet hat (z. B. weil der Webhook nicht
zugestellt wurde). Stripe Checkout Sessions verfallen nach spätestens 24 Stunden.

Author: DSP Development Team
Version: 1.0.0
"""

import logging
from datetime import timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone

from ...models import PurchaseSession

# Logger einrichten
logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Markiert laufende Kaufvorgänge, die älter als --hours Stunden sind, als abgelaufen."

    def add_arguments(self, parser):
        parser.add_argument(
            "--hours",
            type=int,
            default=24,
            help="Alter in Stunden, ab dem ein laufender Kaufvorgang verfällt",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Nur anzeigen, nichts ändern",
        )

    def handle(self, *args, **options):
        expiration_time = timezone.now() - timedelta(hours=options["hours"])

        self.stdout.write(
            f"Suche nach Kaufvorgängen, die vor {expiration_time.strftime('%Y-%m-%d %H:%M:%S')} gestartet wurden..."
        )

        stale_sessions = PurchaseSession.objects.filter(
            status=PurchaseSession.Status.ONGOING,
            created__lt=expiration_time,
        )

        count = stale_sessions.count()
        if count == 0:
            self.stdout.write(self.style.SUCCESS("Keine abgelaufenen Kaufvorgänge gefunden."))
            return

        self.stdout.write(f"{count} Kaufvorgänge gefunden:")
        for purchase_session in stale_sessions:
            self.stdout.write(
                f"  - {purchase_session.id} (User: {purchase_session.user_id}), gestartet am {purchase_session.created.strftime('%Y-%m-%d %H:%M:%S')}"
            )

        if options["dry_run"]:
            self.stdout.write(self.style.WARNING("DRY RUN: keine Änderungen vorgenommen."))
            return

        updated = stale_sessions.update(status=PurchaseSession.Status.EXPIRED)
        logger.info("Expired %d stale purchase sessions", updated)

        self.stdout.write(
            self.style.SUCCESS(f"{updated} Kaufvorgänge als abgelaufen markiert.")
        )
