from __future__ import annotations

from django.core.management.base import BaseCommand

from modules.maintenance.services import DataAdminService


class Command(BaseCommand):
    help = "Replace all data with the demo dataset."

    def handle(self, *args, **options):
        self.stdout.write("Seeding development data...")

        data = DataAdminService().seed()

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"customers={len(data['customers'])}, "
                f"products={len(data['products'])}, "
                f"orders={len(data['orders'])}"
            )
        )
