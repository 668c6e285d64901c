"""
Django‑Management‑Command: legt die Standardwerte der Blink‑Einstellungen an.

Bereits vorhandene Keys werden nicht überschrieben, der Befehl kann also
beliebig oft laufen. Mit ``--check`` wird zusätzlich der gespeicherte
API‑Key gegen die Blink API geprüft.
"""

from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError

from config.utils import OptionStore
from gateway.page import GlobalSettingsPage


class Command(BaseCommand):
    help = "Installs default values for the Blink payment settings (existing values are kept)."

    def add_arguments(self, parser):
        parser.add_argument(
            '--check',
            action='store_true',
            help="Verify the stored environment and API key against the Blink API.",
        )

    def handle(self, *args, **options):
        store = OptionStore()
        page = GlobalSettingsPage(store=store)

        try:
            created = store.add_missing(page.default_values())
        except DatabaseError as exc:
            raise CommandError(f"Could not write default settings: {exc}") from exc

        if created:
            for key in created:
                self.stdout.write(f"  + {key}")
            self.stdout.write(self.style.SUCCESS(f"Installed {len(created)} default setting(s)."))
        else:
            self.stdout.write(self.style.NOTICE("All settings already present, nothing to do."))

        if options['check']:
            if page.is_connected():
                self.stdout.write(self.style.SUCCESS("Connected."))
            else:
                self.stdout.write(self.style.WARNING("Not connected. Please configure your api key."))
