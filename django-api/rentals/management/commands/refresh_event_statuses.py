from datetime import date

from django.core.management.base import BaseCommand

from rentals import wiring


class Command(BaseCommand):
    help = "Recompute upcoming/active/completed event statuses from their dates. Run daily."

    def add_arguments(self, parser):
        parser.add_argument("--date", type=date.fromisoformat, default=None, help="Treat this ISO date as today.")

    def handle(self, *args, **options):
        changed = wiring.event_service().refresh_event_statuses(options["date"])
        self.stdout.write(f"{changed} event(s) updated")
