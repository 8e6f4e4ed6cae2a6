from datetime import timedelta

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from payments.models import Payment


class Command(BaseCommand):
    help = "Mark abandoned pending payments as failed once they exceed the pending TTL."

    def add_arguments(self, parser):
        parser.add_argument(
            "--hours",
            type=int,
            default=None,
            help="Override PAYMENT_PENDING_TTL_HOURS for this run.",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report how many payments would expire without changing them.",
        )

    def handle(self, *args, **options):
        hours = options["hours"]
        if hours is None:
            hours = settings.PAYMENT_PENDING_TTL_HOURS
        if hours < 1:
            raise CommandError("The pending TTL must be at least one hour.")

        cutoff = timezone.now() - timedelta(hours=hours)
        stale = Payment.objects.filter(status=Payment.PENDING, created_at__lt=cutoff)

        if options["dry_run"]:
            self.stdout.write(f"{stale.count()} pending payment(s) older than {hours}h would expire.")
            return

        expired = stale.update(status=Payment.FAILED, updated_at=timezone.now())
        self.stdout.write(self.style.SUCCESS(f"Expired {expired} pending payment(s) older than {hours}h."))
