from django.core.management.base import BaseCommand

from apps.carts.container import build_cart_service


class Command(BaseCommand):
    help = "Recompute cart totals from their items and fix any that drifted."

    def add_arguments(self, parser):
        parser.add_argument(
            "--user-id", type=int, default=None, help="Only reconcile this user's cart"
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report drifted totals without writing corrections",
        )

    def handle(self, *args, **options):
        service = build_cart_service()
        results = service.reconcile_totals(
            user_id=options["user_id"], apply=not options["dry_run"]
        )
        drifted = [r for r in results if r.changed]
        for result in drifted:
            self.stdout.write(
                f"cart={result.cart_id} user={result.user_id} "
                f"stored={result.stored} computed={result.computed}"
            )
        verb = "would be corrected" if options["dry_run"] else "corrected"
        self.stdout.write(
            self.style.SUCCESS(
                f"Checked {len(results)} cart(s); {len(drifted)} {verb}."
            )
        )
