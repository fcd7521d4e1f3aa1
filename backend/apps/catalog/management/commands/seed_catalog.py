from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.catalog.models import Product, ProductImage, ProductVariant

# (title, description, [(variant name, sku, price, stock)], [image urls])
PRODUCTS = [
    (
        "Foldsack No. 1 Backpack",
        "Everyday pack with a padded sleeve for laptops up to 15 inches.",
        [
            ("Forest Green", "BPK-001-GRN", Decimal("109.95"), 25),
            ("Black", "BPK-001-BLK", Decimal("109.95"), 40),
        ],
        [
            "https://cdn.shopcart.local/img/backpack-front.png",
            "https://cdn.shopcart.local/img/backpack-side.png",
        ],
    ),
    (
        "Slim Fit Cotton T-Shirt",
        "Contrast raglan long sleeve with a three-button henley placket.",
        [
            ("S", "TEE-002-S", Decimal("22.30"), 60),
            ("M", "TEE-002-M", Decimal("22.30"), 80),
            ("L", "TEE-002-L", Decimal("24.30"), 50),
        ],
        ["https://cdn.shopcart.local/img/tee.png"],
    ),
    (
        "Portable External Hard Drive 2TB",
        "USB 3.0 drive, formatted NTFS.",
        [
            ("2TB", "HDD-003-2TB", Decimal("64.00"), 15),
            ("4TB", "HDD-003-4TB", Decimal("99.00"), 10),
        ],
        [],
    ),
]


class Command(BaseCommand):
    help = "Seed a small catalog (products, variants, images) for local development."

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush", action="store_true", help="Delete existing catalog data before seeding"
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["flush"]:
            self.stdout.write("Flushing existing catalog...")
            ProductImage.objects.all().delete()
            ProductVariant.objects.all().delete()
            Product.objects.all().delete()

        self.stdout.write("Seeding products...")
        for title, description, variants, images in PRODUCTS:
            product, _ = Product.objects.get_or_create(
                title=title, defaults={"description": description}
            )
            for name, sku, price, stock in variants:
                ProductVariant.objects.update_or_create(
                    product=product,
                    sku=sku,
                    defaults={"name": name, "price": price, "stock": stock},
                )
            for position, url in enumerate(images):
                ProductImage.objects.get_or_create(
                    product=product, image_url=url, defaults={"position": position}
                )

        self.stdout.write(self.style.SUCCESS("Catalog seed completed."))
