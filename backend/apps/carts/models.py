from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone


class Cart(models.Model):
    id = models.AutoField(primary_key=True)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="cart"
    )
    # Running sum of quantity * variant price over the cart's items.
    total_price = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Cart {self.id} for {self.user_id}"


class CartItem(models.Model):
    cart = models.ForeignKey(Cart, on_delete=models.CASCADE, related_name="items")
    # Catalog records are owned elsewhere; items hold their identifiers only.
    product_id = models.PositiveIntegerField()
    variant_id = models.PositiveIntegerField()
    quantity = models.PositiveIntegerField()
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "cart_items"
        ordering = ("id",)
        constraints = [
            models.UniqueConstraint(
                fields=["cart", "product_id", "variant_id"],
                name="cart_item_unique_line",
            ),
        ]

    def __str__(self):
        return f"CartItem {self.id} ({self.product_id}/{self.variant_id} x{self.quantity})"
