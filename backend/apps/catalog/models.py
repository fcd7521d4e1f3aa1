from django.db import models
from django.utils import timezone


class Product(models.Model):
    id = models.AutoField(primary_key=True)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.title

    class Meta:
        indexes = [
            models.Index(fields=["title"], name="product_title_idx"),
        ]


class ProductVariant(models.Model):
    """A purchasable configuration of a product; carries the price carts are charged."""

    product = models.ForeignKey(
        Product, on_delete=models.CASCADE, related_name="variants"
    )
    name = models.CharField(max_length=100)
    sku = models.CharField(max_length=64, blank=True, default="")
    price = models.DecimalField(max_digits=10, decimal_places=2)
    stock = models.IntegerField(default=0)

    class Meta:
        db_table = "product_variants"
        indexes = [
            models.Index(fields=["product"], name="variant_product_idx"),
        ]

    def __str__(self):
        return f"{self.product_id}:{self.name}"


class ProductImage(models.Model):
    product = models.ForeignKey(
        Product, on_delete=models.CASCADE, related_name="images"
    )
    image_url = models.TextField()
    position = models.IntegerField(default=0)

    class Meta:
        db_table = "product_images"
        ordering = ("position", "id")
        indexes = [
            models.Index(fields=["product"], name="image_product_idx"),
        ]

    def __str__(self):
        return self.image_url
