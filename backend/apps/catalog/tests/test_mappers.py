import unittest
from datetime import datetime, timezone
from decimal import Decimal

from apps.catalog.mappers import ProductMapper, VariantMapper, format_timestamp


class StubProduct:
    def __init__(self, product_id: int, title: str, description: str = ""):
        self.id = product_id
        self.title = title
        self.description = description
        self.created_at = datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)
        self.updated_at = None


class StubVariant:
    def __init__(self, variant_id: int, product_id: int, price):
        self.id = variant_id
        self.product_id = product_id
        self.name = "Large"
        self.sku = ""
        self.price = price
        self.stock = 0


class ProductMapperTests(unittest.TestCase):
    def test_to_dto_copies_fields_and_images(self):
        dto = ProductMapper.to_dto(
            StubProduct(3, "Lamp", "Desk lamp"), images=("a.png", "b.png")
        )
        self.assertEqual(dto.id, 3)
        self.assertEqual(dto.title, "Lamp")
        self.assertEqual(dto.images, ["a.png", "b.png"])
        self.assertEqual(dto.created_at, "2025-03-01T09:30:00+00:00")
        self.assertEqual(dto.updated_at, "")

    def test_to_dto_without_images(self):
        self.assertEqual(ProductMapper.to_dto(StubProduct(1, "Mug")).images, [])


class VariantMapperTests(unittest.TestCase):
    def test_many_to_dto(self):
        dtos = VariantMapper.many_to_dto(
            [StubVariant(1, 3, Decimal("9.99")), StubVariant(2, 3, Decimal("12.00"))]
        )
        self.assertEqual([d.id for d in dtos], [1, 2])
        self.assertEqual(dtos[0].price, Decimal("9.99"))
        self.assertEqual(dtos[1].product_id, 3)


class FormatTimestampTests(unittest.TestCase):
    def test_passes_strings_through(self):
        self.assertEqual(format_timestamp("2025-01-01"), "2025-01-01")
