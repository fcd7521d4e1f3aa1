import unittest

from apps.carts.commands import (
    INVALID_QUANTITY_MESSAGE,
    MAX_QUANTITY,
    MISSING_FIELDS_MESSAGE,
    QUANTITY_TOO_LARGE_MESSAGE,
    AddToCartCommand,
)
from apps.carts.serializers import (
    AddToCartSerializer,
    CartItemPathSerializer,
    UpdateCartItemSerializer,
)


def add_errors(payload):
    serializer = AddToCartSerializer(data=AddToCartCommand.normalize(payload))
    assert not serializer.is_valid()
    return serializer.errors


class AddToCartSerializerTests(unittest.TestCase):
    def test_accepts_valid_payload(self):
        serializer = AddToCartSerializer(
            data={"productId": "5", "variationId": 7, "quantity": "2"}
        )
        self.assertTrue(serializer.is_valid(), serializer.errors)
        self.assertEqual(
            dict(serializer.validated_data), {"productId": 5, "variationId": 7, "quantity": 2}
        )

    def test_missing_fields_use_required_message(self):
        errors = add_errors({"productId": 1, "variationId": ""})
        self.assertEqual(errors["variationId"], [MISSING_FIELDS_MESSAGE])
        self.assertEqual(errors["quantity"], [MISSING_FIELDS_MESSAGE])
        self.assertNotIn("productId", errors)

    def test_non_mapping_payload_is_missing_fields(self):
        errors = add_errors([{"productId": 1}])
        self.assertEqual(errors["non_field_errors"], [MISSING_FIELDS_MESSAGE])

    def test_rejects_invalid_quantities(self):
        for value in (0, -2, "0", "abc", "nan", "1.5", 2.5, "1e2", True, [1]):
            with self.subTest(value=value):
                errors = add_errors({"productId": 1, "variationId": 1, "quantity": value})
                self.assertEqual(errors["quantity"], [INVALID_QUANTITY_MESSAGE])

    def test_rejects_quantity_above_limit(self):
        errors = add_errors({"productId": 1, "variationId": 1, "quantity": 10**11})
        self.assertEqual(errors["quantity"], [QUANTITY_TOO_LARGE_MESSAGE])
        self.assertIn(str(MAX_QUANTITY), QUANTITY_TOO_LARGE_MESSAGE)

    def test_accepts_quantity_at_limit(self):
        serializer = AddToCartSerializer(
            data={"productId": 1, "variationId": 1, "quantity": MAX_QUANTITY}
        )
        self.assertTrue(serializer.is_valid(), serializer.errors)

    def test_rejects_malformed_identifiers(self):
        for value in ("abc", 0, -3, "1.5", 2**31):
            with self.subTest(value=value):
                errors = add_errors({"productId": value, "variationId": 1, "quantity": 1})
                self.assertEqual(errors["productId"], ["productId must be an integer"])


class UpdateCartItemSerializerTests(unittest.TestCase):
    def test_missing_quantity(self):
        serializer = UpdateCartItemSerializer(data={})
        self.assertFalse(serializer.is_valid())
        self.assertEqual(serializer.errors["quantity"], [MISSING_FIELDS_MESSAGE])

    def test_rejects_oversized_quantity(self):
        serializer = UpdateCartItemSerializer(data={"quantity": MAX_QUANTITY + 1})
        self.assertFalse(serializer.is_valid())
        self.assertEqual(serializer.errors["quantity"], [QUANTITY_TOO_LARGE_MESSAGE])


class CartItemPathSerializerTests(unittest.TestCase):
    def test_accepts_digit_string(self):
        serializer = CartItemPathSerializer(data={"cartItemId": "42"})
        self.assertTrue(serializer.is_valid())
        self.assertEqual(serializer.validated_data["cartItemId"], 42)

    def test_rejects_non_numeric_segment(self):
        serializer = CartItemPathSerializer(data={"cartItemId": "abc"})
        self.assertFalse(serializer.is_valid())
        self.assertEqual(serializer.errors["cartItemId"], ["cartItemId must be an integer"])
