from rest_framework import serializers

from apps.catalog.serializers import ProductReadSerializer, VariantReadSerializer
from .commands import (
    INVALID_QUANTITY_MESSAGE,
    MAX_IDENTIFIER,
    MAX_QUANTITY,
    MISSING_FIELDS_MESSAGE,
    QUANTITY_TOO_LARGE_MESSAGE,
)


class CartItemReadSerializer(serializers.Serializer):
    cartItemId = serializers.IntegerField(source="cart_item_id")
    product = ProductReadSerializer()
    variation = VariantReadSerializer()
    quantity = serializers.IntegerField()


class CartReadSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    user_id = serializers.IntegerField()
    total_price = serializers.DecimalField(
        max_digits=12, decimal_places=2, coerce_to_string=False
    )
    created_at = serializers.CharField()
    updated_at = serializers.CharField()
    items = CartItemReadSerializer(many=True)


class CartDetailReadSerializer(CartReadSerializer):
    total_items = serializers.IntegerField()


class CartEnvelopeSerializer(serializers.Serializer):
    cart = CartReadSerializer()


class CartDetailEnvelopeSerializer(serializers.Serializer):
    cart = CartDetailReadSerializer()


def _identifier_field(name: str) -> serializers.IntegerField:
    invalid = f"{name} must be an integer"
    return serializers.IntegerField(
        min_value=1,
        max_value=MAX_IDENTIFIER,
        error_messages={
            "required": MISSING_FIELDS_MESSAGE,
            "null": MISSING_FIELDS_MESSAGE,
            "invalid": invalid,
            "min_value": invalid,
            "max_value": invalid,
            "max_string_length": invalid,
        },
    )


def _quantity_field() -> serializers.IntegerField:
    return serializers.IntegerField(
        min_value=1,
        max_value=MAX_QUANTITY,
        error_messages={
            "required": MISSING_FIELDS_MESSAGE,
            "null": MISSING_FIELDS_MESSAGE,
            "invalid": INVALID_QUANTITY_MESSAGE,
            "min_value": INVALID_QUANTITY_MESSAGE,
            "max_value": QUANTITY_TOO_LARGE_MESSAGE,
            "max_string_length": INVALID_QUANTITY_MESSAGE,
        },
    )


# Request payloads pass through the command's alias normalization first.
class AddToCartSerializer(serializers.Serializer):
    default_error_messages = {"invalid": MISSING_FIELDS_MESSAGE}

    productId = _identifier_field("productId")
    variationId = _identifier_field("variationId")
    quantity = _quantity_field()


class UpdateCartItemSerializer(serializers.Serializer):
    default_error_messages = {"invalid": MISSING_FIELDS_MESSAGE}

    quantity = _quantity_field()


class CartItemPathSerializer(serializers.Serializer):
    cartItemId = _identifier_field("cartItemId")
