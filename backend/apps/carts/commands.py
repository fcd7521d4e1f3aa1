from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Tuple

MISSING_FIELDS_MESSAGE = "Please provide all required fields"
INVALID_QUANTITY_MESSAGE = "Quantity must be a positive number"
MAX_QUANTITY = 10000
QUANTITY_TOO_LARGE_MESSAGE = f"Quantity must be at most {MAX_QUANTITY}"
# Identifiers are stored in 32-bit integer columns.
MAX_IDENTIFIER = 2**31 - 1


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def normalize_aliases(payload: Any, aliases: Dict[str, Tuple[str, ...]]) -> Any:
    """
    Fold accepted spellings of each field onto its canonical key.

    Blank values count as absent so the serializer reports them as missing.
    Non-mapping payloads pass through untouched for the serializer to reject.
    """
    if not isinstance(payload, Mapping):
        return payload
    normalized: Dict[str, Any] = {}
    for field, keys in aliases.items():
        for key in keys:
            value = payload.get(key)
            if not _is_blank(value):
                normalized[field] = value
                break
    return normalized


@dataclass
class AddToCartCommand:
    product_id: int
    variant_id: int
    quantity: int

    ALIASES = {
        "productId": ("productId", "product_id"),
        "variationId": ("variationId", "variation_id", "variantId", "variant_id"),
        "quantity": ("quantity",),
    }

    @staticmethod
    def normalize(payload: Any) -> Any:
        return normalize_aliases(payload, AddToCartCommand.ALIASES)

    @staticmethod
    def from_validated(data: Mapping) -> "AddToCartCommand":
        return AddToCartCommand(
            product_id=data["productId"],
            variant_id=data["variationId"],
            quantity=data["quantity"],
        )


@dataclass
class UpdateCartItemCommand:
    cart_item_id: int
    quantity: int

    @staticmethod
    def normalize(payload: Any) -> Any:
        return normalize_aliases(payload, {"quantity": ("quantity",)})

    @staticmethod
    def from_validated(cart_item_id: int, data: Mapping) -> "UpdateCartItemCommand":
        return UpdateCartItemCommand(cart_item_id=cart_item_id, quantity=data["quantity"])
