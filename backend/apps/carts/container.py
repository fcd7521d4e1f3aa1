from __future__ import annotations

from apps.catalog.mappers import ProductMapper, VariantMapper
from apps.catalog.repositories import (
    ProductImageRepository,
    ProductRepository,
    ProductVariantRepository,
)

from .mappers import CartItemMapper, CartMapper
from .repositories import CartItemRepository, CartRepository
from .services import CartService


def build_cart_service() -> CartService:
    item_mapper = CartItemMapper(ProductMapper(), VariantMapper())
    return CartService(
        carts=CartRepository(),
        cart_items=CartItemRepository(),
        products=ProductRepository(),
        variants=ProductVariantRepository(),
        images=ProductImageRepository(),
        cart_mapper=CartMapper(item_mapper),
    )
