from typing import Iterable, Optional

from apps.catalog.mappers import ProductMapper, VariantMapper, format_timestamp
from apps.catalog.models import Product, ProductVariant
from .dtos import CartDTO, CartItemDTO
from .models import Cart, CartItem


class CartItemMapper:
    def __init__(
        self,
        product_mapper: Optional[ProductMapper] = None,
        variant_mapper: Optional[VariantMapper] = None,
    ) -> None:
        self.product_mapper = product_mapper or ProductMapper()
        self.variant_mapper = variant_mapper or VariantMapper()

    def to_dto(
        self,
        item: CartItem,
        product: Product,
        variant: ProductVariant,
        image_urls: Iterable[str],
    ) -> CartItemDTO:
        return CartItemDTO(
            cart_item_id=item.id,
            product=self.product_mapper.to_dto(product, images=image_urls),
            variation=self.variant_mapper.to_dto(variant),
            quantity=item.quantity,
        )


class CartMapper:
    def __init__(self, item_mapper: Optional[CartItemMapper] = None) -> None:
        self.item_mapper = item_mapper or CartItemMapper()

    def to_dto(
        self,
        cart: Cart,
        items: Iterable[CartItemDTO],
        *,
        include_count: bool = False,
    ) -> CartDTO:
        items = list(items)
        return CartDTO(
            id=cart.id,
            user_id=cart.user_id,
            total_price=cart.total_price,
            created_at=format_timestamp(cart.created_at),
            updated_at=format_timestamp(cart.updated_at),
            items=items,
            total_items=len(items) if include_count else None,
        )
