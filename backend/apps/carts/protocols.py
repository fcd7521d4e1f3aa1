from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Protocol, TYPE_CHECKING

from .models import Cart, CartItem

if TYPE_CHECKING:
    from apps.carts.dtos import CartDTO, CartItemDTO
    from apps.catalog.models import Product, ProductVariant


class CartRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional[Cart]:
        ...

    def get_for_update(self, **filters) -> Optional[Cart]:
        ...

    def list(self, **filters) -> Iterable[Cart]:
        ...

    def create(self, **data) -> Cart:
        ...

    def save(self, cart: Cart) -> Cart:
        ...


class CartItemRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional[CartItem]:
        ...

    def create(self, **data) -> CartItem:
        ...

    def save(self, item: CartItem) -> CartItem:
        ...

    def delete(self, item: CartItem) -> None:
        ...

    def list_for_cart(self, cart_id: int) -> Iterable[CartItem]:
        ...

    def get_for_line(
        self, cart_id: int, product_id: int, variant_id: int
    ) -> Optional[CartItem]:
        ...


class ProductRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["Product"]:
        ...

    def list_by_ids(self, ids: Iterable[int]) -> List["Product"]:
        ...


class VariantRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["ProductVariant"]:
        ...

    def list_by_ids(self, ids: Iterable[int]) -> List["ProductVariant"]:
        ...


class ImageRepositoryProtocol(Protocol):
    def urls_by_product(self, product_ids: Iterable[int]) -> Dict[int, List[str]]:
        ...


class CartItemMapperProtocol(Protocol):
    def to_dto(
        self,
        item: CartItem,
        product: "Product",
        variant: "ProductVariant",
        image_urls: Iterable[str],
    ) -> "CartItemDTO":
        ...


class CartMapperProtocol(Protocol):
    item_mapper: CartItemMapperProtocol

    def to_dto(
        self,
        cart: Cart,
        items: Iterable["CartItemDTO"],
        *,
        include_count: bool = False,
    ) -> "CartDTO":
        ...
