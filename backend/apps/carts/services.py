from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple

from django.db import IntegrityError, transaction

from apps.api.exceptions import ApplicationError
from apps.common import get_logger
from .commands import (
    MAX_QUANTITY,
    QUANTITY_TOO_LARGE_MESSAGE,
    AddToCartCommand,
    UpdateCartItemCommand,
)
from .dtos import CartDTO, CartItemDTO, CartTotalReconciliation
from .models import Cart, CartItem
from .protocols import (
    CartItemRepositoryProtocol,
    CartMapperProtocol,
    CartRepositoryProtocol,
    ImageRepositoryProtocol,
    ProductRepositoryProtocol,
    VariantRepositoryProtocol,
)

logger = get_logger(__name__).bind(component="carts", layer="service")

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

_TOTAL_FIELD = Cart._meta.get_field("total_price")
MAX_TOTAL = Decimal(10) ** (_TOTAL_FIELD.max_digits - _TOTAL_FIELD.decimal_places) - CENT
TOTAL_TOO_LARGE_MESSAGE = "Cart total exceeds the maximum allowed"

ServiceError = Tuple[str, str, Optional[Dict[str, Any]]]


def apply_total_delta(current, delta, *, cart_id: Optional[int] = None) -> Decimal:
    """Add ``delta`` to a cart total, rounded to cents and floored at zero."""
    updated = (Decimal(current or 0) + Decimal(delta)).quantize(CENT, rounding=ROUND_HALF_UP)
    if updated < ZERO:
        logger.warning(
            "Cart total would go negative; clamping to zero",
            cart_id=cart_id,
            current=current,
            delta=delta,
        )
        return ZERO
    return updated


def ensure_within_limits(
    quantity: int, total: Decimal, *, cart_id: Optional[int] = None
) -> None:
    """
    Raise a VALIDATION_ERROR when a line quantity or cart total would not fit
    its column. Must run inside the caller's atomic block, before any write.
    """
    if quantity > MAX_QUANTITY:
        logger.warning("Line quantity over limit", cart_id=cart_id, quantity=quantity)
        raise ApplicationError(
            "VALIDATION_ERROR",
            QUANTITY_TOO_LARGE_MESSAGE,
            details={"quantity": str(quantity)},
        )
    if total > MAX_TOTAL:
        logger.warning("Cart total over limit", cart_id=cart_id, total=total)
        raise ApplicationError(
            "VALIDATION_ERROR",
            TOTAL_TOO_LARGE_MESSAGE,
            details={"totalPrice": str(total), "maxTotal": str(MAX_TOTAL)},
        )


@dataclass
class _LockedLine:
    cart: Cart
    item: CartItem
    variant: Any


class CartService:
    def __init__(
        self,
        carts: CartRepositoryProtocol,
        cart_items: CartItemRepositoryProtocol,
        products: ProductRepositoryProtocol,
        variants: VariantRepositoryProtocol,
        images: ImageRepositoryProtocol,
        cart_mapper: CartMapperProtocol,
    ):
        self.carts = carts
        self.cart_items = cart_items
        self.products = products
        self.variants = variants
        self.images = images
        self.cart_mapper = cart_mapper
        self.logger = logger.bind(service="CartService")

    def get_cart(self, user_id: int) -> Tuple[Optional[CartDTO], Optional[ServiceError]]:
        self.logger.debug("Fetching cart", user_id=user_id)
        cart = self.carts.get(user_id=user_id)
        if not cart:
            self.logger.info("Cart not found", user_id=user_id)
            return None, ("NOT_FOUND", "Cart not found", {"userId": str(user_id)})
        items = self._assemble_items(self.cart_items.list_for_cart(cart.id))
        return self.cart_mapper.to_dto(cart, items, include_count=True), None

    def add_to_cart(
        self, user_id: int, command: AddToCartCommand
    ) -> Tuple[Optional[CartDTO], Optional[ServiceError]]:
        """
        Add ``quantity`` of a product variant to the user's cart, creating the cart
        on first use and accumulating onto an existing line for the same pair.
        Catalog lookups run before anything is written, so a 404 leaves no trace.
        Raises ``ApplicationError`` when the line or total would overflow; the
        transaction is rolled back.
        """
        self.logger.info(
            "Adding to cart",
            user_id=user_id,
            product_id=command.product_id,
            variant_id=command.variant_id,
            quantity=command.quantity,
        )
        product = self.products.get(id=command.product_id)
        if not product:
            self.logger.warning(
                "Add to cart failed: product missing", product_id=command.product_id
            )
            return None, (
                "NOT_FOUND",
                "Product not found",
                {"productId": str(command.product_id)},
            )
        variant = self.variants.get(id=command.variant_id, product_id=product.id)
        if not variant:
            self.logger.warning(
                "Add to cart failed: variation missing",
                product_id=product.id,
                variant_id=command.variant_id,
            )
            return None, (
                "NOT_FOUND",
                "Variation not found",
                {"variationId": str(command.variant_id)},
            )
        with transaction.atomic():
            cart, _created = self._get_or_create_cart(user_id)
            item = self.cart_items.get_for_line(cart.id, product.id, variant.id)
            new_quantity = (item.quantity if item else 0) + command.quantity
            new_total = apply_total_delta(
                cart.total_price, variant.price * command.quantity, cart_id=cart.id
            )
            ensure_within_limits(new_quantity, new_total, cart_id=cart.id)
            if item:
                item.quantity = new_quantity
                self.cart_items.save(item)
            else:
                item = self.cart_items.create(
                    cart=cart,
                    product_id=product.id,
                    variant_id=variant.id,
                    quantity=new_quantity,
                )
            cart.total_price = new_total
            self.carts.save(cart)
        self.logger.info(
            "Cart item added",
            cart_id=cart.id,
            cart_item_id=item.id,
            quantity=item.quantity,
            total_price=cart.total_price,
        )
        items = self._assemble_items(self.cart_items.list_for_cart(cart.id))
        return self.cart_mapper.to_dto(cart, items), None

    def update_cart_item(
        self, user_id: int, command: UpdateCartItemCommand
    ) -> Tuple[Optional[CartDTO], Optional[ServiceError]]:
        self.logger.info(
            "Updating cart item",
            user_id=user_id,
            cart_item_id=command.cart_item_id,
            quantity=command.quantity,
        )
        with transaction.atomic():
            line, error = self._lock_owned_item(user_id, command.cart_item_id)
            if error:
                return None, error
            cart, item = line.cart, line.item
            old_quantity = item.quantity
            new_total = apply_total_delta(
                cart.total_price,
                (command.quantity - old_quantity) * line.variant.price,
                cart_id=cart.id,
            )
            ensure_within_limits(command.quantity, new_total, cart_id=cart.id)
            item.quantity = command.quantity
            self.cart_items.save(item)
            cart.total_price = new_total
            self.carts.save(cart)
        self.logger.info(
            "Cart item updated",
            cart_id=cart.id,
            cart_item_id=item.id,
            old_quantity=old_quantity,
            quantity=item.quantity,
            total_price=cart.total_price,
        )
        return self.cart_mapper.to_dto(cart, self._assemble_items([item])), None

    def delete_cart_item(
        self, user_id: int, item_id: int
    ) -> Tuple[Optional[CartDTO], Optional[ServiceError]]:
        """Remove a line and debit its value from the total. The cart itself is kept."""
        self.logger.info("Deleting cart item", user_id=user_id, cart_item_id=item_id)
        with transaction.atomic():
            line, error = self._lock_owned_item(user_id, item_id)
            if error:
                return None, error
            cart, item = line.cart, line.item
            removed_quantity = item.quantity
            self.cart_items.delete(item)
            cart.total_price = apply_total_delta(
                cart.total_price,
                -(line.variant.price * removed_quantity),
                cart_id=cart.id,
            )
            self.carts.save(cart)
        self.logger.info(
            "Cart item deleted",
            cart_id=cart.id,
            cart_item_id=item_id,
            quantity=removed_quantity,
            total_price=cart.total_price,
        )
        return self.cart_mapper.to_dto(cart, []), None

    def reconcile_totals(
        self, user_id: Optional[int] = None, *, apply: bool = True
    ) -> List[CartTotalReconciliation]:
        """
        Recompute each cart's total from its items and current variant prices.

        Items whose variant no longer exists contribute nothing. With ``apply``
        the recomputed value replaces any drifted stored total.
        """
        carts = self.carts.list(user_id=user_id) if user_id is not None else self.carts.list()
        results: List[CartTotalReconciliation] = []
        for candidate in carts:
            with transaction.atomic():
                cart = self.carts.get_for_update(id=candidate.id)
                if not cart:
                    continue
                computed = self._compute_total(cart)
                result = CartTotalReconciliation(
                    cart_id=cart.id,
                    user_id=cart.user_id,
                    stored=Decimal(cart.total_price).quantize(CENT),
                    computed=computed,
                )
                if result.changed:
                    self.logger.warning(
                        "Cart total drifted from items",
                        cart_id=cart.id,
                        stored=result.stored,
                        computed=result.computed,
                        applied=apply,
                    )
                    if apply:
                        cart.total_price = computed
                        self.carts.save(cart)
            results.append(result)
        self.logger.info(
            "Cart totals reconciled",
            checked=len(results),
            drifted=sum(1 for r in results if r.changed),
            applied=apply,
        )
        return results

    def _get_or_create_cart(self, user_id: int) -> Tuple[Cart, bool]:
        cart = self.carts.get_for_update(user_id=user_id)
        if cart:
            return cart, False
        try:
            with transaction.atomic():
                cart = self.carts.create(user_id=user_id)
        except IntegrityError:
            # A concurrent request created the cart after our initial check.
            cart = self.carts.get_for_update(user_id=user_id)
            if cart is None:
                raise
            self.logger.debug(
                "Cart created by concurrent request", user_id=user_id, cart_id=cart.id
            )
            return cart, False
        self.logger.info("Cart created", user_id=user_id, cart_id=cart.id)
        return cart, True

    def _lock_owned_item(
        self, user_id: int, cart_item_id: int
    ) -> Tuple[Optional[_LockedLine], Optional[ServiceError]]:
        not_found_item = (
            "NOT_FOUND",
            "Cart item not found",
            {"cartItemId": str(cart_item_id)},
        )
        item = self.cart_items.get(id=cart_item_id)
        if not item:
            self.logger.info("Cart item not found", cart_item_id=cart_item_id)
            return None, not_found_item
        cart = self.carts.get_for_update(id=item.cart_id)
        if not cart:
            self.logger.warning(
                "Cart item references missing cart",
                cart_item_id=cart_item_id,
                cart_id=item.cart_id,
            )
            return None, ("NOT_FOUND", "Cart not found", {"cartId": str(item.cart_id)})
        if cart.user_id != user_id:
            self.logger.warning(
                "Cart item belongs to another user",
                cart_item_id=cart_item_id,
                actor_id=user_id,
                owner_id=cart.user_id,
            )
            return None, not_found_item
        # Re-read under the cart lock so the quantity reflects writes that committed first.
        item = self.cart_items.get(id=cart_item_id)
        if not item:
            return None, not_found_item
        variant = self.variants.get(id=item.variant_id)
        if not variant:
            self.logger.warning(
                "Cart item references missing variation",
                cart_item_id=cart_item_id,
                variant_id=item.variant_id,
            )
            return None, (
                "NOT_FOUND",
                "Variation not found",
                {"variationId": str(item.variant_id)},
            )
        return _LockedLine(cart=cart, item=item, variant=variant), None

    def _compute_total(self, cart: Cart) -> Decimal:
        items = list(self.cart_items.list_for_cart(cart.id))
        variants = {
            v.id: v for v in self.variants.list_by_ids({i.variant_id for i in items})
        }
        total = ZERO
        for item in items:
            variant = variants.get(item.variant_id)
            if variant is None:
                self.logger.warning(
                    "Ignoring cart item with missing variation",
                    cart_id=cart.id,
                    cart_item_id=item.id,
                    variant_id=item.variant_id,
                )
                continue
            total += variant.price * item.quantity
        return total.quantize(CENT, rounding=ROUND_HALF_UP)

    def _assemble_items(self, items: Iterable[CartItem]) -> List[CartItemDTO]:
        """Join items with their catalog records using one batch query per table."""
        items = list(items)
        if not items:
            return []
        product_ids = sorted({i.product_id for i in items})
        variant_ids = sorted({i.variant_id for i in items})
        products = {p.id: p for p in self.products.list_by_ids(product_ids)}
        variants = {v.id: v for v in self.variants.list_by_ids(variant_ids)}
        images = self.images.urls_by_product(product_ids)
        assembled: List[CartItemDTO] = []
        for item in items:
            product = products.get(item.product_id)
            variant = variants.get(item.variant_id)
            if product is None or variant is None:
                self.logger.warning(
                    "Skipping cart item with missing catalog record",
                    cart_item_id=item.id,
                    product_id=item.product_id,
                    variant_id=item.variant_id,
                )
                continue
            assembled.append(
                self.cart_mapper.item_mapper.to_dto(
                    item, product, variant, images.get(product.id, [])
                )
            )
        return assembled
