from apps.common.repository import GenericRepository
from .models import Cart, CartItem


class CartRepository(GenericRepository[Cart]):
    def __init__(self):
        super().__init__(Cart)

    def get_for_update(self, **filters):
        """Fetch and row-lock a cart; must run inside ``transaction.atomic``."""
        return self.model.objects.select_for_update().filter(**filters).first()


class CartItemRepository(GenericRepository[CartItem]):
    def __init__(self):
        super().__init__(CartItem)

    def list_for_cart(self, cart_id: int):
        return list(self.model.objects.filter(cart_id=cart_id).order_by("id"))

    def get_for_line(self, cart_id: int, product_id: int, variant_id: int):
        return self.model.objects.filter(
            cart_id=cart_id, product_id=product_id, variant_id=variant_id
        ).first()
