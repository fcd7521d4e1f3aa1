"""In-memory stand-ins for the cart and catalog repositories used by service tests."""
from datetime import datetime, timezone
from decimal import Decimal

from django.db import IntegrityError

NOW = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


class DummyAtomic:
    def __call__(self, *args, **kwargs):
        return self

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


class StubProduct:
    def __init__(self, product_id: int, title: str, description: str = ""):
        self.id = product_id
        self.title = title
        self.description = description
        self.created_at = NOW
        self.updated_at = NOW


class StubVariant:
    def __init__(self, variant_id: int, product_id: int, price, name: str = "Default"):
        self.id = variant_id
        self.product_id = product_id
        self.name = name
        self.sku = f"SKU-{variant_id}"
        self.price = Decimal(str(price))
        self.stock = 10


class StubCart:
    def __init__(self, cart_id: int, user_id: int, total_price=Decimal("0.00")):
        self.id = cart_id
        self.user_id = user_id
        self.total_price = Decimal(total_price)
        self.created_at = NOW
        self.updated_at = NOW


class StubCartItem:
    def __init__(self, item_id: int, cart_id: int, product_id: int, variant_id: int, quantity: int):
        self.id = item_id
        self.cart_id = cart_id
        self.product_id = product_id
        self.variant_id = variant_id
        self.quantity = quantity


class FakeCartRepository:
    def __init__(self):
        self._storage = {}
        self._pk = 1
        self.saves = 0
        self.locked = []

    def create(self, **data):
        user_id = data["user_id"]
        if any(c.user_id == user_id for c in self._storage.values()):
            raise IntegrityError("UNIQUE constraint failed: carts_cart.user_id")
        cart = StubCart(self._pk, user_id)
        self._storage[self._pk] = cart
        self._pk += 1
        return cart

    def get(self, **filters):
        for cart in self._storage.values():
            if all(getattr(cart, key) == value for key, value in filters.items()):
                return cart
        return None

    def get_for_update(self, **filters):
        cart = self.get(**filters)
        if cart is not None:
            self.locked.append(cart.id)
        return cart

    def list(self, **filters):
        return [
            c
            for c in self._storage.values()
            if all(getattr(c, key) == value for key, value in filters.items())
        ]

    def save(self, cart):
        self.saves += 1
        self._storage[cart.id] = cart
        return cart


class FakeCartItemRepository:
    def __init__(self):
        self._storage = {}
        self._pk = 1

    def create(self, **data):
        cart = data["cart"]
        item = StubCartItem(
            self._pk, cart.id, data["product_id"], data["variant_id"], data["quantity"]
        )
        self._storage[self._pk] = item
        self._pk += 1
        return item

    def add(self, cart_id, product_id, variant_id, quantity):
        item = StubCartItem(self._pk, cart_id, product_id, variant_id, quantity)
        self._storage[self._pk] = item
        self._pk += 1
        return item

    def get(self, **filters):
        for item in self._storage.values():
            if all(getattr(item, key) == value for key, value in filters.items()):
                return item
        return None

    def save(self, item):
        self._storage[item.id] = item
        return item

    def delete(self, item):
        self._storage.pop(item.id, None)

    def list_for_cart(self, cart_id):
        return [i for i in self._storage.values() if i.cart_id == cart_id]

    def get_for_line(self, cart_id, product_id, variant_id):
        return self.get(cart_id=cart_id, product_id=product_id, variant_id=variant_id)


class FakeCatalogRepository:
    def __init__(self, records=()):
        self._records = {r.id: r for r in records}
        self.batch_calls = []

    def get(self, **filters):
        record = self._records.get(filters.get("id"))
        if record is None:
            return None
        if any(getattr(record, key) != value for key, value in filters.items()):
            return None
        return record

    def list_by_ids(self, ids):
        ids = list(ids)
        self.batch_calls.append(ids)
        return [self._records[i] for i in ids if i in self._records]

    def add(self, record):
        self._records[record.id] = record

    def remove(self, record_id):
        self._records.pop(record_id, None)


class FakeImageRepository:
    def __init__(self, urls_by_product=None):
        self._urls = dict(urls_by_product or {})
        self.calls = []

    def urls_by_product(self, product_ids):
        product_ids = list(product_ids)
        self.calls.append(product_ids)
        return {pid: list(self._urls.get(pid, [])) for pid in product_ids}
