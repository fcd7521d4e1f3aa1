from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from apps.catalog.dtos import ProductDTO, VariantDTO


@dataclass
class CartItemDTO:
    cart_item_id: int
    product: ProductDTO
    variation: VariantDTO
    quantity: int


@dataclass
class CartDTO:
    id: int
    user_id: int
    total_price: Decimal
    created_at: str
    updated_at: str
    items: List[CartItemDTO] = field(default_factory=list)
    total_items: Optional[int] = None


@dataclass
class CartTotalReconciliation:
    cart_id: int
    user_id: int
    stored: Decimal
    computed: Decimal

    @property
    def changed(self) -> bool:
        return self.stored != self.computed


"""DTO dataclasses only. Mapping logic lives in mappers.py."""
