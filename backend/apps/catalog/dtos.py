from dataclasses import dataclass, field
from decimal import Decimal
from typing import List


@dataclass
class ProductDTO:
    id: int
    title: str
    description: str
    created_at: str
    updated_at: str
    images: List[str] = field(default_factory=list)


@dataclass
class VariantDTO:
    id: int
    product_id: int
    name: str
    sku: str
    price: Decimal
    stock: int


"""DTO dataclasses only. Mapping logic lives in mappers.py."""
