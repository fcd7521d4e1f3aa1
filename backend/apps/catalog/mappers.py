from typing import Iterable, List, Optional

from .dtos import ProductDTO, VariantDTO
from .models import Product, ProductVariant


def format_timestamp(value) -> str:
    return value.isoformat() if hasattr(value, "isoformat") else str(value or "")


class ProductMapper:
    @staticmethod
    def to_dto(product: Product, *, images: Optional[Iterable[str]] = None) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            title=product.title,
            description=product.description,
            created_at=format_timestamp(product.created_at),
            updated_at=format_timestamp(product.updated_at),
            images=list(images or []),
        )


class VariantMapper:
    @staticmethod
    def to_dto(variant: ProductVariant) -> VariantDTO:
        return VariantDTO(
            id=variant.id,
            product_id=variant.product_id,
            name=variant.name,
            sku=variant.sku,
            price=variant.price,
            stock=variant.stock,
        )

    @staticmethod
    def many_to_dto(variants: Iterable[ProductVariant]) -> List[VariantDTO]:
        return [VariantMapper.to_dto(v) for v in variants]
