from typing import Dict, Iterable, List

from apps.common.repository import GenericRepository
from .models import Product, ProductImage, ProductVariant


class ProductRepository(GenericRepository[Product]):
    def __init__(self):
        super().__init__(Product)


class ProductVariantRepository(GenericRepository[ProductVariant]):
    def __init__(self):
        super().__init__(ProductVariant)


class ProductImageRepository(GenericRepository[ProductImage]):
    def __init__(self):
        super().__init__(ProductImage)

    def urls_by_product(self, product_ids: Iterable[int]) -> Dict[int, List[str]]:
        """Image URLs for each requested product, in display order, fetched in one query."""
        product_ids = list(product_ids)
        grouped: Dict[int, List[str]] = {pid: [] for pid in product_ids}
        if not product_ids:
            return grouped
        rows = (
            self.model.objects.filter(product_id__in=product_ids)
            .order_by("position", "id")
            .values_list("product_id", "image_url")
        )
        for product_id, url in rows:
            grouped.setdefault(product_id, []).append(url)
        return grouped
