"""Product catalog with explicit category lookup."""
from typing import Dict, List, Optional

from storefront.errors import RemoteUnavailable
from storefront.logging import get_logger
from storefront.models import Category, Product
from storefront.repositories import CategoryRepository, ProductRepository

logger = get_logger(__name__)

ALL_CATEGORIES = "all"
UNCATEGORIZED = "Uncategorized"


class Catalog:
    """In-memory copy of products and categories, loaded once at startup."""

    def __init__(self, products_repo: ProductRepository, categories_repo: CategoryRepository):
        self._products_repo = products_repo
        self._categories_repo = categories_repo
        self._products: List[Product] = []
        self._by_id: Dict[str, Product] = {}
        self._categories: Dict[str, Category] = {}

    async def load(self) -> bool:
        """Load products and categories. On failure the catalog stays empty."""
        try:
            products = await self._products_repo.list_products()
            categories = await self._categories_repo.list_categories()
        except RemoteUnavailable as e:
            logger.error(f"Error loading products: {e}")
            return False

        self._products = products
        self._by_id = {p.id: p for p in products}
        self._categories = {c.id: c for c in categories}
        logger.info(f"Catalog loaded: {len(products)} products, {len(categories)} categories")
        return True

    @property
    def products(self) -> List[Product]:
        return list(self._products)

    def get(self, product_id: str) -> Optional[Product]:
        return self._by_id.get(product_id)

    def category_name(self, product: Product) -> str:
        if product.category_id is None:
            return UNCATEGORIZED
        category = self._categories.get(product.category_id)
        return category.name if category else UNCATEGORIZED

    def category_names(self) -> List[str]:
        return [c.name for c in self._categories.values()]

    def filter(self, category: str = ALL_CATEGORIES) -> List[Product]:
        """Products in load order, optionally restricted to one category name."""
        if category == ALL_CATEGORIES:
            return self.products
        return [p for p in self._products if self.category_name(p) == category]
