"""Product Repository - Catalog reads."""
from typing import List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from storefront.db import Tables
from storefront.logging import get_logger, for_log
from storefront.models import Category, Product
from .base import BaseRepository

logger = get_logger(__name__)

RowModel = TypeVar("RowModel", bound=BaseModel)


def _parse_rows(model: Type[RowModel], rows: list, table: str) -> List[RowModel]:
    """Build one model per row, skipping rows that do not validate."""
    parsed: List[RowModel] = []
    for row in rows or []:
        try:
            parsed.append(model(**row))
        except ValidationError as e:
            logger.warning(
                f"Skipping {table} row {for_log((row or {}).get('id'))}: "
                f"invalid ({e.error_count()} errors)"
            )
    return parsed


class ProductRepository(BaseRepository):
    """Product database operations."""

    async def list_products(self) -> List[Product]:
        """Get all products, newest first. Rows that fail validation are skipped."""
        result = await self._execute(
            self.client.table(Tables.PRODUCTS).select("*").order("created_at", desc=True),
            "products.select",
        )
        return _parse_rows(Product, result.data, Tables.PRODUCTS)


class CategoryRepository(BaseRepository):
    """Category database operations."""

    async def list_categories(self) -> List[Category]:
        result = await self._execute(
            self.client.table(Tables.CATEGORIES).select("*"),
            "categories.select",
        )
        return _parse_rows(Category, result.data, Tables.CATEGORIES)
