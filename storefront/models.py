"""Database Models - Pydantic models for remote rows."""
from decimal import Decimal
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from storefront.money import to_decimal as _to_decimal


class Category(BaseModel):
    """Product category."""
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str


class Product(BaseModel):
    """Catalog product. Read-only from the storefront's point of view."""
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    description: str = ""
    price: Decimal
    image_url: Optional[str] = None
    category_id: Optional[str] = None  # nullable reference into categories
    created_at: Optional[datetime] = None

    @field_validator("id", "category_id", mode="before")
    @classmethod
    def stringify_ids(cls, v):
        # Postgres may hand back integer or uuid keys
        return None if v is None else str(v)

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v):
        return v or ""

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        price = _to_decimal(v)
        if price < 0:
            raise ValueError("price must be non-negative")
        return price


class Order(BaseModel):
    """Order header row."""
    model_config = ConfigDict(extra="ignore")

    id: str
    session_id: str
    customer_name: str
    customer_email: str
    customer_address: str
    total_amount: Decimal
    status: str = "pending"
    created_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v):
        return str(v)

    @field_validator("total_amount", mode="before")
    @classmethod
    def convert_total_to_decimal(cls, v):
        return _to_decimal(v)


class OrderItem(BaseModel):
    """Frozen copy of one cart line at the moment of checkout."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    order_id: str
    product_id: str
    quantity: int
    price: Decimal  # unit price at time of order

    @field_validator("quantity")
    @classmethod
    def positive_quantity(cls, v):
        if v <= 0:
            raise ValueError("quantity must be positive")
        return v

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)
