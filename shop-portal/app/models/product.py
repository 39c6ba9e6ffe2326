"""Catalog models for the shop portal"""

from pydantic import Field
from typing import Optional

from .base import CamelModel


class Category(CamelModel):
    """Product category"""
    id: str
    name: str


class Product(CamelModel):
    """Product in the catalog"""
    id: str
    name: str
    description: Optional[str] = None
    price: int = Field(ge=0)
    stock: int = Field(ge=0, default=0)
    image_url: Optional[str] = None
    category_id: Optional[str] = None
    sort_order: int = 0
    is_active: bool = True
    category: Optional[Category] = None

    @property
    def in_stock(self) -> bool:
        return self.stock > 0


class ProductListResponse(CamelModel):
    """Response from product listing"""
    products: list[Product]


class CategoryListResponse(CamelModel):
    categories: list[Category]
