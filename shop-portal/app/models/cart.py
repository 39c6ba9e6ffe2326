"""Cart models for the shop portal"""

from pydantic import Field
from typing import Optional
from datetime import datetime

from .base import CamelModel


class CartItem(CamelModel):
    """Item in a shopping cart"""
    product_id: str
    product_name: str
    quantity: int = Field(gt=0)
    unit_price: int
    total_price: int


class Cart(CamelModel):
    """A customer's shopping cart"""
    user_id: Optional[str] = Field(default=None, exclude=True)
    items: list[CartItem] = []
    item_count: int = 0
    subtotal: int = 0
    updated_at: Optional[datetime] = None


class AddToCartRequest(CamelModel):
    """Request to add item to cart"""
    product_id: str
    quantity: int = 1


class CartResponse(CamelModel):
    """Cart API response"""
    cart: Cart
    message: Optional[str] = None
