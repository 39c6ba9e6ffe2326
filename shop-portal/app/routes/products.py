"""Catalog API routes for the shop portal"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from ..core.session import SessionState
from ..models.product import Product, ProductListResponse, CategoryListResponse
from ..security.session_guard import current_session
from ..services.portal import PortalService

router = APIRouter(prefix="/api", tags=["Catalog"])


@router.get("/products", response_model=ProductListResponse)
async def list_products(
    search: Optional[str] = Query(None, description="Substring of the product name"),
    category: Optional[str] = Query(None, description="Category ID"),
    session: SessionState = Depends(current_session),
):
    """
    List active products.

    Both filters are optional and combine with AND.
    """
    products = await PortalService(session).list_products(search=search, category=category)
    return ProductListResponse(products=products)


@router.get("/products/{product_id}", response_model=Product)
async def get_product(
    product_id: str,
    session: SessionState = Depends(current_session),
):
    """Get an active product by ID"""
    return await PortalService(session).get_product(product_id)


@router.get("/categories", response_model=CategoryListResponse)
async def list_categories(session: SessionState = Depends(current_session)):
    """List all product categories"""
    categories = await PortalService(session).list_categories()
    return CategoryListResponse(categories=categories)
