"""Cart API routes for the shop portal"""

from fastapi import APIRouter, Depends

from ..core.session import SessionState
from ..models.cart import Cart, AddToCartRequest, CartResponse
from ..security.session_guard import require_customer
from ..services.portal import PortalService

router = APIRouter(prefix="/api/cart", tags=["Cart"])


@router.get("", response_model=Cart)
async def get_cart(session: SessionState = Depends(require_customer)):
    """Get the current customer's cart"""
    return await PortalService(session).get_cart()


@router.post("/items", response_model=CartResponse)
async def add_to_cart(
    request: AddToCartRequest,
    session: SessionState = Depends(require_customer),
):
    """Add an item to the current customer's cart"""
    cart = await PortalService(session).add_to_cart(request.product_id, request.quantity)
    return CartResponse(
        cart=cart,
        message=f"Added {request.quantity}x {request.product_id} to cart",
    )
