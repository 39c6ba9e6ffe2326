# API Routes

from .products import router as products_router
from .cart import router as cart_router
from .account import router as account_router
from .upload import router as upload_router
from .pages import router as pages_router

__all__ = [
    "products_router",
    "cart_router",
    "account_router",
    "upload_router",
    "pages_router",
]
