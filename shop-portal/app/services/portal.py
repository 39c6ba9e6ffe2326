"""
Portal Service

Catalog, cart and enrollment access for one request's session.
Used directly by the API routes and as the in-process data source
for the page controllers.
"""

import logging
from typing import Optional, Protocol

from ..core.config import settings
from ..core.errors import BadRequest, NotFound, Unauthorized
from ..core.session import Session, SessionState
from ..database.carts import CartDatabase, StockExceededError, cart_db
from ..database.enrollments import EnrollmentDatabase, enrollment_db
from ..database.products import ProductDatabase, product_db
from ..models.cart import Cart
from ..models.enrollment import Enrollment
from ..models.product import Category, Product
from ..models.upload import SystemSettings

logger = logging.getLogger(__name__)


class PortalDataSource(Protocol):
    """Data the page controllers need; served in-process or over HTTP"""

    async def list_products(
        self, search: Optional[str] = None, category: Optional[str] = None
    ) -> list[Product]: ...

    async def list_categories(self) -> list[Category]: ...

    async def get_cart(self) -> Cart: ...

    async def add_to_cart(self, product_id: str, quantity: int = 1) -> Cart: ...

    async def list_enrollments(self) -> list[Enrollment]: ...

    async def get_system_settings(self) -> SystemSettings: ...


class PortalService:
    """Portal data access scoped to a session state"""

    def __init__(
        self,
        state: SessionState,
        products: Optional[ProductDatabase] = None,
        carts: Optional[CartDatabase] = None,
        enrollments: Optional[EnrollmentDatabase] = None,
    ):
        self.state = state
        self.products = products or product_db
        self.carts = carts or cart_db
        self.enrollments = enrollments or enrollment_db

    # ==================== Catalog ====================

    async def list_products(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> list[Product]:
        return self.products.list_products(search=search, category=category)

    async def list_categories(self) -> list[Category]:
        return self.products.list_categories()

    async def get_product(self, product_id: str) -> Product:
        product = self.products.get_product(product_id)
        if not product or not product.is_active:
            raise NotFound("Product not found")
        return product

    # ==================== Cart ====================

    async def get_cart(self) -> Cart:
        customer = self._require_customer()
        return self.carts.get_cart(customer.user_id)

    async def add_to_cart(self, product_id: str, quantity: int = 1) -> Cart:
        """Add to the customer's cart; the cart never exceeds product stock"""
        customer = self._require_customer()

        if quantity < 1:
            raise BadRequest("Quantity must be at least 1")

        product = self.products.get_product(product_id)
        if not product:
            raise NotFound("Product not found")
        if not product.is_active:
            raise BadRequest("Product is not available")

        try:
            cart = self.carts.add_item(customer.user_id, product, quantity)
        except StockExceededError as e:
            raise BadRequest(str(e))

        logger.info(f"Added {quantity}x {product.id} to cart of {customer.user_id}")
        return cart

    # ==================== Enrollments ====================

    async def list_enrollments(self) -> list[Enrollment]:
        customer = self._require_customer()
        return self.enrollments.list_active(customer.user_id)

    # ==================== Settings ====================

    async def get_system_settings(self) -> SystemSettings:
        return SystemSettings(
            system_name=settings.system_name,
            primary_color=settings.primary_color,
            secondary_color=settings.secondary_color,
            logo_url=settings.logo_url,
        )

    def _require_customer(self) -> Session:
        customer = self.state.customer
        if customer is None:
            raise Unauthorized("Customer login required")
        return customer
