"""Shop catalog controller"""

import logging
from typing import Optional

from ..core.config import settings
from ..core.errors import PortalError
from ..core.query_cache import QueryCache
from ..core.session import PageAccess, SessionState, customer_page_access
from ..models.product import Product
from ..services.portal import PortalDataSource
from .dashboard import load_branding
from .results import Loading, Redirect, Render, ViewResult

logger = logging.getLogger(__name__)

LOGIN_REQUIRED_MESSAGE = "Please log in to add items to your cart"
ADDED_MESSAGE = "Added to cart"


class CatalogController:
    """
    Shop catalog with search and category filters.

    Filter changes re-query under a new cache key. Add-to-cart is tracked
    per product so a second click while a request is in flight is ignored.
    """

    def __init__(
        self,
        source: PortalDataSource,
        cache: QueryCache,
        search: str = "",
        category: str = "",
    ):
        self.source = source
        self.cache = cache
        self.search = search
        self.category = category
        self.adding: set[str] = set()
        self.message: Optional[str] = None

    def set_search(self, search: str) -> None:
        self.search = search or ""

    def set_category(self, category: str) -> None:
        self.category = category or ""

    def products_key(self) -> tuple:
        return ("products", self.search.strip(), self.category)

    def can_add(self, product: Product) -> bool:
        """The add button is disabled when out of stock or already adding"""
        return product.stock > 0 and product.id not in self.adding

    async def products(self) -> list[Product]:
        search, category = self.search.strip(), self.category
        return await self.cache.fetch(
            self.products_key(),
            lambda: self.source.list_products(search=search or None, category=category or None),
        )

    async def cart_item_count(self, state: SessionState) -> int:
        """Badge count; 0 when there is no customer cart or it cannot be loaded"""
        if state.customer is None:
            return 0
        try:
            cart = await self.cache.fetch(("cart",), self.source.get_cart)
        except PortalError as e:
            logger.error(f"Error fetching cart: {e}")
            return 0
        return cart.item_count

    async def add_to_cart(
        self,
        state: SessionState,
        product_id: str,
        quantity: int = 1,
        refresh: bool = True,
    ) -> str:
        """
        Add a product and return the message shown to the user.

        With refresh=False the cart is invalidated but not refetched, for
        callers that reload the page right after.
        """
        if state.customer is None:
            self.message = LOGIN_REQUIRED_MESSAGE
            return self.message

        if product_id in self.adding:
            return self.message or ""

        self.adding.add(product_id)
        try:
            await self.source.add_to_cart(product_id, quantity)
            self.cache.invalidate(("cart",))
            if refresh:
                await self.cache.refetch(("cart",), self.source.get_cart)
            self.message = ADDED_MESSAGE
        except PortalError as e:
            logger.error(f"Error adding to cart: {e}")
            self.message = e.message or "Could not add to cart"
        finally:
            self.adding.discard(product_id)

        return self.message

    async def load(self, state: SessionState) -> ViewResult:
        access = customer_page_access(state)
        if access == PageAccess.WAIT:
            return Loading()
        if access == PageAccess.STAFF_DASHBOARD:
            return Redirect(settings.staff_dashboard_url)
        if access == PageAccess.LOGIN:
            return Redirect(settings.login_url)

        products: list[Product] = []
        products_error = None
        try:
            products = await self.products()
        except PortalError as e:
            logger.error(f"Error fetching products: {e}")
            products_error = "Failed to load products"

        try:
            categories = await self.cache.fetch(("categories",), self.source.list_categories)
        except PortalError as e:
            logger.error(f"Error fetching categories: {e}")
            categories = []

        return Render(
            "shop.html",
            {
                "session": state.session,
                "system_settings": await load_branding(self.source, self.cache),
                "search": self.search,
                "category": self.category,
                "categories": categories,
                "products": products,
                "products_error": products_error,
                "can_add": self.can_add,
                "adding": self.adding,
                "cart_item_count": await self.cart_item_count(state),
                "message": self.message,
            },
        )
