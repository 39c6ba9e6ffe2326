"""
Portal API Client

HTTP client for the portal's JSON API, for consumers that talk to the
portal over the network. Implements the same data source interface as
the in-process PortalService.
"""

import logging
from typing import Any, Optional

import httpx

from ..core.errors import PortalError, ServiceUnavailable
from ..models.cart import Cart, CartResponse
from ..models.enrollment import Enrollment, EnrollmentListResponse
from ..models.product import Category, CategoryListResponse, Product, ProductListResponse
from ..models.upload import SystemSettings

logger = logging.getLogger(__name__)


class PortalClient:
    """
    Client for the shop portal API.

    Authenticates with the session token as a bearer token.
    """

    def __init__(
        self,
        base_url: str,
        session_token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize portal client.

        Args:
            base_url: Base URL of the portal
            session_token: Token issued by the auth provider
            timeout: Request timeout in seconds
            transport: Custom transport (e.g. httpx.ASGITransport in tests)
        """
        self.base_url = base_url.rstrip("/")
        headers = {"Accept": "application/json"}
        if session_token:
            headers["Authorization"] = f"Bearer {session_token}"
        self._http_client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def __aenter__(self) -> "PortalClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        body: Optional[dict] = None,
    ) -> Any:
        """Make an HTTP request, raising PortalError for error responses"""
        try:
            response = await self._http_client.request(
                method=method,
                url=path,
                params=params,
                json=body,
            )
        except httpx.HTTPError as e:
            logger.error(f"Request to {path} failed: {e}")
            raise ServiceUnavailable("Portal is unreachable", details=str(e))

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            try:
                payload = response.json()
            except ValueError:
                payload = None
            raise PortalError.from_response(response.status_code, payload)

        return response.json()

    # ==================== Catalog APIs ====================

    async def list_products(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> list[Product]:
        """List active products matching the filters"""
        params = {}
        if search:
            params["search"] = search
        if category:
            params["category"] = category
        data = await self._request("GET", "/api/products", params=params)
        return ProductListResponse.model_validate(data).products

    async def get_product(self, product_id: str) -> Product:
        data = await self._request("GET", f"/api/products/{product_id}")
        return Product.model_validate(data)

    async def list_categories(self) -> list[Category]:
        data = await self._request("GET", "/api/categories")
        return CategoryListResponse.model_validate(data).categories

    # ==================== Cart APIs ====================

    async def get_cart(self) -> Cart:
        data = await self._request("GET", "/api/cart")
        return Cart.model_validate(data)

    async def add_to_cart(self, product_id: str, quantity: int = 1) -> Cart:
        """Add item to cart"""
        data = await self._request(
            "POST",
            "/api/cart/items",
            body={"productId": product_id, "quantity": quantity},
        )
        return CartResponse.model_validate(data).cart

    # ==================== Account APIs ====================

    async def list_enrollments(self) -> list[Enrollment]:
        data = await self._request("GET", "/api/customer-enrollments")
        return EnrollmentListResponse.model_validate(data).enrollments

    async def get_system_settings(self) -> SystemSettings:
        data = await self._request("GET", "/api/system-settings")
        return SystemSettings.model_validate(data)
