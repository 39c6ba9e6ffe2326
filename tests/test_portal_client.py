import httpx
import pytest

from app.core.errors import BadRequest, NotFound, Unauthorized
from app.main import app
from app.services.portal_client import PortalClient


@pytest.fixture
def make_client(resolver):
    def make(session=None):
        client = PortalClient(
            base_url="http://testserver",
            session_token=resolver.issue(session) if session else None,
            transport=httpx.ASGITransport(app=app),
        )
        return client

    return make


async def test_list_products(make_client):
    async with make_client() as client:
        products = await client.list_products(search="shirt", category="cat-apparel")
    assert [p.id for p in products] == ["prod-003", "prod-004"]
    assert products[0].category.name == "Apparel"


async def test_list_categories(make_client):
    async with make_client() as client:
        categories = await client.list_categories()
    assert len(categories) == 3


async def test_get_product_not_found(make_client):
    async with make_client() as client:
        with pytest.raises(NotFound) as exc_info:
            await client.get_product("missing")
    assert exc_info.value.message == "Product not found"


async def test_cart_round_trip(make_client, customer):
    async with make_client(customer) as client:
        cart = await client.add_to_cart("prod-001", 2)
        assert cart.item_count == 2
        assert (await client.get_cart()).items[0].product_id == "prod-001"


async def test_cart_requires_customer(make_client):
    async with make_client() as client:
        with pytest.raises(Unauthorized):
            await client.get_cart()


async def test_add_error_is_mapped(make_client, customer):
    async with make_client(customer) as client:
        with pytest.raises(BadRequest) as exc_info:
            await client.add_to_cart("prod-004")
    assert exc_info.value.message == "Insufficient stock. Available: 0"


async def test_enrollments_and_settings(make_client, customer):
    async with make_client(customer) as client:
        enrollments = await client.list_enrollments()
        system_settings = await client.get_system_settings()
    assert [e.course_id for e in enrollments] == ["course-101"]
    assert system_settings.system_name
