import pytest
from fastapi.testclient import TestClient

from media import StoredMedia

from app.main import app
from app.core.config import settings
from app.core.session import Role, Session, SessionResolver, UserType
from app.database import cart_db, enrollment_db, product_db
from app.routes.upload import get_upload_gateway
from app.services.uploads import MediaUploadGateway


class FakeMediaStore:
    """Media store that records every put"""

    def __init__(self, error: Exception = None):
        self.calls = []
        self.error = error

    def put(self, data, key, transform):
        self.calls.append({"data": data, "key": key, "transform": transform})
        if self.error:
            raise self.error
        return StoredMedia(
            url=f"https://res.cloudinary.com/demo/image/upload/crm-system/{key}.jpg",
            public_id=f"crm-system/{key}",
        )


@pytest.fixture(autouse=True)
def reset_state():
    product_db.reset()
    cart_db.reset()
    enrollment_db.reset()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def resolver():
    return SessionResolver(settings.session_secret, settings.session_algorithm)


@pytest.fixture
def customer():
    return Session(
        user_id="customer-001",
        email="hanako@example.com",
        display_name="Hanako",
        role=Role.CUSTOMER,
        user_type=UserType.CUSTOMER,
    )


@pytest.fixture
def new_customer():
    return Session(
        user_id="customer-002",
        email="taro@example.com",
        display_name="Taro",
        role=Role.CUSTOMER,
        user_type=UserType.CUSTOMER,
    )


@pytest.fixture
def admin():
    return Session(
        user_id="staff-001",
        email="admin@example.com",
        display_name="Admin",
        role=Role.ADMIN,
        user_type=UserType.ADMIN,
    )


@pytest.fixture
def auth_headers(resolver):
    def make(session):
        return {"Authorization": f"Bearer {resolver.issue(session)}"}

    return make


@pytest.fixture
def media_store():
    return FakeMediaStore()


@pytest.fixture
def upload_gateway(media_store):
    gateway = MediaUploadGateway(store=media_store)
    app.dependency_overrides[get_upload_gateway] = lambda: gateway
    return gateway
