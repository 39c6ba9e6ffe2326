import re

import cloudinary.uploader
import pytest

from media import MediaStoreError

from app.core.config import settings
from app.core.session import Role, Session, UserType
from app.main import app
from app.routes.upload import get_upload_gateway
from app.services.uploads import MediaUploadGateway, build_public_id

from conftest import FakeMediaStore

MIB = 1024 * 1024


def staff_session(role: Role) -> Session:
    return Session(
        user_id=f"staff-{role.value.lower()}",
        email=f"{role.value.lower()}@example.com",
        display_name=role.value.title(),
        role=role,
        user_type=UserType.ADMIN,
    )


def jpeg(size: int = MIB, name: str = "product-photo.jpg", content_type: str = "image/jpeg"):
    return {"file": (name, b"\xff" * size, content_type)}


@pytest.fixture
def without_cloudinary(monkeypatch):
    monkeypatch.setattr(settings, "cloudinary_cloud_name", None)
    monkeypatch.setattr(settings, "cloudinary_api_key", None)
    monkeypatch.setattr(settings, "cloudinary_api_secret", None)

    def fail(*args, **kwargs):
        raise AssertionError("Cloudinary must not be called")

    monkeypatch.setattr(cloudinary.uploader, "upload", fail)


class TestAuthorization:
    def test_anonymous_is_forbidden(self, client, upload_gateway, media_store):
        response = client.post("/api/upload", files=jpeg())
        assert response.status_code == 403
        assert response.json() == {"error": "Unauthorized - Admin access required"}
        assert media_store.calls == []

    def test_customer_is_forbidden(self, client, upload_gateway, media_store, auth_headers, customer):
        response = client.post("/api/upload", files=jpeg(), headers=auth_headers(customer))
        assert response.status_code == 403
        assert media_store.calls == []

    def test_invalid_token_is_forbidden(self, client, upload_gateway, media_store):
        response = client.post(
            "/api/upload",
            files=jpeg(),
            headers={"Authorization": "Bearer not-a-token"},
        )
        assert response.status_code == 403

    @pytest.mark.parametrize("role", [Role.OWNER, Role.ADMIN, Role.OPERATOR])
    def test_staff_roles_may_upload(self, client, upload_gateway, media_store, auth_headers, role):
        response = client.post("/api/upload", files=jpeg(), headers=auth_headers(staff_session(role)))
        assert response.status_code == 200
        assert len(media_store.calls) == 1


class TestValidation:
    @pytest.fixture
    def headers(self, auth_headers):
        return auth_headers(staff_session(Role.ADMIN))

    def test_missing_file(self, client, upload_gateway, media_store, headers):
        response = client.post("/api/upload", data={"note": "no file"}, headers=headers)
        assert response.status_code == 400
        assert response.json() == {"error": "No file uploaded"}
        assert media_store.calls == []

    @pytest.mark.parametrize(
        "name,content_type",
        [
            ("doc.pdf", "application/pdf"),
            ("notes.txt", "text/plain"),
            ("icon.svg", "image/svg+xml"),
            ("photo.bmp", "image/bmp"),
        ],
    )
    def test_disallowed_type(self, client, upload_gateway, media_store, headers, name, content_type):
        response = client.post(
            "/api/upload",
            files=jpeg(size=10, name=name, content_type=content_type),
            headers=headers,
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid file type. Only images are allowed."}
        assert media_store.calls == []

    @pytest.mark.parametrize(
        "content_type",
        ["image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"],
    )
    def test_allowed_types(self, client, upload_gateway, media_store, headers, content_type):
        response = client.post(
            "/api/upload",
            files=jpeg(size=10, content_type=content_type),
            headers=headers,
        )
        assert response.status_code == 200

    def test_too_large(self, client, upload_gateway, media_store, headers):
        response = client.post("/api/upload", files=jpeg(size=5 * MIB + 1), headers=headers)
        assert response.status_code == 400
        assert response.json() == {"error": "File size too large. Maximum 5MB allowed."}
        assert media_store.calls == []

    def test_exactly_five_mib_is_accepted(self, client, upload_gateway, media_store, headers):
        response = client.post("/api/upload", files=jpeg(size=5 * MIB), headers=headers)
        assert response.status_code == 200
        assert len(media_store.calls[0]["data"]) == 5 * MIB


class TestForwarding:
    @pytest.fixture
    def headers(self, auth_headers):
        return auth_headers(staff_session(Role.OPERATOR))

    def test_successful_upload(self, client, upload_gateway, media_store, headers):
        response = client.post("/api/upload", files=jpeg(), headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["url"].startswith("https://")
        assert "product-photo" in body["fileName"]
        assert body["cloudinaryId"] == body["fileName"]

        call = media_store.calls[0]
        assert re.fullmatch(r"\d{13}-product-photo", call["key"])
        assert len(call["data"]) == MIB
        assert call["transform"].width == 1000
        assert call["transform"].height == 1000
        assert call["transform"].crop == "limit"
        assert call["transform"].quality == "auto"

    def test_repeated_uploads_use_distinct_keys(self, client, media_store, headers):
        ticks = iter([1700000000.0, 1700000000.5])
        gateway = MediaUploadGateway(store=media_store, clock=lambda: next(ticks))
        app.dependency_overrides[get_upload_gateway] = lambda: gateway

        client.post("/api/upload", files=jpeg(), headers=headers)
        client.post("/api/upload", files=jpeg(), headers=headers)

        keys = [call["key"] for call in media_store.calls]
        assert keys == ["1700000000000-product-photo", "1700000000500-product-photo"]

    def test_store_failure(self, client, headers):
        store = FakeMediaStore(error=MediaStoreError("Invalid Signature"))
        app.dependency_overrides[get_upload_gateway] = lambda: MediaUploadGateway(store=store)

        response = client.post("/api/upload", files=jpeg(), headers=headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Image upload failed", "details": "Invalid Signature"}
        assert len(store.calls) == 1

    def test_unexpected_error(self, client, headers):
        store = FakeMediaStore(error=RuntimeError("disk on fire"))
        app.dependency_overrides[get_upload_gateway] = lambda: MediaUploadGateway(store=store)

        response = client.post("/api/upload", files=jpeg(), headers=headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error", "details": "disk on fire"}


class TestConfiguration:
    @pytest.fixture
    def headers(self, auth_headers):
        return auth_headers(staff_session(Role.OWNER))

    def test_unconfigured_store(self, client, headers, without_cloudinary):
        response = client.post("/api/upload", files=jpeg(), headers=headers)
        assert response.status_code == 500
        assert response.json() == {"error": "Image upload service not configured"}

    def test_unconfigured_store_still_validates_first(self, client, headers, without_cloudinary):
        response = client.post(
            "/api/upload",
            files=jpeg(size=10, name="doc.pdf", content_type="application/pdf"),
            headers=headers,
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid file type. Only images are allowed."}

    def test_unconfigured_gateway(self, client, headers):
        app.dependency_overrides[get_upload_gateway] = lambda: MediaUploadGateway(store=None)
        response = client.post("/api/upload", files=jpeg(), headers=headers)
        assert response.status_code == 500
        assert response.json()["error"] == "Image upload service not configured"

    def test_configured_store_uses_cloudinary(self, client, headers, monkeypatch):
        monkeypatch.setattr(settings, "cloudinary_cloud_name", "demo")
        monkeypatch.setattr(settings, "cloudinary_api_key", "key")
        monkeypatch.setattr(settings, "cloudinary_api_secret", "secret")

        captured = {}

        def fake_upload(file, **options):
            captured["data"] = file.read()
            captured["options"] = options
            return {
                "secure_url": f"https://res.cloudinary.com/demo/image/upload/{options['folder']}/{options['public_id']}.jpg",
                "public_id": f"{options['folder']}/{options['public_id']}",
            }

        monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)

        response = client.post("/api/upload", files=jpeg(size=64), headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["fileName"].startswith("crm-system/")
        assert body["fileName"].endswith("-product-photo")
        assert captured["data"] == b"\xff" * 64
        assert captured["options"]["cloud_name"] == "demo"
        assert captured["options"]["overwrite"] is True
        assert captured["options"]["transformation"] == [
            {"width": 1000, "height": 1000, "crop": "limit"},
            {"quality": "auto"},
        ]


class TestPublicId:
    def test_uses_stem_before_first_dot(self):
        assert build_public_id("photo.final.png", now=lambda: 1700000000.25) == "1700000000250-photo"

    def test_normalizes_unsafe_characters(self):
        assert build_public_id("my photo (1).jpg", now=lambda: 1.0) == "1000-my_photo_1"

    def test_keeps_unicode_word_characters(self):
        assert build_public_id("商品写真.jpg", now=lambda: 1.0) == "1000-商品写真"

    def test_falls_back_when_stem_is_empty(self):
        assert build_public_id(".hidden", now=lambda: 1.0) == "1000-upload"
