from datetime import datetime, timezone

from app.core.config import settings
from app.database import enrollment_db
from app.models.enrollment import Course, Enrollment


def test_lists_active_enrollments_only(client, auth_headers, customer):
    response = client.get("/api/customer-enrollments", headers=auth_headers(customer))

    assert response.status_code == 200
    enrollments = response.json()["enrollments"]
    assert [e["id"] for e in enrollments] == ["enr-001"]
    assert enrollments[0]["courseId"] == "course-101"
    assert enrollments[0]["status"] == "ACTIVE"
    assert enrollments[0]["course"]["name"] == "Beginner Course"
    assert enrollments[0]["enrolledAt"].startswith("2024-04-01")
    assert "userId" not in enrollments[0]


def test_newest_enrollment_first(client, auth_headers, customer):
    enrollment_db.add_enrollment(
        Enrollment(
            id="enr-010",
            user_id=customer.user_id,
            course_id="course-301",
            enrolled_at=datetime(2025, 1, 10, tzinfo=timezone.utc),
            course=Course(id="course-301", name="Workshop", price=8000),
        )
    )
    response = client.get("/api/customer-enrollments", headers=auth_headers(customer))
    assert [e["id"] for e in response.json()["enrollments"]] == ["enr-010", "enr-001"]


def test_customer_without_enrollments(client, auth_headers, new_customer):
    response = client.get("/api/customer-enrollments", headers=auth_headers(new_customer))
    assert response.status_code == 200
    assert response.json() == {"enrollments": []}


def test_anonymous_is_unauthorized(client):
    response = client.get("/api/customer-enrollments")
    assert response.status_code == 401


def test_staff_is_unauthorized(client, auth_headers, admin):
    response = client.get("/api/customer-enrollments", headers=auth_headers(admin))
    assert response.status_code == 401


def test_system_settings(client, monkeypatch):
    monkeypatch.setattr(settings, "system_name", "Academy")
    monkeypatch.setattr(settings, "logo_url", "https://example.com/logo.png")
    monkeypatch.setattr(settings, "primary_color", None)
    monkeypatch.setattr(settings, "secondary_color", None)

    response = client.get("/api/system-settings")

    assert response.status_code == 200
    assert response.json() == {"systemName": "Academy", "logoUrl": "https://example.com/logo.png"}


def test_health(client):
    response = client.get("/health")
    assert response.json()["status"] == "healthy"
