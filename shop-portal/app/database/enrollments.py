"""Enrollment storage for the shop portal"""

from datetime import datetime, timezone

from ..models.enrollment import Course, Enrollment

COURSES: dict[str, Course] = {
    "course-101": Course(
        id="course-101",
        name="Beginner Course",
        description="Fundamentals over twelve weekly sessions.",
        price=30000,
    ),
    "course-201": Course(
        id="course-201",
        name="Advanced Course",
        description="Seminar-style course for graduates of the beginner course.",
        price=50000,
    ),
}

ENROLLMENTS: list[Enrollment] = [
    Enrollment(
        id="enr-001",
        user_id="customer-001",
        course_id="course-101",
        enrolled_at=datetime(2024, 4, 1, tzinfo=timezone.utc),
        status="ACTIVE",
        course=COURSES["course-101"],
    ),
    Enrollment(
        id="enr-002",
        user_id="customer-001",
        course_id="course-201",
        enrolled_at=datetime(2023, 10, 1, tzinfo=timezone.utc),
        status="COMPLETED",
        course=COURSES["course-201"],
    ),
]


class EnrollmentDatabase:
    """In-memory enrollment storage; enrollments are created elsewhere"""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.enrollments = [e.model_copy() for e in ENROLLMENTS]

    def add_enrollment(self, enrollment: Enrollment) -> Enrollment:
        self.enrollments.append(enrollment)
        return enrollment

    def list_active(self, user_id: str) -> list[Enrollment]:
        """Active enrollments for a customer, newest first"""
        results = [
            e for e in self.enrollments
            if e.user_id == user_id and e.is_active
        ]
        results.sort(key=lambda e: e.enrolled_at, reverse=True)
        return results


# Singleton instance
enrollment_db = EnrollmentDatabase()
