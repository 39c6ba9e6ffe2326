"""Enrollment models for the shop portal"""

from pydantic import Field
from typing import Optional
from datetime import datetime

from .base import CamelModel


class Course(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    price: int = 0


class Enrollment(CamelModel):
    """A customer's registration in a course"""
    id: str
    user_id: Optional[str] = Field(default=None, exclude=True)
    course_id: str
    enrolled_at: datetime
    status: str = "ACTIVE"
    course: Course

    @property
    def is_active(self) -> bool:
        return self.status == "ACTIVE"


class EnrollmentListResponse(CamelModel):
    enrollments: list[Enrollment]
