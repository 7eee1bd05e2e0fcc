from datetime import datetime

from pydantic import Field

from ucms.core.config import DEFAULT_CAPACITY, DEFAULT_CREDITS
from ucms.schemas.base import CamelModel
from ucms.schemas.user import UserBrief


class CourseCreate(CamelModel):
    code: str = Field(min_length=1, max_length=32)
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    credits: int = Field(default=DEFAULT_CREDITS, ge=0, le=30)
    instructor: str | None = Field(default=None, max_length=255)
    capacity: int = Field(default=DEFAULT_CAPACITY, ge=1)


class CourseUpdate(CamelModel):
    code: str | None = Field(default=None, min_length=1, max_length=32)
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    credits: int | None = Field(default=None, ge=0, le=30)
    instructor: str | None = Field(default=None, max_length=255)
    capacity: int | None = Field(default=None, ge=1)


class CourseRead(CamelModel):
    id: int
    code: str
    title: str
    description: str | None = None
    credits: int
    instructor: str | None = None
    capacity: int
    enrollment_count: int
    enrolled_students: list[int] = []
    created_at: datetime | None = None


class CourseBrief(CamelModel):
    id: int
    code: str
    title: str
    credits: int


class CourseWithInstructor(CourseBrief):
    instructor: str | None = None


class CourseRoster(CamelModel):
    """A course with its enrolled students expanded."""

    id: int
    code: str
    title: str
    credits: int
    instructor: str | None = None
    capacity: int
    enrollment_count: int
    enrolled_students: list[UserBrief] = []
