from datetime import datetime

from pydantic import Field

from ucms.schemas.base import CamelModel
from ucms.schemas.course import CourseBrief, CourseWithInstructor
from ucms.schemas.user import UserBrief


class ResultCreate(CamelModel):
    # Required fields are checked by the result service so a missing one
    # yields a single "provide all required fields" error.
    student_id: int | None = None
    course_id: int | None = None
    grade: str | None = Field(default=None, max_length=4)
    score: float | None = Field(default=None, ge=0, le=100)
    semester: str | None = Field(default=None, max_length=32)
    academic_year: str | None = Field(default=None, max_length=16)
    remarks: str | None = None


class ResultUpdate(CamelModel):
    grade: str | None = Field(default=None, min_length=1, max_length=4)
    score: float | None = Field(default=None, ge=0, le=100)
    semester: str | None = Field(default=None, min_length=1, max_length=32)
    academic_year: str | None = Field(default=None, min_length=1, max_length=16)
    remarks: str | None = None


class ResultRead(CamelModel):
    id: int
    student: UserBrief
    course: CourseBrief
    semester: str
    academic_year: str
    grade: str
    score: float | None = None
    remarks: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class MyResultRead(ResultRead):
    course: CourseWithInstructor


class StudentResults(CamelModel):
    student: UserBrief
    results: list[ResultRead]
