from ucms.schemas.base import CamelModel
from ucms.schemas.course import CourseRead, CourseRoster
from ucms.schemas.user import UserBrief


class EnrollmentResponse(CamelModel):
    success: bool = True
    message: str
    course: CourseRead


class StudentEnrollments(CamelModel):
    student: UserBrief
    enrollments: list[CourseRoster]
