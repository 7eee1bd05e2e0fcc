from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ucms.core.deps import get_db
from ucms.core.permissions import require_student
from ucms.models.user import User
from ucms.schemas.course import CourseRead
from ucms.schemas.enrollment import EnrollmentResponse
from ucms.services import enrollments as enrollment_service

router = APIRouter()


# declared before /{course_id} so "my-courses" is not read as an id
@router.get("/my-courses", response_model=list[CourseRead])
def my_courses(
    db: Session = Depends(get_db),
    me: User = Depends(require_student),
):
    return enrollment_service.my_courses(db, me)


@router.post(
    "/{course_id}",
    response_model=EnrollmentResponse,
    status_code=status.HTTP_201_CREATED,
)
def enroll_me(
    course_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(require_student),
):
    course = enrollment_service.enroll(db, course_id, me)
    return {
        "success": True,
        "message": "Successfully enrolled in course",
        "course": course,
    }


@router.delete("/{course_id}", response_model=EnrollmentResponse)
def unenroll_me(
    course_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(require_student),
):
    course = enrollment_service.unenroll(db, course_id, me)
    return {
        "success": True,
        "message": "Successfully unenrolled from course",
        "course": course,
    }
