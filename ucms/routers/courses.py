from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ucms.core.deps import get_db
from ucms.core.permissions import require_admin
from ucms.models.user import User
from ucms.schemas.base import Message
from ucms.schemas.course import CourseCreate, CourseRead, CourseUpdate
from ucms.services import courses as course_service

router = APIRouter()


@router.get("", response_model=list[CourseRead])
def list_courses(db: Session = Depends(get_db)):
    return course_service.list_courses(db)


@router.get("/{course_id}", response_model=CourseRead)
def get_course(course_id: int, db: Session = Depends(get_db)):
    return course_service.get_course(db, course_id)


@router.post("", response_model=CourseRead, status_code=status.HTTP_201_CREATED)
def create_course(
    payload: CourseCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    return course_service.create_course(db, payload)


@router.put("/{course_id}", response_model=CourseRead)
def update_course(
    course_id: int,
    payload: CourseUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    return course_service.update_course(db, course_id, payload)


@router.delete("/{course_id}", response_model=Message)
def delete_course(
    course_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    course_service.delete_course(db, course_id)
    return {"success": True, "message": "Course deleted successfully"}
