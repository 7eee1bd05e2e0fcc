from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ucms.core.deps import get_db
from ucms.core.permissions import require_admin
from ucms.models.user import User
from ucms.schemas.base import Message
from ucms.schemas.enrollment import StudentEnrollments
from ucms.schemas.user import StudentRead
from ucms.services import students as student_service

# every students endpoint is admin-only
router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=list[StudentRead])
def list_students(db: Session = Depends(get_db)):
    return student_service.get_students(db)


@router.get("/{student_id}", response_model=StudentRead)
def get_student(student_id: int, db: Session = Depends(get_db)):
    return student_service.get_student(db, student_id)


@router.delete("/{student_id}", response_model=Message)
def delete_student(student_id: int, db: Session = Depends(get_db)):
    student_service.delete_student(db, student_id)
    return {"success": True, "message": "Student deleted successfully"}


@router.get("/{student_id}/enrollments", response_model=StudentEnrollments)
def student_enrollments(student_id: int, db: Session = Depends(get_db)):
    return student_service.get_student_enrollments(db, student_id)
