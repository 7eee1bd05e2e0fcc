from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ucms.core.current_user import get_current_user
from ucms.core.deps import get_db
from ucms.core.permissions import require_admin
from ucms.models.user import User
from ucms.schemas.base import Message
from ucms.schemas.result import (
    MyResultRead,
    ResultCreate,
    ResultRead,
    ResultUpdate,
    StudentResults,
)
from ucms.services import results as result_service

router = APIRouter()


@router.post(
    "",
    response_model=ResultRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing fields, not enrolled, or duplicate result"},
        404: {"description": "Student or course not found"},
    },
)
def add_result(
    payload: ResultCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    return result_service.add_result(db, payload)


@router.get("/my-results", response_model=list[MyResultRead])
def my_results(
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    return result_service.get_my_results(db, me)


@router.get("/student/{student_id}", response_model=StudentResults)
def student_results(
    student_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    return result_service.get_student_results(db, student_id)


@router.put("/{result_id}", response_model=ResultRead)
def update_result(
    result_id: int,
    payload: ResultUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    return result_service.update_result(db, result_id, payload)


@router.delete("/{result_id}", response_model=Message)
def delete_result(
    result_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    result_service.delete_result(db, result_id)
    return {"success": True, "message": "Result deleted successfully"}
