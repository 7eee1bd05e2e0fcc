import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from ucms.core.errors import BadRequestError, ConflictError, NotFoundError, ValidationError
from ucms.models.course import Course
from ucms.models.enrollment import Enrollment
from ucms.models.result import Result
from ucms.models.user import User
from ucms.schemas.result import ResultCreate, ResultUpdate
from ucms.services.students import ensure_student

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("student_id", "course_id", "grade", "semester", "academic_year")
NON_NULLABLE_UPDATE_FIELDS = ("grade", "semester", "academic_year")

DUPLICATE_MESSAGE = (
    "Result already exists for this student, course, semester, and academic year"
)


def _results_order_by():
    """Newest academic year first, then semester A-Z, then insertion order."""
    return (
        Result.academic_year.desc(),
        Result.semester.asc(),
        Result.id.asc(),
    )


def _load_result(db: Session, result_id: int) -> Result:
    result = (
        db.query(Result)
        .options(joinedload(Result.student), joinedload(Result.course))
        .filter(Result.id == result_id)
        .first()
    )
    if not result:
        raise NotFoundError("Result not found")
    return result


def _commit_or_conflict(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(DUPLICATE_MESSAGE)


def add_result(db: Session, payload: ResultCreate) -> Result:
    data = payload.model_dump()
    # blank strings count as missing
    missing = [
        field
        for field in REQUIRED_FIELDS
        if data[field] is None or (isinstance(data[field], str) and not data[field].strip())
    ]
    if missing:
        raise ValidationError("Please provide all required fields")

    student = ensure_student(db, payload.student_id)

    course = db.get(Course, payload.course_id)
    if not course:
        raise NotFoundError("Course not found")

    enrolled = (
        db.query(Enrollment)
        .filter(
            Enrollment.course_id == course.id,
            Enrollment.student_id == student.id,
        )
        .first()
    )
    if not enrolled:
        raise BadRequestError("Student is not enrolled in this course")

    # fast path for the common duplicate; the unique constraint covers races
    existing = (
        db.query(Result)
        .filter(
            Result.student_id == student.id,
            Result.course_id == course.id,
            Result.semester == payload.semester.strip(),
            Result.academic_year == payload.academic_year.strip(),
        )
        .first()
    )
    if existing:
        raise ConflictError(DUPLICATE_MESSAGE)

    result = Result(
        student_id=student.id,
        course_id=course.id,
        grade=payload.grade.strip().upper(),
        score=payload.score,
        semester=payload.semester.strip(),
        academic_year=payload.academic_year.strip(),
        remarks=payload.remarks,
    )
    db.add(result)
    _commit_or_conflict(db)

    logger.info(
        "Recorded result %s for student %s in %s (%s %s)",
        result.grade,
        student.id,
        course.code,
        result.semester,
        result.academic_year,
    )
    return _load_result(db, result.id)


def get_student_results(db: Session, student_id: int) -> dict:
    student = ensure_student(db, student_id)
    results = (
        db.query(Result)
        .options(joinedload(Result.student), joinedload(Result.course))
        .filter(Result.student_id == student.id)
        .order_by(*_results_order_by())
        .all()
    )
    return {"student": student, "results": results}


def get_my_results(db: Session, me: User) -> list[Result]:
    return get_student_results(db, me.id)["results"]


def update_result(db: Session, result_id: int, patch: ResultUpdate) -> Result:
    result = _load_result(db, result_id)

    changes = patch.model_dump(exclude_unset=True)
    for field in NON_NULLABLE_UPDATE_FIELDS:
        if field not in changes:
            continue
        value = changes[field].strip() if changes[field] is not None else ""
        if not value:
            raise ValidationError(f"{field} cannot be empty")
        changes[field] = value

    if "grade" in changes:
        changes["grade"] = changes["grade"].upper()

    for field, value in changes.items():
        setattr(result, field, value)

    _commit_or_conflict(db)
    logger.info("Updated result %s (%s)", result_id, ", ".join(sorted(changes)) or "no changes")
    return _load_result(db, result_id)


def delete_result(db: Session, result_id: int) -> None:
    result = _load_result(db, result_id)
    db.delete(result)
    db.commit()
    logger.info("Deleted result %s", result_id)
