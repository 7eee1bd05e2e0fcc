import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from ucms.core.errors import BadRequestError, NotFoundError
from ucms.models.course import Course
from ucms.schemas.course import CourseCreate, CourseUpdate

logger = logging.getLogger(__name__)


def _normalize_code(code: str) -> str:
    code = code.strip().upper()
    if not code:
        raise BadRequestError("code cannot be empty")
    return code


def _normalize_title(title: str) -> str:
    title = title.strip()
    if not title:
        raise BadRequestError("title cannot be empty")
    return title


def ensure_course(db: Session, course_id: int) -> Course:
    course = db.get(Course, course_id)
    if not course:
        raise NotFoundError("Course not found")
    return course


def list_courses(db: Session) -> list[Course]:
    return (
        db.query(Course)
        .options(selectinload(Course.enrollments))
        .order_by(Course.code.asc())
        .all()
    )


def get_course(db: Session, course_id: int) -> Course:
    return ensure_course(db, course_id)


def _commit(db: Session, message: str = "Course code already exists") -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestError(message)


def create_course(db: Session, payload: CourseCreate) -> Course:
    code = _normalize_code(payload.code)
    title = _normalize_title(payload.title)
    if db.query(Course).filter(Course.code == code).first():
        raise BadRequestError("Course code already exists")

    course = Course(
        code=code,
        title=title,
        description=payload.description,
        credits=payload.credits,
        instructor=payload.instructor,
        capacity=payload.capacity,
        enrollment_count=0,
    )
    db.add(course)
    _commit(db)
    db.refresh(course)
    logger.info("Created course %s (capacity %d)", course.code, course.capacity)
    return course


def update_course(db: Session, course_id: int, patch: CourseUpdate) -> Course:
    course = ensure_course(db, course_id)
    changes = patch.model_dump(exclude_unset=True)

    for field in ("code", "title", "credits", "capacity"):
        if field in changes and changes[field] is None:
            raise BadRequestError(f"{field} cannot be empty")

    if "code" in changes:
        changes["code"] = _normalize_code(changes["code"])
    if "title" in changes:
        changes["title"] = _normalize_title(changes["title"])
    if "capacity" in changes and changes["capacity"] < course.enrollment_count:
        raise BadRequestError(
            f"Capacity cannot be lower than current enrollment ({course.enrollment_count})"
        )

    for field, value in changes.items():
        setattr(course, field, value)

    # capacity can race with a concurrent enroll; the check constraint catches it
    _commit(
        db,
        "Course code already exists"
        if "code" in changes
        else "Capacity cannot be lower than current enrollment",
    )
    db.refresh(course)
    logger.info("Updated course %s", course.code)
    return course


def delete_course(db: Session, course_id: int) -> None:
    course = ensure_course(db, course_id)
    code = course.code
    # cascade removes the roster and results of the course
    db.delete(course)
    db.commit()
    logger.info("Deleted course %s", code)
