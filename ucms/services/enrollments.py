import logging

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ucms.core.errors import BadRequestError
from ucms.models.course import Course
from ucms.models.enrollment import Enrollment
from ucms.models.user import User
from ucms.services.courses import ensure_course

logger = logging.getLogger(__name__)


def _find_enrollment(db: Session, course_id: int, student_id: int) -> Enrollment | None:
    return (
        db.query(Enrollment)
        .filter(
            Enrollment.course_id == course_id,
            Enrollment.student_id == student_id,
        )
        .first()
    )


def enroll(db: Session, course_id: int, me: User) -> Course:
    """Add the caller to a course roster.

    The seat is claimed with a conditional UPDATE, so two concurrent requests
    cannot both take the last seat; the roster row and the counter commit
    together.
    """
    course = ensure_course(db, course_id)

    if _find_enrollment(db, course.id, me.id):
        raise BadRequestError("Already enrolled in this course")

    claimed = db.execute(
        update(Course)
        .where(Course.id == course.id, Course.enrollment_count < Course.capacity)
        .values(enrollment_count=Course.enrollment_count + 1)
        .execution_options(synchronize_session=False)
    )
    if claimed.rowcount == 0:
        db.rollback()
        raise BadRequestError("Course is full")

    db.add(Enrollment(student_id=me.id, course_id=course.id))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestError("Already enrolled in this course")

    db.refresh(course)
    logger.info(
        "Student %s enrolled in %s (%d/%d)",
        me.id,
        course.code,
        course.enrollment_count,
        course.capacity,
    )
    return course


def unenroll(db: Session, course_id: int, me: User) -> Course:
    course = ensure_course(db, course_id)

    enrollment = _find_enrollment(db, course.id, me.id)
    if not enrollment:
        raise BadRequestError("Not enrolled in this course")

    db.delete(enrollment)
    db.execute(
        update(Course)
        .where(Course.id == course.id, Course.enrollment_count > 0)
        .values(enrollment_count=Course.enrollment_count - 1)
        .execution_options(synchronize_session=False)
    )
    db.commit()

    db.refresh(course)
    logger.info("Student %s unenrolled from %s", me.id, course.code)
    return course


def my_courses(db: Session, me: User) -> list[Course]:
    return (
        db.query(Course)
        .join(Enrollment, Enrollment.course_id == Course.id)
        .filter(Enrollment.student_id == me.id)
        .order_by(Course.code.asc())
        .all()
    )
