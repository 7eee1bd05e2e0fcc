import logging

from sqlalchemy import update
from sqlalchemy.orm import Session, selectinload

from ucms.core.errors import NotFoundError
from ucms.models.course import Course
from ucms.models.enrollment import Enrollment
from ucms.models.user import STUDENT, User

logger = logging.getLogger(__name__)


def ensure_student(db: Session, student_id: int | None) -> User:
    """Load a user and insist it is a student; anything else is a 404."""
    user = db.get(User, student_id) if student_id is not None else None
    if user is None or user.role != STUDENT:
        raise NotFoundError("Student not found")
    return user


def get_students(db: Session) -> list[User]:
    return (
        db.query(User)
        .filter(User.role == STUDENT)
        .order_by(User.name.asc(), User.id.asc())
        .all()
    )


def get_student(db: Session, student_id: int) -> User:
    return ensure_student(db, student_id)


def delete_student(db: Session, student_id: int) -> None:
    """Remove a student from every roster and delete the account.

    Roster removal, counter updates and the user delete commit as one
    transaction.
    """
    student = ensure_student(db, student_id)

    enrollments = db.query(Enrollment).filter(Enrollment.student_id == student.id).all()
    course_ids = [e.course_id for e in enrollments]

    try:
        if course_ids:
            db.execute(
                update(Course)
                .where(Course.id.in_(course_ids))
                .values(enrollment_count=Course.enrollment_count - 1)
                .execution_options(synchronize_session=False)
            )
        # user cascade removes the enrollment and result rows
        db.delete(student)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Deleted student %s and removed them from %d course(s)",
        student_id,
        len(course_ids),
    )


def get_student_enrollments(db: Session, student_id: int) -> dict:
    student = ensure_student(db, student_id)

    courses = (
        db.query(Course)
        .join(Enrollment, Enrollment.course_id == Course.id)
        .filter(Enrollment.student_id == student.id)
        .options(selectinload(Course.enrollments).selectinload(Enrollment.student))
        .order_by(Course.code.asc())
        .all()
    )

    enrollments = []
    for c in courses:
        enrollments.append(
            {
                "id": c.id,
                "code": c.code,
                "title": c.title,
                "credits": c.credits,
                "instructor": c.instructor,
                "capacity": c.capacity,
                "enrollment_count": c.enrollment_count,
                "enrolled_students": [e.student for e in c.enrollments],
            }
        )

    return {"student": student, "enrollments": enrollments}
