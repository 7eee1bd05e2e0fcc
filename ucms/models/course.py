from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ucms.core.config import DEFAULT_CAPACITY, DEFAULT_CREDITS
from ucms.db.base_class import Base


class Course(Base):
    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    code: Mapped[str] = mapped_column(String(32), unique=True, index=True, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    credits: Mapped[int] = mapped_column(nullable=False, default=DEFAULT_CREDITS)
    instructor: Mapped[str | None] = mapped_column(String(255))
    capacity: Mapped[int] = mapped_column(nullable=False, default=DEFAULT_CAPACITY)
    # kept in step with the enrollments rows; bumped by a conditional UPDATE
    enrollment_count: Mapped[int] = mapped_column(nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        CheckConstraint("enrollment_count >= 0", name="ck_courses_enrollment_nonnegative"),
        CheckConstraint("enrollment_count <= capacity", name="ck_courses_enrollment_capacity"),
    )

    # roster in sign-up order
    enrollments = relationship(
        "Enrollment",
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="Enrollment.id",
    )

    results = relationship(
        "Result", back_populates="course", cascade="all, delete-orphan"
    )

    @property
    def enrolled_students(self) -> list[int]:
        return [e.student_id for e in self.enrollments]

    @property
    def is_full(self) -> bool:
        return self.enrollment_count >= self.capacity
