"""State behind the course table: banners, busy flags, enroll rules."""

import logging

from ucms.client.api import CourseAPI, EnrollmentAPI
from ucms.client.session import ApiError, AuthSession
from ucms.core.config import DEFAULT_CAPACITY

logger = logging.getLogger(__name__)


class CourseListView:
    def __init__(self, session: AuthSession):
        self.session = session
        self.course_api = CourseAPI(session)
        self.enrollment_api = EnrollmentAPI(session)

        self.courses: list[dict] = []
        self.loading = False
        self.error = ""
        self.success = ""
        self.busy: dict[int, bool] = {}

    # loading

    def refresh(self) -> list[dict]:
        """Re-fetch the whole list; mutations never patch it locally."""
        self.loading = True
        try:
            self.courses = self.course_api.list()
        except ApiError as exc:
            self.error = exc.message
        finally:
            self.loading = False
        return self.courses

    # rules

    def is_busy(self, course: dict) -> bool:
        return self.busy.get(course["id"], False)

    def is_enrolled(self, course: dict) -> bool:
        user = self.session.user
        return bool(user) and user["id"] in (course.get("enrolledStudents") or [])

    def is_full(self, course: dict) -> bool:
        return (course.get("enrollmentCount") or 0) >= (course.get("capacity") or DEFAULT_CAPACITY)

    def can_enroll(self, course: dict) -> bool:
        return (
            self.session.is_authenticated
            and not self.session.is_admin
            and not self.is_enrolled(course)
            and not self.is_busy(course)
            and not self.is_full(course)
        )

    def can_unenroll(self, course: dict) -> bool:
        return self.is_enrolled(course) and not self.is_busy(course)

    def enroll_label(self, course: dict) -> str:
        if self.is_busy(course):
            return "Processing..."
        if self.is_enrolled(course):
            return "Unenroll"
        if self.is_full(course):
            return "Full"
        return "Enroll"

    def enrollment_text(self, course: dict) -> str:
        return f"{course.get('enrollmentCount') or 0} / {course.get('capacity') or DEFAULT_CAPACITY}"

    # student actions

    def enroll(self, course_id: int) -> bool:
        return self._mutate_enrollment(
            course_id, self.enrollment_api.enroll, "Successfully enrolled in course"
        )

    def unenroll(self, course_id: int) -> bool:
        return self._mutate_enrollment(
            course_id, self.enrollment_api.unenroll, "Successfully unenrolled from course"
        )

    def _mutate_enrollment(self, course_id: int, call, message: str) -> bool:
        if self.busy.get(course_id):
            return False

        self.busy[course_id] = True
        try:
            call(course_id)
            self.refresh()
            self.success = message
            return True
        except ApiError as exc:
            logger.info("Enrollment change for course %s failed: %s", course_id, exc.message)
            self.error = exc.message
            return False
        finally:
            self.busy[course_id] = False

    # admin actions

    def add_course(self, data: dict) -> bool:
        return self._admin_call(lambda: self.course_api.create(data), "Course added successfully")

    def edit_course(self, course_id: int, data: dict) -> bool:
        return self._admin_call(
            lambda: self.course_api.update(course_id, data), "Course updated successfully"
        )

    def delete_course(self, course_id: int) -> bool:
        return self._admin_call(
            lambda: self.course_api.delete(course_id), "Course deleted successfully"
        )

    def _admin_call(self, call, message: str) -> bool:
        try:
            call()
        except ApiError as exc:
            self.error = exc.message
            return False
        self.refresh()
        self.success = message
        return True

    # banners

    def dismiss_error(self) -> None:
        self.error = ""

    def dismiss_success(self) -> None:
        self.success = ""
