"""Thin wrappers over the REST endpoints, all routed through an AuthSession."""

from ucms.client.session import AuthSession


class CourseAPI:
    def __init__(self, session: AuthSession):
        self.session = session

    def list(self) -> list[dict]:
        return self.session.request("GET", "/courses")

    def get(self, course_id: int) -> dict:
        return self.session.request("GET", f"/courses/{course_id}")

    def create(self, data: dict) -> dict:
        return self.session.request("POST", "/courses", json=data)

    def update(self, course_id: int, data: dict) -> dict:
        return self.session.request("PUT", f"/courses/{course_id}", json=data)

    def delete(self, course_id: int) -> dict:
        return self.session.request("DELETE", f"/courses/{course_id}")


class EnrollmentAPI:
    def __init__(self, session: AuthSession):
        self.session = session

    def enroll(self, course_id: int) -> dict:
        return self.session.request("POST", f"/enroll/{course_id}")

    def unenroll(self, course_id: int) -> dict:
        return self.session.request("DELETE", f"/enroll/{course_id}")

    def my_courses(self) -> list[dict]:
        return self.session.request("GET", "/enroll/my-courses")


class ResultAPI:
    def __init__(self, session: AuthSession):
        self.session = session

    def add(self, data: dict) -> dict:
        return self.session.request("POST", "/results", json=data)

    def for_student(self, student_id: int) -> dict:
        return self.session.request("GET", f"/results/student/{student_id}")

    def mine(self) -> list[dict]:
        return self.session.request("GET", "/results/my-results")

    def update(self, result_id: int, data: dict) -> dict:
        return self.session.request("PUT", f"/results/{result_id}", json=data)

    def delete(self, result_id: int) -> dict:
        return self.session.request("DELETE", f"/results/{result_id}")


class StudentAPI:
    def __init__(self, session: AuthSession):
        self.session = session

    def list(self) -> list[dict]:
        return self.session.request("GET", "/students")

    def get(self, student_id: int) -> dict:
        return self.session.request("GET", f"/students/{student_id}")

    def delete(self, student_id: int) -> dict:
        return self.session.request("DELETE", f"/students/{student_id}")

    def enrollments(self, student_id: int) -> dict:
        return self.session.request("GET", f"/students/{student_id}/enrollments")
