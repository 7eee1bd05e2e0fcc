"""Admin grade management for one student, plus the student's own transcript."""

from ucms.client.api import ResultAPI, StudentAPI
from ucms.client.session import ApiError, AuthSession


class ResultsView:
    def __init__(self, session: AuthSession):
        self.session = session
        self.result_api = ResultAPI(session)
        self.student_api = StudentAPI(session)

        self.student: dict | None = None
        self.results: list[dict] = []
        self.error = ""
        self.success = ""
        self.submitting = False

    def load_student(self, student_id: int) -> list[dict]:
        try:
            data = self.result_api.for_student(student_id)
        except ApiError as exc:
            self.error = exc.message
            return self.results
        self.student = data["student"]
        self.results = data["results"]
        return self.results

    def load_mine(self) -> list[dict]:
        try:
            self.results = self.result_api.mine()
        except ApiError as exc:
            self.error = exc.message
        return self.results

    def add(self, data: dict) -> bool:
        return self._submit(lambda: self.result_api.add(data), "Result added successfully")

    def update(self, result_id: int, data: dict) -> bool:
        return self._submit(
            lambda: self.result_api.update(result_id, data), "Result updated successfully"
        )

    def delete(self, result_id: int) -> bool:
        return self._submit(
            lambda: self.result_api.delete(result_id), "Result deleted successfully"
        )

    def _submit(self, call, message: str) -> bool:
        if self.submitting:
            return False

        self.submitting = True
        try:
            call()
        except ApiError as exc:
            self.error = exc.message
            return False
        finally:
            self.submitting = False

        if self.student:
            self.load_student(self.student["id"])
        self.success = message
        return True

    def dismiss_error(self) -> None:
        self.error = ""
