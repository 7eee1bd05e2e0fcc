import pytest

from ucms.client.course_list import CourseListView
from ucms.client.results_view import ResultsView
from ucms.client.session import TOKEN_KEY, ApiError, AuthSession, AuthState
from ucms.client.storage import FileStorage, MemoryStorage
from tests.conftest import PASSWORD


def test_new_session_is_loading(client):
    session = AuthSession(client)
    assert session.state is AuthState.LOADING


def test_start_without_token_is_unauthenticated(client):
    session = AuthSession(client)
    assert session.start() is AuthState.UNAUTHENTICATED
    assert session.user is None


def test_start_with_rejected_token_clears_it(client):
    storage = MemoryStorage({TOKEN_KEY: "stale-token"})
    session = AuthSession(client, storage)

    assert session.start() is AuthState.UNAUTHENTICATED
    assert storage.get(TOKEN_KEY) is None


def test_start_with_valid_token_loads_profile(client):
    first = AuthSession(client)
    first.login("student1@example.com", PASSWORD)

    second = AuthSession(client, MemoryStorage({TOKEN_KEY: first.token}))
    assert second.start() is AuthState.AUTHENTICATED
    assert second.user["email"] == "student1@example.com"


def test_login_persists_token(client):
    storage = MemoryStorage()
    session = AuthSession(client, storage)

    session.login("student1@example.com", PASSWORD)

    assert session.state is AuthState.AUTHENTICATED
    assert session.user["name"] == "Alice Student"
    assert storage.get(TOKEN_KEY)


def test_failed_login_raises_and_stays_logged_out(client):
    session = AuthSession(client, MemoryStorage({TOKEN_KEY: "old"}))

    with pytest.raises(ApiError) as exc_info:
        session.login("student1@example.com", "wrong-password")

    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "Invalid credentials"
    assert session.state is AuthState.UNAUTHENTICATED
    assert session.token is None


def test_register_authenticates(client):
    session = AuthSession(client)
    session.register("Dana New", "dana@example.com", "secret123")
    assert session.is_authenticated
    assert session.user["role"] == "student"


def test_logout_clears_token(client):
    session = AuthSession(client)
    session.login("student1@example.com", PASSWORD)

    session.logout()

    assert session.state is AuthState.UNAUTHENTICATED
    assert session.token is None


def test_any_401_drops_the_session(client, seed, admin_headers):
    session = AuthSession(client)
    session.login("student1@example.com", PASSWORD)
    client.delete(f"/api/students/{seed['student1']}", headers=admin_headers)

    with pytest.raises(ApiError) as exc_info:
        session.request("GET", "/enroll/my-courses")

    assert exc_info.value.status_code == 401
    assert session.state is AuthState.UNAUTHENTICATED
    assert session.token is None


def test_listeners_see_transitions(client):
    seen = []
    session = AuthSession(client)
    unsubscribe = session.subscribe(lambda s: seen.append(s.state))

    session.login("student1@example.com", PASSWORD)
    session.logout()
    unsubscribe()
    session.start()

    assert seen == [AuthState.AUTHENTICATED, AuthState.UNAUTHENTICATED]


def test_file_storage_survives_new_instance(tmp_path):
    path = tmp_path / "state" / "storage.json"
    FileStorage(path).set(TOKEN_KEY, "abc")

    storage = FileStorage(path)
    assert storage.get(TOKEN_KEY) == "abc"
    storage.remove(TOKEN_KEY)
    assert FileStorage(path).get(TOKEN_KEY) is None


def test_course_list_enroll_refreshes_from_server(client, seed):
    session = AuthSession(client)
    session.login("student2@example.com", PASSWORD)
    view = CourseListView(session)
    view.refresh()

    math = next(c for c in view.courses if c["id"] == seed["math201"])
    assert view.can_enroll(math)
    assert view.enroll_label(math) == "Enroll"

    assert view.enroll(seed["math201"]) is True
    assert view.success == "Successfully enrolled in course"
    assert view.busy[seed["math201"]] is False

    math = next(c for c in view.courses if c["id"] == seed["math201"])
    assert view.is_enrolled(math)
    assert view.enroll_label(math) == "Unenroll"
    assert view.enrollment_text(math) == "1 / 1"


def test_course_list_full_course_cannot_be_enrolled(client, seed):
    first = AuthSession(client)
    first.login("student2@example.com", PASSWORD)
    CourseListView(first).enroll(seed["math201"])

    session = AuthSession(client)
    session.login("student1@example.com", PASSWORD)
    view = CourseListView(session)
    view.refresh()

    math = next(c for c in view.courses if c["id"] == seed["math201"])
    assert not view.can_enroll(math)
    assert view.enroll_label(math) == "Full"

    # server enforces capacity even if the button is bypassed
    assert view.enroll(seed["math201"]) is False
    assert view.error == "Course is full"
    view.dismiss_error()
    assert view.error == ""


def test_course_list_ignores_busy_course(client, seed):
    session = AuthSession(client)
    session.login("student2@example.com", PASSWORD)
    view = CourseListView(session)
    view.busy[seed["cs101"]] = True

    assert view.enroll(seed["cs101"]) is False
    assert view.enroll_label({"id": seed["cs101"], "capacity": 30}) == "Processing..."


def test_admin_course_actions_refetch(client):
    session = AuthSession(client)
    session.login("admin1@example.com", PASSWORD)
    view = CourseListView(session)

    assert view.add_course({"code": "BIO100", "title": "Biology"}) is True
    assert "BIO100" in [c["code"] for c in view.courses]
    assert view.success == "Course added successfully"

    bio = next(c for c in view.courses if c["code"] == "BIO100")
    assert not view.can_enroll(bio)
    assert view.delete_course(bio["id"]) is True
    assert "BIO100" not in [c["code"] for c in view.courses]


def test_results_view_add_and_reload(client, seed):
    session = AuthSession(client)
    session.login("admin1@example.com", PASSWORD)
    view = ResultsView(session)
    view.load_student(seed["student1"])
    assert view.results == []

    ok = view.add(
        {
            "studentId": seed["student1"],
            "courseId": seed["cs101"],
            "grade": "a",
            "semester": "Fall",
            "academicYear": "2024-2025",
        }
    )
    assert ok is True
    assert [r["grade"] for r in view.results] == ["A"]

    not_enrolled = {
        "studentId": seed["student2"],
        "courseId": seed["cs101"],
        "grade": "B",
        "semester": "Fall",
        "academicYear": "2024-2025",
    }
    assert view.add(not_enrolled) is False
    assert view.error == "Student is not enrolled in this course"


def test_rejected_token_notifies_listeners_once(client):
    seen = []
    storage = MemoryStorage({TOKEN_KEY: "stale-token"})
    session = AuthSession(client, storage)
    session.subscribe(lambda s: seen.append(s.state))

    with pytest.raises(ApiError):
        session.load_user()

    assert seen == [AuthState.UNAUTHENTICATED]
    assert storage.get(TOKEN_KEY) is None


def test_course_without_capacity_uses_default(client):
    view = CourseListView(AuthSession(client))
    course = {"id": 1, "enrollmentCount": 5}

    assert not view.is_full(course)
    assert view.enrollment_text(course) == "5 / 30"
    assert view.is_full({"id": 1, "enrollmentCount": 30})
