import os

TEST_DB_FILE = "test_ucms.db"
TEST_DB_URL = f"sqlite:///./{TEST_DB_FILE}"

# must be set before ucms is imported so startup init_db targets the test file
os.environ.setdefault("UCMS_DATABASE_URL", TEST_DB_URL)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from ucms.core.deps import get_db  # noqa: E402
from ucms.core.security import hash_password  # noqa: E402
from ucms.db.base import Base  # noqa: E402
from ucms.main import app  # noqa: E402
from ucms.models.course import Course  # noqa: E402
from ucms.models.enrollment import Enrollment  # noqa: E402
from ucms.models.result import Result  # noqa: E402
from ucms.models.user import ADMIN, STUDENT, User  # noqa: E402

PASSWORD = "password123"

engine = create_engine(
    TEST_DB_URL,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """Create a fresh schema once for the whole test session."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if os.path.exists(TEST_DB_FILE):
        os.remove(TEST_DB_FILE)


@pytest.fixture(autouse=True)
def seed():
    """Seed a clean minimal dataset for each test and return its ids.

    - admin1, student1 (Alice), student2 (Bob)
    - CS101 (capacity 30) with student1 enrolled
    - MATH201 (capacity 1), empty
    """
    db = TestingSessionLocal()
    try:
        # Clear tables (child -> parent)
        db.query(Result).delete()
        db.query(Enrollment).delete()
        db.query(Course).delete()
        db.query(User).delete()
        db.commit()

        admin = User(
            name="Admin One",
            email="admin1@example.com",
            role=ADMIN,
            hashed_password=hash_password(PASSWORD),
        )
        student1 = User(
            name="Alice Student",
            email="student1@example.com",
            role=STUDENT,
            hashed_password=hash_password(PASSWORD),
        )
        student2 = User(
            name="Bob Student",
            email="student2@example.com",
            role=STUDENT,
            hashed_password=hash_password(PASSWORD),
        )
        db.add_all([admin, student1, student2])
        db.commit()

        cs101 = Course(
            code="CS101",
            title="Intro to Programming",
            credits=3,
            instructor="Dr. Turing",
            capacity=30,
            enrollment_count=1,
        )
        math201 = Course(
            code="MATH201",
            title="Linear Algebra",
            credits=4,
            instructor="Dr. Noether",
            capacity=1,
            enrollment_count=0,
        )
        db.add_all([cs101, math201])
        db.commit()

        db.add(Enrollment(course_id=cs101.id, student_id=student1.id))
        db.commit()

        yield {
            "admin": admin.id,
            "student1": student1.id,
            "student2": student2.id,
            "cs101": cs101.id,
            "math201": math201.id,
        }
    finally:
        db.close()


@pytest.fixture()
def client():
    """Test client that uses the test DB session via dependency override."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def login(client, email: str, password: str = PASSWORD) -> str:
    r = client.post("/api/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["token"]


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers(client):
    return auth_header(login(client, "admin1@example.com"))


@pytest.fixture()
def student_headers(client):
    return auth_header(login(client, "student1@example.com"))


@pytest.fixture()
def student2_headers(client):
    return auth_header(login(client, "student2@example.com"))
