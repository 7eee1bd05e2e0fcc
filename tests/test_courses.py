def test_list_courses_is_public_and_shows_roster(client, seed):
    r = client.get("/api/courses")
    assert r.status_code == 200
    courses = {c["code"]: c for c in r.json()}
    assert courses["CS101"]["enrollmentCount"] == 1
    assert courses["CS101"]["enrolledStudents"] == [seed["student1"]]
    assert courses["MATH201"]["capacity"] == 1


def test_get_missing_course_is_404(client):
    r = client.get("/api/courses/9999")
    assert r.status_code == 404
    assert r.json() == {"message": "Course not found"}


def test_admin_creates_course_with_defaults(client, admin_headers):
    r = client.post(
        "/api/courses",
        headers=admin_headers,
        json={"code": "phy110", "title": "Physics I", "instructor": "Dr. Curie"},
    )
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["code"] == "PHY110"
    assert body["credits"] == 3
    assert body["capacity"] == 30
    assert body["enrollmentCount"] == 0


def test_duplicate_course_code_is_400(client, admin_headers):
    r = client.post(
        "/api/courses",
        headers=admin_headers,
        json={"code": "cs101", "title": "Another"},
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Course code already exists"


def test_student_cannot_create_course(client, student_headers):
    r = client.post(
        "/api/courses",
        headers=student_headers,
        json={"code": "X1", "title": "Nope"},
    )
    assert r.status_code == 403


def test_update_course(client, admin_headers, seed):
    r = client.put(
        f"/api/courses/{seed['cs101']}",
        headers=admin_headers,
        json={"title": "Programming Fundamentals", "capacity": 40},
    )
    assert r.status_code == 200, r.text
    assert r.json()["title"] == "Programming Fundamentals"
    assert r.json()["capacity"] == 40


def test_capacity_cannot_drop_below_enrollment(client, admin_headers, seed, student2_headers):
    client.post(f"/api/enroll/{seed['cs101']}", headers=student2_headers)

    r = client.put(
        f"/api/courses/{seed['cs101']}",
        headers=admin_headers,
        json={"capacity": 1},
    )
    assert r.status_code == 400
    assert "Capacity cannot be lower" in r.json()["message"]


def test_delete_course_removes_it(client, admin_headers, seed):
    r = client.delete(f"/api/courses/{seed['cs101']}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["success"] is True

    assert client.get(f"/api/courses/{seed['cs101']}").status_code == 404


def test_blank_code_or_title_is_rejected_on_create(client, admin_headers):
    r = client.post(
        "/api/courses",
        headers=admin_headers,
        json={"code": "   ", "title": "Blank Code"},
    )
    assert r.status_code == 400
    assert r.json() == {"message": "code cannot be empty"}

    r = client.post(
        "/api/courses",
        headers=admin_headers,
        json={"code": "ART100", "title": "  "},
    )
    assert r.status_code == 400
    assert r.json() == {"message": "title cannot be empty"}


def test_blank_code_or_title_is_rejected_on_update(client, admin_headers, seed):
    for patch, message in (
        ({"code": "   "}, "code cannot be empty"),
        ({"title": " "}, "title cannot be empty"),
    ):
        r = client.put(f"/api/courses/{seed['cs101']}", headers=admin_headers, json=patch)
        assert r.status_code == 400
        assert r.json() == {"message": message}

    course = client.get(f"/api/courses/{seed['cs101']}").json()
    assert course["code"] == "CS101"
    assert course["title"] == "Intro to Programming"


def test_update_trims_title(client, admin_headers, seed):
    r = client.put(
        f"/api/courses/{seed['cs101']}",
        headers=admin_headers,
        json={"title": "  Programming I  "},
    )
    assert r.status_code == 200
    assert r.json()["title"] == "Programming I"
