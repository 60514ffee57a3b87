from __future__ import annotations

import pytest

from src.attendance_tracker.attendance_tracker.main import create_app


@pytest.fixture
def client(container):
    app = create_app(container)
    return app.test_client()


def _sign_up(client, login_id="lan01", password="secret123"):
    res = client.post(
        "/api/auth/register",
        json={"username": "Ms Lan", "userId": login_id, "password": password},
    )
    assert res.status_code == 201
    res = client.post("/api/auth/login", json={"userId": login_id, "password": password})
    assert res.status_code == 200
    return {"Authorization": f"Bearer {res.get_json()['token']}"}


@pytest.fixture
def auth(client):
    return _sign_up(client)


def test_health(client):
    res = client.get("/health")

    assert res.status_code == 200
    assert res.get_json() == {"status": "ok"}


def test_login_payload(client):
    _sign_up(client)

    body = client.post("/api/auth/login", json={"userId": "lan01", "password": "secret123"}).get_json()

    assert body["message"] == "Login successful"
    assert body["user"] == {"username": "Ms Lan", "userId": "lan01"}


def test_auth_errors(client):
    _sign_up(client)

    dup = client.post("/api/auth/register", json={"username": "X", "userId": "lan01", "password": "secret123"})
    assert dup.status_code == 400
    assert dup.get_json() == {"error": "User ID already exists"}

    bad = client.post("/api/auth/login", json={"userId": "lan01", "password": "nope-nope"})
    assert bad.status_code == 401
    assert bad.get_json() == {"error": "Invalid user ID or password"}


@pytest.mark.parametrize(
    "headers, message",
    [
        ({}, "Access denied"),
        ({"Authorization": "Token abc"}, "Access denied"),
        ({"Authorization": "Bearer garbage"}, "Invalid token"),
    ],
)
def test_protected_routes_need_a_valid_token(client, headers, message):
    res = client.get("/api/classes", headers=headers)

    assert res.status_code == 401
    assert res.get_json() == {"error": message}


def test_roll_call_flow(client, auth):
    class_id = client.post("/api/classes", json={"name": "10A"}, headers=auth).get_json()["id"]
    ids = {}
    for name in ("Alice", "Bob", "Carol"):
        res = client.post("/api/students", json={"name": name, "classId": class_id}, headers=auth)
        assert res.status_code == 201
        ids[name] = res.get_json()["id"]
    subject_id = client.post("/api/subjects", json={"name": "Math"}, headers=auth).get_json()["id"]

    res = client.put(
        f"/api/subjects/{subject_id}",
        json={
            "assignedClasses": ["10A"],
            "excludedStudents": [{"className": "10A", "studentIds": [ids["Bob"]]}],
        },
        headers=auth,
    )
    assert res.status_code == 200
    assert res.get_json()["excludedStudents"] == [{"className": "10A", "studentIds": [ids["Bob"]]}]

    res = client.get(f"/api/students?classId={class_id}&subjectId={subject_id}", headers=auth)
    assert [s["name"] for s in res.get_json()] == ["Alice", "Carol"]

    res = client.post(
        "/api/attendance",
        json={
            "classId": class_id,
            "subjectId": subject_id,
            "date": "2025-01-06",
            "records": [
                {"studentId": ids["Alice"], "status": "present"},
                {"studentId": ids["Carol"], "status": "absent"},
            ],
        },
        headers=auth,
    )
    assert res.status_code == 201
    session = res.get_json()
    assert (session["presentCount"], session["absentCount"]) == (1, 1)
    assert session["date"] == "2025-01-06"

    stats = client.get("/api/attendance/student-records", headers=auth).get_json()
    assert stats == [
        {
            "classId": class_id,
            "className": "10A",
            "students": [
                {"studentId": ids["Alice"], "studentName": "Alice", "presentCount": 1, "absentCount": 0},
                {"studentId": ids["Carol"], "studentName": "Carol", "presentCount": 0, "absentCount": 1},
            ],
        }
    ]

    by_subject = client.get(f"/api/attendance/subject-records?subjectId={subject_id}", headers=auth).get_json()
    assert by_subject[0]["subjectName"] == "Math"
    assert by_subject[0]["classes"][0]["totalPresents"] == 1
    assert by_subject[0]["classes"][0]["totalAbsences"] == 1

    res = client.delete(f"/api/students/{ids['Carol']}", headers=auth)
    assert res.get_json() == {"message": "Student deleted", "sessionsUpdated": 1}

    overview = client.get("/api/attendance", headers=auth).get_json()
    assert overview["records"][0]["presentCount"] == 1
    assert overview["records"][0]["absentCount"] == 0
    assert [r["studentId"]["name"] for r in overview["records"][0]["records"]] == ["Alice"]

    res = client.delete(f"/api/classes/{class_id}", headers=auth)
    assert res.status_code == 200
    assert client.get("/api/attendance", headers=auth).get_json() == {"records": [], "aggregatedStats": []}


def test_accounts_do_not_see_each_other(client, auth):
    client.post("/api/classes", json={"name": "10A"}, headers=auth)
    other = _sign_up(client, login_id="minh02")

    assert client.get("/api/classes", headers=other).get_json() == []
    assert client.get("/api/subjects/1", headers=other).status_code == 404


def test_error_responses_are_json(client, auth):
    res = client.post("/api/classes", json={}, headers=auth)
    assert res.status_code == 400
    assert res.get_json() == {"error": "Class name is required"}

    res = client.get("/api/students", headers=auth)
    assert res.status_code == 400
    assert res.get_json() == {"error": "classId is required"}

    res = client.delete("/api/classes/42", headers=auth)
    assert res.status_code == 404
    assert "error" in res.get_json()

    res = client.delete("/api/students/1?subjectId=1", headers=auth)
    assert res.status_code == 400

    res = client.get("/api/nowhere")
    assert res.status_code == 404
    assert res.get_json() == {"error": "Not found"}

    res = client.patch("/api/classes", headers=auth)
    assert res.status_code == 405


@pytest.mark.parametrize("path", ["/api/students?classId=%C2%B2", "/api/classes/%C2%B2", "/api/subjects/1%C2%B9"])
def test_non_ascii_digit_ids_are_rejected(client, auth, path):
    method = client.delete if path.startswith("/api/classes") else client.get

    res = method(path, headers=auth)

    assert res.status_code == 400
    assert "not a valid id" in res.get_json()["error"]


def test_blank_scope_params_mean_full_delete(client, auth):
    class_id = client.post("/api/classes", json={"name": "10A"}, headers=auth).get_json()["id"]
    student_id = client.post("/api/students", json={"name": "Alice", "classId": class_id}, headers=auth).get_json()["id"]

    res = client.delete(f"/api/students/{student_id}?subjectId=%20&classId=%20", headers=auth)

    assert res.status_code == 200
    assert res.get_json() == {"message": "Student deleted", "sessionsUpdated": 0}
    assert client.get(f"/api/students?classId={class_id}", headers=auth).get_json() == []
