from sqlalchemy import select

from smartschedule.models.notification import Notification
from smartschedule.models.user import User, UserRole
from smartschedule.services.notifications import add_notification
from smartschedule.services.teachers import delete_teacher


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def teacher_payload(**overrides) -> dict:
    payload = {
        "name": "Asha Patil",
        "email": "asha.patil@slrtce.in",
        "password": "teach123",
        "phone_number": "+91 98200 11111",
        "year_specialization": "First Year",
        "department": "Computer Engineering",
        "subjects": ["Mathematics"],
    }
    payload.update(overrides)
    return payload


def register_and_login(client, **overrides) -> tuple[dict, str]:
    payload = teacher_payload(**overrides)
    created = client.post("/api/auth/register", json=payload)
    assert created.status_code == 201
    login = client.post(
        "/api/auth/login",
        json={"role": "teacher", "email": payload["email"], "password": payload["password"]},
    )
    assert login.status_code == 200
    return created.json(), login.json()["access_token"]


def timetable_payload(teacher_name: str) -> dict:
    return {
        "year": "First Year",
        "semester": "Semester 1",
        "department": "Computer Engineering",
        "start_date": "2026-10-19",
        "end_date": "2026-10-23",
        "schedule": [
            {
                "day": "Monday",
                "lectures": [
                    {"time": "09:00 - 10:00", "subject": "Mathematics", "teacher": teacher_name, "room": "Room 101"},
                    {"time": "10:00 - 11:00", "subject": "Physics", "teacher": "Ravi Kumar", "room": "Room 101"},
                ],
            },
            {
                "day": "Thursday",
                "lectures": [
                    {"time": "13:00 - 15:00", "subject": "Mathematics Lab", "teacher": teacher_name, "room": "Lab 152"},
                ],
            },
        ],
    }


def test_admin_lists_teachers_sorted_by_name(client, admin_token):
    register_and_login(client, name="Ravi Kumar", email="ravi@slrtce.in")
    register_and_login(client)

    response = client.get("/api/teachers/", headers=auth_headers(admin_token))
    assert response.status_code == 200
    assert [item["name"] for item in response.json()] == ["Asha Patil", "Ravi Kumar"]


def test_teacher_cannot_list_teachers(client):
    _, token = register_and_login(client)
    response = client.get("/api/teachers/", headers=auth_headers(token))
    assert response.status_code == 403


def test_teacher_reads_own_profile(client):
    created, token = register_and_login(client)
    response = client.get("/api/teachers/me", headers=auth_headers(token))
    assert response.status_code == 200
    assert response.json()["id"] == created["id"]
    assert response.json()["subjects"] == ["Mathematics"]


def test_teacher_updates_own_profile_and_keeps_password(client):
    created, token = register_and_login(client)
    update = teacher_payload(phone_number="+91 90000 12345", location="Thane")
    update.pop("password")

    response = client.put(f"/api/teachers/{created['id']}", json=update, headers=auth_headers(token))
    assert response.status_code == 200
    assert response.json()["phone_number"] == "+91 90000 12345"
    assert response.json()["location"] == "Thane"

    relogin = client.post(
        "/api/auth/login",
        json={"role": "teacher", "email": "asha.patil@slrtce.in", "password": "teach123"},
    )
    assert relogin.status_code == 200


def test_teacher_cannot_update_another_teacher(client):
    other, _ = register_and_login(client, name="Ravi Kumar", email="ravi@slrtce.in")
    _, token = register_and_login(client)

    response = client.put(
        f"/api/teachers/{other['id']}",
        json=teacher_payload(name="Hijacked", email="ravi@slrtce.in"),
        headers=auth_headers(token),
    )
    assert response.status_code == 403


def test_admin_update_rejects_taken_email(client, admin_token):
    register_and_login(client, name="Ravi Kumar", email="ravi@slrtce.in")
    created, _ = register_and_login(client)

    response = client.put(
        f"/api/teachers/{created['id']}",
        json=teacher_payload(email="ravi@slrtce.in"),
        headers=auth_headers(admin_token),
    )
    assert response.status_code == 409


def test_update_unknown_teacher_returns_404(client, admin_token):
    response = client.put("/api/teachers/missing", json=teacher_payload(), headers=auth_headers(admin_token))
    assert response.status_code == 404
    assert response.json()["message"] == "Teacher with id missing not found"


def test_deleting_a_teacher_unassigns_their_lectures(client, admin_token):
    created, _ = register_and_login(client)
    timetable = client.post(
        "/api/timetables/", json=timetable_payload("Asha Patil"), headers=auth_headers(admin_token)
    )
    assert timetable.status_code == 201

    response = client.delete(f"/api/teachers/{created['id']}", headers=auth_headers(admin_token))
    assert response.status_code == 200
    assert response.json() == {"success": True, "unassigned_lectures": 2}

    stored = client.get(f"/api/timetables/{timetable.json()['id']}", headers=auth_headers(admin_token)).json()
    teachers = [lecture["teacher"] for day in stored["schedule"] for lecture in day["lectures"]]
    assert teachers == ["[Unassigned]", "Ravi Kumar", "[Unassigned]"]

    remaining = client.get("/api/teachers/", headers=auth_headers(admin_token)).json()
    assert remaining == []


def test_deleted_teacher_token_is_rejected(client, admin_token):
    created, token = register_and_login(client)
    client.delete(f"/api/teachers/{created['id']}", headers=auth_headers(admin_token))

    assert client.get("/api/auth/me", headers=auth_headers(token)).status_code == 401


def test_deleting_a_teacher_removes_their_notifications(db_session):
    teacher = User(
        name="Asha Patil",
        email="asha.patil@slrtce.in",
        password="teach123",
        role=UserRole.teacher,
        year_specialization="First Year",
        department="Computer Engineering",
        subjects=[],
    )
    db_session.add(teacher)
    db_session.flush()
    add_notification(db_session, user_id=teacher.id, message="Your Monday lecture moved.")
    add_notification(db_session, user_id="admin", message='You updated the schedule for "Asha Patil".')
    teacher_id = teacher.id

    delete_teacher(db_session, teacher)
    db_session.commit()

    remaining = db_session.execute(select(Notification)).scalars().all()
    assert [item.user_id for item in remaining] == ["admin"]
    assert db_session.get(User, teacher_id) is None
