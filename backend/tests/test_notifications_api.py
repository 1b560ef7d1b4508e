from datetime import datetime, timedelta, timezone

import pytest

from smartschedule.core.dates import format_time_ago


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def register(client, name: str, email: str) -> None:
    payload = {
        "name": name,
        "email": email,
        "password": "teach123",
        "phone_number": "+91 98200 11111",
        "year_specialization": "First Year",
        "department": "Computer Engineering",
    }
    assert client.post("/api/auth/register", json=payload).status_code == 201


def test_admin_lists_and_filters_notifications(client, admin_token):
    register(client, "Asha Patil", "asha@slrtce.in")
    register(client, "Ravi Kumar", "ravi@slrtce.in")

    items = client.get("/api/notifications", headers=auth_headers(admin_token)).json()
    assert sorted(item["message"] for item in items) == [
        "Asha Patil has registered as a new teacher.",
        "Ravi Kumar has registered as a new teacher.",
    ]
    assert all(item["time_ago"].endswith("ago") for item in items)

    first_id = items[0]["id"]
    marked = client.post(f"/api/notifications/{first_id}/read", headers=auth_headers(admin_token))
    assert marked.status_code == 200
    assert marked.json()["is_read"] is True

    unread = client.get("/api/notifications", params={"is_read": False}, headers=auth_headers(admin_token)).json()
    assert first_id not in [item["id"] for item in unread]
    assert len(unread) == 1
    read = client.get("/api/notifications", params={"is_read": True}, headers=auth_headers(admin_token)).json()
    assert [item["id"] for item in read] == [first_id]


def test_mark_all_as_read(client, admin_token):
    register(client, "Asha Patil", "asha@slrtce.in")
    register(client, "Ravi Kumar", "ravi@slrtce.in")

    response = client.post("/api/notifications/read-all", headers=auth_headers(admin_token))
    assert response.status_code == 200
    assert response.json() == {"updated": 2}

    again = client.post("/api/notifications/read-all", headers=auth_headers(admin_token))
    assert again.json() == {"updated": 0}


def test_cannot_mark_someone_elses_notification(client, admin_token):
    register(client, "Asha Patil", "asha@slrtce.in")
    notification_id = client.get("/api/notifications", headers=auth_headers(admin_token)).json()[0]["id"]
    login = client.post(
        "/api/auth/login", json={"role": "teacher", "email": "asha@slrtce.in", "password": "teach123"}
    )
    teacher_token = login.json()["access_token"]

    response = client.post(f"/api/notifications/{notification_id}/read", headers=auth_headers(teacher_token))
    assert response.status_code == 404


NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("delta", "expected"),
    [
        (timedelta(seconds=30), "30 seconds ago"),
        (timedelta(seconds=60), "60 seconds ago"),
        (timedelta(minutes=5), "5 minutes ago"),
        (timedelta(hours=3, minutes=10), "3 hours ago"),
        (timedelta(days=2, hours=1), "2 days ago"),
        (timedelta(days=65), "2 months ago"),
        (timedelta(days=800), "2 years ago"),
    ],
)
def test_format_time_ago(delta, expected):
    assert format_time_ago(NOW - delta, now=NOW) == expected


def test_format_time_ago_accepts_iso_strings_and_naive_values():
    assert format_time_ago("2026-10-19T11:00:00Z", now=NOW) == "60 minutes ago"
    assert format_time_ago(datetime(2026, 10, 19, 11, 50), now=NOW) == "10 minutes ago"
