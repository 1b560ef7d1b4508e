from smartschedule.core.config import get_settings
from smartschedule.core.security import create_access_token


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
        "subjects": ["Mathematics", "Physics"],
        "location": "Mumbai",
        "qualification": "M.Sc",
        "experience": "5 years",
    }
    payload.update(overrides)
    return payload


def test_register_login_logout(client):
    register_response = client.post("/api/auth/register", json=teacher_payload())
    assert register_response.status_code == 201
    data = register_response.json()
    assert data["email"] == "asha.patil@slrtce.in"
    assert data["role"] == "teacher"
    assert "password" not in data

    login_response = client.post(
        "/api/auth/login",
        json={"role": "teacher", "email": "Asha.Patil@slrtce.in", "password": "teach123"},
    )
    assert login_response.status_code == 200
    login_data = login_response.json()
    assert login_data["token_type"] == "bearer"
    assert login_data["user"]["name"] == "Asha Patil"

    token = login_data["access_token"]
    me_response = client.get("/api/auth/me", headers=auth_headers(token))
    assert me_response.status_code == 200
    assert me_response.json()["role"] == "teacher"

    logout_response = client.post("/api/auth/logout", headers=auth_headers(token))
    assert logout_response.status_code == 200
    assert logout_response.json()["success"] is True


def test_admin_login_uses_configured_credentials(client):
    settings = get_settings()
    response = client.post(
        "/api/auth/login",
        json={"role": "admin", "email": settings.admin_email, "password": settings.admin_password},
    )
    assert response.status_code == 200
    assert response.json()["user"]["id"] == settings.admin_user_id
    assert response.json()["user"]["role"] == "admin"


def test_admin_login_rejects_wrong_password(client):
    settings = get_settings()
    response = client.post(
        "/api/auth/login",
        json={"role": "admin", "email": settings.admin_email, "password": "not-the-password"},
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


def test_teacher_cannot_log_in_as_admin(client):
    client.post("/api/auth/register", json=teacher_payload())
    response = client.post(
        "/api/auth/login",
        json={"role": "admin", "email": "asha.patil@slrtce.in", "password": "teach123"},
    )
    assert response.status_code == 401


def test_teacher_login_requires_institution_domain(client):
    client.post("/api/auth/register", json=teacher_payload(email="asha@example.com"))
    response = client.post(
        "/api/auth/login",
        json={"role": "teacher", "email": "asha@example.com", "password": "teach123"},
    )
    assert response.status_code == 401


def test_register_rejects_duplicate_email(client):
    assert client.post("/api/auth/register", json=teacher_payload()).status_code == 201
    duplicate = client.post("/api/auth/register", json=teacher_payload(name="Someone Else"))
    assert duplicate.status_code == 409


def test_register_validates_year_specialization(client):
    response = client.post("/api/auth/register", json=teacher_payload(year_specialization="Fifth Year"))
    assert response.status_code == 422


def test_register_notifies_admin(client, admin_token):
    client.post("/api/auth/register", json=teacher_payload())

    response = client.get("/api/notifications", headers=auth_headers(admin_token))
    assert response.status_code == 200
    items = response.json()
    assert [item["message"] for item in items] == ["Asha Patil has registered as a new teacher."]
    assert items[0]["notification_type"] == "registration"
    assert items[0]["is_read"] is False


def test_register_discards_age(client):
    response = client.post("/api/auth/register", json=teacher_payload(age=35))
    assert response.status_code == 201
    assert response.json()["age"] is None


def test_me_requires_a_valid_token(client):
    assert client.get("/api/auth/me").status_code in {401, 403}
    response = client.get("/api/auth/me", headers=auth_headers("not-a-token"))
    assert response.status_code == 401


def test_repeated_failed_logins_are_rate_limited(client):
    settings = get_settings()
    payload = {"role": "teacher", "email": "nobody@slrtce.in", "password": "wrong"}
    for _ in range(settings.auth_rate_limit_login_max_requests):
        assert client.post("/api/auth/login", json=payload).status_code == 401

    limited = client.post("/api/auth/login", json=payload)
    assert limited.status_code == 429
    assert "Retry-After" in limited.headers


def test_token_role_must_match_the_stored_user(client):
    teacher_id = client.post("/api/auth/register", json=teacher_payload()).json()["id"]
    forged = create_access_token(teacher_id, role="admin")

    response = client.get("/api/teachers/", headers=auth_headers(forged))
    assert response.status_code == 401
