from __future__ import annotations

from datetime import timedelta

from src.mira_attendance.mira_attendance.container import assemble_container
from src.mira_attendance.mira_attendance.main import create_app


class RecordingEmail:
    def __init__(self):
        self.sent = []

    def send(self, to, subject, body):
        self.sent.append((to, subject, body))


def test_protected_routes_answer_json_401(client):
    resp = client.get("/api/auth/me")

    assert resp.status_code == 401
    assert resp.get_json() == {"message": "Authentication required"}


def test_login_me_logout(client, login):
    body = login("23210-CS-001").get_json()
    assert body["pin"] == "23210-CS-001"
    assert body["id"] == "4"
    assert "password_hash" not in body

    assert client.get("/api/auth/me").get_json()["name"] == "Asha"

    client.post("/api/auth/logout")
    assert client.get("/api/auth/me").status_code == 401


def test_session_lifetime_is_set_once_at_startup(app, client):
    configured = timedelta(days=app.config["SESSION_DAYS"])
    assert app.permanent_session_lifetime == configured

    app.config["SESSION_DAYS"] = 1
    resp = client.post("/api/auth/login", json={"pin": "23210-CS-001", "password": "secret123", "remember": True})

    assert resp.status_code == 200
    assert app.permanent_session_lifetime == configured


def test_bad_credentials(client):
    resp = client.post("/api/auth/login", json={"pin": "23210-CS-001", "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json() == {"message": "Invalid PIN or password"}


def test_super_admin_otp_flow(repos, ai_client, fixed_now):
    email = RecordingEmail()
    container = assemble_container(repos, ai_client=ai_client, email_service=email, clock=lambda: fixed_now)
    client = create_app(container=container).test_client()

    resp = client.post("/api/auth/login", json={"pin": "SA-001", "password": "secret123"})
    assert resp.status_code == 200
    assert resp.get_json() == {"otpRequired": True, "user": {"id": "1", "name": "SA-001"}}
    assert client.get("/api/auth/me").status_code == 401

    otp = repos.otps.get(1).otp_code
    assert otp in email.sent[0][2]

    assert client.post("/api/auth/verify-otp", json={"otp": "000000"}).status_code == 401
    resp = client.post("/api/auth/verify-otp", json={"otp": otp})
    assert resp.status_code == 200
    assert client.get("/api/auth/me").get_json()["role"] == "SUPER_ADMIN"


def test_super_admin_login_without_smtp_reports_missing_configuration(client):
    resp = client.post("/api/auth/login", json={"pin": "SA-001", "password": "secret123"})

    assert resp.status_code == 500
    assert resp.get_json() == {"message": "Email configuration missing on server."}


def test_verify_otp_without_pending_login(client):
    assert client.post("/api/auth/verify-otp", json={"otp": "123456"}).status_code == 401


def test_students_cannot_list_users(client, login):
    login("23210-CS-001")

    resp = client.get("/api/users")
    assert resp.status_code == 403


def test_principal_manages_users_in_own_college(client, login):
    login("PRI-210")

    pins = {u["pin"] for u in client.get("/api/users").get_json()}
    assert "23999-EC-001" not in pins

    resp = client.post(
        "/api/users",
        json={"name": "New", "pin": "23210-CS-050", "branch": "CS", "role": "STUDENT", "password": "abcdef"},
    )
    assert resp.status_code == 201
    assert resp.get_json()["college_code"] == "210"

    assert client.post("/api/users", json={"name": "Dup", "pin": "23210-CS-050", "branch": "CS",
                                           "role": "STUDENT"}).status_code == 409

    resp = client.put("/api/users/23210-CS-050", json={"year": 2})
    assert resp.get_json()["year"] == 2

    assert client.delete("/api/users/23210-CS-050").get_json()["access_revoked"] is True
    assert client.delete("/api/users/23210-CS-050?hard=1").get_json()["message"] == "Deleted"
    assert client.get("/api/users/23210-CS-050").status_code == 404


def test_other_college_user_is_hidden(client, login):
    login("PRI-210")

    assert client.get("/api/users/23999-EC-001").status_code == 404
    assert client.get("/api/students/23999-EC-001").status_code == 404


def test_faculty_listing(client, login):
    login("23210-CS-001")

    pins = {u["pin"] for u in client.get("/api/faculty").get_json()}
    assert pins == {"PRI-210", "FAC-210-01"}
