from __future__ import annotations

from datetime import datetime

import pytest

from src.mira_attendance.mira_attendance.ai.client import AIClient
from src.mira_attendance.mira_attendance.container import assemble_container
from src.mira_attendance.mira_attendance.core.enums import Role
from src.mira_attendance.mira_attendance.main import create_app
from tests.fakes import make_repositories, make_user


class _Settings:
    DEBUG = False
    REQUIRE_ON_CAMPUS = True
    REQUIRE_FACE_VERIFICATION = False


@pytest.fixture(autouse=True)
def _testing_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")


@pytest.fixture
def fixed_now():
    return datetime(2025, 3, 10, 9, 15, 30)


@pytest.fixture
def users():
    return [
        make_user(1, "SA-001", Role.SUPER_ADMIN, college_code=None, email="sa@mira.local"),
        make_user(2, "PRI-210", Role.PRINCIPAL, branch="ADMIN"),
        make_user(3, "FAC-210-01", Role.FACULTY),
        make_user(4, "23210-CS-001", Role.STUDENT, name="Asha"),
        make_user(5, "23210-CS-002", Role.STUDENT, name="Ravi"),
        make_user(6, "23999-EC-001", Role.STUDENT, branch="EC", college_code="999"),
    ]


@pytest.fixture
def repos(users):
    return make_repositories(*users)


@pytest.fixture
def ai_client():
    return AIClient(None)


@pytest.fixture
def container(repos, ai_client, fixed_now):
    return assemble_container(repos, settings=_Settings(), ai_client=ai_client, clock=lambda: fixed_now)


@pytest.fixture
def app(container):
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(pin: str, password: str = "secret123"):
        resp = client.post("/api/auth/login", json={"pin": pin, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return resp

    return _login
