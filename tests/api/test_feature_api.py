from __future__ import annotations

import io

import pandas as pd

from src.mira_attendance.mira_attendance.academics.model import SubjectResult, SyllabusCoverage


def test_application_flow(client, login):
    login("23210-CS-001")
    resp = client.post("/api/applications", json={"type": "LEAVE", "payload": {"reason": "Fever"}})
    assert resp.status_code == 201
    app_id = resp.get_json()["id"]

    mine = client.get("/api/applications").get_json()
    assert [a["id"] for a in mine] == [app_id]
    assert client.post("/api/applications", json={"pin": "23210-CS-002", "type": "TC"}).status_code == 403
    assert client.put(f"/api/applications/{app_id}/status", json={"status": "APPROVED"}).status_code == 403

    client.post("/api/auth/logout")
    login("PRI-210")
    assert [a["id"] for a in client.get("/api/applications?status=PENDING").get_json()] == [app_id]
    decided = client.put(f"/api/applications/{app_id}/status", json={"status": "APPROVED"})
    assert decided.get_json()["status"] == "APPROVED"
    assert client.put(f"/api/applications/{app_id}/status", json={"status": "REJECTED"}).status_code == 400

    history = client.get("/api/students/23210-CS-001/applications").get_json()
    assert history[0]["status"] == "APPROVED"


def test_application_with_non_string_pin_is_bad_request(client, login):
    login("PRI-210")

    resp = client.post("/api/applications", json={"pin": 23210, "type": "LEAVE"})
    assert resp.status_code == 400
    assert resp.get_json() == {"message": "pin must be a string"}
    assert client.get("/api/applications").get_json() == []


def test_timetable_api(client, login):
    login("PRI-210")
    resp = client.put("/api/timetables", json={"branch": "CS", "year": 1, "url": "https://files/cs1.pdf"})
    assert resp.status_code == 200
    assert resp.get_json()["updated_by"] == "PRI-210"
    client.post("/api/auth/logout")

    login("23210-CS-001")
    assert client.get("/api/timetables?branch=CS&year=1").get_json()["url"] == "https://files/cs1.pdf"
    assert client.get("/api/timetables?branch=EC&year=1").get_json() is None
    assert client.put("/api/timetables", json={"branch": "CS", "year": 1, "url": "x"}).status_code == 403


def test_feedback_api(client, login):
    login("23210-CS-001")
    resp = client.post("/api/feedback", json={"type": "Complaint", "message": "Wifi down", "isAnonymous": True})
    assert resp.status_code == 201
    feedback_id = resp.get_json()["id"]
    assert client.get("/api/feedback").status_code == 403
    client.post("/api/auth/logout")

    login("PRI-210")
    items = client.get("/api/feedback").get_json()
    assert [(f["id"], f["userName"]) for f in items] == [(feedback_id, None)]
    resolved = client.put(f"/api/feedback/{feedback_id}/status", json={"status": "Resolved"})
    assert resolved.get_json()["status"] == "Resolved"
    assert client.put("/api/feedback/999/status", json={"status": "Resolved"}).status_code == 404


def test_settings_api(client, login):
    login("23210-CS-001")

    assert client.get("/api/settings").get_json() is None
    assert client.put("/api/settings", json={"theme": "dark"}).get_json() == {"theme": "dark"}
    assert client.get("/api/settings").get_json() == {"theme": "dark"}
    assert client.put("/api/settings", json=["dark"]).status_code == 400


def test_todos_api(client, login):
    login("FAC-210-01")
    todo = client.post("/api/todos", json={"text": "Set paper"}).get_json()

    toggled = client.put(f"/api/todos/{todo['id']}", json={})
    assert toggled.get_json()["completed"] is True
    edited = client.put(f"/api/todos/{todo['id']}", json={"text": "Set model paper"})
    assert edited.get_json()["text"] == "Set model paper"
    assert client.post("/api/todos", json={"text": ""}).status_code == 400

    client.post("/api/auth/logout")
    login("23210-CS-001")
    assert client.get("/api/todos").get_json() == []
    assert client.delete(f"/api/todos/{todo['id']}").status_code == 404


def test_syllabus_and_results_api(client, login, repos):
    repos.syllabus.items[1] = SyllabusCoverage(1, "CS", 1, "CS-101", "Programming in C", 4, 12, college_code="210")
    repos.results.results.append(SubjectResult(1, "23210-CS-001", 1, "CS-101", "Programming in C", 18, 62, 80, "A"))

    login("FAC-210-01")
    assert [s["subjectCode"] for s in client.get("/api/syllabus").get_json()] == ["CS-101"]
    updated = client.put("/api/syllabus/1", json={"topicsCompleted": 12})
    assert updated.get_json()["percentage"] == 100
    assert client.put("/api/syllabus/1", json={"topicsCompleted": 13}).status_code == 400

    results = client.get("/api/students/23210-CS-001/results").get_json()
    assert results[0]["total"] == 80
    client.post("/api/auth/logout")

    login("23210-CS-002")
    assert client.get("/api/students/23210-CS-001/results").status_code == 403


def test_report_exports(client, login):
    login("23210-CS-001")
    client.post("/api/attendance/check-in", json={"latitude": 18.4551, "longitude": 79.5218})
    assert client.get("/api/reports/attendance").status_code == 403
    client.post("/api/auth/logout")

    login("PRI-210")
    data = client.get("/api/reports/attendance?start=2025-03-10&end=2025-03-10").get_json()
    assert [r["pin"] for r in data["rows"]] == ["23210-CS-001"]

    csv_resp = client.get("/api/reports/attendance.csv?start=2025-03-10&end=2025-03-10")
    assert csv_resp.mimetype == "text/csv"
    assert "attendance_20250310_20250310.csv" in csv_resp.headers["Content-Disposition"]
    assert csv_resp.data.startswith(b"\xef\xbb\xbf")

    xlsx_resp = client.get("/api/reports/attendance.xlsx?start=2025-03-10&end=2025-03-10&branch=CS")
    sheets = pd.read_excel(io.BytesIO(xlsx_resp.data), sheet_name=None)
    assert len(sheets["Attendance"]) == 1

    default = client.get("/api/reports/attendance.csv")
    assert "attendance_20250301_20250310.csv" in default.headers["Content-Disposition"]

    assert client.get("/api/reports/attendance?start=2025-03-10&end=2025-03-01").status_code == 400
    assert client.get("/api/reports/attendance?start=10-03-2025").status_code == 400


def test_send_email_without_configuration(client, login):
    login("PRI-210")

    resp = client.post("/api/send-email", json={"to": "parent@x.org", "subject": "Hi", "body": "Hello"})
    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "message": "Email configuration missing on server."}


def test_ai_status_and_tool_without_key(client, login):
    login("FAC-210-01")

    status = client.get("/api/ai/status").get_json()
    assert status["isInitialized"] is False
    assert "summarize_notes" in status["tools"]

    resp = client.post("/api/ai/summarize_notes", json={"text": "Thermodynamics"})
    assert resp.status_code == 502
    assert "GEMINI_API_KEY" in resp.get_json()["message"]
    assert client.post("/api/ai/generate_video", json={"text": "x"}).status_code == 404


def test_students_cannot_use_ai_tools(client, login):
    login("23210-CS-001")

    assert client.post("/api/ai/summarize_notes", json={"text": "x"}).status_code == 403
