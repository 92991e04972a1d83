"""HTTP tests for the session guard and the admin routes."""

import json

import pytest

from preppal.infrastructure.config import get_settings


def test_api_call_without_session_gets_401_with_login_url(client):
    response = client.get("/exams")
    assert response.status_code == 401
    assert response.json()["login_url"] == "/login"


def test_browser_without_session_is_redirected_to_login(client):
    response = client.get("/exams", headers={"Accept": "text/html"}, follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/login"


def test_unknown_token_is_treated_as_no_session(client):
    response = client.get("/reference-data", headers={"Authorization": "Bearer unknown-token"})
    assert response.status_code == 401


def test_session_lookup_error_is_treated_as_no_session(client, auth, auth_headers):
    auth.fail_lookup = True
    assert client.get("/exams", headers=auth_headers).status_code == 401


def test_login_and_logout(client, auth):
    response = client.post("/auth/login", json={"email": "admin@example.com", "password": "secret"})
    assert response.status_code == 200
    token = response.json()["access_token"]

    headers = {"Authorization": f"Bearer {token}"}
    assert client.get("/auth/session", headers=headers).json()["email"] == "admin@example.com"

    assert client.post("/auth/logout", headers=headers).status_code == 200
    assert token in auth.signed_out
    assert client.get("/auth/session", headers=headers).status_code == 401


def test_login_failures(client):
    assert client.post("/auth/login", json={"email": " ", "password": "secret"}).status_code == 400

    response = client.post("/auth/login", json={"email": "admin@example.com", "password": "wrong"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid login credentials"


def test_exam_crud_round(client, auth_headers):
    response = client.post("/exams", json={"name": "  JEE  "}, headers=auth_headers)
    assert response.status_code == 200
    exam_id = response.json()["id"]
    assert response.json()["name"] == "JEE"

    assert client.post("/exams", json={"name": ""}, headers=auth_headers).status_code == 400

    response = client.put(f"/exams/{exam_id}", json={"name": "JEE Main"}, headers=auth_headers)
    assert response.json()["name"] == "JEE Main"

    assert client.get("/exams/missing", headers=auth_headers).status_code == 404

    response = client.delete(f"/exams/{exam_id}", headers=auth_headers)
    assert response.status_code == 409
    assert "cannot be undone" in response.json()["detail"]

    response = client.delete(f"/exams/{exam_id}?confirm=true", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Exam deleted successfully", "dismiss_after": 3.0}
    assert client.get("/exams", headers=auth_headers).json() == []


def test_chapter_list_and_attachment_upload(client, auth_headers, hierarchy, storage):
    response = client.get(f"/chapters?exam_id={hierarchy['jee']}", headers=auth_headers)
    assert [c["name"] for c in response.json()] == ["Mechanics", "Optics"]
    assert response.json()[0]["exam_name"] == "JEE"

    response = client.put(
        f"/chapters/{hierarchy['mechanics']}/attachment",
        files={"file": ("notes.txt", b"plain", "text/plain")},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Please upload a PDF file"

    response = client.put(
        f"/chapters/{hierarchy['mechanics']}/attachment",
        files={"file": ("Mechanics Notes.pdf", b"%PDF-1.4", "application/pdf")},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["pdf_url"].endswith("_Mechanics_Notes.pdf")
    assert len(storage.keys("chapters")) == 1


def test_book_create_requires_exam(client, auth_headers, hierarchy):
    book = {"title": "HC Verma", "author": "H.C. Verma", "subject_id": hierarchy["physics"]}
    response = client.post("/books", json=book, headers=auth_headers)
    assert response.status_code == 400

    response = client.post("/books", json={**book, "exam_id": hierarchy["jee"]}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["subject_name"] == "Physics"


def test_prompts_belong_to_signed_in_user(client, auth, auth_headers):
    client.post("/prompts", json={"title": "Hint", "content": "Give a hint"}, headers=auth_headers)
    auth.start_session("user-other", "other@example.com", "other-token")

    other = client.get("/prompts", headers={"Authorization": "Bearer other-token"})
    assert other.json() == []
    assert [p["title"] for p in client.get("/prompts", headers=auth_headers).json()] == ["Hint"]


def test_reference_data_and_cascade(client, auth_headers, hierarchy):
    data = client.get("/reference-data", headers=auth_headers).json()
    assert [e["name"] for e in data["exams"]] == ["JEE", "NEET"]
    assert [s["exam_name"] for s in data["subjects"]] == ["NEET", "JEE"]
    assert data["books"] is None

    response = client.get(
        "/reference-data/cascade",
        params={"exam_id": hierarchy["neet"], "subject_id": hierarchy["physics"], "mode": "strict"},
        headers=auth_headers,
    )
    body = response.json()
    assert body["selection"] == {"exam_id": hierarchy["neet"], "subject_id": "", "chapter_id": ""}
    assert [s["name"] for s in body["subjects"]] == ["Biology"]
    assert body["chapters"] == []


def test_dashboard_counts(client, auth_headers, hierarchy):
    response = client.get("/dashboard/counts", headers=auth_headers)
    assert response.json() == {"exams": 2, "subjects": 2, "chapters": 3, "books": 0}


def test_question_bulk_flow(client, auth_headers, hierarchy):
    example = client.get("/questions/example", headers=auth_headers).json()

    parsed = client.post("/questions/parse", json={"json_text": json.dumps(example)}, headers=auth_headers)
    assert parsed.json()["count"] == 2

    destinations = [
        {"exam_id": hierarchy["jee"], "subject_id": hierarchy["physics"], "chapter_id": hierarchy["mechanics"]},
        {"exam_id": hierarchy["jee"], "subject_id": hierarchy["physics"], "chapter_id": hierarchy["optics"]},
    ]
    response = client.post(
        "/questions/bulk",
        json={"questions": parsed.json()["questions"], "destinations": destinations},
        headers=auth_headers,
    )
    assert response.json() == {
        "inserted": 4,
        "chapters": 2,
        "message": "Successfully saved 4 questions to the database",
    }

    duplicate = client.post(
        "/questions/bulk",
        json={"questions": parsed.json()["questions"], "destinations": destinations + destinations[:1]},
        headers=auth_headers,
    )
    assert duplicate.status_code == 400
    assert duplicate.json()["detail"] == "This chapter is already selected"

    saved = client.get(f"/questions?chapter_id={hierarchy['optics']}", headers=auth_headers).json()
    assert len(saved) == 2
    assert saved[0]["exam_name"] == "JEE"
    ids = [q["id"] for q in saved]

    exported = client.post("/questions/export", json={"ids": ids}, headers=auth_headers).json()
    assert exported["count"] == 2
    assert "id" not in json.loads(exported["json_text"])[0]

    assert client.post("/questions/bulk-delete", json={"ids": ids}, headers=auth_headers).status_code == 409
    response = client.post("/questions/bulk-delete", json={"ids": ids, "confirm": True}, headers=auth_headers)
    assert response.json()["message"] == "Successfully deleted 2 questions"
    assert len(client.get("/questions", headers=auth_headers).json()) == 2


def test_question_parse_errors(client, auth_headers):
    response = client.post("/questions/parse", json={"json_text": "{}"}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Input must be a JSON array"


def test_question_file_import(client, auth_headers):
    body = json.dumps([{"question_text": "Q", "option_a": "a", "option_b": "b"}])
    response = client.post(
        "/questions/import",
        files={"file": ("questions.json", body.encode("utf-8"), "application/json")},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"].startswith("All questions must have")


@pytest.mark.parametrize(
    "name, title, marker",
    [("setup", "Setup Guide", "# PrepPal Admin Setup Guide"), ("sql", "SQL Setup Script", "create table")],
)
def test_setup_docs(client, auth_headers, name, title, marker):
    response = client.get(f"/setup-docs/{name}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["title"] == title
    assert marker in response.json()["content"]


def test_setup_docs_unknown_and_unreadable(client, auth_headers, tmp_path):
    from dataclasses import replace
    from main import app

    assert client.get("/setup-docs/readme", headers=auth_headers).status_code == 404

    app.dependency_overrides[get_settings] = lambda: replace(get_settings(), public_dir=tmp_path)
    response = client.get("/setup-docs/setup", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Failed to load the file. Please check if it exists."


def test_cascade_drops_chapter_from_another_exam(client, auth_headers, hierarchy):
    response = client.get(
        "/reference-data/cascade",
        params={"exam_id": hierarchy["neet"], "chapter_id": hierarchy["mechanics"]},
        headers=auth_headers,
    )
    body = response.json()
    assert body["selection"]["chapter_id"] == ""
    assert [c["name"] for c in body["chapters"]] == ["Cells"]


def test_create_exam_subject_chapter_chain(client, auth_headers, db):
    exam = client.post("/exams", json={"name": "JEE"}, headers=auth_headers).json()
    subject = client.post(
        "/subjects", json={"name": "Physics", "exam_id": exam["id"]}, headers=auth_headers
    ).json()
    assert subject["exam_name"] == "JEE"

    response = client.post(
        "/chapters",
        json={"name": "Mechanics", "subject_id": subject["id"], "exam_id": exam["id"], "order": 1},
        headers=auth_headers,
    )
    assert response.status_code == 200

    chapters = client.get(f"/chapters?subject_id={subject['id']}", headers=auth_headers).json()
    assert len(chapters) == 1
    assert chapters[0]["name"] == "Mechanics"
    assert chapters[0]["order"] == 1
    assert chapters[0]["exam_name"] == "JEE"
