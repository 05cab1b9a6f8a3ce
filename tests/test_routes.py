import json

import pytest

from conftest import make_analysis, make_courses, make_questions, make_roadmap

def ndjson(response):
    return [json.loads(line) for line in response.text.splitlines() if line.strip()]

def test_root_reports_status(client):
    assert client.get("/").json()["status"] == "OK"

def test_chat_streams_growing_reply(client, gateway):
    gateway.fragments = ["Try ", "Kaggle."]

    response = client.post("/chat/messages", json={"message": "How to practice ML?"})

    assert response.status_code == 200
    events = ndjson(response)
    assert events[0]["type"] == "message"
    assert events[0]["data"]["role"] == "user"
    assert [e["data"]["text"] for e in events if e["type"] == "partial_update"] == ["Try ", "Try Kaggle."]
    assert events[-1]["type"] == "result"
    assert events[-1]["data"]["text"] == "Try Kaggle."

    transcript = client.get("/chat").json()
    assert transcript["loading"] is False
    assert [m["role"] for m in transcript["messages"]] == ["model", "user", "model"]

def test_chat_error_returns_apology_in_stream(client, gateway):
    gateway.fail = True
    events = ndjson(client.post("/chat/messages", json={"message": "hi"}))
    assert events[-1]["data"]["text"].startswith("I'm sorry")

def test_chat_rejects_blank_message(client):
    assert client.post("/chat/messages", json={"message": "   "}).status_code == 400

def test_busy_panel_returns_conflict(client, sessions):
    sessions.get().roadmap.loading = True
    response = client.post("/roadmap", json={"role": "Dev", "background": "Student"})
    assert response.status_code == 409

def test_sessions_are_isolated(client):
    client.put("/shell/view", json={"view": "COURSES"}, headers={"X-Session-Id": "alice"})

    assert client.get("/shell", headers={"X-Session-Id": "alice"}).json()["active_view"] == "COURSES"
    assert client.get("/shell", headers={"X-Session-Id": "bob"}).json()["active_view"] == "CHAT"

def test_roadmap_round(client, gateway):
    gateway.roadmap = make_roadmap(2)
    view = client.post("/roadmap", json={"role": "Dev", "background": "Student"}).json()
    assert view["has_timeline"] is True
    assert len(view["timeline"]) == 2

def test_roadmap_requires_both_fields(client):
    assert client.post("/roadmap", json={"role": "Dev", "background": ""}).status_code == 400

def test_interview_flow(client, gateway):
    gateway.questions = make_questions(2)

    view = client.post("/interview", json={"topic": "SQL", "level": "Beginner", "count": 2}).json()
    assert view["state"] == "in_progress"

    for q in gateway.questions:
        client.put("/interview/answers", json={"question_id": q.id, "option_index": q.correct_answer_index})
    view = client.post("/interview/submit").json()
    assert (view["state"], view["score"], view["total"]) == ("submitted", 2, 2)

    # frozen after submit
    view = client.put("/interview/answers", json={"question_id": 1, "option_index": 0}).json()
    assert view["score"] == 2

    view = client.delete("/interview").json()
    assert view["state"] == "idle"
    assert view["questions"] == []

def test_submit_without_drill_is_rejected(client):
    assert client.post("/interview/submit").status_code == 400

def test_interview_rejects_unknown_level(client):
    assert client.post("/interview", json={"topic": "SQL", "level": "Guru"}).status_code == 422

def test_resume_analysis(client, gateway):
    gateway.analysis = make_analysis(87)
    view = client.post("/resume/analysis", json={"resume_text": "Jane", "target_role": "PM"}).json()
    assert view["result"]["score"] == 87

def test_resume_upload_rejects_non_pdf(client):
    files = {"file": ("cv.txt", b"hello", "text/plain")}
    assert client.post("/resume/upload", files=files).status_code == 400

def test_resume_upload_checks_magic_bytes(client):
    files = {"file": ("cv.pdf", b"not a pdf", "application/pdf")}
    response = client.post("/resume/upload", files=files)
    assert response.status_code == 400
    assert "Not a valid PDF" in response.json()["detail"]

def test_courses(client, gateway):
    gateway.courses = make_courses(5)
    view = client.post("/courses", json={"goal": "Python"}).json()
    assert [c["title"] for c in view["cards"]] == [c.title for c in gateway.courses]

@pytest.mark.parametrize("path,body", [
    ("/courses", {"goal": ""}),
    ("/resume/analysis", {"resume_text": "", "target_role": "PM"}),
    ("/interview", {"topic": " "}),
])
def test_required_fields(client, path, body):
    assert client.post(path, json=body).status_code == 400

@pytest.mark.parametrize("method,path,body", [
    ("put", "/interview/answers", {"question_id": 1, "option_index": 0}),
    ("post", "/interview/submit", None),
    ("delete", "/interview", None),
])
def test_drill_controls_are_locked_while_fetching(client, sessions, gateway, method, path, body):
    gateway.questions = make_questions(2)
    client.post("/interview", json={"topic": "SQL"})
    sessions.get().interview.loading = True

    kwargs = {"json": body} if body is not None else {}
    assert getattr(client, method)(path, **kwargs).status_code == 409
    assert sessions.get().interview.answers == {}

def test_chat_is_free_again_after_a_stream(client):
    client.post("/chat/messages", json={"message": "one"})
    assert client.get("/chat").json()["loading"] is False
    assert client.post("/chat/messages", json={"message": "two"}).status_code == 200
