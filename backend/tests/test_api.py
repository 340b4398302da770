import pytest
from fastapi.testclient import TestClient

from simsurvey.services import group_service


def _save(client, group_id="undefined", **body):
    return client.put(f"/research-groups/{group_id}/config", json=body)


def test_health(client):
    assert client.get("/health").json() == {"status": "ok", "app": "simsurvey"}


def test_end_to_end_participant_flow(client):
    res = _save(
        client,
        fontFace="Arial",
        colorScheme="#111111",
        questions=[{"question": "Q1", "preAnswer": "thinking", "answer": "A1", "delay": "0"}],
    )
    assert res.status_code == 200
    assert res.json()["groupId"] == "1"

    listed = client.get("/fixed-questions").json()
    entry = next(e for e in listed if e["question"] == "Q1")

    pre = client.post("/ask", json={"questionId": entry["id"], "phase": "pre"})
    assert pre.json() == {"preAnswerMessage": "thinking"}

    final = client.post("/ask", json={"questionId": entry["id"], "phase": "final"})
    assert final.json() == {"finalAnswer": "A1", "colorScheme": "#111111", "fontFace": "Arial"}

    rated = client.post("/rate", json={"questionId": entry["id"], "rating": 4})
    assert rated.status_code == 200
    assert rated.json()["message"] == "Rating stored"

    assert client.get("/ratings").json() == [{
        "questionId": str(entry["id"]),
        "question": "Q1",
        "rating1": 0,
        "rating2": 0,
        "rating3": 0,
        "rating4": 1,
        "rating5": 0,
    }]

    assert client.post("/incrementSurveyCounter").json() == {"count": 1}
    assert client.get("/getSurveyCounter").json() == {"count": 1}


def test_post_also_saves_group(client):
    res = client.post("/research-groups/g9/config", json={"questions": [{"question": "Q"}]})
    assert res.json() == {"message": "Saved group g9", "groupId": "g9"}


def test_list_and_get_group(client):
    _save(client, "g1", fontFace="Georgia", questions=[{"question": "Q1", "answer": "A"}])
    rows = client.get("/research-groups/all").json()
    assert [r["groupId"] for r in rows] == ["g1"]
    assert rows[0]["fontFace"] == "Georgia"

    group = client.get("/research-groups/g1/config").json()
    assert group == {
        "fontFace": "Georgia",
        "colorScheme": "#000000",
        "questions": [{"question": "Q1", "answer": "A"}],
    }


def test_get_unknown_group_is_404(client):
    res = client.get("/research-groups/nope/config")
    assert res.status_code == 404
    assert res.json() == {"message": "Group nope not found."}


def test_save_rejects_bad_delay(client):
    res = _save(client, questions=[{"question": "Q", "delay": "soon"}])
    assert res.status_code == 400
    assert res.json()["message"] == "Invalid request"
    assert "delay" in res.json()["error"]


def test_unparseable_json_is_400(client):
    res = client.put(
        "/research-groups/g1/config",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400


def test_reserved_counter_group_id_is_400(client):
    assert _save(client, questions=[{"question": "First"}]).json()["groupId"] == "1"

    res = _save(client, "COUNTER", questions=[{"question": "Second"}])
    assert res.status_code == 400
    assert res.json() == {"message": "groupId COUNTER is reserved"}

    assert _save(client, questions=[{"question": "Third"}]).json()["groupId"] == "2"
    group = client.get("/research-groups/1/config").json()
    assert [q["question"] for q in group["questions"]] == ["First"]


def test_omitted_pre_answer_falls_back_to_default(client):
    _save(client, questions=[{"question": "Q1", "answer": "A1"}])
    client.get("/fixed-questions")
    res = client.post("/ask", json={"questionId": 1, "phase": "pre"})
    assert res.json() == {"preAnswerMessage": "Thinking..."}


def test_delete_question_and_last_question_removes_group(client):
    _save(client, "g1", questions=[{"question": "Q1"}, {"question": "Q2"}])

    res = client.request("DELETE", "/research-groups/g1/config", json={"questionText": "q1"})
    assert res.json() == {"message": "Removed question from group g1"}

    res = client.request("DELETE", "/research-groups/g1/config", json={"questionText": "Q2 "})
    assert res.json() == {"message": "Deleted entire group row for groupId g1"}
    assert client.get("/research-groups/g1/config").status_code == 404


def test_delete_requires_question_text(client):
    _save(client, "g1", questions=[{"question": "Q1"}])
    res = client.request("DELETE", "/research-groups/g1/config", json={})
    assert res.status_code == 400
    assert group_service.get("g1") is not None


def test_delete_from_unknown_group_is_404(client):
    res = client.request("DELETE", "/research-groups/ghost/config", json={"questionText": "Q"})
    assert res.status_code == 404
    assert res.json() == {"message": "No questions found for group ghost"}


def test_ask_unknown_id_is_404(client):
    _save(client, questions=[{"question": "Q1"}])
    res = client.post("/ask", json={"questionId": 99, "phase": "pre"})
    assert res.status_code == 404
    assert res.json() == {"message": "No DB question for id 99"}


def test_ask_without_question_id_is_400(client):
    assert client.post("/ask", json={"phase": "pre"}).status_code == 400


def test_ask_rejects_unknown_phase(client):
    assert client.post("/ask", json={"questionId": 1, "phase": "later"}).status_code == 400


def test_ask_builds_catalog_when_none_is_held(client):
    _save(client, questions=[{"question": "Q1", "preAnswer": "p"}])
    assert client.post("/ask", json={"questionId": 1}).json() == {"preAnswerMessage": "p"}


def test_ask_serves_held_catalog_until_questions_are_listed_again(client):
    _save(client, "a", questions=[{"question": "A1", "preAnswer": "first"}])
    client.get("/fixed-questions")

    _save(client, "a", questions=[{"question": "A1", "preAnswer": "edited"}])
    assert client.post("/ask", json={"questionId": 1}).json() == {"preAnswerMessage": "first"}

    client.get("/fixed-questions")
    assert client.post("/ask", json={"questionId": 1}).json() == {"preAnswerMessage": "edited"}


@pytest.mark.parametrize("rating", [0, 6, "x"])
def test_rate_rejects_out_of_range(client, rating):
    res = client.post("/rate", json={"questionId": 1, "rating": rating})
    assert res.status_code == 400
    assert res.json() == {"message": "Invalid input"}
    assert client.get("/ratings").json() == []


def test_survey_status_round_trip(client):
    assert client.get("/survey-status").json() == {"isOpen": False}
    res = client.post("/survey-status", json={"isOpen": True})
    assert res.json() == {"message": "Updated", "isOpen": True}
    assert client.get("/survey-status").json() == {"isOpen": True}


def test_survey_status_requires_flag(client):
    assert client.post("/survey-status", json={}).status_code == 400


def test_projects_routes(client):
    created = client.post("/projects", json={"email": "a@lab.org", "name": "Ada"}).json()
    pid = created["projectId"]
    assert pid == "1"

    dup = client.post(f"/projects/{pid}/researchers", json={"email": "a@lab.org"})
    assert dup.status_code == 409

    client.post(f"/projects/{pid}/researchers", json={"email": "b@lab.org"})
    listed = client.get(f"/projects/{pid}/researchers").json()
    assert sorted(r["id"] for r in listed) == ["a@lab.org", "b@lab.org"]

    res = client.delete(f"/projects/{pid}/researchers/a@lab.org")
    assert res.json() == {"message": f"Researcher a@lab.org removed from project {pid}"}
    assert [r["id"] for r in client.get(f"/projects/{pid}/researchers").json()] == ["b@lab.org"]


def test_project_without_email_is_400(client):
    res = client.post("/projects", json={"name": "Nobody"})
    assert res.status_code == 400
    assert res.json() == {"message": "Missing researcherEmail in body"}


def test_questions_routes(client):
    created = client.post("/questions", json={"surveyId": "s1", "questions": [{"text": "Why?"}]}).json()
    assert created == {"message": "Questions stored", "surveyId": "s1", "count": 1}

    qid = client.get("/questions").json()[0]["questionId"]
    assert client.get(f"/questions/{qid}", params={"surveyId": "s1"}).json()["text"] == "Why?"

    client.put(f"/questions/{qid}", params={"surveyId": "s1"}, json={"text": "Why not?"})
    assert client.get(f"/questions/{qid}", params={"surveyId": "s1"}).json()["text"] == "Why not?"

    assert client.delete(f"/questions/{qid}", params={"surveyId": "s1"}).status_code == 200
    assert client.get(f"/questions/{qid}", params={"surveyId": "s1"}).status_code == 404


def test_single_question_routes_need_survey_id(client):
    res = client.get("/questions/q1")
    assert res.status_code == 400
    assert res.json() == {"message": "Missing surveyId as query param"}


def test_unknown_route_is_404_with_message(client):
    res = client.get("/nowhere")
    assert res.status_code == 404
    assert res.json() == {"message": "Route not found for GET /nowhere"}


def test_cors_headers_are_permissive(client):
    res = client.get("/survey-status", headers={"Origin": "https://survey.example.org"})
    assert res.headers["access-control-allow-origin"] in ("*", "https://survey.example.org")


def test_storage_failure_is_500_with_error(aws, monkeypatch):
    from simsurvey.main import app

    def boom():
        raise RuntimeError("table unavailable")

    monkeypatch.setattr(group_service, "list_all", boom)
    with TestClient(app, raise_server_exceptions=False) as c:
        res = c.get("/research-groups/all")
    assert res.status_code == 500
    assert res.json() == {"message": "Internal Server Error", "error": "table unavailable"}
