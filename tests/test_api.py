# tests/test_api.py
import io
import zipfile

import pytest

import config


def create_exam(client, name="Algebra Final", **fields):
    payload = {
        "name": name,
        "subject": "Maths",
        "category": "Algebra",
        "totalQuestions": 4,
        "optionsPerQuestion": 4,
        "answers": {
            "1": {"userAnswer": "", "numericalAnswer": "42", "selectedOptions": []},
            "2": {"userAnswer": "", "numericalAnswer": "", "selectedOptions": ["D"]},
            "3": {"userAnswer": "", "numericalAnswer": "", "selectedOptions": []},
        },
        "timerType": "countdown",
        "timeRemaining": 1800,
        "isExamStarted": True,
    }
    payload.update(fields)
    response = client.post("/api/exams", json=payload)
    assert response.status_code == 200
    return response


def test_save_and_get_exam(client):
    assert create_exam(client).json() == {"success": True, "message": "Exam saved successfully"}

    response = client.get("/api/exams/Algebra Final")

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Algebra Final"
    assert body["evaluation"] == {}
    assert body["deleted"] is False
    assert "_id" not in body


def test_save_keeps_unknown_fields(client, collection):
    create_exam(client, calculatorEnabled=True)

    assert collection.raw("exam::Algebra Final")["calculatorEnabled"] is True


def test_get_list_answers_returns_mapping(client):
    create_exam(client, answers=[{"numericalAnswer": "1"}, {"selectedOptions": ["A"]}])

    answers = client.get("/api/exams/Algebra Final").json()["answers"]

    assert set(answers) == {"1", "2"}
    assert answers["2"]["selectedOptions"] == ["A"]
    assert answers["1"]["userAnswer"] == ""


def test_get_missing_exam_is_404(client):
    response = client.get("/api/exams/ghost")

    assert response.status_code == 404
    assert response.json()["success"] is False


def test_list_and_archive_flow(client):
    create_exam(client, name="A")
    create_exam(client, name="B")

    assert client.delete("/api/exams/B").json()["message"] == "Exam archived successfully"
    assert [e["name"] for e in client.get("/api/archived-exams").json()] == ["B"]
    assert len(client.get("/api/exams").json()) == 2

    assert client.post("/api/exams/B/unarchive").json()["success"] is True
    assert client.get("/api/archived-exams").json() == []


def test_archive_missing_exam_is_404(client):
    assert client.delete("/api/exams/ghost").status_code == 404


def test_permanent_delete_accepts_both_verbs(client, collection):
    create_exam(client)

    first = client.delete("/api/exams/Algebra Final/permanent")
    second = client.post("/api/exams/Algebra Final/permanent")

    assert first.json() == {"success": True, "message": "Exam permanently deleted"}
    assert second.status_code == 200
    assert second.json()["success"] is True
    assert collection.raw("exam::Algebra Final") is None


def test_check_exam_name(client):
    create_exam(client)

    assert client.get("/check-exam-name", params={"name": "Algebra Final"}).json() == {"exists": True}
    assert client.get("/check-exam-name", params={"name": "Other"}).json() == {"exists": False}


def test_statistics_endpoint(client):
    create_exam(client, evaluation={"1": "correct", "2": "wrong"})

    response = client.get("/api/exams/Algebra Final/statistics")

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": {
            "totalQuestions": 4,
            "attemptedQuestions": 2,
            "correctCount": 1,
            "wrongCount": 1,
            "unattemptedCount": 2,
            "score": 25.0,
        },
    }


def test_statistics_missing_exam_is_404(client):
    response = client.get("/api/exams/ghost/statistics")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Exam not found"}


def test_evaluate_endpoint_overwrites(client):
    create_exam(client)
    client.post("/api/exams/Algebra Final/evaluate", json={"evaluation": {"1": "correct", "2": "correct"}})

    response = client.post("/api/exams/Algebra Final/evaluate", json={"evaluation": {"1": "wrong"}})

    assert response.json() == {"success": True, "message": "Evaluation saved successfully"}
    exam = client.get("/api/exams/Algebra Final").json()
    assert exam["evaluation"] == {"1": "wrong"}
    assert exam["score"] == 0
    assert exam["completed"] is True


def test_reattempt_and_attempt_history(client):
    create_exam(client)

    response = client.post("/api/exams/Algebra Final/reattempt")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["subject"] == "Maths"
    assert data["category"] == "Algebra"
    assert data["examName"].startswith("Algebra Final-")

    client.delete(f"/api/exams/{data['examName']}")
    names = {e["name"] for e in client.get("/api/exams/Algebra Final/attempts").json()}
    assert names == {"Algebra Final", data["examName"]}


def test_reattempt_missing_exam_is_404(client):
    assert client.post("/api/exams/ghost/reattempt").status_code == 404


def test_subjects_and_categories(client):
    created = client.post("/api/subjects", json={"name": "Maths"}).json()
    client.post("/api/subjects", json={"name": "Art"})
    client.post("/api/subjects/Maths/categories", json={"name": "Geometry"})
    client.post("/api/subjects/Maths/categories", json={"name": "Algebra"})

    assert created["success"] is True
    assert created["data"]["type"] == "subject"
    assert [s["name"] for s in client.get("/api/subjects").json()] == ["Art", "Maths"]
    assert [c["name"] for c in client.get("/api/subjects/Maths/categories").json()] == ["Algebra", "Geometry"]
    assert client.get("/api/subjects/Art/categories").json() == []


def test_category_exams_follow_attempt_visibility(client):
    create_exam(client, name="Kept")
    create_exam(client, name="Gone")
    create_exam(client, name="Other", category="Geometry")
    clone = client.post("/api/exams/Gone/reattempt").json()["data"]["examName"]
    client.delete("/api/exams/Gone")

    names = {e["name"] for e in client.get("/api/subjects/Maths/categories/Algebra/exams").json()}
    assert names == {"Kept", "Gone"}

    client.delete(f"/api/exams/{clone}")
    names = {e["name"] for e in client.get("/api/subjects/Maths/categories/Algebra/exams").json()}
    assert names == {"Kept"}


def test_generate_csv_report(client):
    create_exam(client, evaluation={"1": "correct"})

    response = client.get("/api/generate-report", params={"exam": "Algebra Final", "reportType": "without"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="Algebra Final-report.csv"' in response.headers["content-disposition"]
    assert response.text.endswith(",2,1,0,50.00%")


def test_generate_zip_report(client):
    create_exam(client)

    response = client.get("/api/generate-report", params={"exam": "Algebra Final", "reportType": "both"})

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/zip"
    with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
        assert len(archive.namelist()) == 2


def test_generate_report_missing_exam_is_404(client):
    response = client.get("/api/generate-report", params={"exam": "ghost"})

    assert response.status_code == 404


def test_store_failure_is_500(client, collection):
    collection.fail = True

    response = client.get("/api/exams")

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Error fetching exams"}


def test_malformed_exam_fields_are_stored_as_sent(client, collection):
    response = client.post("/api/exams", json={
        "name": "Loose",
        "totalQuestions": "",
        "evaluation": {"1": None},
        "completed": "yes",
        "answers": "not-a-mapping",
    })

    assert response.json() == {"success": True, "message": "Exam saved successfully"}
    stored = collection.raw("exam::Loose")
    assert stored["totalQuestions"] == ""
    assert stored["evaluation"] == {"1": None}
    assert stored["completed"] == "yes"
    assert stored["answers"] == "not-a-mapping"


def test_check_exam_name_requires_name(client):
    assert client.get("/check-exam-name").status_code == 422


def test_disconnected_store_uses_error_envelope():
    from fastapi.testclient import TestClient
    from main import app

    response = TestClient(app).get("/api/exams")

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Database error"}


@pytest.fixture
def static_dir(tmp_path, monkeypatch):
    public = tmp_path / "public"
    (public / "assets").mkdir(parents=True)
    (public / "index.html").write_text("<html>shell</html>")
    (public / "assets" / "calculator.js").write_text("console.log('calc');")
    (tmp_path / "secret.txt").write_text("do not serve")
    monkeypatch.setattr(config, "STATIC_DIR", str(public))
    return public


def test_frontend_routes_fall_back_to_shell(client, static_dir):
    for path in ("/", "/exams/Algebra/attempts", "/some/page"):
        response = client.get(path)
        assert response.status_code == 200
        assert response.text == "<html>shell</html>"


def test_frontend_serves_existing_assets(client, static_dir):
    response = client.get("/assets/calculator.js")

    assert response.status_code == 200
    assert response.text == "console.log('calc');"


def test_frontend_does_not_escape_static_dir(client, static_dir):
    response = client.get("/..%2Fsecret.txt")

    assert response.status_code == 404
    assert "do not serve" not in response.text


def test_unknown_api_path_is_404_envelope(client, static_dir):
    response = client.get("/api/unknown")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Not found"}
