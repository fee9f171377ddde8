import httpx

from app import create_app
from errors import UpstreamError
from llm_wrapper import OpenRouterClient
from prompts import MISSING_INPUT_MESSAGE, NO_VALID_SYMPTOMS_MESSAGE
from settings import Settings


def test_lists_symptoms_and_resources(client):
    symptoms = client.get("/api/symptoms").get_json()
    assert symptoms[0] == {"id": 1, "name": "Fever"}
    resources = client.get("/api/resources").get_json()
    assert [r["id"] for r in resources] == [1, 2, 3, 4]
    assert client.get("/health").get_json() == {"status": "ok"}


def test_diagnose_from_symptoms(client, fake_llm):
    resp = client.post("/api/diagnose", json={"selectedSymptomIds": [3, 1]})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["aiResponse"] == fake_llm.answer
    assert data["message"] == "AI guidance generated. Remember this is not a medical diagnosis."
    assert data["structuredData"]["recommendations"] == [
        {"id": 100, "condition_id": 11, "text": "Avoid triggers."},
        {"id": 102, "condition_id": 11, "text": "Try antihistamines."},
    ]
    assert [r["type"] for r in data["structuredData"]["resources"]] == ["telehealth", "general_clinic"]
    assert "Sneezing, Fever" in fake_llm.prompts[0]


def test_diagnose_from_chat_ignores_ids(client, fake_llm):
    resp = client.post("/api/diagnose", json={"chatInput": " itchy eyes ", "selectedSymptomIds": [1]})
    assert resp.status_code == 200
    assert 'says: "itchy eyes"' in fake_llm.prompts[0]
    assert "Fever" not in fake_llm.prompts[0]


def test_missing_input_is_400_without_llm_call(client, fake_llm):
    for payload in ({"selectedSymptomIds": []}, {}):
        resp = client.post("/api/diagnose", json=payload)
        assert resp.status_code == 400
        assert resp.get_json() == {"error": MISSING_INPUT_MESSAGE}
    resp = client.post("/api/diagnose", data="not json", content_type="text/plain")
    assert resp.status_code == 400
    assert fake_llm.prompts == []


def test_unknown_ids_is_400(client, fake_llm):
    resp = client.post("/api/diagnose", json={"selectedSymptomIds": [42]})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == NO_VALID_SYMPTOMS_MESSAGE
    assert fake_llm.prompts == []


def test_upstream_failure_is_500_with_details(client, fake_llm):
    fake_llm.error = UpstreamError("HTTP 502", status_code=502, details={"message": "bad gateway"})
    resp = client.post("/api/diagnose", json={"chatInput": "cough"})
    assert resp.status_code == 500
    data = resp.get_json()
    assert data["error"].startswith("Failed to generate AI guidance.")
    assert data["details"] == {"message": "bad gateway"}
    assert "structuredData" not in data
    assert "aiResponse" not in data


def test_answer_without_condition_still_has_resources(client, fake_llm):
    fake_llm.answer = "Please see a doctor."
    data = client.post("/api/diagnose", json={"chatInput": "dizzy"}).get_json()
    assert data["structuredData"]["recommendations"] == []
    assert len(data["structuredData"]["resources"]) == 2


def test_repeated_request_is_stable(client):
    first = client.post("/api/diagnose", json={"chatInput": "sneezing"}).get_json()
    second = client.post("/api/diagnose", json={"chatInput": "sneezing"}).get_json()
    assert first["structuredData"] == second["structuredData"]


def test_boolean_ids_do_not_resolve(client, fake_llm):
    resp = client.post("/api/diagnose", json={"selectedSymptomIds": [True]})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == NO_VALID_SYMPTOMS_MESSAGE
    assert fake_llm.prompts == []


def test_malformed_upstream_body_is_json_500(store):
    settings = Settings(openrouter_api_key="sk-test")

    def handler(request):
        return httpx.Response(200, content=b'{"choices": [', headers={"content-type": "application/json"})

    llm = OpenRouterClient(settings, http_client=httpx.Client(transport=httpx.MockTransport(handler)))
    client = create_app(store=store, llm=llm, settings=settings).test_client()

    resp = client.post("/api/diagnose", json={"chatInput": "cough"})
    assert resp.status_code == 500
    data = resp.get_json()
    assert data["error"].startswith("Failed to generate AI guidance.")
    assert "details" in data
    assert "structuredData" not in data
