import pytest
from fastapi.testclient import TestClient

from app.api import routes
from app.config import get_settings
from app.main import app
from app.services import pipeline as pipeline_module
from app.services.gemini_service import TRANSIENT_ERRORS
from app.services.pipeline import RecommendationPipeline
from app.services.retry import RetryPolicy
from app.services.transfer import PreferenceTransfer, get_preference_transfer

AUSTIN = {
    "location": "Austin",
    "budget": {"min": 200000, "max": 400000},
    "bedrooms": 3,
    "bathrooms": 2,
    "propertyType": "House",
    "mustHaveFeatures": ["Garage"],
    "preferredFeatures": [],
    "timeframe": "Within 3 months",
    "additionalInfo": "",
    "language": "en",
}


@pytest.fixture
def transfer():
    return PreferenceTransfer()


@pytest.fixture
def client(settings, transfer):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_preference_transfer] = lambda: transfer
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def use_completer(monkeypatch, clock):
    """Route the pipeline through a fake completer."""

    def install(completer):
        pipeline = RecommendationPipeline(completer, RetryPolicy(retry_on=TRANSIENT_ERRORS, sleep=clock.sleep))
        monkeypatch.setattr(routes, "get_recommendation_pipeline", lambda settings: pipeline)
        return completer

    return install


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_options_lists_catalogs(client):
    data = client.get("/api/options").json()

    assert data["propertyTypes"][0] == "House"
    assert "Mobile Home" in data["propertyTypes"]
    assert "Just browsing" in data["timeframes"]
    assert len(data["features"]) == 15
    assert [lang["value"] for lang in data["languages"]] == ["en", "ar", "fr"]


def test_submit_preferences_stores_for_session(client, transfer):
    response = client.post("/api/preferences", params={"session_id": "abc"}, json=AUSTIN)

    assert response.status_code == 200
    body = response.json()
    assert body["sessionId"] == "abc"
    assert body["preferences"]["mustHaveFeatures"] == ["Garage"]
    assert "abc" in transfer


def test_submit_creates_session_id_when_missing(client, transfer):
    session_id = client.post("/api/preferences", json=AUSTIN).json()["sessionId"]
    assert session_id in transfer


def test_submit_without_location_is_rejected(client, transfer):
    response = client.post("/api/preferences", params={"session_id": "abc"}, json={**AUSTIN, "location": "  "})

    assert response.status_code == 422
    assert response.json()["detail"]["field"] == "location"
    assert "abc" not in transfer


def test_recommendations_for_session_consume_preferences(client, use_completer, completer_factory, agent_reply):
    completer = use_completer(completer_factory(agent_reply))
    client.post("/api/preferences", params={"session_id": "abc"}, json=AUSTIN)

    first = client.post("/api/recommendations/abc")
    second = client.post("/api/recommendations/abc")

    assert first.status_code == 200
    assert first.json()["recommendations"][0]["matchScore"] == 92
    assert "Austin" in completer.prompts[0]
    assert second.status_code == 404


def test_recommendations_for_unknown_session(client):
    assert client.post("/api/recommendations/nope").status_code == 404


def test_direct_recommendations(client, use_completer, completer_factory):
    use_completer(
        completer_factory(
            'Here you go: {"recommendations":[],"searchSummary":"none","nextSteps":[],"additionalQuestions":[]} thanks'
        )
    )

    response = client.post("/api/recommendations", json=AUSTIN)

    assert response.status_code == 200
    assert response.json() == {
        "recommendations": [],
        "searchSummary": "none",
        "nextSteps": [],
        "additionalQuestions": [],
    }


def test_unreachable_upstream_is_503(client, use_completer, completer_factory):
    completer = use_completer(completer_factory(ConnectionError("refused")))

    response = client.post("/api/recommendations", json=AUSTIN)

    assert response.status_code == 503
    assert "3 attempts" in response.json()["detail"]
    assert completer.calls == 3


def test_rejected_request_is_502_without_retry(client, use_completer, completer_factory, gemini_error):
    completer = use_completer(completer_factory(gemini_error(400, "API key not valid")))

    response = client.post("/api/recommendations", json=AUSTIN)

    assert response.status_code == 502
    assert response.json()["detail"].startswith("Gemini API error")
    assert completer.calls == 1


def test_unusable_reply_is_502(client, use_completer, completer_factory):
    use_completer(completer_factory('{"recommendations": ['))

    response = client.post("/api/recommendations", json=AUSTIN)

    assert response.status_code == 502
    assert "NoJsonFound" in response.json()["detail"]


def test_missing_credential_is_503(monkeypatch, client, settings):
    monkeypatch.setattr(pipeline_module, "_pipeline", None)
    app.dependency_overrides[get_settings] = lambda: settings.model_copy(update={"gemini_api_key": None})

    response = client.post("/api/recommendations", json=AUSTIN)

    assert response.status_code == 503
    assert "GEMINI_API_KEY" in response.json()["detail"]
