import json

import httpx
import pytest
from fastapi.testclient import TestClient

from essay_analyzer.analysis import AnalysisClient
from essay_analyzer.deps import get_analysis_client
from essay_analyzer.main import app
from essay_analyzer.routers.web import EMPTY_ESSAY_MESSAGE, FAILED_MESSAGE
from essay_analyzer.settings import Settings, get_settings

from conftest import SAMPLE_ESSAY, Recorder, anthropic_config, anthropic_envelope


@pytest.fixture
def use_provider():
	def install(recorder: Recorder, config=None):
		app.dependency_overrides[get_analysis_client] = lambda: AnalysisClient(
			config or anthropic_config(), http_client=recorder.client()
		)
		return recorder

	yield install
	app.dependency_overrides.clear()


@pytest.fixture
def client():
	return TestClient(app)


def test_analyze_returns_camel_case_result(client, use_provider, anthropic_ok, sample_result):
	use_provider(anthropic_ok)

	response = client.post("/api/analyze", json={"essay": SAMPLE_ESSAY, "essayType": "academic"})

	assert response.status_code == 200
	assert response.json() == sample_result
	assert anthropic_ok.calls == 1


@pytest.mark.parametrize(
	"body",
	[
		{},
		{"essay": SAMPLE_ESSAY},
		{"essayType": "academic"},
		{"essay": "", "essayType": "academic"},
	],
)
def test_analyze_missing_fields_is_400(client, use_provider, anthropic_ok, body):
	use_provider(anthropic_ok)

	response = client.post("/api/analyze", json=body)

	assert response.status_code == 400
	assert response.json() == {"error": "Essay and essay type are required"}
	assert anthropic_ok.calls == 0


def test_analyze_invalid_json_is_400(client, use_provider, anthropic_ok):
	use_provider(anthropic_ok)

	response = client.post("/api/analyze", content=b"{", headers={"content-type": "application/json"})

	assert response.status_code == 400
	assert response.json() == {"error": "Invalid JSON body"}


def test_analyze_without_credential_is_500(client, use_provider, anthropic_ok):
	use_provider(anthropic_ok, config=anthropic_config(api_key=None))

	response = client.post("/api/analyze", json={"essay": SAMPLE_ESSAY, "essayType": "academic"})

	assert response.status_code == 500
	assert response.json() == {"error": "API key not configured"}
	assert anthropic_ok.calls == 0


def test_analyze_surfaces_upstream_error(client, use_provider):
	upstream = {"type": "error", "error": {"type": "authentication_error", "message": "invalid x-api-key"}}
	use_provider(Recorder(lambda request: httpx.Response(401, json=upstream)))

	response = client.post("/api/analyze", json={"essay": SAMPLE_ESSAY, "essayType": "academic"})

	assert response.status_code == 500
	assert response.json() == {"error": "Anthropic API error", "details": upstream}


def test_analyze_malformed_response_is_500(client, use_provider):
	use_provider(Recorder(lambda request: httpx.Response(200, json=anthropic_envelope("Sorry, no JSON today."))))

	response = client.post("/api/analyze", json={"essay": SAMPLE_ESSAY, "essayType": "academic"})

	assert response.status_code == 500
	body = response.json()
	assert body["error"] == "Failed to analyze essay"
	assert body["message"] == "Provider response is not valid JSON"


def test_analyze_preflight_is_empty_200(client):
	response = client.options("/api/analyze")

	assert response.status_code == 200
	assert response.content == b""


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_analyze_wrong_method_is_405(client, method):
	response = client.request(method.upper(), "/api/analyze")

	assert response.status_code == 405
	assert response.json() == {"error": "Method not allowed"}


def test_index_page_renders_form(client):
	response = client.get("/")

	assert response.status_code == 200
	assert "Essay Analyzer" in response.text
	assert 'value="academic" selected' in response.text
	assert "University Application Essay" in response.text
	assert "0 words" in response.text


def test_form_submit_renders_dashboard(client, use_provider, anthropic_ok):
	use_provider(anthropic_ok)

	response = client.post("/", data={"essay": SAMPLE_ESSAY, "essay_type": "university"})

	assert response.status_code == 200
	assert "AI Detection Analysis" in response.text
	assert "vivid imagery" in response.text
	assert "bg-green" in response.text
	assert "6 words" in response.text
	assert 'value="university" selected' in response.text
	assert anthropic_ok.calls == 1
	prompt = json.loads(anthropic_ok.requests[0].content)["messages"][0]["content"]
	assert "Analyze this university essay" in prompt


def test_form_submit_blank_essay_shows_error(client, use_provider, anthropic_ok):
	use_provider(anthropic_ok)

	response = client.post("/", data={"essay": "   ", "essay_type": "academic"})

	assert EMPTY_ESSAY_MESSAGE in response.text
	assert "AI Detection Analysis" not in response.text
	assert anthropic_ok.calls == 0


def test_form_submit_failure_replaces_dashboard(client, use_provider):
	use_provider(Recorder(lambda request: httpx.Response(500, json={"error": "boom"})))

	response = client.post("/", data={"essay": SAMPLE_ESSAY, "essay_type": "academic"})

	assert response.status_code == 200
	assert FAILED_MESSAGE in response.text
	assert "AI Detection Analysis" not in response.text


def test_info_reports_provider(client, monkeypatch):
	monkeypatch.setenv("ANALYZER_PROVIDER", "gemini")
	monkeypatch.setenv("GEMINI_API_KEY", "g-key")
	app.dependency_overrides[get_settings] = lambda: Settings(_env_file=None)
	try:
		response = client.get("/info")
	finally:
		app.dependency_overrides.clear()

	assert response.json() == {"status": "ok", "provider": "gemini", "provider_configured": True}


def test_healthz(client):
	assert client.get("/healthz").json() == {"status": "ok"}


def test_browser_preflight_is_empty_200(client):
	response = client.options(
		"/api/analyze",
		headers={
			"Origin": "https://essays.example.com",
			"Access-Control-Request-Method": "POST",
			"Access-Control-Request-Headers": "Content-Type",
		},
	)

	assert response.status_code == 200
	assert response.content == b""
	assert response.headers["access-control-allow-origin"] == "*"
	assert "POST" in response.headers["access-control-allow-methods"]


@pytest.mark.parametrize(
	"envelope",
	[
		{"content": ["plain string block"]},
		{"content": [{"type": "text", "text": None}]},
	],
)
def test_form_submit_odd_envelope_shows_failure_message(client, use_provider, envelope):
	use_provider(Recorder(lambda request: httpx.Response(200, json=envelope)))

	response = client.post("/", data={"essay": SAMPLE_ESSAY, "essay_type": "academic"})

	assert response.status_code == 200
	assert FAILED_MESSAGE in response.text
	assert "AI Detection Analysis" not in response.text


def test_analyze_odd_envelope_is_provider_error(client, use_provider):
	use_provider(Recorder(lambda request: httpx.Response(200, json={"content": ["plain string block"]})))

	response = client.post("/api/analyze", json={"essay": SAMPLE_ESSAY, "essayType": "academic"})

	assert response.status_code == 500
	assert response.json()["error"] == "Anthropic API error"
