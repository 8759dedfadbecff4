import json

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from repo_composer import api, config

API = "https://api.github.com/repos/acme/widgets"
RAW = "https://raw.githubusercontent.com/acme/widgets/main"
COMPLETIONS_URL = "https://api.deepseek.com/v1/chat/completions"

ANALYSIS_RESPONSE = json.dumps(
    {
        "purpose": "Composable widgets for the web",
        "themes": ["composition"],
        "emotions": ["joy"],
        "technicalConcepts": ["rendering"],
        "musicalMetaphors": ["layered loops"],
        "keyFeatures": ["widgets"],
        "innovationLevel": "medium",
        "complexity": "simple",
        "userImpact": "Faster interfaces",
        "artisticInterpretation": "Many small parts in harmony",
    }
)


@pytest.fixture(autouse=True)
def llm_env(monkeypatch):
    monkeypatch.setenv("DEEPSEEK_API_KEY", "test-key")
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    config.get_config.cache_clear()
    yield
    config.get_config.cache_clear()


@pytest.fixture
def client():
    return TestClient(api.app, raise_server_exceptions=False)


def _completion(content: str) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "id": "cmpl-1",
            "object": "chat.completion",
            "created": 1_700_000_000,
            "model": "deepseek-chat",
            "choices": [
                {"index": 0, "finish_reason": "stop", "message": {"role": "assistant", "content": content}}
            ],
        },
    )


def _mock_github_api():
    """Set up respx mocks for a three-file repository."""
    respx.get(API).mock(
        return_value=httpx.Response(
            200,
            json={
                "name": "widgets",
                "description": "Composable widgets for the web",
                "language": "JavaScript",
                "topics": ["ui"],
                "stargazers_count": 42,
                "forks_count": 7,
            },
        )
    )
    respx.get(f"{API}/contents").mock(
        return_value=httpx.Response(
            200,
            json=[
                {"type": "file", "name": "README.md", "path": "README.md", "size": 40,
                 "download_url": f"{RAW}/README.md"},
                {"type": "dir", "name": "src", "path": "src", "size": 0, "download_url": None},
            ],
        )
    )
    respx.get(f"{API}/contents/src").mock(
        return_value=httpx.Response(
            200,
            json=[
                {"type": "file", "name": "index.js", "path": "src/index.js", "size": 60,
                 "download_url": f"{RAW}/src/index.js"},
            ],
        )
    )
    respx.get(f"{RAW}/README.md").mock(return_value=httpx.Response(200, text="# Widgets\nA guide."))
    respx.get(f"{RAW}/src/index.js").mock(return_value=httpx.Response(200, text="export default {}"))


@respx.mock
def test_successful_generate(client):
    _mock_github_api()
    respx.post(COMPLETIONS_URL).mock(
        side_effect=[
            _completion(ANALYSIS_RESPONSE),
            _completion("Warm synth pads over a steady pulse."),
            _completion("[Verse]\nSmall parts, big dreams"),
        ]
    )

    resp = client.post("/generate", json={"repoUrl": "https://github.com/acme/widgets", "musicStyle": "ambient"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    data = body["data"]
    assert data["repository"]["name"] == "widgets"
    assert data["fileStats"] == {"total": 2, "selected": 2, "analyzed": 2}
    assert data["complexity"] == "simple"
    assert data["selectedStyle"] == "ambient"
    assert data["musicPrompt"] == "Warm synth pads over a steady pulse."
    assert data["lyrics"] == "[Verse]\nSmall parts, big dreams"
    assert "generatedAt" in data


@respx.mock
def test_generate_multiple(client):
    _mock_github_api()

    def reply(request: httpx.Request) -> httpx.Response:
        prompt = json.loads(request.content)["messages"][1]["content"]
        if "Respond ONLY with a JSON object" in prompt:
            return _completion(ANALYSIS_RESPONSE)
        if "most suitable music style" in prompt:
            return _completion("jazz")
        if "in the pop style" in prompt:
            return httpx.Response(400, json={"error": {"message": "content filtered"}})
        return _completion("some text")

    respx.post(COMPLETIONS_URL).mock(side_effect=reply)

    resp = client.post(
        "/generate-multiple",
        json={"repoUrl": "https://github.com/acme/widgets", "styles": ["auto", "rock", "pop"]},
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert [entry["style"] for entry in data["lyrics"]] == ["jazz", "rock"]
    assert [entry["style"] for entry in data["errors"]] == ["pop"]
    assert data["requestedStyles"] == ["auto", "rock", "pop"]


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


def test_invalid_url(client):
    resp = client.post("/generate", json={"repoUrl": "https://gitlab.com/user/repo"})
    assert resp.status_code == 400
    data = resp.json()
    assert data["status"] == "error"
    assert "message" in data


def test_missing_url(client):
    resp = client.post("/generate", json={})
    assert resp.status_code == 422
    data = resp.json()
    assert data["status"] == "error"
    assert "message" in data


@respx.mock
def test_repo_not_found(client):
    respx.get("https://api.github.com/repos/nonexist/nonexist").mock(
        return_value=httpx.Response(404, json={"message": "Not Found"})
    )

    resp = client.post("/generate", json={"repoUrl": "https://github.com/nonexist/nonexist"})
    assert resp.status_code == 404


@respx.mock
def test_rate_limited(client):
    respx.get(API).mock(return_value=httpx.Response(403, json={"message": "API rate limit exceeded"}))

    resp = client.post("/generate", json={"repoUrl": "https://github.com/acme/widgets"})
    assert resp.status_code == 429


@respx.mock
def test_llm_error(client):
    _mock_github_api()

    # Analysis falls back, but the final prompt has no fallback
    respx.post(COMPLETIONS_URL).mock(
        return_value=httpx.Response(500, json={"error": {"message": "Internal Server Error"}})
    )

    resp = client.post("/generate", json={"repoUrl": "https://github.com/acme/widgets"})
    assert resp.status_code == 502
    assert resp.json()["status"] == "error"


def test_openapi_describes_envelopes(client):
    schema = client.get("/openapi.json").json()
    generate = schema["paths"]["/generate"]["post"]["responses"]["200"]["content"]["application/json"]["schema"]
    multiple = schema["paths"]["/generate-multiple"]["post"]["responses"]["200"]["content"]["application/json"]["schema"]
    assert generate["$ref"].endswith("/GenerateEnvelope")
    assert multiple["$ref"].endswith("/GenerateMultipleEnvelope")
    envelope = schema["components"]["schemas"]["GenerateEnvelope"]
    assert set(envelope["properties"]) == {"success", "data"}
