"""Tests for the FastAPI wrapper."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from seo_translate.api import app, get_client
from seo_translate.config import GeminiConfig
from seo_translate.gemini_client import GeminiClient

from conftest import make_gemini_response, make_http_response


@pytest.fixture
def api_client():
    app.dependency_overrides[get_client] = lambda: GeminiClient(GeminiConfig(api_key="test-key"))
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def keyless_api_client():
    app.dependency_overrides[get_client] = lambda: GeminiClient(GeminiConfig(api_key=None))
    yield TestClient(app)
    app.dependency_overrides.clear()


PAGE = {"title": "Professional Liability", "content": "<p>Coverage for consultants.</p>", "language": "es"}


class TestHealthAndLanguages:
    """Tests for the read-only endpoints."""

    def test_health(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "k")
        response = TestClient(app).get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["api_key_configured"] is True

    def test_languages_from_file(self, monkeypatch, languages_file):
        monkeypatch.setenv("SEO_TRANSLATE_LANGUAGES_FILE", str(languages_file))

        response = TestClient(app).get("/api/languages")

        assert response.status_code == 200
        assert [lang["code"] for lang in response.json()] == ["es", "en"]
        assert response.json()[0]["display_name"] == "Spanish (Español)"

    def test_languages_unconfigured(self):
        response = TestClient(app).get("/api/languages")
        assert response.status_code == 200
        assert response.json() == []

    def test_languages_bad_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SEO_TRANSLATE_LANGUAGES_FILE", str(tmp_path / "missing.json"))
        response = TestClient(app).get("/api/languages")
        assert response.status_code == 500

    def test_languages_malformed_records(self, monkeypatch, tmp_path):
        path = tmp_path / "languages.json"
        path.write_text('["es", "en"]', encoding="utf-8")
        monkeypatch.setenv("SEO_TRANSLATE_LANGUAGES_FILE", str(path))

        response = TestClient(app).get("/api/languages")

        assert response.status_code == 500
        assert "#0" in response.json()["detail"]


class TestGenerationEndpoints:
    """Tests for endpoints that call the model."""

    @patch("seo_translate.gemini_client.requests.post")
    def test_translate(self, mock_post, api_client):
        mock_post.return_value = make_gemini_response({
            "translated_title": "Responsabilidad Profesional",
            "translated_content": "<p>Cobertura para consultores.</p>",
        })

        response = api_client.post("/api/translate", json=PAGE)

        assert response.status_code == 200
        assert response.json() == {
            "title": "Responsabilidad Profesional",
            "content": "<p>Cobertura para consultores.</p>",
        }

    @patch("seo_translate.gemini_client.requests.post")
    def test_seo_generate(self, mock_post, api_client):
        mock_post.return_value = make_gemini_response({
            "seo_title": "S" * 70,
            "seo_description": "Short description",
            "og_title": "OG title",
        })

        response = api_client.post("/api/seo/generate", json=PAGE)

        assert response.status_code == 200
        data = response.json()
        assert data["seo_title"] == "S" * 57 + "..."
        assert data["validation"]["valid"] is True
        assert data["validation"]["recommendations"] == ["seo_title is near limit (60/60)"]

    @patch("seo_translate.gemini_client.requests.post")
    def test_alternatives(self, mock_post, api_client):
        mock_post.return_value = make_gemini_response({"alternatives": ["One", "Two", "Three"]})

        response = api_client.post("/api/seo/alternatives", json={
            "title": "Hello World",
            "similar_titles": ["Hello World!"],
        })

        assert response.status_code == 200
        assert response.json() == {"alternatives": ["One", "Two", "Three"]}

    def test_missing_key_is_503(self, keyless_api_client):
        with patch("seo_translate.gemini_client.requests.post") as mock_post:
            response = keyless_api_client.post("/api/translate", json=PAGE)
            mock_post.assert_not_called()

        assert response.status_code == 503

    @patch("seo_translate.gemini_client.requests.post")
    def test_upstream_error_is_502(self, mock_post, api_client):
        mock_post.return_value = make_http_response(429, "quota exceeded")

        response = api_client.post("/api/seo/generate", json=PAGE)

        assert response.status_code == 502
        assert "HTTP 429" in response.json()["detail"]

    @patch("seo_translate.gemini_client.requests.post")
    def test_bad_generated_json_is_502(self, mock_post, api_client):
        mock_post.return_value = make_gemini_response("not json")
        response = api_client.post("/api/translate", json=PAGE)
        assert response.status_code == 502

    def test_missing_title_is_422(self, api_client):
        response = api_client.post("/api/translate", json={"content": "x"})
        assert response.status_code == 422


class TestOfflineEndpoints:
    """Tests for validation and similarity endpoints."""

    def test_validate(self):
        response = TestClient(app).post("/api/seo/validate", json={
            "seo_title": "z" * 61,
            "seo_description": "d" * 150,
        })

        assert response.status_code == 200
        assert response.json() == {
            "valid": False,
            "warnings": ["seo_title exceeds limit (61/60)"],
            "recommendations": ["seo_description is near limit (150/155)"],
        }

    def test_validate_empty(self):
        response = TestClient(app).post("/api/seo/validate", json={})
        assert response.json() == {"valid": True, "warnings": [], "recommendations": []}

    def test_similarity(self):
        response = TestClient(app).post("/api/seo/similarity", json={
            "title": "Hello World",
            "existing_titles": ["Hello World!", "Completely Different"],
        })

        data = response.json()
        assert data["is_similar"] is True
        assert data["similar_titles"] == ["Hello World!"]

    def test_similarity_threshold_out_of_range(self):
        response = TestClient(app).post("/api/seo/similarity", json={
            "title": "a", "existing_titles": [], "threshold": 2,
        })
        assert response.status_code == 422
