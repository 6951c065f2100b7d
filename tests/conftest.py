"""
Pytest fixtures and configuration for SEO Translate tests.
"""

import json
from unittest.mock import Mock

import pytest

from seo_translate.config import GeminiConfig
from seo_translate.gemini_client import GeminiClient


def make_http_response(status_code: int = 200, text: str = "") -> Mock:
    """Build a requests.Response stand-in."""
    response = Mock()
    response.status_code = status_code
    response.text = text
    return response


def make_gemini_response(generated, status_code: int = 200) -> Mock:
    """Wrap generated JSON (dict or raw string) in a Gemini success envelope."""
    if not isinstance(generated, str):
        generated = json.dumps(generated, ensure_ascii=False)
    envelope = {
        "candidates": [
            {"content": {"role": "model", "parts": [{"text": generated}]}}
        ]
    }
    return make_http_response(status_code, json.dumps(envelope, ensure_ascii=False))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep real credentials and overrides out of tests."""
    for name in (
        "GEMINI_API_KEY",
        "SEO_TRANSLATE_MODEL",
        "SEO_TRANSLATE_TIMEOUT",
        "SEO_TRANSLATE_LANGUAGES_FILE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def gemini_config() -> GeminiConfig:
    return GeminiConfig(api_key="test-key")


@pytest.fixture
def client(gemini_config: GeminiConfig) -> GeminiClient:
    return GeminiClient(gemini_config)


@pytest.fixture
def sample_content() -> str:
    """Sample page HTML."""
    return (
        "<h2>Professional Liability Insurance</h2>"
        "<p>Professional liability insurance protects consultants and service "
        "providers from claims of negligence, errors or omissions. This guide "
        "explains coverage options, typical costs and how to get a quote.</p>"
    )


@pytest.fixture
def languages_file(tmp_path):
    """Language registry file in the code -> record form."""
    path = tmp_path / "languages.json"
    path.write_text(json.dumps({
        "es": {"name": "Spanish", "native_name": "Español", "enabled": True},
        "en": {"name": "English", "native_name": "English", "enabled": True},
        "pt": {"name": "Portuguese", "native_name": "Português", "enabled": False},
    }), encoding="utf-8")
    return path
