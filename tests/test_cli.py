"""Tests for the command-line interface."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from seo_translate.cli import main

from conftest import make_gemini_response, make_http_response


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def titles_file(tmp_path):
    path = tmp_path / "titles.txt"
    path.write_text("Hello World!\n\nCompletely Different\n", encoding="utf-8")
    return path


@pytest.fixture
def content_file(tmp_path, sample_content):
    path = tmp_path / "page.html"
    path.write_text(sample_content, encoding="utf-8")
    return path


class TestOfflineCommands:
    """Commands that never call the API."""

    def test_similarity_flags_collision(self, runner, titles_file):
        result = runner.invoke(main, ["similarity", "Hello World", "--existing-titles", str(titles_file)])

        assert result.exit_code == 2
        assert "similar" in result.output
        assert "Hello World!" in result.output

    def test_similarity_unique(self, runner, titles_file):
        result = runner.invoke(main, [
            "similarity", "Cyber Insurance Guide", "--existing-titles", str(titles_file),
        ])

        assert result.exit_code == 0
        assert "unique" in result.output

    def test_validate_ok(self, runner):
        result = runner.invoke(main, ["validate", "--seo-title", "A clear title"])
        assert result.exit_code == 0
        assert "within limits" in result.output

    def test_validate_over_limit(self, runner):
        result = runner.invoke(main, ["validate", "--og-title", "o" * 70])

        assert result.exit_code == 2
        assert "og_title exceeds limit (70/60)" in result.output

    def test_validate_requires_a_field(self, runner):
        result = runner.invoke(main, ["validate"])
        assert result.exit_code == 1


class TestApiCommands:
    """Commands that call the API (HTTP mocked)."""

    @patch("seo_translate.gemini_client.requests.post")
    def test_seo_json_output(self, mock_post, runner, content_file, titles_file):
        mock_post.side_effect = [
            make_gemini_response({
                "seo_title": "Hello World",
                "seo_description": "Professional liability insurance explained.",
                "og_title": "Liability insurance guide",
            }),
            make_gemini_response({"alternatives": ["Liability Cover Explained"]}),
        ]

        result = runner.invoke(main, [
            "--api-key", "test-key",
            "seo",
            "--title", "Professional Liability",
            "--content-file", str(content_file),
            "--existing-titles", str(titles_file),
            "--json",
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["fields"]["seo_title"] == "Hello World"
        assert data["validation"]["valid"] is True
        assert data["similarity"]["is_similar"] is True
        assert data["similarity"]["alternatives"] == ["Liability Cover Explained"]
        assert mock_post.call_count == 2

    @patch("seo_translate.gemini_client.requests.post")
    def test_translate_json_uses_env_key(self, mock_post, runner, content_file, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        mock_post.return_value = make_gemini_response({
            "translated_title": "Responsabilidad",
            "translated_content": "<p>Hola</p>",
        })

        result = runner.invoke(main, [
            "translate", "--title", "Liability", "--content-file", str(content_file), "--json",
        ])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"title": "Responsabilidad", "content": "<p>Hola</p>"}
        assert mock_post.call_args.kwargs["params"] == {"key": "env-key"}

    @patch("seo_translate.gemini_client.requests.post")
    def test_shorten(self, mock_post, runner):
        mock_post.return_value = make_gemini_response({"shortened_content": "Short"})

        result = runner.invoke(main, ["--api-key", "k", "shorten", "A very long title", "--max-length", "40"])

        assert result.exit_code == 0, result.output
        assert result.output.strip() == "Short"

    def test_missing_key_fails(self, runner, content_file):
        with patch("seo_translate.gemini_client.requests.post") as mock_post:
            result = runner.invoke(main, [
                "translate", "--title", "T", "--content-file", str(content_file),
            ])
            mock_post.assert_not_called()

        assert result.exit_code == 1
        assert "API key not configured" in result.output

    @patch("seo_translate.gemini_client.requests.post")
    def test_http_error_reports_status(self, mock_post, runner):
        mock_post.return_value = make_http_response(500, "internal")

        result = runner.invoke(main, ["--api-key", "k", "shorten", "Some title"])

        assert result.exit_code == 1
        assert "HTTP status: 500" in result.output
