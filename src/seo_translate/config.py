# -*- coding: utf-8 -*-
"""
Centralized configuration for SEO Translate.

This module provides the Gemini connection settings and the SEO character
limits table. Both are plain dataclasses injected into the client, the
providers and the validator at construction time.
"""

import os
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_TIMEOUT = 30

# Environment variables read by GeminiConfig.from_env()
API_KEY_ENV = "GEMINI_API_KEY"
MODEL_ENV = "SEO_TRANSLATE_MODEL"
TIMEOUT_ENV = "SEO_TRANSLATE_TIMEOUT"
LANGUAGES_FILE_ENV = "SEO_TRANSLATE_LANGUAGES_FILE"


@dataclass(frozen=True)
class SeoFieldLimits:
    """
    Character limits for generated SEO fields.

    Field order matters: validation reports warnings in this order.
    Lengths are counted with len(), i.e. code points, not visible glyphs.
    """

    seo_title: int = 60
    seo_description: int = 155
    og_title: int = 60

    def __post_init__(self):
        """Validate limit values."""
        for name, limit in self.as_mapping().items():
            if limit < 1:
                raise ValueError(f"{name} limit must be >= 1, got {limit}")

    def as_mapping(self) -> Mapping[str, int]:
        """Return the limits as a read-only mapping in declared order."""
        return MappingProxyType({
            "seo_title": self.seo_title,
            "seo_description": self.seo_description,
            "og_title": self.og_title,
        })

    def __getitem__(self, field_name: str) -> int:
        return self.as_mapping()[field_name]


@dataclass
class GeminiConfig:
    """
    Connection and behavior settings for the Gemini generation client.

    Attributes:
        api_key: Gemini API key. None means "not configured"; generation
            calls then fail with ConfigurationError instead of hitting the API.
        model: Gemini model identifier used in the endpoint path.
        base_url: API base URL (without trailing slash).
        timeout: Request timeout in seconds for a single call.
        similarity_threshold: Score at or above which two titles are
            considered competing for the same search intent.
        alternative_count: Number of alternative titles to request when a
            title is flagged as similar.
        content_excerpt_chars: How much page content goes into the SEO
            generation prompt.
        alternatives_excerpt_chars: How much page content goes into the
            alternative-title prompt.
    """

    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    similarity_threshold: float = 0.85
    alternative_count: int = 3
    content_excerpt_chars: int = 1000
    alternatives_excerpt_chars: int = 500

    def __post_init__(self):
        """Validate configuration values."""
        if not self.model or not self.model.strip():
            raise ValueError("model must be a non-empty string")
        if not self.base_url.startswith("https://"):
            raise ValueError(f"base_url must use https, got '{self.base_url}'")
        self.base_url = self.base_url.rstrip("/")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be > 0, got {self.timeout}")
        if not 0.0 <= self.similarity_threshold <= 1.0:
            raise ValueError(
                f"similarity_threshold must be between 0 and 1, "
                f"got {self.similarity_threshold}"
            )
        if self.alternative_count < 1:
            raise ValueError(
                f"alternative_count must be >= 1, got {self.alternative_count}"
            )
        if self.content_excerpt_chars < 1 or self.alternatives_excerpt_chars < 1:
            raise ValueError("content excerpt sizes must be >= 1")

    @property
    def has_api_key(self) -> bool:
        """Check if an API key is configured."""
        return bool(self.api_key and self.api_key.strip())

    @property
    def endpoint(self) -> str:
        """Full generateContent endpoint for the configured model."""
        return f"{self.base_url}/models/{self.model}:generateContent"

    @classmethod
    def from_env(cls, **overrides) -> "GeminiConfig":
        """Create config from environment variables.

        Reads GEMINI_API_KEY, SEO_TRANSLATE_MODEL and SEO_TRANSLATE_TIMEOUT.
        Explicit keyword overrides win over the environment.

        Args:
            **overrides: Override any config values.

        Returns:
            GeminiConfig built from the environment.
        """
        values = {}
        api_key = os.environ.get(API_KEY_ENV)
        if api_key:
            values["api_key"] = api_key
        model = os.environ.get(MODEL_ENV)
        if model:
            values["model"] = model
        timeout = os.environ.get(TIMEOUT_ENV)
        if timeout:
            try:
                values["timeout"] = float(timeout)
            except ValueError:
                raise ValueError(f"{TIMEOUT_ENV} must be a number, got '{timeout}'")
        values.update(overrides)
        return cls(**values)
