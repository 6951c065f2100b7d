"""
Data models for SEO Translate.

This module defines the request/response records exchanged with the
generation API and the results produced by validation and similarity checks.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional


class FieldType(Enum):
    """Primitive types a response schema field can declare."""
    STRING = "string"
    STRING_ARRAY = "string_array"
    NUMBER = "number"
    BOOLEAN = "boolean"

    def to_schema(self) -> dict:
        """Render the JSON-schema fragment understood by the API."""
        if self is FieldType.STRING_ARRAY:
            return {"type": "array", "items": {"type": "string"}}
        return {"type": self.value}

    def matches(self, value: Any) -> bool:
        """Check whether a decoded JSON value has this shape."""
        if self is FieldType.STRING:
            return isinstance(value, str)
        if self is FieldType.STRING_ARRAY:
            return isinstance(value, list) and all(isinstance(v, str) for v in value)
        if self is FieldType.NUMBER:
            return isinstance(value, (int, float)) and not isinstance(value, bool)
        return isinstance(value, bool)


@dataclass(frozen=True)
class Prompt:
    """
    Prompt text plus the response shape the model is asked to return.

    Built once per call by the prompt builder; never persisted.
    """
    text: str
    response_schema: Mapping[str, FieldType]
    required_fields: frozenset = frozenset()

    def to_request(self) -> "GenerationRequest":
        """Convert to a GenerationRequest for the client."""
        return GenerationRequest(
            prompt_text=self.text,
            response_schema=dict(self.response_schema),
            required_fields=frozenset(self.required_fields),
        )


@dataclass
class GenerationRequest:
    """
    A single structured generation call.

    Every name in required_fields must be declared in response_schema.
    """
    prompt_text: str
    response_schema: dict[str, FieldType]
    required_fields: frozenset = frozenset()

    def __post_init__(self) -> None:
        """Enforce that required fields are declared in the schema."""
        self.required_fields = frozenset(self.required_fields)
        undeclared = self.required_fields - set(self.response_schema)
        if undeclared:
            raise ValueError(
                f"required_fields not declared in response_schema: {sorted(undeclared)}"
            )

    @classmethod
    def all_required(cls, prompt_text: str, response_schema: dict[str, FieldType]) -> "GenerationRequest":
        """Create a request where every declared field is required."""
        return cls(
            prompt_text=prompt_text,
            response_schema=dict(response_schema),
            required_fields=frozenset(response_schema),
        )

    @property
    def ordered_required(self) -> list[str]:
        """Required field names in schema declaration order."""
        return [name for name in self.response_schema if name in self.required_fields]

    def schema_payload(self) -> dict:
        """Build the responseSchema object for generationConfig."""
        return {
            "type": "object",
            "properties": {
                name: field_type.to_schema()
                for name, field_type in self.response_schema.items()
            },
            "required": self.ordered_required,
        }


@dataclass
class GenerationResponse:
    """Decoded and shape-checked output of a generation call."""
    fields: dict[str, Any]
    response_size: int = 0  # Size in characters of the raw HTTP body

    def __getitem__(self, name: str) -> Any:
        return self.fields[name]

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)


@dataclass
class TranslationResult:
    """Translated title and content for one page."""
    title: str
    content: str


@dataclass
class SeoFields:
    """Generated SEO fields, already trimmed to their limits."""
    seo_title: str
    seo_description: str
    og_title: str

    def as_dict(self) -> dict[str, str]:
        """Return fields as a plain dict in limits order."""
        return {
            "seo_title": self.seo_title,
            "seo_description": self.seo_description,
            "og_title": self.og_title,
        }


@dataclass
class KeywordSeoResult:
    """Keyword-focused title and description, trimmed to their limits."""
    seo_title: str
    seo_description: str
    keywords: list[str] = field(default_factory=list)


@dataclass
class TitleAnalysis:
    """Model's judgement of how well a title represents its page."""
    represents_content: bool
    relevance_score: float  # Clamped to [0, 1]
    suggestions: list[str] = field(default_factory=list)


@dataclass
class SimilarityResult:
    """Outcome of comparing a candidate title against existing titles."""
    is_similar: bool
    similarity_score: float
    similar_titles: list[str] = field(default_factory=list)


@dataclass
class ValidationResult:
    """Outcome of checking SEO fields against their character limits."""
    valid: bool = True
    warnings: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


@dataclass
class TitleResolution:
    """
    Result of the cannibalization check for a candidate title.

    alternatives is empty when the title was not flagged as similar.
    """
    title: str
    similarity: SimilarityResult
    alternatives: list[str] = field(default_factory=list)

    @property
    def needs_new_title(self) -> bool:
        return self.similarity.is_similar

    @property
    def best_title(self) -> Optional[str]:
        """The title to use: the original when unique, else the first alternative."""
        if not self.similarity.is_similar:
            return self.title
        return self.alternatives[0] if self.alternatives else None
