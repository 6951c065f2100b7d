"""
SEO Translate

AI-assisted content tooling for multilingual sites that:
- Translates page titles and HTML content with Google Gemini
- Generates SEO title, meta description and Open Graph title within limits
- Detects title cannibalization and proposes alternative titles
"""

__version__ = "1.0.0"
__author__ = "SEO Translate Team"

from .config import GeminiConfig, SeoFieldLimits

from .models import (
    FieldType,
    Prompt,
    GenerationRequest,
    GenerationResponse,
    TranslationResult,
    SeoFields,
    KeywordSeoResult,
    TitleAnalysis,
    SimilarityResult,
    ValidationResult,
    TitleResolution,
)

from .gemini_client import (
    GeminiClient,
    GenerationError,
    ConfigurationError,
    EncodingError,
    TransportError,
    ResponseFormatError,
    create_gemini_client,
)

from .prompts import PromptBuilder, build_shorter_prompt

from .providers import (
    TranslationGenerator,
    SeoFieldGenerator,
    GeminiTranslationProvider,
    SeoGeminiProvider,
)

from .seo_validation import truncate_with_ellipsis, validate, validate_and_trim

from .similarity import check_similarity, levenshtein_distance, similarity

from .sanitize import sanitize_payload, sanitize_text

from .metadata import PostMetadata, generate_group_id, validate_group_id

from .languages import Language, LanguageRegistry, LanguageRegistryError

__all__ = [
    # Config
    "GeminiConfig",
    "SeoFieldLimits",
    # Models
    "FieldType",
    "Prompt",
    "GenerationRequest",
    "GenerationResponse",
    "TranslationResult",
    "SeoFields",
    "KeywordSeoResult",
    "TitleAnalysis",
    "SimilarityResult",
    "ValidationResult",
    "TitleResolution",
    # Client
    "GeminiClient",
    "GenerationError",
    "ConfigurationError",
    "EncodingError",
    "TransportError",
    "ResponseFormatError",
    "create_gemini_client",
    # Prompts
    "PromptBuilder",
    "build_shorter_prompt",
    # Providers
    "TranslationGenerator",
    "SeoFieldGenerator",
    "GeminiTranslationProvider",
    "SeoGeminiProvider",
    # Validation and similarity
    "truncate_with_ellipsis",
    "validate",
    "validate_and_trim",
    "check_similarity",
    "levenshtein_distance",
    "similarity",
    # Sanitation
    "sanitize_payload",
    "sanitize_text",
    # Metadata and languages
    "PostMetadata",
    "generate_group_id",
    "validate_group_id",
    "Language",
    "LanguageRegistry",
    "LanguageRegistryError",
]
