"""
FastAPI wrapper for SEO Translate.

Exposes translation, SEO field generation, validation and similarity checks
as a small REST API, plus the enabled-languages listing used by editors.
"""

import logging
import os
from typing import Callable, Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from . import __version__
from .config import LANGUAGES_FILE_ENV, GeminiConfig, SeoFieldLimits
from .gemini_client import (
    ConfigurationError,
    EncodingError,
    GeminiClient,
    GenerationError,
    ResponseFormatError,
    TransportError,
)
from .languages import LanguageRegistry, LanguageRegistryError
from .prompts import PromptBuilder
from .providers import GeminiTranslationProvider, SeoGeminiProvider
from .seo_validation import validate
from .similarity import DEFAULT_THRESHOLD, check_similarity

logger = logging.getLogger(__name__)

app = FastAPI(
    title="SEO Translate API",
    description="AI translation and SEO field generation for multilingual sites",
    version=__version__,
)

# Enable CORS for all origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class PageInput(BaseModel):
    """Page content to translate or summarize."""
    title: str = Field(..., description="Page title")
    content: str = Field(..., description="Page content (text or HTML)")
    language: str = Field("es", description="Target language code")


class TranslationResponse(BaseModel):
    title: str
    content: str


class SeoFieldsInput(BaseModel):
    """SEO fields to validate. Omitted fields are skipped."""
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    og_title: Optional[str] = None


class ValidationResponse(BaseModel):
    valid: bool
    warnings: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class SeoFieldsResponse(BaseModel):
    seo_title: str
    seo_description: str
    og_title: str
    validation: ValidationResponse


class SimilarityRequest(BaseModel):
    title: str = Field(..., description="Candidate title")
    existing_titles: list[str] = Field(default_factory=list, description="Titles already in use")
    threshold: float = Field(DEFAULT_THRESHOLD, ge=0.0, le=1.0)


class SimilarityResponse(BaseModel):
    is_similar: bool
    similarity_score: float
    similar_titles: list[str]


class AlternativesRequest(BaseModel):
    title: str = Field(..., description="Title flagged as similar")
    similar_titles: list[str] = Field(..., description="Existing titles it collides with")
    content: str = Field("", description="Page content for context")
    language: str = Field("es", description="Target language code")


class AlternativesResponse(BaseModel):
    alternatives: list[str]


class LanguageResponse(BaseModel):
    code: str
    name: str
    native_name: str
    display_name: str
    enabled: bool


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    api_key_configured: bool


# Generation errors -> HTTP status
ERROR_STATUS = {
    ConfigurationError: 503,
    EncodingError: 422,
    TransportError: 502,
    ResponseFormatError: 502,
}


def get_client() -> GeminiClient:
    """Client dependency; overridden in tests."""
    return GeminiClient(GeminiConfig.from_env())


def get_language_registry() -> LanguageRegistry:
    """Registry dependency, loaded from SEO_TRANSLATE_LANGUAGES_FILE when set."""
    path = os.environ.get(LANGUAGES_FILE_ENV)
    if not path:
        return LanguageRegistry()
    try:
        return LanguageRegistry.from_json_file(path)
    except LanguageRegistryError as e:
        logger.error(f"Failed to load language registry: {e}")
        raise HTTPException(status_code=500, detail=str(e))


def _run(call: Callable):
    try:
        return call()
    except GenerationError as e:
        status = ERROR_STATUS.get(type(e), 500)
        logger.error(f"Generation failed ({type(e).__name__}): {e}")
        raise HTTPException(status_code=status, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


def _validation_response(fields: dict) -> ValidationResponse:
    result = validate(fields, SeoFieldLimits().as_mapping())
    return ValidationResponse(
        valid=result.valid,
        warnings=result.warnings,
        recommendations=result.recommendations,
    )


@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        api_key_configured=GeminiConfig.from_env().has_api_key,
    )


@app.get("/api/languages", response_model=list[LanguageResponse])
def list_languages(registry: LanguageRegistry = Depends(get_language_registry)):
    """List enabled languages."""
    return [
        LanguageResponse(
            code=lang.code,
            name=lang.name,
            native_name=lang.native_name,
            display_name=lang.display_name,
            enabled=lang.enabled,
        )
        for lang in registry.enabled()
    ]


@app.post("/api/translate", response_model=TranslationResponse)
def translate_page(request: PageInput, client: GeminiClient = Depends(get_client)):
    """Translate a page's title and content into the target language."""
    provider = GeminiTranslationProvider(client)
    builder = PromptBuilder(title=request.title, content=request.content, language=request.language)
    result = _run(lambda: provider.translate(builder))
    return TranslationResponse(title=result.title, content=result.content)


@app.post("/api/seo/generate", response_model=SeoFieldsResponse)
def generate_seo_fields(request: PageInput, client: GeminiClient = Depends(get_client)):
    """Generate SEO fields for a page, trimmed to their limits."""
    provider = SeoGeminiProvider(client)
    builder = PromptBuilder(title=request.title, content=request.content, language=request.language)
    fields = _run(lambda: provider.generate_seo_fields(builder))
    return SeoFieldsResponse(
        **fields.as_dict(),
        validation=_validation_response(fields.as_dict()),
    )


@app.post("/api/seo/validate", response_model=ValidationResponse)
def validate_seo_fields(request: SeoFieldsInput):
    """Check SEO fields against character limits."""
    fields = {k: v for k, v in request.model_dump().items() if v is not None}
    return _validation_response(fields)


@app.post("/api/seo/similarity", response_model=SimilarityResponse)
def check_title_similarity(request: SimilarityRequest):
    """Check a title against existing titles for cannibalization."""
    result = check_similarity(request.title, request.existing_titles, request.threshold)
    return SimilarityResponse(
        is_similar=result.is_similar,
        similarity_score=result.similarity_score,
        similar_titles=result.similar_titles,
    )


@app.post("/api/seo/alternatives", response_model=AlternativesResponse)
def generate_alternative_titles(request: AlternativesRequest, client: GeminiClient = Depends(get_client)):
    """Generate alternative titles for one that collides with existing titles."""
    provider = SeoGeminiProvider(client)
    alternatives = _run(lambda: provider.generate_alternative_titles(
        request.title, request.similar_titles, request.content, language=request.language
    ))
    return AlternativesResponse(alternatives=alternatives)
