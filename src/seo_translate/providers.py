"""
Translation and SEO providers backed by the Gemini client.

Two capability interfaces are defined:
- TranslationGenerator: translate a page's title and content.
- SeoFieldGenerator: generate, shorten, de-duplicate and validate SEO fields.

The concrete providers share one GeminiClient but keep their call shapes
separate.
"""

import logging
import math
from typing import Mapping, Optional, Protocol, Sequence, runtime_checkable

from .config import GeminiConfig, SeoFieldLimits
from .gemini_client import GeminiClient, ResponseFormatError
from .models import (
    KeywordSeoResult,
    SeoFields,
    SimilarityResult,
    TitleAnalysis,
    TitleResolution,
    TranslationResult,
    ValidationResult,
)
from .prompts import PromptBuilder, ShortenKind, build_shorter_prompt
from .seo_validation import truncate_with_ellipsis, validate, validate_and_trim
from .similarity import check_similarity

logger = logging.getLogger(__name__)


@runtime_checkable
class TranslationGenerator(Protocol):
    """Anything that can translate a page."""

    def translate(self, prompt: PromptBuilder) -> TranslationResult:
        ...


@runtime_checkable
class SeoFieldGenerator(Protocol):
    """Anything that can produce and police SEO fields."""

    def generate_seo_fields(self, prompt: PromptBuilder) -> SeoFields:
        ...

    def generate_shorter_version(self, content: str, kind: ShortenKind, max_length: int) -> str:
        ...

    def generate_alternative_titles(
        self, original_title: str, similar_titles: Sequence[str], content: str
    ) -> list[str]:
        ...

    def check_title_similarity(
        self, title: str, existing_titles: Sequence[str], threshold: Optional[float] = None
    ) -> SimilarityResult:
        ...

    def validate_seo_content(self, seo_data: Mapping[str, str]) -> ValidationResult:
        ...

    @property
    def seo_limits(self) -> Mapping[str, int]:
        ...


class GeminiTranslationProvider:
    """Translates page title and HTML content with Gemini."""

    def __init__(self, client: Optional[GeminiClient] = None):
        self.client = client or GeminiClient()

    def translate(self, prompt: PromptBuilder) -> TranslationResult:
        """
        Translate a page into the builder's target language.

        Args:
            prompt: Builder holding title, content and target language.

        Returns:
            TranslationResult with translated title and content.

        Raises:
            GenerationError: Any client failure, unchanged.
        """
        request = prompt.build_translation().to_request()
        response = self.client.generate(request)

        result = TranslationResult(
            title=response["translated_title"],
            content=response["translated_content"],
        )
        logger.info(
            f"Translation succeeded: language={prompt.language} "
            f"title_length={len(result.title)} content_length={len(result.content)}"
        )
        return result


class SeoGeminiProvider:
    """
    SEO-specialized Gemini provider.

    Character limits and the similarity threshold are fixed at construction.
    """

    def __init__(
        self,
        client: Optional[GeminiClient] = None,
        limits: Optional[SeoFieldLimits] = None,
    ):
        """
        Initialize the provider.

        Args:
            client: Gemini client. If None, one is built from the environment.
            limits: SEO character limits. Defaults to 60/155/60.
        """
        self.client = client or GeminiClient()
        self.limits = limits or SeoFieldLimits()

    @property
    def config(self) -> GeminiConfig:
        return self.client.config

    @property
    def seo_limits(self) -> Mapping[str, int]:
        """Read-only mapping of field name to character limit."""
        return self.limits.as_mapping()

    def generate_seo_fields(self, prompt: PromptBuilder) -> SeoFields:
        """
        Generate seo_title, seo_description and og_title for a page.

        All three fields are required in the response; each is then trimmed
        to its limit.

        Args:
            prompt: Builder holding title, content and language.

        Returns:
            SeoFields within limits.
        """
        request = prompt.build_seo_generation(
            excerpt_chars=self.config.content_excerpt_chars,
            limits=self.seo_limits,
        ).to_request()

        logger.info(f"Generating SEO fields: prompt_length={len(request.prompt_text)}")
        response = self.client.generate(request)

        trimmed = validate_and_trim(response.fields, self.seo_limits)
        fields = SeoFields(**trimmed)

        logger.info(
            f"SEO fields generated: seo_title_length={len(fields.seo_title)} "
            f"seo_description_length={len(fields.seo_description)} "
            f"og_title_length={len(fields.og_title)}"
        )
        return fields

    def generate_shorter_version(self, content: str, kind: ShortenKind, max_length: int) -> str:
        """
        Ask for a shorter version of an over-long title or description.

        The answer is bounded again locally, so the result never exceeds
        max_length even if the model ignores the instruction.

        Args:
            content: Original text.
            kind: "title" or "description".
            max_length: Maximum allowed characters.

        Returns:
            Shortened text.

        Raises:
            ValueError: If kind is invalid or max_length < 1.
        """
        if max_length < 1:
            raise ValueError(f"max_length must be >= 1, got {max_length}")

        request = build_shorter_prompt(content, kind, max_length).to_request()

        logger.info(
            f"Generating shorter version: type={kind} original_length={len(content)} "
            f"max_length={max_length}"
        )
        response = self.client.generate(request)

        shortened = truncate_with_ellipsis(response["shortened_content"], max_length)

        logger.info(
            f"Shorter version generated: original_length={len(content)} "
            f"new_length={len(shortened)}"
        )
        return shortened

    def generate_alternative_titles(
        self,
        original_title: str,
        similar_titles: Sequence[str],
        content: str,
        language: str = "es",
    ) -> list[str]:
        """
        Ask for alternative titles that do not compete with existing ones.

        Args:
            original_title: Title flagged as too similar.
            similar_titles: Existing titles it collides with.
            content: Page content for context (only an excerpt is sent).
            language: Target language code.

        Returns:
            Alternatives, each stripped and bounded by the seo_title limit.

        Raises:
            ResponseFormatError: If the response has no list of strings
                under "alternatives".
        """
        title_limit = self.limits.seo_title
        builder = PromptBuilder(title=original_title, content=content, language=language)
        request = builder.build_alternative_titles(
            original_title,
            similar_titles,
            count=self.config.alternative_count,
            max_length=title_limit,
            excerpt_chars=self.config.alternatives_excerpt_chars,
        ).to_request()

        logger.info(
            f"Generating alternative titles: similar_count={len(similar_titles)} "
            f"requested={self.config.alternative_count}"
        )
        response = self.client.generate(request)

        raw_alternatives = response.get("alternatives")
        if not isinstance(raw_alternatives, list):
            logger.error("Alternative titles response has no 'alternatives' list")
            raise ResponseFormatError("Invalid response structure for alternative titles")

        alternatives = [truncate_with_ellipsis(alt, title_limit) for alt in raw_alternatives]

        logger.info(f"Alternative titles generated: count={len(alternatives)}")
        return alternatives

    def generate_keyword_seo(self, prompt: PromptBuilder) -> KeywordSeoResult:
        """
        Pick keywords and write a title and description aligned with the site intention.

        The title and description are trimmed to the seo_title and
        seo_description limits. Missing keywords yield an empty list.
        """
        request = prompt.build_keyword_seo().to_request()
        response = self.client.generate(request)

        trimmed = validate_and_trim(response.fields, self.seo_limits)
        keywords = [k.strip() for k in response.get("keywords") or [] if k.strip()]

        logger.info(f"Keyword SEO generated: keywords={len(keywords)}")
        return KeywordSeoResult(
            seo_title=trimmed["seo_title"],
            seo_description=trimmed["seo_description"],
            keywords=keywords,
        )

    def analyze_title(self, prompt: PromptBuilder, title: str) -> TitleAnalysis:
        """Ask the model whether a title represents the builder's content."""
        request = prompt.build_title_analysis(title).to_request()
        response = self.client.generate(request)

        score = float(response["relevance_score"])
        if not math.isfinite(score):
            logger.warning(f"Non-finite relevance_score from model: {score}")
            score = 0.0
        score = min(max(score, 0.0), 1.0)
        return TitleAnalysis(
            represents_content=response["represents_content"],
            relevance_score=score,
            suggestions=list(response["suggestions"]),
        )

    def check_title_similarity(
        self,
        title: str,
        existing_titles: Sequence[str],
        threshold: Optional[float] = None,
    ) -> SimilarityResult:
        """Compare a title against existing ones using the configured threshold."""
        if threshold is None:
            threshold = self.config.similarity_threshold
        return check_similarity(title, existing_titles, threshold)

    def validate_seo_content(self, seo_data: Mapping[str, str]) -> ValidationResult:
        """Check SEO fields against this provider's limits."""
        return validate(seo_data, self.seo_limits)

    def resolve_title_cannibalization(
        self,
        title: str,
        existing_titles: Sequence[str],
        content: str,
        language: str = "es",
    ) -> TitleResolution:
        """
        Check a title for cannibalization and fetch alternatives if needed.

        The API is only called when the title is flagged as similar.

        Args:
            title: Candidate title.
            existing_titles: Titles already published.
            content: Page content used as context for alternatives.
            language: Target language code.

        Returns:
            TitleResolution with the similarity result and any alternatives.
        """
        result = self.check_title_similarity(title, existing_titles)
        if not result.is_similar:
            return TitleResolution(title=title, similarity=result)

        logger.info(
            f"Title flagged as similar: score={result.similarity_score:.3f} "
            f"similar_count={len(result.similar_titles)}"
        )
        alternatives = self.generate_alternative_titles(
            title, result.similar_titles, content, language=language
        )
        return TitleResolution(title=title, similarity=result, alternatives=alternatives)
