"""
Prompt construction for translation and SEO generation.

Each builder returns a Prompt carrying both the instruction text and the
JSON response schema the model must follow.
"""

from dataclasses import dataclass
from typing import Literal, Mapping, Optional, Sequence

from .models import FieldType, Prompt

ShortenKind = Literal["title", "description"]

TRANSLATION_SCHEMA = {
    "translated_title": FieldType.STRING,
    "translated_content": FieldType.STRING,
}

SEO_FIELDS_SCHEMA = {
    "seo_title": FieldType.STRING,
    "seo_description": FieldType.STRING,
    "og_title": FieldType.STRING,
}

SHORTEN_SCHEMA = {
    "shortened_content": FieldType.STRING,
}

ALTERNATIVES_SCHEMA = {
    "alternatives": FieldType.STRING_ARRAY,
}

KEYWORD_SEO_SCHEMA = {
    "seo_title": FieldType.STRING,
    "seo_description": FieldType.STRING,
    "keywords": FieldType.STRING_ARRAY,
}

TITLE_ANALYSIS_SCHEMA = {
    "represents_content": FieldType.BOOLEAN,
    "relevance_score": FieldType.NUMBER,
    "suggestions": FieldType.STRING_ARRAY,
}


def _all_required(text: str, schema: dict) -> Prompt:
    return Prompt(text=text, response_schema=dict(schema), required_fields=frozenset(schema))


@dataclass(frozen=True)
class PromptBuilder:
    """
    Builds prompts for one page.

    Attributes:
        title: Page title in the source language.
        content: Page body (plain text or HTML).
        language: Target language code, e.g. "es" or "pt".
        intention: What the site as a whole is trying to achieve; only used
            by the keyword-focused SEO prompt.
    """
    title: str
    content: str
    language: str = "es"
    intention: str = ""

    def build_translation(self) -> Prompt:
        """Prompt for a full translation of title and HTML content."""
        text = (
            "You are an expert content translator with a focus on SEO. "
            f"Translate the following text and HTML into the target language ({self.language}) "
            "so that it maximizes engagement. Return the translated title as plain text "
            "and the translated content as HTML, keeping all markup intact. "
            "Capture the essence of the original and adapt it culturally and "
            "linguistically to the new audience.\n\n"
            f"Title: \"{self.title}\"\n"
            f"Content to translate: \"{self.content}\""
        )
        return _all_required(text, TRANSLATION_SCHEMA)

    def build_seo_generation(
        self,
        excerpt_chars: int = 1000,
        limits: Optional[Mapping[str, int]] = None,
    ) -> Prompt:
        """Prompt for seo_title, seo_description and og_title.

        Args:
            excerpt_chars: How much of the content to include.
            limits: Character limits to state in the instructions.
        """
        limits = dict(limits or {"seo_title": 60, "seo_description": 155, "og_title": 60})
        text = (
            "You are an SEO and digital marketing expert. Analyze the following content "
            "and generate optimized SEO fields.\n\n"
            f"Title: \"{self.title}\"\n"
            f"Content: \"{self.content[:excerpt_chars]}\"\n"
            f"Language: {self.language}\n\n"
            "Generate:\n"
            f"1. seo_title: SEO-optimized title (maximum {limits['seo_title']} characters)\n"
            f"2. seo_description: Search engine meta description (maximum {limits['seo_description']} characters)\n"
            f"3. og_title: Title for social networks (maximum {limits['og_title']} characters)\n\n"
            "Make sure each field is unique, compelling and written in the specified language."
        )
        return _all_required(text, SEO_FIELDS_SCHEMA)

    def build_alternative_titles(
        self,
        original_title: str,
        similar_titles: Sequence[str],
        count: int = 3,
        max_length: int = 60,
        excerpt_chars: int = 500,
    ) -> Prompt:
        """Prompt for alternative titles that avoid cannibalization."""
        similar_list = '", "'.join(similar_titles)
        text = (
            "You are an expert in SEO and preventing content cannibalization. "
            f"The title \"{original_title}\" is very similar to these existing titles: "
            f"[\"{similar_list}\"].\n\n"
            f"Based on the content: \"{self.content[:excerpt_chars]}\"\n\n"
            f"Generate {count} unique alternative titles that:\n"
            "1. Avoid similarity with the existing titles\n"
            "2. Keep the SEO optimization\n"
            f"3. Have at most {max_length} characters\n"
            "4. Are appealing to the reader\n\n"
            f"Target language: {self.language}"
        )
        return _all_required(text, ALTERNATIVES_SCHEMA)

    def build_keyword_seo(self) -> Prompt:
        """Prompt for keyword selection plus a title and description tuned to the site intention.

        Only the title and description are required; keywords are optional.
        """
        text = (
            "You are an expert in content review and SEO optimization. Determine the best "
            f"keywords for the following text ({self.language}). Take into account the overall "
            f"intention of the website, which aims to: \"{self.intention}\". Return an "
            "SEO-optimized title that fits the analyzed content and a meta description. "
            "Titles must be between 40 and 50 characters and descriptions between 130 and "
            "145 characters.\n\n"
            f"Content: \"{self.content}\""
        )
        return Prompt(
            text=text,
            response_schema=dict(KEYWORD_SEO_SCHEMA),
            required_fields=frozenset({"seo_title", "seo_description"}),
        )

    def build_title_analysis(self, title: str, excerpt_chars: int = 800) -> Prompt:
        """Prompt asking whether a title represents the page content."""
        text = (
            "You are an expert in SEO content analysis. Analyze the semantic similarity "
            f"between the title \"{title}\" and the content: \"{self.content[:excerpt_chars]}\".\n\n"
            "Evaluate whether the title represents the content well, score its relevance "
            "from 0 to 1 and suggest improvements if needed.\n\n"
            f"Language: {self.language}"
        )
        return _all_required(text, TITLE_ANALYSIS_SCHEMA)


def build_shorter_prompt(content: str, kind: ShortenKind, max_length: int) -> Prompt:
    """
    Prompt asking for a shorter version of a title or description.

    Raises:
        ValueError: If kind is not "title" or "description".
    """
    if kind not in ("title", "description"):
        raise ValueError(f"kind must be 'title' or 'description', got '{kind}'")

    text = (
        f"You are an SEO expert. Shorten the following {kind} to at most {max_length} "
        "characters while keeping its essence and SEO optimization.\n\n"
        f"Original {kind}: \"{content}\"\n\n"
        "Produce a shorter version that keeps the main keywords and stays appealing to the reader."
    )
    return _all_required(text, SHORTEN_SCHEMA)
