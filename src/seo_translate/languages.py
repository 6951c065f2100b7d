"""
Language registry.

Holds the languages a site publishes in and exposes the enabled ones as
(code, display name) choices for editors and API clients.
"""

import json
import logging
import re
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union

logger = logging.getLogger(__name__)

CODE_RE = re.compile(r"^[a-zA-Z0-9]{2,5}$")
SLUG_RE = re.compile(r"^[a-z0-9\-_]+$")

FALSE_STRINGS = ("false", "0", "", "no", "off")
TRUE_STRINGS = ("true", "1", "yes", "on")


class LanguageRegistryError(Exception):
    """Raised when language data cannot be loaded or is invalid."""
    pass


def sanitize_boolean(value: Any) -> bool:
    """
    Convert form/JSON values to a real boolean.

    Strings like "off" or "no" are False and "on" or "yes" are True.
    Numeric strings and numbers go by value. Anything else uses truthiness.
    """
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in FALSE_STRINGS:
            return False
        if lowered in TRUE_STRINGS:
            return True
        try:
            return bool(int(float(lowered)))
        except (ValueError, OverflowError):
            return bool(value)
    if isinstance(value, (int, float)):
        try:
            return bool(int(value))
        except (ValueError, OverflowError):
            return bool(value)
    return bool(value)


def validate_language_data(data: Mapping[str, Any]) -> list[str]:
    """
    Validate raw language data.

    Args:
        data: Language fields as submitted.

    Returns:
        List of error codes; empty when valid.
    """
    errors = []

    code = data.get("code")
    slug = data.get("slug")

    if not code:
        errors.append("missing_code")
    if not data.get("name"):
        errors.append("missing_name")
    if not slug:
        errors.append("missing_slug")

    if code and not CODE_RE.match(str(code)):
        errors.append("invalid_code_format")
    if slug and not SLUG_RE.match(str(slug)):
        errors.append("invalid_slug_format")

    if "rtl" in data and not isinstance(data["rtl"], bool):
        errors.append("invalid_rtl")
    if "enabled" in data and not isinstance(data["enabled"], bool):
        errors.append("invalid_enabled")

    return errors


@dataclass(frozen=True)
class Language:
    """A site language."""
    code: str
    name: str
    slug: str
    native_name: str = ""
    flag: str = ""
    rtl: bool = False
    enabled: bool = True

    @property
    def display_name(self) -> str:
        """Name shown to editors, with the native name when it differs."""
        if self.native_name and self.native_name != self.name:
            return f"{self.name} ({self.native_name})"
        return self.name

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Language":
        """
        Build a Language from raw data, coercing boolean fields first.

        The slug defaults to the lower-cased code.

        Raises:
            LanguageRegistryError: If the data fails validation.
        """
        code = str(data.get("code", "")).strip()
        cleaned = {
            "code": code,
            "name": str(data.get("name", "")).strip(),
            "slug": str(data.get("slug") or code).strip().lower(),
            "native_name": str(data.get("native_name", "")).strip(),
            "flag": str(data.get("flag", "")).strip(),
            "rtl": sanitize_boolean(data.get("rtl", False)),
            "enabled": sanitize_boolean(data.get("enabled", True)),
        }
        errors = validate_language_data(cleaned)
        if errors:
            raise LanguageRegistryError(
                f"Invalid language '{cleaned['code'] or '?'}': {', '.join(errors)}"
            )
        return cls(**cleaned)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class LanguageRegistry:
    """Ordered, code-unique collection of site languages."""

    def __init__(self, languages: Iterable[Language] = ()):
        self._languages: dict[str, Language] = {}
        for language in languages:
            self.add(language)

    def add(self, language: Language) -> None:
        """Add a language. Codes are unique."""
        if language.code in self._languages:
            raise LanguageRegistryError(f"Language code already exists: {language.code}")
        self._languages[language.code] = language

    def get(self, code: str) -> Optional[Language]:
        return self._languages.get(code)

    def __len__(self) -> int:
        return len(self._languages)

    def __iter__(self):
        return iter(self._languages.values())

    def enabled(self) -> list[Language]:
        """Enabled languages in registration order."""
        enabled = [lang for lang in self._languages.values() if lang.enabled]
        logger.debug(f"Retrieved enabled languages: count={len(enabled)}")
        return enabled

    def choices(self) -> list[tuple[str, str]]:
        """(code, display name) pairs for enabled languages."""
        return [(lang.code, lang.display_name) for lang in self.enabled()]

    @classmethod
    def from_records(cls, records: Union[list, Mapping[str, Any]]) -> "LanguageRegistry":
        """
        Build a registry from a list of records or a code -> record mapping.

        In the mapping form the key supplies the code when the record has none.
        """
        if isinstance(records, Mapping):
            items = []
            for code, record in records.items():
                if not isinstance(record, Mapping):
                    raise LanguageRegistryError(
                        f"Language record for '{code}' must be an object, "
                        f"got {type(record).__name__}"
                    )
                items.append({"code": code, **record})
        elif isinstance(records, list):
            items = records
            for index, record in enumerate(items):
                if not isinstance(record, Mapping):
                    raise LanguageRegistryError(
                        f"Language record #{index} must be an object, "
                        f"got {type(record).__name__}"
                    )
        else:
            raise LanguageRegistryError(
                f"Language data must be a list or mapping, got {type(records).__name__}"
            )
        return cls(Language.from_dict(item) for item in items)

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "LanguageRegistry":
        """
        Load a registry from a JSON file.

        Raises:
            LanguageRegistryError: If the file is missing, unreadable or invalid.
        """
        path = Path(path)
        if not path.exists():
            raise LanguageRegistryError(f"File not found: {path}")
        try:
            with path.open("r", encoding="utf-8") as f:
                records = json.load(f)
        except (OSError, ValueError) as e:
            raise LanguageRegistryError(f"Failed to read language file: {e}")
        registry = cls.from_records(records)
        logger.info(f"Loaded {len(registry)} languages from {path}")
        return registry
