"""
Per-page multilingual metadata.

Pages are tagged with a language, a translation group linking the same
content across languages, a landing-page flag and SEO overrides. The host
content system stores these as key/value metadata under fixed keys; this
module only maps between that storage shape and a typed record.
"""

import re
import secrets
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from .models import SeoFields

META_LANGUAGE = "_ez_translate_language"
META_GROUP = "_ez_translate_group"
META_IS_LANDING = "_ez_translate_is_landing"
META_SEO_TITLE = "_ez_translate_seo_title"
META_SEO_DESCRIPTION = "_ez_translate_seo_description"
META_OG_TITLE = "_ez_translate_og_title"

GROUP_PREFIX = "tg_"
GROUP_ID_LENGTH = 16
GROUP_ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
GROUP_ID_RE = re.compile(rf"^{re.escape(GROUP_PREFIX)}[a-z0-9]{{{GROUP_ID_LENGTH}}}$")

# Record attribute -> storage key
META_KEYS = {
    "language": META_LANGUAGE,
    "group": META_GROUP,
    "is_landing": META_IS_LANDING,
    "seo_title": META_SEO_TITLE,
    "seo_description": META_SEO_DESCRIPTION,
    "og_title": META_OG_TITLE,
}


def generate_group_id() -> str:
    """Generate a translation group id: "tg_" plus 16 random [0-9a-z] chars."""
    suffix = "".join(secrets.choice(GROUP_ID_ALPHABET) for _ in range(GROUP_ID_LENGTH))
    return GROUP_PREFIX + suffix


def validate_group_id(group_id: Any) -> bool:
    """Check that a value is a well-formed translation group id."""
    return isinstance(group_id, str) and GROUP_ID_RE.match(group_id) is not None


@dataclass(frozen=True)
class PostMetadata:
    """Multilingual metadata for one page. None means "not set"."""
    language: Optional[str] = None
    group: Optional[str] = None
    is_landing: bool = False
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    og_title: Optional[str] = None

    def __post_init__(self):
        if self.group is not None and not validate_group_id(self.group):
            raise ValueError(f"Invalid translation group id: '{self.group}'")

    @classmethod
    def from_meta(cls, meta: Mapping[str, Any]) -> "PostMetadata":
        """
        Read metadata from a storage mapping.

        Empty values ("", None, False, "0") are treated as unset.
        """
        values = {}
        for attr, key in META_KEYS.items():
            value = meta.get(key)
            if value in (None, "", False, "0", 0):
                continue
            values[attr] = bool(value) if attr == "is_landing" else str(value)
        return cls(**values)

    def to_meta(self) -> dict[str, Any]:
        """Write non-empty values back to their storage keys."""
        meta: dict[str, Any] = {}
        for attr, key in META_KEYS.items():
            value = getattr(self, attr)
            if value:
                meta[key] = value
        return meta

    def with_seo_fields(self, fields: SeoFields) -> "PostMetadata":
        """Return a copy with generated SEO fields applied as overrides."""
        return replace(
            self,
            seo_title=fields.seo_title,
            seo_description=fields.seo_description,
            og_title=fields.og_title,
        )

    def with_new_group(self) -> "PostMetadata":
        """Return a copy placed in a freshly generated translation group."""
        return replace(self, group=generate_group_id())
