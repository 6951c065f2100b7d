"""
Character-limit enforcement for generated SEO fields.

Validation never rejects a response; over-long values are truncated with an
ellipsis.
"""

from typing import Mapping

from .models import ValidationResult

ELLIPSIS = "..."

# Above this share of the limit a field gets a "near limit" recommendation
NEAR_LIMIT_RATIO = 0.90


def truncate_with_ellipsis(text: str, limit: int) -> str:
    """
    Strip text and cut it to at most `limit` characters.

    Over-long text is cut to `limit - 3` characters and "..." is appended,
    so the result is exactly `limit` long. Limits too small to hold the
    ellipsis get a plain cut.

    Args:
        text: Text to bound.
        limit: Maximum length in characters.

    Returns:
        Bounded text.
    """
    content = text.strip()
    if len(content) <= limit:
        return content
    if limit <= len(ELLIPSIS):
        return content[:limit]
    return content[:limit - len(ELLIPSIS)] + ELLIPSIS


def validate_and_trim(fields: Mapping[str, str], limits: Mapping[str, int]) -> dict[str, str]:
    """
    Trim and bound every field that has a declared limit.

    Only fields present in `limits` are emitted, in limits order. Fields
    missing from `fields` are skipped.

    Args:
        fields: Field name to generated value.
        limits: Field name to character limit.

    Returns:
        New dict of bounded values.
    """
    validated: dict[str, str] = {}
    for name, limit in limits.items():
        if name in fields and fields[name] is not None:
            validated[name] = truncate_with_ellipsis(str(fields[name]), limit)
    return validated


def validate(fields: Mapping[str, str], limits: Mapping[str, int]) -> ValidationResult:
    """
    Check field lengths against limits without modifying anything.

    Args:
        fields: Field name to value.
        limits: Field name to character limit.

    Returns:
        ValidationResult with a warning per over-limit field and a
        recommendation per field above 90% of its limit.
    """
    result = ValidationResult()

    for name, limit in limits.items():
        if name not in fields or fields[name] is None:
            continue
        length = len(str(fields[name]))
        if length > limit:
            result.valid = False
            result.warnings.append(f"{name} exceeds limit ({length}/{limit})")
        elif limit > 0 and length / limit > NEAR_LIMIT_RATIO:
            result.recommendations.append(f"{name} is near limit ({length}/{limit})")

    return result
