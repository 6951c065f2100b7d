# -*- coding: utf-8 -*-
"""
Payload sanitation for outbound API requests.

Handles:
- Control character stripping (C0 controls except tab/newline/CR, and DEL)
- Byte-order marks and Unicode noncharacters (U+FEFF, U+FFFE, U+FFFF)
- Lone surrogates that cannot be encoded as UTF-8
- Mojibake repair via ftfy

Sanitation is applied only at string leaves of an arbitrarily nested
payload; numbers, booleans and None pass through untouched.
"""

import re
from typing import Any

import ftfy

# 0x00-0x08, 0x0B, 0x0C, 0x0E-0x1F, 0x7F plus BOM and noncharacters
UNSAFE_CHARS_RE = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\x7f\ufeff\ufffe\uffff]")


def strip_unsafe_chars(text: str) -> str:
    """
    Remove control characters and BOM/noncharacter marks.

    Tab, newline and carriage return are kept.

    Args:
        text: Text to clean.

    Returns:
        Text without unsafe characters.
    """
    if not text:
        return text
    return UNSAFE_CHARS_RE.sub("", text)


def repair_encoding(text: str) -> str:
    """
    Make sure text is valid, encodable Unicode.

    Surrogate pairs are recombined and lone surrogates become U+FFFD.
    Mojibake (UTF-8 decoded as Latin-1/cp1252) is repaired with ftfy.

    Args:
        text: Text to repair.

    Returns:
        Repaired text.
    """
    if not text:
        return text

    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        text = text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")

    return ftfy.fix_encoding(text)


def sanitize_text(text: str) -> str:
    """Full string sanitation: strip unsafe characters, then repair encoding."""
    result = strip_unsafe_chars(text)
    result = repair_encoding(result)
    # ftfy may surface characters that were hidden inside mojibake
    return strip_unsafe_chars(result)


def sanitize_payload(value: Any) -> Any:
    """
    Recursively sanitize every string in a JSON-like payload.

    Dict keys are sanitized as well as values. Tuples are returned as lists.

    Args:
        value: str, number, bool, None, list/tuple or dict.

    Returns:
        A new structure with sanitized strings.
    """
    if isinstance(value, str):
        return sanitize_text(value)
    if isinstance(value, dict):
        return {
            (sanitize_text(k) if isinstance(k, str) else k): sanitize_payload(v)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [sanitize_payload(item) for item in value]
    return value
