from __future__ import annotations

import re
from typing import Optional

import pycountry

_NON_ALPHA = re.compile(r"[^a-z]+")


def normalize_language_code(value: Optional[str]) -> str:
    """Lower-case a language code and drop any region/script suffix ("en-US" -> "en")."""
    if not value:
        return ""
    code = value.strip().lower().replace("_", "-")
    return code.split("-", 1)[0]


def _lookup_language(code: str):
    code = _NON_ALPHA.sub("", code.lower())
    if len(code) == 2:
        return pycountry.languages.get(alpha_2=code)
    if len(code) == 3:
        return pycountry.languages.get(alpha_3=code)
    return None


def language_display_name(code: str) -> str:
    """
    Human readable name for a language code.

    Examples:
        "en" -> "English"
        "DE" -> "German"
        "xx" -> "xx"
    """
    if not code:
        return code
    try:
        language = _lookup_language(normalize_language_code(code))
    except LookupError:
        language = None
    if language is None:
        return code
    return getattr(language, "common_name", None) or language.name
