"""
Text helpers.
"""

import re
import unicodedata

DEFAULT_SLUG = "untitled"

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
_WHITESPACE = re.compile(r"\s+")
_NON_SLUG_CHARS = re.compile(r"[^\w\-]+", re.ASCII)
_REPEATED_DASHES = re.compile(r"-{2,}")


def slugify(text: str) -> str:
    """
    Build a URL slug from a display name.

    Accents are stripped ("Élodie" -> "elodie"), whitespace becomes a
    dash, and anything outside ``[A-Za-z0-9_-]`` is dropped. Returns
    "untitled" when nothing usable remains.
    """
    if not text or not isinstance(text, str):
        return DEFAULT_SLUG

    slug = unicodedata.normalize("NFD", text.lower().strip())
    slug = _COMBINING_MARKS.sub("", slug)
    slug = _WHITESPACE.sub("-", slug)
    slug = _NON_SLUG_CHARS.sub("", slug)
    slug = _REPEATED_DASHES.sub("-", slug)
    return slug.strip("-") or DEFAULT_SLUG
