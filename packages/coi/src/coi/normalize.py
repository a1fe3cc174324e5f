"""Party name normalization pipeline."""

from __future__ import annotations

import re
import unicodedata

from coi.designators import canonicalize_variants, strip_article, strip_suffix
from coi.types import NormalizedName

_PUNCTUATION_RE = re.compile(r"[^\w\s&]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize(name: str | None) -> NormalizedName:
    """Normalize a person or entity name into a comparable string."""
    if not name:
        return ""

    # 1. Unicode normalize (NFKC), casefold, trim
    s = unicodedata.normalize("NFKC", name).casefold().strip()

    # 2. Punctuation becomes whitespace; "&" survives for step 5
    s = _PUNCTUATION_RE.sub(" ", s).strip()

    # 3. One leading article
    s = strip_article(s)

    # 4. Trailing legal-entity suffixes
    s = strip_suffix(s)

    # 5. Variant vocabulary (may re-introduce "corporation")
    s = canonicalize_variants(s)

    # 6. Collapse whitespace
    return _WHITESPACE_RE.sub(" ", s).strip()


def normalize_names(names: list[str]) -> list[NormalizedName]:
    return [normalize(n) for n in names]


def split_name(full_name: str) -> tuple[str, str]:
    """Split a full name into (first, last); middle names are dropped."""
    parts = full_name.split()
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[-1]


def get_initials(name: str) -> str:
    return "".join(part[0] for part in name.split()).upper()


def matches_initials(full_name: str, initials: str) -> bool:
    """Check whether `initials` (e.g. "J.D." or "jd") abbreviate `full_name`."""
    cleaned = re.sub(r"[.\s]+", "", initials)
    return bool(cleaned) and get_initials(full_name) == cleaned.upper()
