"""Legal-entity suffix handling for party names."""

from __future__ import annotations

import re

# Scan order matters: strip_suffix applies each pattern to the already
# shortened string, so "foo co inc" loses "inc" and then "co".
ENTITY_SUFFIXES: tuple[str, ...] = (
    "inc",
    "incorporated",
    "corp",
    "corporation",
    "llc",
    "llp",
    "lp",
    "ltd",
    "limited",
    "co",
    "company",
    "plc",
    "pc",
    "pa",
)

CANONICAL_DESIGNATOR = "corporation"

DESIGNATOR_VARIANTS: tuple[str, ...] = (
    "corp",
    "corporation",
    "incorporated",
    "inc",
    "co",
    "company",
    "limited",
    "ltd",
    "llc",
    "llp",
    "lp",
)

LEADING_ARTICLES: tuple[str, ...] = ("the", "a", "an")

_SUFFIX_PATTERNS = [re.compile(rf"\s+{suffix}$") for suffix in ENTITY_SUFFIXES]
_ARTICLE_RE = re.compile(rf"^(?:{'|'.join(LEADING_ARTICLES)})\s+")
_AMPERSAND_RE = re.compile(r"&")
_VARIANT_RE = re.compile(rf"\b(?:{'|'.join(DESIGNATOR_VARIANTS)})\b")

_SUFFIX_SET = frozenset(ENTITY_SUFFIXES)


def is_designator(token: str) -> bool:
    """Check if a token is a legal-entity suffix (case-insensitive)."""
    return token.lower().rstrip(".") in _SUFFIX_SET


def strip_article(text: str) -> str:
    """Remove one leading article ("the", "a", "an")."""
    return _ARTICLE_RE.sub("", text, count=1)


def strip_suffix(text: str) -> str:
    """Strip trailing legal-entity suffixes in ENTITY_SUFFIXES scan order.

    Each suffix is tried once, so a chained pair is only fully removed
    when the outer suffix comes earlier in the list than the inner one.
    """
    for pattern in _SUFFIX_PATTERNS:
        text = pattern.sub("", text)
    return text


def canonicalize_variants(text: str) -> str:
    """Map '&' to 'and' and every corporate designator to one token."""
    text = _AMPERSAND_RE.sub(" and ", text)
    return _VARIANT_RE.sub(CANONICAL_DESIGNATOR, text)
