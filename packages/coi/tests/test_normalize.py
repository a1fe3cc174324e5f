"""Tests for the name normalization pipeline."""

import pytest

from coi.normalize import (
    get_initials,
    matches_initials,
    normalize,
    normalize_names,
    split_name,
)


def test_ampersand_and_suffix_variants_converge():
    assert normalize("Smith & Sons Inc") == "smith and sons"
    assert normalize("Smith and Sons, Incorporated") == "smith and sons"


def test_empty_input():
    assert normalize("") == ""
    assert normalize(None) == ""


def test_leading_article_and_suffix_stripped():
    assert normalize("The Acme Corporation") == "acme"


def test_trailing_punctuation_does_not_block_suffix_strip():
    assert normalize("Acme, Inc.") == "acme"


def test_chained_suffixes_in_scan_order():
    assert normalize("Foo Co Inc") == "foo"


def test_chained_suffix_reintroduced_as_canonical_token():
    # "ltd" goes, "inc" survives the scan and is canonicalized afterwards
    assert normalize("Foo Inc Ltd") == "foo corporation"


def test_inner_designator_canonicalized():
    assert normalize("Acme Co Holdings") == "acme corporation holdings"


def test_embedded_ampersand():
    assert normalize("AT&T") == "at and t"


def test_whitespace_collapsed():
    assert normalize("  Jane   Doe  ") == "jane doe"


def test_unicode_fullwidth():
    assert normalize("Ｊａｎｅ Doe") == "jane doe"


@pytest.mark.parametrize(
    "name",
    [
        "Smith & Sons Inc",
        "The Acme Corporation",
        "Jane Doe",
        "AT&T",
        "Acme Co Holdings",
        "O'Brien Law Group, LLP",
        "Wayne Enterprises",
    ],
)
def test_idempotent(name):
    once = normalize(name)
    assert normalize(once) == once


@pytest.mark.parametrize(
    "name, once, twice",
    [
        # Only one leading article is stripped per pass
        ("The A Team", "a team", "team"),
        # The surviving inner suffix comes back as "corporation", which the next pass strips
        ("Foo Inc Ltd", "foo corporation", "foo"),
    ],
)
def test_not_idempotent_for_stacked_articles_and_suffixes(name, once, twice):
    assert normalize(name) == once
    assert normalize(once) == twice


def test_normalize_names():
    assert normalize_names(["Jane Doe", "Acme LLC"]) == ["jane doe", "acme"]


def test_split_name():
    assert split_name("Jane Q Doe") == ("Jane", "Doe")
    assert split_name("Cher") == ("Cher", "")
    assert split_name("   ") == ("", "")


def test_get_initials():
    assert get_initials("jane quinn doe") == "JQD"


def test_matches_initials():
    assert matches_initials("Jane Doe", "J.D.")
    assert matches_initials("Jane Doe", "jd")
    assert not matches_initials("Jane Doe", "JX")
    assert not matches_initials("Jane Doe", "")
