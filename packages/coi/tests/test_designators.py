"""Tests for legal-entity suffix handling."""

from coi.designators import (
    canonicalize_variants,
    is_designator,
    strip_article,
    strip_suffix,
)


def test_common_designators():
    assert is_designator("inc")
    assert is_designator("LLC")
    assert is_designator("Corp.")
    assert is_designator("plc")


def test_not_designator():
    assert not is_designator("apple")
    assert not is_designator("holdings")


def test_strip_single_suffix():
    assert strip_suffix("acme widgets inc") == "acme widgets"


def test_strip_chained_suffix_in_scan_order():
    # "inc" is scanned before "co", so both go
    assert strip_suffix("foo co inc") == "foo"


def test_strip_chained_suffix_reverse_order_keeps_inner():
    # "co" is scanned after "inc", so "inc" is already past its turn
    assert strip_suffix("foo inc co") == "foo inc"


def test_bare_suffix_not_stripped():
    assert strip_suffix("inc") == "inc"


def test_middle_designator_not_stripped():
    assert strip_suffix("foo inc bar") == "foo inc bar"


def test_strip_article():
    assert strip_article("the acme group") == "acme group"
    assert strip_article("an apple") == "apple"


def test_strip_article_only_once():
    assert strip_article("the the band") == "the band"


def test_article_prefix_of_word_not_stripped():
    assert strip_article("theatre co") == "theatre co"


def test_canonicalize_designator_variants():
    assert canonicalize_variants("acme co holdings") == "acme corporation holdings"
    assert canonicalize_variants("acme llc") == "acme corporation"


def test_canonicalize_respects_word_boundaries():
    assert canonicalize_variants("coca cola") == "coca cola"


def test_canonicalize_ampersand():
    assert "and" in canonicalize_variants("smith & sons").split()
