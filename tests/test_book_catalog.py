"""Canonical catalog ordering and lookups."""

from __future__ import annotations

from utils.book_catalog import CATALOG, slugify


def test_catalog_has_sixty_six_books_in_canonical_order() -> None:
    """Ordinals are 1-based and follow the Protestant canon."""
    assert len(CATALOG) == 66
    assert CATALOG.by_ordinal(1).slug == "genesis"
    assert CATALOG.by_ordinal(40).slug == "matthew"
    assert CATALOG.by_ordinal(66).slug == "revelation"
    assert [b.ordinal for b in CATALOG] == list(range(1, 67))


def test_slugify_handles_numbered_and_multi_word_names() -> None:
    assert slugify("1 Samuel") == "1-samuel"
    assert slugify("Song of Solomon") == "song-of-solomon"
    assert slugify("  Genesis ") == "genesis"


def test_unknown_slug_lookups() -> None:
    """Unknown slugs have ordinal 0 and a title-cased display name."""
    assert CATALOG.ordinal("not-a-book") == 0
    assert CATALOG.get("not-a-book") is None
    assert CATALOG.by_ordinal(67) is None
    assert CATALOG.display_name("not-a-book") == "Not A Book"


def test_display_name_and_testament() -> None:
    book = CATALOG.get("1-john")
    assert CATALOG.display_name("1-john") == "1 John"
    assert book.testament == "new"
    assert CATALOG.get("malachi").testament == "old"
    assert "psalms" in CATALOG
