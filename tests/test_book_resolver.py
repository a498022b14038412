"""Book name resolution across canonical slugs and localized names."""

from __future__ import annotations

import pytest

from utils.book_catalog import CATALOG
from utils.book_resolver import BookResolver, alnum_key, normalize_text, resolve_book
from utils.errors import BookNotFoundError, InvalidFormatError


def test_normalize_text_strips_diacritics() -> None:
    assert normalize_text("  1  Împăraţi ") == "1 imparati"
    assert alnum_key("Song of Solomon") == "songofsolomon"


def test_every_canonical_slug_and_name_resolves_to_itself(library) -> None:
    """Resolving a slug, or its English name, gives back that slug."""
    resolver = BookResolver(library)
    for book in CATALOG:
        assert resolver.resolve(book.slug, "kjv") == book.slug
        assert resolver.resolve(book.name, "kjv") == book.slug
        assert resolver.resolve(book.name.upper(), "vdcc") == book.slug


def test_resolution_is_idempotent(library) -> None:
    resolver = BookResolver(library)
    for text in ("gen", "Ioan", "1 imp", "exodul", "revelation"):
        slug = resolver.resolve(text, "vdcc")
        assert resolver.resolve(slug, "vdcc") == slug


def test_unique_canonical_prefix(library) -> None:
    assert resolve_book(library, "gen", "kjv") == "genesis"
    assert resolve_book(library, "rev", "kjv") == "revelation"
    assert resolve_book(library, "2 sam", "kjv") == "2-samuel"


def test_localized_ioan_and_numbered_ioan_are_distinct(library) -> None:
    """"Ioan" is John and "1 Ioan" is 1 John, every time."""
    resolver = BookResolver(library)
    for _ in range(5):
        assert resolver.resolve("ioan", "vdcc") == "john"
        assert resolver.resolve("1 Ioan", "vdcc") == "1-john"
        assert resolver.resolve("3 ioan", "vdcc") == "3-john"


def test_localized_names_ignore_diacritics(library) -> None:
    resolver = BookResolver(library)
    assert resolver.resolve("1 Împăraţi", "vdcc") == "1-kings"
    assert resolver.resolve("1 imparati", "vdcc") == "1-kings"
    assert resolver.resolve("1 imp", "vdcc") == "1-kings"
    assert resolver.resolve("Geneza", "vdcc") == "genesis"


def test_localized_prefix_prefers_shortest_name(library) -> None:
    """"1 i" matches both "1 Ioan" and "1 Împăraţi"; the shorter name wins."""
    assert resolve_book(library, "1 i", "vdcc") == "1-john"


def test_localized_names_only_apply_to_their_translation(library) -> None:
    with pytest.raises(BookNotFoundError):
        resolve_book(library, "ioan", "kjv")


@pytest.mark.parametrize("text", ["", "   ", "xyz", "!!"])
def test_unknown_books_raise(library, text: str) -> None:
    with pytest.raises(BookNotFoundError) as excinfo:
        resolve_book(library, text, "vdcc")
    assert isinstance(excinfo.value, InvalidFormatError)
    assert excinfo.value.translation_slug == "vdcc"
