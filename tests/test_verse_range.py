"""VerseRange labels and ordering."""

from __future__ import annotations

from utils.verse_range import VerseRange


def test_labels() -> None:
    assert VerseRange.single("genesis", 1, 1).label() == "Genesis 1:1"
    assert VerseRange("genesis", 1, 1, "genesis", 1, 5).label() == "Genesis 1:1-5"
    assert VerseRange("genesis", 1, 1, "genesis", 2, 5).label() == "Genesis 1:1 - 2:5"
    assert VerseRange("genesis", 1, 1, "exodus", 2, 3).label() == "Genesis 1:1 - Exodus 2:3"
    assert VerseRange.single("1-john", 1, 9).label() == "1 John 1:9"


def test_ordering() -> None:
    assert VerseRange("genesis", 1, 1, "genesis", 1, 1).is_ordered()
    assert VerseRange("genesis", 1, 1, "exodus", 1, 1).is_ordered()
    assert not VerseRange("genesis", 2, 1, "genesis", 1, 9).is_ordered()
    assert not VerseRange("exodus", 1, 1, "genesis", 50, 1).is_ordered()


def test_shape_predicates() -> None:
    single = VerseRange.single("john", 3, 16)
    assert single.is_single_verse and single.is_same_chapter and single.is_same_book
    chapters = VerseRange("john", 3, 16, "john", 4, 2)
    assert not chapters.is_same_chapter and chapters.is_same_book


def test_to_json() -> None:
    assert VerseRange("genesis", 1, 1, "exodus", 2, 3).to_json() == {
        "start": {"book": "genesis", "chapter": 1, "verse": 1},
        "end": {"book": "exodus", "chapter": 2, "verse": 3},
    }
