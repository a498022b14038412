# utils/verse_range.py
from dataclasses import dataclass, asdict

from utils.book_catalog import CATALOG

# Upper bound for chapter and verse numbers; the longest chapter has 176 verses
MAX_POSITION = 999


@dataclass(frozen=True)
class VerseRange:
    """Inclusive start/end position of a passage, books given as canonical slugs."""

    start_book: str
    start_chapter: int
    start_verse: int
    end_book: str
    end_chapter: int
    end_verse: int

    @classmethod
    def single(cls, book, chapter, verse):
        return cls(book, chapter, verse, book, chapter, verse)

    @property
    def is_single_verse(self):
        return (self.start_book == self.end_book
                and self.start_chapter == self.end_chapter
                and self.start_verse == self.end_verse)

    @property
    def is_same_chapter(self):
        return self.start_book == self.end_book and self.start_chapter == self.end_chapter

    @property
    def is_same_book(self):
        return self.start_book == self.end_book

    def is_ordered(self, catalog=CATALOG):
        """True when the end does not precede the start in canonical order."""
        start = (catalog.ordinal(self.start_book), self.start_chapter, self.start_verse)
        end = (catalog.ordinal(self.end_book), self.end_chapter, self.end_verse)
        return start <= end

    def contains(self, book, chapter, verse):
        """Mirror of the compiled storage predicate, used to split batched results.

        Cross-book ranges only cover the two endpoint books, exactly like the
        SQL built by utils.range_query.
        """
        if self.start_book == self.end_book:
            if book != self.start_book:
                return False
            if self.start_chapter == self.end_chapter:
                return chapter == self.start_chapter and self.start_verse <= verse <= self.end_verse
            if chapter == self.start_chapter:
                return verse >= self.start_verse
            if chapter == self.end_chapter:
                return verse <= self.end_verse
            return self.start_chapter < chapter < self.end_chapter

        if book == self.start_book:
            if chapter == self.start_chapter:
                return verse >= self.start_verse
            return chapter > self.start_chapter
        if book == self.end_book:
            if chapter == self.end_chapter:
                return verse <= self.end_verse
            return chapter < self.end_chapter
        return False

    def label(self, catalog=CATALOG):
        """Human readable reference, e.g. "Genesis 1:1-5" or "Genesis 1:1 - Exodus 2:3"."""
        start_name = catalog.display_name(self.start_book)
        head = f"{start_name} {self.start_chapter}:{self.start_verse}"
        if self.is_single_verse:
            return head
        if self.is_same_chapter:
            return f"{head}-{self.end_verse}"
        if self.is_same_book:
            return f"{head} - {self.end_chapter}:{self.end_verse}"
        end_name = catalog.display_name(self.end_book)
        return f"{head} - {end_name} {self.end_chapter}:{self.end_verse}"

    def to_dict(self):
        return asdict(self)

    def to_json(self):
        return {
            "start": {"book": self.start_book, "chapter": self.start_chapter, "verse": self.start_verse},
            "end": {"book": self.end_book, "chapter": self.end_chapter, "verse": self.end_verse},
        }
