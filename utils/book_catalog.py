# utils/book_catalog.py
import re
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple

# Canonical order: name -> (code, testament, chapters)
BOOKS_MAP = {
    'Genesis': ('GEN', 'old', 50),
    'Exodus': ('EXO', 'old', 40),
    'Leviticus': ('LEV', 'old', 27),
    'Numbers': ('NUM', 'old', 36),
    'Deuteronomy': ('DEU', 'old', 34),
    'Joshua': ('JOS', 'old', 24),
    'Judges': ('JDG', 'old', 21),
    'Ruth': ('RUT', 'old', 4),
    '1 Samuel': ('1SA', 'old', 31),
    '2 Samuel': ('2SA', 'old', 24),
    '1 Kings': ('1KI', 'old', 22),
    '2 Kings': ('2KI', 'old', 25),
    '1 Chronicles': ('1CH', 'old', 29),
    '2 Chronicles': ('2CH', 'old', 36),
    'Ezra': ('EZR', 'old', 10),
    'Nehemiah': ('NEH', 'old', 13),
    'Esther': ('EST', 'old', 10),
    'Job': ('JOB', 'old', 42),
    'Psalms': ('PSA', 'old', 150),
    'Proverbs': ('PRO', 'old', 31),
    'Ecclesiastes': ('ECC', 'old', 12),
    'Song of Solomon': ('SNG', 'old', 8),
    'Isaiah': ('ISA', 'old', 66),
    'Jeremiah': ('JER', 'old', 52),
    'Lamentations': ('LAM', 'old', 5),
    'Ezekiel': ('EZK', 'old', 48),
    'Daniel': ('DAN', 'old', 12),
    'Hosea': ('HOS', 'old', 14),
    'Joel': ('JOL', 'old', 3),
    'Amos': ('AMO', 'old', 9),
    'Obadiah': ('OBA', 'old', 1),
    'Jonah': ('JON', 'old', 4),
    'Micah': ('MIC', 'old', 7),
    'Nahum': ('NAH', 'old', 3),
    'Habakkuk': ('HAB', 'old', 3),
    'Zephaniah': ('ZEP', 'old', 3),
    'Haggai': ('HAG', 'old', 2),
    'Zechariah': ('ZEC', 'old', 14),
    'Malachi': ('MAL', 'old', 4),
    'Matthew': ('MAT', 'new', 28),
    'Mark': ('MRK', 'new', 16),
    'Luke': ('LUK', 'new', 24),
    'John': ('JHN', 'new', 21),
    'Acts': ('ACT', 'new', 28),
    'Romans': ('ROM', 'new', 16),
    '1 Corinthians': ('1CO', 'new', 16),
    '2 Corinthians': ('2CO', 'new', 13),
    'Galatians': ('GAL', 'new', 6),
    'Ephesians': ('EPH', 'new', 6),
    'Philippians': ('PHP', 'new', 4),
    'Colossians': ('COL', 'new', 4),
    '1 Thessalonians': ('1TH', 'new', 5),
    '2 Thessalonians': ('2TH', 'new', 3),
    '1 Timothy': ('1TI', 'new', 6),
    '2 Timothy': ('2TI', 'new', 4),
    'Titus': ('TIT', 'new', 3),
    'Philemon': ('PHM', 'new', 1),
    'Hebrews': ('HEB', 'new', 13),
    'James': ('JAS', 'new', 5),
    '1 Peter': ('1PE', 'new', 5),
    '2 Peter': ('2PE', 'new', 3),
    '1 John': ('1JN', 'new', 5),
    '2 John': ('2JN', 'new', 1),
    '3 John': ('3JN', 'new', 1),
    'Jude': ('JUD', 'new', 1),
    'Revelation': ('REV', 'new', 22),
}


def slugify(text):
    """Convert a display name to a URL-friendly slug ("1 Samuel" -> "1-samuel")."""
    text = re.sub(r'[^\w\s-]', '', text.lower().strip())
    text = re.sub(r'[\s_-]+', '-', text)
    return text.strip('-')


@dataclass(frozen=True)
class CanonicalBook:
    slug: str
    ordinal: int
    name: str
    code: str
    testament: str
    chapter_count: int


class BookCatalog:
    """Fixed, ordered list of canonical books with ordinal lookups."""

    def __init__(self, books):
        self._books: Tuple[CanonicalBook, ...] = tuple(books)
        self._by_slug: Dict[str, CanonicalBook] = {b.slug: b for b in self._books}

    @classmethod
    def from_books_map(cls, books_map):
        return cls(
            CanonicalBook(
                slug=slugify(name),
                ordinal=index,
                name=name,
                code=code,
                testament=testament,
                chapter_count=chapters,
            )
            for index, (name, (code, testament, chapters)) in enumerate(books_map.items(), start=1)
        )

    def __iter__(self) -> Iterator[CanonicalBook]:
        return iter(self._books)

    def __len__(self):
        return len(self._books)

    def __contains__(self, slug):
        return slug in self._by_slug

    @property
    def slugs(self) -> Tuple[str, ...]:
        return tuple(b.slug for b in self._books)

    def get(self, slug) -> Optional[CanonicalBook]:
        return self._by_slug.get(slug)

    def ordinal(self, slug) -> int:
        """1-based canonical position, 0 for unknown slugs."""
        book = self._by_slug.get(slug)
        return book.ordinal if book else 0

    def by_ordinal(self, ordinal) -> Optional[CanonicalBook]:
        if 1 <= ordinal <= len(self._books):
            return self._books[ordinal - 1]
        return None

    def ordinal_map(self) -> Dict[str, int]:
        return {b.slug: b.ordinal for b in self._books}

    def display_name(self, slug):
        book = self._by_slug.get(slug)
        if book:
            return book.name
        return ' '.join(word.capitalize() for word in slug.split('-'))


CATALOG = BookCatalog.from_books_map(BOOKS_MAP)
