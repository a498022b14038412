"""Compile ``VerseRange`` values into SQLAlchemy predicates over ``verses``.

Four shapes, most specific first: single verse, verse span inside one
chapter, several chapters of one book, and two books. Cross-book predicates
only cover the two endpoint books; books lying between them are not
included.
"""
import logging

from sqlalchemy import and_, or_, case
from sqlalchemy.exc import SQLAlchemyError

from config import Config
from models import Verse
from utils.book_catalog import CATALOG
from utils.errors import RangeNotFoundError, StorageError
from utils.reference_parser import ReferenceParser

logger = logging.getLogger(__name__)


def _range_clause(verse_range):
    r = verse_range
    if r.is_single_verse:
        return and_(
            Verse.book_slug == r.start_book,
            Verse.chapter == r.start_chapter,
            Verse.verse == r.start_verse,
        )

    if r.is_same_chapter:
        return and_(
            Verse.book_slug == r.start_book,
            Verse.chapter == r.start_chapter,
            Verse.verse.between(r.start_verse, r.end_verse),
        )

    if r.is_same_book:
        return and_(
            Verse.book_slug == r.start_book,
            or_(
                # Start chapter: from start verse onwards
                and_(Verse.chapter == r.start_chapter, Verse.verse >= r.start_verse),
                # Middle chapters: all verses
                Verse.chapter.between(r.start_chapter + 1, r.end_chapter - 1),
                # End chapter: up to end verse
                and_(Verse.chapter == r.end_chapter, Verse.verse <= r.end_verse),
            ),
        )

    return or_(
        and_(
            Verse.book_slug == r.start_book,
            or_(
                and_(Verse.chapter == r.start_chapter, Verse.verse >= r.start_verse),
                Verse.chapter > r.start_chapter,
            ),
        ),
        and_(
            Verse.book_slug == r.end_book,
            or_(
                Verse.chapter < r.end_chapter,
                and_(Verse.chapter == r.end_chapter, Verse.verse <= r.end_verse),
            ),
        ),
    )


def compile_range(verse_range, translation_slug):
    """Predicate selecting exactly the verses of ``verse_range`` in one translation."""
    return and_(Verse.translation_slug == translation_slug, _range_clause(verse_range))


def compile_ranges(verse_ranges, translation_slug):
    """One predicate covering several ranges, for a single batched storage call."""
    return and_(
        Verse.translation_slug == translation_slug,
        or_(*[_range_clause(r) for r in verse_ranges]),
    )


def canonical_order(catalog=CATALOG):
    """ORDER BY clauses: canonical book ordinal, chapter, verse."""
    book_ordinal = case(catalog.ordinal_map(), value=Verse.book_slug, else_=len(catalog) + 1)
    return (book_ordinal, Verse.chapter, Verse.verse)


def _sort_key(catalog):
    return lambda v: (catalog.ordinal(v.book_slug) or len(catalog) + 1, v.chapter, v.verse)


def fetch_passage(session, verse_range, translation_slug, limit=Config.PASSAGE_VERSE_LIMIT, catalog=CATALOG):
    """Verses of one range in reading order.

    ``limit`` truncates oversized ranges instead of rejecting them; pass
    ``None`` for programmatic ranges that must come back whole.
    """
    query = (session.query(Verse)
             .filter(compile_range(verse_range, translation_slug))
             .order_by(*canonical_order(catalog)))
    if limit is not None:
        query = query.limit(limit)
    try:
        return query.all()
    except SQLAlchemyError as e:
        raise StorageError(f"Failed to fetch passage {verse_range.label(catalog)}: {e}") from e


def fetch_ranges(session, verse_ranges, translation_slug, catalog=CATALOG):
    """Hydrate many ranges with one query.

    Storage cannot say which OR branch produced a row, so rows are split back
    per range with ``VerseRange.contains``. The result is a list parallel to
    ``verse_ranges``.
    """
    verse_ranges = list(verse_ranges)
    if not verse_ranges:
        return []

    try:
        rows = session.query(Verse).filter(compile_ranges(verse_ranges, translation_slug)).all()
    except SQLAlchemyError as e:
        raise StorageError(f"Failed to fetch {len(verse_ranges)} ranges: {e}") from e

    logger.debug(f"Batched fetch returned {len(rows)} verses for {len(verse_ranges)} ranges")
    rows.sort(key=_sort_key(catalog))
    return [
        [v for v in rows if r.contains(v.book_slug, v.chapter, v.verse)]
        for r in verse_ranges
    ]


def fetch_reference(session, library, reference, translation_slug, limit=Config.PASSAGE_VERSE_LIMIT):
    """Parse ``reference`` and return ``(verse_range, verses)``.

    Raises ``InvalidFormatError`` for malformed input and ``RangeNotFoundError``
    when the range is well formed but nothing is stored for it.
    """
    verse_range = ReferenceParser(library).parse(reference, translation_slug)
    verses = fetch_passage(session, verse_range, translation_slug, limit=limit, catalog=library.catalog)
    if not verses:
        raise RangeNotFoundError(f'Passage not found for reference: "{reference}"')
    return verse_range, verses
