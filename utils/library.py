"""Immutable snapshot of the canonical catalog and the installed translations.

The snapshot is built once from storage and handed to the resolver, parser
and compiler at construction time. Nothing in here touches the database
after ``load_library`` returns.
"""
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from utils.book_catalog import CATALOG, BookCatalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranslationInfo:
    slug: str
    language: str
    abbreviation: str
    name: str
    # canonical slug -> localized display name
    book_names: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    total_books: int = 0
    total_chapters: int = 0
    total_verses: int = 0


@dataclass(frozen=True)
class Library:
    catalog: BookCatalog = CATALOG
    translations: Mapping[str, TranslationInfo] = field(default_factory=lambda: MappingProxyType({}))

    def translation(self, slug) -> Optional[TranslationInfo]:
        if slug is None:
            return None
        return self.translations.get(slug.lower())

    def localized_book_names(self, slug) -> Mapping[str, str]:
        info = self.translation(slug)
        return info.book_names if info else MappingProxyType({})


def translation_info_from_row(row) -> TranslationInfo:
    names = {}
    for book in row.books or []:
        if book.get('slug') and book.get('name'):
            names[book['slug']] = book['name']
    return TranslationInfo(
        slug=row.slug,
        language=row.language,
        abbreviation=row.abbreviation,
        name=row.name,
        book_names=MappingProxyType(names),
        total_books=row.total_books or 0,
        total_chapters=row.total_chapters or 0,
        total_verses=row.total_verses or 0,
    )


def build_library(translations, catalog=CATALOG) -> Library:
    """Build a snapshot from ``TranslationInfo`` values (used by tests and fixtures)."""
    return Library(
        catalog=catalog,
        translations=MappingProxyType({t.slug.lower(): t for t in translations}),
    )


def load_library(session, catalog=CATALOG) -> Library:
    """Read every translation row once and freeze it into a ``Library``."""
    from models import Translation

    rows = session.query(Translation).order_by(Translation.slug).all()
    library = build_library((translation_info_from_row(r) for r in rows), catalog)
    logger.info(f"Loaded library snapshot with {len(library.translations)} translations")
    return library


def list_translations(session, language=None):
    from models import Translation

    query = session.query(Translation)
    if language:
        query = query.filter(Translation.language == language)
    return query.order_by(Translation.slug).all()
