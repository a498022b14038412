"""Pytest configuration: in-memory SQLite storage seeded with two translations.

``kjv`` carries English book names and chapter 1 (verses 1-3) of every
canonical book, plus a few extra chapters of Genesis and Exodus. ``vdcc``
carries Romanian book names and a handful of books.
"""
from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Ensure repository root is on sys.path for local package imports
sys.path.append(str(Path(__file__).resolve().parents[1]))

os.environ.setdefault("DATABASE_URL", "sqlite://")

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base
import models  # noqa: F401  registers every model with Base
from models import Translation, Verse
from utils.book_catalog import CATALOG
from utils.library import load_library

ROMANIAN_NAMES = {
    "genesis": "Geneza",
    "exodus": "Exodul",
    "leviticus": "Leviticul",
    "1-kings": "1 Împăraţi",
    "2-kings": "2 Împăraţi",
    "john": "Ioan",
    "1-john": "1 Ioan",
    "2-john": "2 Ioan",
    "3-john": "3 Ioan",
}

# book slug -> {chapter: verse count}; anything missing gets chapter 1, verses 1-3
KJV_CHAPTERS = {
    "genesis": {1: 5, 2: 3, 3: 4},
    "exodus": {1: 3, 2: 3},
}
VDCC_CHAPTERS = {
    "genesis": {1: 5, 2: 3, 3: 4},
    "exodus": {1: 3, 2: 3},
    "leviticus": {1: 3},
    "1-kings": {3: 6},
    "2-samuel": {4: 3},
    "john": {3: 16},
    "1-john": {1: 3},
    "2-john": {1: 3},
    "3-john": {1: 3},
}


def verse_text(translation_slug: str, book_slug: str, chapter: int, verse: int) -> str:
    return f"{translation_slug} {book_slug} {chapter}:{verse}"


def _seed_translation(session, slug, language, abbreviation, name, names, chapters_by_book):
    books = [
        {"slug": book.slug, "name": names.get(book.slug, book.name)}
        for book in CATALOG
        if book.slug in chapters_by_book
    ]
    translation = Translation(
        slug=slug,
        language=language,
        abbreviation=abbreviation,
        name=name,
        books=books,
        total_books=len(books),
    )
    session.add(translation)
    session.flush()

    total = 0
    for book in CATALOG:
        chapters = chapters_by_book.get(book.slug)
        if chapters is None:
            continue
        for chapter, count in chapters.items():
            for number in range(1, count + 1):
                session.add(Verse(
                    translation_id=translation.id,
                    translation_slug=slug,
                    book_slug=book.slug,
                    book_name=names.get(book.slug, book.name),
                    testament=book.testament,
                    chapter=chapter,
                    verse=number,
                    text=verse_text(slug, book.slug, chapter, number),
                ))
                total += 1
    translation.total_verses = total


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def seeded(session_factory):
    """Commit both translations; returns the session factory."""
    session = session_factory()
    kjv_chapters = {book.slug: KJV_CHAPTERS.get(book.slug, {1: 3}) for book in CATALOG}
    _seed_translation(session, "kjv", "en", "KJV", "King James Version", {}, kjv_chapters)
    _seed_translation(session, "vdcc", "ro", "VDCC", "Versiunea Dumitru Cornilescu Corectată",
                      ROMANIAN_NAMES, VDCC_CHAPTERS)
    session.commit()
    session.close()
    return session_factory


@pytest.fixture
def session(seeded):
    session = seeded()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def library(seeded):
    session = seeded()
    try:
        return load_library(session)
    finally:
        session.close()


@pytest.fixture
def app(seeded, library):
    from app import create_app

    app = create_app(session_factory=seeded, library=library)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
