# models/bible.py
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, ForeignKey, Index, UniqueConstraint, func
from database import Base

class Translation(Base):
    __tablename__ = 'translations'

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String(50), unique=True, nullable=False, index=True)   # e.g. 'kjv', 'vdcc'
    language = Column(String(10), nullable=False, index=True)            # ISO code, e.g. 'ro'
    abbreviation = Column(String(50), nullable=False)
    name = Column(Text, nullable=False)

    # [{"slug": "genesis", "name": "Geneza", "chapters": 50, "verses": 1533}, ...]
    books = Column(JSON, nullable=False, default=list)

    total_books = Column(Integer, nullable=False, default=0)
    total_chapters = Column(Integer, nullable=False, default=0)
    total_verses = Column(Integer, nullable=False, default=0)
    copyright_notice = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint('language', 'abbreviation', name='unique_translation'),
    )

    def to_json(self):
        return {
            "id": self.id,
            "slug": self.slug,
            "language": self.language,
            "abbreviation": self.abbreviation,
            "name": self.name,
            "totalBooks": self.total_books,
            "totalChapters": self.total_chapters,
            "totalVerses": self.total_verses,
            "copyrightNotice": self.copyright_notice,
            "books": self.books or [],
        }

    def __repr__(self):
        return f'<Translation {self.slug} ({self.language})>'


class Verse(Base):
    __tablename__ = 'verses'

    id = Column(Integer, primary_key=True)
    translation_id = Column(Integer, ForeignKey('translations.id', ondelete='CASCADE'), nullable=False)
    # Denormalized so passage lookups never need a join
    translation_slug = Column(String(50), nullable=False)
    book_slug = Column(String(50), nullable=False)      # canonical English slug
    book_name = Column(String(100), nullable=False)     # localized display name
    testament = Column(String(10), nullable=False)
    chapter = Column(Integer, nullable=False)
    verse = Column(Integer, nullable=False)
    text = Column(Text, nullable=False)

    __table_args__ = (
        UniqueConstraint('translation_slug', 'book_slug', 'chapter', 'verse', name='unique_verse'),
        Index('translation_book_chapter_idx', 'translation_slug', 'book_slug', 'chapter'),
        Index('translation_book_name_idx', 'translation_slug', 'book_name'),
    )

    def to_json(self):
        return {
            "bookSlug": self.book_slug,
            "bookName": self.book_name,
            "chapter": self.chapter,
            "verse": self.verse,
            "text": self.text,
        }

    def __repr__(self):
        return f'<Verse {self.translation_slug} {self.book_slug} {self.chapter}:{self.verse}>'
