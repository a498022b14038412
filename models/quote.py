# models/quote.py
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, Index, func
from database import Base
from utils.verse_range import VerseRange

class Quote(Base):
    __tablename__ = 'quotes'

    id = Column(Integer, primary_key=True, index=True)
    client_ip = Column(String(64), nullable=False, index=True)
    user_name = Column(String(100), nullable=True)

    reference = Column(Text, nullable=False)             # e.g. "Genesis 1:1-5"
    start_book = Column(String(50), nullable=False)
    end_book = Column(String(50), nullable=True)         # null when same as start_book
    start_chapter = Column(Integer, nullable=False)
    end_chapter = Column(Integer, nullable=True)
    start_verse = Column(Integer, nullable=False)
    end_verse = Column(Integer, nullable=True)

    user_language = Column(String(10), nullable=False)
    user_note = Column(Text, nullable=True)

    published = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    published_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index('published_date_idx', 'published', 'published_at'),
    )

    @property
    def verse_range(self):
        return VerseRange(
            start_book=self.start_book,
            start_chapter=self.start_chapter,
            start_verse=self.start_verse,
            end_book=self.end_book or self.start_book,
            end_chapter=self.end_chapter or self.start_chapter,
            end_verse=self.end_verse or self.start_verse,
        )

    def to_json(self):
        # Public fields only, the client IP never leaves the server
        return {
            "id": self.id,
            "userName": self.user_name,
            "reference": self.reference,
            "userLanguage": self.user_language,
            "userNote": self.user_note,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
            "publishedAt": self.published_at.isoformat() if self.published_at else None,
        }

    def __repr__(self):
        return f'<Quote {self.id} {self.reference} published={self.published}>'
