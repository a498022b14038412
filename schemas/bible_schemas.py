from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional
from datetime import date
from config import Config
from utils.book_catalog import CATALOG
from utils.verse_range import MAX_POSITION

class PassageQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    book: str = Field(..., min_length=1, max_length=100)
    chapter: int = Field(..., ge=1, le=MAX_POSITION)
    verse: int = Field(..., ge=1, le=MAX_POSITION)
    end_book: Optional[str] = Field(None, alias='endBook', max_length=100)
    end_chapter: Optional[int] = Field(None, alias='endChapter', ge=1, le=MAX_POSITION)
    end_verse: Optional[int] = Field(None, alias='endVerse', ge=1, le=MAX_POSITION)

class ReferenceQuery(BaseModel):
    reference: str = Field(..., min_length=1, max_length=200)

class TranslationsQuery(BaseModel):
    language: Optional[str] = Field(None, max_length=10)

class DailyVerseQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    translation: str = Field(Config.DEFAULT_TRANSLATION, min_length=1, max_length=50)
    day: Optional[date] = Field(None, alias='date')

class DailyVersesQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    translation: str = Field(Config.DEFAULT_TRANSLATION, min_length=1, max_length=50)
    start_date: date = Field(..., alias='startDate')
    end_date: date = Field(..., alias='endDate')

    @model_validator(mode='after')
    def check_order(self):
        if self.start_date > self.end_date:
            raise ValueError('startDate must be before or equal to endDate')
        return self

class QuoteCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_name: Optional[str] = Field(None, alias='userName', max_length=100)
    reference: str = Field(..., min_length=1, max_length=200)
    start_book: str = Field(..., alias='startBook', max_length=50)
    end_book: Optional[str] = Field(None, alias='endBook', max_length=50)
    start_chapter: int = Field(..., alias='startChapter', ge=1, le=MAX_POSITION)
    end_chapter: Optional[int] = Field(None, alias='endChapter', ge=1, le=MAX_POSITION)
    start_verse: int = Field(..., alias='startVerse', ge=1, le=MAX_POSITION)
    end_verse: Optional[int] = Field(None, alias='endVerse', ge=1, le=MAX_POSITION)
    user_language: str = Field(..., alias='userLanguage', min_length=2, max_length=10)
    user_note: Optional[str] = Field(None, alias='userNote')
    published: bool = False

    @field_validator('start_book', 'end_book')
    @classmethod
    def canonical_slug(cls, value):
        if value is None:
            return value
        value = value.lower().strip()
        if value not in CATALOG:
            raise ValueError(f'unknown book slug: {value}')
        return value
