# models/daily_verse.py
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from database import Base
from utils.verse_range import VerseRange

class DailyVersePoolEntry(Base):
    __tablename__ = 'daily_verse_pool'

    id = Column(Integer, primary_key=True, index=True)
    start_book = Column(String(50), nullable=False)
    start_chapter = Column(Integer, nullable=False)
    start_verse = Column(Integer, nullable=False)
    end_book = Column(String(50), nullable=False)
    end_chapter = Column(Integer, nullable=False)
    end_verse = Column(Integer, nullable=False)

    # Optional MM-DD pin, e.g. "12-25"
    publish_date = Column(String(5), nullable=True, index=True)
    last_scheduled_at = Column(DateTime(timezone=True), nullable=True)
    schedule_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    scheduled_days = relationship("ScheduledDay", back_populates="pool_entry")

    @property
    def verse_range(self):
        return VerseRange(
            start_book=self.start_book,
            start_chapter=self.start_chapter,
            start_verse=self.start_verse,
            end_book=self.end_book,
            end_chapter=self.end_chapter,
            end_verse=self.end_verse,
        )

    def __repr__(self):
        return f'<DailyVersePoolEntry {self.id} {self.start_book} {self.start_chapter}:{self.start_verse} x{self.schedule_count}>'


class ScheduledDay(Base):
    __tablename__ = 'daily_verse_scheduled'

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, unique=True, nullable=False, index=True)
    pool_entry_id = Column(Integer, ForeignKey('daily_verse_pool.id'), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    pool_entry = relationship("DailyVersePoolEntry", back_populates="scheduled_days")

    def __repr__(self):
        return f'<ScheduledDay {self.date} -> {self.pool_entry_id}>'


class ScheduleBatch(Base):
    """One row per scheduled month; the unique key turns overlapping runs into no-ops."""
    __tablename__ = 'daily_verse_batches'

    id = Column(Integer, primary_key=True)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        UniqueConstraint('year', 'month', name='unique_schedule_batch'),
    )

    def __repr__(self):
        return f'<ScheduleBatch {self.year}-{self.month:02d}>'
