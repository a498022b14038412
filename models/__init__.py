# This file makes the models directory a Python package 
from .bible import Translation, Verse
from .quote import Quote
from .daily_verse import DailyVersePoolEntry, ScheduledDay, ScheduleBatch

__all__ = [
    'Translation',
    'Verse',
    'Quote',
    'DailyVersePoolEntry',
    'ScheduledDay',
    'ScheduleBatch',
]
