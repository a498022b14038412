# config.py
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent

class Config:
    SQLITE_DB_PATH = os.path.join(BASE_DIR, 'bible.db')
    DATABASE_URL = os.getenv('DATABASE_URL', f"sqlite:///{SQLITE_DB_PATH}")

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # Hard cap on rows returned for user-specified passages
    PASSAGE_VERSE_LIMIT = int(os.getenv('PASSAGE_VERSE_LIMIT', '500'))
    # How many of the least recently scheduled pool entries are eligible each day
    SCHEDULER_CANDIDATE_WINDOW = int(os.getenv('SCHEDULER_CANDIDATE_WINDOW', '90'))

    DEFAULT_TRANSLATION = os.getenv('DEFAULT_TRANSLATION', 'kjv')
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')
