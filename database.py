from contextlib import contextmanager
import logging
import sys

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.exc import SQLAlchemyError

from config import Config
from utils.errors import ScriptureError

logging.basicConfig(
    level=Config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

DATABASE_URL = Config.DATABASE_URL

# SQLite connections are handed between Flask worker threads
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_db(bind=None):
    """Create all tables known to the models package (local/dev use; production uses alembic)."""
    import models  # noqa: F401  registers models with Base
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables ensured")


@contextmanager
def get_db_session(factory=None):
    """Provide a transactional scope around a series of SQLAlchemy operations."""
    db = (factory or SessionLocal)()
    try:
        yield db
        db.commit()
    except ScriptureError as e:
        # Expected outcomes like a missing passage, not session failures
        db.rollback()
        logger.debug(f"Session rolled back: {e}")
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"SQLAlchemy Session Error: {e}")
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"General Session Error: {e}")
        raise
    finally:
        db.close()
