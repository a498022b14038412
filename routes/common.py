# routes/common.py
import logging
from contextlib import contextmanager

from flask import current_app, jsonify
from pydantic import ValidationError

from database import get_db_session
from utils.errors import (
    InvalidFormatError,
    RangeNotFoundError,
    SchedulingConflictError,
    StorageError,
)
from utils.library import load_library

logger = logging.getLogger(__name__)

LIBRARY_KEY = 'library'


@contextmanager
def db_session():
    with get_db_session(current_app.config.get('SESSION_FACTORY')) as db:
        yield db


def current_library():
    """The app's Library snapshot, loaded from storage on first use."""
    library = current_app.extensions.get(LIBRARY_KEY)
    if library is None:
        with db_session() as db:
            library = load_library(db)
        current_app.extensions[LIBRARY_KEY] = library
    return library


def error_response(error):
    if isinstance(error, ValidationError):
        return jsonify({"success": False, "error": str(error)}), 400
    if isinstance(error, InvalidFormatError):
        return jsonify({"success": False, "error": str(error)}), 400
    if isinstance(error, RangeNotFoundError):
        return jsonify({"success": False, "error": str(error)}), 404
    if isinstance(error, SchedulingConflictError):
        return jsonify({"success": False, "error": str(error)}), 409
    if isinstance(error, StorageError):
        logger.error(f"Storage error: {error}", exc_info=True)
        return jsonify({"success": False, "error": "Storage error"}), 500
    logger.error(f"Unexpected error: {error}", exc_info=True)
    return jsonify({"success": False, "error": "Internal server error"}), 500
