# routes/daily_verses.py
from flask import Blueprint, jsonify, request
import logging

from pydantic import ValidationError

from routes.common import current_library, db_session, error_response
from schemas.bible_schemas import DailyVerseQuery, DailyVersesQuery
from utils.daily_verses import get_daily_verse, get_daily_verses_between
from utils.errors import ScriptureError

daily_verses_bp = Blueprint('daily_verses', __name__, url_prefix='/api/bible')

logger = logging.getLogger(__name__)


@daily_verses_bp.route('/daily-verse', methods=['GET'])
def daily_verse():
    try:
        query = DailyVerseQuery(**request.args.to_dict())
        library = current_library()
        with db_session() as db:
            result = get_daily_verse(db, query.day, query.translation, catalog=library.catalog)
        if result is None:
            return jsonify({"success": False, "error": "No daily verse scheduled for this date"}), 404
        return jsonify({"success": True, "bibleTranslationSlug": query.translation, **result})
    except (ValidationError, ScriptureError) as e:
        return error_response(e)
    except Exception as e:
        logger.error(f"Error fetching daily verse: {str(e)}", exc_info=True)
        return jsonify({"success": False, "error": "Failed to fetch daily verse"}), 500


@daily_verses_bp.route('/daily-verses', methods=['GET'])
def daily_verses():
    try:
        query = DailyVersesQuery(**request.args.to_dict())
        library = current_library()
        with db_session() as db:
            results = get_daily_verses_between(
                db, query.start_date, query.end_date, query.translation, catalog=library.catalog
            )
        return jsonify({
            "success": True,
            "bibleTranslationSlug": query.translation,
            "count": len(results),
            "dailyVerses": results,
        })
    except (ValidationError, ScriptureError) as e:
        return error_response(e)
    except Exception as e:
        logger.error(f"Error fetching daily verses: {str(e)}", exc_info=True)
        return jsonify({"success": False, "error": "Failed to fetch daily verses"}), 500
