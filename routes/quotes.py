# routes/quotes.py
from flask import Blueprint, jsonify, request
import logging

from pydantic import ValidationError

from routes.common import current_library, db_session, error_response
from schemas.bible_schemas import QuoteCreate
from utils.errors import InvalidFormatError, ScriptureError
from utils.quotes import delete_quote, get_published_quotes, upsert_quote
from utils.verse_range import VerseRange

quotes_bp = Blueprint('quotes', __name__, url_prefix='/api/bible')

logger = logging.getLogger(__name__)


def client_ip():
    # ProxyFix already rewrote remote_addr from X-Forwarded-For
    return request.remote_addr or 'unknown'


def quote_payload():
    payload = QuoteCreate(**(request.get_json(silent=True) or {}))
    data = payload.model_dump()
    verse_range = VerseRange(
        start_book=data['start_book'],
        start_chapter=data['start_chapter'],
        start_verse=data['start_verse'],
        end_book=data['end_book'] or data['start_book'],
        end_chapter=data['end_chapter'] or data['start_chapter'],
        end_verse=data['end_verse'] or data['start_verse'],
    )
    if not verse_range.is_ordered(current_library().catalog):
        raise InvalidFormatError("Range end precedes its start")
    data['client_ip'] = client_ip()
    return data


@quotes_bp.route('/quotes', methods=['GET'])
def list_quotes():
    try:
        translation = request.args.get('translation')
        library = current_library()
        with db_session() as db:
            quotes = get_published_quotes(db, translation, catalog=library.catalog)
        return jsonify({"success": True, "count": len(quotes), "quotes": quotes})
    except ScriptureError as e:
        return error_response(e)
    except Exception as e:
        logger.error(f"Error fetching quotes: {str(e)}", exc_info=True)
        return jsonify({"success": False, "error": "Failed to fetch quotes"}), 500


@quotes_bp.route('/quotes', methods=['POST'])
def create_quote():
    try:
        data = quote_payload()
        with db_session() as db:
            quote = upsert_quote(db, data)
            result = quote.to_json()
        return jsonify({"success": True, "quote": result}), 201
    except (ValidationError, ScriptureError) as e:
        return error_response(e)
    except Exception as e:
        logger.error(f"Error creating quote: {str(e)}", exc_info=True)
        return jsonify({"success": False, "error": "Failed to create quote"}), 500


@quotes_bp.route('/quotes/<int:quote_id>', methods=['PUT'])
def update_quote(quote_id):
    try:
        data = quote_payload()
        with db_session() as db:
            quote = upsert_quote(db, data, quote_id=quote_id)
            if quote is None:
                return jsonify({"success": False, "error": "Quote not found"}), 404
            result = quote.to_json()
        return jsonify({"success": True, "quote": result})
    except (ValidationError, ScriptureError) as e:
        return error_response(e)
    except Exception as e:
        logger.error(f"Error updating quote {quote_id}: {str(e)}", exc_info=True)
        return jsonify({"success": False, "error": "Failed to update quote"}), 500


@quotes_bp.route('/quotes/<int:quote_id>', methods=['DELETE'])
def remove_quote(quote_id):
    try:
        with db_session() as db:
            deleted = delete_quote(db, quote_id)
        if not deleted:
            return jsonify({"success": False, "error": "Quote not found"}), 404
        return jsonify({"success": True, "message": "Quote deleted"})
    except ScriptureError as e:
        return error_response(e)
    except Exception as e:
        logger.error(f"Error deleting quote {quote_id}: {str(e)}", exc_info=True)
        return jsonify({"success": False, "error": "Failed to delete quote"}), 500
