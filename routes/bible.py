# routes/bible.py
from flask import Blueprint, jsonify, request
import logging

from pydantic import ValidationError

from routes.common import current_library, db_session, error_response
from schemas.bible_schemas import PassageQuery, ReferenceQuery, TranslationsQuery
from utils.book_resolver import BookResolver
from utils.errors import InvalidFormatError, RangeNotFoundError, ScriptureError
from utils.library import list_translations
from utils.range_query import fetch_passage, fetch_reference
from utils.verse_range import VerseRange

bible_bp = Blueprint('bible', __name__, url_prefix='/api/bible')

logger = logging.getLogger(__name__)


def passage_response(translation_slug, verse_range, verses):
    last = verses[-1]
    return jsonify({
        "success": True,
        "bibleTranslationSlug": translation_slug,
        "reference": verse_range.label(),
        "start": {
            "book": verse_range.start_book,
            "chapter": verse_range.start_chapter,
            "verse": verse_range.start_verse,
        },
        "end": {
            "book": last.book_slug,
            "chapter": last.chapter,
            "verse": last.verse,
        },
        "verses": [v.to_json() for v in verses],
        "count": len(verses),
    })


@bible_bp.route('/translations', methods=['GET'])
def get_translations():
    try:
        query = TranslationsQuery(**request.args.to_dict())
        with db_session() as db:
            results = [t.to_json() for t in list_translations(db, query.language)]
        return jsonify({"success": True, "count": len(results), "translations": results})
    except (ValidationError, ScriptureError) as e:
        return error_response(e)
    except Exception as e:
        logger.error(f"Error fetching translations: {str(e)}", exc_info=True)
        return jsonify({"success": False, "error": "Failed to fetch translations"}), 500


@bible_bp.route('/<translation_slug>/books', methods=['GET'])
def get_books(translation_slug):
    """Canonical book list with the translation's localized names."""
    try:
        library = current_library()
        translation = library.translation(translation_slug)
        if translation is None:
            return jsonify({"success": False, "error": f"Unknown translation: {translation_slug}"}), 404

        books = [{
            "bookIndex": book.ordinal,
            "slug": book.slug,
            "name": translation.book_names.get(book.slug, book.name),
            "testament": book.testament,
            "maxChapter": book.chapter_count,
        } for book in library.catalog]
        return jsonify({"success": True, "count": len(books), "books": books})
    except ScriptureError as e:
        return error_response(e)
    except Exception as e:
        logger.error(f"Error fetching books: {str(e)}", exc_info=True)
        return jsonify({"success": False, "error": "Failed to fetch books"}), 500


@bible_bp.route('/<translation_slug>/passage', methods=['GET'])
def get_passage(translation_slug):
    try:
        query = PassageQuery(**request.args.to_dict())
        library = current_library()
        resolver = BookResolver(library)

        start_book = resolver.resolve(query.book, translation_slug)
        end_book = resolver.resolve(query.end_book, translation_slug) if query.end_book else start_book
        verse_range = VerseRange(
            start_book=start_book,
            start_chapter=query.chapter,
            start_verse=query.verse,
            end_book=end_book,
            end_chapter=query.end_chapter or query.chapter,
            end_verse=query.end_verse or query.verse,
        )
        if not verse_range.is_ordered(library.catalog):
            raise InvalidFormatError("Range end precedes its start")

        with db_session() as db:
            verses = fetch_passage(db, verse_range, translation_slug, catalog=library.catalog)
            response = passage_response(translation_slug, verse_range, verses) if verses else None
        if response is None:
            raise RangeNotFoundError("Passage not found")
        return response
    except (ValidationError, ScriptureError) as e:
        return error_response(e)
    except Exception as e:
        logger.error(f"Error fetching passage: {str(e)}", exc_info=True)
        return jsonify({"success": False, "error": "Failed to fetch passage"}), 500


@bible_bp.route('/<translation_slug>/reference', methods=['GET'])
def get_reference(translation_slug):
    try:
        query = ReferenceQuery(**request.args.to_dict())
        library = current_library()

        with db_session() as db:
            verse_range, verses = fetch_reference(db, library, query.reference, translation_slug)
            return passage_response(translation_slug, verse_range, verses)
    except (ValidationError, ScriptureError) as e:
        return error_response(e)
    except Exception as e:
        logger.error(f"Error fetching reference: {str(e)}", exc_info=True)
        return jsonify({"success": False, "error": "Failed to fetch passage"}), 500
