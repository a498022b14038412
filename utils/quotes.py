# utils/quotes.py
import logging
from datetime import datetime, timezone

from models import Quote
from utils.book_catalog import CATALOG
from utils.range_query import fetch_ranges

logger = logging.getLogger(__name__)

QUOTE_FIELDS = (
    'client_ip', 'user_name', 'reference',
    'start_book', 'end_book', 'start_chapter', 'end_chapter', 'start_verse', 'end_verse',
    'user_language', 'user_note', 'published',
)


def upsert_quote(session, data, quote_id=None):
    """Create a quote, or update ``quote_id`` in place. Returns the Quote or None if missing."""
    now = datetime.now(timezone.utc)
    if quote_id is not None:
        quote = session.get(Quote, quote_id)
        if quote is None:
            return None
    else:
        quote = Quote()
        session.add(quote)

    for field in QUOTE_FIELDS:
        if field in data:
            setattr(quote, field, data[field])

    quote.updated_at = now
    if quote.published and quote.published_at is None:
        quote.published_at = now

    session.flush()
    logger.info(f"Saved quote {quote.id} ({quote.reference}) published={quote.published}")
    return quote


def delete_quote(session, quote_id):
    quote = session.get(Quote, quote_id)
    if quote is None:
        return False
    session.delete(quote)
    session.flush()
    return True


def get_published_quotes(session, translation_slug=None, catalog=CATALOG):
    """Published quotes, newest first; with ``translation_slug`` each carries its verses."""
    quotes = (session.query(Quote)
              .filter(Quote.published.is_(True))
              .order_by(Quote.published_at.desc())
              .all())
    results = [q.to_json() for q in quotes]
    if translation_slug and quotes:
        hydrated = fetch_ranges(session, [q.verse_range for q in quotes], translation_slug, catalog=catalog)
        for item, verses in zip(results, hydrated):
            item["verses"] = [v.to_json() for v in verses]
    return results
