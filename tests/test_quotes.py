"""Quote storage and the published feed."""

from __future__ import annotations

from datetime import datetime, timezone

from models import Quote
from utils.quotes import delete_quote, get_published_quotes, upsert_quote


def quote_data(**overrides):
    data = {
        "client_ip": "10.0.0.1",
        "user_name": "Ana",
        "reference": "Genesis 1:1-3",
        "start_book": "genesis",
        "end_book": None,
        "start_chapter": 1,
        "end_chapter": None,
        "start_verse": 1,
        "end_verse": 3,
        "user_language": "ro",
        "user_note": None,
        "published": False,
    }
    data.update(overrides)
    return data


def test_create_draft_quote(session) -> None:
    quote = upsert_quote(session, quote_data())
    assert quote.id is not None
    assert quote.published is False
    assert quote.published_at is None


def test_publishing_sets_published_at_once(session) -> None:
    quote = upsert_quote(session, quote_data())
    quote = upsert_quote(session, {"published": True}, quote_id=quote.id)
    first_published_at = quote.published_at
    assert first_published_at is not None

    quote = upsert_quote(session, {"user_note": "edited"}, quote_id=quote.id)
    assert quote.user_note == "edited"
    assert quote.published_at == first_published_at


def test_update_of_missing_quote_returns_none(session) -> None:
    assert upsert_quote(session, quote_data(), quote_id=999) is None


def test_delete_quote(session) -> None:
    quote = upsert_quote(session, quote_data())
    assert delete_quote(session, quote.id) is True
    assert session.get(Quote, quote.id) is None
    assert delete_quote(session, quote.id) is False


def test_verse_range_defaults_end_to_start() -> None:
    quote = Quote(start_book="john", start_chapter=3, start_verse=16)
    verse_range = quote.verse_range
    assert (verse_range.end_book, verse_range.end_chapter, verse_range.end_verse) == ("john", 3, 16)


def test_published_feed_is_newest_first_and_hydrated(session) -> None:
    older = upsert_quote(session, quote_data(published=True))
    newer = upsert_quote(session, quote_data(
        reference="Exodus 2:2", start_book="exodus", start_chapter=2, start_verse=2, end_verse=None,
        published=True,
    ))
    upsert_quote(session, quote_data(reference="Genesis 2:1", start_chapter=2, end_verse=None))
    older.published_at = datetime(2026, 1, 1, tzinfo=timezone.utc)
    newer.published_at = datetime(2026, 2, 1, tzinfo=timezone.utc)
    session.flush()

    feed = get_published_quotes(session, "kjv")
    assert [q["id"] for q in feed] == [newer.id, older.id]
    assert [v["text"] for v in feed[0]["verses"]] == ["kjv exodus 2:2"]
    assert len(feed[1]["verses"]) == 3
    assert "clientIp" not in feed[0] and "client_ip" not in feed[0]


def test_published_feed_without_translation_has_no_verses(session) -> None:
    upsert_quote(session, quote_data(published=True))
    feed = get_published_quotes(session)
    assert len(feed) == 1
    assert "verses" not in feed[0]
