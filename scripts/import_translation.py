# scripts/import_translation.py
"""Load a translation from a JSON file of ``{"Genesis 1:1": "text", ...}``.

Book names in the file are matched against the canonical catalog. An
optional second file maps canonical slugs to localized book names, which
the resolver later uses for references typed in that language.
"""
import argparse
import json
import logging
import sys
from pathlib import Path

# Add the parent directory to the Python path properly
current_dir = Path(__file__).resolve().parent
sys.path.insert(0, str(current_dir.parent))

from database import get_db_session, init_db
from models import Translation, Verse
from utils.book_catalog import CATALOG, slugify

logger = logging.getLogger('import_translation')

BATCH_SIZE = 1000

# Alternate English spellings found in public domain dumps
BOOK_ALIASES = {
    "solomon's song": 'song-of-solomon',
    'psalm': 'psalms',
}


def parse_reference(ref):
    """Parse a reference like 'Genesis 1:1' into (book_name, chapter, verse)"""
    book_chapter, verse = ref.rsplit(':', 1)
    book_parts = book_chapter.rsplit(' ', 1)
    chapter = book_parts[-1]
    book_name = ' '.join(book_parts[:-1])
    return book_name, int(chapter), int(verse)


def clean_verse_text(text):
    """Clean verse text by removing any leading '#' and trimming whitespace"""
    return text.lstrip('#').strip()


def book_slug_for(name):
    return BOOK_ALIASES.get(name.lower(), slugify(name))


def import_translation(json_path, slug, name, language, abbreviation=None, names_path=None,
                       session_factory=None):
    """Replace all verses of ``slug`` with the contents of ``json_path``. Returns the verse count."""
    logger.info(f"Reading JSON file from: {json_path}")
    with open(json_path, 'r', encoding='utf-8') as f:
        verses_data = json.load(f)

    localized = {}
    if names_path:
        with open(names_path, 'r', encoding='utf-8') as f:
            localized = json.load(f)

    rows = []
    skipped = []
    stats = {}
    for ref, text in verses_data.items():
        try:
            book_name, chapter, verse = parse_reference(ref)
        except ValueError:
            skipped.append(ref)
            logger.warning(f"Malformed reference '{ref}'")
            continue

        book = CATALOG.get(book_slug_for(book_name))
        if book is None:
            skipped.append(ref)
            logger.warning(f"Unknown book '{book_name}' in reference '{ref}'")
            continue

        rows.append({
            'book_slug': book.slug,
            'book_name': localized.get(book.slug, book.name),
            'testament': book.testament,
            'chapter': chapter,
            'verse': verse,
            'text': clean_verse_text(text),
        })
        chapters, count = stats.get(book.slug, (set(), 0))
        chapters.add(chapter)
        stats[book.slug] = (chapters, count + 1)

    books = [
        {
            'slug': book.slug,
            'name': localized.get(book.slug, book.name),
            'chapters': len(stats[book.slug][0]),
            'verses': stats[book.slug][1],
        }
        for book in CATALOG if book.slug in stats
    ]

    if session_factory is None:
        init_db()
    with get_db_session(session_factory) as db:
        translation = db.query(Translation).filter(Translation.slug == slug).first()
        if translation is None:
            translation = Translation(slug=slug)
            db.add(translation)
        translation.name = name
        translation.language = language
        translation.abbreviation = abbreviation or slug.upper()
        translation.books = books
        translation.total_books = len(books)
        translation.total_chapters = sum(b['chapters'] for b in books)
        translation.total_verses = len(rows)
        db.flush()

        deleted = db.query(Verse).filter(Verse.translation_slug == slug).delete()
        logger.info(f"Cleared {deleted} existing verses for {slug}")

        for start in range(0, len(rows), BATCH_SIZE):
            batch = rows[start:start + BATCH_SIZE]
            db.add_all(
                Verse(translation_id=translation.id, translation_slug=slug, **row)
                for row in batch
            )
            db.flush()
            logger.info(f"Processed {start + len(batch)} verses...")

    logger.info(f"Import complete! {len(rows)} verses in {len(books)} books")
    if skipped:
        logger.warning(f"Skipped {len(skipped)} verses due to unknown book names")
    return len(rows)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Import a Bible translation from JSON')
    parser.add_argument('json_path', type=Path)
    parser.add_argument('slug', help="translation slug, e.g. 'kjv'")
    parser.add_argument('name', help="display name, e.g. 'King James Version'")
    parser.add_argument('--language', default='en')
    parser.add_argument('--abbreviation')
    parser.add_argument('--book-names', type=Path, help='JSON mapping canonical slug to localized name')
    args = parser.parse_args(argv)

    import_translation(
        args.json_path,
        args.slug.lower(),
        args.name,
        args.language,
        abbreviation=args.abbreviation,
        names_path=args.book_names,
    )
    return 0


if __name__ == '__main__':
    sys.exit(main())
