"""Reference string parsing.

Supported formats::

    genesis 1:1                 single verse
    genesis 1:1-5               verse range in one chapter
    genesis 1:1 - 2:5           chapter range
    genesis 1:1-exodus 2:3      cross-book range
    genesis 1:1 to 5, 1:1 -> 2:4  alternative separators

Book names may be English slugs/names or the translation's localized names.
"""
import logging
import re

from utils.book_resolver import BookResolver
from utils.errors import InvalidFormatError
from utils.verse_range import MAX_POSITION, VerseRange

logger = logging.getLogger(__name__)

# "<book text> <chapter>:<verse>", anchored so multi-word book names are kept whole
FULL_REFERENCE = re.compile(r'^(?P<book>.+?)\s+(?P<chapter>\d+):(?P<verse>\d+)$')
CHAPTER_VERSE = re.compile(r'^(?P<chapter>\d+):(?P<verse>\d+)$')
BARE_VERSE = re.compile(r'^(?P<verse>\d+)$')

# A range separator always follows the start's "chapter:verse"; hyphens inside
# book names ("1-samuel") are left alone.
RANGE_SEPARATOR = re.compile(r':\d+(-)')


def clean_reference(reference):
    text = ' '.join((reference or '').split())
    text = re.sub(r'\s*->\s*', '-', text)
    text = re.sub(r'\s+to\s+', '-', text, flags=re.IGNORECASE)
    text = re.sub(r'\s*:\s*', ':', text)
    text = re.sub(r'\s*-\s*', '-', text)
    return text


def split_reference(cleaned):
    separators = [m.start(1) for m in RANGE_SEPARATOR.finditer(cleaned)]
    if len(separators) > 1:
        raise InvalidFormatError(f'Multiple ranges are not supported: "{cleaned}"')
    if not separators:
        return cleaned, None
    index = separators[0]
    return cleaned[:index], cleaned[index + 1:]


def _positive(value, reference):
    number = int(value)
    if number < 1:
        raise InvalidFormatError(f'Chapter and verse numbers start at 1: "{reference}"')
    if number > MAX_POSITION:
        raise InvalidFormatError(f'Chapter and verse numbers stop at {MAX_POSITION}: "{reference}"')
    return number


class ReferenceParser:
    def __init__(self, library, resolver=None):
        self.library = library
        self.resolver = resolver or BookResolver(library)

    def _parse_full(self, part, translation_slug, reference):
        match = FULL_REFERENCE.match(part)
        if not match:
            return None
        book = self.resolver.resolve(match.group('book'), translation_slug)
        return (book,
                _positive(match.group('chapter'), reference),
                _positive(match.group('verse'), reference))

    def parse(self, reference, translation_slug=None):
        """Parse ``reference`` into a ``VerseRange`` or raise ``InvalidFormatError``."""
        cleaned = clean_reference(reference)
        if not cleaned:
            raise InvalidFormatError('Empty reference')

        start_part, end_part = split_reference(cleaned)

        start = self._parse_full(start_part, translation_slug, reference)
        if start is None:
            raise InvalidFormatError(
                f'Invalid reference format: "{reference}". Expected format like '
                f'"genesis 1:1", "genesis 1:1-5" or "genesis 1:1 - 2:5"'
            )
        book, chapter, verse = start

        if end_part is None:
            return VerseRange.single(book, chapter, verse)

        end = self._parse_end(end_part, book, chapter, translation_slug, reference)
        verse_range = VerseRange(book, chapter, verse, *end)

        if not verse_range.is_ordered(self.library.catalog):
            raise InvalidFormatError(f'Range end precedes its start: "{reference}"')
        return verse_range

    def _parse_end(self, part, start_book, start_chapter, translation_slug, reference):
        full = self._parse_full(part, translation_slug, reference)
        if full is not None:
            return full

        match = CHAPTER_VERSE.match(part)
        if match:
            return (start_book,
                    _positive(match.group('chapter'), reference),
                    _positive(match.group('verse'), reference))

        match = BARE_VERSE.match(part)
        if match:
            return start_book, start_chapter, _positive(match.group('verse'), reference)

        raise InvalidFormatError(f'Invalid range end "{part}" in "{reference}"')


def parse_reference(library, reference, translation_slug=None):
    return ReferenceParser(library).parse(reference, translation_slug)
