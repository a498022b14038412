# utils/book_resolver.py
import logging
import re
import unicodedata

from utils.errors import BookNotFoundError

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r'[^a-z0-9]')


def normalize_text(text):
    """Strip diacritics, lowercase and collapse whitespace."""
    decomposed = unicodedata.normalize('NFD', text or '')
    stripped = ''.join(c for c in decomposed if unicodedata.category(c) != 'Mn')
    return ' '.join(stripped.lower().split())


def alnum_key(text):
    """Normalized form with everything but [a-z0-9] removed ("1 Samuel" -> "1samuel")."""
    return _NON_ALNUM.sub('', normalize_text(text))


class BookResolver:
    """Maps free-text book names to canonical book slugs.

    Canonical English slugs are tried first (exact, then unique prefix); the
    requested translation's localized names are the fallback (exact, then
    prefix with the shortest display name winning).
    """

    def __init__(self, library):
        self.library = library
        self.catalog = library.catalog
        self._canonical_keys = [(alnum_key(slug), slug) for slug in self.catalog.slugs]

    def resolve(self, text, translation_slug=None):
        key = alnum_key(text)
        if not key:
            raise BookNotFoundError(text, translation_slug)

        for canonical_key, slug in self._canonical_keys:
            if canonical_key == key:
                return slug

        prefixed = [slug for canonical_key, slug in self._canonical_keys if canonical_key.startswith(key)]
        if len(prefixed) == 1:
            return prefixed[0]

        localized = self._resolve_localized(key, translation_slug)
        if localized:
            return localized

        logger.debug(f"Book '{text}' not resolved for translation {translation_slug} "
                     f"({len(prefixed)} ambiguous canonical candidates)")
        raise BookNotFoundError(text, translation_slug)

    def _resolve_localized(self, key, translation_slug):
        names = self.library.localized_book_names(translation_slug)
        if not names:
            return None

        keyed = [(alnum_key(name), name, slug) for slug, name in names.items()]
        for name_key, _, slug in keyed:
            if name_key == key:
                return slug

        matches = [(name, slug) for name_key, name, slug in keyed if name_key.startswith(key)]
        if not matches:
            return None
        # Shortest display name wins, canonical order breaks ties
        matches.sort(key=lambda m: (len(m[0]), self.catalog.ordinal(m[1])))
        return matches[0][1]


def resolve_book(library, text, translation_slug=None):
    return BookResolver(library).resolve(text, translation_slug)
