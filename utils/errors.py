"""Error types shared by the parser, the range compiler and the scheduler."""


class ScriptureError(Exception):
    """Base class for every error raised by the scripture core."""


class InvalidFormatError(ScriptureError):
    """Raised when a reference string cannot be parsed. User-correctable."""


class BookNotFoundError(InvalidFormatError):
    """Raised when no matching strategy resolves a book name."""

    def __init__(self, text, translation_slug=None):
        self.text = text
        self.translation_slug = translation_slug
        super().__init__(f'Unknown book: "{text}"')


class RangeNotFoundError(ScriptureError):
    """Raised when a well-formed range matches no stored verses."""


class SchedulingConflictError(ScriptureError):
    """Raised when a schedule batch collides with existing scheduled days."""


class StorageError(ScriptureError):
    """Raised for any other storage failure."""


__all__ = [
    "ScriptureError",
    "InvalidFormatError",
    "BookNotFoundError",
    "RangeNotFoundError",
    "SchedulingConflictError",
    "StorageError",
]
