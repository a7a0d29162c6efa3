"""errors.py — Exceptions raised while building a book.

Filesystem failures are not wrapped: they surface as the built-in ``OSError``,
which already names the offending file.
"""

from pathlib import Path


class Serial2EpubError(Exception):
    """Base class for every failure this tool reports."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class ParseError(Serial2EpubError):
    """A cached chapter page could not be decoded or parsed."""


class StructureError(Serial2EpubError):
    """A parsed chapter page lacks the heading or content container."""


class ConfigError(Serial2EpubError):
    """The per-book metadata file is missing fields or malformed."""


class ManifestError(Serial2EpubError):
    """The chapter-title manifest is unreadable or not valid JSON."""


class ManifestMismatchError(ManifestError):
    """The title manifest has fewer entries than there are chapter files."""
