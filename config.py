"""config.py — Per-book metadata and the output directory layout."""

import json
import uuid
from dataclasses import fields
from pathlib import Path

from errors import ConfigError
from models import BookMetadata

CONTENT_DIRNAME = "OEBPS"
CHAPTERS_DIRNAME = "chapters"

REQUIRED_KEYS = ("title", "author", "publisher", "identifier", "description")


def load_book_metadata(path: Path) -> BookMetadata:
    """
    Read a book.json describing one book, e.g.

        {"title": "...", "author": "...", "publisher": "...",
         "identifier": "urn:uuid:af4f5de9-...", "description": "..."}

    Cover and NCX filenames may be overridden with the optional
    BookMetadata field names.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read book config {path}: {e}", path=path) from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Book config {path} is not valid JSON: {e}", path=path) from e

    if not isinstance(data, dict):
        raise ConfigError(f"Book config {path} must be a JSON object", path=path)

    known = {f.name for f in fields(BookMetadata)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown keys in {path}: {', '.join(unknown)}", path=path)
    missing = [k for k in REQUIRED_KEYS if k not in data]
    if missing:
        raise ConfigError(f"Missing keys in {path}: {', '.join(missing)}", path=path)
    for key, value in data.items():
        if not isinstance(value, str):
            raise ConfigError(f"{path}: '{key}' must be a string", path=path)

    _check_identifier(data["identifier"], path)
    return BookMetadata(**data)


def _check_identifier(identifier: str, path: Path) -> None:
    prefix = "urn:uuid:"
    if not identifier.startswith(prefix):
        raise ConfigError(f"{path}: identifier must start with '{prefix}'", path=path)
    try:
        uuid.UUID(identifier[len(prefix):])
    except ValueError as e:
        raise ConfigError(f"{path}: identifier is not a valid UUID URN", path=path) from e


def book_paths(book_dir: Path) -> dict[str, Path]:
    """Return the book, content and chapters directories under book_dir."""
    book_dir = Path(book_dir)
    content_dir = book_dir / CONTENT_DIRNAME
    return {
        "book_dir": book_dir,
        "content_dir": content_dir,
        "chapters_dir": content_dir / CHAPTERS_DIRNAME,
    }
