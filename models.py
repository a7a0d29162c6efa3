"""models.py — Shared data types for serial2epub."""

import mimetypes
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class ChapterSource:
    path: Path       # Absolute path of the cached chapter page

    @property
    def filename(self) -> str:
        return self.path.name


@dataclass
class ChapterContentDocument:
    title: str           # Text of the page's entry-title heading
    body: str            # Cleaned inner markup of the entry-content container
    output_path: Path    # Where the rendered XHTML was written


@dataclass
class ChapterManifestEntry:
    title: str


@dataclass
class ChapterRecord:
    id: str      # Chapter filename, e.g. "0042.xhtml"
    title: str   # From the title manifest
    href: str    # Relative to the content root, e.g. "chapters/0042.xhtml"


@dataclass
class BookMetadata:
    title: str
    author: str
    publisher: str
    identifier: str                 # "urn:uuid:..."
    description: str
    ncx_filename: str = "toc.ncx"
    cover_image_filename: str = "cover.png"
    cover_xhtml_filename: str = "cover.xhtml"
    cover_mimetype: str = field(default="")

    def __post_init__(self):
        if not self.cover_mimetype:
            guessed, _ = mimetypes.guess_type(self.cover_image_filename)
            self.cover_mimetype = guessed or "image/png"
