"""book/chapters.py — Pair converted chapter files with their manifest titles."""

import json
import os
from pathlib import Path

from errors import ManifestError, ManifestMismatchError
from models import ChapterManifestEntry, ChapterRecord


def load_title_manifest(manifest_path: Path) -> list[ChapterManifestEntry]:
    """Read the JSON array of {"title": ...} objects written by the downloader."""
    manifest_path = Path(manifest_path)
    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ManifestError(f"Cannot read title manifest {manifest_path}: {e}", path=manifest_path) from e
    except json.JSONDecodeError as e:
        raise ManifestError(f"Title manifest {manifest_path} is not valid JSON: {e}", path=manifest_path) from e

    if not isinstance(data, list):
        raise ManifestError(f"Title manifest {manifest_path} must be a JSON array", path=manifest_path)

    entries = []
    for i, item in enumerate(data):
        if not isinstance(item, dict) or not isinstance(item.get("title"), str):
            raise ManifestError(
                f"Title manifest {manifest_path}: entry {i} has no string 'title'",
                path=manifest_path,
            )
        entries.append(ChapterManifestEntry(title=item["title"]))
    return entries


def href_prefix(content_dir: Path, chapters_dir: Path) -> str:
    rel = os.path.relpath(chapters_dir, content_dir)
    if rel == ".":
        return ""
    return Path(rel).as_posix() + "/"


def derive_chapter_records(
    content_dir: Path,
    chapters_dir: Path,
    manifest_path: Path,
) -> list[ChapterRecord]:
    """
    Build the reading-order chapter list.

    Chapter files are sorted by filename and matched to manifest titles by
    position: the Nth file gets the Nth title. Extra titles are ignored; a
    file without a title raises ManifestMismatchError.
    """
    entries = load_title_manifest(manifest_path)
    prefix = href_prefix(content_dir, chapters_dir)

    filenames = sorted(
        p.name for p in Path(chapters_dir).iterdir()
        if p.suffix == ".xhtml" and p.is_file()
    )
    if len(entries) < len(filenames):
        missing = filenames[len(entries)]
        raise ManifestMismatchError(
            f"Title manifest {manifest_path} has {len(entries)} titles but there are "
            f"{len(filenames)} chapter files; no title for {missing}",
            path=Path(manifest_path),
        )

    return [
        ChapterRecord(id=name, title=entry.title, href=f"{prefix}{name}")
        for name, entry in zip(filenames, entries)
    ]
