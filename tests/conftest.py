import json
from pathlib import Path

import pytest

from models import BookMetadata

BOOK_ID = "urn:uuid:af4f5de9-3468-4eb3-b847-055283ed17da"


def chapter_page(title: str, paragraphs: list[str], heading_class: str = "entry-title") -> str:
    body = "".join(paragraphs)
    return (
        "<!DOCTYPE html><html><head><title>site</title></head><body>"
        f'<article><header><h1 class="{heading_class}">{title}</h1></header>'
        f'<div class="entry-content">{body}</div></article>'
        "</body></html>"
    )


def write_chapter(cache_dir: Path, name: str, title: str, body: str) -> Path:
    path = cache_dir / name
    path.write_text(
        chapter_page(title, ["<p>Prev</p>", body, "<p>Next</p>"]),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def cache_dir(tmp_path):
    d = tmp_path / "cache"
    d.mkdir()
    for n in (1, 2, 3):
        write_chapter(d, f"{n:03d}.html", f"Ch {n}", f"<p>Body {n}</p>")
    return d


@pytest.fixture
def metadata():
    return BookMetadata(
        title="A Practical Guide to Evil",
        author="EraticErrata",
        publisher="stormbeta",
        identifier=BOOK_ID,
        description="The Empire stands triumphant.",
    )


@pytest.fixture
def titles_file(tmp_path):
    path = tmp_path / "chapters.json"
    path.write_text(json.dumps([{"title": "One"}, {"title": "Two"}, {"title": "Three"}]))
    return path


@pytest.fixture
def scaffold_dir(tmp_path):
    d = tmp_path / "scaffolding"
    (d / "META-INF").mkdir(parents=True)
    (d / "OEBPS").mkdir()
    (d / "mimetype").write_text("application/epub+zip")
    (d / "META-INF" / "container.xml").write_text("<container/>")
    (d / "OEBPS" / "cover.xhtml").write_text("<html/>")
    (d / "OEBPS" / "cover.png").write_bytes(b"\x89PNG")
    (d / "OEBPS" / "Thumbs.db").write_bytes(b"junk")
    return d
