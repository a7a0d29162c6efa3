"""book/archive.py — Zip an assembled book directory into an .epub file."""

import zipfile
from pathlib import Path

from book.scaffold import IGNORED_NAMES

MIMETYPE = "application/epub+zip"
# Fixed entry timestamp so the same tree always yields the same bytes
ZIP_DATE_TIME = (1980, 1, 1, 0, 0, 0)


def _entry(name: str, compress_type: int) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(name, date_time=ZIP_DATE_TIME)
    info.compress_type = compress_type
    info.external_attr = 0o644 << 16
    return info


def write_epub(book_dir: Path, epub_path: Path) -> Path:
    """
    Package book_dir as an EPUB. The mimetype entry must come first and be
    stored uncompressed; everything else follows in sorted path order.
    """
    book_dir = Path(book_dir)
    epub_path = Path(epub_path)
    epub_path.parent.mkdir(parents=True, exist_ok=True)

    mimetype_file = book_dir / "mimetype"
    mimetype = mimetype_file.read_bytes().strip() if mimetype_file.is_file() else MIMETYPE.encode("ascii")

    target = epub_path.resolve()
    files = sorted(
        (
            p for p in book_dir.rglob("*")
            if p.is_file() and p.name not in IGNORED_NAMES and p.resolve() != target
        ),
        key=lambda p: p.relative_to(book_dir).as_posix(),
    )

    with zipfile.ZipFile(epub_path, "w") as zf:
        zf.writestr(_entry("mimetype", zipfile.ZIP_STORED), mimetype)
        for p in files:
            arcname = p.relative_to(book_dir).as_posix()
            if arcname == "mimetype":
                continue
            zf.writestr(_entry(arcname, zipfile.ZIP_DEFLATED), p.read_bytes())
    return epub_path
