"""book/ — Assemble the EPUB package files around the converted chapters."""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from book.chapters import derive_chapter_records
from book.ncx import write_ncx
from book.opf import write_opf
from book.scaffold import copy_scaffold
from models import BookMetadata


def assemble(
    scaffolding_dir: Path,
    book_dir: Path,
    content_dir: Path,
    chapters_dir: Path,
    manifest_path: Path,
    metadata: BookMetadata,
) -> None:
    """
    Copy the scaffold while the OPF and NCX are derived and written.
    Returns once all three have finished; raises the first failure otherwise.
    """
    with ThreadPoolExecutor(max_workers=3) as ex:
        futures = [ex.submit(copy_scaffold, scaffolding_dir, book_dir)]
        records = derive_chapter_records(content_dir, chapters_dir, manifest_path)
        futures.append(ex.submit(write_opf, records, metadata, content_dir))
        futures.append(ex.submit(write_ncx, records, metadata, content_dir))

    for future in futures:
        future.result()
    print(f"Packaged {len(records)} chapters into {content_dir}")
