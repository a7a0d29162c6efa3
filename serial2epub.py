#!/usr/bin/env python3
"""
serial2epub — Assemble an EPUB from a cache of downloaded web-serial chapters.

Inputs:
  - a cache directory of chapter pages (*.html), one per chapter
  - a JSON array of {"title": ...} objects, in chapter filename order
  - a scaffolding directory (mimetype, META-INF/, OEBPS/cover.*, stylesheet)
  - a book.json with title, author, publisher, identifier and description

Quick start:
  1. Put default directories in .env (SERIAL2EPUB_CACHE_DIR=cache, ...)
  2. python serial2epub.py books/pgte.json
  3. python serial2epub.py books/pgte.json --epub out/pgte.epub
"""

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert cached web-serial chapters into an EPUB book",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert chapters and lay out the book directory:
  python serial2epub.py book.json --cache cache/ --titles chapters.json --output book/

  # Re-package only (chapters already converted):
  python serial2epub.py book.json --skip-convert

  # Also zip the result:
  python serial2epub.py book.json --epub out/book.epub
        """,
    )
    parser.add_argument("book_config", type=Path, help="Path to the book.json metadata file")
    parser.add_argument(
        "--cache", type=Path, metavar="DIR",
        default=Path(os.getenv("SERIAL2EPUB_CACHE_DIR", "cache")),
        help="Directory of downloaded chapter pages (default: ./cache)",
    )
    parser.add_argument(
        "--scaffold", type=Path, metavar="DIR",
        default=Path(os.getenv("SERIAL2EPUB_SCAFFOLD_DIR", "scaffolding")),
        help="Static book skeleton to copy (default: ./scaffolding)",
    )
    parser.add_argument(
        "--titles", type=Path, metavar="FILE",
        default=Path(os.getenv("SERIAL2EPUB_TITLES", "chapters.json")),
        help="JSON array of chapter titles (default: ./chapters.json)",
    )
    parser.add_argument(
        "--output", type=Path, metavar="DIR",
        default=Path(os.getenv("SERIAL2EPUB_OUTPUT_DIR", "book")),
        help="Book output directory (default: ./book)",
    )
    parser.add_argument(
        "--epub", type=Path, default=None, metavar="FILE",
        help="Also write a zipped .epub to this path",
    )
    parser.add_argument(
        "--skip-convert", action="store_true",
        help="Reuse chapters already converted into the output directory",
    )
    return parser.parse_args(argv)


def check_inputs(args: argparse.Namespace) -> list[str]:
    problems = []
    if not args.skip_convert and not args.cache.is_dir():
        problems.append(f"Cache directory not found: {args.cache}")
    if not args.scaffold.is_dir():
        problems.append(f"Scaffolding directory not found: {args.scaffold}")
    if not args.titles.is_file():
        problems.append(f"Title manifest not found: {args.titles}")
    return problems


def main(argv: list[str] | None = None):
    load_dotenv()
    args = parse_args(argv)

    from book import assemble
    from book.archive import write_epub
    from config import book_paths, load_book_metadata
    from converter import convert_all
    from errors import Serial2EpubError

    problems = check_inputs(args)
    if problems:
        for problem in problems:
            print(f"ERROR: {problem}")
        sys.exit(1)

    paths = book_paths(args.output)

    try:
        metadata = load_book_metadata(args.book_config)
        print(f"Title:  {metadata.title}")
        print(f"Author: {metadata.author}")
        print()

        if args.skip_convert:
            print("=== Phase 1: Skipped (--skip-convert) ===\n")
        else:
            print("=== Phase 1: Converting chapters ===\n")
            convert_all(args.cache, paths["chapters_dir"])
            print()

        print("=== Phase 2: Assembling book ===\n")
        assemble(
            args.scaffold,
            paths["book_dir"],
            paths["content_dir"],
            paths["chapters_dir"],
            args.titles,
            metadata,
        )

        if args.epub:
            print("\n=== Phase 3: Writing EPUB ===\n")
            write_epub(paths["book_dir"], args.epub)
            print(f"  EPUB written: {args.epub}")
    except (Serial2EpubError, OSError) as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    print(f"\nDone! Book assembled in: {paths['book_dir']}")


if __name__ == "__main__":
    main()
