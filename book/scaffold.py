"""book/scaffold.py — Copy the static book skeleton into the output directory."""

import shutil
from pathlib import Path

# Windows keeps Thumbs.db locked much of the time, which breaks the copy.
IGNORED_NAMES = {"Thumbs.db"}


def _ignore(_dir: str, names: list[str]) -> set[str]:
    return {n for n in names if n in IGNORED_NAMES}


def copy_scaffold(scaffolding_dir: Path, book_dir: Path) -> Path:
    """Recursively copy scaffolding_dir over book_dir, overwriting existing files."""
    return Path(shutil.copytree(
        scaffolding_dir, book_dir, ignore=_ignore, dirs_exist_ok=True,
    ))
