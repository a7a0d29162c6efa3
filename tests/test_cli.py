import json
import zipfile

import pytest

from conftest import BOOK_ID
from serial2epub import main


@pytest.fixture
def book_config(tmp_path):
    path = tmp_path / "book.json"
    path.write_text(json.dumps({
        "title": "Test Serial",
        "author": "Someone",
        "publisher": "Nobody",
        "identifier": BOOK_ID,
        "description": "A test.",
    }))
    return path


def test_main_builds_book_and_epub(tmp_path, cache_dir, scaffold_dir, titles_file, book_config):
    out = tmp_path / "book"
    epub = tmp_path / "test.epub"
    main([
        str(book_config),
        "--cache", str(cache_dir),
        "--scaffold", str(scaffold_dir),
        "--titles", str(titles_file),
        "--output", str(out),
        "--epub", str(epub),
    ])

    assert sorted(p.name for p in (out / "OEBPS" / "chapters").iterdir()) == [
        "001.xhtml", "002.xhtml", "003.xhtml",
    ]
    assert (out / "OEBPS" / "content.opf").exists()
    assert (out / "OEBPS" / "toc.ncx").exists()
    with zipfile.ZipFile(epub) as zf:
        assert zf.namelist()[0] == "mimetype"
        assert "OEBPS/chapters/002.xhtml" in zf.namelist()


def test_main_exits_on_missing_inputs(tmp_path, book_config, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([
            str(book_config),
            "--cache", str(tmp_path / "nope"),
            "--scaffold", str(tmp_path / "nope"),
            "--titles", str(tmp_path / "nope.json"),
            "--output", str(tmp_path / "book"),
        ])
    assert excinfo.value.code == 1
    assert "Cache directory not found" in capsys.readouterr().out


def test_main_exits_on_conversion_failure(tmp_path, cache_dir, scaffold_dir, titles_file, book_config, capsys):
    (cache_dir / "002.html").write_text("<html><body><p>no heading</p></body></html>")
    with pytest.raises(SystemExit) as excinfo:
        main([
            str(book_config),
            "--cache", str(cache_dir),
            "--scaffold", str(scaffold_dir),
            "--titles", str(titles_file),
            "--output", str(tmp_path / "book"),
        ])
    assert excinfo.value.code == 1
    assert "ERROR: 002.html" in capsys.readouterr().out
