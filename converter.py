"""converter.py — Turn cached chapter pages into standalone XHTML documents."""

import html
from concurrent.futures import ThreadPoolExecutor, as_completed
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag
from bs4.element import PreformattedString
from tqdm import tqdm

from errors import ParseError, StructureError
from models import ChapterContentDocument, ChapterSource

DEFAULT_JOBS = 10
TITLE_SELECTOR = "h1.entry-title"
CONTENT_SELECTOR = ".entry-content"
UNSAFE_TAGS = ["script", "style"]
DECLARED_PREFIXES = {"xml", "xmlns", "xlink"}

CHAPTER_TEMPLATE = """<?xml version="1.0" encoding="UTF-8" ?>
<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.1//EN" "http://www.w3.org/TR/xhtml11/DTD/xhtml11.dtd">
<html xmlns="http://www.w3.org/1999/xhtml" xmlns:xlink="http://www.w3.org/1999/xlink" xml:lang="en">
  <head>
    <meta http-equiv="Content-Type" content="application/xhtml+xml; charset=utf-8" />
    <title>{title}</title>
  </head>
  <body>
    <h1>{title}</h1>

    {body}
  </body>
</html>"""


@dataclass
class ParsedChapterDocument:
    soup: BeautifulSoup
    title: Tag
    content: Tag


def list_chapter_sources(cache_dir: Path) -> list[ChapterSource]:
    """Return every cached ``.html`` page in cache_dir, sorted by filename."""
    cache_dir = Path(cache_dir).resolve()
    return [
        ChapterSource(path=p)
        for p in sorted(cache_dir.iterdir(), key=lambda p: p.name)
        if p.name.endswith(".html")
    ]


@contextmanager
def open_chapter_document(text: str, source: ChapterSource):
    """
    Parse a chapter page and yield its title heading and content container.
    The parse tree is decomposed on exit, whether or not the caller raised.
    """
    if not text.strip():
        raise ParseError(f"{source.filename}: file is empty", path=source.path)
    try:
        soup = BeautifulSoup(text, "lxml")
    except ParserRejectedMarkup as e:
        raise ParseError(f"{source.filename}: {e}", path=source.path) from e

    try:
        title = soup.select_one(TITLE_SELECTOR)
        if title is None:
            raise StructureError(
                f"{source.filename}: no element matches {TITLE_SELECTOR!r}",
                path=source.path,
            )
        content = soup.select_one(CONTENT_SELECTOR)
        if content is None:
            raise StructureError(
                f"{source.filename}: no element matches {CONTENT_SELECTOR!r}",
                path=source.path,
            )
        yield ParsedChapterDocument(soup=soup, title=title, content=content)
    finally:
        soup.decompose()


def clean_content(content: Tag, source: ChapterSource) -> Tag:
    """Drop the previous/next chapter links and redundant dir="ltr" attributes."""
    children = content.find_all(recursive=False)
    if len(children) < 2:
        raise StructureError(
            f"{source.filename}: content container has {len(children)} element "
            "children, expected the previous/next chapter links around the body",
            path=source.path,
        )
    children[0].decompose()
    children[-1].decompose()

    for child in children[1:-1]:
        if child.get("dir") == "ltr":
            del child["dir"]
    return content


def make_xml_safe(content: Tag) -> Tag:
    """
    Remove what the HTML serializer would write out as malformed XML: script
    and style bodies, comments and other markup declarations, and names with
    an undeclared namespace prefix (e.g. Word's <o:p>).
    """
    for tag in content.find_all(UNSAFE_TAGS):
        tag.decompose()
    for node in content.find_all(string=lambda s: isinstance(s, PreformattedString)):
        node.extract()
    for tag in content.find_all(True):
        if ":" in tag.name:
            tag.unwrap()
            continue
        for attr in list(tag.attrs):
            prefix, sep, _ = attr.partition(":")
            if sep and prefix not in DECLARED_PREFIXES:
                del tag[attr]
    return content


def render_chapter(title: str, body: str) -> str:
    # body is already serialized markup and goes in verbatim
    return CHAPTER_TEMPLATE.format(title=html.escape(title), body=body)


def convert_one(source: ChapterSource, content_dir: Path) -> ChapterContentDocument:
    """Convert one cached page and write <basename>.xhtml into content_dir."""
    raw = source.path.read_bytes()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(f"{source.filename}: not valid UTF-8 ({e})", path=source.path) from e

    with open_chapter_document(text, source) as doc:
        title = doc.title.get_text()
        body = make_xml_safe(clean_content(doc.content, source)).decode_contents(formatter="minimal")
        output = render_chapter(title, body)

    output_path = Path(content_dir) / f"{source.path.stem}.xhtml"
    output_path.write_text(output, encoding="utf-8")
    return ChapterContentDocument(title=title, body=body, output_path=output_path)


def convert_all(
    cache_dir: Path,
    content_dir: Path,
    show_progress: bool = True,
) -> list[ChapterContentDocument]:
    """
    Convert every cached chapter with at most DEFAULT_JOBS conversions in flight.

    All submitted conversions run to completion. If any failed, the failures
    are listed and the first one (in filename order) is re-raised.
    """
    sources = list_chapter_sources(cache_dir)
    content_dir = Path(content_dir)
    content_dir.mkdir(parents=True, exist_ok=True)
    print(f"Converting {len(sources)} chapters from {cache_dir}")

    with ThreadPoolExecutor(max_workers=DEFAULT_JOBS) as ex:
        futures = [ex.submit(convert_one, source, content_dir) for source in sources]
        with tqdm(total=len(futures), desc="  Converting", unit="chapter",
                  disable=not show_progress) as pbar:
            for _ in as_completed(futures):
                pbar.update(1)

    documents = []
    errors: list[tuple[ChapterSource, BaseException]] = []
    for source, future in zip(sources, futures):
        err = future.exception()
        if err is not None:
            errors.append((source, err))
        else:
            documents.append(future.result())

    if errors:
        print(f"\n{len(errors)} chapters failed to convert.")
        for source, err in errors:
            print(f"    {source.filename} -> {err}")
        raise errors[0][1]

    print("All chapters converted")
    return documents
