"""book/opf.py — Render the OPF 2.0 package document (metadata, manifest, spine)."""

import html
from pathlib import Path

from models import BookMetadata, ChapterRecord

OPF_FILENAME = "content.opf"
LANGUAGE = "en"


def _esc(text: str) -> str:
    return html.escape(text, quote=True)


def render_opf(records: list[ChapterRecord], metadata: BookMetadata) -> str:
    manifest_chapters = "\n".join(
        f'    <item id="{_esc(c.id)}" href="{_esc(c.href)}" media-type="application/xhtml+xml"/>'
        for c in records
    )
    spine_chapters = "\n".join(
        f'    <itemref idref="{_esc(c.id)}"/>'
        for c in records
    )
    author = _esc(metadata.author)
    cover_xhtml = _esc(metadata.cover_xhtml_filename)

    return f"""<?xml version="1.0" encoding="UTF-8"?>
<package version="2.0" xmlns="http://www.idpf.org/2007/opf" unique-identifier="BookId">

  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/" xmlns:opf="http://www.idpf.org/2007/opf">
    <dc:title>{_esc(metadata.title)}</dc:title>
    <dc:language>{LANGUAGE}</dc:language>
    <dc:identifier id="BookId" opf:scheme="UUID">{_esc(metadata.identifier)}</dc:identifier>
    <dc:creator opf:file-as="{author}" opf:role="aut">{author}</dc:creator>
    <dc:publisher>{_esc(metadata.publisher)}</dc:publisher>
    <dc:description>{_esc(metadata.description)}</dc:description>
    <meta name="cover" content="cover-image"/>
  </metadata>

  <manifest>
    <item id="ncx" href="{_esc(metadata.ncx_filename)}" media-type="application/x-dtbncx+xml"/>
    <item id="cover" href="{cover_xhtml}" media-type="application/xhtml+xml"/>
    <item id="cover-image" href="{_esc(metadata.cover_image_filename)}" media-type="{_esc(metadata.cover_mimetype)}"/>
{manifest_chapters}
  </manifest>

  <spine toc="ncx">
    <itemref idref="cover" linear="no"/>
{spine_chapters}
  </spine>

  <guide>
    <reference type="cover" title="Cover" href="{cover_xhtml}"/>
  </guide>
</package>
"""


def write_opf(records: list[ChapterRecord], metadata: BookMetadata, content_dir: Path) -> Path:
    out = Path(content_dir) / OPF_FILENAME
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(render_opf(records, metadata), encoding="utf-8")
    return out
