"""book/ncx.py — Render the NCX 2005-1 table of contents."""

import html
from pathlib import Path

from models import BookMetadata, ChapterRecord


def _esc(text: str) -> str:
    return html.escape(text, quote=True)


def render_ncx(records: list[ChapterRecord], metadata: BookMetadata) -> str:
    # playOrder follows record order, which is also the OPF spine order
    nav_points = "\n".join(
        f"""    <navPoint class="chapter" id="{_esc(c.id)}" playOrder="{i}">
      <navLabel><text>{_esc(c.title)}</text></navLabel>
      <content src="{_esc(c.href)}"/>
    </navPoint>"""
        for i, c in enumerate(records, start=1)
    )

    return f"""<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE ncx PUBLIC "-//NISO//DTD ncx 2005-1//EN" "http://www.daisy.org/z3986/2005/ncx-2005-1.dtd">
<ncx version="2005-1" xml:lang="en" xmlns="http://www.daisy.org/z3986/2005/ncx/">
  <head>
    <meta name="dtb:uid" content="{_esc(metadata.identifier)}"/>
    <meta name="dtb:depth" content="1"/>
    <meta name="dtb:totalPageCount" content="0"/>
    <meta name="dtb:maxPageNumber" content="0"/>
  </head>

  <docTitle>
    <text>{_esc(metadata.title)}</text>
  </docTitle>

  <docAuthor>
    <text>{_esc(metadata.author)}</text>
  </docAuthor>

  <navMap>
{nav_points}
  </navMap>
</ncx>
"""


def write_ncx(records: list[ChapterRecord], metadata: BookMetadata, content_dir: Path) -> Path:
    out = Path(content_dir) / metadata.ncx_filename
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(render_ncx(records, metadata), encoding="utf-8")
    return out
