"""
md_parser/toc.py — spis treści z numerowanych nagłówków korpusu.

  build_toc(documents, max_depth=None) -> list[TocEntry]
  render_toc_markdown(entries) -> str

Kolejność: ścieżka dokumentu, potem linia. Wcięcie wynika z długości
numeru sekcji ("11" → poziom 1, "11.2.3" → poziom 3), nie z liczby '#'.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from doc_model.documents import Document, Heading


@dataclass(frozen=True, slots=True)
class TocEntry:
    heading: Heading
    level: int
    href: str


def build_toc(documents: Iterable[Document], max_depth: int | None = None) -> list[TocEntry]:
    entries: list[TocEntry] = []
    for doc in sorted(documents, key=lambda d: d.path):
        anchors = doc.heading_anchors()
        for h in doc.numbered_headings():
            level = len(h.numeric_path)
            if max_depth is not None and level > max_depth:
                continue
            entries.append(TocEntry(
                heading=h,
                level=level,
                href=f"{doc.path_str}#{anchors[h.line]}",
            ))
    return entries


def render_toc_markdown(entries: Iterable[TocEntry], title: str | None = None) -> str:
    lines: list[str] = []
    if title:
        lines += [f"# {title}", ""]
    for e in entries:
        indent = "  " * (e.level - 1)
        lines.append(f"{indent}- [{e.heading.label}]({e.href})")
    return "\n".join(lines) + "\n"
