"""
md_parser — parsowanie korpusu Markdown / DocC do modelu dokumentu.

Interfejs publiczny:
    collect_sources     — wczytanie plików (warstwa I/O)
    build_document      — SourceFile → Document | ValidationIssue
    parse_heading       — linia nagłówka → ParsedHeading
    find_references     — odwołania w linii prozy
    build_toc           — spis treści z numerowanych nagłówków

Typowe użycie:
    from md_parser import collect_sources, build_document

    for source in collect_sources(["Docs.docc"]):
        doc = build_document(source)
"""

from .loader import SourceFile, collect_sources
from .section_patterns import ParsedHeading, arity_matches, parse_heading, split_numeral
from .parser import build_document, parse_text
from .reference_patterns import (
    DEFAULT_REFERENCE_PATTERNS,
    ReferencePattern,
    blank_inline_code,
    find_references,
)
from .toc import TocEntry, build_toc, render_toc_markdown

__all__ = [
    "SourceFile",
    "collect_sources",
    "ParsedHeading",
    "arity_matches",
    "parse_heading",
    "split_numeral",
    "build_document",
    "parse_text",
    "DEFAULT_REFERENCE_PATTERNS",
    "ReferencePattern",
    "blank_inline_code",
    "find_references",
    "TocEntry",
    "build_toc",
    "render_toc_markdown",
]
