"""
validator/links.py — wykrywanie zerwanych linków w korpusie.

Sprawdzane linki (tylko w prozie, poza `inline code` i blokami kodu):
  [tekst](inny.md)            — dokument musi istnieć w korpusie
  [tekst](inny.md#kotwica)    — dodatkowo kotwica musi być nagłówkiem
  [tekst](#kotwica)           — kotwica w bieżącym dokumencie
  <doc:Nazwa> / <doc:Nazwa#kotwica> — linki DocC po nazwie pliku

Pomijane: schematy zewnętrzne (https:, mailto: …), obrazki ![..](..),
pliki inne niż .md oraz ścieżki wychodzące poza korzeń korpusu.
"""

from __future__ import annotations

import posixpath
import re
from pathlib import PurePosixPath
from urllib.parse import unquote

from doc_model.documents import DocPath, Document, SourceLocation
from doc_model.issues import IssueCategory, ValidationIssue, error
from md_parser.reference_patterns import blank_inline_code

from .heading_index import HeadingIndex

_MD_LINK_RE = re.compile(
    r"(?<!!)\[(?:[^\]\\]|\\.)*\]"
    r"\(\s*(?P<target><[^>]*>|[^)\s]+)(?:\s+[\"'(][^)]*[\"')])?\s*\)"
)
_DOC_LINK_RE = re.compile(r"<doc:(?P<name>[^>#\s]+)(?:#(?P<anchor>[^>\s]+))?>")
_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*:")


class LinkChecker:
    def __init__(self, index: HeadingIndex) -> None:
        self._index = index

    def check_document(self, doc: Document) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        for lineno, line in doc.iter_prose_lines():
            text = blank_inline_code(line)
            loc = SourceLocation(doc.path, lineno)
            for m in _MD_LINK_RE.finditer(text):
                msg = self._check_markdown(doc, m.group("target"))
                if msg:
                    issues.append(error(IssueCategory.BROKEN_LINK, loc, msg))
            for m in _DOC_LINK_RE.finditer(text):
                msg = self._check_docc(m.group("name"), m.group("anchor"))
                if msg:
                    issues.append(error(IssueCategory.BROKEN_LINK, loc, msg))
        return issues

    # ------------------------------------------------------------------
    # Linki Markdown
    # ------------------------------------------------------------------

    def _check_markdown(self, doc: Document, target: str) -> str | None:
        target = target.strip("<>")
        if not target or _SCHEME_RE.match(target) or target.startswith("//"):
            return None

        raw_path, _, anchor = target.partition("#")
        raw_path = unquote(raw_path)

        if not raw_path:
            if anchor and not self._index.has_anchor(doc.path, anchor):
                return f"Kotwica '#{anchor}' nie istnieje w bieżącym dokumencie."
            return None

        if PurePosixPath(raw_path).suffix.lower() != ".md":
            return None

        target_path = _resolve_relative(doc.path, raw_path)
        if target_path is None:
            return None
        if self._index.document(target_path) is None:
            return f"Link do nieistniejącego dokumentu: {target}"
        if anchor and not self._index.has_anchor(target_path, anchor):
            return f"Kotwica '#{anchor}' nie istnieje w dokumencie {'/'.join(target_path)}."
        return None

    # ------------------------------------------------------------------
    # Linki DocC
    # ------------------------------------------------------------------

    def _check_docc(self, name: str, anchor: str | None) -> str | None:
        # <doc:/documentation/Module/Page> → "Page"
        stem = name.rstrip("/").rsplit("/", 1)[-1]
        target = self._index.document_by_stem(stem)
        if target is None:
            return f"Link DocC do nieistniejącej strony: <doc:{name}>"
        if anchor and not self._index.has_anchor(target.path, anchor):
            return f"Kotwica '#{anchor}' nie istnieje na stronie {target.path_str}."
        return None


def _resolve_relative(source: DocPath, raw_path: str) -> DocPath | None:
    """Ścieżka linku względem katalogu dokumentu; None gdy wychodzi poza korpus."""
    if raw_path.startswith("/"):
        joined = raw_path.lstrip("/")
    else:
        joined = posixpath.join(*source[:-1], raw_path) if len(source) > 1 else raw_path
    normalized = posixpath.normpath(joined)
    if normalized == ".." or normalized.startswith("../"):
        return None
    return tuple(PurePosixPath(normalized).parts)
