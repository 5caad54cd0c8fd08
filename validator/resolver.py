"""
validator/resolver.py — rozwiązywanie odwołań między sekcjami korpusu.

ReferenceResolver.resolve_document(doc) -> (references, issues)

Kolejność rozwiązywania:
  1. dokładny numer sekcji ("see 12.4.2")
  2. tytuł bez rozróżniania wielkości liter (fragment w cudzysłowie)
  3. brak dopasowania → resolved_target=None (DanglingReference zgłasza checker)

Niejednoznaczny tytuł rozwiązuje się do pierwszego nagłówka w kolejności
(ścieżka dokumentu, linia) i dodatkowo daje ostrzeżenie AmbiguousReference.
Resolver tylko czyta zamrożony HeadingIndex — można go wołać równolegle.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Sequence

from doc_model.documents import Document, Reference
from doc_model.issues import IssueCategory, ValidationIssue, warning
from md_parser.reference_patterns import (
    DEFAULT_REFERENCE_PATTERNS,
    ReferencePattern,
    find_references,
)

from .heading_index import HeadingIndex

logger = logging.getLogger(__name__)

# Ile kandydatów wypisać w komunikacie o niejednoznaczności
_MAX_LISTED_CANDIDATES = 3


class ReferenceResolver:
    """
    Użycie:
        index    = HeadingIndex.from_documents(documents)
        resolver = ReferenceResolver(index)
        refs, issues = resolver.resolve_document(doc)
    """

    def __init__(
        self,
        index: HeadingIndex,
        patterns: Sequence[ReferencePattern] = DEFAULT_REFERENCE_PATTERNS,
    ) -> None:
        self._index = index
        self._patterns = tuple(patterns)

    # ------------------------------------------------------------------
    # Publiczny interfejs
    # ------------------------------------------------------------------

    def scan(self, doc: Document) -> list[Reference]:
        """Znajduje odwołania w prozie dokumentu (bez rozwiązywania)."""
        refs: list[Reference] = []
        for lineno, line in doc.iter_prose_lines():
            refs.extend(find_references(doc.path, lineno, line, self._patterns))
        return refs

    def resolve(self, ref: Reference) -> tuple[Reference, ValidationIssue | None]:
        # 1 — numer sekcji
        if ref.target_path is not None:
            matches = self._index.lookup_by_path(ref.target_path)
            if matches:
                return dataclasses.replace(ref, resolved_target=matches[0]), None

        # 2 — tytuł
        if ref.target_title:
            matches = self._index.match_title(ref.target_title)
            if len(matches) == 1:
                return dataclasses.replace(ref, resolved_target=matches[0]), None
            if len(matches) > 1:
                chosen = matches[0]
                listed = ", ".join(
                    f"{h.location} ({h.label})" for h in matches[:_MAX_LISTED_CANDIDATES]
                )
                if len(matches) > _MAX_LISTED_CANDIDATES:
                    listed += f", … (+{len(matches) - _MAX_LISTED_CANDIDATES})"
                issue = warning(
                    IssueCategory.AMBIGUOUS_REFERENCE,
                    ref.location,
                    (
                        f"Odwołanie {ref.target_label} pasuje do {len(matches)} nagłówków: "
                        f"{listed}; wybrano {chosen.location}."
                    ),
                    related=tuple(h.location for h in matches),
                )
                return dataclasses.replace(ref, resolved_target=chosen), issue

        # 3 — brak dopasowania
        return ref, None

    def resolve_document(self, doc: Document) -> tuple[list[Reference], list[ValidationIssue]]:
        resolved: list[Reference] = []
        issues: list[ValidationIssue] = []
        for ref in self.scan(doc):
            ref, issue = self.resolve(ref)
            resolved.append(ref)
            if issue is not None:
                issues.append(issue)
        logger.debug(
            "%s: %d reference(s), %d unresolved",
            doc.path_str, len(resolved),
            sum(1 for r in resolved if r.resolved_target is None),
        )
        return resolved, issues
