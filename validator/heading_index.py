"""
validator/heading_index.py — indeks nagłówków całego korpusu.

HeadingIndex jest budowany raz, po zbudowaniu wszystkich dokumentów
(bariera synchronizacji w potoku), a potem tylko czytany — równolegle
przez resolver, checker i link checker, bez blokad.

Słowniki:
  _by_path:    numeric_path → nagłówki (kolejność: ścieżka dokumentu, linia)
  _documents:  doc_path     → Document
  _by_stem:    nazwa pliku bez .md → pierwszy dokument (linki <doc:...>)
  _anchors:    doc_path     → kotwice nagłówków dokumentu
"""

from __future__ import annotations

import logging
from collections import defaultdict
from pathlib import PurePosixPath
from types import MappingProxyType
from typing import Iterable, Mapping

from doc_model.anchors import normalize_anchor
from doc_model.documents import DocPath, Document, Heading, NumericPath

logger = logging.getLogger(__name__)


def _heading_key(h: Heading) -> tuple[DocPath, int]:
    return (h.doc_path, h.line)


class HeadingIndex:
    """
    Zamrożony indeks nagłówków do wyszukiwania przez resolver i checker.

    Atrybuty publiczne:
      headings — krotka wszystkich nagłówków (bez syntetycznych korzeni),
                 posortowana po (ścieżka dokumentu, linia)
    """

    def __init__(self, documents: Iterable[Document]) -> None:
        docs = sorted(documents, key=lambda d: d.path)

        by_path: dict[NumericPath, list[Heading]] = defaultdict(list)
        by_stem: dict[str, Document] = {}
        anchors: dict[DocPath, frozenset[str]] = {}
        all_headings: list[Heading] = []

        for doc in docs:
            for h in doc.headings:
                all_headings.append(h)
                if h.numeric_path is not None:
                    by_path[h.numeric_path].append(h)
            by_stem.setdefault(PurePosixPath(doc.path[-1]).stem.casefold(), doc)
            anchors[doc.path] = frozenset(doc.heading_anchors().values())

        self.headings: tuple[Heading, ...] = tuple(sorted(all_headings, key=_heading_key))
        self._by_path: Mapping[NumericPath, tuple[Heading, ...]] = MappingProxyType({
            k: tuple(sorted(v, key=_heading_key)) for k, v in by_path.items()
        })
        self._documents: Mapping[DocPath, Document] = MappingProxyType({d.path: d for d in docs})
        self._by_stem: Mapping[str, Document] = MappingProxyType(by_stem)
        self._anchors: Mapping[DocPath, frozenset[str]] = MappingProxyType(anchors)

        logger.debug(
            "heading index: %d headings, %d numeric ids, %d documents",
            len(self.headings), len(self._by_path), len(self._documents),
        )

    # ------------------------------------------------------------------
    # Lookup — numery sekcji
    # ------------------------------------------------------------------

    def lookup_by_path(self, path: NumericPath) -> tuple[Heading, ...]:
        """Nagłówki o danym numerze (może być więcej niż jeden przy duplikatach)."""
        return self._by_path.get(path, ())

    def has_path(self, path: NumericPath) -> bool:
        return path in self._by_path

    def numeric_paths(self) -> Iterable[tuple[NumericPath, tuple[Heading, ...]]]:
        """Pary (numer, nagłówki) posortowane po numerze."""
        return sorted(self._by_path.items())

    # ------------------------------------------------------------------
    # Lookup — tytuły
    # ------------------------------------------------------------------

    def match_title(self, fragment: str) -> tuple[Heading, ...]:
        """
        Dopasowanie tytułu bez rozróżniania wielkości liter.

        Jeśli dokładnie jeden nagłówek ma tytuł (lub etykietę "11.2 Tytuł")
        równy fragmentowi, zwraca tylko jego. W przeciwnym razie zwraca
        wszystkie nagłówki zawierające fragment, w kolejności indeksu.
        """
        needle = fragment.strip().casefold()
        if not needle:
            return ()
        exact = tuple(
            h for h in self.headings
            if h.title.casefold() == needle or h.label.casefold() == needle
        )
        if len(exact) == 1:
            return exact
        return tuple(h for h in self.headings if needle in h.label.casefold())

    # ------------------------------------------------------------------
    # Lookup — dokumenty i kotwice (linki)
    # ------------------------------------------------------------------

    def document(self, path: DocPath) -> Document | None:
        return self._documents.get(path)

    def document_by_stem(self, stem: str) -> Document | None:
        return self._by_stem.get(stem.casefold())

    def has_anchor(self, path: DocPath, anchor: str) -> bool:
        return normalize_anchor(anchor) in self._anchors.get(path, frozenset())

    # ------------------------------------------------------------------
    # Konstruktory fabryczne
    # ------------------------------------------------------------------

    @classmethod
    def from_documents(cls, documents: Iterable[Document]) -> "HeadingIndex":
        return cls(documents)
