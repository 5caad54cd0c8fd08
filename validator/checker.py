"""
validator/checker.py — sprawdzanie spójności grafu dokumentów.

ConsistencyChecker.run(executor=None) -> list[ValidationIssue]

Przebiegi (niezależne, kolejność bez znaczenia — każdy tylko czyta graf):
  1 — numeracja        (rodzeństwo rosnąco, zgodność numeru z głębokością)
  2 — duplikaty        (ten sam numer sekcji w całym korpusie)
  3 — odwołania        (nierozwiązane → DanglingReference)
  4 — bloki kodu       (brak tagu języka, niezamknięty płotek)
  5 — sieroty          (numer > 1 poziomu bez rodzica w korpusie)
  6 — linki            (Markdown / DocC; wyłączalne w konfiguracji)
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor
from typing import Callable, Sequence, TypeAlias

from doc_model.documents import (
    Document,
    NumericPath,
    Reference,
    SourceLocation,
    format_numeric_path,
)
from doc_model.issues import IssueCategory, ValidationIssue, error, warning

from .config import ValidatorConfig
from .heading_index import HeadingIndex
from .links import LinkChecker

logger = logging.getLogger(__name__)

CheckPass: TypeAlias = Callable[[], list[ValidationIssue]]


class ConsistencyChecker:
    """
    Użycie:
        checker = ConsistencyChecker(documents, index, references, config)
        issues  = checker.run()
    """

    def __init__(
        self,
        documents: Sequence[Document],
        index: HeadingIndex,
        references: Sequence[Reference],
        config: ValidatorConfig | None = None,
    ) -> None:
        self._documents  = tuple(documents)
        self._index      = index
        self._references = tuple(references)
        self._config     = config or ValidatorConfig()

    # ------------------------------------------------------------------
    # Publiczny interfejs
    # ------------------------------------------------------------------

    def passes(self) -> list[CheckPass]:
        result: list[CheckPass] = [
            self.check_numbering,
            self.check_duplicates,
            self.check_dangling,
            self.check_code_blocks,
            self.check_orphans,
        ]
        if self._config.check_links:
            result.append(self.check_links)
        return result

    def run(self, executor: Executor | None = None) -> list[ValidationIssue]:
        """Uruchamia wszystkie przebiegi; z executorem — równolegle."""
        if executor is None:
            results = [p() for p in self.passes()]
        else:
            futures = [executor.submit(p) for p in self.passes()]
            results = [f.result() for f in futures]
        issues = [i for r in results for i in r]
        logger.debug("consistency checker: %d issue(s)", len(issues))
        return issues

    # ------------------------------------------------------------------
    # 1 — numeracja
    # ------------------------------------------------------------------

    def check_numbering(self) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        strict = self._config.strict_numbering
        for doc in self._documents:
            # prefiks rodzica → ostatni numer rodzeństwa
            last_sibling: dict[NumericPath, int] = {}
            for h in doc.numbered_headings():
                path = h.numeric_path
                parent, n = path[:-1], path[-1]
                prev = last_sibling.get(parent)
                if prev is not None and n <= prev:
                    issues.append(error(
                        IssueCategory.NON_MONOTONIC_NUMBERING,
                        h.location,
                        (
                            f"Numer {format_numeric_path(path)} nie rośnie względem "
                            f"poprzedniego rodzeństwa {format_numeric_path(parent + (prev,))}."
                        ),
                    ))
                last_sibling[parent] = n

                if not h.arity_ok:
                    make = error if strict else warning
                    issues.append(make(
                        IssueCategory.NON_MONOTONIC_NUMBERING,
                        h.location,
                        (
                            f"Numer {format_numeric_path(path)} ma {len(path)} poziom(y), "
                            f"a nagłówek ma głębokość {h.depth}."
                        ),
                    ))
        return issues

    # ------------------------------------------------------------------
    # 2 — duplikaty numerów
    # ------------------------------------------------------------------

    def check_duplicates(self) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        for path, headings in self._index.numeric_paths():
            if len(headings) < 2:
                continue
            first = headings[0]
            for dup in headings[1:]:
                issues.append(error(
                    IssueCategory.DUPLICATE_HEADING_ID,
                    dup.location,
                    (
                        f"Numer sekcji {format_numeric_path(path)} jest już "
                        f"zadeklarowany w {first.location}."
                    ),
                    related=(first.location, dup.location),
                ))
        return issues

    # ------------------------------------------------------------------
    # 3 — nierozwiązane odwołania
    # ------------------------------------------------------------------

    def check_dangling(self) -> list[ValidationIssue]:
        return [
            error(
                IssueCategory.DANGLING_REFERENCE,
                ref.location,
                f"Odwołanie {ref.target_label} nie wskazuje żadnego nagłówka w korpusie.",
            )
            for ref in self._references
            if ref.resolved_target is None
        ]

    # ------------------------------------------------------------------
    # 4 — bloki kodu
    # ------------------------------------------------------------------

    def check_code_blocks(self) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        for doc in self._documents:
            for block in doc.code_blocks:
                loc = SourceLocation(doc.path, block.start_line)
                if not block.language:
                    issues.append(warning(
                        IssueCategory.MISSING_CODE_LANGUAGE,
                        loc,
                        f"Blok kodu bez tagu języka (sekcja: {block.section.label}).",
                    ))
                if not block.closed:
                    issues.append(warning(
                        IssueCategory.UNCLOSED_CODE_FENCE,
                        loc,
                        "Płotek bloku kodu nie został zamknięty do końca pliku.",
                    ))
        return issues

    # ------------------------------------------------------------------
    # 5 — sieroty
    # ------------------------------------------------------------------

    def check_orphans(self) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        for h in self._index.headings:
            path = h.numeric_path
            if path is None or len(path) < 2:
                continue
            parent = path[:-1]
            if not self._index.has_path(parent):
                issues.append(warning(
                    IssueCategory.ORPHANED_HEADING,
                    h.location,
                    (
                        f"Sekcja {format_numeric_path(path)} nie ma rodzica "
                        f"{format_numeric_path(parent)} w korpusie."
                    ),
                ))
        return issues

    # ------------------------------------------------------------------
    # 6 — linki
    # ------------------------------------------------------------------

    def check_links(self) -> list[ValidationIssue]:
        links = LinkChecker(self._index)
        return [i for doc in self._documents for i in links.check_document(doc)]
