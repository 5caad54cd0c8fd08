"""
validator/pipeline.py — potok walidacji korpusu.

Architektura:
  sources → build_document() (pula wątków, każdy plik niezależnie)
  → [bariera: wszystkie dokumenty zbudowane] → HeadingIndex (zamrożony)
  → ReferenceResolver.resolve_document() (równolegle per dokument)
  → ConsistencyChecker.run() (równolegle per przebieg)
  → build_report()

Kluczowe funkcje publiczne:
  validate_corpus(sources, config=None) -> ValidationReport
  analyze_corpus(sources, config=None)  -> CorpusAnalysis

Jedyny wyjątek potoku to RunAborted: liczba nieczytelnych plików większa
od config.max_unreadable_files przerywa budowę (oczekujące zadania są
anulowane) zanim powstanie jakikolwiek raport.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Sequence

from doc_model.documents import Document, Reference
from doc_model.issues import ValidationIssue
from md_parser.loader import SourceFile
from md_parser.parser import build_document

from .checker import ConsistencyChecker
from .config import ValidatorConfig
from .heading_index import HeadingIndex
from .report import build_report
from .resolver import ReferenceResolver
from .types import RunAborted, ValidationReport

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CorpusAnalysis:
    """Pełny graf po walidacji — dla komend, które pokazują więcej niż raport."""

    documents: list[Document]
    index: HeadingIndex
    references: list[Reference] = field(default_factory=list)
    issues: list[ValidationIssue] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Budowa dokumentów
# ---------------------------------------------------------------------------

def build_documents(
    sources: Sequence[SourceFile],
    config: ValidatorConfig,
    executor: Executor,
) -> tuple[list[Document], list[ValidationIssue]]:
    """
    Buduje dokumenty równolegle; wynik w kolejności wejścia.

    Raises:
        RunAborted: gdy nieczytelnych plików jest więcej niż próg.
    """
    futures: dict[Future, int] = {
        executor.submit(build_document, source, config.strict_numbering): i
        for i, source in enumerate(sources)
    }

    documents: dict[int, Document] = {}
    unreadable: list[ValidationIssue] = []

    for future in as_completed(futures):
        result = future.result()
        if isinstance(result, ValidationIssue):
            unreadable.append(result)
            if len(unreadable) > config.max_unreadable_files:
                for pending in futures:
                    pending.cancel()
                logger.warning(
                    "aborting: %d unreadable file(s), threshold %d",
                    len(unreadable), config.max_unreadable_files,
                )
                raise RunAborted(unreadable, config.max_unreadable_files)
        else:
            documents[futures[future]] = result

    ordered = [documents[i] for i in sorted(documents)]
    logger.info("built %d document(s), %d unreadable", len(ordered), len(unreadable))
    return ordered, unreadable


# ---------------------------------------------------------------------------
# Pełny potok
# ---------------------------------------------------------------------------

def analyze_corpus(
    sources: Sequence[SourceFile],
    config: ValidatorConfig | None = None,
) -> CorpusAnalysis:
    config = config or ValidatorConfig()

    with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
        documents, issues = build_documents(sources, config, executor)

        # Bariera: indeks powstaje dopiero po zbudowaniu wszystkich dokumentów
        # i od tej chwili jest tylko czytany.
        index = HeadingIndex.from_documents(documents)

        resolver = ReferenceResolver(index, config.reference_patterns)
        references: list[Reference] = []
        for refs, ref_issues in executor.map(resolver.resolve_document, documents):
            references.extend(refs)
            issues.extend(ref_issues)

        checker = ConsistencyChecker(documents, index, references, config)
        issues.extend(checker.run(executor))

    return CorpusAnalysis(
        documents=documents,
        index=index,
        references=references,
        issues=issues,
    )


def validate_corpus(
    sources: Sequence[SourceFile],
    config: ValidatorConfig | None = None,
) -> ValidationReport:
    """
    Waliduje korpus i zwraca posortowany raport.

    Args:
        sources: pary (ścieżka, zawartość) z warstwy wczytywania
        config:  ValidatorConfig; domyślnie wartości domyślne
    """
    analysis = analyze_corpus(sources, config)
    return build_report(
        analysis.issues,
        documents=len(analysis.documents),
        references=len(analysis.references),
    )
