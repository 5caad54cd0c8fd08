"""
validator — walidator spójności korpusu dokumentacji (graf dokumentów).

Interfejs publiczny:
    validate_corpus    — pełny potok: dokumenty → indeks → odwołania → raport
    analyze_corpus     — to samo, ale zwraca cały graf (CorpusAnalysis)
    ValidatorConfig    — konfiguracja przekazywana jawnie
    HeadingIndex       — zamrożony indeks nagłówków korpusu
    ReferenceResolver  — rozwiązywanie odwołań "see 11.2"
    ConsistencyChecker — przebiegi 1–6
    ValidationReport, RunAborted, ConfigError — typy wyniku

Typowe użycie:
    from md_parser import collect_sources
    from validator import ValidatorConfig, validate_corpus, render_text

    sources = collect_sources(["Docs.docc"])
    report  = validate_corpus(sources, ValidatorConfig(strict_numbering=True))
    print(render_text(report))
    raise SystemExit(report.exit_status)
"""

from .types import (
    EXIT_ABORTED,
    EXIT_ERRORS,
    EXIT_OK,
    ConfigError,
    RunAborted,
    ValidationReport,
)
from .config import DEFAULT_MAX_UNREADABLE_FILES, ValidatorConfig
from .heading_index import HeadingIndex
from .resolver import ReferenceResolver
from .links import LinkChecker
from .checker import ConsistencyChecker
from .report import (
    build_report,
    category_summary,
    describe_category,
    render_json,
    render_records,
    render_text,
)
from .pipeline import CorpusAnalysis, analyze_corpus, build_documents, validate_corpus

__all__ = [
    "EXIT_ABORTED",
    "EXIT_ERRORS",
    "EXIT_OK",
    "ConfigError",
    "RunAborted",
    "ValidationReport",
    "DEFAULT_MAX_UNREADABLE_FILES",
    "ValidatorConfig",
    "HeadingIndex",
    "ReferenceResolver",
    "LinkChecker",
    "ConsistencyChecker",
    "build_report",
    "category_summary",
    "describe_category",
    "render_json",
    "render_records",
    "render_text",
    "CorpusAnalysis",
    "analyze_corpus",
    "build_documents",
    "validate_corpus",
]
