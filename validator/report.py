"""
validator/report.py — generowanie raportu walidacji.

  build_report(issues, documents=0, references=0) -> ValidationReport
  render_records(report) -> list[dict]     (wyjście maszynowe)
  render_json(report)    -> str
  render_text(report)    -> str            (wyjście dla człowieka, grupowane po dokumencie)

Kolejność diagnostyk: ścieżka dokumentu, linia, nazwa kategorii, a dalej
ważność i komunikat — porządek jest całkowity, więc dwa uruchomienia na
niezmienionym korpusie dają identyczny (bajt w bajt) raport.
"""

from __future__ import annotations

import json
from itertools import groupby
from typing import Iterable

from doc_model.documents import format_doc_path
from doc_model.issues import IssueCategory, Severity, ValidationIssue

from .types import ValidationReport


def build_report(
    issues: Iterable[ValidationIssue],
    documents: int = 0,
    references: int = 0,
) -> ValidationReport:
    return ValidationReport(
        issues=sorted(issues, key=ValidationIssue.sort_key),
        documents=documents,
        references=references,
    )


def describe_category(category: IssueCategory) -> str:
    """Krótki opis kategorii do podsumowania raportu."""
    match category:
        case IssueCategory.DUPLICATE_HEADING_ID:
            return "zduplikowane numery sekcji"
        case IssueCategory.NON_MONOTONIC_NUMBERING:
            return "niemonotoniczna numeracja"
        case IssueCategory.ORPHANED_HEADING:
            return "sekcje bez rodzica"
        case IssueCategory.DANGLING_REFERENCE:
            return "nierozwiązane odwołania"
        case IssueCategory.AMBIGUOUS_REFERENCE:
            return "niejednoznaczne odwołania"
        case IssueCategory.BROKEN_LINK:
            return "zerwane linki"
        case IssueCategory.MISSING_CODE_LANGUAGE:
            return "bloki kodu bez języka"
        case IssueCategory.UNCLOSED_CODE_FENCE:
            return "niezamknięte bloki kodu"
        case IssueCategory.UNREADABLE_FILE:
            return "nieczytelne pliki"


def category_summary(report: ValidationReport) -> list[tuple[IssueCategory, int, int]]:
    """Zwraca (kategoria, błędy, ostrzeżenia) dla kategorii z co najmniej jedną diagnostyką."""
    rows: list[tuple[IssueCategory, int, int]] = []
    for category in IssueCategory:
        errors = sum(
            1 for i in report.issues
            if i.category is category and i.severity is Severity.ERROR
        )
        warnings = sum(
            1 for i in report.issues
            if i.category is category and i.severity is Severity.WARNING
        )
        if errors or warnings:
            rows.append((category, errors, warnings))
    return rows


def render_records(report: ValidationReport) -> list[dict[str, object]]:
    return [i.to_record() for i in report.issues]


def render_json(report: ValidationReport) -> str:
    out = {
        "is_valid": report.is_valid,
        "exit_status": report.exit_status,
        "documents": report.documents,
        "references": report.references,
        "issues": render_records(report),
    }
    return json.dumps(out, ensure_ascii=False, indent=2)


def render_text(report: ValidationReport) -> str:
    lines: list[str] = []
    for path, group in groupby(report.issues, key=lambda i: i.location.path):
        lines.append(format_doc_path(path))
        for issue in group:
            lines.append(
                f"  {issue.location.line:>5}  {issue.severity.value:<7}  "
                f"{issue.category.value:<22}  {issue.message}"
            )
            for rel in issue.related:
                if rel != issue.location:
                    lines.append(f"  {'':>5}  {'':<7}  {'':<22}  ↳ {rel}")
        lines.append("")

    lines.append(
        f"{len(report.errors)} błąd(ów), {len(report.warnings)} ostrzeżenie(-ń) "
        f"w {report.documents} dokumencie(-ach); odwołań: {report.references}."
    )
    for category, errors, warnings in category_summary(report):
        lines.append(
            f"  {category.value:<22}  {errors:>4} E  {warnings:>4} W  "
            f"{describe_category(category)}"
        )
    lines.append("OK" if report.is_valid else "FAILED")
    return "\n".join(lines) + "\n"
