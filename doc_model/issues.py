"""
doc_model/issues.py — diagnostyki walidacji korpusu.

IssueCategory — zamknięty zbiór kategorii (obsługiwany wyczerpująco przez
    generator raportu).
Severity      — warning | error; tylko error wpływa na status wyjścia.
ValidationIssue — pojedyncza diagnostyka z lokalizacją i komunikatem.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .documents import DocPath, SourceLocation, format_doc_path


class Severity(StrEnum):
    WARNING = "warning"
    ERROR   = "error"


class IssueCategory(StrEnum):
    """Stałe kategorie diagnostyk."""

    # struktura nagłówków
    DUPLICATE_HEADING_ID    = "DuplicateHeadingID"
    NON_MONOTONIC_NUMBERING = "NonMonotonicNumbering"
    ORPHANED_HEADING        = "OrphanedHeading"

    # odwołania i linki
    DANGLING_REFERENCE      = "DanglingReference"
    AMBIGUOUS_REFERENCE     = "AmbiguousReference"
    BROKEN_LINK             = "BrokenLink"

    # bloki kodu
    MISSING_CODE_LANGUAGE   = "MissingCodeLanguage"
    UNCLOSED_CODE_FENCE     = "UnclosedCodeFence"

    # I/O
    UNREADABLE_FILE         = "UnreadableFile"


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """
    Pojedyncza diagnostyka.

    - severity: Severity.WARNING | Severity.ERROR
    - category: IssueCategory
    - location: dokument + linia (0 = cały plik)
    - message:  czytelny opis problemu
    - related:  inne miejsca związane z problemem (np. pierwsza deklaracja ID)
    """

    severity: Severity
    category: IssueCategory
    location: SourceLocation
    message: str
    related: tuple[SourceLocation, ...] = ()

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def sort_key(self) -> tuple:
        return (
            self.location.path,
            self.location.line,
            self.category.value,
            self.severity.value,
            self.message,
        )

    def to_record(self) -> dict[str, object]:
        return {
            "path": format_doc_path(self.location.path),
            "line": self.location.line,
            "severity": self.severity.value,
            "category": self.category.value,
            "message": self.message,
        }


def error(
    category: IssueCategory,
    location: SourceLocation,
    message: str,
    related: tuple[SourceLocation, ...] = (),
) -> ValidationIssue:
    return ValidationIssue(Severity.ERROR, category, location, message, related)


def warning(
    category: IssueCategory,
    location: SourceLocation,
    message: str,
    related: tuple[SourceLocation, ...] = (),
) -> ValidationIssue:
    return ValidationIssue(Severity.WARNING, category, location, message, related)


def unreadable_file(path: DocPath, reason: str) -> ValidationIssue:
    return error(
        IssueCategory.UNREADABLE_FILE,
        SourceLocation(path, 0),
        f"Nie można odczytać pliku jako tekstu: {reason}.",
    )
