"""
validator/types.py — raport walidacji i wyjątki potoku.

ValidationReport — wynik walidacji: posortowane diagnostyki, status wyjścia.
RunAborted       — jedyny błąd krytyczny: za dużo nieczytelnych plików.
ConfigError      — niepoprawna konfiguracja (plik JSON / zmienne środowiskowe).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from doc_model.issues import Severity, ValidationIssue

EXIT_OK      = 0
EXIT_ERRORS  = 1
EXIT_ABORTED = 2


@dataclass(slots=True)
class ValidationReport:
    """
    Wynik pełnej walidacji korpusu.

    - issues:     diagnostyki w stabilnej kolejności (ścieżka, linia, kategoria)
    - documents:  liczba zwalidowanych dokumentów
    - references: liczba znalezionych odwołań
    - is_valid:   True gdy brak błędów (ostrzeżenia nie wpływają)
    """

    issues: list[ValidationIssue] = field(default_factory=list)
    documents: int = 0
    references: int = 0

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity is Severity.WARNING]

    @property
    def is_valid(self) -> bool:
        return not any(i.is_error for i in self.issues)

    @property
    def exit_status(self) -> int:
        return EXIT_OK if self.is_valid else EXIT_ERRORS


class RunAborted(Exception):
    """Przekroczono próg nieczytelnych plików — walidacja przerwana."""

    def __init__(self, unreadable: list[ValidationIssue], threshold: int) -> None:
        self.unreadable = sorted(unreadable, key=ValidationIssue.sort_key)
        self.threshold = threshold
        super().__init__(
            f"run aborted: too many unreadable files "
            f"({len(self.unreadable)} > {threshold})"
        )


class ConfigError(Exception):
    """Niepoprawna konfiguracja walidatora."""
