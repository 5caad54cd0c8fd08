"""
validator/config.py — konfiguracja przekazywana jawnie do potoku walidacji.

Rdzeń nie czyta zmiennych środowiskowych; warstwowe ładowanie (plik JSON,
.env, flagi CLI) robi dgv/_config.py.
"""

from __future__ import annotations

from dataclasses import dataclass

from md_parser.reference_patterns import DEFAULT_REFERENCE_PATTERNS, ReferencePattern

DEFAULT_MAX_UNREADABLE_FILES = 10


@dataclass(frozen=True, slots=True)
class ValidatorConfig:
    """
    - max_unreadable_files: próg przerwania; liczba nieczytelnych plików
                            większa od progu kończy walidację (RunAborted)
    - strict_numbering:     długość numeru musi równać się liczbie '#',
                            a niezgodność jest błędem (nie ostrzeżeniem)
    - max_workers:          rozmiar puli wątków (None = domyślny executora)
    - check_links:          czy sprawdzać linki Markdown / <doc:...>
    - reference_patterns:   gramatyka wykrywania odwołań w prozie
    """

    max_unreadable_files: int = DEFAULT_MAX_UNREADABLE_FILES
    strict_numbering: bool = False
    max_workers: int | None = None
    check_links: bool = True
    reference_patterns: tuple[ReferencePattern, ...] = DEFAULT_REFERENCE_PATTERNS
