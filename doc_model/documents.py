"""
doc_model/documents.py — model dokumentu korpusu (plik Markdown / DocC).

Document odpowiada jednemu plikowi źródłowemu; zbiór dokumentów tworzy Corpus.
Heading, CodeBlock i Reference są budowane od nowa przy każdym uruchomieniu
walidacji i nie są modyfikowane po zbudowaniu (frozen dataclasses).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, TypeAlias

from .anchors import heading_anchor, unique_anchors


# Ścieżka dokumentu jako krotka segmentów, np. ("Networking", "REST.md").
DocPath: TypeAlias = tuple[str, ...]

# Ścieżka numeryczna nagłówka, np. (11, 2, 3) dla "11.2.3".
NumericPath: TypeAlias = tuple[int, ...]


def format_doc_path(path: DocPath) -> str:
    return "/".join(path)


def format_numeric_path(path: NumericPath) -> str:
    return ".".join(str(n) for n in path)


@dataclass(frozen=True, slots=True, order=True)
class SourceLocation:
    """Miejsce w korpusie: dokument + linia (1-based, 0 = cały plik)."""

    path: DocPath
    line: int

    def __str__(self) -> str:
        return f"{format_doc_path(self.path)}:{self.line}"


@dataclass(frozen=True, slots=True)
class Heading:
    """
    Nagłówek sekcji.

    - numeric_path: np. (11, 2) dla "11.2 REST APIs"; None dla "Overview"
    - title:        tekst nagłówka bez numeru
    - depth:        liczba znaczników '#' (0 = syntetyczny korzeń dokumentu)
    - doc_path:     dokument, w którym nagłówek występuje
    - line:         numer linii (1-based)
    - offset:       offset znakowy początku linii w tekście dokumentu
    - arity_ok:     False gdy długość numeru nie pasuje do głębokości
    """

    numeric_path: NumericPath | None
    title: str
    depth: int
    doc_path: DocPath
    line: int
    offset: int = 0
    arity_ok: bool = True

    @property
    def label(self) -> str:
        """Etykieta do wyświetlania: "11.2 REST APIs" albo sam tytuł."""
        if self.numeric_path is None:
            return self.title
        num = format_numeric_path(self.numeric_path)
        return f"{num} {self.title}" if self.title else num

    @property
    def anchor(self) -> str:
        return heading_anchor(self.label)

    @property
    def location(self) -> SourceLocation:
        return SourceLocation(self.doc_path, self.line)


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """Blok kodu ograniczony płotkami ``` lub ~~~."""

    language: str | None     # None gdy płotek bez tagu języka
    start_line: int          # linia płotka otwierającego
    end_line: int            # linia płotka zamykającego (lub ostatnia linia pliku)
    section: Heading         # najbliższy poprzedzający nagłówek (tylko relacja)
    closed: bool = True


@dataclass(frozen=True, slots=True)
class Reference:
    """
    Odwołanie z prozy do innej sekcji ("see 12.4.2", 'see "Using Async/Await"').

    resolved_target pozostaje None do czasu rozwiązania przez ReferenceResolver;
    resolver zwraca nowe instancje (dataclasses.replace), nie mutuje istniejących.
    """

    location: SourceLocation
    target_path: NumericPath | None
    target_title: str | None
    raw: str
    resolved_target: Heading | None = None

    @property
    def target_label(self) -> str:
        if self.target_path is not None:
            num = format_numeric_path(self.target_path)
            return f'{num} "{self.target_title}"' if self.target_title else num
        return f'"{self.target_title}"'


@dataclass(frozen=True, slots=True)
class Document:
    """Jeden plik korpusu po sparsowaniu."""

    path: DocPath
    text: str
    headings: tuple[Heading, ...]
    code_blocks: tuple[CodeBlock, ...]
    root: Heading
    fenced_lines: frozenset[int] = field(default_factory=frozenset)

    @property
    def path_str(self) -> str:
        return format_doc_path(self.path)

    def heading_anchors(self) -> dict[int, str]:
        """Linia nagłówka → kotwica; powtórzenia dostają sufiks -1, -2 (jak GitHub)."""
        slugs = unique_anchors(h.anchor for h in self.headings)
        return {h.line: slug for h, slug in zip(self.headings, slugs)}

    def numbered_headings(self) -> Iterator[Heading]:
        return (h for h in self.headings if h.numeric_path is not None)

    def iter_prose_lines(self) -> Iterator[tuple[int, str]]:
        """
        Zwraca (numer_linii, tekst) dla linii prozy: poza blokami kodu
        i poza liniami nagłówków.
        """
        heading_lines = {h.line for h in self.headings}
        for lineno, line in enumerate(self.text.splitlines(), start=1):
            if lineno in self.fenced_lines or lineno in heading_lines:
                continue
            yield lineno, line


# Kolekcja dokumentów w kolejności wejścia.
Corpus: TypeAlias = list[Document]
