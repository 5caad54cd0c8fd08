"""
md_parser/section_patterns.py — rozpoznawanie nagłówków sekcji Markdown.

parse_heading(line, strict=False) -> ParsedHeading | None

Nagłówek ATX: do 3 spacji wcięcia, 1–6 znaków '#', odstęp, tekst
(opcjonalna zamykająca sekwencja '#' jest usuwana). Głębokość = liczba '#'.

Jeśli tekst zaczyna się od numeru z kropkami ("11.2.3 Using Async/Await"),
numer staje się ścieżką numeryczną, a reszta tytułem. Brak numeru →
numeric_path=None ("Overview", "Conclusion").

Parsowanie nigdy nie rzuca wyjątków: niezgodność długości numeru z głębokością
jest tylko flagą (arity_ok=False), którą raportuje ConsistencyChecker.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from doc_model.documents import NumericPath

# Linia nagłówka ATX; grupa 1 = znaczniki, grupa 2 = surowy tekst.
_ATX_RE = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?[ \t]*$")

# Zamykająca sekwencja "## Tytuł ##".
_CLOSING_RE = re.compile(r"(?:^|[ \t]+)#+$")

# Numer sekcji na początku tekstu: "11", "11.2", "11.2.3", "3." , "3.1)" .
# Składowa ma najwyżej 9 cyfr.
_NUMERAL_RE = re.compile(r"^(\d{1,9}(?:\.\d{1,9})*)[.:)]?(?:[ \t]+(.*))?$")

_PATH_RE = re.compile(r"\d{1,9}(?:\.\d{1,9})*")


@dataclass(frozen=True, slots=True)
class ParsedHeading:
    numeric_path: NumericPath | None
    title: str
    depth: int
    arity_ok: bool = True


def arity_matches(path: NumericPath, depth: int, strict: bool = False) -> bool:
    """
    Czy długość numeru pasuje do głębokości nagłówka?

    strict=False → tolerancja ±1 ("# 1 Intro" i "## 1 Intro" są poprawne)
    strict=True  → dokładna zgodność
    """
    diff = abs(len(path) - depth)
    return diff == 0 if strict else diff <= 1


def to_numeric_path(raw: str) -> NumericPath | None:
    """Zamienia "12.4.2" na (12, 4, 2); None, gdy tekst nie jest numerem sekcji."""
    raw = raw.strip()
    if not _PATH_RE.fullmatch(raw):
        return None
    return tuple(int(part) for part in raw.split("."))


def split_numeral(text: str) -> tuple[NumericPath | None, str]:
    """Rozdziela "11.2 REST APIs" na ((11, 2), "REST APIs")."""
    m = _NUMERAL_RE.match(text)
    if not m:
        return None, text
    return to_numeric_path(m.group(1)), (m.group(2) or "").strip()


def parse_heading(line: str, strict: bool = False) -> ParsedHeading | None:
    """
    Parsuje linię nagłówka; zwraca None dla linii, które nagłówkami nie są.

    Args:
        line:   pojedyncza linia tekstu (bez '\\n')
        strict: tryb ścisłej zgodności numeru z głębokością
    """
    m = _ATX_RE.match(line)
    if not m:
        return None

    depth = len(m.group(1))
    text = _CLOSING_RE.sub("", m.group(2) or "").strip()

    path, title = split_numeral(text)
    if path is None:
        return ParsedHeading(numeric_path=None, title=text, depth=depth)

    return ParsedHeading(
        numeric_path=path,
        title=title,
        depth=depth,
        arity_ok=arity_matches(path, depth, strict),
    )
