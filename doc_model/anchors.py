"""doc_model/anchors.py — kotwice nagłówków w stylu GitHub / DocC."""

from __future__ import annotations

import re
import unicodedata
from typing import Iterable
from urllib.parse import unquote

_DROP_RE = re.compile(r"[^\w\- ]", re.UNICODE)


def heading_anchor(text: str) -> str:
    """
    Zamienia tekst nagłówka na kotwicę linku, np.
    "11.2 REST APIs and Async/Await" → "112-rest-apis-and-asyncawait".

    Zachowuje litery Unicode (jak GitHub); usuwa interpunkcję poza '-',
    każda spacja staje się '-' (bez zwijania wielokrotnych).
    """
    text = unicodedata.normalize("NFC", text).strip().lower()
    text = text.replace("`", "")
    text = _DROP_RE.sub("", text)
    return text.replace(" ", "-")


def normalize_anchor(anchor: str) -> str:
    """
    Normalizuje kotwicę z linku do porównania z heading_anchor():
    "#11.2-REST-APIs" i "112-rest-apis" dają ten sam wynik.
    """
    return heading_anchor(unquote(anchor.lstrip("#")))


def unique_anchors(slugs: Iterable[str]) -> list[str]:
    """
    Nadaje powtórzonym kotwicom sufiksy w kolejności dokumentu:
    ["example", "example", "example"] → ["example", "example-1", "example-2"].
    """
    counts: dict[str, int] = {}
    result: list[str] = []
    for slug in slugs:
        if slug in counts:
            counts[slug] += 1
            result.append(f"{slug}-{counts[slug]}")
        else:
            counts[slug] = 0
            result.append(slug)
    return result
