"""Wspólne fixtures: korpusy w pamięci i na dysku."""

from __future__ import annotations

import os
import textwrap
from pathlib import Path

import pytest

from md_parser.loader import SourceFile

_ENV_VARS = ("DGV_MAX_UNREADABLE_FILES", "DGV_STRICT_NUMBERING", "DGV_WORKERS")


def make_sources(files: dict[str, str | bytes]) -> list[SourceFile]:
    """{"a/b.md": "treść"} → lista SourceFile w kolejności słownika."""
    return [
        SourceFile(
            path=tuple(name.split("/")),
            data=textwrap.dedent(content) if isinstance(content, str) else content,
        )
        for name, content in files.items()
    ]


@pytest.fixture
def write_corpus(tmp_path):
    """Zapisuje pliki korpusu pod tmp_path/docs i zwraca katalog."""

    def _write(files: dict[str, str | bytes]) -> Path:
        root = tmp_path / "docs"
        for name, content in files.items():
            target = root / name
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(textwrap.dedent(content), encoding="utf-8")
        return root

    return _write


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    """Izolacja od zmiennych DGV_* i plików dgv.json / .env w katalogu roboczym."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    # load_dotenv ustawia os.environ poza monkeypatch
    for name in _ENV_VARS:
        os.environ.pop(name, None)


CLEAN_CORPUS = {
    "Networking.md": """\
        # 11 Networking

        Networking basics for Apple platforms.

        ## 11.1 URLSession

        ```swift
        let session = URLSession.shared
        ```

        ## 11.2 REST APIs and Async/Await

        Async calls are covered in detail (see 12.1).

        ### 11.2.1 Decoding JSON

        Use `Codable`, see "URLSession" for the session setup.
        """,
    "Concurrency.md": """\
        # 12 Concurrency

        ## 12.1 Using Async/Await

        Networking examples live in [Networking](Networking.md#112-rest-apis-and-asyncawait)
        and <doc:Networking>.

        ```swift
        func load() async throws {}
        ```

        ## 12.2 Actors

        Compare with the REST layer (see 11.2).
        """,
}
