"""
Konfiguracja walidatora — warstwy: domyślne → plik JSON → zmienne środowiskowe → flagi CLI.

Plik JSON (domyślnie ./dgv.json, jeśli istnieje) jest walidowany schematem
CONFIG_SCHEMA (jsonschema, Draft 2020-12).

Zmienne środowiskowe (opcjonalnie z pliku .env w katalogu roboczym):
  DGV_MAX_UNREADABLE_FILES   próg przerwania (liczba całkowita ≥ 0)
  DGV_STRICT_NUMBERING       1/true/yes/on → ścisła numeracja
  DGV_WORKERS                rozmiar puli wątków
"""

from __future__ import annotations

import json
import os
import pathlib
import re
from dataclasses import dataclass, field
from typing import Any

import jsonschema
from dotenv import load_dotenv

from md_parser.loader import DEFAULT_PATTERNS
from md_parser.reference_patterns import ReferencePattern
from validator import ConfigError, ValidatorConfig

DEFAULT_CONFIG_FILE = "dgv.json"

_ENV_MAX_UNREADABLE = "DGV_MAX_UNREADABLE_FILES"
_ENV_STRICT         = "DGV_STRICT_NUMBERING"
_ENV_WORKERS        = "DGV_WORKERS"

_TRUE  = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}

CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "max_unreadable_files": {"type": "integer", "minimum": 0},
        "strict_numbering":     {"type": "boolean"},
        "max_workers":          {"type": ["integer", "null"], "minimum": 1},
        "check_links":          {"type": "boolean"},
        "patterns": {
            "type": "array",
            "items": {"type": "string", "minLength": 1},
            "minItems": 1,
        },
        "reference_patterns": {
            "type": "array",
            "items": {
                "type": "object",
                "additionalProperties": False,
                "required": ["name", "regex"],
                "properties": {
                    "name":  {"type": "string", "minLength": 1},
                    "regex": {"type": "string", "minLength": 1},
                },
            },
        },
    },
}


@dataclass(slots=True)
class Settings:
    validator: ValidatorConfig = field(default_factory=ValidatorConfig)
    patterns: tuple[str, ...] = DEFAULT_PATTERNS
    source: str | None = None   # plik konfiguracyjny, z którego wczytano ustawienia


# ---------------------------------------------------------------------------
# Plik JSON
# ---------------------------------------------------------------------------

def _load_file(path: pathlib.Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Nie można odczytać {path}: {e.strerror or e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Błąd parsowania JSON w {path}: {e}") from e

    validator = jsonschema.Draft202012Validator(CONFIG_SCHEMA)
    problems = []
    for e in sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path)):
        where = "/" + "/".join(str(p) for p in e.absolute_path) if e.absolute_path else "/"
        problems.append(f"{where}: {e.message}")
    if problems:
        raise ConfigError(f"Niepoprawna konfiguracja {path}:\n  " + "\n  ".join(problems))
    return data


def _compile_patterns(entries: list[dict[str, str]]) -> tuple[ReferencePattern, ...]:
    patterns: list[ReferencePattern] = []
    for entry in entries:
        try:
            regex = re.compile(entry["regex"], re.IGNORECASE | re.UNICODE)
        except re.error as e:
            raise ConfigError(f"Wzorzec odwołań '{entry['name']}': niepoprawny regex ({e})") from e
        if not {"path", "title"} & set(regex.groupindex):
            raise ConfigError(
                f"Wzorzec odwołań '{entry['name']}' musi mieć grupę (?P<path>…) lub (?P<title>…)."
            )
        patterns.append(ReferencePattern(name=entry["name"], regex=regex))
    return tuple(patterns)


# ---------------------------------------------------------------------------
# Zmienne środowiskowe
# ---------------------------------------------------------------------------

def _env_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} musi być liczbą całkowitą, otrzymano '{raw}'.") from e
    if value < 0:
        raise ConfigError(f"{name} nie może być ujemne.")
    return value


def _env_bool(name: str) -> bool | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"{name} musi być wartością logiczną (1/0, true/false), otrzymano '{raw}'.")


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def load_settings(
    config_path: str | None = None,
    *,
    strict_numbering: bool | None = None,
    max_unreadable_files: int | None = None,
    max_workers: int | None = None,
    check_links: bool | None = None,
    patterns: list[str] | None = None,
) -> Settings:
    """
    Składa ustawienia z warstw; argumenty różne od None nadpisują resztę.

    Raises:
        ConfigError: niepoprawny plik, schemat lub wartość zmiennej środowiskowej.
    """
    load_dotenv(pathlib.Path.cwd() / ".env", override=False)

    data: dict[str, Any] = {}
    source: str | None = None
    if config_path is not None:
        path = pathlib.Path(config_path)
        if not path.exists():
            raise ConfigError(f"Plik konfiguracyjny nie istnieje: {path}")
        data, source = _load_file(path), str(path)
    elif (default := pathlib.Path.cwd() / DEFAULT_CONFIG_FILE).exists():
        data, source = _load_file(default), str(default)

    values: dict[str, Any] = {
        k: data[k]
        for k in ("max_unreadable_files", "strict_numbering", "max_workers", "check_links")
        if k in data
    }
    if "reference_patterns" in data:
        values["reference_patterns"] = _compile_patterns(data["reference_patterns"])

    env = {
        "max_unreadable_files": _env_int(_ENV_MAX_UNREADABLE),
        "strict_numbering": _env_bool(_ENV_STRICT),
        "max_workers": _env_int(_ENV_WORKERS),
    }
    cli = {
        "max_unreadable_files": max_unreadable_files,
        "strict_numbering": strict_numbering,
        "max_workers": max_workers,
        "check_links": check_links,
    }
    for layer in (env, cli):
        values.update({k: v for k, v in layer.items() if v is not None})

    if values.get("max_workers") is not None and values["max_workers"] < 1:
        raise ConfigError("Rozmiar puli wątków musi być ≥ 1.")
    if values.get("max_unreadable_files", 0) < 0:
        raise ConfigError("Próg nieczytelnych plików nie może być ujemny.")

    return Settings(
        validator=ValidatorConfig(**values),
        patterns=tuple(patterns or data.get("patterns") or DEFAULT_PATTERNS),
        source=source,
    )
