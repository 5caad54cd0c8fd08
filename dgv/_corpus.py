"""Wspólne argumenty komend i uruchomienie potoku z obsługą błędów dla CLI."""

from __future__ import annotations

import argparse

from rich.console import Console
from rich.markup import escape

from dgv._config import Settings, load_settings
from md_parser import collect_sources
from validator import (
    EXIT_ABORTED,
    EXIT_ERRORS,
    ConfigError,
    CorpusAnalysis,
    RunAborted,
    analyze_corpus,
)

console = Console(stderr=True)


def add_corpus_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "paths",
        nargs="+",
        metavar="ŚCIEŻKA",
        help="Katalog(i) korpusu (np. Docs.docc) lub pojedyncze pliki .md.",
    )
    p.add_argument(
        "--config", "-c",
        default=None,
        metavar="PLIK",
        help="Plik konfiguracyjny JSON (domyślnie: ./dgv.json, jeśli istnieje).",
    )
    p.add_argument(
        "--glob",
        action="append",
        default=None,
        metavar="WZORZEC",
        help="Wzorzec plików w katalogach (można powtarzać; domyślnie: *.md).",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Ścisła numeracja: długość numeru = liczba '#', niezgodność jest błędem.",
    )
    p.add_argument(
        "--max-unreadable",
        type=int,
        default=None,
        metavar="N",
        help="Przerwij, gdy nieczytelnych plików jest więcej niż N.",
    )
    p.add_argument(
        "--workers", "-j",
        type=int,
        default=None,
        metavar="N",
        help="Rozmiar puli wątków.",
    )
    p.add_argument(
        "--no-links",
        dest="check_links",
        action="store_false",
        default=None,
        help="Nie sprawdzaj linków Markdown / <doc:...>.",
    )


def settings_from_args(args: argparse.Namespace) -> Settings:
    try:
        return load_settings(
            args.config,
            strict_numbering=args.strict,
            max_unreadable_files=args.max_unreadable,
            max_workers=args.workers,
            check_links=args.check_links,
            patterns=args.glob,
        )
    except ConfigError as e:
        console.print(f"[red]Błąd konfiguracji:[/red] {escape(str(e))}")
        raise SystemExit(EXIT_ERRORS)


def run_analysis(args: argparse.Namespace) -> CorpusAnalysis:
    """Wczytuje korpus i uruchamia potok; błędy krytyczne kończą proces."""
    settings = settings_from_args(args)
    if settings.source:
        console.print(f"[dim]Konfiguracja: {settings.source}[/dim]")

    sources = collect_sources(args.paths, settings.patterns)
    if not sources:
        console.print("[yellow]Nie znaleziono plików do walidacji.[/yellow]")

    try:
        return analyze_corpus(sources, settings.validator)
    except RunAborted as e:
        console.print(f"[red bold]{e}[/red bold]")
        for issue in e.unreadable:
            console.print(f"  [red]·[/red] {escape(str(issue.location))}  {escape(issue.message)}")
        raise SystemExit(EXIT_ABORTED)
