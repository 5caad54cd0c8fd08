"""
dgv — walidator grafu dokumentacji (Document Graph Validator), narzędzie CLI.

Użycie:
  dgv <komenda> [opcje]

Komendy:
  validate   Waliduje korpus: numeracja, duplikaty, odwołania, bloki kodu, linki.
  headings   Wyświetla nagłówki dokumentów.
  refs       Listuje odwołania "see 11.2" i ich cele.
  toc        Generuje spis treści z numerowanych nagłówków.
"""

from __future__ import annotations

import argparse
import logging
import sys

# Windows: terminal może używać cp1252 — wymuszamy UTF-8, żeby polskie znaki
# w tekstach pomocy argparse były wypisywane poprawnie.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from rich.console import Console
from rich.logging import RichHandler

from dgv.commands import headings as cmd_headings
from dgv.commands import refs as cmd_refs
from dgv.commands import toc as cmd_toc
from dgv.commands import validate as cmd_validate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dgv",
        description="Document Graph Validator — narzędzie CLI.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="dgv 0.1.0"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Więcej logów na stderr (-v: INFO, -vv: DEBUG).",
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_validate.add_parser(subparsers)
    cmd_headings.add_parser(subparsers)
    cmd_refs.add_parser(subparsers)
    cmd_toc.add_parser(subparsers)

    return parser


def setup_logging(verbosity: int) -> None:
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=verbosity > 1)],
        force=True,
    )


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
