from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from djeautomation.config import Settings
from djeautomation.logs import ROOT_LOGGER, setup_run_logger
from djeautomation.models import PublicationRecord


def print_examples(examples: List[tuple[str, str]]) -> None:
    console = get_console()
    console.print("Comandos frequentes do CLI:\n")
    for title, command in examples:
        console.print(f"- {title}\n  {command}\n", markup=False, soft_wrap=True)


def add_browser_flags(parser) -> None:
    parser.set_defaults(headless=True)
    parser.add_argument(
        "--no-headless",
        dest="headless",
        action="store_false",
        help="Mostra o navegador Playwright (default: headless).",
    )


def add_job_arguments(parser, *, date_required: bool = True) -> None:
    parser.add_argument("--oab", required=True, help="Número OAB do advogado.")
    parser.add_argument("--uf", default="SP", help="UF da inscrição (default: SP).")
    parser.add_argument("--nome", help="Nome completo do advogado.")
    parser.add_argument("--data", required=date_required, help="Data alvo no formato AAAA-MM-DD.")
    parser.add_argument("--json", dest="as_json", action="store_true", help="Imprime o resultado em JSON.")


def ensure_path(value: str) -> Path:
    path = Path(value).expanduser().resolve()
    if not path.exists():
        raise SystemExit(f"Arquivo/diretório inexistente: {path}")
    return path


def configure_logging(settings: Settings, run_id: str, *, verbose: bool = False) -> Path:
    log_path = setup_run_logger(run_id, settings.log_dir)
    logger = logging.getLogger(ROOT_LOGGER)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(console=get_console(), show_path=False, rich_tracebacks=True)
        handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        logger.addHandler(handler)
    if verbose:
        logger.setLevel(logging.DEBUG)
    return log_path


def print_progress(message: str) -> None:
    get_console().print(message)


def render_publications(publications: Sequence[PublicationRecord], *, as_json: bool = False) -> None:
    console = get_console()
    if as_json:
        console.print_json(json.dumps([record.to_dict() for record in publications], ensure_ascii=False))
        return
    if not publications:
        console.print("Nenhuma publicação relevante encontrada.")
        return
    table = Table(show_header=True, header_style="bold")
    table.add_column("Processo", overflow="fold")
    table.add_column("Tipo")
    table.add_column("Urgência")
    table.add_column("Data")
    table.add_column("Trecho", overflow="fold")
    for record in publications:
        snippet = record.text[:160] + ("…" if len(record.text) > 160 else "")
        table.add_row(
            record.process_number or "-",
            record.type.value,
            record.urgency.value,
            record.date,
            snippet,
        )
    console.print(table)
    console.print(f"Total: {len(publications)} publicação(ões)")


_CONSOLE: Console | None = None


def get_console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console()
    return _CONSOLE
