from __future__ import annotations

from datetime import date

from djeautomation.models import Job, SearchStrategy
from djeautomation.offline.parsing import parse_results_html
from djeautomation.strategies import relevant_records

from ..utils import add_job_arguments, ensure_path, print_progress, render_publications


def register(subparsers) -> None:
    parser = subparsers.add_parser("analisar", aliases=["parse"], help="Roda a extração sobre uma página de resultados salva")
    parser.add_argument("--html", required=True, help="Arquivo HTML salvo da consulta avançada.")
    add_job_arguments(parser, date_required=False)
    parser.add_argument("--loose", action="store_true", help="Aceita nome e sobrenome em qualquer posição do texto.")
    parser.set_defaults(handler=_run)


def _run(args, settings) -> int:
    path = ensure_path(args.html)
    parsed = parse_results_html(path.read_bytes())
    if parsed.no_results:
        print_progress("Página sem resultados (marcador de 'nenhum resultado' ou nenhum bloco).")
        return 0

    job = Job(
        id="offline",
        registration_number=args.oab.strip(),
        registration_state=args.uf.strip().upper(),
        target_date=args.data or date.today().isoformat(),
        attorney_name=args.nome.strip() if args.nome else None,
    )
    strategy = SearchStrategy(
        search_term=f"arquivo:{path.name}",
        description="página salva",
        priority=0,
        loose_name_match=args.loose,
    )
    records = relevant_records(parsed.blocks, job, strategy)
    if not args.as_json:
        print_progress(f"{len(parsed.blocks)} bloco(s) extraído(s), {len(records)} relevante(s).")
    render_publications(records, as_json=args.as_json)
    return 0
