from __future__ import annotations

from djeautomation.logs import generate_run_id
from djeautomation.models import Job
from djeautomation.worker import scrape_job

from ..utils import add_browser_flags, add_job_arguments, configure_logging, render_publications


def register(subparsers) -> None:
    parser = subparsers.add_parser("buscar", aliases=["search"], help="Consulta o DJe para uma OAB/data sem usar a fila")
    add_browser_flags(parser)
    add_job_arguments(parser)
    parser.add_argument("--janela", type=int, help="Amplia a busca em N dias antes/depois da data alvo.")
    parser.set_defaults(handler=_run)


def _run(args, settings) -> int:
    settings = settings.with_updates(date_window_days=args.janela)
    configure_logging(settings, generate_run_id(), verbose=getattr(args, "verbose", False))
    job = Job(
        id="manual",
        registration_number=args.oab.strip(),
        registration_state=args.uf.strip().upper(),
        target_date=args.data.strip(),
        attorney_name=args.nome.strip() if args.nome else None,
    )
    try:
        publications = scrape_job(job, settings, headless=args.headless)
    except ValueError as exc:
        raise SystemExit(f"Parâmetros inválidos: {exc}")
    render_publications(publications, as_json=args.as_json)
    return 0
