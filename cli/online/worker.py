from __future__ import annotations

from djeautomation.logs import generate_run_id
from djeautomation.worker import run_forever

from ..utils import add_browser_flags, configure_logging, print_progress


def register(subparsers) -> None:
    parser = subparsers.add_parser("worker", aliases=["run"], help="Consome a fila de jobs e envia resultados ao webhook")
    add_browser_flags(parser)
    parser.add_argument("--once", action="store_true", help="Processa a fila uma vez e sai.")
    parser.add_argument("--interval", type=int, help="Intervalo entre ciclos em segundos (default: DJE_POLL_INTERVAL ou 300).")
    parser.add_argument("--pause", type=int, help="Pausa entre jobs em segundos (default: DJE_JOB_PAUSE ou 5).")
    parser.set_defaults(needs_webhook=True, handler=_run)


def _run(args, settings) -> int:
    settings = settings.with_updates(poll_interval=args.interval, job_pause=args.pause)
    run_id = generate_run_id()
    log_path = configure_logging(settings, run_id, verbose=getattr(args, "verbose", False))
    print_progress(f"Worker iniciado (run-id={run_id}) - log: {log_path}")
    print_progress(f"Webhook URL: {settings.webhook_url}")
    if not args.once:
        print_progress(f"Intervalo entre ciclos: {settings.poll_interval} s")
    try:
        cycles = run_forever(
            settings,
            run_id=run_id,
            max_cycles=1 if args.once else None,
            headless=args.headless,
        )
    except KeyboardInterrupt:
        print_progress("Worker interrompido pelo usuário.")
        return 130
    print_progress(f"Ciclos executados: {cycles}")
    return 0
