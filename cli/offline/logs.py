from __future__ import annotations

from rich.table import Table

from djeautomation import logs as run_logs

from ..utils import get_console


def register(subparsers) -> None:
    parser = subparsers.add_parser("logs", help="Lista, inspeciona e limpa logs e resumos do worker")
    parser.add_argument("--limit", type=int, default=20, help="Quantidade de execuções exibidas.")
    parser.add_argument("--show", metavar="RUN_ID", help="Exibe o log da execução informada.")
    parser.add_argument("--checkpoint", metavar="RUN_ID", help="Exibe o resumo de ciclos (state) da execução.")
    parser.add_argument("--tail", type=int, default=0, help="Mostra só as últimas N linhas ao exibir um log.")
    parser.add_argument("--clean-days", type=int, help="Remove execuções mais antigas que N dias.")
    parser.add_argument("--clean-size", type=int, help="Mantém o diretório de logs em até N MB.")
    parser.set_defaults(handler=_run)


def _cycles_column(run: run_logs.RunLog) -> str:
    state = run.load_state()
    if not state:
        return "-"
    totals = state.get("totals", {})
    return (
        f"{state.get('cycles', 0)} ciclo(s), "
        f"{totals.get('completed', 0)} ok / {totals.get('failed', 0)} falha(s), "
        f"{totals.get('publications', 0)} publicação(ões)"
    )


def _run(args, settings) -> int:
    console = get_console()
    log_dir = settings.log_dir
    runs = run_logs.list_logs(limit=args.limit, log_dir=log_dir)
    if not runs:
        console.print(f"Nenhum log em {log_dir}/.")
    else:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Run ID", overflow="fold")
        table.add_column("Modificado")
        table.add_column("MB", justify="right")
        table.add_column("Ciclos", overflow="fold")
        for run in runs:
            table.add_row(
                run.run_id,
                f"{run.modified:%Y-%m-%d %H:%M:%S}",
                f"{run.size_bytes / (1024 * 1024):.2f}",
                _cycles_column(run),
            )
        console.print(table)

    try:
        if args.show:
            content = run_logs.show_log(args.show, tail=args.tail > 0, lines=args.tail, log_dir=log_dir)
            console.rule(f"Log {args.show}")
            console.print(content, markup=False, highlight=False)
        if args.checkpoint:
            console.rule(f"Resumo {args.checkpoint}")
            console.print_json(run_logs.show_state(args.checkpoint, log_dir=log_dir))
    except FileNotFoundError as exc:
        console.print(str(exc), markup=False)
        return 1

    if args.clean_days or args.clean_size:
        result = run_logs.cleanup_logs(args.clean_days, args.clean_size, log_dir=log_dir)
        removed = result["deleted"]
        console.print(f"Execuções removidas: {', '.join(removed)}" if removed else "Nenhum log removido.")
    return 0
