from __future__ import annotations

from . import buscar, worker


def register_online(subparsers) -> None:
    online_parser = subparsers.add_parser("online", aliases=["on"], help="Fluxo com Playwright (worker/consulta)")
    online_sub = online_parser.add_subparsers(dest="online_command", required=True)
    worker.register(online_sub)
    buscar.register(online_sub)
