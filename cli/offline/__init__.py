from __future__ import annotations

from . import analisar, logs


def register_offline(subparsers) -> None:
    offline_parser = subparsers.add_parser("offline", aliases=["off"], help="Ferramentas offline (análise/logs)")
    offline_sub = offline_parser.add_subparsers(dest="offline_command", required=True)
    analisar.register(offline_sub)
    logs.register(offline_sub)
