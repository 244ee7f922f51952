from __future__ import annotations

import argparse

from djeautomation.config import Settings

from .examples import register_examples
from .offline import register_offline
from .online import register_online


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CLI do worker de publicações do DJe")
    parser.add_argument("--webhook-url", help="Sobrescreve WEBHOOK_URL durante esta execução")
    parser.add_argument("--webhook-secret", help="Sobrescreve WEBHOOK_SECRET durante esta execução")
    parser.add_argument("-v", "--verbose", action="store_true", help="Mostra mensagens de debug no console.")
    subparsers = parser.add_subparsers(dest="section", required=True)
    register_examples(subparsers)
    register_online(subparsers)
    register_offline(subparsers)
    return parser


def run(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = getattr(args, "handler", None)
    if handler is None:
        parser.error("Escolha um comando. Use 'exemplos' para ver sugestões.")
    try:
        settings = Settings.load(
            webhook_url=args.webhook_url,
            webhook_secret=args.webhook_secret,
            allow_empty_webhook=not getattr(args, "needs_webhook", False),
        )
    except ValueError as exc:
        raise SystemExit(f"Erro de configuração: {exc}")
    return handler(args, settings)
