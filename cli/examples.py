from __future__ import annotations

from typing import List, Tuple

from .utils import print_examples

EXAMPLES: List[Tuple[str, str]] = [
    (
        "Rodar o worker (fila a cada 5 minutos, headless):",
        "python -m cli online worker",
    ),
    (
        "Processar a fila uma única vez e sair:",
        "python -m cli online worker --once",
    ),
    (
        "Consultar o DJe manualmente para uma OAB e data, sem enviar ao webhook:",
        'python -m cli online buscar --oab 123456 --uf SP --nome "Maria Souza" --data 2024-03-10',
    ),
    (
        "Reprocessar uma página de resultados salva (debug de seletores):",
        "python -m cli offline analisar --html resultado.html --oab 123456 --data 2024-03-10 --json",
    ),
    (
        "Ver o log e o resumo de ciclos de uma execução do worker:",
        "python -m cli offline logs --limit 5 --show <run-id> --tail 50 --checkpoint <run-id>",
    ),
]


def register_examples(subparsers) -> None:
    parser = subparsers.add_parser("exemplos", aliases=["examples", "help-exemplo"], help="Mostra comandos prontos.")

    def _handler(args, settings) -> int:
        print_examples(EXAMPLES)
        return 0

    parser.set_defaults(handler=_handler)
