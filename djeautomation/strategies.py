from __future__ import annotations

"""Sequência de termos de busca tentados no portal.

Os candidatos são tentados em ordem de prioridade; o primeiro que devolve ao
menos uma publicação relevante encerra a busca. Falha de um candidato
(timeout, campo ausente) conta como "sem resultado" e a busca segue.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Sequence

from .models import Job, PublicationRecord, RawResultBlock, SearchStrategy
from .offline.aggregator import build_publication
from .offline.dedupe import dedupe
from .offline.relevance import is_relevant
from .offline.text import digits_only

LOGGER = logging.getLogger(__name__)


class SearchStatus(str, Enum):
    FOUND = "found"
    NO_RESULTS = "no_results"
    FAILED = "failed"


@dataclass(slots=True)
class SearchOutcome:
    status: SearchStatus
    blocks: List[RawResultBlock] = field(default_factory=list)
    error: str | None = None

    @staticmethod
    def found(blocks: Sequence[RawResultBlock]) -> "SearchOutcome":
        return SearchOutcome(status=SearchStatus.FOUND, blocks=list(blocks))

    @staticmethod
    def no_results() -> "SearchOutcome":
        return SearchOutcome(status=SearchStatus.NO_RESULTS)

    @staticmethod
    def failed(error: str) -> "SearchOutcome":
        return SearchOutcome(status=SearchStatus.FAILED, error=error)


@dataclass(slots=True)
class StrategyAttempt:
    search_term: str
    status: SearchStatus
    blocks: int = 0
    relevant: int = 0
    error: str | None = None


@dataclass(slots=True)
class StrategyRun:
    records: List[PublicationRecord] = field(default_factory=list)
    attempts: List[StrategyAttempt] = field(default_factory=list)
    strategy_used: SearchStrategy | None = None


SearchFn = Callable[[SearchStrategy], SearchOutcome]


def build_search_strategies(job: Job) -> List[SearchStrategy]:
    number = digits_only(job.registration_number)
    state = job.registration_state
    candidates: List[SearchStrategy] = []
    if number:
        candidates.append(SearchStrategy(number, "número OAB", priority=1))
        candidates.append(SearchStrategy(f'"{number}"', "número OAB entre aspas", priority=2))
        if state:
            candidates.append(SearchStrategy(f"{number}/{state}", "número OAB + UF", priority=3))
    if job.attorney_name and job.attorney_name.strip():
        name = " ".join(job.attorney_name.split())
        candidates.append(
            SearchStrategy(f'"{name}"', "nome completo do advogado", priority=4, loose_name_match=True)
        )

    unique: List[SearchStrategy] = []
    seen: set[str] = set()
    for candidate in sorted(candidates, key=lambda item: item.priority):
        if candidate.search_term in seen:
            continue
        seen.add(candidate.search_term)
        unique.append(candidate)
    return unique


def relevant_records(
    blocks: Sequence[RawResultBlock],
    job: Job,
    strategy: SearchStrategy,
) -> List[PublicationRecord]:
    records: List[PublicationRecord] = []
    for block in blocks:
        if not is_relevant(
            block.text,
            job.registration_number,
            job.attorney_name,
            loose=strategy.loose_name_match,
        ):
            continue
        record = build_publication(block, job, strategy)
        if record is not None:
            records.append(record)
    return dedupe(records)


def run_strategies(job: Job, strategies: Sequence[SearchStrategy], search: SearchFn) -> StrategyRun:
    run = StrategyRun()
    for strategy in strategies:
        LOGGER.info("Buscando %r (%s)", strategy.search_term, strategy.description)
        outcome = search(strategy)
        attempt = StrategyAttempt(search_term=strategy.search_term, status=outcome.status, error=outcome.error)
        run.attempts.append(attempt)

        if outcome.status is SearchStatus.FAILED:
            LOGGER.warning("Falha na busca %r: %s", strategy.search_term, outcome.error)
            continue
        if outcome.status is SearchStatus.NO_RESULTS:
            LOGGER.info("Nenhuma publicação para %r", strategy.search_term)
            continue

        records = relevant_records(outcome.blocks, job, strategy)
        attempt.blocks = len(outcome.blocks)
        attempt.relevant = len(records)
        LOGGER.info(
            "%d bloco(s) extraído(s), %d relevante(s) para %r",
            attempt.blocks,
            attempt.relevant,
            strategy.search_term,
        )
        if records:
            run.records = records
            run.strategy_used = strategy
            break
    return run


__all__ = [
    "SearchFn",
    "SearchOutcome",
    "SearchStatus",
    "StrategyAttempt",
    "StrategyRun",
    "build_search_strategies",
    "relevant_records",
    "run_strategies",
]
