from __future__ import annotations

"""Processamento dos jobs: um navegador por job, jobs em sequência.

O laço de polling nunca se sobrepõe: o ciclo seguinte só começa depois que o
anterior (inclusive o navegador do último job) terminou.
"""

import logging
import time
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Callable, ContextManager, List

from playwright.sync_api import Page

from .browser import BrowserSession, launch_session
from .config import Settings
from .logs import write_state
from .models import Job, PublicationRecord, RejectedJob
from .navigation import PortalSearcher, format_portal_date
from .offline.aggregator import aggregate, build_failure_payload, build_payload
from .strategies import SearchFn, build_search_strategies, run_strategies
from .webhook import WebhookClient, WebhookError

LOGGER = logging.getLogger(__name__)

SessionFactory = Callable[..., ContextManager[BrowserSession]]
SearcherFactory = Callable[[Page, Settings, str], SearchFn]


@dataclass
class JobReport:
    job_id: str
    status: str
    results: int
    error: str | None = None
    delivered: bool = False


@dataclass
class CycleSummary:
    started_at: str
    jobs: List[JobReport] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "started_at": self.started_at,
            "error": self.error,
            "jobs": [asdict(report) for report in self.jobs],
        }


def scrape_job(
    job: Job,
    settings: Settings,
    *,
    session_factory: SessionFactory = launch_session,
    searcher_factory: SearcherFactory = PortalSearcher,
    headless: bool = True,
) -> List[PublicationRecord]:
    """Roda as estratégias de busca para o job e devolve as publicações relevantes."""

    strategies = build_search_strategies(job)
    if not strategies:
        raise ValueError(f"Job {job.id} sem número OAB nem nome de advogado")
    LOGGER.info(
        "OAB: %s/%s, Nome: %s, Data: %s",
        job.registration_number,
        job.registration_state or "-",
        job.attorney_name or "-",
        format_portal_date(job.target_date),
    )

    with session_factory(settings, headless=headless) as session:
        search = searcher_factory(session.page, settings, job.target_date)
        run = run_strategies(job, strategies, search)
    LOGGER.info("Navegador fechado")

    if run.strategy_used is not None:
        LOGGER.info("Estratégia vencedora: %r", run.strategy_used.search_term)
    else:
        LOGGER.info("Nenhuma publicação relevante após %d tentativa(s)", len(run.attempts))
    return aggregate([run.records])


def process_job(
    job: Job,
    settings: Settings,
    client: WebhookClient,
    *,
    session_factory: SessionFactory = launch_session,
    searcher_factory: SearcherFactory = PortalSearcher,
    headless: bool = True,
) -> JobReport:
    LOGGER.info(
        "Processando job %s: %s/%s - %s",
        job.id,
        job.registration_number,
        job.registration_state,
        job.target_date,
    )
    try:
        publications = scrape_job(
            job,
            settings,
            session_factory=session_factory,
            searcher_factory=searcher_factory,
            headless=headless,
        )
        payload = build_payload(job, publications)
        LOGGER.info("%d publicação(ões) encontrada(s)", len(publications))
    except Exception as exc:  # noqa: BLE001
        LOGGER.exception("Erro no job %s", job.id)
        payload = build_failure_payload(job, str(exc) or type(exc).__name__)

    return _deliver(job.id, payload, client)


def _deliver(job_id: str, payload: dict[str, Any], client: WebhookClient) -> JobReport:
    report = JobReport(
        job_id=job_id,
        status=payload["status"],
        results=payload["resultsCount"],
        error=payload.get("error"),
    )
    try:
        client.send_results(payload)
        report.delivered = True
        LOGGER.info("Job %s concluído (%s)", job_id, report.status)
    except WebhookError as exc:
        LOGGER.error("Erro ao enviar resultado do job %s: %s", job_id, exc)
    return report


def report_rejected_job(job: RejectedJob, client: WebhookClient) -> JobReport:
    """Envia ``failed`` para um job da fila que não pôde ser lido."""

    LOGGER.error("Job %s inválido: %s", job.id, job.error)
    return _deliver(job.id, build_failure_payload(job, job.error), client)


def process_queue(
    settings: Settings,
    client: WebhookClient,
    *,
    sleep: Callable[[float], None] = time.sleep,
    **job_options: Any,
) -> CycleSummary:
    summary = CycleSummary(started_at=datetime.now().isoformat(timespec="seconds"))
    LOGGER.info("Processando fila...")
    try:
        jobs = client.get_pending_jobs()
    except WebhookError as exc:
        LOGGER.error("Erro ao buscar jobs: %s", exc)
        summary.error = str(exc)
        return summary

    if not jobs:
        LOGGER.info("Nenhum job pendente")
        return summary

    for index, job in enumerate(jobs):
        if index and settings.job_pause > 0:
            sleep(settings.job_pause)
        if isinstance(job, RejectedJob):
            summary.jobs.append(report_rejected_job(job, client))
        else:
            summary.jobs.append(process_job(job, settings, client, **job_options))
    return summary


def _state_snapshot(run_id: str, cycles: int, totals: dict[str, int], summary: CycleSummary) -> dict[str, Any]:
    return {
        "run_id": run_id,
        "updated_at": datetime.now().isoformat(timespec="seconds"),
        "cycles": cycles,
        "totals": dict(totals),
        "last_cycle": summary.to_dict(),
    }


def run_forever(
    settings: Settings,
    client: WebhookClient | None = None,
    *,
    run_id: str | None = None,
    max_cycles: int | None = None,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
    **job_options: Any,
) -> int:
    """Executa ciclos a cada ``settings.poll_interval`` segundos. Devolve o número de ciclos."""

    client = client or WebhookClient(settings)
    totals = {"completed": 0, "failed": 0, "publications": 0, "undelivered": 0}
    cycles = 0
    while max_cycles is None or cycles < max_cycles:
        started = clock()
        summary = process_queue(settings, client, sleep=sleep, **job_options)
        cycles += 1
        for report in summary.jobs:
            totals[report.status] = totals.get(report.status, 0) + 1
            totals["publications"] += report.results
            if not report.delivered:
                totals["undelivered"] += 1
        if run_id:
            write_state(run_id, _state_snapshot(run_id, cycles, totals, summary), settings.log_dir)

        if max_cycles is not None and cycles >= max_cycles:
            break
        remaining = settings.poll_interval - (clock() - started)
        if remaining > 0:
            LOGGER.info("Próxima execução em %.0f s", remaining)
            sleep(remaining)
    return cycles


__all__ = [
    "CycleSummary",
    "JobReport",
    "process_job",
    "process_queue",
    "report_rejected_job",
    "run_forever",
    "scrape_job",
]
