"""
Cliente da fila de jobs e do webhook de resultados.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

import requests

from .config import Settings
from .models import Job, RejectedJob

LOGGER = logging.getLogger(__name__)

PENDING_JOBS_PATH = "/dje-get-pending-jobs"
RECEIVER_PATH = "/dje-webhook-receiver"
SECRET_HEADER = "x-webhook-secret"


class WebhookError(RuntimeError):
    """Falha de comunicação com a fila ou com o receptor de resultados."""


class WebhookClient:
    def __init__(self, settings: Settings, session: requests.Session | None = None):
        self.base_url = settings.webhook_url.rstrip("/")
        self.timeout = settings.http_timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            SECRET_HEADER: settings.webhook_secret,
        })

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise WebhookError(f"Erro de conexão com {url}: {exc}") from exc

        if not response.ok:
            raise WebhookError(f"HTTP {response.status_code}: {response.text}")
        return response

    def get_pending_jobs(self) -> List[Job | RejectedJob]:
        """
        Busca os jobs pendentes. Aceita ``{"jobs": [...]}`` ou ``{"count": N, "jobs": [...]}``.

        Entradas com ``id`` mas sem OAB ou data voltam como ``RejectedJob`` para
        serem reportadas como falha; entradas sem ``id`` são apenas registradas no log.
        """
        response = self._request("GET", PENDING_JOBS_PATH)
        try:
            data = response.json()
        except ValueError as exc:
            raise WebhookError(f"Resposta inválida de {self.base_url}{PENDING_JOBS_PATH}: {response.text[:200]}") from exc

        raw_jobs = data.get("jobs") if isinstance(data, dict) else None
        jobs: List[Job | RejectedJob] = []
        for raw in raw_jobs or []:
            try:
                jobs.append(Job.from_dict(raw))
            except (TypeError, ValueError, AttributeError) as exc:
                rejected = RejectedJob.from_dict(raw, str(exc))
                if rejected is None:
                    LOGGER.warning("Job ignorado (sem id): %s", exc)
                    continue
                LOGGER.warning("Job %s rejeitado: %s", rejected.id, exc)
                jobs.append(rejected)
        LOGGER.info("%d job(s) encontrado(s)", len(jobs))
        return jobs

    def send_results(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        response = self._request("POST", RECEIVER_PATH, json=payload)
        # o corpo da resposta é só informativo: 2xx já confirma a entrega
        try:
            result = response.json()
        except ValueError:
            result = {"response": response.text}
        LOGGER.info("Resultado enviado: %s", result)
        return result if isinstance(result, dict) else {"response": result}
