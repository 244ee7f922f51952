from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

from dotenv import load_dotenv


load_dotenv()

DEFAULT_PORTAL_URL = "https://dje.tjsp.jus.br/cdje/consultaAvancada.do"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Valor inválido para {name}: {raw!r}") from exc


@dataclass(slots=True, frozen=True)
class Settings:
    webhook_url: str
    webhook_secret: str
    poll_interval: int
    job_pause: int
    portal_url: str
    user_agent: str
    navigation_timeout_ms: int
    selector_timeout_ms: int
    http_timeout: int
    date_window_days: int
    log_dir: Path

    @staticmethod
    def load(
        *,
        webhook_url: str | None = None,
        webhook_secret: str | None = None,
        poll_interval: int | None = None,
        job_pause: int | None = None,
        portal_url: str | None = None,
        user_agent: str | None = None,
        date_window_days: int | None = None,
        log_dir: str | Path | None = None,
        allow_empty_webhook: bool = False,
    ) -> "Settings":
        url_value = (webhook_url if webhook_url is not None else os.getenv("WEBHOOK_URL", "")).strip().rstrip("/")
        secret_value = (webhook_secret if webhook_secret is not None else os.getenv("WEBHOOK_SECRET", "")).strip()

        if (not url_value or not secret_value) and not allow_empty_webhook:
            raise ValueError(
                "Variáveis não configuradas. Defina WEBHOOK_URL e WEBHOOK_SECRET no ambiente, arquivo .env ou parâmetros."
            )

        portal_value = (portal_url or os.getenv("DJE_PORTAL_URL", DEFAULT_PORTAL_URL)).strip()
        user_agent_value = (
            user_agent if user_agent is not None else os.getenv("DJE_USER_AGENT", DEFAULT_USER_AGENT)
        ).strip()

        log_dir_raw = log_dir or os.getenv("DJE_LOG_DIR", "logs")

        return Settings(
            webhook_url=url_value,
            webhook_secret=secret_value,
            poll_interval=poll_interval if poll_interval is not None else _env_int("DJE_POLL_INTERVAL", 300),
            job_pause=job_pause if job_pause is not None else _env_int("DJE_JOB_PAUSE", 5),
            portal_url=portal_value,
            user_agent=user_agent_value,
            navigation_timeout_ms=_env_int("DJE_NAV_TIMEOUT_MS", 60000),
            selector_timeout_ms=_env_int("DJE_SELECTOR_TIMEOUT_MS", 30000),
            http_timeout=_env_int("DJE_HTTP_TIMEOUT", 30),
            date_window_days=(
                date_window_days if date_window_days is not None else _env_int("DJE_DATE_WINDOW_DAYS", 0)
            ),
            log_dir=Path(log_dir_raw).expanduser(),
        )

    def with_updates(
        self,
        *,
        webhook_url: str | None = None,
        webhook_secret: str | None = None,
        poll_interval: int | None = None,
        job_pause: int | None = None,
        date_window_days: int | None = None,
        log_dir: str | Path | None = None,
    ) -> "Settings":
        updates: dict[str, object] = {}
        if webhook_url is not None:
            updates["webhook_url"] = webhook_url.strip().rstrip("/")
        if webhook_secret is not None:
            updates["webhook_secret"] = webhook_secret.strip()
        if poll_interval is not None:
            updates["poll_interval"] = int(poll_interval)
        if job_pause is not None:
            updates["job_pause"] = int(job_pause)
        if date_window_days is not None:
            updates["date_window_days"] = int(date_window_days)
        if log_dir is not None:
            updates["log_dir"] = Path(log_dir).expanduser()
        if not updates:
            return self
        return replace(self, **updates)
