"""Dublês de Playwright e do webhook usados pelos testes."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from djeautomation.browser import BrowserSession
from djeautomation.config import Settings
from djeautomation.webhook import WebhookError


class FakePage:
    """Página que devolve HTML fixo (ou um HTML por busca) e registra as ações."""

    def __init__(
        self,
        pages: List[str] | str,
        *,
        missing: tuple[str, ...] = (),
        timeouts: tuple[str, ...] = (),
        goto_error: Exception | None = None,
    ) -> None:
        self.pages = [pages] if isinstance(pages, str) else list(pages)
        self.missing = set(missing)
        self.timeouts = set(timeouts)
        self.goto_error = goto_error
        self.filled: List[tuple[str, str]] = []
        self.selected: List[tuple[str, str]] = []
        self.clicked: List[str] = []
        self.visits = 0
        self.searches = 0

    def goto(self, url: str, **kwargs: Any) -> None:
        if self.goto_error is not None:
            raise self.goto_error
        self.visits += 1

    def wait_for_selector(self, selector: str, **kwargs: Any) -> None:
        if selector in self.timeouts:
            raise PlaywrightTimeoutError(f"Timeout waiting for {selector}")

    def query_selector(self, selector: str) -> object | None:
        return None if selector in self.missing else object()

    def fill(self, selector: str, value: str) -> None:
        self.filled.append((selector, value))

    def select_option(self, selector: str, value: str) -> None:
        self.selected.append((selector, value))

    def click(self, selector: str) -> None:
        self.clicked.append(selector)
        self.searches += 1

    def wait_for_timeout(self, timeout: float) -> None:
        return None

    def content(self) -> str:
        index = min(self.searches, len(self.pages)) - 1
        return self.pages[max(index, 0)]


@dataclass
class SessionRecorder:
    opened: int = 0
    closed: int = 0
    headless: List[bool] = field(default_factory=list)


def session_factory_for(page: Any, recorder: SessionRecorder):
    @contextmanager
    def _factory(settings, headless=True):
        recorder.opened += 1
        recorder.headless.append(headless)
        try:
            yield BrowserSession(browser=None, context=None, page=page)
        finally:
            recorder.closed += 1

    return _factory


class FakeClient:
    def __init__(self, jobs=None, *, fetch_error: str | None = None, send_error: str | None = None) -> None:
        self.jobs = list(jobs or [])
        self.fetch_error = fetch_error
        self.send_error = send_error
        self.sent: List[Dict[str, Any]] = []
        self.fetches = 0

    def get_pending_jobs(self):
        self.fetches += 1
        if self.fetch_error:
            raise WebhookError(self.fetch_error)
        return list(self.jobs)

    def send_results(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        if self.send_error:
            raise WebhookError(self.send_error)
        self.sent.append(payload)
        return {"ok": True}


def make_settings(**overrides: Any) -> Settings:
    values: Dict[str, Any] = dict(
        webhook_url="https://hooks.example.test/functions/v1",
        webhook_secret="segredo",
        poll_interval=300,
        job_pause=5,
        portal_url="https://dje.example.test/cdje/consultaAvancada.do",
        user_agent="test-agent",
        navigation_timeout_ms=1000,
        selector_timeout_ms=1000,
        http_timeout=3,
        date_window_days=0,
        log_dir=Path("logs"),
    )
    values.update(overrides)
    return Settings(**values)
