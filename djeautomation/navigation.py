from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Sequence

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from .config import Settings
from .models import SearchStrategy
from .offline.parsing import parse_results_html
from .strategies import SearchOutcome

LOGGER = logging.getLogger(__name__)

FREE_TEXT_FIELD = 'input[name="dadosConsulta.pesquisaLivre"]'
START_DATE_FIELD = 'input[name="dadosConsulta.dtInicio"]'
END_DATE_FIELD = 'input[name="dadosConsulta.dtFim"]'
CADERNO_SELECT = 'select[name="dadosConsulta.cdCaderno"]'
ALL_CADERNOS = "-11"
SUBMIT_BUTTONS = ('input[type="submit"]', 'button[type="submit"]')
RESULT_AREA = ".fundocinza1, .fundocinza2, .resultado, .itemPublicacao, #divConteudo"
SETTLE_MS = 3000


def format_portal_date(value: str | datetime) -> str:
    """``2024-03-10`` -> ``10/03/2024``, formato dos campos do portal."""

    if isinstance(value, str):
        value = datetime.strptime(value, "%Y-%m-%d")
    return value.strftime("%d/%m/%Y")


def date_window(iso_date: str, days: int = 0) -> tuple[str, str]:
    target = datetime.strptime(iso_date, "%Y-%m-%d")
    delta = timedelta(days=max(0, days))
    return format_portal_date(target - delta), format_portal_date(target + delta)


def first_present(page: Page, selectors: Sequence[str]) -> str | None:
    for selector in selectors:
        if page.query_selector(selector) is not None:
            return selector
    return None


def wait_for(page: Page, selector: str, *, timeout: int) -> bool:
    try:
        page.wait_for_selector(selector, timeout=timeout)
    except PlaywrightTimeoutError:
        return False
    return True


class PortalSearcher:
    """Submete um termo na consulta avançada e devolve os blocos da página."""

    def __init__(self, page: Page, settings: Settings, target_date: str, *, settle_ms: int = SETTLE_MS) -> None:
        self.page = page
        self.settings = settings
        self.start_date, self.end_date = date_window(target_date, settings.date_window_days)
        self.settle_ms = settle_ms

    def __call__(self, strategy: SearchStrategy) -> SearchOutcome:
        try:
            return self._search(strategy.search_term)
        except PlaywrightError as exc:
            return SearchOutcome.failed(f"{type(exc).__name__}: {exc}")

    def _search(self, term: str) -> SearchOutcome:
        page = self.page
        settings = self.settings
        LOGGER.info("Acessando %s", settings.portal_url)
        page.goto(settings.portal_url, wait_until="networkidle", timeout=settings.navigation_timeout_ms)

        if not wait_for(page, FREE_TEXT_FIELD, timeout=settings.selector_timeout_ms):
            return SearchOutcome.failed("Formulário de consulta não encontrado")

        page.fill(FREE_TEXT_FIELD, term)
        page.fill(START_DATE_FIELD, self.start_date)
        page.fill(END_DATE_FIELD, self.end_date)
        if first_present(page, (CADERNO_SELECT,)):
            page.select_option(CADERNO_SELECT, ALL_CADERNOS)

        submit = first_present(page, SUBMIT_BUTTONS)
        if submit is None:
            return SearchOutcome.failed("Botão de pesquisa não encontrado")
        LOGGER.info("Submetendo busca %r de %s a %s", term, self.start_date, self.end_date)
        page.click(submit)

        if not wait_for(page, RESULT_AREA, timeout=settings.selector_timeout_ms):
            LOGGER.warning("Timeout aguardando resultados para %r", term)
        if self.settle_ms:
            page.wait_for_timeout(self.settle_ms)

        html = page.content()
        LOGGER.debug("HTML: %d caracteres", len(html))
        parsed = parse_results_html(html)
        if parsed.no_results:
            return SearchOutcome.no_results()
        return SearchOutcome.found(parsed.blocks)


__all__ = ["PortalSearcher", "date_window", "first_present", "format_portal_date", "wait_for"]
