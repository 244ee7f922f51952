from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from playwright.sync_api import Browser, BrowserContext, Page, sync_playwright

from djeautomation.config import Settings


LAUNCH_ARGS = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
)
VIEWPORT = {"width": 1920, "height": 1080}


@dataclass(slots=True)
class BrowserSession:
    browser: Browser
    context: BrowserContext
    page: Page


@contextmanager
def launch_session(settings: Settings, headless: bool = True) -> Iterator[BrowserSession]:
    """Abre um Chromium exclusivo para um job; sempre fecha ao sair."""

    with sync_playwright() as p:
        browser = p.chromium.launch(headless=headless, args=list(LAUNCH_ARGS))
        try:
            context = browser.new_context(user_agent=settings.user_agent, viewport=VIEWPORT)
            try:
                page = context.new_page()
                page.set_default_timeout(settings.navigation_timeout_ms)
                yield BrowserSession(browser=browser, context=context, page=page)
            finally:
                context.close()
        finally:
            browser.close()
