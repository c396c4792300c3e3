"""Playwright session helper for callers that need a live page to analyze."""
from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from playwright.sync_api import Page, sync_playwright

from job_hunter.log import get_logger

log = get_logger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)
VIEWPORT = {"width": 1280, "height": 900}


def _sanitize_browsers_path() -> None:
    """Drop a PLAYWRIGHT_BROWSERS_PATH that points nowhere so the default cache is used."""
    pw = os.environ.get("PLAYWRIGHT_BROWSERS_PATH", "")
    if pw and pw != "0" and not Path(pw).exists():
        log.debug("Ignoring missing PLAYWRIGHT_BROWSERS_PATH=%s", pw)
        os.environ.pop("PLAYWRIGHT_BROWSERS_PATH", None)


@contextmanager
def open_page(url: str | None = None, *, headless: bool = True, timeout_ms: int = 20_000) -> Iterator[Page]:
    """Launch Chromium, yield one page (navigated to *url* if given), always close."""
    _sanitize_browsers_path()
    with sync_playwright() as p:
        browser = p.chromium.launch(headless=headless)
        try:
            context = browser.new_context(viewport=VIEWPORT, user_agent=USER_AGENT)
            page = context.new_page()
            page.set_default_timeout(timeout_ms)
            if url:
                log.info("Opening %s", url)
                page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)
            yield page
        finally:
            browser.close()
