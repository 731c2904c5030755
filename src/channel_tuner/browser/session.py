from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Callable

from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    async_playwright,
)

from ..errors import BrowserError

logger = logging.getLogger(__name__)

RestartListener = Callable[[], None]


class BrowserSession:
    """Thin Playwright wrapper that owns one page.

    Session identity is the cache invalidation boundary: listeners registered
    with :meth:`on_restart` run every time the browser is torn down and
    relaunched.
    """

    def __init__(
        self,
        headless: bool = True,
        navigation_timeout_ms: int = 30000,
        user_data_dir: Path | None = None,
    ) -> None:
        self._headless = headless
        self._navigation_timeout_ms = navigation_timeout_ms
        self._user_data_dir = user_data_dir.expanduser() if user_data_dir else None
        self._playwright = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None
        self._restart_listeners: list[RestartListener] = []
        self.session_id: str | None = None

    async def __aenter__(self) -> "BrowserSession":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        await self.stop()

    def on_restart(self, listener: RestartListener) -> None:
        self._restart_listeners.append(listener)

    async def start(self) -> None:
        if self._page is not None:
            return
        playwright = await async_playwright().start()
        self._playwright = playwright

        if self._user_data_dir is not None:
            self._user_data_dir.mkdir(parents=True, exist_ok=True)
            context = await playwright.chromium.launch_persistent_context(
                str(self._user_data_dir),
                headless=self._headless,
            )
            page = context.pages[0] if context.pages else await context.new_page()
            browser = context.browser
        else:
            browser = await playwright.chromium.launch(headless=self._headless)
            context = await browser.new_context()
            page = await context.new_page()

        self._browser = browser
        self._context = context
        self._page = page
        self.session_id = uuid.uuid4().hex
        logger.info("Browser session %s started", self.session_id)

    async def stop(self) -> None:
        if self._page is not None:
            await self._page.close()
        if self._context is not None:
            await self._context.close()
        if self._browser is not None:
            await self._browser.close()
        if self._playwright is not None:
            await self._playwright.stop()
        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None
        self.session_id = None

    async def restart(self) -> None:
        previous = self.session_id
        await self.stop()
        for listener in self._restart_listeners:
            listener()
        await self.start()
        logger.info("Browser session %s replaced %s", self.session_id, previous)

    @property
    def page(self) -> Page:
        if self._page is None:
            raise BrowserError("Browser not started")
        return self._page

    async def open_url(self, url: str) -> None:
        try:
            await self.page.goto(url, wait_until="domcontentloaded", timeout=self._navigation_timeout_ms)
        except PlaywrightError as exc:
            raise BrowserError(f"Failed to open {url}: {exc}") from exc
