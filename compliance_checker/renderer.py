"""Headless browser rendering of target pages.

A single Chromium process is shared by every request. Each render gets its
own browser context and page so cookies, storage and interception handlers
never leak between requests; both are closed before ``render`` returns.
"""
from __future__ import annotations

import asyncio
import logging
import os
import time
from typing import Optional

from playwright.async_api import Browser, Error as PlaywrightError, Playwright, Route, async_playwright

from .cleaner import clean_webpage_content
from .errors import RenderError

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/115.0.0.0 Safari/537.36"
)
EXTRA_HEADERS = {"Accept-Language": "en-US,en;q=0.9"}
DEFAULT_NAVIGATION_TIMEOUT_MS = 15000

BLOCKED_RESOURCE_TYPES = frozenset({"image", "stylesheet", "font", "media"})
BLOCKED_DOMAINS = ("google-analytics.com", "doubleclick.net", "facebook.net")

BROWSER_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]

_BODY_TEXT_SCRIPT = "() => (document.body && document.body.innerText) || ''"


def _navigation_timeout_ms() -> int:
    raw = os.getenv("NAVIGATION_TIMEOUT_MS")
    if not raw:
        return DEFAULT_NAVIGATION_TIMEOUT_MS
    try:
        value = int(raw)
    except ValueError:
        logger.warning(
            "Invalid NAVIGATION_TIMEOUT_MS value %s; falling back to %s",
            raw,
            DEFAULT_NAVIGATION_TIMEOUT_MS,
        )
        return DEFAULT_NAVIGATION_TIMEOUT_MS
    if value <= 0:
        return DEFAULT_NAVIGATION_TIMEOUT_MS
    return value


def _headless() -> bool:
    return os.getenv("BROWSER_HEADLESS", "true").strip().lower() not in {"0", "false", "no"}


def should_block(resource_type: str, url: str) -> bool:
    """Return True for requests that do not contribute to the page text."""

    if resource_type in BLOCKED_RESOURCE_TYPES:
        return True
    return any(domain in url for domain in BLOCKED_DOMAINS)


async def _handle_route(route: Route) -> None:
    request = route.request
    if should_block(request.resource_type, request.url):
        await route.abort()
    else:
        await route.continue_()


async def _launch_browser() -> tuple[Playwright, Browser]:
    playwright = await async_playwright().start()
    try:
        browser = await playwright.chromium.launch(headless=_headless(), args=BROWSER_ARGS)
    except BaseException:
        await playwright.stop()
        raise
    return playwright, browser


async def _close_quietly(resource, label: str, url: str) -> None:
    # A close failure must not mask the error that ended the render.
    try:
        await resource.close()
    except PlaywrightError as exc:
        logger.warning("Failed to close %s for %s: %s", label, url, exc)
    else:
        logger.debug("Closed %s for: %s", label, url)


class PageRenderer:
    """Owns the shared browser and renders one URL per call."""

    def __init__(self) -> None:
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._lock = asyncio.Lock()

    @property
    def browser(self) -> Optional[Browser]:
        return self._browser

    async def _get_browser(self) -> Browser:
        browser = self._browser
        if browser is not None and browser.is_connected():
            return browser
        # Concurrent first callers wait here for a single launch.
        async with self._lock:
            if self._browser is not None and not self._browser.is_connected():
                logger.warning("Shared browser disconnected; relaunching")
                await self._release()
            if self._browser is None:
                logger.info("Launching headless browser")
                start = time.perf_counter()
                self._playwright, self._browser = await _launch_browser()
                logger.info("Browser launched in %.2fs", time.perf_counter() - start)
            return self._browser

    async def render(self, url: str) -> str:
        """Load ``url`` and return its cleaned visible text."""

        start = time.perf_counter()
        try:
            browser = await self._get_browser()
            logger.info("Creating new page for URL: %s", url)
            context = await browser.new_context(user_agent=USER_AGENT, extra_http_headers=EXTRA_HEADERS)
        except PlaywrightError as exc:
            raise RenderError(f"Could not open a page for {url}: {exc}") from exc

        try:
            page = await context.new_page()
            try:
                raw_text = await self._read_page(page, url)
            finally:
                await _close_quietly(page, "page", url)
        except PlaywrightError as exc:
            logger.warning("Error fetching %s: %s", url, exc)
            raise RenderError(f"Failed to render {url}: {exc}") from exc
        finally:
            await _close_quietly(context, "browser context", url)

        cleaned = clean_webpage_content(raw_text)
        logger.info(
            "Finished fetching URL: %s (text length: %d) in %.2fs",
            url,
            len(cleaned),
            time.perf_counter() - start,
        )
        return cleaned

    async def _read_page(self, page, url: str) -> str:
        await page.route("**/*", _handle_route)
        logger.info("Navigating to: %s", url)
        response = await page.goto(url, wait_until="domcontentloaded", timeout=_navigation_timeout_ms())
        if response is not None and not response.ok:
            raise RenderError(f"{url} responded with HTTP {response.status}")
        raw_text = await page.evaluate(_BODY_TEXT_SCRIPT)
        return raw_text or ""

    async def _release(self) -> None:
        browser, playwright = self._browser, self._playwright
        self._browser = None
        self._playwright = None
        try:
            if browser is not None:
                await browser.close()
        finally:
            if playwright is not None:
                await playwright.stop()

    async def shutdown(self) -> None:
        """Close the shared browser; a no-op when none was launched."""

        async with self._lock:
            if self._browser is None and self._playwright is None:
                return
            logger.info("Closing browser")
            await self._release()
