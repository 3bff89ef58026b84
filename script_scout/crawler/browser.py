# script_scout/crawler/browser.py
"""
Script discovery from a rendered DOM.

:class:`PlaywrightDOM` drives headless Chromium and reads ``document.scripts``
after the page has rendered, so scripts injected at runtime are seen too.
:class:`StaticDOM` offers the same capability from server-delivered HTML for
environments without a browser runtime.
"""
from __future__ import annotations

import asyncio
from typing import Any, Iterable, List, Mapping, Optional, Protocol

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from script_scout.crawler.fetcher import Fetcher
from script_scout.crawler.models import DomScripts
from script_scout.errors import BrowserError, NoScriptsFoundError
from script_scout.logger import logger
from script_scout.parser.html_parser import get_inline_scripts, get_scripts

__all__ = ("DOMSource", "PlaywrightDOM", "StaticDOM", "collect_scripts")

_SCRIPTS_JS = """
() => [...document.scripts].map(script => ({
    src: script.src,
    content: script.src ? '' : script.textContent,
}))
"""

_LAUNCH_ARGS = [
    "--no-first-run",
    "--no-default-browser-check",
    "--disable-dev-shm-usage",
]


class DOMSource(Protocol):
    async def get_dom(self, url: str) -> DomScripts: ...


def collect_scripts(entries: Iterable[Mapping[str, Any]]) -> DomScripts:
    """Reduce ``{src, content}`` entries to either links or one inline body.

    External links take precedence; inline bodies are only returned when the
    page has no external scripts, joined into a single body.
    """
    links: List[str] = []
    inline: List[str] = []
    for entry in entries:
        src = (entry.get("src") or "").strip()
        content = entry.get("content") or ""
        if src:
            links.append(src)
        elif content.strip():
            inline.append(content)

    if links:
        return DomScripts(links=tuple(links))
    if inline:
        return DomScripts(inline="\n".join(inline))
    raise NoScriptsFoundError("no scripts found")


class PlaywrightDOM:
    """One headless Chromium per run, one fresh browser context per URL."""

    def __init__(self, timeout: float = 30.0, user_agent: Optional[str] = None) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._playwright = None
        self._browser = None

    async def __aenter__(self) -> PlaywrightDOM:
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(headless=True, args=_LAUNCH_ARGS)
        except PlaywrightError as exc:
            await self._shutdown()
            raise BrowserError(f"Could not launch headless browser: {exc}") from exc
        logger.debug("Headless browser started")
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._shutdown()

    async def _shutdown(self) -> None:
        if self._browser is not None:
            try:
                await self._browser.close()
            except PlaywrightError as exc:
                logger.debug("Error closing browser: %s", exc)
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None

    async def get_dom(self, url: str) -> DomScripts:
        if self._browser is None:
            raise BrowserError("Browser not started")
        try:
            entries = await asyncio.wait_for(self._evaluate(url), timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            raise BrowserError(f"Timed out after {self.timeout:g}s rendering {url}") from exc
        except PlaywrightError as exc:
            raise BrowserError(f"Could not render {url}: {exc}") from exc
        return collect_scripts(entries)

    async def _evaluate(self, url: str) -> List[Mapping[str, Any]]:
        context = await self._browser.new_context(user_agent=self.user_agent, ignore_https_errors=True)
        try:
            page = await context.new_page()
            await page.goto(url, wait_until="domcontentloaded")
            await page.wait_for_selector("body", state="visible")
            return await page.evaluate(_SCRIPTS_JS)
        finally:
            await context.close()


class StaticDOM:
    """DOM capability backed by the plain HTTP response."""

    def __init__(self, fetcher: Fetcher) -> None:
        self.fetcher = fetcher

    async def __aenter__(self) -> StaticDOM:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get_dom(self, url: str) -> DomScripts:
        page = await self.fetcher.get_contents(url)
        if page is None:
            raise BrowserError(f"Could not load {url}")
        entries = [{"src": src, "content": ""} for src in get_scripts(page.content)]
        entries += [{"src": "", "content": body} for body in get_inline_scripts(page.content)]
        return collect_scripts(entries)
