# === FILE: script_scout/scanner.py ===
"""
Crawl-and-extract orchestration.

Every URL taken from the shared queue is fetched, its scripts are discovered
(statically or from the rendered DOM) and pushed back onto the queue, and its
content is tokenized into strings or matched against the secret patterns.
Findings for one URL reach the sink as a single block.
"""
from __future__ import annotations

import asyncio
import time
from contextlib import AsyncExitStack
from typing import Iterable, List, Optional, Set
from urllib.parse import urljoin, urlsplit

from aiohttp import ClientSession, ClientTimeout

from script_scout.analysis.secrets import get_secrets
from script_scout.analysis.strings import get_strings
from script_scout.config import ScanConfig
from script_scout.crawler.browser import DOMSource, PlaywrightDOM, StaticDOM
from script_scout.crawler.fetcher import Fetcher, resolve_url
from script_scout.crawler.models import Finding, FindingKind, PageData, UrlResult
from script_scout.crawler.rate_limit import RateLimiter
from script_scout.crawler.url_queue import URLQueue
from script_scout.errors import BrowserError, InputError, NoScriptsFoundError
from script_scout.logger import logger
from script_scout.output import ResultSink, StreamSink
from script_scout.parser.html_parser import get_scripts

__all__ = ["Scanner", "start_scan"]


class Scanner:
    """Worker pool draining a :class:`URLQueue` under a dispatch rate limit."""

    def __init__(
        self,
        config: ScanConfig,
        sink: Optional[ResultSink] = None,
        dom_source: Optional[DOMSource] = None,
    ) -> None:
        self.config = config
        self.sink: ResultSink = sink if sink is not None else StreamSink()
        self.queue = URLQueue()
        self.limiter = RateLimiter(config.rate_limit, config.burst)
        self.results: List[UrlResult] = []
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None
        self._dom_source = dom_source
        self._stack = AsyncExitStack()

    async def __aenter__(self) -> Scanner:
        self.session = await self._stack.enter_async_context(
            ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
            )
        )
        self.fetcher = Fetcher(self.session, self.config)
        if self.config.dom and self._dom_source is None:
            try:
                self._dom_source = await self._stack.enter_async_context(self._make_dom_source())
            except BaseException:
                await self._stack.aclose()
                raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._stack.aclose()

    def _make_dom_source(self):
        if self.config.browser == "static":
            return StaticDOM(self.fetcher)
        return PlaywrightDOM(timeout=self.config.dom_timeout, user_agent=self.config.user_agent)

    # ------------------------------------------------------------------ #
    # Pool                                                               #
    # ------------------------------------------------------------------ #

    async def run(self, urls: Iterable[str]) -> List[UrlResult]:
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        for url in urls:
            self.queue.push(url)
        logger.info("Starting scan of %d URL(s)", len(self.queue))
        start = time.monotonic()

        pending: Set[asyncio.Task] = set()
        dispatched = 0
        try:
            while True:
                url = None
                if len(pending) < self.config.concurrency and dispatched < self.config.max_pages:
                    url = self.queue.pop()
                if url is not None:
                    await self.limiter.acquire()
                    pending.add(asyncio.create_task(self._process(url)))
                    dispatched += 1
                    continue
                if not pending:
                    break
                done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                for task in done:
                    # fatal errors surface here and cancel the rest in ``finally``
                    task.result()
        finally:
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        if len(self.queue):
            logger.warning("Page limit %d reached, %d queued URL(s) skipped", self.config.max_pages, len(self.queue))
        duration = time.monotonic() - start
        logger.info("Finished: %d URL(s) in %.2f s", dispatched, duration)
        return self.results

    async def _process(self, url: str) -> None:
        result = await self.scan_url(url)
        self.results.append(result)
        self.sink.emit(result.url, result.findings)

    # ------------------------------------------------------------------ #
    # One URL                                                            #
    # ------------------------------------------------------------------ #

    async def scan_url(self, url: str) -> UrlResult:
        target = resolve_url(url)
        page = await self.fetcher.get_contents(target)
        inline = None
        if page is not None and page.is_html:
            inline = await self._discover(page)

        texts = [t for t in (page.content if page else None, inline) if t]
        return UrlResult(target, tuple(self._extract(texts, target)))

    async def _discover(self, page: PageData) -> Optional[str]:
        """Queue the page's scripts and return its inline body, if any."""
        inline = None
        if self.config.dom:
            try:
                scripts = await self._dom_source.get_dom(page.url)
            except NoScriptsFoundError:
                logger.info("No scripts found in DOM of %s", page.url)
                return None
            except BrowserError as exc:
                logger.error("DOM inspection failed for %s: %s", page.url, exc)
                return None
            links, inline = scripts.links, scripts.inline
        else:
            links = get_scripts(page.content)

        for link in links:
            self._enqueue(page.url, link)
        return inline

    def _enqueue(self, page_url: str, link: str) -> None:
        if not link:
            return
        try:
            absolute = urljoin(page_url, link)
            scheme = urlsplit(absolute).scheme
        except ValueError as exc:
            logger.debug("Skipping malformed script %r on %s: %s", link, page_url, exc)
            return
        if scheme not in ("http", "https"):
            logger.debug("Skipping script %s on %s", link, page_url)
            return
        # only seeds may fail resolution fatally
        try:
            absolute = resolve_url(absolute)
        except InputError as exc:
            logger.debug("Skipping script %r on %s: %s", link, page_url, exc)
            return
        self.queue.push(absolute)

    def _extract(self, texts: List[str], url: str) -> List[Finding]:
        source_url = url if self.config.verify else None
        if not self.config.secrets:
            return [
                Finding(FindingKind.STRING, value, source_url=source_url)
                for text in texts
                for value in get_strings(text, self.config.noisy)
            ]

        merged: dict[str, List[str]] = {}
        for text in texts:
            for label, matches in get_secrets(text, self.config).items():
                merged.setdefault(label, []).extend(matches)
        return [
            Finding(FindingKind.SECRET, value, label=label, source_url=source_url)
            for label, values in merged.items()
            for value in values
        ]


async def start_scan(
    config: ScanConfig,
    urls: Iterable[str],
    sink: Optional[ResultSink] = None,
    dom_source: Optional[DOMSource] = None,
) -> List[UrlResult]:
    """
    Run one scan over *urls* and return the per-URL results.

    Parameters
    ----------
    config : ScanConfig
        Behaviour flags and tuning.
    urls : Iterable[str]
        Seed URLs; scripts discovered while crawling are added automatically.
    sink : ResultSink, optional
        Receives each URL's findings as they complete (stdout by default).
    dom_source : DOMSource, optional
        Overrides the DOM backend chosen from ``config.browser``.
    """
    async with Scanner(config, sink, dom_source) as scanner:
        return await scanner.run(urls)
