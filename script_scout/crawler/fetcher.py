# script_scout/crawler/fetcher.py
"""
Fetcher module: resolves URLs against a base and retrieves their body text.

Per-URL failures (network errors, timeouts, non-200 statuses) are logged and
reported as "no content" so that one dead link never stops a crawl. Only
URLs that cannot be parsed at all propagate, as :class:`InputError`.
"""
from __future__ import annotations

import asyncio
import re
from typing import Optional
from urllib.parse import urlsplit

from aiohttp import ClientError, ClientSession, ClientTimeout, InvalidURL

from script_scout.config import ScanConfig
from script_scout.crawler.models import PageData
from script_scout.errors import InputError, TransientFetchError
from script_scout.logger import logger

__all__ = ["Fetcher", "resolve_url"]

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


def _ensure_scheme(url: str) -> str:
    return url if _SCHEME_RE.match(url) else f"https://{url}"


def resolve_url(url: str, base_url: str = "") -> str:
    """
    Turn *url* into an absolute URL.

    ``/path`` is appended to *base_url*, ``//host/path`` borrows the scheme of
    *base_url*, and anything without a scheme is assumed to be ``https://``.
    """
    url = url.strip()
    if not url:
        raise InputError("Attempted to get contents of empty URL")

    base = base_url.strip()
    if url.startswith("//"):
        scheme = urlsplit(_ensure_scheme(base)).scheme if base else "https"
        resolved = f"{scheme}:{url}"
    elif url.startswith("/"):
        if not base:
            raise InputError(f"Cannot resolve relative URL {url!r} without a base URL")
        resolved = _ensure_scheme(base).rstrip("/") + url
    else:
        resolved = _ensure_scheme(url)

    try:
        netloc = urlsplit(resolved).netloc
    except ValueError as exc:
        raise InputError(f"Could not parse URL {url!r}: {exc}") from exc
    if not netloc:
        raise InputError(f"Could not parse URL {url!r}: no host")
    return resolved


class Fetcher:
    """Issues GET requests through a shared aiohttp session.

    Every request carries the timeout and User-Agent of *config*, whatever the
    session defaults are.
    """

    def __init__(self, session: ClientSession, config: ScanConfig) -> None:
        self.session = session
        self.config = config
        self._timeout = ClientTimeout(total=config.timeout)
        self._headers = {"User-Agent": config.user_agent}

    async def get_contents(self, url: str, base_url: str = "") -> Optional[PageData]:
        """
        Fetch *url* (resolved against *base_url*).

        Returns PageData on HTTP 200, ``None`` on any transient failure.
        """
        target = resolve_url(url, base_url)
        try:
            return await self._get(target)
        except TransientFetchError as exc:
            logger.warning("Could not fetch %s: %s", exc.url, exc.reason)
            return None

    async def _get(self, url: str) -> PageData:
        try:
            async with self.session.get(
                url, timeout=self._timeout, headers=self._headers, raise_for_status=False
            ) as resp:
                if resp.status != 200:
                    raise TransientFetchError(url, f"status code error: {resp.status} {resp.reason or ''}".rstrip())
                text = await resp.text(errors="replace")
                return PageData(url, text, resp.headers.get("Content-Type", ""))
        except InvalidURL as exc:
            raise InputError(f"Could not parse URL {url!r}: {exc}") from exc
        except asyncio.TimeoutError as exc:
            raise TransientFetchError(url, "timed out") from exc
        except ClientError as exc:
            raise TransientFetchError(url, str(exc) or type(exc).__name__) from exc
