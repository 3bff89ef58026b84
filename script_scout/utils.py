# File: script_scout/utils.py
"""script_scout.utils: URL-list loading and the minified-code heuristic."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Sequence, Union

from script_scout.logger import logger

__all__: Sequence[str] = (
    "looks_minified",
    "read_url_list",
)

_VAR_RE = re.compile(r"\bvar\b")
_RETURN_RE = re.compile(r"\breturn\b")


def looks_minified(text: str) -> bool:
    """True when *text* holds ``function(``, a standalone ``var`` and a standalone ``return``.

    Minified bundles often surface as one enormous "string" once a quote goes
    unmatched; those fragments trip all three tokens at once.
    """
    return "function(" in text and bool(_VAR_RE.search(text)) and bool(_RETURN_RE.search(text))


def read_url_list(path: Union[str, Path]) -> List[str]:
    """Read a URL list, one per line; blank lines and surrounding whitespace are dropped."""
    p = Path(path).expanduser()
    if not p.is_file():
        logger.error("URL list not found: %s", p)
        raise FileNotFoundError(f"URL list file not found: {p}")
    urls = [line.strip() for line in p.read_text(encoding="utf-8").splitlines() if line.strip()]
    logger.debug("Loaded %d URLs from %s", len(urls), p)
    return urls
