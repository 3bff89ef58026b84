# === FILE: script_scout/parser/html_parser.py ===
"""HTML parsing utilities for ScriptScout.

Only already-fetched markup is parsed here; nothing in this module touches
the network. Two views of a document's ``<script>`` elements are exposed:

* :func:`get_scripts`: the ``src`` of every external script, in document order.
* :func:`get_inline_scripts`: the non-empty bodies of scripts without ``src``.
"""
from __future__ import annotations

from collections.abc import Sequence

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__: Sequence[str] = ("get_scripts", "get_inline_scripts")


def get_scripts(html: str) -> list[str]:
    """Return the ``src`` attribute of each ``<script src=…>`` in *html*."""
    soup = BeautifulSoup(html or "", "html.parser")
    scripts: list[str] = []
    for tag in soup.find_all("script", src=True):
        if not isinstance(tag, Tag):
            continue
        src = tag.get("src")
        if isinstance(src, str):
            scripts.append(src.strip())
    return scripts


def get_inline_scripts(html: str) -> list[str]:
    soup = BeautifulSoup(html or "", "html.parser")
    bodies: list[str] = []
    for tag in soup.find_all("script"):
        if not isinstance(tag, Tag) or tag.has_attr("src"):
            continue
        body = tag.string or tag.get_text()
        if body and body.strip():
            bodies.append(str(body))
    return bodies
