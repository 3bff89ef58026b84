# script_scout/crawler/models.py
"""
Data models shared by the crawler, the extractors and the output layer.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


@dataclass(slots=True)
class PageData:
    """Fetched body text tied to the URL it came from."""

    url: str
    content: str
    content_type: str = ""

    @property
    def is_html(self) -> bool:
        # servers that omit Content-Type still get script discovery
        return not self.content_type or "html" in self.content_type.lower()


@dataclass(slots=True, frozen=True)
class DomScripts:
    """Result of one DOM pass: external links, or a single inline body."""

    links: Tuple[str, ...] = ()
    inline: Optional[str] = None


class FindingKind(str, Enum):
    STRING = "String"
    SECRET = "Secret"


@dataclass(slots=True, frozen=True)
class Finding:
    """One extracted literal or secret match."""

    kind: FindingKind
    value: str
    label: Optional[str] = None
    source_url: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "label": self.label,
            "value": self.value,
            "source_url": self.source_url,
        }


@dataclass(slots=True, frozen=True)
class UrlResult:
    """All findings produced while processing one URL."""

    url: str
    findings: Tuple[Finding, ...] = field(default_factory=tuple)
