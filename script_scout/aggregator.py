# File: script_scout/aggregator.py
"""script_scout.aggregator: summary of a finished scan for the report writers."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, TypedDict

from script_scout.crawler.models import FindingKind, UrlResult

__all__ = ["UrlEntry", "ScanReport", "aggregate_results"]


class UrlEntry(TypedDict):
    """Findings of one processed URL, JSON-ready."""

    url: str
    findings: List[Dict[str, Any]]


@dataclass(slots=True)
class ScanReport:
    """Per-URL findings plus totals by secret label (or ``"String"``)."""

    entries: List[UrlEntry] = field(default_factory=list)
    totals: Dict[str, int] = field(default_factory=dict)

    @property
    def finding_count(self) -> int:
        return sum(self.totals.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entries": self.entries,
            "totals": self.totals,
            "finding_count": self.finding_count,
        }


def aggregate_results(results: Iterable[UrlResult]) -> ScanReport:
    """Build a :class:`ScanReport`; URLs visited twice appear twice."""
    report = ScanReport()
    totals: Counter[str] = Counter()
    for result in results:
        report.entries.append(
            {"url": result.url, "findings": [f.to_dict() for f in result.findings]}
        )
        for finding in result.findings:
            key = finding.label if finding.kind is FindingKind.SECRET else FindingKind.STRING.value
            totals[key] += 1
    report.totals = dict(totals.most_common())
    return report
