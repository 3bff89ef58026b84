# File: script_scout/output.py
"""script_scout.output: rendering of findings and the per-URL output sinks."""

from __future__ import annotations

import threading
from typing import IO, Dict, List, Optional, Protocol, Sequence, Tuple

import click

from script_scout.crawler.models import Finding, FindingKind

__all__ = ["NO_RESULTS", "format_finding", "format_block", "ResultSink", "StreamSink", "CollectingSink"]

NO_RESULTS = "No results found"


def format_finding(finding: Finding) -> str:
    """One output line: the raw literal, or ``Possible <label> found: <value>``."""
    if finding.kind is FindingKind.STRING:
        return finding.value
    line = f"Possible {finding.label} found: {finding.value}"
    if finding.source_url:
        line += f" (Location: {finding.source_url})"
    return line


def format_block(findings: Sequence[Finding]) -> str:
    if not findings:
        return NO_RESULTS
    return "\n".join(format_finding(f) for f in findings)


class ResultSink(Protocol):
    def emit(self, url: str, findings: Sequence[Finding]) -> None: ...


class StreamSink:
    """Writes each URL's findings as one uninterrupted block.

    *stream* defaults to whatever stdout is at write time.
    """

    def __init__(self, stream: Optional[IO[str]] = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    def emit(self, url: str, findings: Sequence[Finding]) -> None:
        block = format_block(findings)
        with self._lock:
            click.echo(block, file=self._stream)


class CollectingSink:
    """Keeps emitted blocks in memory, in completion order."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.blocks: List[Tuple[str, Tuple[Finding, ...]]] = []

    def emit(self, url: str, findings: Sequence[Finding]) -> None:
        with self._lock:
            self.blocks.append((url, tuple(findings)))

    def by_url(self) -> Dict[str, List[Finding]]:
        grouped: Dict[str, List[Finding]] = {}
        for url, findings in self.blocks:
            grouped.setdefault(url, []).extend(findings)
        return grouped
