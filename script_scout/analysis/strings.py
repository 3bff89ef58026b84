# script_scout/analysis/strings.py
"""
Lexical recovery of quoted literals from HTML or JavaScript text.

The scanner knows three delimiters (``'``, ``"`` and backtick) and the
backslash escape. It does not parse JavaScript: comments, regex literals and
apostrophes in prose are all treated as plain characters.
"""
from __future__ import annotations

from typing import List

from script_scout.utils import looks_minified

__all__ = ["DELIMITERS", "get_strings"]

DELIMITERS = frozenset("'\"`")


def _keep_tail(fragment: str, noisy: bool) -> bool:
    if not fragment:
        return False
    # unterminated at EOF but closed by a backtick: a finished template literal
    if fragment.endswith("`"):
        return True
    return noisy or not looks_minified(fragment)


def get_strings(text: str, noisy: bool = False) -> List[str]:
    """Return every quoted literal in *text*, in order of appearance.

    Delimiters are not part of the values. An escaped character is kept with
    its backslash (``'it\\'s'`` gives ``it\\'s``). A literal still open at end
    of input is emitted once, unless it looks like minified code and *noisy*
    is off.
    """
    found: List[str] = []
    delimiter = None
    escaped = False
    current: List[str] = []

    for char in text:
        if delimiter is None:
            if char in DELIMITERS:
                delimiter = char
                current = []
            continue

        if escaped:
            current.append("\\" + char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == delimiter:
            if current:
                found.append("".join(current))
            delimiter = None
            current = []
        else:
            current.append(char)

    if delimiter is not None:
        if escaped:
            current.append("\\")
        tail = "".join(current)
        if _keep_tail(tail, noisy):
            found.append(tail)

    return found
