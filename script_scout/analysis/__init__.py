"""Lexical string extraction and secret matching."""

from script_scout.analysis.secrets import get_secrets, pattern_table
from script_scout.analysis.strings import get_strings

__all__ = ["get_strings", "get_secrets", "pattern_table"]
