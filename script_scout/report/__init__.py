"""script_scout.report: JSON and HTML writers used by the CLI."""

from script_scout.report.html_report import render_html
from script_scout.report.json_report import render_json

__all__ = ["render_json", "render_html"]
