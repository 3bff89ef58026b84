"""script_scout.report.html_report: HTML report rendered with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from script_scout.aggregator import ScanReport

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


def render_html(
    report: ScanReport,
    output_path: Union[Path, str],
    template_dir: Optional[Union[Path, str]] = None,
) -> Path:
    """Render *report* through ``report.html.j2`` and save it.

    Args:
        report: ScanReport object.
        output_path: path of the resulting HTML file.
        template_dir: directory holding ``report.html.j2``; the packaged
            template is used when omitted.

    Returns:
        Path of the written HTML file.
    """
    template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template("report.html.j2")

    context: dict[str, Any] = {
        "entries": report.entries,
        "totals": report.totals,
        "finding_count": report.finding_count,
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
