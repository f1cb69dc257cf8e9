"""HTML report generation."""

import logging
from datetime import datetime, timezone
from importlib import resources
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from paperscout.core.models import PaperRecord
from paperscout.pipeline.harvest import RunSummary

logger = logging.getLogger(__name__)


def _get_builtin_template_dir() -> Path:
    """Get path to built-in templates directory."""
    return Path(str(resources.files("paperscout.templates")))


def render_html(
    records: list[PaperRecord],
    summary: RunSummary,
    *,
    template_dir: Path | None = None,
    template_name: str = "report.html",
) -> str:
    """Render the HTML report for one run.

    Args:
        records: Harvested records in listing order.
        summary: Run summary.
        template_dir: Directory containing templates. If None, uses built-in templates.
        template_name: Name of template file.

    Returns:
        Rendered HTML.
    """
    if template_dir is None:
        template_dir = _get_builtin_template_dir()

    template_path = template_dir / template_name
    if not template_path.exists():
        raise FileNotFoundError(f"Template {template_name} not found in {template_dir}")

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml"]),
    )
    template = env.get_template(template_name)
    return template.render(
        records=records,
        summary=summary,
        criteria=summary.criteria,
        generated_at=datetime.now(timezone.utc),
    )


def write_html(
    records: list[PaperRecord],
    summary: RunSummary,
    output_path: Path | str,
    **kwargs,
) -> Path:
    """Render the report and write it to ``output_path``."""
    rendered = render_html(records, summary, **kwargs)
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(rendered, encoding="utf-8")
    logger.info("Wrote HTML report with %d papers to %s", len(records), path)
    return path


__all__ = ["render_html", "write_html"]
