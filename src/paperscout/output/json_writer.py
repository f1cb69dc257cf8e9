"""JSON export of harvested records."""

import logging
from pathlib import Path
from typing import Any

from paperscout.core.models import PaperRecord
from paperscout.pipeline.harvest import RunSummary
from paperscout.utils.text import json_dumps

logger = logging.getLogger(__name__)


def summary_to_dict(summary: RunSummary) -> dict[str, Any]:
    """Plain-dict view of a run summary."""
    return {
        "criteria": summary.criteria.model_dump(),
        "enumeration_status": summary.enumeration_status.value,
        "found_elements": summary.found_elements,
        "processed": summary.processed,
        "succeeded": summary.succeeded,
        "partial": summary.partial,
        "failed": summary.failed,
        "elapsed_seconds": round(summary.elapsed_seconds, 2),
        "screenshot": summary.screenshot,
    }


def build_payload(records: list[PaperRecord], summary: RunSummary) -> dict[str, Any]:
    """Records plus summary, ready for serialization."""
    return {
        "summary": summary_to_dict(summary),
        "papers": [record.model_dump() for record in records],
    }


def write_json(records: list[PaperRecord], summary: RunSummary, output_path: Path | str) -> Path:
    """Write records and summary as indented JSON."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json_dumps(build_payload(records, summary), indent=2) + "\n", encoding="utf-8")
    logger.info("Wrote %d papers to %s", len(records), path)
    return path


__all__ = ["summary_to_dict", "build_payload", "write_json"]
