"""Harvesting pipeline."""

from .harvest import HarvestPipeline, RunSummary, harvest

__all__ = ["HarvestPipeline", "RunSummary", "harvest"]
