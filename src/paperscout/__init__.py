"""paperscout: resilient harvesting of arXiv paper metadata through a browser."""

from paperscout.core.models import PaperRecord, PaperReference, SearchCriteria
from paperscout.pipeline.harvest import HarvestPipeline, RunSummary, harvest

__version__ = "0.1.0"

__all__ = [
    "SearchCriteria",
    "PaperReference",
    "PaperRecord",
    "HarvestPipeline",
    "RunSummary",
    "harvest",
    "__version__",
]
