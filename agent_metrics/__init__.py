"""Call-center agent performance metrics package."""

from .analyzer import WorkforceAnalyzer
from .exceptions import FileProcessingError
from .filters import dataset_options, filter_records
from .ingest import load_records, parse_records
from .metrics import coaching_candidates, compute_metrics, top_performers
from .models import (
    AgentMetrics,
    DatasetOptions,
    FilterSelection,
    InteractionRecord,
    MetricsReport,
    WorkforceSummary,
)
from .storage import MetricsStorage

__all__ = [
    "AgentMetrics",
    "DatasetOptions",
    "FileProcessingError",
    "FilterSelection",
    "InteractionRecord",
    "MetricsReport",
    "MetricsStorage",
    "WorkforceAnalyzer",
    "WorkforceSummary",
    "coaching_candidates",
    "compute_metrics",
    "dataset_options",
    "filter_records",
    "load_records",
    "parse_records",
    "top_performers",
]
