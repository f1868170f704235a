"""Workforce analyzer producing agent metrics for a batch of interactions."""

from loguru import logger

from .constants import LogMessage, SortKey
from .formatters import format_duration
from .metrics import compute_metrics
from .models import FilterSelection, InteractionRecord, MetricsReport


class WorkforceAnalyzer:
    """Computes agent performance metrics and logs the workforce summary.

    Holds no state between runs: every call to analyze recomputes from the
    records it is given.

    Attributes:
        sort_by: Ordering applied to the agent list.
    """

    def __init__(self, *, sort_by: SortKey = SortKey.INTERACTIONS):
        """Initialize the WorkforceAnalyzer.

        Args:
            sort_by: Ordering applied to the agent list.
        """
        self.sort_by = sort_by

    def analyze(
        self,
        *,
        records: list[InteractionRecord],
        selection: FilterSelection | None = None,
    ) -> MetricsReport:
        """Analyze interactions and derive per-agent metrics.

        Args:
            records: Cleaned records from the ingestor.
            selection: Queue, media type and agent selectors.

        Returns:
            MetricsReport: Sorted agent metrics and the workforce summary.
        """
        report = compute_metrics(records, selection, self.sort_by)
        self._print_summary(report=report)
        return report

    def _print_summary(self, *, report: MetricsReport) -> None:
        """Log the workforce summary of a report."""
        summary = report.summary

        logger.info(LogMessage.ANALYSIS_HEADER)
        logger.info(LogMessage.TOTAL_AGENTS.format(summary.total_agents))

        if summary.total_agents == 0:
            return

        logger.info(
            LogMessage.AVG_INTERACTIONS.format(summary.avg_interactions_per_agent)
        )
        logger.info(
            LogMessage.AVG_HANDLE_TIME.format(
                format_duration(summary.avg_handle_time_overall)
            )
        )
        logger.info(
            LogMessage.TIER_COUNTS.format(
                summary.top_performers, summary.needs_coaching
            )
        )
        logger.info(LogMessage.AVG_EFFICIENCY.format(summary.avg_efficiency))
        logger.info(LogMessage.AVG_UTILIZATION.format(summary.avg_utilization))
