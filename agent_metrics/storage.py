"""Storage for agent metrics reports."""

import json
from pathlib import Path

import polars as pl
from loguru import logger

from .constants import (
    DEFAULT_AGENTS_CSV_OUTPUT,
    DEFAULT_REPORT_OUTPUT,
    JSON_INDENT,
    AgentCsvKey,
    LogMessage,
)
from .models import MetricsReport


class MetricsStorage:
    """Handles saving metrics reports to disk."""

    def save_report(
        self,
        *,
        report: MetricsReport,
        filepath: Path | str = DEFAULT_REPORT_OUTPUT,
    ) -> None:
        """Save a metrics report to a JSON file.

        Args:
            report: MetricsReport to save.
            filepath: Path where the JSON file should be saved.
        """
        filepath = Path(filepath)

        with filepath.open("w") as f:
            json.dump(report.to_dict(), f, indent=JSON_INDENT, default=str)

        logger.success(LogMessage.SAVED_REPORT.format(filepath))

    def save_agents_csv(
        self,
        *,
        report: MetricsReport,
        filepath: Path | str = DEFAULT_AGENTS_CSV_OUTPUT,
    ) -> None:
        """Save one row per agent to a CSV file using Polars.

        Rows keep the report's agent ordering. Nothing is written when the
        report has no agents.

        Args:
            report: MetricsReport whose agents should be exported.
            filepath: Path where the CSV file should be saved.
        """
        filepath = Path(filepath)

        if not report.agents:
            logger.warning(LogMessage.NO_AGENTS_TO_SAVE)
            return

        rows = [
            {
                AgentCsvKey.AGENT: agent.agent,
                AgentCsvKey.TIER: str(agent.performance_tier),
                AgentCsvKey.TOTAL_INTERACTIONS: agent.total_interactions,
                AgentCsvKey.HANDLED_INTERACTIONS: agent.handled_interactions,
                AgentCsvKey.ABANDONED_WHILE_ASSIGNED: agent.abandoned_while_assigned,
                AgentCsvKey.AVG_HANDLE_TIME: agent.avg_handle_time,
                AgentCsvKey.EFFICIENCY_SCORE: agent.efficiency_score,
                AgentCsvKey.PRODUCTIVITY_RATE: agent.productivity_rate,
                AgentCsvKey.UTILIZATION_RATE: agent.utilization_rate,
                AgentCsvKey.VERSATILITY_SCORE: agent.versatility_score,
                AgentCsvKey.INTERACTIONS_PER_HOUR: agent.interactions_per_hour,
            }
            for agent in report.agents
        ]

        df = pl.DataFrame(rows)
        df.write_csv(filepath)

        logger.success(LogMessage.SAVED_AGENTS_CSV.format(len(df), filepath))
