"""Utilities for presenting agent metrics."""

from dataclasses import dataclass

from .constants import SECONDS_PER_HOUR, SECONDS_PER_MINUTE


@dataclass(frozen=True)
class MetricFormula:
    """Reference documentation for one derived metric."""

    name: str
    formula: str
    description: str


METRIC_FORMULAS: tuple[MetricFormula, ...] = (
    MetricFormula(
        name="Agent Avg Handle Time",
        formula="Sum(Handle Time for Agent's Handled Calls) / Count(Agent's Handled Calls)",
        description="Average time agent spends on handled interactions",
    ),
    MetricFormula(
        name="Efficiency Score",
        formula="100 - ((Agent AHT - Team Avg AHT) / Team Avg AHT x 100)",
        description="How agent's handle time compares to team average (higher is better)",
    ),
    MetricFormula(
        name="Productivity Rate",
        formula="(Handled Interactions / Total Assigned Interactions) x 100",
        description="Percentage of assigned interactions successfully handled",
    ),
    MetricFormula(
        name="Versatility Score",
        formula="Unique Queues Handled / Total Available Queues x 100",
        description="Percentage of queues agent is trained to handle",
    ),
    MetricFormula(
        name="Utilization Rate",
        formula="(Total Handle Time / (Days Worked x 8h)) x 100, capped at 100",
        description="Percentage of time spent actively handling interactions",
    ),
    MetricFormula(
        name="Interactions Per Hour",
        formula="Total Handled Interactions / (Total Handle Time in Seconds / 3600)",
        description="Average number of interactions handled per hour",
    ),
    MetricFormula(
        name="Performance Tier",
        formula="0.4 x Efficiency + 0.4 x Productivity + 20 x min(Handled / 100, 1)",
        description="gold >= 85, silver >= 70, otherwise bronze; new below 10 handled",
    ),
)


def format_duration(seconds: int) -> str:
    """Format whole seconds as a compact duration.

    Args:
        seconds: Duration in seconds.

    Returns:
        str: "45s", "2m 5s" or "1h 1m".
    """
    if seconds < SECONDS_PER_MINUTE:
        return f"{seconds}s"
    if seconds < SECONDS_PER_HOUR:
        return f"{seconds // SECONDS_PER_MINUTE}m {seconds % SECONDS_PER_MINUTE}s"
    hours = seconds // SECONDS_PER_HOUR
    minutes = (seconds % SECONDS_PER_HOUR) // SECONDS_PER_MINUTE
    return f"{hours}h {minutes}m"
