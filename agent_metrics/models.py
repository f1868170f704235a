"""Data models for agent performance metrics."""

import math
from dataclasses import asdict, dataclass, field
from typing import Any

from .constants import (
    ABANDONED_SENTINEL,
    ALL_SELECTOR,
    EMPTY_STRING,
    Column,
    PerformanceTier,
    ReportKey,
    SortKey,
)


def _duration(value: Any) -> float | None:
    """Return a finite numeric duration, or None for anything else."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


@dataclass(frozen=True)
class InteractionRecord:
    """A single call-center interaction.

    Attributes:
        queue: Queue the interaction was routed through.
        media_type: Channel of the interaction (voice, chat, email...).
        abandoned: True when the Abandoned column is exactly "YES".
        handle_time: Handle duration as exported, before unit normalization.
        queue_time: Queue-wait duration as exported, before unit normalization.
        agent: Identifier of the agent that interacted, if any.
        date: Calendar day of the interaction, time of day stripped.
    """

    queue: str
    media_type: str
    abandoned: bool = False
    handle_time: float | None = None
    queue_time: float | None = None
    agent: str | None = None
    date: str | None = None

    @classmethod
    def from_row(cls, *, row: dict[str, Any]) -> "InteractionRecord":
        """Create an InteractionRecord from a header-keyed row.

        Queue, Media Type, agent and Date cells are expected as raw text so
        identifiers keep their exact spelling; the other cells are expected
        already coerced to float, bool, str or None.

        Args:
            row: Mapping of header name to cell value.

        Returns:
            InteractionRecord: The structured record.
        """
        date = row.get(Column.DATE)
        if date:
            date = date.split(" ")[0]

        return cls(
            queue=row.get(Column.QUEUE) or EMPTY_STRING,
            media_type=row.get(Column.MEDIA_TYPE) or EMPTY_STRING,
            abandoned=row.get(Column.ABANDONED) == ABANDONED_SENTINEL,
            handle_time=_duration(row.get(Column.TOTAL_HANDLE)),
            queue_time=_duration(row.get(Column.TOTAL_QUEUE)),
            agent=row.get(Column.AGENT) or None,
            date=date or None,
        )


@dataclass(frozen=True)
class FilterSelection:
    """Selectors narrowing the interactions before aggregation.

    Each selector is either an exact field value or "all".
    """

    queue: str = ALL_SELECTOR
    media_type: str = ALL_SELECTOR
    agent: str = ALL_SELECTOR

    def is_active(self) -> bool:
        return any(
            value != ALL_SELECTOR for value in (self.queue, self.media_type, self.agent)
        )


@dataclass(frozen=True)
class DatasetOptions:
    """Distinct values present in the unfiltered dataset."""

    queues: list[str]
    media_types: list[str]
    agents: list[str]


@dataclass
class AgentAggregate:
    """Running totals for one agent, built in a single pass over the rows."""

    agent: str
    total_interactions: int = 0
    handled_interactions: int = 0
    abandoned_while_assigned: int = 0
    total_handle_time: float = 0.0
    total_queue_time: float = 0.0
    handle_times: list[float] = field(default_factory=list)
    queues: set[str] = field(default_factory=set)
    media_types: set[str] = field(default_factory=set)
    dates: set[str] = field(default_factory=set)

    @property
    def avg_handle_time(self) -> float:
        if self.handled_interactions == 0:
            return 0.0
        return self.total_handle_time / self.handled_interactions


@dataclass(frozen=True)
class AgentMetrics:
    """Derived performance metrics for one agent.

    Attributes:
        agent: Agent identifier.
        total_interactions: Interactions assigned to the agent.
        handled_interactions: Interactions not flagged as abandoned.
        abandoned_while_assigned: Interactions abandoned while assigned.
        avg_handle_time: Average handle time in whole seconds.
        total_handle_time: Summed handle time in whole seconds.
        efficiency_score: Handle time relative to team average, 100 = parity.
        productivity_rate: Share of assigned interactions handled, in percent.
        versatility_score: Share of the dataset's queues the agent worked, in percent.
        utilization_rate: Share of 8-hour days spent handling, capped at 100.
        interactions_per_hour: Handled interactions per hour of handle time.
        unique_queues: Distinct queues worked.
        unique_media_types: Distinct media types worked.
        days_worked: Distinct calendar days with activity.
        queues: Queues worked, sorted.
        media_types: Media types worked, sorted.
        performance_tier: Coarse classification.
    """

    agent: str
    total_interactions: int
    handled_interactions: int
    abandoned_while_assigned: int
    avg_handle_time: int
    total_handle_time: int
    efficiency_score: int
    productivity_rate: float
    versatility_score: float
    utilization_rate: float
    interactions_per_hour: float
    unique_queues: int
    unique_media_types: int
    days_worked: int
    queues: list[str]
    media_types: list[str]
    performance_tier: PerformanceTier

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class WorkforceSummary:
    """Team-wide aggregates over every agent's metrics.

    Attributes:
        total_agents: Number of agents.
        avg_interactions_per_agent: Mean total interactions, rounded.
        avg_handle_time_overall: Team average handle time, rounded.
        top_performers: Agents in the gold tier.
        needs_coaching: Agents in the bronze tier.
        avg_efficiency: Mean efficiency score, rounded.
        avg_utilization: Mean utilization rate, one decimal.
    """

    total_agents: int = 0
    avg_interactions_per_agent: int = 0
    avg_handle_time_overall: int = 0
    top_performers: int = 0
    needs_coaching: int = 0
    avg_efficiency: int = 0
    avg_utilization: float = 0.0


@dataclass(frozen=True)
class MetricsReport:
    """Output of one metrics computation run.

    The highlight lists hold agents from `agents`, in the same order; the
    serialized report lists them by agent identifier only.
    """

    agents: list[AgentMetrics]
    summary: WorkforceSummary
    team_avg_handle_time: float
    selection: FilterSelection = field(default_factory=FilterSelection)
    sort_by: SortKey = SortKey.INTERACTIONS
    top_performers_list: list[AgentMetrics] = field(default_factory=list)
    coaching_candidates: list[AgentMetrics] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert the report to a dictionary for serialization.

        Returns:
            dict[str, Any]: Dictionary representation of the report.
        """
        return {
            ReportKey.SELECTION: asdict(self.selection),
            ReportKey.SORT_BY: self.sort_by,
            ReportKey.TEAM_AVG_HANDLE_TIME: self.team_avg_handle_time,
            ReportKey.SUMMARY: asdict(self.summary),
            ReportKey.AGENTS: [agent.to_dict() for agent in self.agents],
            ReportKey.TOP_PERFORMERS: [a.agent for a in self.top_performers_list],
            ReportKey.COACHING_CANDIDATES: [a.agent for a in self.coaching_candidates],
        }
