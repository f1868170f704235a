"""Derive per-agent performance metrics and the workforce summary."""

import math
from decimal import ROUND_HALF_UP, Decimal

from .aggregator import aggregate_by_agent
from .constants import (
    COACHING_EFFICIENCY_THRESHOLD,
    COACHING_LIMIT,
    GOLD_THRESHOLD,
    HIGHLIGHT_MIN_HANDLED,
    NEUTRAL_EFFICIENCY,
    NEW_AGENT_MIN_HANDLED,
    SECONDS_PER_HOUR,
    SILVER_THRESHOLD,
    TIER_EFFICIENCY_WEIGHT,
    TIER_PRODUCTIVITY_WEIGHT,
    TIER_VOLUME_SATURATION,
    TIER_VOLUME_WEIGHT,
    TOP_PERFORMER_LIMIT,
    UTILIZATION_CAP,
    WORKDAY_SECONDS,
    PerformanceTier,
    SortKey,
)
from .filters import filter_records
from .models import (
    AgentAggregate,
    AgentMetrics,
    FilterSelection,
    InteractionRecord,
    MetricsReport,
    WorkforceSummary,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return math.floor(value + 0.5)


def round_one_decimal(value: float) -> float:
    """Round to one decimal place, halves away from zero."""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def team_average_handle_time(aggregates: list[AgentAggregate]) -> float:
    """Mean of each agent's own average handle time.

    Agents without handled interactions are left out of the denominator.
    Returns 0.0 when no agent handled anything.
    """
    averages = [a.avg_handle_time for a in aggregates if a.handled_interactions > 0]
    if not averages:
        return 0.0
    return sum(averages) / len(averages)


def efficiency_score(avg_handle_time: float, team_avg_handle_time: float) -> int:
    """Score handle time against the team average; 100 is parity.

    Faster than average scores above 100. No floor or ceiling is applied.
    Agents without measurable handle time score exactly 100.
    """
    if team_avg_handle_time > 0 and avg_handle_time > 0:
        deviation = (avg_handle_time - team_avg_handle_time) / team_avg_handle_time
        return round_half_up(100 - deviation * 100)
    return NEUTRAL_EFFICIENCY


def performance_tier(
    efficiency: float, productivity: float, handled: int
) -> PerformanceTier:
    """Classify an agent from efficiency, productivity and handled volume.

    Args:
        efficiency: Efficiency score.
        productivity: Productivity rate in percent.
        handled: Handled interaction count.

    Returns:
        PerformanceTier: NEW below 10 handled interactions, otherwise
            GOLD, SILVER or BRONZE from the weighted composite.
    """
    if handled < NEW_AGENT_MIN_HANDLED:
        return PerformanceTier.NEW

    score = (
        efficiency * TIER_EFFICIENCY_WEIGHT
        + productivity * TIER_PRODUCTIVITY_WEIGHT
        + min(handled / TIER_VOLUME_SATURATION, 1) * TIER_VOLUME_WEIGHT
    )

    if score >= GOLD_THRESHOLD:
        return PerformanceTier.GOLD
    if score >= SILVER_THRESHOLD:
        return PerformanceTier.SILVER
    return PerformanceTier.BRONZE


def derive_agent_metrics(
    aggregate: AgentAggregate, *, team_avg_handle_time: float, total_queues: int
) -> AgentMetrics:
    """Turn one agent's running totals into scored metrics.

    Every ratio with a zero denominator yields 0 (efficiency yields 100).

    Args:
        aggregate: The agent's accumulated totals.
        team_avg_handle_time: Mean of per-agent averages across the team.
        total_queues: Distinct queues in the unfiltered dataset.

    Returns:
        AgentMetrics: The agent's derived metrics.
    """
    avg_handle_time = aggregate.avg_handle_time
    efficiency = efficiency_score(avg_handle_time, team_avg_handle_time)

    productivity = 0.0
    if aggregate.total_interactions > 0:
        productivity = (
            aggregate.handled_interactions / aggregate.total_interactions * 100
        )

    versatility = 0.0
    if total_queues > 0:
        versatility = len(aggregate.queues) / total_queues * 100

    # Handle time stands in for hours worked.
    hours_worked = aggregate.total_handle_time / SECONDS_PER_HOUR
    interactions_per_hour = 0.0
    if hours_worked > 0:
        interactions_per_hour = aggregate.handled_interactions / hours_worked

    available_seconds = len(aggregate.dates) * WORKDAY_SECONDS
    utilization = 0.0
    if available_seconds > 0:
        utilization = aggregate.total_handle_time / available_seconds * 100

    return AgentMetrics(
        agent=aggregate.agent,
        total_interactions=aggregate.total_interactions,
        handled_interactions=aggregate.handled_interactions,
        abandoned_while_assigned=aggregate.abandoned_while_assigned,
        avg_handle_time=round_half_up(avg_handle_time),
        total_handle_time=round_half_up(aggregate.total_handle_time),
        efficiency_score=efficiency,
        productivity_rate=round_one_decimal(productivity),
        versatility_score=round_one_decimal(versatility),
        utilization_rate=round_one_decimal(min(UTILIZATION_CAP, utilization)),
        interactions_per_hour=round_one_decimal(interactions_per_hour),
        unique_queues=len(aggregate.queues),
        unique_media_types=len(aggregate.media_types),
        days_worked=len(aggregate.dates),
        queues=sorted(aggregate.queues),
        media_types=sorted(aggregate.media_types),
        performance_tier=performance_tier(
            efficiency, productivity, aggregate.handled_interactions
        ),
    )


def sort_agents(
    agents: list[AgentMetrics], sort_by: SortKey = SortKey.INTERACTIONS
) -> list[AgentMetrics]:
    """Order agents by volume, handle time or efficiency. Ties keep input order."""
    if sort_by == SortKey.HANDLE_TIME:
        return sorted(agents, key=lambda a: a.avg_handle_time)
    if sort_by == SortKey.EFFICIENCY:
        return sorted(agents, key=lambda a: a.efficiency_score, reverse=True)
    return sorted(agents, key=lambda a: a.total_interactions, reverse=True)


def top_performers(agents: list[AgentMetrics]) -> list[AgentMetrics]:
    """First six agents with at least 10 handled interactions, in list order."""
    return [a for a in agents if a.handled_interactions >= HIGHLIGHT_MIN_HANDLED][
        :TOP_PERFORMER_LIMIT
    ]


def coaching_candidates(agents: list[AgentMetrics]) -> list[AgentMetrics]:
    """First four agents below 85 efficiency with at least 10 handled interactions.

    Both highlight lists follow the order of `agents`, so they change with the
    sort key.
    """
    return [
        a
        for a in agents
        if a.efficiency_score < COACHING_EFFICIENCY_THRESHOLD
        and a.handled_interactions >= HIGHLIGHT_MIN_HANDLED
    ][:COACHING_LIMIT]


def summarize_workforce(
    agents: list[AgentMetrics], team_avg_handle_time: float
) -> WorkforceSummary:
    """Fold every agent's metrics into unweighted team-wide aggregates.

    Args:
        agents: Metrics for all agents.
        team_avg_handle_time: Mean of per-agent averages across the team.

    Returns:
        WorkforceSummary: Team aggregates; all zeros when there are no agents.
    """
    if not agents:
        return WorkforceSummary()

    total = len(agents)

    return WorkforceSummary(
        total_agents=total,
        avg_interactions_per_agent=round_half_up(
            sum(a.total_interactions for a in agents) / total
        ),
        avg_handle_time_overall=round_half_up(team_avg_handle_time),
        top_performers=sum(
            1 for a in agents if a.performance_tier == PerformanceTier.GOLD
        ),
        needs_coaching=sum(
            1 for a in agents if a.performance_tier == PerformanceTier.BRONZE
        ),
        avg_efficiency=round_half_up(sum(a.efficiency_score for a in agents) / total),
        avg_utilization=round_one_decimal(
            sum(a.utilization_rate for a in agents) / total
        ),
    )


def compute_metrics(
    records: list[InteractionRecord],
    selection: FilterSelection | None = None,
    sort_by: SortKey = SortKey.INTERACTIONS,
) -> MetricsReport:
    """Run the full pipeline over one batch of records.

    Pure function of its inputs: filter, aggregate, derive, sort, summarize,
    then pick the highlight lists from the sorted agents.
    Versatility is measured against the queues of the unfiltered records.

    Args:
        records: Cleaned records from the ingestor.
        selection: Queue, media type and agent selectors. Defaults to no filtering.
        sort_by: Ordering of the agent list.

    Returns:
        MetricsReport: Sorted agent metrics and the workforce summary.
    """
    selection = selection or FilterSelection()

    filtered = filter_records(records, selection)
    aggregates = list(aggregate_by_agent(filtered).values())

    team_avg = team_average_handle_time(aggregates)
    total_queues = len({r.queue for r in records if r.queue})

    agents = [
        derive_agent_metrics(
            aggregate, team_avg_handle_time=team_avg, total_queues=total_queues
        )
        for aggregate in aggregates
    ]

    ranked = sort_agents(agents, sort_by)

    return MetricsReport(
        agents=ranked,
        summary=summarize_workforce(agents, team_avg),
        team_avg_handle_time=team_avg,
        selection=selection,
        sort_by=sort_by,
        top_performers_list=top_performers(ranked),
        coaching_candidates=coaching_candidates(ranked),
    )
