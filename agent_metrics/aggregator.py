"""Group interaction records into per-agent running totals."""

import math

from loguru import logger

from .constants import UNIT_SCALE_DIVISOR, UNIT_SCALE_THRESHOLD, LogMessage
from .filters import is_assigned
from .models import AgentAggregate, InteractionRecord


def normalize_duration(value: float) -> float:
    """Convert a duration to seconds.

    Exports mix seconds and milliseconds; anything above 10,000 is taken to
    be milliseconds. Applied to every value independently.
    """
    if value > UNIT_SCALE_THRESHOLD:
        return value / UNIT_SCALE_DIVISOR
    return value


def aggregate_by_agent(
    records: list[InteractionRecord],
) -> dict[str, AgentAggregate]:
    """Accumulate counts, durations and distinct values for each agent.

    Records without an agent (None, empty or the literal "null") are skipped.
    A record counts as handled unless it is flagged abandoned, whether or not
    it carries a handle time. Missing, zero or non-finite durations add
    nothing.

    Args:
        records: Filtered interaction records.

    Returns:
        dict[str, AgentAggregate]: Aggregates keyed by agent, in first-seen order.
    """
    stats: dict[str, AgentAggregate] = {}
    unassigned = 0

    for record in records:
        if not is_assigned(record.agent):
            unassigned += 1
            continue

        agent = stats.get(record.agent)
        if agent is None:
            agent = stats[record.agent] = AgentAggregate(agent=record.agent)

        agent.total_interactions += 1

        if record.abandoned:
            agent.abandoned_while_assigned += 1
        else:
            agent.handled_interactions += 1
            if record.handle_time and math.isfinite(record.handle_time):
                handle_time = normalize_duration(record.handle_time)
                agent.total_handle_time += handle_time
                agent.handle_times.append(handle_time)

        # Queue time is kept for every row, handled or not.
        if record.queue_time and math.isfinite(record.queue_time):
            agent.total_queue_time += normalize_duration(record.queue_time)

        agent.queues.add(record.queue)
        agent.media_types.add(record.media_type)
        if record.date:
            agent.dates.add(record.date)

    if unassigned:
        logger.debug(LogMessage.SKIPPED_UNASSIGNED.format(unassigned))

    return stats
