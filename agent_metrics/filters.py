"""Narrow interaction records by queue, media type and agent."""

from loguru import logger

from .constants import ALL_SELECTOR, NULL_AGENT, LogMessage
from .models import DatasetOptions, FilterSelection, InteractionRecord


def is_assigned(agent: str | None) -> bool:
    """Return True when an agent identifier names a real agent."""
    return bool(agent) and agent != NULL_AGENT


def matches(record: InteractionRecord, selection: FilterSelection) -> bool:
    """Check a record against every active selector by exact equality."""
    if selection.queue != ALL_SELECTOR and record.queue != selection.queue:
        return False
    if (
        selection.media_type != ALL_SELECTOR
        and record.media_type != selection.media_type
    ):
        return False
    if selection.agent != ALL_SELECTOR and record.agent != selection.agent:
        return False
    return True


def filter_records(
    records: list[InteractionRecord], selection: FilterSelection
) -> list[InteractionRecord]:
    """Return the records matching every active selector.

    Args:
        records: Cleaned records from the ingestor.
        selection: Queue, media type and agent selectors; "all" disables one.

    Returns:
        list[InteractionRecord]: Matching records in their original order.
    """
    if not selection.is_active():
        return list(records)

    filtered = [record for record in records if matches(record, selection)]
    logger.debug(
        LogMessage.FILTERED_RECORDS.format(selection, len(filtered), len(records))
    )
    return filtered


def dataset_options(records: list[InteractionRecord]) -> DatasetOptions:
    """Collect the sorted distinct selector values of a dataset.

    Args:
        records: The unfiltered records.

    Returns:
        DatasetOptions: Queues, media types and assigned agents.
    """
    return DatasetOptions(
        queues=sorted({r.queue for r in records if r.queue}),
        media_types=sorted({r.media_type for r in records if r.media_type}),
        agents=sorted({r.agent for r in records if is_assigned(r.agent)}),
    )
