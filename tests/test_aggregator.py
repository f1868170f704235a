from __future__ import annotations

import pytest

from agent_metrics.aggregator import aggregate_by_agent, normalize_duration


@pytest.mark.parametrize(
    ("raw", "seconds"),
    [
        (0, 0),
        (120, 120),
        (10_000, 10_000),
        (10_001, 10.001),
        (180_000, 180),
    ],
)
def test_normalize_duration_boundary(raw, seconds):
    assert normalize_duration(raw) == pytest.approx(seconds)


def test_unit_normalization_applies_per_value(make_record):
    stats = aggregate_by_agent(
        [
            make_record("A", handle_time=10_000),
            make_record("A", handle_time=10_001),
        ]
    )
    assert stats["A"].handle_times == [10_000, pytest.approx(10.001)]
    assert stats["A"].total_handle_time == pytest.approx(10_010.001)


def test_unassigned_records_are_excluded(make_record):
    stats = aggregate_by_agent(
        [make_record(None), make_record(""), make_record("null"), make_record("A")]
    )
    assert list(stats) == ["A"]
    assert stats["A"].total_interactions == 1


def test_handled_and_abandoned_counts(make_record):
    stats = aggregate_by_agent(
        [
            make_record("A", handle_time=100),
            make_record("A", abandoned=True, handle_time=500),
            make_record("A", abandoned=True, handle_time=None),
        ]
    )
    agent = stats["A"]
    assert agent.total_interactions == 3
    assert agent.handled_interactions == 1
    assert agent.abandoned_while_assigned == 2
    # Handle time of abandoned rows is never counted.
    assert agent.total_handle_time == 100


def test_rows_without_handle_time_still_count_as_handled(make_record):
    stats = aggregate_by_agent(
        [make_record("A", handle_time=200), make_record("A", handle_time=None)]
    )
    agent = stats["A"]
    assert agent.handled_interactions == 2
    assert agent.total_handle_time == 200
    assert agent.handle_times == [200]
    assert agent.avg_handle_time == 100


def test_non_finite_durations_add_nothing(make_record):
    stats = aggregate_by_agent(
        [
            make_record("A", handle_time=float("inf"), queue_time=float("-inf")),
            make_record("A", handle_time=float("nan"), queue_time=float("nan")),
            make_record("A", handle_time=90, queue_time=15),
        ]
    )
    agent = stats["A"]
    assert agent.handled_interactions == 3
    assert agent.total_handle_time == 90
    assert agent.handle_times == [90]
    assert agent.total_queue_time == 15


def test_queue_time_is_tracked_for_every_row(make_record):
    stats = aggregate_by_agent(
        [
            make_record("A", queue_time=30),
            make_record("A", abandoned=True, queue_time=20_000),
            make_record("A", queue_time=None),
        ]
    )
    assert stats["A"].total_queue_time == pytest.approx(50)


def test_distinct_sets(make_record):
    stats = aggregate_by_agent(
        [
            make_record("A", queue="Sales", media_type="voice", date="2024-01-01"),
            make_record("A", queue="Support", media_type="voice", date="2024-01-01"),
            make_record("A", queue="Sales", media_type="chat", date="2024-01-02"),
            make_record("A", queue="Sales", media_type="chat", date=None),
        ]
    )
    agent = stats["A"]
    assert agent.queues == {"Sales", "Support"}
    assert agent.media_types == {"voice", "chat"}
    assert agent.dates == {"2024-01-01", "2024-01-02"}


def test_agents_keep_first_seen_order(make_record):
    stats = aggregate_by_agent([make_record("B"), make_record("A"), make_record("B")])
    assert list(stats) == ["B", "A"]


def test_empty_input():
    assert aggregate_by_agent([]) == {}
