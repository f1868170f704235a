from __future__ import annotations

import pytest

from agent_metrics.constants import PerformanceTier, SortKey
from agent_metrics.metrics import (
    coaching_candidates,
    compute_metrics,
    derive_agent_metrics,
    efficiency_score,
    performance_tier,
    round_half_up,
    round_one_decimal,
    sort_agents,
    summarize_workforce,
    team_average_handle_time,
    top_performers,
)
from agent_metrics.ingest import parse_records
from agent_metrics.models import AgentAggregate, FilterSelection, WorkforceSummary


def test_rounding_helpers():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(-2.5) == -2
    assert round_half_up(149.4) == 149
    assert round_one_decimal(33.333) == 33.3
    assert round_one_decimal(0.25) == 0.3
    assert round_one_decimal(66.666) == 66.7


def test_team_average_is_mean_of_agent_means():
    heavy = AgentAggregate(agent="A", handled_interactions=9, total_handle_time=900)
    light = AgentAggregate(agent="B", handled_interactions=1, total_handle_time=300)
    idle = AgentAggregate(agent="C", abandoned_while_assigned=4, total_interactions=4)

    # (100 + 300) / 2, not 1200 / 10; the idle agent is left out.
    assert team_average_handle_time([heavy, light, idle]) == 200


def test_team_average_without_handled_interactions():
    assert team_average_handle_time([]) == 0.0
    assert team_average_handle_time([AgentAggregate(agent="A")]) == 0.0


def test_efficiency_is_neutral_at_team_average():
    assert efficiency_score(150, 150) == 100
    assert efficiency_score(123.456, 123.456) == 100


def test_efficiency_direction_and_no_clamping():
    assert efficiency_score(100, 200) == 150
    assert efficiency_score(300, 200) == 50
    assert efficiency_score(700, 200) == -150
    assert efficiency_score(1, 1000) == 200


def test_efficiency_defaults_to_neutral():
    assert efficiency_score(0, 150) == 100
    assert efficiency_score(150, 0) == 100


def test_tier_floor_for_new_agents():
    assert performance_tier(500, 100, 9) == PerformanceTier.NEW
    assert performance_tier(500, 100, 0) == PerformanceTier.NEW


@pytest.mark.parametrize(
    ("efficiency", "productivity", "handled", "tier"),
    [
        # 40 + 40 + 20 = 100
        (100, 100, 100, PerformanceTier.GOLD),
        # 40 + 40 + 2 = 82
        (100, 100, 10, PerformanceTier.SILVER),
        # 0.4 * 125 + 0.4 * 75 + 5 = 85
        (125, 75, 25, PerformanceTier.GOLD),
        # 0.4 * 100 + 0.4 * 70 + 2 = 70
        (100, 70, 10, PerformanceTier.SILVER),
        # 0.4 * 80 + 0.4 * 80 + 2 = 66
        (80, 80, 10, PerformanceTier.BRONZE),
    ],
)
def test_tier_thresholds(efficiency, productivity, handled, tier):
    assert performance_tier(efficiency, productivity, handled) == tier


def test_zero_handled_agent_is_safe():
    aggregate = AgentAggregate(
        agent="A",
        total_interactions=3,
        abandoned_while_assigned=3,
        queues={"Sales"},
        media_types={"voice"},
        dates={"2024-01-01"},
    )
    metrics = derive_agent_metrics(
        aggregate, team_avg_handle_time=150, total_queues=2
    )

    assert metrics.avg_handle_time == 0
    assert metrics.efficiency_score == 100
    assert metrics.interactions_per_hour == 0
    assert metrics.utilization_rate == 0
    assert metrics.productivity_rate == 0
    assert metrics.versatility_score == 50.0
    assert metrics.performance_tier == PerformanceTier.NEW


def test_empty_aggregate_is_safe():
    metrics = derive_agent_metrics(
        AgentAggregate(agent="A"), team_avg_handle_time=0, total_queues=0
    )
    assert metrics.productivity_rate == 0
    assert metrics.versatility_score == 0
    assert metrics.utilization_rate == 0
    assert metrics.days_worked == 0


def test_utilization_is_capped():
    aggregate = AgentAggregate(
        agent="A",
        total_interactions=20,
        handled_interactions=20,
        total_handle_time=40_000,
        dates={"2024-01-01"},
    )
    metrics = derive_agent_metrics(
        aggregate, team_avg_handle_time=2_000, total_queues=1
    )
    assert metrics.utilization_rate == 100.0


def test_derived_values():
    aggregate = AgentAggregate(
        agent="A",
        total_interactions=12,
        handled_interactions=10,
        abandoned_while_assigned=2,
        total_handle_time=3_000,
        queues={"Sales", "Support"},
        media_types={"voice"},
        dates={"2024-01-01", "2024-01-02"},
    )
    metrics = derive_agent_metrics(
        aggregate, team_avg_handle_time=250, total_queues=3
    )

    assert metrics.avg_handle_time == 300
    assert metrics.total_handle_time == 3_000
    assert metrics.efficiency_score == 80
    assert metrics.productivity_rate == 83.3
    assert metrics.versatility_score == 66.7
    assert metrics.interactions_per_hour == 12.0
    # 3000 / (2 * 28800) * 100
    assert metrics.utilization_rate == 5.2
    assert metrics.unique_queues == 2
    assert metrics.queues == ["Sales", "Support"]
    assert metrics.days_worked == 2
    # 0.4 * 80 + 0.4 * 83.33 + 2 = 67.3
    assert metrics.performance_tier == PerformanceTier.BRONZE


def test_end_to_end_scenario(scenario_records):
    report = compute_metrics(scenario_records)
    agents = {agent.agent: agent for agent in report.agents}

    assert report.team_avg_handle_time == 150
    assert agents["A"].avg_handle_time == 150
    assert agents["B"].avg_handle_time == 150
    assert agents["A"].efficiency_score == 100
    assert agents["B"].efficiency_score == 100
    assert agents["A"].productivity_rate == 100.0
    assert agents["B"].productivity_rate == 50.0
    assert agents["B"].abandoned_while_assigned == 1
    assert agents["A"].performance_tier == PerformanceTier.NEW
    assert agents["B"].performance_tier == PerformanceTier.NEW

    assert report.summary.total_agents == 2
    assert report.summary.avg_handle_time_overall == 150
    assert report.summary.avg_efficiency == 100


def test_determinism(scenario_records):
    selection = FilterSelection(queue="Sales")
    first = compute_metrics(scenario_records, selection, SortKey.EFFICIENCY)
    second = compute_metrics(scenario_records, selection, SortKey.EFFICIENCY)
    assert first == second
    assert first.to_dict() == second.to_dict()


def test_empty_input():
    report = compute_metrics([])
    assert report.agents == []
    assert report.team_avg_handle_time == 0.0
    assert report.summary == WorkforceSummary()
    assert report.summary.total_agents == 0


def test_filter_that_matches_nothing(scenario_records):
    report = compute_metrics(scenario_records, FilterSelection(agent="Nobody"))
    assert report.summary.total_agents == 0


def test_versatility_uses_unfiltered_queues(scenario_records):
    report = compute_metrics(scenario_records, FilterSelection(agent="A"))
    (agent,) = report.agents
    # A worked one of the two queues in the whole dataset.
    assert agent.versatility_score == 50.0


def test_team_average_follows_filter(make_record):
    records = [
        make_record("A", queue="Sales", handle_time=100),
        make_record("B", queue="Support", handle_time=300),
    ]
    assert compute_metrics(records).team_avg_handle_time == 200
    sales = compute_metrics(records, FilterSelection(queue="Sales"))
    assert sales.team_avg_handle_time == 100
    assert sales.agents[0].efficiency_score == 100


def test_sorting(make_record):
    records = [
        make_record("A", handle_time=300),
        make_record("B", handle_time=100),
        make_record("B", handle_time=100),
        make_record("C", handle_time=200),
    ]

    by_volume = compute_metrics(records, sort_by=SortKey.INTERACTIONS)
    assert [a.agent for a in by_volume.agents] == ["B", "A", "C"]

    by_handle_time = compute_metrics(records, sort_by=SortKey.HANDLE_TIME)
    assert [a.agent for a in by_handle_time.agents] == ["B", "C", "A"]

    by_efficiency = compute_metrics(records, sort_by=SortKey.EFFICIENCY)
    assert [a.agent for a in by_efficiency.agents] == ["B", "C", "A"]


def test_sort_ties_keep_encounter_order(make_record):
    records = [make_record("A"), make_record("B"), make_record("C")]
    report = compute_metrics(records)
    assert [a.agent for a in sort_agents(report.agents)] == ["A", "B", "C"]


def test_summary_counts_and_means(make_record):
    gold = [make_record("G", handle_time=100) for _ in range(100)]
    bronze = [make_record("Z", handle_time=300) for _ in range(10)]
    bronze += [make_record("Z", abandoned=True, handle_time=None) for _ in range(10)]
    newcomer = [make_record("N", handle_time=200)]

    report = compute_metrics(gold + bronze + newcomer)
    tiers = {a.agent: a.performance_tier for a in report.agents}

    # Team average: (100 + 300 + 200) / 3 = 200
    assert report.team_avg_handle_time == 200
    assert tiers == {
        "G": PerformanceTier.GOLD,
        "Z": PerformanceTier.BRONZE,
        "N": PerformanceTier.NEW,
    }

    summary = report.summary
    assert summary.total_agents == 3
    assert summary.avg_interactions_per_agent == 40  # (100 + 20 + 1) / 3
    assert summary.avg_handle_time_overall == 200
    assert summary.top_performers == 1
    assert summary.needs_coaching == 1
    assert summary.avg_efficiency == 100  # (150 + 50 + 100) / 3


def test_summarize_workforce_without_agents():
    assert summarize_workforce([], 0.0) == WorkforceSummary()


def test_avg_utilization_is_mean_of_capped_rates(make_record):
    # One workday is 28800 s: 14400 s is 50%, 2880 s is 10%, 40000 s caps at 100%.
    half = [make_record("X", handle_time=7_200) for _ in range(2)]
    capped = [make_record("Y", handle_time=8_000) for _ in range(5)]
    light = [make_record("Z", handle_time=2_880)]

    report = compute_metrics(half + capped + light)
    rates = {a.agent: a.utilization_rate for a in report.agents}

    assert rates == {"X": 50.0, "Y": 100.0, "Z": 10.0}
    # Uncapped the mean would be 66.3.
    assert report.summary.avg_utilization == 53.3


def test_overflowing_duration_does_not_break_metrics():
    text = (
        "Queue,Media Type,Total Handle,Users - Interacted,Date\n"
        "Sales,voice,1e400,A,2024-01-01\n"
        "Sales,voice,120,B,2024-01-01\n"
    )
    report = compute_metrics(parse_records(text))
    agents = {a.agent: a for a in report.agents}

    assert agents["A"].handled_interactions == 1
    assert agents["A"].total_handle_time == 0
    assert agents["B"].avg_handle_time == 120
    assert agents["B"].utilization_rate == 0.4


def test_top_performers_need_volume_and_follow_sort_order(make_record):
    volumes = {"A": 30, "B": 25, "C": 20, "D": 18, "E": 16, "F": 14, "G": 12}
    records = [
        make_record(agent) for agent, count in volumes.items() for _ in range(count)
    ]
    # N ranks third by volume but handled only four interactions.
    records += [make_record("N") for _ in range(4)]
    records += [make_record("N", abandoned=True, handle_time=None) for _ in range(20)]

    report = compute_metrics(records)

    assert [a.agent for a in report.agents][:3] == ["A", "B", "N"]
    assert [a.agent for a in report.top_performers_list] == [
        "A",
        "B",
        "C",
        "D",
        "E",
        "F",
    ]
    assert top_performers(report.agents) == report.top_performers_list


def test_coaching_candidates(make_record):
    records = []
    for agent in ("F1", "F2", "F3"):
        records += [make_record(agent, handle_time=100) for _ in range(10)]
    for agent, count in (("S1", 15), ("S2", 14), ("S3", 13), ("S4", 12), ("S5", 11)):
        records += [make_record(agent, handle_time=200) for _ in range(count)]
    # SN is just as slow but handled only five interactions.
    records += [make_record("SN", handle_time=200) for _ in range(5)]
    records += [make_record("SN", abandoned=True, handle_time=None) for _ in range(20)]

    report = compute_metrics(records)
    efficiency = {a.agent: a.efficiency_score for a in report.agents}

    # Team average: (3 * 100 + 6 * 200) / 9, so slow agents sit 20% above it.
    assert efficiency["S1"] == 80
    assert efficiency["SN"] == 80
    assert efficiency["F1"] == 140
    assert [a.agent for a in report.coaching_candidates] == ["S1", "S2", "S3", "S4"]
    assert coaching_candidates(report.agents) == report.coaching_candidates
    assert report.to_dict()["coaching_candidates"] == ["S1", "S2", "S3", "S4"]


def test_highlight_lists_are_empty_without_agents():
    report = compute_metrics([])
    assert report.top_performers_list == []
    assert report.coaching_candidates == []
