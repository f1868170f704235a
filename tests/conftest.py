from __future__ import annotations

import pytest

from agent_metrics.models import InteractionRecord


@pytest.fixture
def make_record():
    def _make(
        agent: str | None = "A",
        *,
        queue: str = "Sales",
        media_type: str = "voice",
        abandoned: bool = False,
        handle_time: float | None = 120.0,
        queue_time: float | None = None,
        date: str | None = "2024-01-01",
    ) -> InteractionRecord:
        return InteractionRecord(
            queue=queue,
            media_type=media_type,
            abandoned=abandoned,
            handle_time=handle_time,
            queue_time=queue_time,
            agent=agent,
            date=date,
        )

    return _make


@pytest.fixture
def scenario_records(make_record):
    """Agent A handles two calls, agent B handles one and abandons one."""
    return [
        make_record("A", handle_time=120.0),
        make_record("A", handle_time=180.0),
        make_record("B", queue="Support", media_type="chat", handle_time=150.0),
        make_record(
            "B", queue="Support", media_type="chat", abandoned=True, handle_time=None
        ),
    ]


SAMPLE_CSV = (
    "Queue,Media Type,Abandoned,Total Handle,Total Queue,Users - Interacted,Date\n"
    "Sales,voice,NO,120,30,Alice,2024-01-01 09:15:00\n"
    "Sales,voice,NO,180000,5,Alice,2024-01-02 10:00:00\n"
    "Support,chat,YES,,40,Bob,2024-01-01 11:00:00\n"
    "Support,chat,NO,150,,Bob,2024-01-01\n"
    ",voice,NO,100,,Carol,2024-01-01\n"
    "Billing,,NO,100,,Carol,2024-01-01\n"
    "Billing,email,NO,90,,null,2024-01-01\n"
)


@pytest.fixture
def sample_csv() -> str:
    return SAMPLE_CSV
