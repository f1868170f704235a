"""CLI interface for agent performance metrics."""

from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from .analyzer import WorkforceAnalyzer
from .constants import (
    ALL_SELECTOR,
    DEFAULT_DISPLAY_LIMIT,
    EXIT_CODE_ERROR,
    CliHelp,
    LogMessage,
    SortKey,
)
from .exceptions import FileProcessingError
from .filters import dataset_options
from .formatters import METRIC_FORMULAS, format_duration
from .ingest import load_records
from .models import FilterSelection, MetricsReport
from .storage import MetricsStorage

app = typer.Typer(help=CliHelp.APP)
console = Console()

TIER_STYLES = {
    "gold": "bold yellow",
    "silver": "white",
    "bronze": "dark_orange",
    "new": "red",
}


def _render_agents(*, report: MetricsReport, limit: int) -> None:
    """Print the top agents of a report as a table."""
    table = Table(title=f"Agents (sorted by {report.sort_by})")
    table.add_column("Agent")
    table.add_column("Tier")
    table.add_column("Interactions", justify="right")
    table.add_column("Handled", justify="right")
    table.add_column("AHT", justify="right")
    table.add_column("Efficiency", justify="right")
    table.add_column("Productivity", justify="right")
    table.add_column("Utilization", justify="right")
    table.add_column("Versatility", justify="right")
    table.add_column("Per Hour", justify="right")

    for agent in report.agents[:limit]:
        tier = str(agent.performance_tier)
        table.add_row(
            agent.agent,
            f"[{TIER_STYLES[tier]}]{tier}[/]",
            str(agent.total_interactions),
            str(agent.handled_interactions),
            format_duration(agent.avg_handle_time),
            str(agent.efficiency_score),
            f"{agent.productivity_rate}%",
            f"{agent.utilization_rate}%",
            f"{agent.versatility_score}%",
            str(agent.interactions_per_hour),
        )

    console.print(table)


def _render_highlights(*, report: MetricsReport) -> None:
    """Print the top performers and coaching candidates of a report."""
    console.print(f"[bold]Top performers[/] ({len(report.top_performers_list)})")
    for agent in report.top_performers_list:
        console.print(
            f"  {agent.agent}: {agent.total_interactions} interactions, "
            f"efficiency {agent.efficiency_score}"
        )

    console.print(
        f"[bold]Coaching opportunities[/] ({len(report.coaching_candidates)})"
    )
    for agent in report.coaching_candidates:
        console.print(
            f"  {agent.agent}: efficiency {agent.efficiency_score}, "
            f"AHT {format_duration(agent.avg_handle_time)}"
        )


@app.command()
def analyze(
    input_file: Path = typer.Argument(..., help=CliHelp.INPUT_FILE),
    queue: str = typer.Option(ALL_SELECTOR, "--queue", "-q", help=CliHelp.QUEUE),
    media_type: str = typer.Option(
        ALL_SELECTOR, "--media-type", "-m", help=CliHelp.MEDIA_TYPE
    ),
    agent: str = typer.Option(ALL_SELECTOR, "--agent", "-a", help=CliHelp.AGENT),
    sort_by: SortKey = typer.Option(
        SortKey.INTERACTIONS,
        "--sort-by",
        "-s",
        envvar="AGENT_METRICS_SORT_BY",
        help=CliHelp.SORT_BY,
    ),
    limit: int = typer.Option(
        DEFAULT_DISPLAY_LIMIT, "--limit", "-l", help=CliHelp.LIMIT
    ),
    json_output: Path = typer.Option(
        None, "--json-output", "-j", help=CliHelp.JSON_OUTPUT
    ),
    csv_output: Path = typer.Option(
        None, "--csv-output", "-c", help=CliHelp.CSV_OUTPUT
    ),
    output_dir: Path = typer.Option(
        Path("."),
        "--output-dir",
        "-o",
        envvar="AGENT_METRICS_OUTPUT_DIR",
        help=CliHelp.OUTPUT_DIR,
    ),
) -> None:
    """Compute per-agent performance metrics from an interaction export.

    Filters the interactions by queue, media type and agent, derives each
    agent's efficiency, productivity, utilization, versatility and tier, logs
    the workforce summary and lists top performers and coaching candidates.
    """
    try:
        records = load_records(input_file)

        analyzer = WorkforceAnalyzer(sort_by=sort_by)
        report = analyzer.analyze(
            records=records,
            selection=FilterSelection(queue=queue, media_type=media_type, agent=agent),
        )

        if report.agents:
            _render_agents(report=report, limit=limit)
            _render_highlights(report=report)

        storage = MetricsStorage()
        if json_output is not None or csv_output is not None:
            output_dir.mkdir(parents=True, exist_ok=True)
        if json_output is not None:
            storage.save_report(report=report, filepath=output_dir / json_output)
        if csv_output is not None:
            storage.save_agents_csv(report=report, filepath=output_dir / csv_output)
    except FileProcessingError as e:
        logger.error(str(e))
        raise typer.Exit(code=EXIT_CODE_ERROR)
    except Exception as e:
        logger.exception(LogMessage.ERROR_OCCURRED.format(e))
        raise typer.Exit(code=EXIT_CODE_ERROR)


@app.command()
def options(
    input_file: Path = typer.Argument(..., help=CliHelp.INPUT_FILE),
) -> None:
    """List the queues, media types and agents available for filtering."""
    try:
        records = load_records(input_file)
    except FileProcessingError as e:
        logger.error(str(e))
        raise typer.Exit(code=EXIT_CODE_ERROR)

    available = dataset_options(records)

    console.print(f"[bold]Queues[/] ({len(available.queues)})")
    for value in available.queues:
        console.print(f"  {value}")
    console.print(f"[bold]Media types[/] ({len(available.media_types)})")
    for value in available.media_types:
        console.print(f"  {value}")
    console.print(f"[bold]Agents[/] ({len(available.agents)})")
    for value in available.agents:
        console.print(f"  {value}")


@app.command()
def formulas() -> None:
    """Show how each agent metric is calculated."""
    table = Table(title="Metric formulas")
    table.add_column("Metric")
    table.add_column("Formula")
    table.add_column("Description")

    for formula in METRIC_FORMULAS:
        table.add_row(formula.name, formula.formula, formula.description)

    console.print(table)
