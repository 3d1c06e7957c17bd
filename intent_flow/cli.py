"""CLI interface for intent flow analysis."""

import sys
from collections import Counter
from pathlib import Path

import typer
from dotenv import load_dotenv
from loguru import logger
from rich.console import Console
from rich.table import Table

from .classifier import classify_many
from .config import FlowConfig
from .constants import (
    DEFAULT_LINKS_OUTPUT,
    DEFAULT_NODES_OUTPUT,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_REPORT_OUTPUT,
    DEFAULT_TOP_OUTCOMES,
    DEFAULT_TOP_TOPICS,
    ENV_TOP_OUTCOMES,
    ENV_TOP_TOPICS,
    EXIT_CODE_ERROR,
    CliHelp,
    LogMessage,
    Stage,
)
from .engine import IntentFlowEngine
from .errors import IntentFlowError
from .loader import load_records
from .models import FlowReport
from .storage import FlowStorage

app = typer.Typer(help=CliHelp.APP)


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


def _render_report(report: FlowReport) -> Table:
    stats = report.stats
    table = Table(title="Intent Flow")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Topics", str(len(report.graph.topics)))
    table.add_row("Stages", str(len(report.graph.stages)))
    table.add_row("Outcomes", str(len(report.graph.outcomes)))
    table.add_row("Links", str(len(report.graph.links)))
    table.add_row("Total flow", str(stats.total_flow))
    table.add_row("Avg flow strength", str(stats.avg_flow_strength))
    table.add_row("Bottleneck stage", stats.bottleneck_stage_name)
    table.add_row("Top topic", stats.top_topic_name)
    return table


@app.command(help=CliHelp.FLOW_COMMAND)
def flow(
    records_file: Path = typer.Argument(..., help=CliHelp.RECORDS_FILE),
    top_topics: int = typer.Option(
        DEFAULT_TOP_TOPICS,
        "--top-topics",
        "-t",
        envvar=ENV_TOP_TOPICS,
        help=CliHelp.TOP_TOPICS,
    ),
    top_outcomes: int = typer.Option(
        DEFAULT_TOP_OUTCOMES,
        "--top-outcomes",
        "-o",
        envvar=ENV_TOP_OUTCOMES,
        help=CliHelp.TOP_OUTCOMES,
    ),
    shard_size: int = typer.Option(
        None, "--shard-size", "-s", min=1, help=CliHelp.SHARD_SIZE
    ),
    output_dir: Path = typer.Option(
        DEFAULT_OUTPUT_DIR, "--output-dir", "-d", help=CliHelp.OUTPUT_DIR
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=CliHelp.VERBOSE),
) -> None:
    _configure_logging(verbose)

    try:
        records = load_records(records_file)

        engine = IntentFlowEngine(
            config=FlowConfig(top_topics=top_topics, top_outcomes=top_outcomes),
            shard_size=shard_size,
        )
        report = engine.run(records=records)

        output_dir.mkdir(parents=True, exist_ok=True)
        storage = FlowStorage()
        storage.save_report(report=report, filepath=output_dir / DEFAULT_REPORT_OUTPUT)
        storage.save_nodes_csv(
            graph=report.graph, filepath=output_dir / DEFAULT_NODES_OUTPUT
        )
        storage.save_links_csv(
            graph=report.graph, filepath=output_dir / DEFAULT_LINKS_OUTPUT
        )
    except IntentFlowError as e:
        logger.error(LogMessage.ERROR_OCCURRED.format(e))
        raise typer.Exit(code=EXIT_CODE_ERROR)

    Console().print(_render_report(report))


@app.command(help=CliHelp.CLASSIFY_COMMAND)
def classify(
    records_file: Path = typer.Argument(..., help=CliHelp.RECORDS_FILE),
    output: Path = typer.Option(None, "--output", "-o", help=CliHelp.STAGES_OUTPUT),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=CliHelp.VERBOSE),
) -> None:
    _configure_logging(verbose)

    try:
        records = load_records(records_file)
    except IntentFlowError as e:
        logger.error(LogMessage.ERROR_OCCURRED.format(e))
        raise typer.Exit(code=EXIT_CODE_ERROR)

    classified = classify_many(records)

    if output is not None:
        FlowStorage().save_stages_csv(classified=classified, filepath=output)

    counts = Counter(stage for _, stage in classified)

    table = Table(title="Stage assignment")
    table.add_column("Record")
    table.add_column("Stage")
    for record_id, stage in classified:
        table.add_row(record_id, str(stage))

    totals = Table(title="Records per stage")
    totals.add_column("Stage")
    totals.add_column("Records", justify="right")
    for stage in Stage:
        if counts[stage]:
            totals.add_row(str(stage), str(counts[stage]))

    console = Console()
    console.print(table)
    console.print(totals)


def main() -> None:
    """Console entry point; loads a .env file before dispatching."""
    load_dotenv()
    app()
