"""Storage for flow reports and their node/link tables."""

import json
from pathlib import Path

import polars as pl
from loguru import logger

from .constants import (
    DEFAULT_LINKS_OUTPUT,
    DEFAULT_NODES_OUTPUT,
    DEFAULT_REPORT_OUTPUT,
    JSON_INDENT,
    LogMessage,
    Stage,
)
from .models import FlowGraph, FlowReport

NODE_SCHEMA = {"id": pl.Utf8, "name": pl.Utf8, "kind": pl.Utf8, "count": pl.Int64}
LINK_SCHEMA = {"source": pl.Utf8, "target": pl.Utf8, "value": pl.Int64}
STAGE_SCHEMA = {"record_id": pl.Utf8, "stage": pl.Utf8}


def _frame(rows: list[dict], schema: dict) -> pl.DataFrame:
    columns = {name: [row[name] for row in rows] for name in schema}
    return pl.DataFrame(columns, schema=schema)


class FlowStorage:
    """Handles saving flow reports and tables to disk."""

    def save_report(
        self,
        *,
        report: FlowReport,
        filepath: Path | str = DEFAULT_REPORT_OUTPUT,
    ) -> Path:
        """Save a flow report (graph and statistics) to a JSON file.

        Args:
            report: FlowReport to save.
            filepath: Path where the JSON file should be saved.

        Returns:
            Path: The written file.
        """
        filepath = Path(filepath)

        with filepath.open("w") as f:
            json.dump(report.to_dict(), f, indent=JSON_INDENT, default=str)

        logger.success(LogMessage.SAVED_REPORT.format(filepath))
        return filepath

    def save_nodes_csv(
        self,
        *,
        graph: FlowGraph,
        filepath: Path | str = DEFAULT_NODES_OUTPUT,
    ) -> Path:
        """Save the graph's nodes to a CSV file, one row per node.

        Rows follow the graph order: topics, then stages, then outcomes.

        Args:
            graph: FlowGraph whose nodes are saved.
            filepath: Path where the CSV file should be saved.

        Returns:
            Path: The written file.
        """
        filepath = Path(filepath)

        df = _frame([node.to_dict() for node in graph.nodes], NODE_SCHEMA)
        df.write_csv(filepath)

        logger.success(LogMessage.SAVED_NODES.format(len(df), filepath))
        return filepath

    def save_links_csv(
        self,
        *,
        graph: FlowGraph,
        filepath: Path | str = DEFAULT_LINKS_OUTPUT,
    ) -> Path:
        """Save the graph's links to a CSV file, strongest links first.

        Args:
            graph: FlowGraph whose links are saved.
            filepath: Path where the CSV file should be saved.

        Returns:
            Path: The written file.
        """
        filepath = Path(filepath)

        df = _frame([link.to_dict() for link in graph.links], LINK_SCHEMA)

        # Sort by value (descending), keeping graph order among equal values
        df = df.sort("value", descending=True, maintain_order=True)

        df.write_csv(filepath)

        logger.success(LogMessage.SAVED_LINKS.format(len(df), filepath))
        return filepath

    def save_stages_csv(
        self,
        *,
        classified: list[tuple[str, Stage]],
        filepath: Path | str,
    ) -> Path:
        """Save per-record stage assignments to a CSV file.

        Args:
            classified: (record id, stage) pairs.
            filepath: Path where the CSV file should be saved.

        Returns:
            Path: The written file.
        """
        filepath = Path(filepath)

        df = _frame(
            [
                {"record_id": record_id, "stage": str(stage)}
                for record_id, stage in classified
            ],
            STAGE_SCHEMA,
        )
        df.write_csv(filepath)

        logger.success(LogMessage.SAVED_STAGES.format(len(df), filepath))
        return filepath
