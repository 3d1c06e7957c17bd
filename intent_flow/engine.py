"""Intent flow engine: records in, flow graph and diagnostics out."""

from collections.abc import Iterable

from loguru import logger

from .builder import FlowGraphBuilder
from .config import FlowConfig
from .constants import LogMessage
from .models import FlowReport, FlowStats, ThreadRecord
from .stats import compute_stats


class IntentFlowEngine:
    """Runs classification, aggregation and statistics in one call.

    The engine holds no state between runs; every call builds a fresh graph
    and fresh statistics from the records it is given.

    Attributes:
        config: Flow graph limits.
        shard_size: Optional shard size for partial accumulation.
    """

    def __init__(
        self,
        *,
        config: FlowConfig | None = None,
        shard_size: int | None = None,
    ):
        """Initialize the IntentFlowEngine.

        Args:
            config: Top-N topic and top-M outcome limits.
            shard_size: If set, records are counted in shards of this size.
        """
        self.config = config or FlowConfig()
        self.shard_size = shard_size
        self.builder = FlowGraphBuilder(config=self.config)

    def run(self, *, records: Iterable[ThreadRecord]) -> FlowReport:
        """Build the flow graph for the records and summarize it.

        Args:
            records: Threads to analyze.

        Returns:
            FlowReport: The flow graph and its statistics.
        """
        graph = self.builder.build(records=records, shard_size=self.shard_size)
        stats = compute_stats(graph)

        self._print_summary(stats=stats)

        return FlowReport(graph=graph, stats=stats)

    def _print_summary(self, *, stats: FlowStats) -> None:
        logger.info(LogMessage.STATS_HEADER)
        logger.info(LogMessage.STATS_TOTAL_FLOW.format(stats.total_flow))
        logger.info(LogMessage.STATS_AVG_STRENGTH.format(stats.avg_flow_strength))
        logger.info(LogMessage.STATS_BOTTLENECK.format(stats.bottleneck_stage_name))
        logger.info(LogMessage.STATS_TOP_TOPIC.format(stats.top_topic_name))
