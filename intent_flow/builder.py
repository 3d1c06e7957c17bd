"""Aggregate classified thread records into a Topic -> Stage -> Outcome flow graph."""

from collections import Counter
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from itertools import islice

from loguru import logger

from .classifier import classify
from .config import FlowConfig
from .constants import LogMessage, NodeKind, Stage
from .models import FlowGraph, FlowLink, FlowNode, ThreadRecord, node_id


@dataclass
class FlowAccumulator:
    """Frequency and co-occurrence counts for a batch of records.

    Accumulators are local to one batch; partial accumulators over disjoint
    shards combine with merge() and give the same counts as a single pass.
    """

    topics: Counter[str] = field(default_factory=Counter)
    stages: Counter[Stage] = field(default_factory=Counter)
    outcomes: Counter[str] = field(default_factory=Counter)
    topic_stage: Counter[tuple[str, Stage]] = field(default_factory=Counter)
    stage_outcome: Counter[tuple[Stage, str]] = field(default_factory=Counter)

    @property
    def total(self) -> int:
        return sum(self.stages.values())

    def add(self, record: ThreadRecord) -> None:
        topic = record.topic_label
        stage = classify(record)
        outcome = record.outcome

        self.topics[topic] += 1
        self.stages[stage] += 1
        self.outcomes[outcome] += 1
        self.topic_stage[(topic, stage)] += 1
        self.stage_outcome[(stage, outcome)] += 1

    def update(self, records: Iterable[ThreadRecord]) -> "FlowAccumulator":
        for record in records:
            self.add(record)
        return self

    def merge(self, other: "FlowAccumulator") -> "FlowAccumulator":
        """Add another accumulator's counts into this one and return self."""
        self.topics.update(other.topics)
        self.stages.update(other.stages)
        self.outcomes.update(other.outcomes)
        self.topic_stage.update(other.topic_stage)
        self.stage_outcome.update(other.stage_outcome)
        return self


def _top_names(counts: Counter[str], limit: int) -> list[str]:
    # Ties rank by name so the selection does not depend on insertion order
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [name for name, _ in ranked[:limit]]


def _shards(
    records: Iterable[ThreadRecord], size: int
) -> Iterator[list[ThreadRecord]]:
    iterator = iter(records)
    while shard := list(islice(iterator, size)):
        yield shard


class FlowGraphBuilder:
    """Builds flow graphs from thread records.

    Attributes:
        config: Top-N topic and top-M outcome limits.
    """

    def __init__(self, *, config: FlowConfig | None = None):
        self.config = config or FlowConfig()

    def accumulate(
        self, *, records: Iterable[ThreadRecord], shard_size: int | None = None
    ) -> FlowAccumulator:
        """Count records, optionally shard by shard.

        Args:
            records: Threads to aggregate.
            shard_size: If set, records are accumulated in independent shards
                of this size which are merged afterwards.

        Returns:
            FlowAccumulator: Merged counts over all records.
        """
        if shard_size is None:
            return FlowAccumulator().update(records)

        if shard_size <= 0:
            raise ValueError(f"shard_size must be positive, got {shard_size}")

        merged = FlowAccumulator()
        for index, shard in enumerate(_shards(records, shard_size)):
            partial = FlowAccumulator().update(shard)
            logger.debug(LogMessage.ACCUMULATED_SHARD.format(index, len(shard)))
            merged.merge(partial)
        return merged

    def build(
        self, *, records: Iterable[ThreadRecord], shard_size: int | None = None
    ) -> FlowGraph:
        """Classify and aggregate records into a flow graph.

        Args:
            records: Threads to aggregate. Order does not matter.
            shard_size: Optional shard size for partial accumulation.

        Returns:
            FlowGraph: Selected nodes and the links between them.
        """
        accumulator = self.accumulate(records=records, shard_size=shard_size)
        return self.from_accumulator(accumulator=accumulator)

    def from_accumulator(self, *, accumulator: FlowAccumulator) -> FlowGraph:
        """Select the visible nodes and emit the links between them.

        Topics and outcomes are cut to the configured top-N/top-M by
        frequency. Every stage with at least one record is kept, in pipeline
        order. Links are emitted only when both endpoints were selected.

        Args:
            accumulator: Merged counts over the whole record set.

        Returns:
            FlowGraph: The flow graph; empty when no records were counted.
        """
        if accumulator.total == 0:
            logger.warning(LogMessage.NO_RECORDS)
            return FlowGraph()

        top_topics = _top_names(accumulator.topics, self.config.top_topics)
        top_outcomes = _top_names(accumulator.outcomes, self.config.top_outcomes)
        stages = [stage for stage in Stage if accumulator.stages[stage] > 0]

        if len(top_topics) < len(accumulator.topics):
            logger.info(
                LogMessage.TOPICS_TRUNCATED.format(
                    len(top_topics), len(accumulator.topics)
                )
            )
        if len(top_outcomes) < len(accumulator.outcomes):
            logger.info(
                LogMessage.OUTCOMES_TRUNCATED.format(
                    len(top_outcomes), len(accumulator.outcomes)
                )
            )

        topic_nodes = tuple(
            FlowNode(name=name, kind=NodeKind.TOPIC, count=accumulator.topics[name])
            for name in top_topics
        )
        stage_nodes = tuple(
            FlowNode(
                name=str(stage), kind=NodeKind.STAGE, count=accumulator.stages[stage]
            )
            for stage in stages
        )
        outcome_nodes = tuple(
            FlowNode(
                name=name, kind=NodeKind.OUTCOME, count=accumulator.outcomes[name]
            )
            for name in top_outcomes
        )

        topic_stage_links = tuple(
            FlowLink(
                source=node_id(NodeKind.TOPIC, topic),
                target=node_id(NodeKind.STAGE, stage),
                value=accumulator.topic_stage[(topic, stage)],
            )
            for topic in top_topics
            for stage in stages
            if accumulator.topic_stage[(topic, stage)] > 0
        )
        stage_outcome_links = tuple(
            FlowLink(
                source=node_id(NodeKind.STAGE, stage),
                target=node_id(NodeKind.OUTCOME, outcome),
                value=accumulator.stage_outcome[(stage, outcome)],
            )
            for stage in stages
            for outcome in top_outcomes
            if accumulator.stage_outcome[(stage, outcome)] > 0
        )

        graph = FlowGraph(
            topics=topic_nodes,
            stages=stage_nodes,
            outcomes=outcome_nodes,
            topic_stage_links=topic_stage_links,
            stage_outcome_links=stage_outcome_links,
        )

        logger.info(
            LogMessage.GRAPH_BUILT.format(
                len(topic_nodes),
                len(stage_nodes),
                len(outcome_nodes),
                len(graph.links),
            )
        )

        return graph


def build_flow_graph(
    records: Sequence[ThreadRecord],
    *,
    top_topics: int | None = None,
    top_outcomes: int | None = None,
) -> FlowGraph:
    """Build a flow graph with the given limits (defaults: 6 topics, 4 outcomes)."""
    defaults = FlowConfig()
    config = FlowConfig(
        top_topics=defaults.top_topics if top_topics is None else top_topics,
        top_outcomes=defaults.top_outcomes if top_outcomes is None else top_outcomes,
    )
    return FlowGraphBuilder(config=config).build(records=records)
