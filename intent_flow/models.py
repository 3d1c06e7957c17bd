"""Data models for the Intent Flow engine."""

from dataclasses import dataclass
from typing import Any

from .constants import (
    NODE_ID_SEPARATOR,
    UNKNOWN_TOPIC,
    ActionPendingStatus,
    ApiRecordKey,
    NodeKind,
    RecordKey,
    ReportKey,
    ResolutionStatus,
)


def node_id(kind: NodeKind, name: str) -> str:
    """Build the stable identifier of a flow node from its kind and name."""
    return f"{kind}{NODE_ID_SEPARATOR}{name}"


@dataclass(frozen=True)
class ThreadRecord:
    """Represents one customer interaction thread fed into the flow engine.

    Defaults for absent fields are resolved here, once, so that the classifier
    and the graph builder never have to repeat fallback checks.

    Attributes:
        id: Unique identifier of the thread.
        topic_label: Dominant subject/cluster label; empty or absent becomes "Unknown".
        resolution_status: Current resolution status, if known.
        action_pending_status: State of the next pending action, if known.
        action_pending_from: Party owing the next action (e.g. 'company'), if known.
        escalation_count: Number of escalation events on the thread.
        follow_up_required: Whether a follow-up was requested.
        next_action_suggestion: Suggested next action text, may be empty.
    """

    id: str
    topic_label: str = UNKNOWN_TOPIC
    resolution_status: ResolutionStatus | None = None
    action_pending_status: ActionPendingStatus | None = None
    action_pending_from: str | None = None
    escalation_count: int = 0
    follow_up_required: bool = False
    next_action_suggestion: str = ""

    def __post_init__(self) -> None:
        # Frozen dataclass: normalize through object.__setattr__
        if not self.topic_label:
            object.__setattr__(self, "topic_label", UNKNOWN_TOPIC)
        if self.resolution_status is not None:
            object.__setattr__(
                self, "resolution_status", ResolutionStatus(self.resolution_status)
            )
        if self.action_pending_status is not None:
            object.__setattr__(
                self,
                "action_pending_status",
                ActionPendingStatus(self.action_pending_status),
            )
        if not self.action_pending_from:
            object.__setattr__(self, "action_pending_from", None)
        if self.next_action_suggestion is None:
            object.__setattr__(self, "next_action_suggestion", "")
        if self.escalation_count is None:
            object.__setattr__(self, "escalation_count", 0)

    @property
    def outcome(self) -> str:
        """Terminal outcome of the thread; absent status counts as open."""
        return str(self.resolution_status or ResolutionStatus.OPEN)

    @classmethod
    def from_dict(cls, *, data: dict[str, Any]) -> "ThreadRecord":
        """Create a ThreadRecord from an API or cached dictionary.

        Handles both the dashboard API format (thread_id/dominant_cluster_name)
        and the short format (id/topic_label).

        Args:
            data: Dictionary containing thread data.

        Returns:
            ThreadRecord: A new ThreadRecord with defaults resolved.

        Raises:
            ValueError: If neither an id nor a thread_id is present.
        """
        # Try short format first, then API format
        record_id = data.get(RecordKey.ID) or data.get(ApiRecordKey.THREAD_ID)
        if record_id is None or record_id == "":
            raise ValueError(
                f"Thread record needs '{RecordKey.ID}' or '{ApiRecordKey.THREAD_ID}'"
            )
        topic = data.get(RecordKey.TOPIC_LABEL) or data.get(
            ApiRecordKey.DOMINANT_CLUSTER_NAME
        )

        escalation_count = data.get(RecordKey.ESCALATION_COUNT) or 0

        return cls(
            id=str(record_id),
            topic_label=topic or UNKNOWN_TOPIC,
            resolution_status=data.get(RecordKey.RESOLUTION_STATUS) or None,
            action_pending_status=data.get(RecordKey.ACTION_PENDING_STATUS) or None,
            action_pending_from=data.get(RecordKey.ACTION_PENDING_FROM) or None,
            escalation_count=int(escalation_count),
            follow_up_required=bool(data.get(RecordKey.FOLLOW_UP_REQUIRED, False)),
            next_action_suggestion=data.get(RecordKey.NEXT_ACTION_SUGGESTION) or "",
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert the record to a dictionary using the short field names."""
        return {
            RecordKey.ID: self.id,
            RecordKey.TOPIC_LABEL: self.topic_label,
            RecordKey.RESOLUTION_STATUS: self.resolution_status,
            RecordKey.ACTION_PENDING_STATUS: self.action_pending_status,
            RecordKey.ACTION_PENDING_FROM: self.action_pending_from,
            RecordKey.ESCALATION_COUNT: self.escalation_count,
            RecordKey.FOLLOW_UP_REQUIRED: self.follow_up_required,
            RecordKey.NEXT_ACTION_SUGGESTION: self.next_action_suggestion,
        }


@dataclass(frozen=True)
class FlowNode:
    """A node of the flow graph.

    Attributes:
        name: Display name (topic label, stage name or outcome status).
        kind: Tier the node belongs to.
        count: Number of records mapped into this node.
    """

    name: str
    kind: NodeKind
    count: int

    @property
    def id(self) -> str:
        return node_id(self.kind, self.name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "kind": str(self.kind),
            "count": self.count,
        }


@dataclass(frozen=True)
class FlowLink:
    """A weighted edge between two adjacent-tier nodes, referenced by id."""

    source: str
    target: str
    value: int

    def to_dict(self) -> dict[str, Any]:
        return {"source": self.source, "target": self.target, "value": self.value}


@dataclass(frozen=True)
class FlowGraph:
    """Three-tier flow graph: Topic -> Stage -> Outcome.

    Attributes:
        topics: Selected topic nodes, most frequent first.
        stages: Every stage with at least one record, in pipeline order.
        outcomes: Selected outcome nodes, most frequent first.
        topic_stage_links: Links from topic nodes to stage nodes.
        stage_outcome_links: Links from stage nodes to outcome nodes.
    """

    topics: tuple[FlowNode, ...] = ()
    stages: tuple[FlowNode, ...] = ()
    outcomes: tuple[FlowNode, ...] = ()
    topic_stage_links: tuple[FlowLink, ...] = ()
    stage_outcome_links: tuple[FlowLink, ...] = ()

    @property
    def nodes(self) -> tuple[FlowNode, ...]:
        return self.topics + self.stages + self.outcomes

    @property
    def links(self) -> tuple[FlowLink, ...]:
        return self.topic_stage_links + self.stage_outcome_links

    def is_empty(self) -> bool:
        return not self.nodes and not self.links

    def get_node(self, identifier: str) -> FlowNode | None:
        """Look up a node by its id, returning None when it was not selected."""
        for node in self.nodes:
            if node.id == identifier:
                return node
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert the graph to a dictionary for serialization.

        Returns:
            dict[str, Any]: Node lists per kind and link lists per tier.
        """
        return {
            ReportKey.TOPICS: [node.to_dict() for node in self.topics],
            ReportKey.STAGES: [node.to_dict() for node in self.stages],
            ReportKey.OUTCOMES: [node.to_dict() for node in self.outcomes],
            ReportKey.TOPIC_STAGE_LINKS: [
                link.to_dict() for link in self.topic_stage_links
            ],
            ReportKey.STAGE_OUTCOME_LINKS: [
                link.to_dict() for link in self.stage_outcome_links
            ],
        }


@dataclass(frozen=True)
class FlowStats:
    """Aggregate diagnostics of a flow graph.

    Attributes:
        total_flow: Sum of all link values across both tiers.
        avg_flow_strength: Mean link value rounded to one decimal, 0 without links.
        bottleneck_stage_name: Stage receiving the most topic flow, or "N/A".
        top_topic_name: Topic sending the most flow to stages, or "N/A".
    """

    total_flow: int
    avg_flow_strength: float
    bottleneck_stage_name: str
    top_topic_name: str

    def to_dict(self) -> dict[str, Any]:
        return {
            ReportKey.TOTAL_FLOW: self.total_flow,
            ReportKey.AVG_FLOW_STRENGTH: self.avg_flow_strength,
            ReportKey.BOTTLENECK_STAGE: self.bottleneck_stage_name,
            ReportKey.TOP_TOPIC: self.top_topic_name,
        }


@dataclass(frozen=True)
class FlowReport:
    """A flow graph together with the statistics computed from it."""

    graph: FlowGraph
    stats: FlowStats

    def to_dict(self) -> dict[str, Any]:
        return {
            ReportKey.GRAPH: self.graph.to_dict(),
            ReportKey.STATS: self.stats.to_dict(),
        }
