"""Constants and enumerations for the Intent Flow engine."""

from enum import StrEnum
from typing import Final


# Default Values
DEFAULT_TOP_TOPICS: Final[int] = 6
DEFAULT_TOP_OUTCOMES: Final[int] = 4
DEFAULT_OUTPUT_DIR: Final[str] = "output"
DEFAULT_REPORT_OUTPUT: Final[str] = "flow_report.json"
DEFAULT_NODES_OUTPUT: Final[str] = "flow_nodes.csv"
DEFAULT_LINKS_OUTPUT: Final[str] = "flow_links.csv"

# Environment variables read by the CLI
ENV_TOP_TOPICS: Final[str] = "INTENT_FLOW_TOP_TOPICS"
ENV_TOP_OUTCOMES: Final[str] = "INTENT_FLOW_TOP_OUTCOMES"

# Sentinels
UNKNOWN_TOPIC: Final[str] = "Unknown"
NOT_AVAILABLE: Final[str] = "N/A"
NODE_ID_SEPARATOR: Final[str] = ":"

# JSON Serialization
JSON_INDENT: Final[int] = 2

# Numeric Constants
EXIT_CODE_ERROR: Final[int] = 1
EARLY_STAGE_COUNT: Final[int] = 3


class Stage(StrEnum):
    """Workflow stages, declared in pipeline order."""

    RECEIVE = "Receive"
    AUTHENTICATE = "Authenticate"
    CATEGORIZE = "Categorize"
    RESOLUTION = "Resolution"
    ESCALATION = "Escalation"
    UPDATE = "Update"
    RESOLVED = "Resolved"
    CLOSE = "Close"
    REPORT = "Report"


EARLY_STAGES: Final[tuple[Stage, ...]] = (
    Stage.RECEIVE,
    Stage.AUTHENTICATE,
    Stage.CATEGORIZE,
)


class ResolutionStatus(StrEnum):
    """Resolution status of a thread, also used as the flow outcome."""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    CLOSED = "closed"
    ESCALATED = "escalated"


class ActionPendingStatus(StrEnum):
    """State of the next pending action on a thread."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    OVERDUE = "overdue"


class PendingParty(StrEnum):
    """Parties that can owe the next action."""

    COMPANY = "company"
    CUSTOMER = "customer"


class NodeKind(StrEnum):
    """Tiers of the flow graph."""

    TOPIC = "topic"
    STAGE = "stage"
    OUTCOME = "outcome"


class RecordKey(StrEnum):
    """Short field names of a thread record."""

    ID = "id"
    TOPIC_LABEL = "topic_label"
    RESOLUTION_STATUS = "resolution_status"
    ACTION_PENDING_STATUS = "action_pending_status"
    ACTION_PENDING_FROM = "action_pending_from"
    ESCALATION_COUNT = "escalation_count"
    FOLLOW_UP_REQUIRED = "follow_up_required"
    NEXT_ACTION_SUGGESTION = "next_action_suggestion"


class ApiRecordKey(StrEnum):
    """Field names used by the dashboard thread API."""

    THREAD_ID = "thread_id"
    DOMINANT_CLUSTER_NAME = "dominant_cluster_name"
    THREADS = "threads"


class ReportKey(StrEnum):
    """Output dictionary keys."""

    GRAPH = "graph"
    STATS = "stats"
    TOPICS = "topics"
    STAGES = "stages"
    OUTCOMES = "outcomes"
    TOPIC_STAGE_LINKS = "topic_stage_links"
    STAGE_OUTCOME_LINKS = "stage_outcome_links"
    TOTAL_FLOW = "total_flow"
    AVG_FLOW_STRENGTH = "avg_flow_strength"
    BOTTLENECK_STAGE = "bottleneck_stage"
    TOP_TOPIC = "top_topic"


class LogMessage(StrEnum):
    """Log message templates."""

    LOADING_RECORDS = "Loading thread records from {}..."
    LOADED_RECORDS = "Loaded {} thread records from {}"
    NO_RECORDS = "No thread records to analyze; producing an empty flow graph"
    ACCUMULATED_SHARD = "Accumulated shard {} ({} records)"
    GRAPH_BUILT = "Built flow graph: {} topics, {} stages, {} outcomes, {} links"
    TOPICS_TRUNCATED = "Showing top {} of {} topics"
    OUTCOMES_TRUNCATED = "Showing top {} of {} outcomes"
    STATS_HEADER = "=== INTENT FLOW SUMMARY ==="
    STATS_TOTAL_FLOW = "Total flow: {}"
    STATS_AVG_STRENGTH = "Average flow strength: {}"
    STATS_BOTTLENECK = "Bottleneck stage: {}"
    STATS_TOP_TOPIC = "Top topic: {}"
    SAVED_REPORT = "Saved flow report to {}"
    SAVED_NODES = "Saved {} nodes to {}"
    SAVED_LINKS = "Saved {} links to {}"
    SAVED_STAGES = "Saved {} record stages to {}"
    ERROR_OCCURRED = "Error occurred: {}"


class CliHelp(StrEnum):
    """CLI help messages."""

    APP = "Intent flow analysis for customer interaction threads"
    RECORDS_FILE = "Path to a .json, .jsonl or .csv file of thread records."
    TOP_TOPICS = "Number of most frequent topics shown as flow sources."
    TOP_OUTCOMES = "Number of most frequent outcomes shown as flow targets."
    SHARD_SIZE = (
        "Accumulate records in shards of this size before merging. "
        "If not specified, all records are accumulated at once."
    )
    OUTPUT_DIR = "Directory where the flow report and CSV tables are written."
    STAGES_OUTPUT = "Optional CSV file receiving one record_id,stage row per record."
    VERBOSE = "Enable debug logging."
    FLOW_COMMAND = """Build the Topic -> Stage -> Outcome flow graph for a record file.

Classifies every record into a workflow stage, aggregates the records into a
flow graph, computes the flow diagnostics and writes the report and the
node/link tables to the output directory."""
    CLASSIFY_COMMAND = "Classify every record of a file into its workflow stage."
