"""Intent flow analysis package."""

from .builder import FlowAccumulator, FlowGraphBuilder, build_flow_graph
from .classifier import classify, classify_many, early_stage_for
from .config import FlowConfig
from .constants import NodeKind, Stage
from .engine import IntentFlowEngine
from .errors import (
    ConfigurationError,
    IntentFlowError,
    RecordFileError,
    RecordValidationError,
)
from .loader import load_records, parse_records
from .models import FlowGraph, FlowLink, FlowNode, FlowReport, FlowStats, ThreadRecord
from .stats import compute_stats
from .storage import FlowStorage

__all__ = [
    "ConfigurationError",
    "FlowAccumulator",
    "FlowConfig",
    "FlowGraph",
    "FlowGraphBuilder",
    "FlowLink",
    "FlowNode",
    "FlowReport",
    "FlowStats",
    "FlowStorage",
    "IntentFlowEngine",
    "IntentFlowError",
    "NodeKind",
    "RecordFileError",
    "RecordValidationError",
    "Stage",
    "ThreadRecord",
    "build_flow_graph",
    "classify",
    "classify_many",
    "compute_stats",
    "early_stage_for",
    "load_records",
    "parse_records",
]
