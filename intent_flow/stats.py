"""Summary diagnostics over a flow graph."""

import math

from .constants import NOT_AVAILABLE
from .models import FlowGraph, FlowNode, FlowStats


def _round_one_decimal(value: float) -> float:
    # Half-up, matching how the dashboard displays averages
    return math.floor(value * 10 + 0.5) / 10


def _busiest(nodes: tuple[FlowNode, ...], flow: dict[str, int]) -> str:
    """Name of the node with the largest flow; the first node wins ties."""
    best_name = NOT_AVAILABLE
    best_value = 0
    for node in nodes:
        value = flow.get(node.id, 0)
        if value > best_value:
            best_name = node.name
            best_value = value
    return best_name


def compute_stats(graph: FlowGraph) -> FlowStats:
    """Compute flow totals, bottleneck stage and top topic for a graph.

    Only Topic -> Stage links feed the bottleneck and top topic: the
    bottleneck is the stage with the largest inbound sum, the top topic the
    topic with the largest outbound sum. Both fall back to "N/A" when the
    graph has no Topic -> Stage links.

    Args:
        graph: Flow graph to summarize.

    Returns:
        FlowStats: Freshly computed statistics.
    """
    links = graph.links
    total_flow = sum(link.value for link in links)
    avg_flow_strength = _round_one_decimal(total_flow / len(links)) if links else 0.0

    stage_inflow: dict[str, int] = {}
    topic_outflow: dict[str, int] = {}
    for link in graph.topic_stage_links:
        stage_inflow[link.target] = stage_inflow.get(link.target, 0) + link.value
        topic_outflow[link.source] = topic_outflow.get(link.source, 0) + link.value

    return FlowStats(
        total_flow=total_flow,
        avg_flow_strength=avg_flow_strength,
        bottleneck_stage_name=_busiest(graph.stages, stage_inflow),
        top_topic_name=_busiest(graph.topics, topic_outflow),
    )
