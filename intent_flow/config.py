"""Configuration knobs for flow graph construction."""

from dataclasses import dataclass

from .constants import DEFAULT_TOP_OUTCOMES, DEFAULT_TOP_TOPICS
from .errors import ConfigurationError


@dataclass(frozen=True)
class FlowConfig:
    """Externally adjustable parameters of the flow graph.

    Attributes:
        top_topics: Number of most frequent topics kept as source nodes.
        top_outcomes: Number of most frequent outcomes kept as target nodes.
        show_all_stages: Always true; every observed stage is shown.
    """

    top_topics: int = DEFAULT_TOP_TOPICS
    top_outcomes: int = DEFAULT_TOP_OUTCOMES
    show_all_stages: bool = True

    def __post_init__(self) -> None:
        if self.top_topics < 0:
            raise ConfigurationError(
                f"top_topics must be non-negative, got {self.top_topics}"
            )
        if self.top_outcomes < 0:
            raise ConfigurationError(
                f"top_outcomes must be non-negative, got {self.top_outcomes}"
            )
        if not self.show_all_stages:
            raise ConfigurationError("Stage truncation is not supported")
