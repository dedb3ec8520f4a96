"""Topic engagement pipeline."""

from tubepilot.core.pipeline.channels import (
    find_best_channels,
    subscribe_to_channel,
    subscribe_to_top_channels,
)
from tubepilot.core.pipeline.duration import parse_duration_ms
from tubepilot.core.pipeline.engagement import EngagementExecutor
from tubepilot.core.pipeline.orchestrator import PipelineOrchestrator, watch_context

__all__ = [
    "EngagementExecutor",
    "PipelineOrchestrator",
    "find_best_channels",
    "parse_duration_ms",
    "subscribe_to_channel",
    "subscribe_to_top_channels",
    "watch_context",
]
