"""Rolling aggregate metrics over the node log.

Synaptic efficiency blends the all-time mean synaptic score with the mean
over the recent window (70/30 by default). Temporal alignment reflects the
recent success rate, with a bonus for recent failures as a learning signal.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

import numpy as np

from first_signal.cognition.config import EngineConfig
from first_signal.cognition.schemas import CausalNode, NodeCategory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RollingMetrics:
    """Result of a metric recomputation."""

    synaptic_efficiency: float
    temporal_alignment: float
    recent_count: int


def recent_nodes(
    nodes: Sequence[CausalNode], now: datetime, config: EngineConfig
) -> list[CausalNode]:
    """Nodes younger than config.recent_window."""
    return [node for node in nodes if now - node.timestamp < config.recent_window]


def synaptic_efficiency(
    nodes: Sequence[CausalNode], recent: Sequence[CausalNode], config: EngineConfig
) -> float:
    if not nodes:
        return config.default_synaptic_efficiency

    historical = float(np.mean([node.synaptic_score for node in nodes]))
    if recent:
        recent_mean = float(np.mean([node.synaptic_score for node in recent]))
    else:
        recent_mean = config.default_recent_efficiency

    efficiency = historical * config.historical_weight + recent_mean * config.recent_weight
    return float(np.clip(efficiency, 0.0, 1.0))


def temporal_alignment(
    recent: Sequence[CausalNode], previous: float, config: EngineConfig
) -> float:
    """Alignment from the recent success rate.

    Returns previous unchanged when nothing happened in the recent window.
    """
    if not recent:
        return previous

    successes = sum(1 for node in recent if node.category.is_positive)
    success_rate = successes / len(recent)
    has_failure = any(node.category == NodeCategory.FAILURE for node in recent)
    learning_bonus = config.alignment_learning_bonus if has_failure else 0.0

    return min(
        config.alignment_ceiling,
        config.alignment_base + success_rate * config.alignment_success_scale + learning_bonus,
    )


def compute_metrics(
    nodes: Sequence[CausalNode],
    now: datetime,
    previous_alignment: float,
    config: EngineConfig,
) -> RollingMetrics:
    """Recompute both rolling metrics from the node sequence.

    Deterministic for a fixed node sequence, clock reading and previous
    alignment.

    Args:
        nodes: Full node log, oldest first
        now: Current time
        previous_alignment: Alignment to keep if nothing is recent
        config: Engine configuration

    Returns:
        RollingMetrics with the new values
    """
    recent = recent_nodes(nodes, now, config)
    metrics = RollingMetrics(
        synaptic_efficiency=synaptic_efficiency(nodes, recent, config),
        temporal_alignment=temporal_alignment(recent, previous_alignment, config),
        recent_count=len(recent),
    )
    logger.debug(
        f"Metrics recomputed over {len(nodes)} nodes ({metrics.recent_count} recent): "
        f"efficiency={metrics.synaptic_efficiency:.3f}, "
        f"alignment={metrics.temporal_alignment:.3f}"
    )
    return metrics
