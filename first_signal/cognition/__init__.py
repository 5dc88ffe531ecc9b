"""Cognitive state engine: causal node log, heuristic scoring and pattern mining."""

from first_signal.cognition.config import DEFAULT_BIAS_PROFILE, EngineConfig
from first_signal.cognition.engine import CognitiveEngine, InvalidNodeInputError
from first_signal.cognition.patterns import PatternAnalyzer
from first_signal.cognition.schemas import (
    CausalNode,
    CognitiveSnapshot,
    CognitiveState,
    EmergentPattern,
    NodeCategory,
    SnapshotMetrics,
    WorldModelEntry,
)
from first_signal.cognition.scoring import NodeScorer

__all__ = [
    "CausalNode",
    "CognitiveEngine",
    "CognitiveSnapshot",
    "CognitiveState",
    "DEFAULT_BIAS_PROFILE",
    "EmergentPattern",
    "EngineConfig",
    "InvalidNodeInputError",
    "NodeCategory",
    "NodeScorer",
    "PatternAnalyzer",
    "SnapshotMetrics",
    "WorldModelEntry",
]
