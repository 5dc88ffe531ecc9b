"""Cognitive state engine for one user session.

The engine owns an append-only log of CausalNodes and the metrics derived
from it. Each insertion scores the node, links it to related recent nodes,
recomputes the rolling metrics, records a world-model entry and refreshes
the cached emergent patterns.

The engine is synchronous and keeps no locks. Callers sharing one engine
across threads must serialize calls themselves, since add_node is a
read-modify-write over the node log and both rolling metrics.

Example:
    engine = CognitiveEngine("user-42")
    node = engine.add_node("Launched X", "Users increased by 15%", "success")
    state = engine.get_cognitive_state()
    patterns = engine.get_emergent_patterns()
"""

import logging
import math
import time
import uuid
from datetime import datetime
from typing import Callable, Optional, Union

import numpy as np

from first_signal.cognition import causal, world_model
from first_signal.cognition.config import EngineConfig
from first_signal.cognition.metrics import compute_metrics
from first_signal.cognition.patterns import PatternAnalyzer
from first_signal.cognition.schemas import (
    CausalNode,
    CognitiveSnapshot,
    CognitiveState,
    EmergentPattern,
    NodeCategory,
    SnapshotMetrics,
    utc_now,
)
from first_signal.cognition.scoring import NodeScorer, clamp

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]

SECONDS_PER_HOUR = 3600.0


class InvalidNodeInputError(ValueError):
    """Raised for empty decision/outcome text when strict input is enabled."""


def _uuid_factory() -> str:
    return str(uuid.uuid4())


class CognitiveEngine:
    """Maintains the CognitiveState for one user.

    Randomness, time and identifiers are injected so scoring and metrics can
    be made fully deterministic in tests.
    """

    def __init__(
        self,
        user_id: str,
        config: Optional[EngineConfig] = None,
        *,
        rng: Optional[np.random.Generator] = None,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
    ):
        """Initialize an empty engine.

        Args:
            user_id: Owner of the state
            config: Scoring and metric constants (defaults to EngineConfig())
            rng: Random generator for noisy base scores
            clock: Returns the current aware UTC datetime
            id_factory: Returns a fresh unique node id
        """
        self.config = config or EngineConfig()
        self._clock = clock or utc_now
        self._new_id = id_factory or _uuid_factory
        self._scorer = NodeScorer(self.config, rng=rng)
        self._patterns = PatternAnalyzer(self.config)
        self._nodes_by_id: dict[str, CausalNode] = {}

        self._state = CognitiveState(
            id=_uuid_factory(),
            user_id=user_id,
            bias_profile=dict(self.config.bias_profile),
            synaptic_efficiency=self.config.default_synaptic_efficiency,
            temporal_alignment=self.config.default_temporal_alignment,
            last_updated=self._clock(),
        )
        logger.info(f"Cognitive engine {self._state.id} created for user {user_id}")

    @property
    def user_id(self) -> str:
        return self._state.user_id

    def __len__(self) -> int:
        return len(self._state.causal_graph)

    # =========================================================================
    # Insertion
    # =========================================================================

    def add_node(
        self,
        decision: str,
        outcome: str,
        category: Union[NodeCategory, str],
    ) -> CausalNode:
        """Record a decision/outcome pair and return the scored node.

        Not idempotent: identical arguments produce distinct nodes with
        independently drawn base scores.

        Args:
            decision: What was decided
            outcome: What happened
            category: NodeCategory or its string value

        Returns:
            A deep copy of the inserted node; mutating it never affects the engine

        Raises:
            ValueError: If category is not a known NodeCategory, or the id
                factory repeats an id
            InvalidNodeInputError: If text is empty and config.reject_empty_text
        """
        started = time.perf_counter()
        category = NodeCategory(category)
        self._check_text(decision, outcome)

        now = self._clock()
        history = self._state.causal_graph
        node_id = self._new_id()
        if node_id in self._nodes_by_id:
            raise ValueError(f"Id factory returned duplicate node id {node_id}")

        node = CausalNode(
            id=node_id,
            decision=decision,
            outcome=outcome,
            timestamp=now,
            category=category,
            synaptic_score=self._scorer.synaptic_score(decision, outcome, category, history),
            complexity=self._scorer.complexity(decision, outcome),
            impact_score=self._scorer.impact_score(outcome, category),
            confidence=self._scorer.confidence(decision, outcome, category),
            caused_by=causal.find_causal_predecessors(decision, history, now, self.config),
        )

        predecessors = causal.mirror_edges(node, self._nodes_by_id)
        history.append(node)
        self._nodes_by_id[node.id] = node

        self.recompute_metrics()

        self._state.world_model[node.id] = world_model.build_entry(node, history, self.config)
        for predecessor in predecessors:
            self._state.world_model[predecessor.id] = world_model.build_entry(
                predecessor, history, self.config
            )
        self._state.emergent_patterns = self.get_emergent_patterns()
        self._state.total_processing_time += time.perf_counter() - started

        logger.debug(
            f"Added {category.value} node {node.id}: synaptic={node.synaptic_score:.3f}, "
            f"complexity={node.complexity:.3f}, impact={node.impact_score:.3f}, "
            f"confidence={node.confidence:.3f}, caused_by={len(node.caused_by)}"
        )
        return node.model_copy(deep=True)

    def _check_text(self, decision: str, outcome: str) -> None:
        empty = [
            name for name, text in (("decision", decision), ("outcome", outcome))
            if not text.strip()
        ]
        if not empty:
            return
        if self.config.reject_empty_text:
            raise InvalidNodeInputError(f"Empty {' and '.join(empty)} text")
        logger.warning(f"Scoring node with empty {' and '.join(empty)} text")

    # =========================================================================
    # Metrics
    # =========================================================================

    def recompute_metrics(self) -> None:
        """Recompute synaptic efficiency and temporal alignment.

        Safe to call at any time; without new insertions it only reflects
        nodes ageing out of the recent window.
        """
        now = self._clock()
        metrics = compute_metrics(
            self._state.causal_graph,
            now,
            previous_alignment=self._state.temporal_alignment,
            config=self.config,
        )
        self._state.synaptic_efficiency = metrics.synaptic_efficiency
        self._state.temporal_alignment = metrics.temporal_alignment
        self._state.last_updated = now

    # =========================================================================
    # Reads
    # =========================================================================

    def get_emergent_patterns(self) -> list[EmergentPattern]:
        """Significant recurring patterns, heaviest first. Never mutates state."""
        return self._patterns.analyze(self._state.causal_graph)

    def get_cognitive_state(self) -> CognitiveState:
        """Deep copy of the current state; mutating it never affects the engine."""
        return self._state.model_copy(deep=True)

    def get_bias_adjusted_score(self, node: CausalNode) -> float:
        """Synaptic score corrected for optimism bias.

        Successes are discounted and failures boosted by
        ``optimismBias * 0.1``; other categories are unchanged.
        """
        optimism = self._state.bias_profile.get("optimismBias", 0.0)
        score = node.synaptic_score
        if node.category == NodeCategory.SUCCESS:
            score *= 1 - optimism * 0.1
        elif node.category == NodeCategory.FAILURE:
            score *= 1 + optimism * 0.1
        return clamp(score)

    def get_temporal_decay(self, node: CausalNode) -> float:
        """Exponential relevance decay, 1.0 for a brand-new node."""
        age_hours = (self._clock() - node.timestamp).total_seconds() / SECONDS_PER_HOUR
        return math.exp(-age_hours / self.config.decay_horizon_hours)

    def export_cognitive_snapshot(self) -> CognitiveSnapshot:
        """State copy plus summary counters."""
        state = self.get_cognitive_state()
        return CognitiveSnapshot(
            timestamp=self._clock(),
            state=state,
            metrics=SnapshotMetrics(
                total_nodes=len(state.causal_graph),
                average_score=state.synaptic_efficiency,
                processing_time=state.total_processing_time,
                patterns=len(state.emergent_patterns),
            ),
        )
