"""Pydantic schemas for the cognitive state engine.

Defines the node, pattern and state models shared by the scoring,
causal-linking and pattern-mining stages.

Node categories:
    SUCCESS: decision produced the intended outcome
    FAILURE: decision did not work out
    INSIGHT: decision taught something reusable
    DELUSION: decision rested on a false assumption
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


def utc_now() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(timezone.utc)


class NodeCategory(str, Enum):
    """Classification of a recorded decision/outcome pair."""

    SUCCESS = "success"
    FAILURE = "failure"
    INSIGHT = "insight"
    DELUSION = "delusion"

    @property
    def is_positive(self) -> bool:
        """Whether this category counts toward the success rate."""
        return self in (NodeCategory.SUCCESS, NodeCategory.INSIGHT)


class CausalNode(BaseModel):
    """One recorded decision and its outcome.

    Edges are directed: an id in ``caused_by`` is a predecessor of this
    node, and that predecessor lists this node in its ``caused_nodes``.

    Attributes:
        id: Unique node identifier
        decision: What was decided
        outcome: What happened as a result
        timestamp: When the node was recorded (UTC)
        category: Outcome classification
        synaptic_score: Heuristic decision quality (0-1)
        complexity: Wording/technical complexity (0-1)
        impact_score: Estimated outcome impact (0-1)
        confidence: Certainty expressed in the text (0.1-0.95)
        caused_by: Predecessor node ids
        caused_nodes: Successor node ids
    """

    id: str
    decision: str
    outcome: str
    timestamp: datetime = Field(default_factory=utc_now)
    category: NodeCategory
    synaptic_score: float = Field(..., ge=0.0, le=1.0)
    complexity: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    impact_score: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    caused_by: list[str] = Field(default_factory=list)
    caused_nodes: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_no_self_edges(self) -> "CausalNode":
        if self.id in self.caused_by:
            raise ValueError(f"Node {self.id} cannot list itself as a predecessor")
        return self


class WorldModelEntry(BaseModel):
    """What the engine has learned from a single node."""

    decision: str
    outcome: str
    learnings: list[str] = Field(default_factory=list)
    connections: list[str] = Field(default_factory=list)
    patterns: list[str] = Field(default_factory=list)
    risk_factors: list[str] = Field(default_factory=list)
    opportunities: list[str] = Field(default_factory=list)


class EmergentPattern(BaseModel):
    """A recurring category/theme/complexity signature in the node log.

    Attributes:
        pattern: Signature string ``category:theme:complexity_bucket``
        frequency: Number of nodes sharing the signature
        impact: Mean impact score of those nodes
        confidence: Mean confidence of those nodes
    """

    pattern: str
    frequency: int = Field(..., ge=1)
    impact: float = Field(..., ge=0.0, le=1.0)
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)

    @property
    def weight(self) -> float:
        """Ranking weight (frequency x mean impact)."""
        return self.frequency * self.impact


class CognitiveState(BaseModel):
    """Aggregate view over one user's node log.

    ``synaptic_efficiency`` and ``temporal_alignment`` are derived from
    ``causal_graph`` and are only written by metric recomputation.
    """

    id: str
    user_id: str
    world_model: dict[str, WorldModelEntry] = Field(default_factory=dict)
    causal_graph: list[CausalNode] = Field(default_factory=list)
    bias_profile: dict[str, float] = Field(default_factory=dict)
    synaptic_efficiency: float = Field(default=0.5, ge=0.0, le=1.0)
    temporal_alignment: float = Field(default=0.65, ge=0.0, le=1.0)
    last_updated: datetime = Field(default_factory=utc_now)
    total_processing_time: float = Field(default=0.0, ge=0.0)
    emergent_patterns: list[EmergentPattern] = Field(default_factory=list)


class SnapshotMetrics(BaseModel):
    """Summary counters exported alongside a state snapshot."""

    total_nodes: int = Field(..., ge=0)
    average_score: float = Field(..., ge=0.0, le=1.0)
    processing_time: float = Field(..., ge=0.0)
    patterns: int = Field(..., ge=0)


class CognitiveSnapshot(BaseModel):
    """Point-in-time export of the engine state."""

    timestamp: datetime = Field(default_factory=utc_now)
    state: CognitiveState
    metrics: SnapshotMetrics
