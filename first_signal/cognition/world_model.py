"""Per-node world-model entries.

Summarizes what a node teaches: category learnings, keyword connections to
other nodes, decision patterns, risk factors and opportunities. Entries are
derived from the node and its neighbours and can be rebuilt at any time.
"""

from typing import Sequence

from first_signal.cognition import lexicon
from first_signal.cognition.config import EngineConfig
from first_signal.cognition.schemas import CausalNode, NodeCategory, WorldModelEntry

COMPLEX_LEARNING_THRESHOLD = 0.6
COMPLEX_SUCCESS_THRESHOLD = 0.7
LOW_CONFIDENCE_THRESHOLD = 0.4
HIGH_IMPACT_THRESHOLD = 0.7
AMPLIFICATION_SUCCESSORS = 2


def extract_learnings(node: CausalNode) -> list[str]:
    learnings = list(lexicon.CATEGORY_LEARNINGS[node.category])
    if (
        node.category == NodeCategory.SUCCESS
        and node.complexity is not None
        and node.complexity > COMPLEX_LEARNING_THRESHOLD
    ):
        learnings.append("Complex implementation succeeded")
    return learnings


def find_connections(
    node: CausalNode, nodes: Sequence[CausalNode], limit: int
) -> list[str]:
    """Ids of up to limit other nodes sharing at least one decision keyword."""
    keywords = lexicon.extract_keywords(node.decision)
    connections: list[str] = []
    for other in nodes:
        if other.id == node.id:
            continue
        if lexicon.keyword_overlap(keywords, lexicon.extract_keywords(other.decision)) > 0:
            connections.append(other.id)
            if len(connections) >= limit:
                break
    return connections


def identify_patterns(node: CausalNode) -> list[str]:
    decision = node.decision.lower()
    patterns: list[str] = []
    if "implement" in decision:
        patterns.append("implementation-pattern")
    if "optimize" in decision:
        patterns.append("optimization-pattern")
    if (
        node.category == NodeCategory.SUCCESS
        and node.complexity is not None
        and node.complexity > COMPLEX_SUCCESS_THRESHOLD
    ):
        patterns.append("complex-success-pattern")
    return patterns


def identify_risk_factors(node: CausalNode) -> list[str]:
    risks: list[str] = []
    if node.category in (NodeCategory.FAILURE, NodeCategory.DELUSION):
        risks.append("historical-failure-risk")
    if node.confidence is not None and node.confidence < LOW_CONFIDENCE_THRESHOLD:
        risks.append("low-confidence-risk")
    if not node.caused_by:
        risks.append("isolated-decision-risk")
    return risks


def identify_opportunities(node: CausalNode) -> list[str]:
    opportunities: list[str] = []
    if (
        node.category == NodeCategory.SUCCESS
        and node.impact_score is not None
        and node.impact_score > HIGH_IMPACT_THRESHOLD
    ):
        opportunities.append("high-impact-replication")
    if node.category == NodeCategory.INSIGHT:
        opportunities.append("knowledge-application")
    if len(node.caused_nodes) > AMPLIFICATION_SUCCESSORS:
        opportunities.append("decision-amplification")
    return opportunities


def build_entry(
    node: CausalNode, nodes: Sequence[CausalNode], config: EngineConfig
) -> WorldModelEntry:
    """Build the world-model entry for node against the current log."""
    return WorldModelEntry(
        decision=node.decision,
        outcome=node.outcome,
        learnings=extract_learnings(node),
        connections=find_connections(node, nodes, config.max_connections),
        patterns=identify_patterns(node),
        risk_factors=identify_risk_factors(node),
        opportunities=identify_opportunities(node),
    )
