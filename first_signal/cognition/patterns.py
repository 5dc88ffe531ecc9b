"""Emergent-pattern mining over the node log."""

import logging
from typing import Sequence

from first_signal.cognition import lexicon
from first_signal.cognition.config import EngineConfig
from first_signal.cognition.schemas import CausalNode, EmergentPattern

logger = logging.getLogger(__name__)

# Used when a node carries no complexity/confidence of its own
FALLBACK_COMPLEXITY = 0.5
FALLBACK_CONFIDENCE = 0.5


class PatternAnalyzer:
    """Groups nodes by category, decision theme and complexity bucket.

    A signature looks like ``success:initiation:simple``. Groups that recur
    (frequency > 1) or carry high mean impact are reported, heaviest first.
    """

    def __init__(self, config: EngineConfig):
        self.config = config

    def signature(self, node: CausalNode) -> str:
        """Pattern signature ``category:theme:complexity_bucket`` for a node."""
        complexity = node.complexity if node.complexity is not None else FALLBACK_COMPLEXITY
        bucket = "complex" if complexity > self.config.complex_pattern_threshold else "simple"
        theme = lexicon.classify_theme(node.decision)
        return f"{node.category.value}:{theme}:{bucket}"

    def analyze(self, nodes: Sequence[CausalNode]) -> list[EmergentPattern]:
        """Aggregate nodes into significant patterns.

        Frequency and mean impact depend only on the multiset of nodes, not
        on their order. Never mutates the nodes.

        Args:
            nodes: Nodes to analyze

        Returns:
            Patterns sorted by frequency x mean impact, descending
        """
        # Group by signature
        grouped: dict[str, list[CausalNode]] = {}
        for node in nodes:
            grouped.setdefault(self.signature(node), []).append(node)

        patterns: list[EmergentPattern] = []
        for pattern, group in grouped.items():
            count = len(group)
            impact = sum(
                node.impact_score if node.impact_score is not None else node.synaptic_score
                for node in group
            ) / count
            confidence = sum(
                node.confidence if node.confidence is not None else FALLBACK_CONFIDENCE
                for node in group
            ) / count

            if count > 1 or impact > self.config.significant_impact_threshold:
                patterns.append(
                    EmergentPattern(
                        pattern=pattern,
                        frequency=count,
                        impact=min(1.0, impact),
                        confidence=min(1.0, confidence),
                    )
                )

        patterns.sort(key=lambda p: p.weight, reverse=True)
        logger.debug(f"Analyzed {len(nodes)} nodes into {len(patterns)} significant patterns")
        return patterns
