"""Heuristic scoring for newly recorded nodes.

Each score is a cheap text heuristic standing in for real judgment:

- synaptic score: category-dependent noisy base plus wording, specificity,
  measurability and historical-context bonuses
- complexity: word count plus weighted technical vocabulary
- impact: positive/negative outcome keywords plus category adjustment
- confidence: certainty/uncertainty language plus category adjustment

Only the synaptic score is random. Inject a seeded generator to make it
reproducible:

    scorer = NodeScorer(EngineConfig(), rng=np.random.default_rng(7))
"""

import logging
from typing import Optional, Sequence

import numpy as np

from first_signal.cognition import lexicon
from first_signal.cognition.config import EngineConfig
from first_signal.cognition.schemas import CausalNode, NodeCategory

logger = logging.getLogger(__name__)


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp value to [low, high] as a plain float."""
    return float(np.clip(value, low, high))


class NodeScorer:
    """Computes the four per-node scores.

    Stateless apart from the random generator; historical context is passed
    in explicitly so the scorer never holds a reference to the node log.
    """

    def __init__(self, config: EngineConfig, rng: Optional[np.random.Generator] = None):
        """Initialize scorer.

        Args:
            config: Engine configuration with scoring constants
            rng: Random generator for the noisy base score
        """
        self.config = config
        self._rng = rng if rng is not None else np.random.default_rng()

    def base_score(self, category: NodeCategory) -> float:
        """Draw the noisy base synaptic score for a category."""
        low, _ = self.config.score_ranges[category]
        return low + float(self._rng.uniform(0.0, self.config.noise_amplitude(category)))

    def contextual_relevance(self, decision: str, history: Sequence[CausalNode]) -> float:
        """Mean keyword similarity between decision and every past success.

        Returns config.default_context_relevance when there are no past
        successes to compare against.
        """
        successes = [node for node in history if node.category == NodeCategory.SUCCESS]
        if not successes:
            return self.config.default_context_relevance

        keywords = lexicon.extract_keywords(decision)
        similarities = [
            lexicon.keyword_similarity(keywords, lexicon.extract_keywords(node.decision))
            for node in successes
        ]
        return float(np.mean(similarities))

    def synaptic_score(
        self,
        decision: str,
        outcome: str,
        category: NodeCategory,
        history: Sequence[CausalNode] = (),
    ) -> float:
        """Score decision quality in [0, 1].

        Args:
            decision: Decision text
            outcome: Outcome text
            category: Node category selecting the base range
            history: Nodes recorded so far, oldest first

        Returns:
            Clamped synaptic score
        """
        cfg = self.config
        base = self.base_score(category)
        wording = min(cfg.wording_bonus_cap, len(decision) / cfg.wording_bonus_divisor)
        specificity = min(cfg.specificity_bonus_cap, len(outcome) / cfg.specificity_bonus_divisor)
        measurable = cfg.measurability_bonus if self.has_measurable_outcome(outcome) else 0.0
        context = self.contextual_relevance(decision, history) * cfg.context_weight

        total = base + wording + specificity + measurable + context
        logger.debug(
            f"Synaptic score for {category.value}: base={base:.3f}, wording={wording:.3f}, "
            f"specificity={specificity:.3f}, measurable={measurable:.2f}, context={context:.3f}"
        )
        return clamp(total)

    @staticmethod
    def has_measurable_outcome(outcome: str) -> bool:
        return lexicon.count_matches(outcome, lexicon.MEASURABILITY_MARKERS) > 0

    def complexity(self, decision: str, outcome: str) -> float:
        """Complexity in [0, 1] from word count and technical vocabulary."""
        technical = lexicon.count_matches(f"{decision} {outcome}", lexicon.TECHNICAL_TERMS)
        words = lexicon.word_count(decision) + lexicon.word_count(outcome)
        weighted = words + technical * self.config.technical_term_weight
        return min(1.0, weighted / self.config.complexity_divisor)

    def impact_score(self, outcome: str, category: NodeCategory) -> float:
        """Impact in [0, 1] from outcome keywords and category."""
        cfg = self.config
        positive = lexicon.count_matches(outcome, lexicon.POSITIVE_IMPACT_KEYWORDS)
        negative = lexicon.count_matches(outcome, lexicon.NEGATIVE_IMPACT_KEYWORDS)

        score = cfg.impact_base + (positive - negative) * cfg.impact_keyword_step
        score += cfg.impact_adjustments.get(category, 0.0)
        return clamp(score)

    def confidence(self, decision: str, outcome: str, category: NodeCategory) -> float:
        """Confidence in [confidence_floor, confidence_ceiling]."""
        cfg = self.config
        text = f"{decision} {outcome}"
        certain = lexicon.count_matches(text, lexicon.CERTAINTY_WORDS)
        uncertain = lexicon.count_matches(text, lexicon.UNCERTAINTY_WORDS)

        score = cfg.confidence_base + (certain - uncertain) * cfg.confidence_word_step
        score += cfg.confidence_adjustments.get(category, 0.0)
        return clamp(score, cfg.confidence_floor, cfg.confidence_ceiling)
