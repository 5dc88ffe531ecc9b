"""Configuration for the cognitive state engine.

Collects every scoring constant, window size and default metric in one
dataclass so the engine's heuristics can be tuned (or pinned in tests)
without touching the scoring code.

Score ranges:
- SUCCESS: 0.80-0.95 base synaptic score
- INSIGHT: 0.70-0.90
- FAILURE: 0.30-0.60
- DELUSION: 0.10-0.30

The base score is drawn uniformly from the category range, so two
insertions with identical text still score differently unless the
random generator is seeded.
"""

from dataclasses import dataclass, field
from datetime import timedelta

from first_signal.cognition.schemas import NodeCategory

DEFAULT_BIAS_PROFILE: dict[str, float] = {
    "confirmationBias": 0.3,
    "availabilityHeuristic": 0.4,
    "anchoring": 0.35,
    "optimismBias": 0.25,
    "dunningKruger": 0.2,
    "survivorshipBias": 0.15,
}


@dataclass
class EngineConfig:
    """Tunable constants for node scoring, causal linking and metrics.

    Attributes:
        score_ranges: Inclusive (low, high) base synaptic score per category
        wording_bonus_cap: Max bonus for long decision text
        wording_bonus_divisor: Decision length that earns one unit of bonus
        specificity_bonus_cap: Max bonus for long outcome text
        specificity_bonus_divisor: Outcome length that earns one unit of bonus
        measurability_bonus: Bonus when the outcome contains a measurement
        context_weight: Multiplier on contextual relevance to past successes
        default_context_relevance: Relevance used when no successes exist yet
        complexity_divisor: Word budget that maps to complexity 1.0
        technical_term_weight: Words counted per technical term
        impact_base: Starting impact score
        impact_keyword_step: Impact change per positive/negative keyword
        impact_adjustments: Per-category impact adjustment
        confidence_base: Starting confidence
        confidence_word_step: Confidence change per (un)certainty word
        confidence_adjustments: Per-category confidence adjustment
        confidence_floor: Lowest allowed confidence
        confidence_ceiling: Highest allowed confidence
        predecessor_window: Most recent nodes inspected for causal links
        max_predecessors: Max predecessors kept per node
        strong_overlap: Keyword overlap that links regardless of age
        weak_overlap: Keyword overlap that links only for recent nodes
        recent_window: Age under which a node counts as recent
        historical_weight: Weight of the all-time mean in synaptic efficiency
        recent_weight: Weight of the recent mean in synaptic efficiency
        default_synaptic_efficiency: Efficiency for an empty log
        default_recent_efficiency: Recent mean used when nothing is recent
        default_temporal_alignment: Alignment before any recent activity
        alignment_base: Alignment floor before success rate is added
        alignment_success_scale: Multiplier on the recent success rate
        alignment_learning_bonus: Bonus when a recent failure exists
        alignment_ceiling: Highest allowed alignment
        complex_pattern_threshold: Complexity above which a pattern is "complex"
        significant_impact_threshold: Mean impact that keeps a one-off pattern
        max_connections: World-model connections recorded per node
        decay_horizon_hours: Time constant for temporal decay
        bias_profile: Named cognitive-bias strengths
        reject_empty_text: Raise on empty decision/outcome instead of warning
    """

    score_ranges: dict[NodeCategory, tuple[float, float]] = field(
        default_factory=lambda: {
            NodeCategory.SUCCESS: (0.80, 0.95),
            NodeCategory.INSIGHT: (0.70, 0.90),
            NodeCategory.FAILURE: (0.30, 0.60),
            NodeCategory.DELUSION: (0.10, 0.30),
        }
    )

    # Synaptic score bonuses
    wording_bonus_cap: float = 0.1
    wording_bonus_divisor: float = 1000.0
    specificity_bonus_cap: float = 0.1
    specificity_bonus_divisor: float = 500.0
    measurability_bonus: float = 0.05
    context_weight: float = 0.1
    default_context_relevance: float = 0.5

    # Complexity
    complexity_divisor: float = 50.0
    technical_term_weight: int = 2

    # Impact
    impact_base: float = 0.5
    impact_keyword_step: float = 0.1
    impact_adjustments: dict[NodeCategory, float] = field(
        default_factory=lambda: {
            NodeCategory.SUCCESS: 0.2,
            NodeCategory.INSIGHT: 0.15,
            NodeCategory.FAILURE: -0.1,
            NodeCategory.DELUSION: -0.2,
        }
    )

    # Confidence
    confidence_base: float = 0.7
    confidence_word_step: float = 0.05
    confidence_adjustments: dict[NodeCategory, float] = field(
        default_factory=lambda: {
            NodeCategory.SUCCESS: 0.1,
            NodeCategory.INSIGHT: 0.1,
            NodeCategory.FAILURE: 0.0,
            NodeCategory.DELUSION: -0.2,
        }
    )
    confidence_floor: float = 0.1
    confidence_ceiling: float = 0.95

    # Causal linking
    predecessor_window: int = 10
    max_predecessors: int = 3
    strong_overlap: int = 2
    weak_overlap: int = 1
    recent_window: timedelta = timedelta(hours=1)

    # Rolling metrics
    historical_weight: float = 0.7
    recent_weight: float = 0.3
    default_synaptic_efficiency: float = 0.5
    default_recent_efficiency: float = 0.5
    default_temporal_alignment: float = 0.65
    alignment_base: float = 0.4
    alignment_success_scale: float = 0.5
    alignment_learning_bonus: float = 0.1
    alignment_ceiling: float = 0.95

    # Patterns and world model
    complex_pattern_threshold: float = 0.6
    significant_impact_threshold: float = 0.7
    max_connections: int = 5
    decay_horizon_hours: float = 168.0

    bias_profile: dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_BIAS_PROFILE)
    )
    reject_empty_text: bool = False

    def __post_init__(self) -> None:
        """Validate configuration."""
        self._validate_score_ranges()

        if abs(self.historical_weight + self.recent_weight - 1.0) > 0.001:
            raise ValueError(
                "Efficiency weights must sum to 1.0, got "
                f"{self.historical_weight + self.recent_weight:.3f}"
            )

        if not 0.0 <= self.confidence_floor <= self.confidence_ceiling <= 1.0:
            raise ValueError(
                f"Confidence bounds must satisfy 0 <= floor <= ceiling <= 1, "
                f"got [{self.confidence_floor}, {self.confidence_ceiling}]"
            )

        for name in (
            "default_synaptic_efficiency",
            "default_recent_efficiency",
            "default_temporal_alignment",
            "default_context_relevance",
            "alignment_ceiling",
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")

        if self.predecessor_window < 1 or self.max_predecessors < 0:
            raise ValueError(
                f"Invalid causal window: predecessor_window={self.predecessor_window}, "
                f"max_predecessors={self.max_predecessors}"
            )

        if self.weak_overlap < 1 or self.strong_overlap < self.weak_overlap:
            raise ValueError(
                f"Overlap thresholds must satisfy 1 <= weak <= strong, "
                f"got weak={self.weak_overlap}, strong={self.strong_overlap}"
            )

        if self.recent_window <= timedelta(0):
            raise ValueError(f"recent_window must be positive, got {self.recent_window}")

        if self.complexity_divisor <= 0 or self.decay_horizon_hours <= 0:
            raise ValueError("complexity_divisor and decay_horizon_hours must be positive")

        for bias, strength in self.bias_profile.items():
            if not 0.0 <= strength <= 1.0:
                raise ValueError(f"Bias {bias} strength must be in [0, 1], got {strength}")

    def _validate_score_ranges(self) -> None:
        """Every category needs a (low, high) range inside [0, 1]."""
        missing = [c.value for c in NodeCategory if c not in self.score_ranges]
        if missing:
            raise ValueError(f"Missing score ranges for categories: {missing}")

        for category, (low, high) in self.score_ranges.items():
            if not 0.0 <= low <= high <= 1.0:
                raise ValueError(
                    f"Score range for {category.value} must satisfy "
                    f"0 <= low <= high <= 1, got ({low}, {high})"
                )

    def noise_amplitude(self, category: NodeCategory) -> float:
        """Width of the random base-score range for a category."""
        low, high = self.score_ranges[category]
        return high - low
