"""Fixed vocabularies and keyword helpers for node scoring.

All matching is case-insensitive substring matching over the raw text,
except keyword extraction which tokenizes on whitespace.
"""

from first_signal.cognition.schemas import NodeCategory

# Articles, conjunctions and common prepositions dropped from keyword sets
STOPWORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "nor", "yet", "so",
    "in", "on", "at", "to", "for", "of", "with", "by",
    "from", "into", "onto", "upon", "over", "about", "after", "before",
    "while", "until", "since",
})

MIN_KEYWORD_LENGTH = 4
MAX_KEYWORDS = 10

MEASURABILITY_MARKERS = [
    "%", "increased by", "decreased by", "improved by", "reduced by",
    "faster", "slower", "more", "less",
]

TECHNICAL_TERMS = [
    "algorithm", "optimization", "implementation", "integration", "architecture",
    "framework", "methodology", "protocol", "interface", "system", "process",
    "analysis", "evaluation", "performance", "efficiency", "scalability",
]

POSITIVE_IMPACT_KEYWORDS = [
    "increased", "improved", "enhanced", "optimized", "accelerated", "solved",
]
NEGATIVE_IMPACT_KEYWORDS = ["decreased", "failed", "slowed", "blocked", "error"]

CERTAINTY_WORDS = ["definitely", "certainly", "clearly", "obviously", "precisely"]
UNCERTAINTY_WORDS = ["might", "possibly", "perhaps", "maybe", "approximately"]

# Checked in order; the first family with a hit names the theme
DECISION_THEMES: list[tuple[str, list[str]]] = [
    ("initiation", ["launch", "start", "begin"]),
    ("optimization", ["improve", "optimize", "enhance"]),
    ("problem-solving", ["fix", "solve", "debug"]),
    ("development", ["add", "implement", "create"]),
    ("experimentation", ["test", "experiment", "try"]),
    ("analysis", ["analyze", "research", "study"]),
]
DEFAULT_THEME = "general"

CATEGORY_LEARNINGS: dict[NodeCategory, list[str]] = {
    NodeCategory.SUCCESS: ["Successful pattern identified"],
    NodeCategory.FAILURE: ["Failure mode documented", "Adaptation opportunity identified"],
    NodeCategory.INSIGHT: ["New insight gained", "Mental model updated"],
    NodeCategory.DELUSION: ["False assumption detected", "Reality calibration needed"],
}


def extract_keywords(text: str) -> list[str]:
    """Extract up to MAX_KEYWORDS meaningful lowercase tokens from text.

    Tokens shorter than MIN_KEYWORD_LENGTH and stopwords are dropped.
    Order of appearance is preserved, duplicates included.

    Example:
        >>> extract_keywords("Launched the new onboarding flow for mobile")
        ['launched', 'onboarding', 'flow', 'mobile']
    """
    return [
        token
        for token in text.lower().split()
        if len(token) >= MIN_KEYWORD_LENGTH and token not in STOPWORDS
    ][:MAX_KEYWORDS]


def keyword_overlap(keywords: list[str], other: list[str]) -> int:
    """Count keywords that also appear in other."""
    other_set = set(other)
    return sum(1 for word in keywords if word in other_set)


def keyword_similarity(keywords: list[str], other: list[str]) -> float:
    """Overlap normalized by the larger keyword list (0 when both are empty)."""
    denominator = max(len(keywords), len(other))
    if denominator == 0:
        return 0.0
    return keyword_overlap(keywords, other) / denominator


def count_matches(text: str, vocabulary: list[str]) -> int:
    """Number of distinct vocabulary entries found in text."""
    lower = text.lower()
    return sum(1 for term in vocabulary if term in lower)


def word_count(text: str) -> int:
    return len(text.split())


def classify_theme(decision: str) -> str:
    """Map a decision to its theme family, or DEFAULT_THEME."""
    lower = decision.lower()
    for theme, triggers in DECISION_THEMES:
        if any(trigger in lower for trigger in triggers):
            return theme
    return DEFAULT_THEME
