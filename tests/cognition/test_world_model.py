"""Tests for world-model entry derivation."""

from datetime import datetime, timezone

from first_signal.cognition import EngineConfig, NodeCategory
from first_signal.cognition import world_model
from first_signal.cognition.schemas import CausalNode


def node(node_id: str, decision: str = "Plan roadmap", **fields) -> CausalNode:
    fields.setdefault("category", NodeCategory.SUCCESS)
    fields.setdefault("synaptic_score", 0.8)
    return CausalNode(
        id=node_id,
        decision=decision,
        outcome="outcome",
        timestamp=datetime(2026, 3, 1, tzinfo=timezone.utc),
        **fields,
    )


class TestLearnings:
    def test_category_learnings(self):
        """Each category maps to its fixed learnings."""
        assert world_model.extract_learnings(node("a", category=NodeCategory.DELUSION)) == [
            "False assumption detected",
            "Reality calibration needed",
        ]

    def test_complex_success_adds_learning(self):
        """Complex successes add a learning."""
        learnings = world_model.extract_learnings(node("a", complexity=0.65))
        assert learnings == ["Successful pattern identified", "Complex implementation succeeded"]

    def test_learnings_are_copies(self):
        """Returned learnings do not alias the shared table."""
        learnings = world_model.extract_learnings(node("a", category=NodeCategory.INSIGHT))
        learnings.append("mutated")
        assert "mutated" not in world_model.extract_learnings(node("b", category=NodeCategory.INSIGHT))


class TestConnections:
    def test_shared_keyword_connects(self):
        """Nodes sharing a keyword are connected."""
        target = node("a", "Refactor billing service")
        others = [target, node("b", "Audit billing"), node("c", "Hire designer")]
        assert world_model.find_connections(target, others, limit=5) == ["b"]

    def test_limit(self):
        """Connections are capped."""
        target = node("a", "Refactor billing")
        others = [node(f"n{i}", "billing work") for i in range(8)]
        assert len(world_model.find_connections(target, others, limit=5)) == 5


class TestPatternsRisksOpportunities:
    def test_decision_patterns(self):
        """Decision text and complexity produce pattern tags."""
        n = node("a", "Implement and optimize search", complexity=0.8)
        assert world_model.identify_patterns(n) == [
            "implementation-pattern",
            "optimization-pattern",
            "complex-success-pattern",
        ]

    def test_risks(self):
        """Delusions with low confidence carry risk factors."""
        n = node("a", category=NodeCategory.DELUSION, confidence=0.3)
        assert world_model.identify_risk_factors(n) == [
            "historical-failure-risk",
            "low-confidence-risk",
            "isolated-decision-risk",
        ]

    def test_linked_node_is_not_isolated(self):
        """Nodes with predecessors are not flagged isolated."""
        n = node("a", category=NodeCategory.SUCCESS, confidence=0.8, caused_by=["z"])
        assert world_model.identify_risk_factors(n) == []

    def test_opportunities(self):
        """High impact with many successors yields opportunities."""
        n = node("a", impact_score=0.8, caused_nodes=["x", "y", "z"])
        assert world_model.identify_opportunities(n) == [
            "high-impact-replication",
            "decision-amplification",
        ]

    def test_insight_opportunity(self):
        """High-impact insights yield an opportunity."""
        n = node("a", category=NodeCategory.INSIGHT, impact_score=0.9)
        assert world_model.identify_opportunities(n) == ["knowledge-application"]


def test_build_entry_combines_rules():
    """An entry combines all world-model rules."""
    target = node("a", "Launch billing revamp", category=NodeCategory.FAILURE, confidence=0.7)
    entry = world_model.build_entry(target, [target, node("b", "billing audit")], EngineConfig())

    assert entry.decision == "Launch billing revamp"
    assert entry.learnings == ["Failure mode documented", "Adaptation opportunity identified"]
    assert entry.connections == ["b"]
    assert entry.risk_factors == ["historical-failure-risk", "isolated-decision-risk"]
    assert entry.opportunities == []
