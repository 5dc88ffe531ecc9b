"""Tests for rolling metric computation."""

from datetime import datetime, timedelta, timezone

import pytest

from first_signal.cognition import EngineConfig, NodeCategory
from first_signal.cognition.metrics import compute_metrics, recent_nodes
from first_signal.cognition.schemas import CausalNode

NOW = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


def node(
    node_id: str,
    category: NodeCategory,
    score: float,
    age: timedelta = timedelta(minutes=5),
) -> CausalNode:
    return CausalNode(
        id=node_id,
        decision="decision",
        outcome="outcome",
        timestamp=NOW - age,
        category=category,
        synaptic_score=score,
    )


@pytest.fixture
def config():
    return EngineConfig()


class TestSynapticEfficiency:
    """Tests for the efficiency blend."""

    def test_empty_log_uses_default(self, config):
        """An empty log yields the default efficiency."""
        metrics = compute_metrics([], NOW, previous_alignment=0.65, config=config)
        assert metrics.synaptic_efficiency == 0.5
        assert metrics.recent_count == 0

    def test_single_recent_node_equals_its_score(self, config):
        """One recent node gives efficiency equal to its score."""
        metrics = compute_metrics(
            [node("a", NodeCategory.SUCCESS, 0.83)], NOW, previous_alignment=0.65, config=config
        )
        assert metrics.synaptic_efficiency == pytest.approx(0.83)

    def test_blends_historical_and_recent_means(self, config):
        """Efficiency blends the historical and recent means."""
        nodes = [
            node("old", NodeCategory.FAILURE, 0.4, age=timedelta(days=1)),
            node("new", NodeCategory.SUCCESS, 0.8),
        ]
        metrics = compute_metrics(nodes, NOW, previous_alignment=0.65, config=config)
        assert metrics.synaptic_efficiency == pytest.approx(0.7 * 0.6 + 0.3 * 0.8)

    def test_no_recent_nodes_uses_neutral_recent_term(self, config):
        """With no recent nodes the recent term is neutral."""
        nodes = [node("old", NodeCategory.FAILURE, 0.4, age=timedelta(hours=2))]
        metrics = compute_metrics(nodes, NOW, previous_alignment=0.65, config=config)
        assert metrics.synaptic_efficiency == pytest.approx(0.7 * 0.4 + 0.3 * 0.5)


class TestTemporalAlignment:
    """Tests for the alignment signal."""

    def test_keeps_previous_value_without_recent_nodes(self, config):
        """Alignment holds its previous value with no recent nodes."""
        nodes = [node("old", NodeCategory.SUCCESS, 0.9, age=timedelta(hours=5))]
        metrics = compute_metrics(nodes, NOW, previous_alignment=0.72, config=config)
        assert metrics.temporal_alignment == 0.72

    def test_success_rate_with_learning_bonus(self, config):
        """A recent failure adds the learning bonus to the success rate."""
        nodes = [
            node("a", NodeCategory.SUCCESS, 0.9),
            node("b", NodeCategory.INSIGHT, 0.8),
            node("c", NodeCategory.FAILURE, 0.4),
        ]
        metrics = compute_metrics(nodes, NOW, previous_alignment=0.65, config=config)
        assert metrics.temporal_alignment == pytest.approx(0.4 + 0.5 * 2 / 3 + 0.1)

    def test_delusion_counts_against_rate_without_bonus(self, config):
        """Delusions lower the rate and earn no bonus."""
        nodes = [
            node("a", NodeCategory.SUCCESS, 0.9),
            node("b", NodeCategory.DELUSION, 0.2),
        ]
        metrics = compute_metrics(nodes, NOW, previous_alignment=0.65, config=config)
        assert metrics.temporal_alignment == pytest.approx(0.65)

    def test_only_recent_nodes_count(self, config):
        """Nodes outside the window are ignored."""
        nodes = [
            node("old", NodeCategory.FAILURE, 0.4, age=timedelta(hours=3)),
            node("new", NodeCategory.SUCCESS, 0.9),
        ]
        metrics = compute_metrics(nodes, NOW, previous_alignment=0.65, config=config)
        assert metrics.temporal_alignment == pytest.approx(0.9)

    def test_capped_at_ceiling(self):
        """Alignment is capped at the configured ceiling."""
        config = EngineConfig(alignment_ceiling=0.85)
        metrics = compute_metrics(
            [node("a", NodeCategory.SUCCESS, 0.9)], NOW, previous_alignment=0.65, config=config
        )
        assert metrics.temporal_alignment == 0.85


class TestDeterminism:
    """Recomputation is a pure function of its inputs."""

    def test_repeated_computation_is_identical(self, config):
        """Computing twice gives identical metrics."""
        nodes = [
            node("a", NodeCategory.SUCCESS, 0.9),
            node("b", NodeCategory.FAILURE, 0.35, age=timedelta(hours=4)),
        ]
        first = compute_metrics(nodes, NOW, previous_alignment=0.65, config=config)
        second = compute_metrics(nodes, NOW, previous_alignment=first.temporal_alignment, config=config)
        assert first == second

    def test_recent_nodes_window(self, config):
        """Only nodes younger than the window are recent."""
        nodes = [
            node("a", NodeCategory.SUCCESS, 0.9, age=timedelta(minutes=59)),
            node("b", NodeCategory.SUCCESS, 0.9, age=timedelta(minutes=61)),
        ]
        assert [n.id for n in recent_nodes(nodes, NOW, config)] == ["a"]
