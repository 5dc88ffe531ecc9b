"""Causal-link inference between recorded nodes.

A new node is linked to recent nodes whose decisions share keywords with
its own decision. Edges point backwards in time: the new node lists its
predecessors in ``caused_by`` and each predecessor gains the new node's id
in ``caused_nodes``.
"""

import logging
from datetime import datetime
from typing import Mapping, Sequence

from first_signal.cognition import lexicon
from first_signal.cognition.config import EngineConfig
from first_signal.cognition.schemas import CausalNode

logger = logging.getLogger(__name__)


def find_causal_predecessors(
    decision: str,
    history: Sequence[CausalNode],
    now: datetime,
    config: EngineConfig,
) -> list[str]:
    """Select predecessor ids for a new decision.

    Only the ``config.predecessor_window`` most recent nodes are candidates.
    A candidate qualifies with at least ``strong_overlap`` shared keywords,
    or at least ``weak_overlap`` shared keywords when it is younger than
    ``recent_window``. Qualifying candidates are ranked by overlap, ties
    going to the more recent node, and the top ``max_predecessors`` kept.

    Args:
        decision: Decision text of the node being inserted
        history: Existing nodes in insertion order
        now: Current time for the recency check
        config: Engine configuration

    Returns:
        Predecessor ids, highest priority first
    """
    keywords = lexicon.extract_keywords(decision)
    if not keywords or config.max_predecessors == 0:
        return []

    window = history[-config.predecessor_window:]
    matches: list[tuple[int, str]] = []

    # Newest first so the stable sort below keeps recency as the tie-breaker
    for node in reversed(window):
        overlap = lexicon.keyword_overlap(keywords, lexicon.extract_keywords(node.decision))
        is_recent = now - node.timestamp < config.recent_window
        if overlap >= config.strong_overlap or (overlap >= config.weak_overlap and is_recent):
            matches.append((overlap, node.id))

    matches.sort(key=lambda match: match[0], reverse=True)
    predecessors = [node_id for _, node_id in matches[:config.max_predecessors]]

    if predecessors:
        logger.debug(f"Linked decision to {len(predecessors)} predecessors: {predecessors}")
    return predecessors


def mirror_edges(node: CausalNode, nodes_by_id: Mapping[str, CausalNode]) -> list[CausalNode]:
    """Add node.id to caused_nodes of every predecessor.

    Args:
        node: Newly scored node with caused_by filled in
        nodes_by_id: Existing nodes keyed by id

    Returns:
        The predecessor nodes that were found
    """
    linked: list[CausalNode] = []

    for predecessor_id in node.caused_by:
        predecessor = nodes_by_id.get(predecessor_id)
        if predecessor is None:
            logger.warning(f"Predecessor {predecessor_id} of {node.id} not found")
            continue
        if node.id not in predecessor.caused_nodes:
            predecessor.caused_nodes.append(node.id)
        linked.append(predecessor)

    return linked
