"""Depth-gap repair: synthesize missing ancestors."""

import logging
from typing import List, Optional, Sequence

from ..core.identifiers import (
    DEFAULT_SCHEME,
    IdentifierScheme,
    Segments,
    segments_are_ancestor_and_descendant,
)
from ..core.node import Node
from .result import NoAncestorError

logger = logging.getLogger(__name__)


def find_nearest_ancestor(
    nodes: Sequence[Node],
    child_segments: Segments,
    min_length: int = -1,
    scheme: IdentifierScheme = DEFAULT_SCHEME,
) -> Optional[Node]:
    """
    Find the deepest node in ``nodes`` that is an ancestor of ``child_segments``.

    Args:
        nodes: Candidates to search
        child_segments: Segments of the node looking for an ancestor
        min_length: Segment count of the best candidate found so far; only
            strictly deeper candidates are accepted (negative means none)
        scheme: Identifier spelling

    Returns:
        The nearest ancestor, or None if no candidate qualifies
    """
    result = None
    best_length = min_length

    for candidate in nodes:
        candidate_segments = scheme.segments(candidate.id)
        if len(candidate_segments) > best_length and segments_are_ancestor_and_descendant(
            candidate_segments, child_segments
        ):
            result = candidate
            best_length = len(candidate_segments)

    return result


def fix_depth_gaps_between(
    ancestor: Node,
    descendant: Node,
    use_subtree: bool = False,
    scheme: IdentifierScheme = DEFAULT_SCHEME,
) -> List[Node]:
    """
    Create the chain of empty nodes connecting ``ancestor`` to ``descendant``.

    Args:
        ancestor: Nearest existing ancestor of ``descendant``
        descendant: Node to attach
        use_subtree: Passed to the constructor of each artificial node
        scheme: Identifier spelling

    Returns:
        Artificial nodes created, shallowest first
    """
    artificial_nodes = []

    descendant_segments = scheme.segments(descendant.id)
    ancestor_height = len(scheme.segments(ancestor.id))

    new_parent = ancestor
    for depth in range(ancestor_height, len(descendant_segments) - 1):
        new_id = scheme.child_id(new_parent.id, descendant_segments[depth])
        new_node = Node.artificial(new_id, new_parent, use_subtree)
        new_parent.add_child(new_node)
        artificial_nodes.append(new_node)
        logger.debug(f"Created artificial ancestor {new_id} for {descendant.id}")
        new_parent = new_node

    new_parent.add_child(descendant)
    descendant.parent = new_parent

    return artificial_nodes


def fix_depth_gaps(
    root: Node,
    nodes: Sequence[Node],
    use_subtree: bool = False,
    scheme: IdentifierScheme = DEFAULT_SCHEME,
) -> List[Node]:
    """
    Fix gaps in depth (missing ancestors) by creating empty nodes.

    Such gaps appear when the source data did not list nodes without
    instances, although their existence follows from the identifiers of
    their descendants.

    Args:
        root: The root node; never repaired
        nodes: Real nodes, with relations already derived
        use_subtree: Passed to the constructor of each artificial node
        scheme: Identifier spelling

    Returns:
        Artificial nodes created

    Raises:
        NoAncestorError: If a parentless node has no ancestor at all
    """
    artificial_nodes: List[Node] = []

    for node in nodes:
        if node is root or node.parent is not None:
            continue

        node_segments = scheme.segments(node.id)

        nearest_ancestor = find_nearest_ancestor(nodes, node_segments, scheme=scheme)
        candidate_height = (
            len(scheme.segments(nearest_ancestor.id)) if nearest_ancestor is not None else -1
        )

        candidate = find_nearest_ancestor(
            artificial_nodes, node_segments, candidate_height, scheme
        )
        if candidate is not None:
            nearest_ancestor = candidate

        if nearest_ancestor is None:
            raise NoAncestorError(node.id)

        artificial_nodes.extend(
            fix_depth_gaps_between(nearest_ancestor, node, use_subtree, scheme)
        )

    return artificial_nodes
