"""Breadth-gap repair: synthesize missing siblings."""

import logging
from collections import deque
from typing import Deque, List

from ..core.identifiers import (
    DEFAULT_SCHEME,
    IdentifierScheme,
    segments_are_ancestor_and_descendant,
    sort_key,
)
from ..core.node import Node
from .result import AncestryContradictionError

logger = logging.getLogger(__name__)


def fix_breadth_gaps(
    root: Node, use_subtree: bool = False, scheme: IdentifierScheme = DEFAULT_SCHEME
) -> List[Node]:
    """
    Fix gaps in breadth (missing siblings) by creating empty nodes.

    The tree below ``root`` must already be depth-complete. Nodes are visited
    breadth first; artificial siblings are leaves and are not visited.

    Args:
        root: The root node
        use_subtree: Passed to the constructor of each artificial node
        scheme: Identifier spelling

    Returns:
        Artificial nodes created

    Raises:
        AncestryContradictionError: If a child list contradicts identifier structure
    """
    artificial_nodes: List[Node] = []

    pending: Deque[Node] = deque([root])
    while pending:
        current = pending.popleft()
        # Enqueue before fixing so that only pre-existing children are visited
        pending.extend(current.children)
        artificial_nodes.extend(fix_breadth_gaps_in_node(current, use_subtree, scheme))

    return artificial_nodes


def fix_breadth_gaps_in_node(
    node: Node, use_subtree: bool = False, scheme: IdentifierScheme = DEFAULT_SCHEME
) -> List[Node]:
    """
    Make the children of ``node`` contiguously indexed from zero.

    Args:
        node: The node whose children are checked
        use_subtree: Passed to the constructor of each artificial node
        scheme: Identifier spelling

    Returns:
        Artificial nodes created, in index order
    """
    children = sorted(node.children, key=lambda child: sort_key(child.id, scheme))
    artificial_nodes = []
    node_segments = scheme.segments(node.id)

    # The list grows while it is walked: after an insertion at i, index i now
    # holds the new node, which passes the check on the next pass.
    i = 0
    while i < len(children):
        child = children[i]
        child_segments = scheme.segments(child.id)

        if not segments_are_ancestor_and_descendant(node_segments, child_segments):
            raise AncestryContradictionError(node.id, child.id)

        index = child_segments[-1]
        if index == i:
            i += 1
            continue

        if index < i:
            raise AncestryContradictionError(
                node.id,
                child.id,
                f"'{child.id}' duplicates or precedes index {i} among the children of '{node.id}'",
            )

        new_node = Node.artificial(scheme.child_id(node.id, i), node, use_subtree)
        children.insert(i, new_node)
        artificial_nodes.append(new_node)
        logger.debug(f"Created artificial sibling {new_node.id}")

    node.set_children(children)

    return artificial_nodes
