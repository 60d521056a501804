"""Parent/child links derived from identifier structure."""

import logging
from typing import Sequence

from ..core.identifiers import DEFAULT_SCHEME, IdentifierScheme, segments_are_parent_and_child
from ..core.node import Node

logger = logging.getLogger(__name__)


def create_parent_child_relations(
    nodes: Sequence[Node], scheme: IdentifierScheme = DEFAULT_SCHEME
) -> None:
    """
    Update all nodes so that their parent/child links match their identifiers.

    Existing links are discarded first, so calling this again is safe. A node
    whose parent is not in ``nodes`` is left without a parent: the result is
    not guaranteed to be contiguous until depth gaps are fixed.

    Args:
        nodes: Every node of the hierarchy being built
        scheme: Identifier spelling
    """
    for node in nodes:
        node.set_children([])
        node.parent = None

    branch_ids = [scheme.segments(node.id) for node in nodes]

    for i, parent in enumerate(nodes):
        parent_segments = branch_ids[i]
        for j, child in enumerate(nodes):
            if i == j:
                continue
            if segments_are_parent_and_child(parent_segments, branch_ids[j]):
                child.parent = parent
                parent.add_child(child)

    logger.debug(f"Linked parent/child relations for {len(nodes)} nodes")
