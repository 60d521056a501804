"""
Complete-hierarchy construction.

Source data for hierarchical clustering often omits nodes that hold no
instances. Their existence is still implied by the identifiers of the nodes
that are present, so the builder:

1. links parents and children from identifier structure,
2. creates empty ancestors for nodes whose parent is missing (depth gaps),
3. optionally creates empty siblings so children are numbered 0..k-1
   (breadth gaps),
4. refreshes every centroid and returns the nodes in identifier order.
"""

import logging
from typing import List, Optional

from ..core.hierarchy import Hierarchy
from ..core.identifiers import DEFAULT_SCHEME, IdentifierScheme, InvalidIdentifierError, sort_key
from ..core.instance import InstanceDimensionError
from ..core.node import Node
from .breadth_gaps import fix_breadth_gaps as _fix_breadth_gaps
from .depth_gaps import fix_depth_gaps
from .relations import create_parent_child_relations
from .result import BuildResult, HierarchyBuildError

logger = logging.getLogger(__name__)


def build_complete_hierarchy(
    root: Optional[Node],
    nodes: List[Node],
    fix_breadth_gaps: bool = False,
    use_subtree: bool = False,
    scheme: IdentifierScheme = DEFAULT_SCHEME,
) -> BuildResult:
    """
    Build a complete hierarchy, filling holes with artificial nodes.

    ``nodes`` is modified in place: links are rebuilt, artificial nodes are
    appended and the list is sorted. It must not be used elsewhere while the
    build runs, and must be discarded if the build fails.

    Args:
        root: The root node, or None to synthesize one
        nodes: The original collection of nodes (including ``root`` if given)
        fix_breadth_gaps: Also fill missing siblings, not just missing ancestors
        use_subtree: Whether centroids include the instances of descendants

    Returns:
        BuildResult with the complete node collection, or the failure

    Malformed identifiers and centroids over instances of differing length
    are reported as failures too.
    """
    original_count = len(nodes)
    created: List[Node] = []

    try:
        if root is None:
            # Root was missing from the input
            root = Node.artificial(scheme.root_id, None, use_subtree)
            nodes.insert(0, root)
            created.append(root)
            logger.debug(f"Synthesized missing root {root.id}")
        elif not any(node is root for node in nodes):
            nodes.insert(0, root)

        create_parent_child_relations(nodes, scheme)

        depth_nodes = fix_depth_gaps(root, nodes, use_subtree, scheme)
        nodes.extend(depth_nodes)
        created.extend(depth_nodes)

        if fix_breadth_gaps:
            breadth_nodes = _fix_breadth_gaps(root, use_subtree, scheme)
            nodes.extend(breadth_nodes)
            created.extend(breadth_nodes)

        for node in nodes:
            node.recalculate_centroid(use_subtree)

        nodes.sort(key=lambda node: sort_key(node.id, scheme))
    except (HierarchyBuildError, InvalidIdentifierError, InstanceDimensionError) as e:
        logger.error(f"Hierarchy build failed: {e}")
        return BuildResult.failed(e)

    logger.info(
        f"Built hierarchy of {len(nodes)} nodes from {original_count} "
        f"({len(created)} artificial)"
    )
    return BuildResult(nodes=nodes, root=root, created=created)


def build_hierarchy(
    root: Optional[Node],
    nodes: List[Node],
    fix_breadth_gaps: bool = False,
    use_subtree: bool = False,
    scheme: IdentifierScheme = DEFAULT_SCHEME,
) -> Hierarchy:
    """
    Build a complete hierarchy and wrap it in a :class:`Hierarchy`.

    Raises:
        HierarchyBuildError: If the identifiers cannot form a single tree
        InvalidIdentifierError: If an identifier is malformed
        InstanceDimensionError: If a centroid would average vectors of different lengths
    """
    result = build_complete_hierarchy(root, nodes, fix_breadth_gaps, use_subtree, scheme)
    result.unwrap()
    return Hierarchy(result.root, result.nodes, scheme)
