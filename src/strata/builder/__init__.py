"""
Strata hierarchy builder.

Reconstructs a complete, contiguous tree from a sparse list of nodes whose
identifiers encode their position (``gen.0.1.2``).

Example Usage:
    from strata.core import Node
    from strata.builder import build_complete_hierarchy

    nodes = [Node("gen.0.1.2", instances=[...])]
    result = build_complete_hierarchy(None, nodes, fix_breadth_gaps=True)
    if not result.ok:
        print(result.failure.message)
"""

from .breadth_gaps import fix_breadth_gaps, fix_breadth_gaps_in_node
from .builder import build_complete_hierarchy, build_hierarchy
from .depth_gaps import find_nearest_ancestor, fix_depth_gaps, fix_depth_gaps_between
from .relations import create_parent_child_relations
from .result import (
    AncestryContradictionError,
    BuildFailure,
    BuildResult,
    FailureKind,
    HierarchyBuildError,
    NoAncestorError,
)

__all__ = [
    # Orchestration
    "build_complete_hierarchy",
    "build_hierarchy",
    # Stages
    "create_parent_child_relations",
    "fix_depth_gaps",
    "fix_depth_gaps_between",
    "find_nearest_ancestor",
    "fix_breadth_gaps",
    "fix_breadth_gaps_in_node",
    # Results and errors
    "BuildResult",
    "BuildFailure",
    "FailureKind",
    "HierarchyBuildError",
    "NoAncestorError",
    "AncestryContradictionError",
]
