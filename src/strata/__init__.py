"""
Strata: complete-hierarchy reconstruction for hierarchical clustering results
"""

__version__ = "1.0.0"

from strata.builder import (
    AncestryContradictionError,
    BuildFailure,
    BuildResult,
    FailureKind,
    HierarchyBuildError,
    NoAncestorError,
    build_complete_hierarchy,
    build_hierarchy,
)
from strata.config import StrataConfig, get_default_config, load_config
from strata.core import (
    DEFAULT_SCHEME,
    Centroid,
    Hierarchy,
    HierarchyStats,
    IdentifierScheme,
    Instance,
    InstanceDimensionError,
    InvalidIdentifierError,
    Node,
)
from strata.io import HierarchyFormatError, read_csv, write_csv

__all__ = [
    # Core
    "Node",
    "Instance",
    "Centroid",
    "Hierarchy",
    "HierarchyStats",
    "IdentifierScheme",
    "DEFAULT_SCHEME",
    # Builder
    "build_complete_hierarchy",
    "build_hierarchy",
    "BuildResult",
    "BuildFailure",
    "FailureKind",
    # Errors
    "HierarchyBuildError",
    "NoAncestorError",
    "AncestryContradictionError",
    "InvalidIdentifierError",
    "InstanceDimensionError",
    "HierarchyFormatError",
    # I/O
    "read_csv",
    "write_csv",
    # Configuration
    "StrataConfig",
    "load_config",
    "get_default_config",
]
