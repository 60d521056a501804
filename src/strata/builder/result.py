"""Build errors and the result value returned by the hierarchy builder."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..core.identifiers import InvalidIdentifierError
from ..core.instance import InstanceDimensionError
from ..core.node import Node


class HierarchyBuildError(Exception):
    """Base class for unrecoverable hierarchy consistency failures."""

    pass


class NoAncestorError(HierarchyBuildError):
    """Raised when depth repair finds no existing ancestor for a parentless node."""

    def __init__(self, node_id: str):
        super().__init__(
            f"Could not find nearest parent for '{node_id}'. "
            f"The identifier is not related to any node, including the root."
        )
        self.node_id = node_id


class AncestryContradictionError(HierarchyBuildError):
    """Raised when a node's child list disagrees with identifier structure."""

    def __init__(self, parent_id: str, child_id: str, reason: Optional[str] = None):
        message = reason or (
            f"'{parent_id}' IS NOT an ancestor of '{child_id}', "
            f"but '{child_id}' IS a child of '{parent_id}'"
        )
        super().__init__(f"Fatal error while filling breadth gaps! {message}")
        self.parent_id = parent_id
        self.child_id = child_id


class FailureKind(Enum):
    """Kinds of fatal build failures."""

    NO_ANCESTOR = "no_ancestor"
    ANCESTRY_CONTRADICTION = "ancestry_contradiction"
    INVALID_IDENTIFIER = "invalid_identifier"
    DIMENSION_MISMATCH = "dimension_mismatch"

    @classmethod
    def for_exception(cls, error: Exception) -> "FailureKind":
        if isinstance(error, NoAncestorError):
            return cls.NO_ANCESTOR
        if isinstance(error, AncestryContradictionError):
            return cls.ANCESTRY_CONTRADICTION
        if isinstance(error, InvalidIdentifierError):
            return cls.INVALID_IDENTIFIER
        if isinstance(error, InstanceDimensionError):
            return cls.DIMENSION_MISMATCH
        raise TypeError(f"Not a build failure: {error!r}")


@dataclass
class BuildFailure:
    """Why a build was abandoned."""

    kind: FailureKind
    message: str
    error: Optional[Exception] = field(default=None, repr=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"kind": self.kind.value, "message": self.message}


@dataclass
class BuildResult:
    """
    Outcome of a hierarchy build.

    A successful result carries the complete node collection in identifier
    order and the artificial nodes created along the way. A failed result
    carries only the failure; the node collection passed in must be discarded.
    """

    nodes: List[Node] = field(default_factory=list)
    root: Optional[Node] = None
    created: List[Node] = field(default_factory=list)
    failure: Optional[BuildFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def failed(cls, error: Exception) -> "BuildResult":
        return cls(
            failure=BuildFailure(
                kind=FailureKind.for_exception(error), message=str(error), error=error
            )
        )

    def unwrap(self) -> List[Node]:
        """Return the node collection, or raise the error that failed the build."""
        if self.failure is None:
            return self.nodes
        if self.failure.error is not None:
            raise self.failure.error
        if self.failure.kind == FailureKind.INVALID_IDENTIFIER:
            raise InvalidIdentifierError(self.failure.message)
        raise HierarchyBuildError(self.failure.message)
