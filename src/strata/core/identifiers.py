"""Path-style node identifiers.

A node identifier is a generation token followed by zero or more
non-negative integer segments, joined by a separator::

    gen          -> root, segments ()
    gen.0.1.2    -> segments (0, 1, 2)

The generation token is ignored for relational comparisons. Every predicate
in this module is a pure function of its arguments and never looks at the
live tree.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

ROOT_ID = "gen"
HIERARCHY_BRANCH_SEPARATOR = "."
HIERARCHY_BRANCH_SEPARATOR_REGEX = re.escape(HIERARCHY_BRANCH_SEPARATOR)

Segments = Tuple[int, ...]

_SEGMENT_PATTERN = re.compile(r"0|[1-9][0-9]*")


class InvalidIdentifierError(ValueError):
    """Raised when an identifier segment is not a canonical non-negative integer."""

    pass


@dataclass(frozen=True)
class IdentifierScheme:
    """Separator and root/generation token used to spell identifiers."""

    separator: str = HIERARCHY_BRANCH_SEPARATOR
    root_id: str = ROOT_ID

    def __post_init__(self):
        if not self.separator:
            raise ValueError("Identifier separator must not be empty")
        if not self.root_id or self.separator in self.root_id:
            raise ValueError(
                f"Root identifier {self.root_id!r} must be a single token "
                f"not containing {self.separator!r}"
            )

    @property
    def separator_regex(self) -> str:
        return re.escape(self.separator)

    def child_id(self, parent_id: str, index: int) -> str:
        """Identifier of the ``index``-th child of ``parent_id``."""
        if index < 0:
            raise InvalidIdentifierError(f"Child index must be non-negative, got {index}")
        return f"{parent_id}{self.separator}{index}"

    def segments(self, node_id: str) -> Segments:
        return _split(node_id, self.separator)

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {"separator": self.separator, "root_id": self.root_id}


DEFAULT_SCHEME = IdentifierScheme()


@lru_cache(maxsize=65536)
def _split(node_id: str, separator: str) -> Segments:
    tokens = re.split(re.escape(separator), node_id)
    result = []
    # Ignore the first token (generation prefix)
    for token in tokens[1:]:
        if not _SEGMENT_PATTERN.fullmatch(token):
            raise InvalidIdentifierError(
                f"Invalid segment {token!r} in identifier {node_id!r}: "
                f"segments must be non-negative integers without leading zeros"
            )
        result.append(int(token))
    return tuple(result)


def segments(node_id: str, scheme: IdentifierScheme = DEFAULT_SCHEME) -> Segments:
    """Split an identifier into its integer segments, dropping the generation token."""
    return scheme.segments(node_id)


def segments_are_ancestor_and_descendant(ancestor: Segments, descendant: Segments) -> bool:
    """Whether ``ancestor`` is a strict prefix of ``descendant``.

    Equal segment sequences are not related: no node is its own ancestor.
    """
    if len(ancestor) >= len(descendant):
        return False
    return descendant[: len(ancestor)] == ancestor


def segments_are_parent_and_child(parent: Segments, child: Segments) -> bool:
    """Whether ``child`` is exactly one level below ``parent`` on the same branch."""
    return len(parent) + 1 == len(child) and segments_are_ancestor_and_descendant(
        parent, child
    )


def is_parent_of(a: str, b: str, scheme: IdentifierScheme = DEFAULT_SCHEME) -> bool:
    return segments_are_parent_and_child(scheme.segments(a), scheme.segments(b))


def is_ancestor_of(a: str, b: str, scheme: IdentifierScheme = DEFAULT_SCHEME) -> bool:
    return segments_are_ancestor_and_descendant(scheme.segments(a), scheme.segments(b))


def sort_key(node_id: str, scheme: IdentifierScheme = DEFAULT_SCHEME) -> Tuple[Segments, str]:
    """Key giving the canonical identifier order.

    Segment tuples compare lexicographically, so a prefix sorts before its
    extensions (``gen.0`` < ``gen.0.0`` < ``gen.0.1`` < ``gen.1``). The raw
    string breaks ties between identifiers with different generation tokens.
    """
    return scheme.segments(node_id), node_id


def compare(a: str, b: str, scheme: IdentifierScheme = DEFAULT_SCHEME) -> int:
    """Three-way comparison over :func:`sort_key`."""
    key_a = sort_key(a, scheme)
    key_b = sort_key(b, scheme)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def depth_of(node_id: str, scheme: IdentifierScheme = DEFAULT_SCHEME) -> int:
    """Number of segments, i.e. the distance from the root."""
    return len(scheme.segments(node_id))


def trailing_segment(node_id: str, scheme: IdentifierScheme = DEFAULT_SCHEME) -> int:
    """Last segment of ``node_id``; the root has none."""
    parts = scheme.segments(node_id)
    if not parts:
        raise InvalidIdentifierError(f"Identifier {node_id!r} has no segments")
    return parts[-1]


def parent_id(node_id: str, scheme: IdentifierScheme = DEFAULT_SCHEME) -> str:
    """Identifier of the implied parent of ``node_id``."""
    if not scheme.segments(node_id):
        raise InvalidIdentifierError(f"Identifier {node_id!r} has no parent")
    return node_id.rsplit(scheme.separator, 1)[0]
