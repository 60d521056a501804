"""Data instances held by hierarchy nodes and the centroids computed from them."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import numpy as np
import xxhash

logger = logging.getLogger(__name__)


class InstanceDimensionError(ValueError):
    """Raised when instances averaged into one centroid differ in length."""

    pass


@dataclass
class Instance:
    """A single data point assigned to a node of the hierarchy."""

    data: np.ndarray  # Feature vector
    node_id: str  # Identifier of the node the instance belongs to
    true_class: Optional[str] = None  # Ground-truth class (itself a node identifier)
    name: Optional[str] = None  # Optional instance label

    def __post_init__(self):
        self.data = np.asarray(self.data, dtype=np.float64).reshape(-1)

    @property
    def dimensions(self) -> int:
        return int(self.data.shape[0])

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "data": self.data,
            "node_id": self.node_id,
            "true_class": self.true_class,
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Instance":
        """Create from dictionary."""
        return cls(
            data=np.asarray(data["data"], dtype=np.float64),
            node_id=data["node_id"],
            true_class=data.get("true_class"),
            name=data.get("name"),
        )


@dataclass
class Centroid:
    """Mean feature vector of the instances in scope for a node."""

    data: np.ndarray  # Centroid vector
    node_id: str  # Associated node identifier
    instance_count: int  # Number of instances averaged
    hash: Optional[str] = None  # Content hash of centroid data

    @property
    def dimensions(self) -> int:
        return int(self.data.shape[0])

    def compute_hash(self, force: bool = False) -> str:
        """
        Compute content-based hash of the centroid.

        Args:
            force: If True, recompute hash even if cached

        Returns:
            Hexadecimal hash string
        """
        if self.hash is not None and not force:
            return self.hash

        hasher = xxhash.xxh3_64()
        hasher.update(str(self.data.shape).encode())
        hasher.update(np.dtype(self.data.dtype).name.encode())
        hasher.update(self.data.tobytes())

        self.hash = hasher.hexdigest()
        return self.hash

    @classmethod
    def from_instances(cls, instances: Sequence[Instance], node_id: str) -> "Centroid":
        """
        Create centroid by computing the mean of instance vectors.

        Args:
            instances: Instances in scope for the node
            node_id: Identifier of the node the centroid describes

        Returns:
            Centroid of the instances

        Raises:
            ValueError: If no instances are given
            InstanceDimensionError: If the instance dimensions differ
        """
        if not instances:
            raise ValueError(f"Cannot create centroid for '{node_id}' from no instances")

        reference_dims = instances[0].dimensions
        for instance in instances:
            if instance.dimensions != reference_dims:
                label = instance.name or instance.node_id
                raise InstanceDimensionError(
                    f"Dimension mismatch for instance '{label}' in node '{node_id}': "
                    f"expected {reference_dims}, got {instance.dimensions}"
                )

        stacked = np.stack([instance.data for instance in instances], axis=0)

        if np.any(np.isnan(stacked)):
            logger.warning(f"NaN values detected in instances for node {node_id}")
            stacked = np.nan_to_num(stacked, nan=0.0)

        if np.any(np.isinf(stacked)):
            logger.warning(f"Infinite values detected in instances for node {node_id}")
            stacked = np.clip(stacked, -1e20, 1e20)

        return cls(
            data=np.mean(stacked, axis=0),
            node_id=node_id,
            instance_count=len(instances),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "data": self.data,
            "node_id": self.node_id,
            "instance_count": self.instance_count,
            "hash": self.compute_hash(),
        }
