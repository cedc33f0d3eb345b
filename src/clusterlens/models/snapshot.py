# src/clusterlens/models/snapshot.py

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .node import NodeUsage


class ResourceKind(str, Enum):
    """Resource kinds the fetcher knows how to list."""

    NODES = "nodes"
    PODS = "pods"
    REPLICA_SETS = "replicasets"
    NODE_METRICS = "node metrics"
    PERSISTENT_VOLUMES = "persistentvolumes"
    STORAGE_CLASSES = "storageclasses"
    SERVICES = "services"

    @property
    def is_soft(self) -> bool:
        """Soft kinds degrade the run instead of failing it."""
        return self is ResourceKind.NODE_METRICS


class ClusterSnapshot(BaseModel):
    """
    Materialized list results of one fetch. Kinds that were not requested
    stay empty; `metrics_available` is False when node metrics were not
    requested or could not be fetched.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    nodes: List[Any] = Field(default_factory=list)
    pods: List[Any] = Field(default_factory=list)
    replica_sets: List[Any] = Field(default_factory=list)
    persistent_volumes: List[Any] = Field(default_factory=list)
    storage_classes: List[Any] = Field(default_factory=list)
    services: List[Any] = Field(default_factory=list)
    node_metrics: Optional[Dict[str, NodeUsage]] = None
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def metrics_available(self) -> bool:
        return self.node_metrics is not None
