# src/clusterlens/models/density.py
"""
Models for the pod density view: which logical workloads occupy each node.
"""

from decimal import Decimal
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .node import NodeRecord


class OwnerType(str, Enum):
    """Owner kinds resolved explicitly. Any other controller kind is passed through as a plain string."""

    DEPLOYMENT = "Deployment"
    REPLICA_SET = "ReplicaSet"
    DAEMON_SET = "DaemonSet"
    STATEFUL_SET = "StatefulSet"
    JOB = "Job"
    POD = "Pod"


class OwnerKey(BaseModel):
    """Identifies a logical workload within a namespace."""

    model_config = ConfigDict(frozen=True)

    namespace: str
    owner_type: str
    owner_name: str


class OwnerRecord(BaseModel):
    """Pods and resource sums of one owner on one node."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    node: str = Field(..., description="Node the pods are scheduled on")
    key: OwnerKey
    pod_count: int = 0
    cpu_requests: Decimal = Decimal(0)
    cpu_limits: Decimal = Decimal(0)
    memory_requests: int = 0
    memory_limits: int = 0

    @property
    def namespace(self) -> str:
        return self.key.namespace

    @property
    def owner_type(self) -> str:
        return self.key.owner_type

    @property
    def owner_name(self) -> str:
        return self.key.owner_name


class NodeDensity(BaseModel):
    """A node and its owners, ranked by descending pod count."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    node: NodeRecord
    owners: List[OwnerRecord] = Field(default_factory=list)

    @computed_field
    @property
    def pod_count(self) -> int:
        return sum(owner.pod_count for owner in self.owners)
