# src/clusterlens/models/node.py

from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

Number = Union[Decimal, int, float]


def percent_of(value: Optional[Number], capacity: Optional[Number]) -> float:
    """Returns value as a percentage of capacity; 0.0 when capacity is zero or missing."""
    if not capacity or value is None:
        return 0.0
    return float(value) * 100.0 / float(capacity)


class ResourceTotals(BaseModel):
    """
    Mutable accumulator for CPU (cores) and memory (bytes) requests and limits.
    Only lives for the duration of one aggregation pass.
    """

    cpu_requests: Decimal = Decimal(0)
    cpu_limits: Decimal = Decimal(0)
    memory_requests: int = 0
    memory_limits: int = 0

    def add(self, other: "ResourceTotals") -> None:
        self.cpu_requests += other.cpu_requests
        self.cpu_limits += other.cpu_limits
        self.memory_requests += other.memory_requests
        self.memory_limits += other.memory_limits


class NodeUsage(BaseModel):
    """Point-in-time usage reported by the metrics API for one node."""

    model_config = ConfigDict(frozen=True)

    cpu_cores: Decimal = Field(..., description="Observed CPU usage in cores")
    memory_bytes: int = Field(..., description="Observed memory usage in bytes")


class NodeRecord(BaseModel):
    """
    Capacity, requested/limited totals and optional live usage of one node.

    Attributes:
        name: Node name
        instance_type: Instance type label (e.g. 'm5.large'), if any
        region: Region label, if any
        cpu_capacity: CPU capacity in cores
        memory_capacity: Memory capacity in bytes
        cpu_requests / cpu_limits: Summed container CPU requests/limits in cores
        memory_requests / memory_limits: Summed container memory requests/limits in bytes
        pod_count: Number of running pods scheduled on the node
        usage: Live usage, or None when the metrics source is unavailable
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., description="Node name")
    instance_type: Optional[str] = Field(None, description="Instance type")
    region: Optional[str] = Field(None, description="Cloud region")
    cpu_capacity: Decimal = Field(Decimal(0), description="CPU capacity in cores")
    memory_capacity: int = Field(0, description="Memory capacity in bytes")
    cpu_requests: Decimal = Decimal(0)
    cpu_limits: Decimal = Decimal(0)
    memory_requests: int = 0
    memory_limits: int = 0
    pod_count: int = 0
    usage: Optional[NodeUsage] = Field(None, description="Live usage; None when metrics are unavailable")

    @property
    def metrics_available(self) -> bool:
        return self.usage is not None

    @computed_field
    @property
    def cpu_requests_percent(self) -> float:
        return percent_of(self.cpu_requests, self.cpu_capacity)

    @computed_field
    @property
    def cpu_limits_percent(self) -> float:
        return percent_of(self.cpu_limits, self.cpu_capacity)

    @computed_field
    @property
    def cpu_usage_percent(self) -> Optional[float]:
        if self.usage is None:
            return None
        return percent_of(self.usage.cpu_cores, self.cpu_capacity)

    @computed_field
    @property
    def memory_requests_percent(self) -> float:
        return percent_of(self.memory_requests, self.memory_capacity)

    @computed_field
    @property
    def memory_limits_percent(self) -> float:
        return percent_of(self.memory_limits, self.memory_capacity)

    @computed_field
    @property
    def memory_usage_percent(self) -> Optional[float]:
        if self.usage is None:
            return None
        return percent_of(self.usage.memory_bytes, self.memory_capacity)
