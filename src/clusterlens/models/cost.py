# src/clusterlens/models/cost.py
"""
Pydantic models for the monthly cost projection: the reference price table,
the observed inventory, and the resulting line items and summary.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PricingTable(BaseModel):
    """Read-only reference prices keyed by resource-type identifier."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    instance_prices: Dict[str, float] = Field(
        default_factory=dict, alias="ec2_pricing", description="Instance type -> hourly price"
    )
    volume_prices: Dict[str, float] = Field(
        default_factory=dict, alias="ebs_pricing", description="Volume type -> monthly price per GB"
    )
    load_balancer_prices: Dict[str, float] = Field(
        default_factory=dict, alias="lb_pricing", description="Load balancer type -> hourly price"
    )


class CostInventory(BaseModel):
    """Billable resources observed in the cluster."""

    region: Optional[str] = None
    instance_counts: Dict[str, int] = Field(default_factory=dict)
    volume_sizes_gb: Dict[str, int] = Field(default_factory=dict)
    load_balancer_counts: Dict[str, int] = Field(default_factory=dict)


class InstanceCostItem(BaseModel):
    instance_type: str
    count: int
    hourly_price: Optional[float] = None
    monthly_cost: Optional[float] = None


class VolumeCostItem(BaseModel):
    volume_type: str
    size_gb: int
    price_per_gb_month: Optional[float] = None
    monthly_cost: Optional[float] = None


class LoadBalancerCostItem(BaseModel):
    lb_type: str
    count: int
    hourly_price: Optional[float] = None
    monthly_cost: Optional[float] = None


class PricingWarning(BaseModel):
    """An observed resource type with no entry in the price table."""

    category: str = Field(..., description="'instance', 'volume' or 'load_balancer'")
    resource_type: str
    message: str


class ClusterCostSummary(BaseModel):
    """
    Monthly cost projection. `total_monthly_cost` is the sum of every line
    item that had a price; unpriced items carry None costs and a warning.
    """

    region: Optional[str] = None
    instances: List[InstanceCostItem] = Field(default_factory=list)
    volumes: List[VolumeCostItem] = Field(default_factory=list)
    load_balancers: List[LoadBalancerCostItem] = Field(default_factory=list)
    warnings: List[PricingWarning] = Field(default_factory=list)
    total_monthly_cost: float = 0.0
