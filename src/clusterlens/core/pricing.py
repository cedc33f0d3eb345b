# src/clusterlens/core/pricing.py
"""
Projects the monthly cost of an observed inventory against a price table.
"""

import logging
from typing import List

from ..models.cost import (
    ClusterCostSummary,
    CostInventory,
    InstanceCostItem,
    LoadBalancerCostItem,
    PricingTable,
    PricingWarning,
    VolumeCostItem,
)

logger = logging.getLogger(__name__)

# Average hours in a month (8760 / 12).
HOURS_PER_MONTH = 730


def _missing_price(category: str, resource_type: str, label: str) -> PricingWarning:
    message = f"No price found for {label} '{resource_type}'; excluded from total."
    logger.warning(message)
    return PricingWarning(category=category, resource_type=resource_type, message=message)


def estimate_cost(inventory: CostInventory, pricing: PricingTable) -> ClusterCostSummary:
    """
    Builds the cost summary.

    Hourly items cost price * HOURS_PER_MONTH * count; volumes cost
    price-per-GB-month * GB. Types without a price keep a line item with no
    cost, add one warning, and contribute nothing to the total.
    """
    warnings: List[PricingWarning] = []
    total = 0.0

    instances: List[InstanceCostItem] = []
    for instance_type, count in sorted(inventory.instance_counts.items()):
        price = pricing.instance_prices.get(instance_type)
        if price is None:
            warnings.append(_missing_price("instance", instance_type, "instance type"))
            instances.append(InstanceCostItem(instance_type=instance_type, count=count))
            continue
        monthly = price * HOURS_PER_MONTH * count
        total += monthly
        instances.append(
            InstanceCostItem(instance_type=instance_type, count=count, hourly_price=price, monthly_cost=monthly)
        )

    volumes: List[VolumeCostItem] = []
    for volume_type, size_gb in sorted(inventory.volume_sizes_gb.items()):
        price = pricing.volume_prices.get(volume_type)
        if price is None:
            warnings.append(_missing_price("volume", volume_type, "volume type"))
            volumes.append(VolumeCostItem(volume_type=volume_type, size_gb=size_gb))
            continue
        monthly = price * size_gb
        total += monthly
        volumes.append(
            VolumeCostItem(volume_type=volume_type, size_gb=size_gb, price_per_gb_month=price, monthly_cost=monthly)
        )

    load_balancers: List[LoadBalancerCostItem] = []
    for lb_type, count in sorted(inventory.load_balancer_counts.items()):
        price = pricing.load_balancer_prices.get(lb_type)
        if price is None:
            warnings.append(_missing_price("load_balancer", lb_type, "load balancer type"))
            load_balancers.append(LoadBalancerCostItem(lb_type=lb_type, count=count))
            continue
        monthly = price * HOURS_PER_MONTH * count
        total += monthly
        load_balancers.append(
            LoadBalancerCostItem(lb_type=lb_type, count=count, hourly_price=price, monthly_cost=monthly)
        )

    return ClusterCostSummary(
        region=inventory.region,
        instances=instances,
        volumes=volumes,
        load_balancers=load_balancers,
        warnings=warnings,
        total_monthly_cost=total,
    )
