"""Flattens the view models into the row dictionaries the exporters write."""

from typing import Any, Dict, List

from ..models.cost import ClusterCostSummary
from ..models.density import NodeDensity
from ..models.node import NodeRecord


def node_usage_rows(nodes: List[NodeRecord]) -> List[Dict[str, Any]]:
    rows = []
    for node in nodes:
        row = node.model_dump(mode="json", exclude={"usage"})
        row["cpu_usage"] = str(node.usage.cpu_cores) if node.usage else None
        row["memory_usage"] = node.usage.memory_bytes if node.usage else None
        rows.append(row)
    return rows


def density_rows(densities: List[NodeDensity]) -> List[Dict[str, Any]]:
    rows = []
    for density in densities:
        for owner in density.owners:
            rows.append(
                {
                    "node": owner.node,
                    "namespace": owner.namespace,
                    "owner_type": owner.owner_type,
                    "owner_name": owner.owner_name,
                    "pod_count": owner.pod_count,
                    "cpu_requests": str(owner.cpu_requests),
                    "cpu_limits": str(owner.cpu_limits),
                    "memory_requests": owner.memory_requests,
                    "memory_limits": owner.memory_limits,
                }
            )
    return rows


def cost_rows(summary: ClusterCostSummary) -> List[Dict[str, Any]]:
    rows = []
    for item in summary.instances:
        rows.append(
            {
                "region": summary.region,
                "category": "instance",
                "type": item.instance_type,
                "quantity": item.count,
                "unit_price": item.hourly_price,
                "monthly_cost": item.monthly_cost,
            }
        )
    for item in summary.volumes:
        rows.append(
            {
                "region": summary.region,
                "category": "volume",
                "type": item.volume_type,
                "quantity": item.size_gb,
                "unit_price": item.price_per_gb_month,
                "monthly_cost": item.monthly_cost,
            }
        )
    for item in summary.load_balancers:
        rows.append(
            {
                "region": summary.region,
                "category": "load_balancer",
                "type": item.lb_type,
                "quantity": item.count,
                "unit_price": item.hourly_price,
                "monthly_cost": item.monthly_cost,
            }
        )
    # Unpriced types, then the grand total of every priced item.
    for warning in summary.warnings:
        rows.append(
            {
                "region": summary.region,
                "category": "warning",
                "type": warning.resource_type,
                "quantity": None,
                "unit_price": None,
                "monthly_cost": None,
                "message": warning.message,
            }
        )
    rows.append(
        {
            "region": summary.region,
            "category": "total",
            "type": None,
            "quantity": None,
            "unit_price": None,
            "monthly_cost": summary.total_monthly_cost,
        }
    )
    return rows
