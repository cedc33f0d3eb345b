# src/clusterlens/reporters/console_reporter.py
"""
A reporter that displays the views as formatted tables in the console.
"""

import logging
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from ..models.cost import ClusterCostSummary
from ..models.density import NodeDensity
from ..models.node import NodeRecord
from ..utils.k8s_utils import bytes_to_gib
from .base_reporter import BaseReporter

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"

_NODE_SORT_KEYS = {
    "name": (lambda n: n.name, False),
    "cpu": (lambda n: n.cpu_requests_percent, True),
    "memory": (lambda n: n.memory_requests_percent, True),
}


def _cores(value, percent: Optional[float] = None) -> str:
    text = f"{float(value):.2f}"
    return text if percent is None else f"{text} ({percent:.0f}%)"


def _gib(value, percent: Optional[float] = None) -> str:
    text = f"{bytes_to_gib(value):.2f}Gi"
    return text if percent is None else f"{text} ({percent:.0f}%)"


def _money(value: Optional[float], digits: int = 2) -> str:
    return NOT_AVAILABLE if value is None else f"${value:.{digits}f}"


class ConsoleReporter(BaseReporter):
    """
    Renders clusterlens views to the console using the 'rich' library.
    """

    def __init__(self):
        self.console = Console()

    def report_node_usage(self, nodes: List[NodeRecord], sort_by: str = "name"):
        if not nodes:
            self.console.print("No nodes to report.", style="yellow")
            return

        table = Table(title="Node Resource Usage", header_style="bold magenta")
        table.add_column("Node", style="cyan")
        table.add_column("CPU Capacity", justify="right")
        table.add_column("CPU Requests", style="blue", justify="right")
        table.add_column("CPU Limits", style="blue", justify="right")
        table.add_column("CPU Usage", style="green", justify="right")
        table.add_column("Memory Capacity", justify="right")
        table.add_column("Memory Requests", style="blue", justify="right")
        table.add_column("Memory Limits", style="blue", justify="right")
        table.add_column("Memory Usage", style="green", justify="right")

        key, reverse = _NODE_SORT_KEYS.get(sort_by, _NODE_SORT_KEYS["name"])
        for node in sorted(nodes, key=key, reverse=reverse):
            cpu_usage = _cores(node.usage.cpu_cores, node.cpu_usage_percent) if node.usage else NOT_AVAILABLE
            mem_usage = _gib(node.usage.memory_bytes, node.memory_usage_percent) if node.usage else NOT_AVAILABLE
            table.add_row(
                node.name,
                _cores(node.cpu_capacity),
                _cores(node.cpu_requests, node.cpu_requests_percent),
                _cores(node.cpu_limits, node.cpu_limits_percent),
                cpu_usage,
                _gib(node.memory_capacity),
                _gib(node.memory_requests, node.memory_requests_percent),
                _gib(node.memory_limits, node.memory_limits_percent),
                mem_usage,
            )

        self.console.print(table)
        if not any(node.metrics_available for node in nodes):
            self.console.print("Live usage unavailable: metrics API could not be reached.", style="dim")

    def report_density(
        self, densities: List[NodeDensity], top: Optional[int] = None, namespace: Optional[str] = None
    ):
        """
        One table per node. With `namespace`, requests, limits and pod counts
        cover that namespace only; capacity and usage stay node-wide.
        """
        if not densities:
            self.console.print("No nodes to report.", style="yellow")
            return

        for density in sorted(densities, key=lambda d: d.node.name):
            node = density.node
            cpu_usage = _cores(node.usage.cpu_cores, node.cpu_usage_percent) if node.usage else NOT_AVAILABLE
            mem_usage = _gib(node.usage.memory_bytes, node.memory_usage_percent) if node.usage else NOT_AVAILABLE
            caption = (
                f"CPU: {_cores(node.cpu_capacity)} capacity, "
                f"{_cores(node.cpu_requests, node.cpu_requests_percent)} requests, "
                f"{_cores(node.cpu_limits, node.cpu_limits_percent)} limits, {cpu_usage} usage\n"
                f"Memory: {_gib(node.memory_capacity)} capacity, "
                f"{_gib(node.memory_requests, node.memory_requests_percent)} requests, "
                f"{_gib(node.memory_limits, node.memory_limits_percent)} limits, {mem_usage} usage"
            )
            if namespace:
                caption += f"\nRequests, limits and pods: namespace '{namespace}' only"
            table = Table(
                title=f"Node: {node.name} ({density.pod_count} pods)",
                caption=caption,
                header_style="bold magenta",
            )
            table.add_column("Owner", style="cyan")
            table.add_column("Type")
            table.add_column("Namespace", style="cyan")
            table.add_column("Pods", justify="right")
            table.add_column("CPU Req", style="blue", justify="right")
            table.add_column("CPU Lim", style="blue", justify="right")
            table.add_column("Mem Req", style="blue", justify="right")
            table.add_column("Mem Lim", style="blue", justify="right")

            owners = density.owners if top is None else density.owners[:top]
            for owner in owners:
                table.add_row(
                    owner.owner_name,
                    owner.owner_type,
                    owner.namespace,
                    str(owner.pod_count),
                    _cores(owner.cpu_requests),
                    _cores(owner.cpu_limits),
                    _gib(owner.memory_requests),
                    _gib(owner.memory_limits),
                )
            self.console.print(table)

    def report_cost(self, summary: ClusterCostSummary):
        self.console.print(f"Cost Estimation Summary - Region: {summary.region or 'unknown'}", style="bold")

        instances = Table(title="EC2 Instances", header_style="bold magenta")
        instances.add_column("Instance Type", style="cyan")
        instances.add_column("Count", justify="right")
        instances.add_column("Hourly", justify="right")
        instances.add_column("Monthly", style="green", justify="right")
        for item in summary.instances:
            instances.add_row(
                item.instance_type, str(item.count), _money(item.hourly_price, 4), _money(item.monthly_cost)
            )
        self.console.print(instances)

        volumes = Table(title="EBS Volumes", header_style="bold magenta")
        volumes.add_column("Volume Type", style="cyan")
        volumes.add_column("Size (GB)", justify="right")
        volumes.add_column("Per GB-Month", justify="right")
        volumes.add_column("Monthly", style="green", justify="right")
        for item in summary.volumes:
            volumes.add_row(
                item.volume_type, str(item.size_gb), _money(item.price_per_gb_month, 4), _money(item.monthly_cost)
            )
        self.console.print(volumes)

        lbs = Table(title="Load Balancers", header_style="bold magenta")
        lbs.add_column("Type", style="cyan")
        lbs.add_column("Count", justify="right")
        lbs.add_column("Hourly", justify="right")
        lbs.add_column("Monthly", style="green", justify="right")
        for item in summary.load_balancers:
            lbs.add_row(item.lb_type, str(item.count), _money(item.hourly_price, 4), _money(item.monthly_cost))
        self.console.print(lbs)

        for warning in summary.warnings:
            self.console.print(f"Warning: {warning.message}", style="yellow")

        self.console.print(f"Estimated Monthly Total: {_money(summary.total_monthly_cost)}", style="bold green")
